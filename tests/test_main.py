"""Tests for main.py: argument parsing, config validation, dump mode, color errors."""

import curses
import logging
import sys

import pytest

import main
from fractal.canvas import TerminalColorError
from fractal.compute import MAX_ITER
from fractal.viewport import DEFAULT_VIEWPORT, GridDimensions, Viewport


def _config(argv):
    parser = main.build_parser()
    return main.resolve_config(parser.parse_args(argv), parser)


class TestResolveConfig:
    """Test command-line configuration."""

    def test_defaults(self):
        config = _config([])
        assert config.viewport == DEFAULT_VIEWPORT
        assert config.max_iter == MAX_ITER
        assert config.backend == "auto"
        assert config.cpu_interval == 2.0
        assert config.log_file is None
        assert not config.dump
        assert config.dump_size == GridDimensions(rows=24, cols=80)

    def test_viewport_options(self):
        config = _config(["--center-x", "0.25", "--center-y", "-0.1", "--scale", "0.5"])
        assert config.viewport == Viewport(0.25, -0.1, 0.5)

    def test_size_is_cols_then_rows(self):
        config = _config(["--dump", "--size", "40", "10"])
        assert config.dump_size == GridDimensions(rows=10, cols=40)

    @pytest.mark.parametrize("argv", [
        ["--scale", "0"],
        ["--scale", "-3"],
        ["--max-iter", "0"],
        ["--cpu-interval", "-1"],
        ["--size", "0", "10"],
        ["--backend", "cuda"],
    ])
    def test_invalid_values_exit(self, argv):
        with pytest.raises(SystemExit) as excinfo:
            _config(argv)
        assert excinfo.value.code == 2


class TestMain:
    """Test the entry point."""

    def test_dump_prints_frame(self, capsys):
        code = main.main(["--dump", "--backend", "numpy", "--size", "20", "6", "--max-iter", "50"])
        assert code == 0
        lines = capsys.readouterr().out.rstrip("\n").split("\n")
        assert len(lines) == 6
        assert all(len(line) == 20 for line in lines)

    def test_missing_color_support_exits_1(self, monkeypatch, capsys):
        def fake_wrapper(func, *args):
            raise TerminalColorError("terminal does not support colors")

        monkeypatch.setattr(curses, "wrapper", fake_wrapper)
        assert main.main([]) == 1
        assert "does not support colors" in capsys.readouterr().err

    def test_missing_numba_is_usage_error(self, monkeypatch, capsys):
        monkeypatch.setitem(sys.modules, "numba", None)
        monkeypatch.delitem(sys.modules, "fractal._numba_backend", raising=False)
        with pytest.raises(SystemExit) as excinfo:
            main.main(["--dump", "--backend", "numba", "--size", "4", "2"])
        assert excinfo.value.code == 2
        assert "numba is not installed" in capsys.readouterr().err

    def test_backend_resolved_and_warmed_before_curses(self, monkeypatch):
        calls = []

        class WarmBackend:
            def warmup(self):
                calls.append("warmup")

        backend = WarmBackend()
        monkeypatch.setattr(main, "get_backend", lambda name: backend)

        def fake_wrapper(func, config, chosen):
            calls.append(("wrapper", chosen))

        monkeypatch.setattr(curses, "wrapper", fake_wrapper)
        assert main.main(["--backend", "numba"]) == 0
        assert calls == ["warmup", ("wrapper", backend)]

    def test_backend_without_warmup(self, monkeypatch):
        from fractal._numpy_backend import NumpyBackend

        seen = []
        monkeypatch.setattr(curses, "wrapper", lambda func, config, chosen: seen.append(chosen))
        assert main.main(["--backend", "numpy"]) == 0
        assert isinstance(seen[0], NumpyBackend)


class TestConfigureLogging:
    """Test where log records go in each mode."""

    @pytest.fixture
    def captured(self, monkeypatch):
        kwargs = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: kwargs.update(kw))
        return kwargs

    def test_interactive_without_file_discards(self, captured):
        main.configure_logging(_config([]))
        assert "filename" not in captured
        assert [type(h) for h in captured["handlers"]] == [logging.NullHandler]
        assert captured["level"] == logging.WARNING

    def test_log_file(self, captured, tmp_path):
        path = str(tmp_path / "explorer.log")
        main.configure_logging(_config(["--log-file", path, "--log-level", "DEBUG"]))
        assert captured["filename"] == path
        assert "handlers" not in captured
        assert captured["level"] == logging.DEBUG

    def test_dump_logs_to_stderr(self, captured):
        main.configure_logging(_config(["--dump"]))
        assert "filename" not in captured
        assert "handlers" not in captured
