"""Entry point for the terminal Mandelbrot explorer.

Supports two modes:
- Interactive: curses pan/zoom explorer (default)
- Dump: render a single frame as plain text to stdout (--dump)
"""

import argparse
import curses
import logging
import sys
from dataclasses import dataclass

from fractal.canvas import TerminalCanvas, TerminalColorError
from fractal.compute import BACKEND_NAMES, MAX_ITER, ComputeBackend, get_backend
from fractal.render import render_text
from fractal.sampler import Sampler, ThrottledSampler
from fractal.view import DEFAULT_CPU_INTERVAL, ExplorerView
from fractal.viewport import DEFAULT_VIEWPORT, GridDimensions, Viewport

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


@dataclass(frozen=True)
class ExplorerConfig:
    """Settings resolved from the command line."""

    viewport: Viewport = DEFAULT_VIEWPORT
    max_iter: int = MAX_ITER
    backend: str = "auto"
    cpu_interval: float = DEFAULT_CPU_INTERVAL
    log_file: str | None = None
    log_level: str = "WARNING"
    dump: bool = False
    dump_size: GridDimensions = GridDimensions(rows=24, cols=80)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Explore the Mandelbrot set in the terminal.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--center-x", type=float, default=DEFAULT_VIEWPORT.center_x,
        help="real part of the initial view center",
    )
    parser.add_argument(
        "--center-y", type=float, default=DEFAULT_VIEWPORT.center_y,
        help="imaginary part of the initial view center",
    )
    parser.add_argument(
        "--scale", type=float, default=DEFAULT_VIEWPORT.scale,
        help="width of the initial view along the real axis",
    )
    parser.add_argument(
        "--max-iter", type=int, default=MAX_ITER,
        help="iterations before a point is treated as inside the set",
    )
    parser.add_argument(
        "--backend", choices=BACKEND_NAMES, default="auto",
        help="escape-time compute backend",
    )
    parser.add_argument(
        "--cpu-interval", type=float, default=DEFAULT_CPU_INTERVAL,
        help="seconds between CPU usage refreshes on the status line",
    )
    parser.add_argument(
        "--log-file", default=None,
        help="write log messages to this file (the terminal belongs to curses)",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging threshold",
    )
    parser.add_argument(
        "--dump", action="store_true",
        help="print a single frame as text instead of starting the explorer",
    )
    parser.add_argument(
        "--size", type=int, nargs=2, default=[80, 24], metavar=("COLS", "ROWS"),
        help="grid size used by --dump",
    )
    return parser


def resolve_config(args: argparse.Namespace, parser: argparse.ArgumentParser) -> ExplorerConfig:
    """Validate parsed arguments and freeze them into an ExplorerConfig."""
    if not args.scale > 0:
        parser.error("--scale must be positive")
    if args.max_iter < 1:
        parser.error("--max-iter must be at least 1")
    if args.cpu_interval < 0:
        parser.error("--cpu-interval must not be negative")
    cols, rows = args.size
    if cols < 1 or rows < 1:
        parser.error("--size values must be at least 1")

    return ExplorerConfig(
        viewport=Viewport(args.center_x, args.center_y, args.scale),
        max_iter=args.max_iter,
        backend=args.backend,
        cpu_interval=args.cpu_interval,
        log_file=args.log_file,
        log_level=args.log_level,
        dump=args.dump,
        dump_size=GridDimensions(rows=rows, cols=cols),
    )


def configure_logging(config: ExplorerConfig) -> None:
    """Route log records to ``--log-file``; drop them while curses owns stderr."""
    kwargs = {"level": getattr(logging, config.log_level), "format": LOG_FORMAT}
    if config.log_file is not None:
        kwargs["filename"] = config.log_file
    elif not config.dump:
        kwargs["handlers"] = [logging.NullHandler()]
    logging.basicConfig(**kwargs)


def resolve_backend(config: ExplorerConfig, parser: argparse.ArgumentParser) -> ComputeBackend:
    """Instantiate the requested backend, reporting a missing numba as a usage error."""
    try:
        return get_backend(config.backend)
    except ImportError:
        parser.error(f"{config.backend} backend requested but numba is not installed")


def run_explorer(stdscr, config: ExplorerConfig, backend: ComputeBackend) -> None:
    """curses.wrapper target: set up the canvas and run the loop."""
    canvas = TerminalCanvas(stdscr)
    canvas.init_colors()
    canvas.configure()

    explorer = ExplorerView(
        canvas,
        viewport=config.viewport,
        backend=backend,
        max_iter=config.max_iter,
        sampler=ThrottledSampler(Sampler(), config.cpu_interval),
    )
    explorer.run()


def main(argv=None) -> int:
    parser = build_parser()
    config = resolve_config(parser.parse_args(argv), parser)
    configure_logging(config)
    backend = resolve_backend(config, parser)

    if config.dump:
        print(render_text(config.dump_size, config.viewport, backend, config.max_iter))
        return 0

    # Compile the JIT kernel before the first frame
    warmup = getattr(backend, "warmup", None)
    if warmup is not None:
        warmup()

    try:
        curses.wrapper(run_explorer, config, backend)
    except TerminalColorError:
        logger.exception("Cannot start explorer")
        print("ERROR - terminal does not support colors :(", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
