"""CPU usage sampler for the status line."""

from __future__ import annotations

import time

import psutil


class Sampler:
    """Process CPU usage as a percentage of wall-clock time between samples.

    Owns the previous snapshot (``last_wall``, ``last_cpu``); the first
    call to sample() only records a baseline and returns 0.0.
    """

    def __init__(self, process: psutil.Process | None = None):
        self._process = process if process is not None else psutil.Process()
        self.last_wall = 0.0
        self.last_cpu = 0.0

    def cpu_seconds(self) -> float:
        """User + system CPU time consumed by the process so far."""
        times = self._process.cpu_times()
        return times.user + times.system

    def sample(self, now: float | None = None) -> float:
        """Return CPU% since the previous call and store the new snapshot."""
        if now is None:
            now = time.time()
        cpu = self.cpu_seconds()

        percent = 0.0
        if self.last_wall > 0 and now > self.last_wall:
            percent = 100.0 * (cpu - self.last_cpu) / (now - self.last_wall)

        self.last_cpu = cpu
        self.last_wall = now
        return percent


class ThrottledSampler:
    """Wraps a Sampler so it is consulted at most once per ``interval`` seconds.

    Between refreshes value() returns the last reading.
    """

    def __init__(self, sampler: Sampler, interval: float = 2.0):
        self._sampler = sampler
        self._interval = interval
        self._next_update = 0.0
        self._value = 0.0

    def value(self, now: float | None = None) -> float:
        if now is None:
            now = time.time()
        if now >= self._next_update:
            self._value = self._sampler.sample(now)
            self._next_update = now + self._interval
        return self._value
