"""
Timing utilities: named stopwatches with optional pulse averaging.

A Timer with pulse == 0 reports every cycle as soon as end() is called.
With pulse > 0, cycles are summed and a background flush reports their
average every `pulse` seconds, then resets the sums. The flush runs as an
asyncio task when a loop is running, otherwise on a daemon threading.Timer
that re-arms itself after each firing.
"""

from __future__ import annotations

import asyncio
import threading
import time
from typing import Callable, Optional, Protocol, Union

from cycletime.logging.logger import bind_context, get_logger, hostname

ICON = "⏱  "

logger = get_logger("cycletime.timer")


class Reporter(Protocol):
    def report(self, metric: str, value: float) -> None: ...


def now_ms() -> float:
    return time.time() * 1000.0


def format_cycle(name: str, cycletime: float, is_average: bool = False) -> str:
    """Pretty-print one result, e.g. '⏱  build on host: Took 0.25 s'."""
    line = f"{ICON}{name} on {hostname()}: "
    line += "Taking" if is_average else "Took"
    line += f" {cycletime} s"
    if is_average:
        line += " on average"
    return line


class Timer:
    """Named stopwatch; see module docstring for pulse semantics."""

    def __init__(
        self,
        name: str,
        pulse: float,
        reporter: Reporter,
        clock: Callable[[], float] = now_ms,
    ) -> None:
        self._name = name
        self.pulse = pulse
        self._reporter = reporter
        self._clock = clock

        self.start_ms: Optional[float] = None
        self.count = 0
        self.total = 0.0
        # guards count/total when the flush fires on a timer thread
        self._lock = threading.Lock()
        self._pulse_task: Optional[asyncio.Task] = None
        self._pulse_thread: Optional[threading.Timer] = None
        self._pulse_guard = threading.Lock()
        self._pulse_stopped = True

    @property
    def name(self) -> str:
        return self._name

    @property
    def running(self) -> bool:
        return self.start_ms is not None

    def start(self) -> None:
        self.start_ms = self._clock()

    def end(self) -> Optional[float]:
        """
        Stop the running cycle.

        Returns the cycletime in seconds, or None if start() was not called.
        """
        if self.start_ms is None:
            return None

        cycletime = (self._clock() - self.start_ms) / 1000.0
        self.start_ms = None

        if self.pulse > 0:
            with self._lock:
                self.count += 1
                self.total += cycletime
        else:
            self._reporter.report(self._name, cycletime)

        logger.info(format_cycle(self._name, cycletime), extra=bind_context(self._name))
        return cycletime

    def flush(self) -> Optional[float]:
        """Report the average since the last flush and reset the sums."""
        with self._lock:
            average = self.total / self.count if self.count else None
            self.count = 0
            self.total = 0.0

        if average is not None:
            logger.info(
                format_cycle(self._name, average, is_average=True),
                extra=bind_context(self._name),
            )
            self._reporter.report(self._name, average)
        return average

    # ------------------------------------------------------------------
    # Pulse task
    # ------------------------------------------------------------------

    async def _pulse_loop(self) -> None:
        while True:
            await asyncio.sleep(self.pulse)
            self.flush()

    def _arm_thread(self) -> None:
        self._pulse_thread = threading.Timer(self.pulse, self._on_thread_pulse)
        self._pulse_thread.daemon = True
        self._pulse_thread.start()

    def _on_thread_pulse(self) -> None:
        if self._pulse_stopped:
            return
        try:
            self.flush()
        finally:
            with self._pulse_guard:
                if not self._pulse_stopped:
                    self._arm_thread()

    def start_pulse(self) -> Union[asyncio.Task, threading.Timer]:
        """
        Schedule the repeating flush.

        Uses the running event loop when there is one, a daemon timer
        thread otherwise. Returns the task or the current timer thread.
        """
        if self._pulse_task is not None and not self._pulse_task.done():
            return self._pulse_task
        if self._pulse_thread is not None and not self._pulse_stopped:
            return self._pulse_thread

        self._pulse_stopped = False
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._arm_thread()
            return self._pulse_thread
        self._pulse_task = loop.create_task(self._pulse_loop())
        return self._pulse_task

    def stop(self) -> None:
        with self._pulse_guard:
            self._pulse_stopped = True
            if self._pulse_thread is not None:
                self._pulse_thread.cancel()
                self._pulse_thread = None
        if self._pulse_task is not None:
            self._pulse_task.cancel()
            self._pulse_task = None

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> "Timer":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):  # noqa: ANN001, ANN201
        self.end()
        return False

    def __repr__(self) -> str:
        return f"Timer(name={self._name!r}, pulse={self.pulse!r}, running={self.running})"
