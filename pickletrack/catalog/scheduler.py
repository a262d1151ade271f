from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class ReloadScheduler:
    """Runs callbacks on a fixed period, each on its own daemon thread."""

    def __init__(self) -> None:
        self._stop = threading.Event()
        self._threads: list[threading.Thread] = []

    def schedule(self, interval_seconds: float, callback: Callable[[], None]) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        thread = threading.Thread(
            target=self._run,
            args=(interval_seconds, callback),
            name=f"reload-{getattr(callback, '__name__', 'task')}",
            daemon=True,
        )
        self._threads.append(thread)
        thread.start()

    def _run(self, interval_seconds: float, callback: Callable[[], None]) -> None:
        # First tick fires one interval after start, not immediately.
        while not self._stop.wait(interval_seconds):
            try:
                callback()
            except Exception:
                logger.exception("Scheduled task %r failed", callback)

    def shutdown(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        for thread in self._threads:
            thread.join(timeout)
        self._threads.clear()
