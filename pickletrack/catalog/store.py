"""
In-memory listing of pickleback bars, reloadable while serving.

The snapshot is immutable and replaced wholesale. Readers take the read lock
only long enough to copy the reference; a reload parses the new file with no
lock held and takes the write lock only for the swap.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

import numpy as np
from pydantic import TypeAdapter, ValidationError

from .models import Bar
from .rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

_BARS_ADAPTER = TypeAdapter(list[Bar])


class CatalogLoadError(Exception):
    """The dataset file was missing, unreadable or malformed."""


class Scheduler(Protocol):
    def schedule(self, interval_seconds: float, callback) -> None: ...


def _frozen(values: list[float]) -> np.ndarray:
    array = np.asarray(values, dtype=np.float64)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class CatalogSnapshot:
    bars: tuple[Bar, ...]
    lats: np.ndarray = field(repr=False)
    lngs: np.ndarray = field(repr=False)

    @classmethod
    def from_bars(cls, bars: list[Bar] | tuple[Bar, ...]) -> CatalogSnapshot:
        bars = tuple(bars)
        return cls(
            bars=bars,
            lats=_frozen([bar.lat for bar in bars]),
            lngs=_frozen([bar.lng for bar in bars]),
        )

    def __len__(self) -> int:
        return len(self.bars)


def load_snapshot(source: str | Path) -> CatalogSnapshot:
    """Parse the JSON list of bars at ``source``."""
    try:
        raw = Path(source).read_bytes()
    except OSError as exc:
        raise CatalogLoadError(f"Couldn't open bar listing file {source}: {exc}") from exc
    try:
        bars = _BARS_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        raise CatalogLoadError(f"Couldn't parse bar listing file {source}: {exc}") from exc
    return CatalogSnapshot.from_bars(bars)


class BarCatalog:
    def __init__(
        self,
        source: str | Path,
        scheduler: Scheduler | None = None,
        reload_interval_seconds: float = 60 * 60 * 24,
    ) -> None:
        """
        Load the initial listing from ``source``.

        Raises ``CatalogLoadError`` if it can't: with no prior data there is
        nothing to serve. When a ``scheduler`` is given, a periodic reload is
        registered with it.
        """
        self.source = Path(source)
        self._lock = ReadWriteLock()
        self._snapshot = load_snapshot(self.source)
        logger.info("Loaded %d bars from %s", len(self._snapshot), self.source)
        if scheduler is not None:
            scheduler.schedule(reload_interval_seconds, self.reload)

    def snapshot(self) -> CatalogSnapshot:
        with self._lock.read():
            return self._snapshot

    def reload(self) -> bool:
        """
        Attempt to reload the listing from disk.

        On any read or parse failure nothing changes and the previous listing
        keeps being served. Returns whether the swap happened.
        """
        logger.info("Reloading bar listing")
        try:
            fresh = load_snapshot(self.source)
        except CatalogLoadError:
            logger.error("Bar listing reload failed; keeping %d bars", len(self.snapshot()), exc_info=True)
            return False

        with self._lock.write():
            self._snapshot = fresh
        logger.info("Successfully reloaded bar listing (%d bars)", len(fresh))
        return True
