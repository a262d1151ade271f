from __future__ import annotations

import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import Iterable

from ..catalog.models import Bar

logger = logging.getLogger(__name__)

CURRENT_FILENAME = "current.json"


def dated_filename(day: date) -> str:
    return f"{day:%Y%m%d}.json"


def publish_bars(bars: Iterable[Bar], data_dir: Path, today: date | None = None) -> Path:
    """
    Write ``bars`` to ``data_dir/YYYYMMDD.json`` and point ``current.json`` at it.

    The pointer is swapped with a rename of a freshly made symlink, so a reader
    opening ``current.json`` sees either the old file or the new one in full.
    """
    today = today or date.today()
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)

    target = data_dir / dated_filename(today)
    payload = [bar.model_dump(mode="json") for bar in bars]
    # A same-day rerun replaces the file current.json already points at, so
    # the dated file is itself swapped in whole rather than rewritten.
    tmp_file = data_dir / f".{target.name}.tmp"
    with open(tmp_file, "w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=False)
        handle.flush()
        os.fsync(handle.fileno())
    os.replace(tmp_file, target)

    current = data_dir / CURRENT_FILENAME
    tmp_link = data_dir / f".{CURRENT_FILENAME}.tmp"
    if tmp_link.is_symlink() or tmp_link.exists():
        tmp_link.unlink()
    # Relative target keeps the link valid if the data directory moves.
    os.symlink(target.name, tmp_link)
    os.replace(tmp_link, current)

    logger.info("Published %d bars to %s (%s -> %s)", len(payload), target, current, target.name)
    return target
