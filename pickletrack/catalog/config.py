from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .scorer import MAXIMUM_DISTANCE_MILES

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_PACKAGE_DIR = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class ServerConfig:
    # JSON list of bars; the scraper swaps this symlink atomically.
    bars_path: Path = Path(os.getenv("PICKLETRACK_BARS_PATH", "static/data/current.json"))
    static_dir: Path = Path(os.getenv("PICKLETRACK_STATIC_DIR", str(_PACKAGE_DIR / "static")))
    max_distance_miles: float = float(os.getenv("PICKLETRACK_MAX_DISTANCE_MILES", str(MAXIMUM_DISTANCE_MILES)))
    reload_interval_seconds: float = float(os.getenv("PICKLETRACK_RELOAD_INTERVAL_SECONDS", str(60 * 60 * 24)))


DEFAULT_SERVER_CONFIG = ServerConfig()
