from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from ..geo import LatLong

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

TIP_SEARCH_PHRASES: tuple[str, ...] = (
    "pickle back",
    "pickleback",
    "pickel back",
    "pickelback",
    "pickle-back",
    "pickel-back",
    "pickle shot",
    "pickel shot",
    "pickle-shot",
    "pickel-shot",
    "shot of pickle",
    "shot of pickel",
    "shot pickle",
    "shot pickel",
    "pickle juice",
    "pickel juice",
    "pickle-juice",
    "pickel-juice",
)

# Foursquare API ID for the "Bar" category.
FOURSQUARE_BAR_CATEGORY = "4bf58dd8d48988d116941735"


class ConfigError(ValueError):
    """Raised once at startup when the scrape settings cannot work."""


@dataclass(frozen=True)
class FoursquareConfig:
    client_id: str = os.getenv("CLIENT_ID", "")
    client_secret: str = os.getenv("CLIENT_SECRET", "")
    base_url: str = "https://api.foursquare.com/v2"
    # API version tested against, YYYYMMDD.
    api_version: str = "20170911"
    category_id: str = FOURSQUARE_BAR_CATEGORY
    max_venues_per_query: int = 50
    max_tips_per_venue: int = 500
    timeout: float = 30.0

    def validate(self) -> None:
        if not self.client_id or not self.client_secret:
            raise ConfigError("CLIENT_ID and CLIENT_SECRET must both be set")
        if self.max_venues_per_query < 1:
            raise ConfigError("max_venues_per_query must be positive")


@dataclass(frozen=True)
class ScrapeConfig:
    """
    Where and how to search.

    The region is described by its north-west corner plus extents in meters,
    and is tiled into square cells of ``cell_size_m``. Foursquare limits a
    query to 10 square kilometers, so the default cell sneaks in under that.
    """

    northwest: LatLong = LatLong(latitude=40.934688, longitude=-74.061693)
    height_m: int = 48000
    width_m: int = 33000
    cell_size_m: int = 3000
    edge_margin_m: int = 10
    max_depth: int = 16
    region_code: str = "NY"
    tip_phrases: tuple[str, ...] = TIP_SEARCH_PHRASES
    retry_delay_seconds: float = 60 * 10
    data_dir: Path = field(default_factory=lambda: Path(os.getenv("PICKLETRACK_DATA_DIR", "static/data")))

    def validate(self) -> None:
        if self.cell_size_m <= 0:
            raise ConfigError("cell_size_m must be positive")
        if self.width_m % self.cell_size_m != 0:
            raise ConfigError(f"Region width {self.width_m}m is not divisible by cell size {self.cell_size_m}m")
        if self.height_m % self.cell_size_m != 0:
            raise ConfigError(f"Region height {self.height_m}m is not divisible by cell size {self.cell_size_m}m")
        if self.max_depth < 0:
            raise ConfigError("max_depth must not be negative")
        if not self.region_code:
            raise ConfigError("region_code must be set; venues outside it are dropped")


DEFAULT_SCRAPE_CONFIG = ScrapeConfig()
