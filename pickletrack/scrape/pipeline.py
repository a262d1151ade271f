"""
Batch entry point for the scraper.

Usage:
    python -m pickletrack.scrape.pipeline
"""
from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable

from ..geo import Region
from ..logging_config import configure_logging
from .config import DEFAULT_SCRAPE_CONFIG, FoursquareConfig, ScrapeConfig
from .enumerator import SpatialEnumerator, seed_cells
from .foursquare import FoursquareClient
from .publish import publish_bars
from .tip_filter import filter_bars

logger = logging.getLogger(__name__)


def run_scrape(
    config: ScrapeConfig = DEFAULT_SCRAPE_CONFIG,
    foursquare: FoursquareConfig | None = None,
    client: FoursquareClient | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Path:
    """
    Execute the whole scrape.

    Steps:
    - Check configuration (fatal on violation).
    - Enumerate bars cell by cell; any venue-search failure aborts the run.
    - Filter by region and tips, retrying tip fetches indefinitely.
    - Publish the dataset file and swap ``current.json``.
    """
    foursquare = foursquare or FoursquareConfig()
    config.validate()
    foursquare.validate()

    client = client or FoursquareClient(foursquare)
    region = Region(northwest=config.northwest, height_m=config.height_m, width_m=config.width_m)
    seeds = seed_cells(region, config.cell_size_m, config.edge_margin_m)
    logger.info("Searching %d cells of %dm", len(seeds), config.cell_size_m)

    enumerator = SpatialEnumerator(client.search_venues, foursquare.max_venues_per_query, max_depth=config.max_depth)
    venues = enumerator.enumerate(seeds)
    logger.info("Enumeration made %d queries and found %d venues", enumerator.queries, len(venues))
    if enumerator.truncated:
        logger.warning("%d cells may still be missing venues", len(enumerator.truncated))

    bars = filter_bars(
        venues,
        client.venue_tips,
        config.tip_phrases,
        region_code=config.region_code,
        retry_delay_seconds=config.retry_delay_seconds,
        sleep=sleep,
    )
    return publish_bars(bars, config.data_dir)


if __name__ == "__main__":
    configure_logging()
    path = run_scrape()
    print(f"Scrape complete. Dataset saved to: {path}")
