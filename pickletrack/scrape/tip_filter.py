from __future__ import annotations

import logging
import time
from typing import Callable, Iterable

from ..catalog.models import Bar
from .foursquare import FoursquareHTTPError
from .models import Venue

logger = logging.getLogger(__name__)

# Tip texts for one venue id. Transient failures must raise one of the
# ``retry_on`` types passed to ``fetch_tips_with_retry``.
FetchTips = Callable[[str], list[str]]


def dedupe_venues(venues: Iterable[Venue]) -> list[Venue]:
    """Drop repeated venue ids, keeping the first occurrence and the original order."""
    seen: set[str] = set()
    unique: list[Venue] = []
    for venue in venues:
        if venue.id in seen:
            continue
        seen.add(venue.id)
        unique.append(venue)
    return unique


def matching_tips(texts: Iterable[str], phrases: Iterable[str]) -> list[str]:
    """
    Return the distinct tips mentioning any of ``phrases``, case-insensitively.

    Tips keep their original casing and first-seen order.
    """
    lowered_phrases = [p.lower() for p in phrases]
    tips: list[str] = []
    for text in texts:
        lowered = text.lower()
        if any(phrase in lowered for phrase in lowered_phrases) and text not in tips:
            tips.append(text)
    return tips


def fetch_tips_with_retry(
    fetch_tips: FetchTips,
    venue_id: str,
    delay_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
    retry_on: tuple[type[BaseException], ...] = (FoursquareHTTPError,),
) -> list[str]:
    """
    Call ``fetch_tips`` until it succeeds.

    Foursquare rate limits are hourly, so a failed request waits a fixed delay
    and tries again with no cap on attempts. Only ``retry_on`` errors are
    retried (transport and status failures for the Foursquare client); anything
    else, such as a malformed body, propagates.
    """
    while True:
        try:
            return fetch_tips(venue_id)
        except retry_on as exc:
            logger.warning("Error fetching tips for %s (%s). Waiting %.0f seconds.", venue_id, exc, delay_seconds)
            sleep(delay_seconds)


def filter_bars(
    venues: Iterable[Venue],
    fetch_tips: FetchTips,
    phrases: Iterable[str],
    region_code: str = "NY",
    retry_delay_seconds: float = 600,
    sleep: Callable[[float], None] = time.sleep,
    retry_on: tuple[type[BaseException], ...] = (FoursquareHTTPError,),
) -> list[Bar]:
    """
    Turn raw search results into ``Bar`` records.

    Venues are deduplicated, restricted to ``region_code`` (venues without one
    are dropped), and kept only when at least one tip matches ``phrases``.
    ``fetch_tips`` failures of a ``retry_on`` type are retried forever.
    """
    phrases = list(phrases)
    unique = dedupe_venues(venues)
    in_region = [v for v in unique if v.region_code == region_code]
    logger.info("%d unique venues, %d in region %s", len(unique), len(in_region), region_code)

    bars: list[Bar] = []
    total = len(in_region)
    last_percent = -1
    for processed, venue in enumerate(in_region):
        percent = processed * 100 // total
        if percent != last_percent:
            logger.info("Fetching details %d%% complete.", percent)
            last_percent = percent

        texts = fetch_tips_with_retry(fetch_tips, venue.id, retry_delay_seconds, sleep=sleep, retry_on=retry_on)
        tips = matching_tips(texts, phrases)
        if not tips:
            continue

        bars.append(
            Bar(
                id=venue.id,
                name=venue.name,
                lat=venue.location.latitude,
                lng=venue.location.longitude,
                tips=tuple(tips),
            )
        )

    logger.info("Kept %d of %d venues with matching tips", len(bars), total)
    return bars
