from unittest.mock import MagicMock

import pytest

from pickletrack.geo import LatLong
from pickletrack.scrape.config import TIP_SEARCH_PHRASES
from pickletrack.scrape.foursquare import FoursquareHTTPError, FoursquareResponseError
from pickletrack.scrape.models import Venue
from pickletrack.scrape.tip_filter import (
    dedupe_venues,
    fetch_tips_with_retry,
    filter_bars,
    matching_tips,
)


def _venue(venue_id: str, region_code: str | None = "NY") -> Venue:
    return Venue(id=venue_id, name=f"Bar {venue_id}", location=LatLong(40.73, -73.99), region_code=region_code)


def test_dedupe_keeps_first_occurrence_in_order():
    first = _venue("a")
    duplicate = Venue(id="a", name="Other name", location=LatLong(0.0, 0.0))
    venues = [first, _venue("b"), duplicate, _venue("c")]

    assert [v.id for v in dedupe_venues(venues)] == ["a", "b", "c"]
    assert dedupe_venues(venues)[0] is first


def test_matching_tips_is_case_insensitive_and_preserves_text():
    tips = matching_tips(
        ["Try the pickle back here", "Pickleback heaven", "Great wings", "Try the pickle back here"],
        TIP_SEARCH_PHRASES,
    )

    assert tips == ["Try the pickle back here", "Pickleback heaven"]


def test_matching_tips_counts_a_tip_once_even_when_several_phrases_match():
    assert matching_tips(["Pickle juice shot, aka a pickleback"], TIP_SEARCH_PHRASES) == [
        "Pickle juice shot, aka a pickleback"
    ]


def test_filter_bars_builds_bar_records():
    tips = {
        "a": ["pickle back", "Pickleback", "meh"],
        "b": ["No pickles here"],
    }

    bars = filter_bars([_venue("a"), _venue("b")], tips.__getitem__, TIP_SEARCH_PHRASES)

    assert len(bars) == 1
    assert bars[0].id == "a"
    assert bars[0].tips == ("pickle back", "Pickleback")
    assert (bars[0].lat, bars[0].lng) == (40.73, -73.99)


def test_filter_bars_drops_other_regions_and_missing_region():
    fetch = MagicMock(return_value=["pickleback!"])

    bars = filter_bars([_venue("a", "NJ"), _venue("b", None), _venue("c")], fetch, TIP_SEARCH_PHRASES)

    assert [b.id for b in bars] == ["c"]
    fetch.assert_called_once_with("c")


def test_filter_bars_fetches_each_venue_once():
    fetch = MagicMock(return_value=["pickleback!"])

    bars = filter_bars([_venue("a"), _venue("a"), _venue("b")], fetch, TIP_SEARCH_PHRASES)

    assert [b.id for b in bars] == ["a", "b"]
    assert fetch.call_count == 2


def test_tip_fetch_retries_until_success():
    fetch = MagicMock(
        side_effect=[FoursquareHTTPError("429"), FoursquareHTTPError("500"), ["pickleback"]]
    )
    sleeps: list[float] = []

    result = fetch_tips_with_retry(fetch, "a", 600, sleep=sleeps.append)

    assert result == ["pickleback"]
    assert sleeps == [600, 600]
    assert fetch.call_count == 3


def test_tip_fetch_does_not_retry_malformed_body():
    fetch = MagicMock(side_effect=FoursquareResponseError("bad json"))
    sleeps: list[float] = []

    with pytest.raises(FoursquareResponseError):
        fetch_tips_with_retry(fetch, "a", 600, sleep=sleeps.append)
    assert sleeps == []


def test_filter_bars_passes_retry_delay_through():
    fetch = MagicMock(side_effect=[FoursquareHTTPError("503"), ["pickle shot"]])
    sleeps: list[float] = []

    bars = filter_bars([_venue("a")], fetch, TIP_SEARCH_PHRASES, retry_delay_seconds=12, sleep=sleeps.append)

    assert sleeps == [12]
    assert bars[0].tips == ("pickle shot",)


def test_tip_fetch_retries_caller_supplied_errors():
    fetch = MagicMock(side_effect=[ConnectionError("reset"), ["pickleback"]])
    sleeps: list[float] = []

    result = fetch_tips_with_retry(fetch, "a", 5, sleep=sleeps.append, retry_on=(ConnectionError,))

    assert result == ["pickleback"]
    assert sleeps == [5]


def test_filter_bars_passes_retry_on_through():
    fetch = MagicMock(side_effect=[TimeoutError("slow"), ["pickleback"]])

    bars = filter_bars([_venue("a")], fetch, TIP_SEARCH_PHRASES, sleep=lambda s: None, retry_on=(TimeoutError,))

    assert [b.id for b in bars] == ["a"]


def test_errors_outside_retry_on_abort():
    fetch = MagicMock(side_effect=ConnectionError("reset"))

    with pytest.raises(ConnectionError):
        fetch_tips_with_retry(fetch, "a", 5, sleep=lambda s: None)
    assert fetch.call_count == 1
