from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from ..geo import LatLong


@dataclass(frozen=True)
class Venue:
    """A bar as returned by one venue search; lives only for a scrape run."""

    id: str
    name: str
    location: LatLong
    region_code: str | None = None


# ── Foursquare wire format ───────────────────────────────────────────────


class FoursquareLocation(BaseModel):
    lat: float
    lng: float
    state: str | None = None


class FoursquareVenue(BaseModel):
    id: str
    name: str
    location: FoursquareLocation

    def to_venue(self) -> Venue:
        return Venue(
            id=self.id,
            name=self.name,
            location=LatLong(latitude=self.location.lat, longitude=self.location.lng),
            region_code=self.location.state,
        )


class FoursquareVenueList(BaseModel):
    venues: list[FoursquareVenue]


class FoursquareVenueSearchResult(BaseModel):
    response: FoursquareVenueList


class FoursquareTip(BaseModel):
    text: str


class FoursquareTipItems(BaseModel):
    items: list[FoursquareTip]


class FoursquareTipList(BaseModel):
    tips: FoursquareTipItems


class FoursquareTipsResult(BaseModel):
    response: FoursquareTipList
