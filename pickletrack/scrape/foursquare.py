"""Thin client for the two Foursquare v2 endpoints the scraper needs."""
from __future__ import annotations

import logging

import requests
from pydantic import BaseModel, ValidationError

from ..geo import BoundingBox
from .config import FoursquareConfig
from .models import FoursquareTipsResult, FoursquareVenueSearchResult, Venue

logger = logging.getLogger(__name__)


class FoursquareError(Exception):
    """Base class for anything that went wrong talking to Foursquare."""


class FoursquareHTTPError(FoursquareError):
    """Transport failure or a non-success status code."""


class FoursquareResponseError(FoursquareError):
    """The body was not the JSON document we expected."""


class FoursquareClient:
    def __init__(self, config: FoursquareConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    def _auth_params(self) -> dict[str, str]:
        return {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "v": self.config.api_version,
        }

    def _get(self, path: str, params: dict, model: type[BaseModel]):
        url = f"{self.config.base_url}{path}"
        try:
            resp = self.session.get(url, params={**params, **self._auth_params()}, timeout=self.config.timeout)
        except requests.RequestException as exc:
            raise FoursquareHTTPError(f"GET {path} failed: {exc}") from exc

        if not resp.ok:
            raise FoursquareHTTPError(f"GET {path} returned HTTP {resp.status_code}")

        try:
            return model.model_validate_json(resp.content)
        except ValidationError as exc:
            raise FoursquareResponseError(f"GET {path} returned an unexpected body") from exc

    def search_venues(self, box: BoundingBox) -> list[Venue]:
        """Return at most ``max_venues_per_query`` bars inside ``box``."""
        params = {
            "sw": f"{box.sw.latitude},{box.sw.longitude}",
            "ne": f"{box.ne.latitude},{box.ne.longitude}",
            "intent": "browse",
            "categoryId": self.config.category_id,
            "m": "foursquare",
            "limit": self.config.max_venues_per_query,
        }
        result = self._get("/venues/search", params, FoursquareVenueSearchResult)
        return [venue.to_venue() for venue in result.response.venues]

    def venue_tips(self, venue_id: str) -> list[str]:
        """Return the text of every tip left on ``venue_id``."""
        params = {"limit": self.config.max_tips_per_venue}
        result = self._get(f"/venues/{venue_id}/tips", params, FoursquareTipsResult)
        return [tip.text for tip in result.response.tips.items]
