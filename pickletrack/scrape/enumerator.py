"""
Exhaustive venue discovery under a per-query result cap.

Foursquare returns at most ``cap`` venues for any bounding box and gives no
"has more" flag, so a response of exactly ``cap`` venues is treated as
truncated: the box is split into quadrants and each is searched again until
every response comes back under the cap.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from ..geo import BoundingBox, LatLong, Region, offset_latlong
from .models import Venue

logger = logging.getLogger(__name__)

FetchVenues = Callable[[BoundingBox], list[Venue]]


@dataclass(frozen=True)
class Cell:
    box: BoundingBox
    depth: int = 0


def split_to_quadrants(box: BoundingBox) -> tuple[BoundingBox, BoundingBox, BoundingBox, BoundingBox]:
    """Split ``box`` at its midpoint into top-left, top-right, bottom-left, bottom-right."""
    mid = box.midpoint
    return (
        BoundingBox(
            sw=LatLong(latitude=mid.latitude, longitude=box.sw.longitude),
            ne=LatLong(latitude=box.ne.latitude, longitude=mid.longitude),
        ),
        BoundingBox(sw=mid, ne=box.ne),
        BoundingBox(sw=box.sw, ne=mid),
        BoundingBox(
            sw=LatLong(latitude=box.sw.latitude, longitude=mid.longitude),
            ne=LatLong(latitude=mid.latitude, longitude=box.ne.longitude),
        ),
    )


def seed_cells(region: Region, cell_size_m: int, margin_m: float = 10) -> list[BoundingBox]:
    """
    Tile ``region`` into square cells of ``cell_size_m``.

    Each cell is pushed out by ``margin_m`` on every edge so neighbours overlap
    a little and nothing sitting on a grid line falls through the cracks.
    """
    origin = region.northwest
    cells: list[BoundingBox] = []
    for de in range(region.width_m // cell_size_m):
        for dn in range(region.height_m // cell_size_m):
            cells.append(
                BoundingBox(
                    sw=offset_latlong(origin, -((dn + 1) * cell_size_m + margin_m), de * cell_size_m - margin_m),
                    ne=offset_latlong(origin, -(dn * cell_size_m - margin_m), (de + 1) * cell_size_m + margin_m),
                )
            )
    return cells


class SpatialEnumerator:
    """
    Walks a stack of cells, subdividing any cell whose search hits the cap.

    The output keeps duplicates: a venue inside an overlap margin is found once
    per cell that covers it. Deduplication belongs to the consumer.

    A cell that still hits the cap at ``max_depth`` cannot be narrowed any
    further (typically many venues sharing one coordinate); its capped results
    are kept and the cell is recorded in ``truncated``.
    """

    def __init__(self, fetch: FetchVenues, cap: int, max_depth: int = 16) -> None:
        self.fetch = fetch
        self.cap = cap
        self.max_depth = max_depth
        self.truncated: list[BoundingBox] = []
        self.queries = 0

    def enumerate(self, seeds: list[BoundingBox]) -> list[Venue]:
        unexplored = [Cell(box) for box in seeds]
        total_large = len(unexplored)
        total_large_handled = 0
        found: list[Venue] = []

        while unexplored:
            cell = unexplored.pop()
            venues = self.fetch(cell.box)
            self.queries += 1

            if len(venues) >= self.cap:
                if cell.depth < self.max_depth:
                    unexplored.extend(Cell(quadrant, cell.depth + 1) for quadrant in split_to_quadrants(cell.box))
                    continue
                logger.warning(
                    "Cell %s still returns %d venues at depth %d; keeping truncated results",
                    cell.box,
                    len(venues),
                    cell.depth,
                )
                self.truncated.append(cell.box)

            found.extend(venues)

            # Every seed sits below its own subdivisions on the stack, so once the
            # stack shrinks past a seed's slot that seed is finished.
            while total_large_handled < total_large and len(unexplored) < total_large - total_large_handled:
                total_large_handled += 1
                logger.info(
                    "Processed %d/%d large cells. Found %d venues.",
                    total_large_handled,
                    total_large,
                    len(found),
                )

        return found


def enumerate_venues(
    region: Region,
    cell_size_m: int,
    cap: int,
    fetch: FetchVenues,
    margin_m: float = 10,
    max_depth: int = 16,
) -> list[Venue]:
    """Seed ``region`` and return every venue found, duplicates included."""
    enumerator = SpatialEnumerator(fetch, cap, max_depth=max_depth)
    return enumerator.enumerate(seed_cells(region, cell_size_m, margin_m))
