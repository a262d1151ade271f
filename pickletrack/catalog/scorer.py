from __future__ import annotations

import numpy as np

from ..geo import distance_miles
from .store import CatalogSnapshot

# Maximum distance of a bar that will be suggested to the user.
MAXIMUM_DISTANCE_MILES = 3.0


def utility_from_distance(distance_miles):
    """
    A rough estimate for the "utility" score of a bar.

    Treated as a likelihood weight: with three bars scoring [1, 2, 3] the first
    is picked 1 time in 6. Quartic decay, so nearby bars dominate.
    """
    return 5000.0 / ((np.power(distance_miles, 4.0) * 40.0) + 0.96)


def locate(
    lat: float,
    lng: float,
    snapshot: CatalogSnapshot,
    max_distance_miles: float = MAXIMUM_DISTANCE_MILES,
    rng: np.random.Generator | None = None,
) -> tuple[str, str, str] | None:
    """
    Pick a random nearby bar and one of its tips.

    Bars further than ``max_distance_miles`` are ignored; the rest are chosen
    with probability proportional to their utility. Returns
    ``(id, name, comment)`` or ``None`` when nothing is in range.
    """
    if not len(snapshot):
        return None
    rng = rng or np.random.default_rng()

    distances = distance_miles(lat, lng, snapshot.lats, snapshot.lngs)
    in_range = np.flatnonzero(distances <= max_distance_miles)
    if in_range.size == 0:
        return None

    # Cumulative utility in snapshot order; the last entry is the total.
    sweep = np.cumsum(utility_from_distance(distances[in_range]))
    total_utility = sweep[-1]
    if total_utility == 0.0:
        return None

    choice = rng.uniform(0.0, total_utility)
    # First bar whose cumulative utility exceeds the draw.
    picked = min(int(np.searchsorted(sweep, choice, side="right")), in_range.size - 1)
    bar = snapshot.bars[in_range[picked]]

    comment = bar.tips[int(rng.integers(len(bar.tips)))]
    return bar.id, bar.name, comment
