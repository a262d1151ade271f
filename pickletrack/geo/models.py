from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LatLong:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned lat/long rectangle, ``sw`` corner to ``ne`` corner."""

    sw: LatLong
    ne: LatLong

    def __post_init__(self) -> None:
        if self.sw.latitude > self.ne.latitude or self.sw.longitude > self.ne.longitude:
            raise ValueError(f"South-west corner {self.sw} must not lie north or east of {self.ne}")

    @property
    def midpoint(self) -> LatLong:
        return LatLong(
            latitude=(self.sw.latitude + self.ne.latitude) / 2.0,
            longitude=(self.sw.longitude + self.ne.longitude) / 2.0,
        )

    def contains(self, point: LatLong) -> bool:
        return (
            self.sw.latitude <= point.latitude <= self.ne.latitude
            and self.sw.longitude <= point.longitude <= self.ne.longitude
        )


@dataclass(frozen=True)
class Region:
    """Search area given as its north-west corner plus extents in meters."""

    northwest: LatLong
    height_m: int
    width_m: int
