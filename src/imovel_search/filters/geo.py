"""Great-circle distance and radius filtering.

Used by the partner-properties view to restrict candidate listings to those
within a broker's working radius.
"""

import math
from collections.abc import Iterable
from typing import Final, TypeVar

from imovel_search.logging import get_logger
from imovel_search.models import GeoPoint, LocatedEntity
from imovel_search.utils.coercion import parse_optional_float

logger = get_logger(__name__)

EARTH_RADIUS_KM: Final = 6371

E = TypeVar("E", bound=LocatedEntity)


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance between two points in kilometres, rounded to 0.1 km.

    Rounding is half-up (1.25 -> 1.3), not Python's round-half-even. NaN
    coordinates propagate as NaN.
    """
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.latitude))
        * math.cos(math.radians(b.latitude))
        * math.sin(d_lon / 2) ** 2
    )
    if math.isnan(h):
        return h
    # Float error can push h a hair outside [0, 1] for antipodal points
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return math.floor(EARTH_RADIUS_KM * c * 10 + 0.5) / 10


def radius_is_set(radius_km: float | None) -> bool:
    """False for the values that mean "no radius": None, 0 and NaN."""
    return radius_km is not None and not math.isnan(radius_km) and radius_km != 0


def entity_location(entity: LocatedEntity) -> GeoPoint | None:
    """Read an entity's coordinates, treating missing or unparseable values as absent."""
    lat = parse_optional_float(getattr(entity, "latitude", None))
    lon = parse_optional_float(getattr(entity, "longitude", None))
    if lat is None or lon is None:
        return None
    return GeoPoint(latitude=lat, longitude=lon)


class RadiusFilter:
    """Keep entities within ``radius_km`` of ``center``.

    The filter is inactive (passes everything through) when there is no
    center or the radius is None, 0 or NaN. Once active, entities without usable
    coordinates are always rejected.
    """

    def __init__(self, center: GeoPoint | None, radius_km: float | None) -> None:
        self.center = center
        self.radius_km = radius_km

    @property
    def active(self) -> bool:
        return self.center is not None and radius_is_set(self.radius_km)

    def is_within(self, entity: LocatedEntity) -> bool:
        """Check whether an entity passes the radius test."""
        center, radius_km = self.center, self.radius_km
        if center is None or radius_km is None or not radius_is_set(radius_km):
            return True
        point = entity_location(entity)
        if point is None:
            return False
        return distance_km(center, point) <= radius_km

    def filter_properties(self, entities: Iterable[E]) -> list[E]:
        """Filter entities by distance from the center.

        Args:
            entities: Listings (or any located entity) to filter.

        Returns:
            All entities unchanged when inactive, otherwise those within the radius.
        """
        candidates = list(entities)
        if not self.active:
            return candidates

        kept: list[E] = []
        missing_coords = 0
        for entity in candidates:
            if entity_location(entity) is None:
                missing_coords += 1
            elif self.is_within(entity):
                kept.append(entity)

        logger.info(
            "radius_filter_complete",
            total=len(candidates),
            kept=len(kept),
            missing_coordinates=missing_coords,
            radius_km=self.radius_km,
        )
        return kept


def filter_by_radius(
    entities: Iterable[E], center: GeoPoint | None, radius_km: float | None
) -> list[E]:
    """Functional form of :class:`RadiusFilter`."""
    return RadiusFilter(center, radius_km).filter_properties(entities)
