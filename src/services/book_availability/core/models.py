"""
Book Availability Models

Immutable value types shared by the distance filter, the prober and the
coordinator.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import InputError


def _parse_degrees(value: Any, name: str) -> float:
    """Parse one coordinate value (string or number) into finite degrees."""
    if isinstance(value, bool) or value is None:
        raise InputError(f"{name} is missing or not a number: {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise InputError(f"{name} is empty")
    try:
        degrees = float(value)
    except (TypeError, ValueError) as e:
        raise InputError(f"{name} is not a number: {value!r}") from e
    if not math.isfinite(degrees):
        raise InputError(f"{name} is not finite: {value!r}")
    return degrees


@dataclass(frozen=True)
class GeoPoint:
    """A position on the earth in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise InputError(f"non-finite coordinates: ({self.latitude}, {self.longitude})")
        if not -90.0 <= self.latitude <= 90.0:
            raise InputError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise InputError(f"longitude out of range: {self.longitude}")

    @classmethod
    def parse(cls, latitude: Any, longitude: Any) -> GeoPoint:
        """
        Build a point from raw values such as query parameters or store fields.

        Raises:
            InputError: If either value is missing, unparseable or out of range
        """
        return cls(
            latitude=_parse_degrees(latitude, "latitude"),
            longitude=_parse_degrees(longitude, "longitude"),
        )


@dataclass(frozen=True)
class LibraryRecord:
    """
    One catalog entry.

    Coordinates are kept exactly as the catalog store holds them (usually
    strings), so a bad value only matters when the record is located.
    """

    id: str
    name: str
    latitude: str | float
    longitude: str | float

    def location(self) -> GeoPoint:
        """
        Parse this record's coordinates.

        Raises:
            InputError: If the stored coordinates are malformed
        """
        return GeoPoint.parse(self.latitude, self.longitude)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the catalog store's attribute names for JSON output."""
        return {
            "libCode": self.id,
            "libName": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }

    @classmethod
    def from_item(cls, item: Mapping[str, Any]) -> LibraryRecord:
        """
        Create from a catalog store item (``libCode``, ``libName``, ...).

        Only the identifier is mandatory here; coordinates are validated
        lazily by the distance filter.

        Raises:
            InputError: If the item has no library code
        """
        code = item.get("libCode")
        if code is None or not str(code).strip():
            raise InputError(f"catalog item without libCode: {dict(item)!r}")
        return cls(
            id=str(code).strip(),
            name=str(item.get("libName") or ""),
            latitude=item.get("latitude", ""),
            longitude=item.get("longitude", ""),
        )


@dataclass(frozen=True)
class CandidateLibrary:
    """A catalog record that lies within the search radius."""

    record: LibraryRecord
    distance_km: float

    @property
    def library_id(self) -> str:
        return self.record.id
