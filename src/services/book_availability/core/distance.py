"""
Distance Filter

Great-circle distance on a spherical earth and radius selection over a
catalog snapshot. Pure functions, no I/O.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

from .errors import InputError
from .models import CandidateLibrary, GeoPoint, LibraryRecord

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points in kilometres."""
    lat1 = math.radians(a.latitude)
    lon1 = math.radians(a.longitude)
    lat2 = math.radians(b.latitude)
    lon2 = math.radians(b.longitude)

    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Rounding can push h a hair outside [0, 1] for antipodal points
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def filter_candidates(
    requester: GeoPoint,
    catalog: Iterable[LibraryRecord],
    radius_km: float,
) -> list[CandidateLibrary]:
    """
    Select catalog records within ``radius_km`` of the requester.

    The radius is inclusive. Records whose coordinates cannot be parsed are
    skipped, whatever the radius; they never fail the call.

    Args:
        requester: Requester position
        catalog: Catalog snapshot
        radius_km: Search radius in kilometres (may be ``math.inf``)

    Returns:
        Candidates with their distance. Order is not part of the contract.

    Raises:
        InputError: If the radius is negative or NaN
    """
    if math.isnan(radius_km) or radius_km < 0:
        raise InputError(f"radius must be a non-negative number, got {radius_km}")

    candidates: list[CandidateLibrary] = []
    skipped = 0

    for record in catalog:
        try:
            location = record.location()
        except InputError as e:
            skipped += 1
            logger.debug(f"Skipping library {record.id} with bad coordinates: {e}")
            continue

        distance = haversine_km(requester, location)
        if distance <= radius_km:
            candidates.append(CandidateLibrary(record=record, distance_km=distance))

    if skipped:
        logger.debug(f"Skipped {skipped} catalog records with malformed coordinates")

    return candidates
