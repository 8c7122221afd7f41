"""
Core availability resolution logic.

This module contains the domain logic for finding nearby libraries that can
lend a book, independent of any transport or catalog backend.
"""

from .coordinator import ResolutionCoordinator
from .distance import filter_candidates, haversine_km
from .errors import (
    AllCredentialsExhausted,
    BookAvailabilityError,
    InputError,
    ProbeError,
    ProbeTransportError,
    ResolutionError,
    ResponseParseError,
)
from .models import CandidateLibrary, GeoPoint, LibraryRecord
from .prober import AvailabilityProber
from .protocols import AvailabilityEndpoint, CatalogProvider, LoanReply

__all__ = [
    "AllCredentialsExhausted",
    "AvailabilityEndpoint",
    "AvailabilityProber",
    "BookAvailabilityError",
    "CandidateLibrary",
    "CatalogProvider",
    "GeoPoint",
    "InputError",
    "LibraryRecord",
    "LoanReply",
    "ProbeError",
    "ProbeTransportError",
    "ResolutionCoordinator",
    "ResolutionError",
    "ResponseParseError",
    "filter_candidates",
    "haversine_km",
]
