"""
Book Availability Service

Finds the libraries near a requester that can lend a given book right now,
by probing the data4library availability API concurrently with a pool of
fallback API keys.

Usage:
    # One-off lookup
    python -m src.services.book_availability --isbn 9788936434267 \
        --lat 37.5665 --lon 126.9780 --catalog libraries.json

    # Programmatic
    from src.services.book_availability import AvailabilityService, GeoPoint
"""

__version__ = "0.1.0"

from .catalog import StaticCatalog, load_catalog_file
from .config import BookAvailabilityConfig, load_config
from .core.errors import (
    AllCredentialsExhausted,
    BookAvailabilityError,
    InputError,
    ProbeError,
    ProbeTransportError,
    ResolutionError,
    ResponseParseError,
)
from .core.models import CandidateLibrary, GeoPoint, LibraryRecord
from .service import AvailabilityService

__all__ = [
    "AllCredentialsExhausted",
    "AvailabilityService",
    "BookAvailabilityConfig",
    "BookAvailabilityError",
    "CandidateLibrary",
    "GeoPoint",
    "InputError",
    "LibraryRecord",
    "ProbeError",
    "ProbeTransportError",
    "ResolutionError",
    "ResponseParseError",
    "StaticCatalog",
    "load_catalog_file",
    "load_config",
]
