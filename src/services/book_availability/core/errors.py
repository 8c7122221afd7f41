"""
Book Availability Errors

Error taxonomy for availability resolution. Geodata problems in catalog
records never show up here (the distance filter drops those records);
everything below surfaces to the caller.
"""

from __future__ import annotations


class BookAvailabilityError(Exception):
    """Base class for all book availability errors."""


class InputError(BookAvailabilityError, ValueError):
    """Malformed location, blank identifier or invalid radius."""


class ProbeError(BookAvailabilityError):
    """A single library's availability could not be determined."""

    def __init__(self, library_id: str, message: str):
        super().__init__(f"library {library_id}: {message}")
        self.library_id = library_id


class AllCredentialsExhausted(ProbeError):
    """Every configured credential was rejected for this library."""

    def __init__(self, library_id: str, attempts: int):
        super().__init__(library_id, f"all {attempts} credentials were rejected")
        self.attempts = attempts


class ResponseParseError(ProbeError):
    """The availability API returned a payload we could not interpret."""


class ProbeTransportError(ProbeError):
    """The availability API could not be reached after retries."""


class ResolutionError(BookAvailabilityError):
    """
    Availability could not be determined for at least one candidate.

    Wraps the first probe failure observed during fan-in. Never mixed with
    a partial result.
    """

    def __init__(self, cause: ProbeError):
        super().__init__(f"availability check failed: {cause}")
        self.cause = cause

    @property
    def library_id(self) -> str:
        return self.cause.library_id
