"""
Collaborator Protocols

Interfaces the engine depends on. Implementations live in ``adapters`` and
``catalog``; tests substitute their own.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .models import LibraryRecord


@dataclass(frozen=True)
class LoanReply:
    """
    One answer from the availability endpoint for one credential.

    Either a definitive ``available`` flag, or a rejection of the credential
    (quota exceeded, unknown key) with the endpoint's message.
    """

    available: bool | None = None
    rejection: str | None = None

    def __post_init__(self) -> None:
        if self.available is not None and self.rejection is not None:
            raise ValueError("a reply is either definitive or a rejection, not both")

    @classmethod
    def definitive(cls, available: bool) -> LoanReply:
        return cls(available=available)

    @classmethod
    def rejected(cls, message: str) -> LoanReply:
        return cls(rejection=message or "rejected")

    @property
    def is_rejection(self) -> bool:
        return self.rejection is not None


@runtime_checkable
class AvailabilityEndpoint(Protocol):
    """The external book-availability API, one call per credential."""

    async def check(self, credential: str, library_id: str, book_id: str) -> LoanReply:
        """
        Ask whether ``book_id`` can be borrowed at ``library_id``.

        Raises:
            ResponseParseError: If the reply cannot be interpreted
            ProbeTransportError: If the endpoint cannot be reached
        """
        ...


@runtime_checkable
class CatalogProvider(Protocol):
    """Source of the current library catalog snapshot."""

    async def list_libraries(self) -> Sequence[LibraryRecord]:
        ...
