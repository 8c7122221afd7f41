"""
Availability Prober

Checks one (library, book) pair, falling back through the credential list
in order until one credential yields a definitive answer.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .errors import AllCredentialsExhausted, ResponseParseError
from .protocols import AvailabilityEndpoint

logger = logging.getLogger(__name__)


class AvailabilityProber:
    """
    Sequential credential fallback over an availability endpoint.

    A definitive answer, ``True`` or ``False``, ends the probe; only a
    rejected credential moves on to the next one. The prober holds no state
    between calls, so one instance is shared by all concurrent probes.
    """

    def __init__(self, endpoint: AvailabilityEndpoint):
        self._endpoint = endpoint

    async def probe(
        self,
        library_id: str,
        book_id: str,
        credentials: Sequence[str],
    ) -> bool:
        """
        Determine whether a library can lend the book right now.

        Args:
            library_id: Library code
            book_id: ISBN-13 of the book
            credentials: API keys, tried in order

        Returns:
            True if the book can be borrowed, False if it cannot

        Raises:
            AllCredentialsExhausted: If every credential was rejected
            ResponseParseError: If a reply could not be interpreted
            ProbeTransportError: If the endpoint could not be reached
        """
        for position, credential in enumerate(credentials, start=1):
            reply = await self._endpoint.check(credential, library_id, book_id)

            if reply.is_rejection:
                logger.info(
                    f"Credential #{position}/{len(credentials)} rejected "
                    f"for library {library_id}: {reply.rejection}"
                )
                continue

            if reply.available is None:
                raise ResponseParseError(library_id, "endpoint returned no availability flag")

            logger.debug(
                f"Library {library_id} book {book_id}: available={reply.available} "
                f"(credential #{position})"
            )
            return reply.available

        raise AllCredentialsExhausted(library_id, len(credentials))
