"""
Resolution Coordinator

Fans candidate libraries out to concurrent probes and folds the outcomes
into one availability list, or one error.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from .errors import ProbeError, ResolutionError
from .models import CandidateLibrary, LibraryRecord
from .prober import AvailabilityProber

logger = logging.getLogger(__name__)


class ResolutionCoordinator:
    """
    Concurrent fan-out/fan-in over an availability prober.

    Aggregation is all-or-nothing: a library is reported only when its probe
    answers ``True``, and a single failed probe fails the whole resolution.
    Every probe task is awaited before ``resolve`` returns, including the
    ones still running when the first failure arrives.

    ``max_concurrency`` bounds the number of probes in flight. ``None``
    leaves the fan-out unbounded, one task per candidate.
    """

    def __init__(
        self,
        prober: AvailabilityProber,
        max_concurrency: int | None = None,
    ):
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._prober = prober
        self._max_concurrency = max_concurrency

    async def resolve(
        self,
        candidates: Sequence[CandidateLibrary],
        book_id: str,
        credentials: Sequence[str],
    ) -> list[LibraryRecord]:
        """
        Probe every candidate and collect the libraries that can lend the book.

        Args:
            candidates: Libraries within the search radius
            book_id: ISBN-13 of the book
            credentials: API keys shared by all probes

        Returns:
            Records of the libraries where the book is available, in no
            particular order. Empty if no candidate has it.

        Raises:
            ResolutionError: Wrapping the first probe failure observed
        """
        if not candidates:
            return []

        credentials = tuple(credentials)
        semaphore = (
            asyncio.Semaphore(self._max_concurrency) if self._max_concurrency else None
        )

        async def probe_one(candidate: CandidateLibrary) -> tuple[CandidateLibrary, bool]:
            if semaphore is None:
                available = await self._prober.probe(candidate.library_id, book_id, credentials)
            else:
                async with semaphore:
                    available = await self._prober.probe(
                        candidate.library_id, book_id, credentials
                    )
            return candidate, available

        tasks = [asyncio.create_task(probe_one(candidate)) for candidate in candidates]
        available_records: list[LibraryRecord] = []
        first_error: BaseException | None = None

        try:
            for finished in asyncio.as_completed(tasks):
                try:
                    candidate, available = await finished
                except ProbeError as e:
                    if first_error is None:
                        first_error = e
                        logger.warning(f"Probe failed, resolution will fail: {e}")
                    else:
                        logger.debug(f"Ignoring later probe failure: {e}")
                    continue
                except Exception as e:
                    if first_error is None:
                        first_error = e
                        logger.exception(f"Unexpected probe error: {e}")
                    continue

                if first_error is None and available:
                    available_records.append(candidate.record)
        finally:
            # Only reached with pending tasks when resolve() itself is cancelled
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        if isinstance(first_error, ProbeError):
            raise ResolutionError(first_error) from first_error
        if first_error is not None:
            raise first_error

        logger.debug(
            f"Book {book_id}: {len(available_records)}/{len(candidates)} candidates available"
        )
        return available_records
