"""
Book Availability Service

Answers "which nearby libraries can lend this book right now?" by chaining
the catalog provider, the distance filter and the resolution coordinator.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from .adapters.library_api import LibraryApiClient
from .config import BookAvailabilityConfig
from .core.coordinator import ResolutionCoordinator
from .core.distance import filter_candidates
from .core.errors import InputError
from .core.models import GeoPoint, LibraryRecord
from .core.prober import AvailabilityProber
from .core.protocols import AvailabilityEndpoint, CatalogProvider

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class AvailabilityService:
    """
    Entry point for availability lookups.

    Credentials and the default radius are fixed at construction; nothing is
    read from the environment per call, and no state is kept between calls.
    """

    def __init__(
        self,
        catalog: CatalogProvider,
        endpoint: AvailabilityEndpoint,
        credentials: Sequence[str],
        default_radius_km: float = 5.0,
        max_concurrency: int | None = None,
    ):
        """
        Initialize the service.

        Args:
            catalog: Source of library records
            endpoint: Availability API adapter
            credentials: API keys in fallback order
            default_radius_km: Radius used when a call does not give one
            max_concurrency: Bound on in-flight probes (None = unbounded)

        Raises:
            InputError: If no credential is configured
        """
        self._credentials = tuple(credentials)
        if not self._credentials:
            raise InputError("at least one availability API credential is required")

        self._catalog = catalog
        self._endpoint = endpoint
        self._default_radius_km = default_radius_km
        self._coordinator = ResolutionCoordinator(
            AvailabilityProber(endpoint),
            max_concurrency=max_concurrency,
        )

    @classmethod
    def from_config(
        cls,
        config: BookAvailabilityConfig,
        catalog: CatalogProvider,
    ) -> AvailabilityService:
        """Build a service talking to the real availability API."""
        endpoint = LibraryApiClient(
            base_url=config.api_base_url,
            timeout_seconds=config.timeout_seconds,
            connect_timeout_seconds=config.connect_timeout_seconds,
            max_connections=config.max_connections,
            retry_max_attempts=config.retry_max_attempts,
            retry_base_delay=config.retry_base_delay,
        )
        return cls(
            catalog=catalog,
            endpoint=endpoint,
            credentials=config.credentials,
            default_radius_km=config.search_radius_km,
            max_concurrency=config.max_concurrency,
        )

    @property
    def credential_count(self) -> int:
        return len(self._credentials)

    async def resolve(
        self,
        location: GeoPoint,
        book_id: str,
        radius_km: float | None = None,
    ) -> list[LibraryRecord]:
        """
        Find libraries within the radius that can lend the book now.

        Args:
            location: Requester position
            book_id: ISBN-13 of the book
            radius_km: Search radius, defaults to the configured one

        Returns:
            Available libraries in no particular order; empty if none

        Raises:
            InputError: If the book id is blank or the radius invalid
            ResolutionError: If availability of any nearby library could not
                be determined
        """
        book_id = (book_id or "").strip()
        if not book_id:
            raise InputError("book id is required")
        radius = self._default_radius_km if radius_km is None else radius_km

        start = time.perf_counter()
        catalog = await self._catalog.list_libraries()
        logger.info(f"Catalog loaded: {len(catalog)} libraries in {_elapsed_ms(start):.1f}ms")

        start = time.perf_counter()
        candidates = filter_candidates(location, catalog, radius)
        logger.info(
            f"{len(candidates)} libraries within {radius}km "
            f"(filtered in {_elapsed_ms(start):.1f}ms)"
        )

        start = time.perf_counter()
        try:
            available = await self._coordinator.resolve(candidates, book_id, self._credentials)
        finally:
            logger.info(
                f"Probed {len(candidates)} libraries for {book_id} in {_elapsed_ms(start):.1f}ms"
            )

        logger.info(f"Book {book_id} available at {len(available)} nearby libraries")
        return available

    async def close(self) -> None:
        """Release the endpoint's network resources, if it holds any."""
        close = getattr(self._endpoint, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> AvailabilityService:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
