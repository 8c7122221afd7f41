"""
Library Availability API adapter.

httpx client for the data4library ``bookExist`` endpoint:

    GET {base}/bookExist?authKey=<key>&libCode=<code>&isbn13=<isbn>

    <response>
      <error>...</error>                       (credential problem)
      <result><loanAvailable>Y|N</loanAvailable></result>
    </response>
"""

from __future__ import annotations

import logging
from xml.etree import ElementTree

import httpx

from src.common.resilience import RetryConfig, retry_with_backoff

from ..core.errors import ProbeTransportError, ResponseParseError
from ..core.protocols import LoanReply

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://data4library.kr/api"

# Statuses that mean "this key cannot be used", not "the API is broken"
REJECTION_STATUSES = frozenset({401, 403, 429})


class UpstreamServerError(ConnectionError):
    """The availability API answered with a 5xx status."""


def parse_loan_reply(body: bytes | str, library_id: str) -> LoanReply:
    """
    Interpret a ``bookExist`` XML body.

    Args:
        body: Raw response body
        library_id: Library code, for error reporting

    Returns:
        A definitive reply, or a rejection when the body carries an error

    Raises:
        ResponseParseError: If the body is not the expected XML shape
    """
    try:
        root = ElementTree.fromstring(body)
    except (ElementTree.ParseError, ValueError) as e:
        raise ResponseParseError(library_id, f"invalid XML reply: {e}") from e

    if root.tag != "response":
        raise ResponseParseError(library_id, f"unexpected root element <{root.tag}>")

    error = (root.findtext("error") or "").strip()
    if error:
        return LoanReply.rejected(error)

    loan = root.findtext("result/loanAvailable")
    if loan is None:
        raise ResponseParseError(library_id, "reply has no result/loanAvailable")

    flag = loan.strip().upper()
    if flag == "Y":
        return LoanReply.definitive(True)
    if flag == "N":
        return LoanReply.definitive(False)
    raise ResponseParseError(library_id, f"unexpected loanAvailable value {loan!r}")


class LibraryApiClient:
    """
    Availability endpoint backed by the data4library HTTP API.

    Features:
    - Timeout: every request is bounded by the configured timeouts
    - Retry with backoff: transport errors and 5xx replies are retried for
      the same credential before the probe is failed
    - Connection pooling: one shared ``httpx.AsyncClient`` for all probes
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout_seconds: float = 5.0,
        connect_timeout_seconds: float = 3.0,
        max_connections: int = 100,
        retry_max_attempts: int = 3,
        retry_base_delay: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: API root (e.g., "https://data4library.kr/api")
            timeout_seconds: Read/write/pool timeout per request
            connect_timeout_seconds: Connect timeout per request
            max_connections: Connection pool size
            retry_max_attempts: Attempts per credential for transient failures
            retry_base_delay: Backoff base delay in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = httpx.Timeout(timeout_seconds, connect=connect_timeout_seconds)
        self._limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=min(20, max_connections),
        )
        self._transport = transport

        self._retry_config = RetryConfig(
            max_attempts=retry_max_attempts,
            base_delay=retry_base_delay,
            max_delay=5.0,
            retryable_exceptions=(httpx.TransportError, UpstreamServerError),
        )

        # HTTP client (created lazily)
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                limits=self._limits,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> LibraryApiClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def check(self, credential: str, library_id: str, book_id: str) -> LoanReply:
        """
        Ask the API whether ``book_id`` can be borrowed at ``library_id``.

        Raises:
            ResponseParseError: If the reply cannot be interpreted
            ProbeTransportError: If the API stays unreachable after retries
        """
        params = {"authKey": credential, "libCode": library_id, "isbn13": book_id}

        async def _make_request() -> httpx.Response:
            response = await self._get_client().get("/bookExist", params=params)
            if response.status_code >= 500:
                raise UpstreamServerError(f"server error {response.status_code}")
            return response

        try:
            response = await retry_with_backoff(_make_request, config=self._retry_config)
        except (httpx.TransportError, UpstreamServerError) as e:
            raise ProbeTransportError(
                library_id, f"availability API unreachable ({type(e).__name__}: {e})"
            ) from e

        if response.status_code in REJECTION_STATUSES:
            return LoanReply.rejected(f"HTTP {response.status_code}")
        if response.status_code != 200:
            raise ResponseParseError(
                library_id, f"unexpected HTTP status {response.status_code}"
            )

        return parse_loan_reply(response.content, library_id)
