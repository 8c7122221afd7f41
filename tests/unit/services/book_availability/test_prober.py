"""Tests for the availability prober's credential fallback."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, call

import pytest

from src.services.book_availability.core.errors import (
    AllCredentialsExhausted,
    ProbeTransportError,
    ResponseParseError,
)
from src.services.book_availability.core.prober import AvailabilityProber
from src.services.book_availability.core.protocols import LoanReply

CREDENTIALS = ("c1", "c2", "c3")
QUOTA = LoanReply.rejected("API call limit exceeded")


@pytest.fixture
def endpoint():
    """Mock availability endpoint."""
    endpoint = MagicMock()
    endpoint.check = AsyncMock()
    return endpoint


@pytest.fixture
def prober(endpoint) -> AvailabilityProber:
    return AvailabilityProber(endpoint)


class TestAvailabilityProber:
    """Test suite for AvailabilityProber.probe."""

    @pytest.mark.asyncio
    async def test_first_credential_available(self, prober, endpoint) -> None:
        endpoint.check.return_value = LoanReply.definitive(True)

        result = await prober.probe("111001", "9788936434267", CREDENTIALS)

        assert result is True
        endpoint.check.assert_awaited_once_with("c1", "111001", "9788936434267")

    @pytest.mark.asyncio
    async def test_definitive_false_stops_fallback(self, prober, endpoint) -> None:
        endpoint.check.return_value = LoanReply.definitive(False)

        result = await prober.probe("111001", "9788936434267", CREDENTIALS)

        assert result is False
        assert endpoint.check.await_count == 1

    @pytest.mark.asyncio
    async def test_falls_back_after_quota_error(self, prober, endpoint) -> None:
        endpoint.check.side_effect = [QUOTA, LoanReply.definitive(True)]

        result = await prober.probe("111001", "9788936434267", CREDENTIALS)

        assert result is True
        assert endpoint.check.await_args_list == [
            call("c1", "111001", "9788936434267"),
            call("c2", "111001", "9788936434267"),
        ]

    @pytest.mark.asyncio
    async def test_false_after_fallback_is_definitive(self, prober, endpoint) -> None:
        endpoint.check.side_effect = [QUOTA, LoanReply.definitive(False)]

        result = await prober.probe("111001", "9788936434267", CREDENTIALS)

        assert result is False
        assert endpoint.check.await_count == 2

    @pytest.mark.asyncio
    async def test_all_credentials_rejected(self, prober, endpoint) -> None:
        endpoint.check.return_value = QUOTA

        with pytest.raises(AllCredentialsExhausted) as exc_info:
            await prober.probe("111001", "9788936434267", CREDENTIALS)

        assert exc_info.value.library_id == "111001"
        assert exc_info.value.attempts == 3
        assert [c.args[0] for c in endpoint.check.await_args_list] == ["c1", "c2", "c3"]

    @pytest.mark.asyncio
    async def test_no_credentials(self, prober, endpoint) -> None:
        with pytest.raises(AllCredentialsExhausted) as exc_info:
            await prober.probe("111001", "9788936434267", ())

        assert exc_info.value.attempts == 0
        endpoint.check.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_parse_error_is_not_retried_with_next_credential(
        self, prober, endpoint
    ) -> None:
        endpoint.check.side_effect = ResponseParseError("111001", "garbage")

        with pytest.raises(ResponseParseError):
            await prober.probe("111001", "9788936434267", CREDENTIALS)

        assert endpoint.check.await_count == 1

    @pytest.mark.asyncio
    async def test_parse_error_after_rejection(self, prober, endpoint) -> None:
        endpoint.check.side_effect = [QUOTA, ResponseParseError("111001", "garbage")]

        with pytest.raises(ResponseParseError):
            await prober.probe("111001", "9788936434267", CREDENTIALS)

        assert endpoint.check.await_count == 2

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, prober, endpoint) -> None:
        endpoint.check.side_effect = ProbeTransportError("111001", "unreachable")

        with pytest.raises(ProbeTransportError):
            await prober.probe("111001", "9788936434267", CREDENTIALS)

    @pytest.mark.asyncio
    async def test_credentials_are_not_mutated(self, prober, endpoint) -> None:
        endpoint.check.side_effect = [QUOTA, LoanReply.definitive(True)]
        credentials = ["c1", "c2", "c3"]

        await prober.probe("111001", "9788936434267", credentials)

        assert credentials == ["c1", "c2", "c3"]

    @pytest.mark.asyncio
    async def test_each_probe_starts_from_first_credential(self, prober, endpoint) -> None:
        endpoint.check.side_effect = [
            QUOTA,
            LoanReply.definitive(True),
            LoanReply.definitive(True),
        ]

        await prober.probe("111001", "9788936434267", CREDENTIALS)
        await prober.probe("111002", "9788936434267", CREDENTIALS)

        assert endpoint.check.await_args_list[-1] == call("c1", "111002", "9788936434267")

    @pytest.mark.asyncio
    async def test_reply_without_flag_is_parse_error(self, prober, endpoint) -> None:
        endpoint.check.return_value = LoanReply()

        with pytest.raises(ResponseParseError) as exc_info:
            await prober.probe("111001", "9788936434267", CREDENTIALS)

        assert exc_info.value.library_id == "111001"
        assert endpoint.check.await_count == 1

    @pytest.mark.asyncio
    async def test_reply_without_flag_after_rejection(self, prober, endpoint) -> None:
        endpoint.check.side_effect = [QUOTA, LoanReply()]

        with pytest.raises(ResponseParseError):
            await prober.probe("111001", "9788936434267", CREDENTIALS)

        assert endpoint.check.await_count == 2


class TestLoanReply:
    """Test suite for LoanReply."""

    def test_definitive_and_rejection_are_exclusive(self) -> None:
        with pytest.raises(ValueError):
            LoanReply(available=True, rejection="quota exceeded")

    def test_rejection_message_defaults(self) -> None:
        reply = LoanReply.rejected("")

        assert reply.is_rejection
        assert reply.available is None
        assert reply.rejection == "rejected"
