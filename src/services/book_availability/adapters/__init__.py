"""Adapters to external systems used by the book availability service."""

from .library_api import DEFAULT_API_BASE_URL, LibraryApiClient, parse_loan_reply

__all__ = ["DEFAULT_API_BASE_URL", "LibraryApiClient", "parse_loan_reply"]
