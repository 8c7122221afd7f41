"""Shared fixtures for book availability tests."""

from __future__ import annotations

import pytest

from src.services.book_availability.core.models import GeoPoint, LibraryRecord


@pytest.fixture
def seoul() -> GeoPoint:
    """Seoul City Hall."""
    return GeoPoint(latitude=37.5665, longitude=126.9780)


@pytest.fixture
def library_a() -> LibraryRecord:
    """About 2 km north of Seoul City Hall."""
    return LibraryRecord(id="A", name="Jongno Library", latitude="37.5845", longitude="126.9780")


@pytest.fixture
def library_b() -> LibraryRecord:
    """About 15 km north of Seoul City Hall."""
    return LibraryRecord(id="B", name="Uijeongbu Library", latitude="37.7014", longitude="126.9780")
