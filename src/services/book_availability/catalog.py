"""
Library catalog providers.

The production catalog lives in an external keyed store; the engine only
needs a materialized snapshot of it per request.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from .core.errors import InputError
from .core.models import LibraryRecord

logger = logging.getLogger(__name__)


class StaticCatalog:
    """An in-memory catalog snapshot."""

    def __init__(self, records: Iterable[LibraryRecord]):
        self._records = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    async def list_libraries(self) -> Sequence[LibraryRecord]:
        return self._records


def load_catalog_file(path: str | Path) -> StaticCatalog:
    """
    Load a catalog snapshot from a JSON file.

    The file holds an array of store items with ``libCode``, ``libName``,
    ``latitude`` and ``longitude`` attributes. Items without a library code
    are skipped with a warning; coordinates are checked later by the
    distance filter.

    Raises:
        InputError: If the file is not a JSON array
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        try:
            items = json.load(f)
        except json.JSONDecodeError as e:
            raise InputError(f"catalog file {path} is not valid JSON: {e}") from e

    if not isinstance(items, list):
        raise InputError(f"catalog file {path} must contain a JSON array")

    records: list[LibraryRecord] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning(f"Catalog item #{index} is not an object, skipping")
            continue
        try:
            records.append(LibraryRecord.from_item(item))
        except InputError as e:
            logger.warning(f"Catalog item #{index} skipped: {e}")

    logger.info(f"Loaded {len(records)} libraries from {path}")
    return StaticCatalog(records)
