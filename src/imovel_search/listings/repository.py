"""Read-only listing source backed by a JSON export of the listings table."""

import json
from pathlib import Path
from typing import Any

from imovel_search.listings.normalize import merge_unique, normalize_rows
from imovel_search.logging import get_logger
from imovel_search.models import PropertyRecord

logger = get_logger(__name__)


class ListingSourceError(RuntimeError):
    """The listing export could not be read or has an unexpected shape."""


def _extract_rows(payload: Any) -> list[Any]:
    # Either a bare array or the backend client's {"data": [...], "error": null} envelope
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]  # type: ignore[no-any-return]
    raise ListingSourceError("expected a JSON array of listings or an object with a 'data' array")


class ListingRepository:
    """Load approved listings once and hand out the normalized records."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._records: list[PropertyRecord] | None = None

    def load(self) -> list[PropertyRecord]:
        """Read and normalize the export, replacing any previously loaded records.

        Raises:
            ListingSourceError: If the file is missing, not JSON, or not a listing array.
        """
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ListingSourceError(f"Failed to load {self.path}: {e}") from e

        rows = _extract_rows(payload)
        records = merge_unique(normalize_rows(rows))
        self._records = records

        logger.info(
            "listings_loaded",
            path=str(self.path),
            rows=len(rows),
            records=len(records),
        )
        return records

    @property
    def records(self) -> list[PropertyRecord]:
        """Loaded records, loading on first access."""
        if self._records is None:
            return self.load()
        return self._records
