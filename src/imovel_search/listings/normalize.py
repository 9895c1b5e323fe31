"""Flatten raw listing rows from the backend export into PropertyRecords.

Rows arrive as the backend returns them: operation and property type may be
joined relations (``{"tipo": "Casa"}``) or plain strings, photos a
comma-separated string, numbers as strings. Everything downstream assumes the
flat PropertyRecord shape.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Final

from pydantic import ValidationError

from imovel_search.logging import get_logger
from imovel_search.models import PropertyRecord

logger = get_logger(__name__)

_RELATION_FIELDS: Final = ("operacao", "tipo_imovel")


def flatten_relation(value: object) -> str:
    """Reduce a joined relation (``{"tipo": ...}``) or plain value to its string."""
    if isinstance(value, Mapping):
        tipo = value.get("tipo")
        return str(tipo) if tipo else ""
    if value is None:
        return ""
    return str(value)


def normalize_row(row: Mapping[str, Any]) -> PropertyRecord | None:
    """Build a PropertyRecord from one raw row.

    Returns:
        The record, or None when the row has no usable id.
    """
    data = dict(row)
    for key in _RELATION_FIELDS:
        if key in data:
            data[key] = flatten_relation(data[key])

    if data.get("id") in (None, ""):
        logger.warning("listing_row_missing_id", titulo=data.get("titulo"))
        return None

    try:
        return PropertyRecord.model_validate(data)
    except ValidationError as e:
        logger.warning("listing_row_invalid", listing_id=data.get("id"), error=str(e))
        return None


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> list[PropertyRecord]:
    """Normalize a batch of rows, dropping (and counting) unusable ones."""
    records: list[PropertyRecord] = []
    skipped = 0
    for row in rows:
        record = normalize_row(row) if isinstance(row, Mapping) else None
        if record is None:
            skipped += 1
        else:
            records.append(record)

    if skipped:
        logger.info("listing_rows_skipped", skipped=skipped, kept=len(records))
    return records


def merge_unique(*batches: Iterable[PropertyRecord]) -> list[PropertyRecord]:
    """Concatenate batches keeping the first occurrence of each listing id.

    A broker's own listings come first, then listings shared through
    partnerships, which may repeat ids already seen.
    """
    merged: dict[str, PropertyRecord] = {}
    for batch in batches:
        for record in batch:
            merged.setdefault(record.id, record)
    return list(merged.values())
