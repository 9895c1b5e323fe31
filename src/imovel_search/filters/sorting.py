"""Column sorting for listing tables."""

from collections.abc import Iterable

from imovel_search.models import PropertyRecord, SortDirection, SortSpec


def _sort_key(value: object) -> object:
    if isinstance(value, str):
        return value.lower()
    return value


def sort_by(records: Iterable[PropertyRecord], spec: SortSpec | None) -> list[PropertyRecord]:
    """Stable sort by one field.

    Strings compare case-insensitively. Listings with no value for the field
    go last in both directions.
    """
    candidates = list(records)
    if spec is None:
        return candidates

    present = [r for r in candidates if getattr(r, spec.field) is not None]
    missing = [r for r in candidates if getattr(r, spec.field) is None]

    # reverse=True keeps equal keys in input order, so desc stays stable
    present.sort(
        key=lambda r: _sort_key(getattr(r, spec.field)),
        reverse=spec.direction is SortDirection.DESC,
    )
    return present + missing
