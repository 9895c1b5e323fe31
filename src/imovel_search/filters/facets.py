"""Sidebar facet values derived from the candidate listings."""

from collections.abc import Iterable

from imovel_search.filters.predicates import operation_matches
from imovel_search.models import Facets, Operation, PropertyRecord


def operation_categories(operacao: str) -> list[Operation]:
    """Split a (possibly compound) operation into its base categories."""
    return [op for op in Operation if operation_matches(operacao, op.value)]


def _distinct(values: Iterable[str], *, case_sensitive: bool) -> tuple[str, ...]:
    seen: dict[str, str] = {}
    for value in values:
        value = value.strip()
        if not value:
            continue
        key = value if case_sensitive else value.lower()
        seen.setdefault(key, value)
    return tuple(sorted(seen.values(), key=lambda v: (v.lower(), v)))


def collect_facets(
    records: Iterable[PropertyRecord], selected_cities: Iterable[str] = ()
) -> Facets:
    """Collect distinct cities, neighborhoods, operations and types.

    Cities and types are deduplicated case-insensitively (first spelling
    wins) because their filters ignore case; neighborhoods are matched
    exactly, so they are kept as-is. When cities are selected, only their
    neighborhoods are offered.
    """
    candidates = list(records)
    cities = {c.lower() for c in selected_cities if c.strip()}

    neighborhood_source = (
        [r for r in candidates if r.cidade.lower() in cities] if cities else candidates
    )
    operations = {op for r in candidates for op in operation_categories(r.operacao)}

    return Facets(
        cities=_distinct((r.cidade for r in candidates), case_sensitive=False),
        neighborhoods=_distinct((r.bairro for r in neighborhood_source), case_sensitive=True),
        operations=tuple(op.value for op in Operation if op in operations),
        types=_distinct((r.tipo_imovel for r in candidates), case_sensitive=False),
    )
