"""Field predicates for listing search.

Each predicate is built only when its FilterSpec field is set, so an empty
spec yields no predicates and every listing passes. Active predicates are
combined with AND.
"""

from collections.abc import Callable, Iterable
from typing import Final

from imovel_search.logging import get_logger
from imovel_search.models import ROOM_COUNT_AT_LEAST, FilterSpec, PropertyRecord

logger = get_logger(__name__)

Predicate = Callable[[PropertyRecord], bool]

# Rental listings are spelled with and without the cedilla ("locacao", "locação").
_RENTAL_SELECTIONS: Final = frozenset({"locacao", "locação"})
_RENTAL_MARKERS: Final = ("locac", "locaç")


def operation_matches(record_operation: str, selected: str) -> bool:
    """Check a listing's operation against one selected operation.

    Compound operations match each part, so "venda/locação" satisfies both
    "venda" and "locacao".
    """
    operation = record_operation.lower()
    if selected in _RENTAL_SELECTIONS:
        return any(marker in operation for marker in _RENTAL_MARKERS)
    return selected in operation


def room_count_matches(value: int | None, wanted: int) -> bool:
    """Exact match, except the 4 sentinel which means "4 or more"."""
    actual = value or 0
    if wanted == ROOM_COUNT_AT_LEAST:
        return actual >= wanted
    return actual == wanted


def in_range(value: float, low: float | None, high: float | None) -> bool:
    """Inclusive range check where a None bound is unbounded."""
    if low is not None and value < low:
        return False
    return not (high is not None and value > high)


def _search_text(record: PropertyRecord) -> tuple[str, ...]:
    return (
        record.cidade,
        record.bairro,
        record.titulo,
        record.logradouro,
        record.tipo_imovel,
        record.caracteristicas,
    )


def build_predicates(spec: FilterSpec) -> list[tuple[str, Predicate]]:
    """Build the (name, predicate) pairs for every active field of ``spec``."""
    predicates: list[tuple[str, Predicate]] = []

    if spec.cities:
        cities = {c.lower() for c in spec.cities}
        predicates.append(("cities", lambda r: r.cidade.lower() in cities))

    if spec.neighborhoods:
        neighborhoods = set(spec.neighborhoods)
        predicates.append(("neighborhoods", lambda r: r.bairro in neighborhoods))

    if spec.operations:
        operations = spec.operations
        predicates.append(
            (
                "operations",
                lambda r: any(operation_matches(r.operacao, op) for op in operations),
            )
        )

    if spec.types:
        types = {t.lower() for t in spec.types}
        predicates.append(("types", lambda r: r.tipo_imovel.lower() in types))

    if spec.search_query:
        query = spec.search_query.lower()
        predicates.append(
            (
                "search_query",
                lambda r: any(query in text.lower() for text in _search_text(r)),
            )
        )

    if spec.bedrooms is not None:
        bedrooms = spec.bedrooms
        predicates.append(("bedrooms", lambda r: room_count_matches(r.quartos, bedrooms)))

    if spec.bathrooms is not None:
        bathrooms = spec.bathrooms
        predicates.append(("bathrooms", lambda r: room_count_matches(r.banheiros, bathrooms)))

    if spec.parking is not None:
        parking = spec.parking
        predicates.append(("parking", lambda r: room_count_matches(r.vagas, parking)))

    if spec.min_price is not None or spec.max_price is not None:
        min_price, max_price = spec.min_price, spec.max_price
        predicates.append(
            ("price", lambda r: in_range(r.effective_price, min_price, max_price))
        )

    if spec.min_area is not None or spec.max_area is not None:
        min_area, max_area = spec.min_area, spec.max_area
        predicates.append(
            ("area", lambda r: in_range(r.area_priv or 0, min_area, max_area))
        )

    return predicates


class PredicateFilter:
    """Filter listings by every active field of a FilterSpec."""

    def __init__(self, spec: FilterSpec) -> None:
        """Initialize the predicate filter.

        Args:
            spec: Filter state to apply.
        """
        self.spec = spec
        self._predicates = build_predicates(spec)

    @property
    def active(self) -> list[str]:
        return [name for name, _ in self._predicates]

    def matches(self, record: PropertyRecord) -> bool:
        return all(predicate(record) for _, predicate in self._predicates)

    def filter_properties(self, records: Iterable[PropertyRecord]) -> list[PropertyRecord]:
        """Filter listings by the spec.

        Args:
            records: Candidate listings, already fetched and normalized.

        Returns:
            Listings passing every active predicate, in input order.
        """
        candidates = list(records)
        if not self._predicates:
            return candidates

        matching = [r for r in candidates if self.matches(r)]

        logger.info(
            "predicate_filter_complete",
            total_properties=len(candidates),
            matching=len(matching),
            active_filters=self.active,
        )
        return matching


def apply_filters(
    records: Iterable[PropertyRecord], spec: FilterSpec
) -> list[PropertyRecord]:
    """Functional form of :class:`PredicateFilter`."""
    return PredicateFilter(spec).filter_properties(records)
