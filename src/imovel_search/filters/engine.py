"""Search pipeline: predicates, radius, sort, then the page window."""

import math
from collections.abc import Sequence
from typing import Final

from imovel_search.filters.geo import RadiusFilter, radius_is_set
from imovel_search.filters.predicates import PredicateFilter
from imovel_search.filters.sorting import sort_by
from imovel_search.logging import get_logger
from imovel_search.models import PropertyRecord, SearchRequest, SearchResult

logger = get_logger(__name__)

# "Estado" option in the radius picker: anything this wide means no radius at all.
STATE_RADIUS_KM: Final = 999.0


def paginate(items: Sequence[PropertyRecord], page: int, per_page: int) -> SearchResult:
    """Cut one page out of an ordered result, clamping ``page`` into range."""
    total = len(items)
    total_pages = math.ceil(total / per_page) if total > 0 else 1
    page = min(max(1, page), total_pages)
    start = (page - 1) * per_page
    return SearchResult(
        items=tuple(items[start : start + per_page]),
        total=total,
        page=page,
        per_page=per_page,
        total_pages=total_pages,
    )


class PropertyFilterEngine:
    """Run a SearchRequest over an in-memory candidate list."""

    def __init__(self, *, state_radius_km: float = STATE_RADIUS_KM) -> None:
        self.state_radius_km = state_radius_km

    def effective_radius(self, radius_km: float | None) -> float | None:
        """Radius to apply, or None when unset, non-positive or at the state-wide setting."""
        if radius_km is None or not radius_is_set(radius_km):
            return None
        if radius_km < 0 or radius_km >= self.state_radius_km:
            return None
        return radius_km

    def filter_properties(
        self, records: Sequence[PropertyRecord], request: SearchRequest
    ) -> list[PropertyRecord]:
        """Apply field predicates then the radius, preserving input order."""
        matching = PredicateFilter(request.filters).filter_properties(records)

        radius = RadiusFilter(request.center, self.effective_radius(request.radius_km))
        if not radius.active:
            return matching
        if not request.radius_exempt_ids:
            return radius.filter_properties(matching)

        exempt = request.radius_exempt_ids
        kept = [r for r in matching if r.id in exempt or radius.is_within(r)]

        logger.info(
            "radius_filter_complete",
            total=len(matching),
            kept=len(kept),
            exempt=sum(1 for r in kept if r.id in exempt),
            radius_km=radius.radius_km,
        )
        return kept

    def search(self, records: Sequence[PropertyRecord], request: SearchRequest) -> SearchResult:
        """Filter, sort and paginate.

        Args:
            records: Full candidate list, already fetched and normalized.
            request: Filters, optional radius, sort and page window.

        Returns:
            The requested page plus totals for the whole filtered set.
        """
        ordered = sort_by(self.filter_properties(records, request), request.sort)
        result = paginate(ordered, request.page, request.per_page)

        logger.info(
            "search_complete",
            candidates=len(records),
            total=result.total,
            page=result.page,
            total_pages=result.total_pages,
            sort=request.sort.field if request.sort else None,
        )
        return result
