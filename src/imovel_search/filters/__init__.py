"""Listing filters: field predicates, radius, sorting and the search pipeline."""

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from imovel_search.filters.engine import PropertyFilterEngine, paginate  # noqa: F401
    from imovel_search.filters.facets import collect_facets  # noqa: F401
    from imovel_search.filters.geo import (  # noqa: F401
        RadiusFilter,
        distance_km,
        filter_by_radius,
    )
    from imovel_search.filters.predicates import PredicateFilter, apply_filters  # noqa: F401
    from imovel_search.filters.sorting import sort_by  # noqa: F401

__all__ = [
    "PredicateFilter",
    "PropertyFilterEngine",
    "RadiusFilter",
    "apply_filters",
    "collect_facets",
    "distance_km",
    "filter_by_radius",
    "paginate",
    "sort_by",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "apply_filters": (".predicates", "apply_filters"),
    "collect_facets": (".facets", "collect_facets"),
    "distance_km": (".geo", "distance_km"),
    "filter_by_radius": (".geo", "filter_by_radius"),
    "paginate": (".engine", "paginate"),
    "PredicateFilter": (".predicates", "PredicateFilter"),
    "PropertyFilterEngine": (".engine", "PropertyFilterEngine"),
    "RadiusFilter": (".geo", "RadiusFilter"),
    "sort_by": (".sorting", "sort_by"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr = _LAZY_IMPORTS[name]
        mod = importlib.import_module(module_path, __name__)
        val = getattr(mod, attr)
        globals()[name] = val  # Cache so __getattr__ is only called once
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
