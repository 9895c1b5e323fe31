"""Query-string parsing for the search API.

Keys follow the site's URLs (``tipo``, ``operacao``, ``q``, ``price``,
``cidade``...). Invalid values are dropped and treated as "no filter" rather
than failing the request.
"""

from __future__ import annotations

from typing import Annotated, Final

from fastapi import Depends, Query, Request

from imovel_search.config import Settings
from imovel_search.models import (
    SORTABLE_FIELDS,
    FilterSpec,
    GeoPoint,
    SearchRequest,
    SortDirection,
    SortSpec,
)
from imovel_search.utils.coercion import parse_optional_float, parse_optional_int

# Options of the "Faixa de Preço" select on the search page.
PRICE_PRESETS: Final = (
    "0-200000",
    "200000-500000",
    "500000-1000000",
    "1000000-2000000",
    "2000000-100000000",
)

VALID_DIRECTIONS: Final = {d.value for d in SortDirection}


def parse_price_range(value: str | None) -> tuple[float | None, float | None]:
    """Parse a ``"min-max"`` price preset; either side may be empty or invalid."""
    if not value or "-" not in value:
        return None, None
    low, _, high = value.strip().partition("-")
    return parse_optional_float(low), parse_optional_float(high)


def parse_sort(field: str | None, direction: str | None) -> SortSpec | None:
    """Build a SortSpec from ``sort``/``dir`` params, None if the field is not sortable."""
    if not field or field.strip() not in SORTABLE_FIELDS:
        return None
    cleaned = (direction or "").strip().lower()
    return SortSpec(
        field=field.strip(),
        direction=SortDirection(cleaned) if cleaned in VALID_DIRECTIONS else SortDirection.ASC,
    )


def parse_center(lat: str | None, lon: str | None) -> GeoPoint | None:
    """Search center from ``lat``/``lon``, None unless both parse and are in range."""
    latitude = parse_optional_float(lat)
    longitude = parse_optional_float(lon)
    if latitude is None or longitude is None:
        return None
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        return None
    return GeoPoint(latitude=latitude, longitude=longitude)


def build_search_request(
    settings: Settings,
    *,
    operacao: list[str] | None = None,
    tipo: list[str] | None = None,
    cidade: list[str] | None = None,
    bairro: list[str] | None = None,
    q: str | None = None,
    price: str | None = None,
    min_price: str | None = None,
    max_price: str | None = None,
    min_area: str | None = None,
    max_area: str | None = None,
    quartos: str | None = None,
    banheiros: str | None = None,
    vagas: str | None = None,
    lat: str | None = None,
    lon: str | None = None,
    raio: str | None = None,
    sort: str | None = None,
    direction: str | None = None,
    page: str | None = None,
    per_page: str | None = None,
    exempt: list[str] | None = None,
) -> SearchRequest:
    """Map raw query values to a SearchRequest.

    Explicit ``min_price``/``max_price`` override the bounds of a ``price`` preset.
    """
    preset_min, preset_max = parse_price_range(price)
    explicit_min = parse_optional_float(min_price)
    explicit_max = parse_optional_float(max_price)

    filters = FilterSpec.model_validate(
        {
            "operations": operacao or [],
            "types": tipo or [],
            "cities": cidade or [],
            "neighborhoods": bairro or [],
            "search_query": q,
            "min_price": explicit_min if explicit_min is not None else preset_min,
            "max_price": explicit_max if explicit_max is not None else preset_max,
            "min_area": min_area,
            "max_area": max_area,
            "bedrooms": quartos,
            "bathrooms": banheiros,
            "parking": vagas,
        }
    )

    radius = parse_optional_float(raio)

    return SearchRequest(
        filters=filters,
        center=parse_center(lat, lon),
        radius_km=radius if radius is not None and radius > 0 else None,
        sort=parse_sort(sort, direction),
        page=max(1, parse_optional_int(page) or 1),
        per_page=settings.clamp_per_page(parse_optional_int(per_page)),
        radius_exempt_ids=frozenset(i for i in exempt or [] if i),
    )


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------


def parse_search(
    request: Request,
    operacao: list[str] = Query(default=[]),
    tipo: list[str] = Query(default=[]),
    cidade: list[str] = Query(default=[]),
    bairro: list[str] = Query(default=[]),
    q: str | None = None,
    price: str | None = None,
    min_price: str | None = None,
    max_price: str | None = None,
    min_area: str | None = None,
    max_area: str | None = None,
    quartos: str | None = None,
    banheiros: str | None = None,
    vagas: str | None = None,
    lat: str | None = None,
    lon: str | None = None,
    raio: str | None = None,
    sort: str | None = None,
    dir: str | None = None,
    page: str | None = None,
    per_page: str | None = None,
    parceria: list[str] = Query(default=[]),
) -> SearchRequest:
    """FastAPI dependency that parses query params into a SearchRequest."""
    settings: Settings = request.app.state.settings
    return build_search_request(
        settings,
        operacao=operacao,
        tipo=tipo,
        cidade=cidade,
        bairro=bairro,
        q=q,
        price=price,
        min_price=min_price,
        max_price=max_price,
        min_area=min_area,
        max_area=max_area,
        quartos=quartos,
        banheiros=banheiros,
        vagas=vagas,
        lat=lat,
        lon=lon,
        raio=raio,
        sort=sort,
        direction=dir,
        page=page,
        per_page=per_page,
        exempt=parceria,
    )


SearchDep = Annotated[SearchRequest, Depends(parse_search)]
