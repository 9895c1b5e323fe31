"""Pydantic models for listings, filter/sort specs and search results."""

from enum import StrEnum
from typing import Final, Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator

from imovel_search.utils.coercion import parse_optional_float, parse_optional_int

# Room-count filters treat this value as "N or more" (the "4+" button in the sidebar).
ROOM_COUNT_AT_LEAST: Final = 4


class Operation(StrEnum):
    """Base commercial operation categories a listing can be offered under."""

    VENDA = "venda"
    LOCACAO = "locacao"
    TEMPORADA = "temporada"


class SortDirection(StrEnum):
    """Sort direction for listing tables."""

    ASC = "asc"
    DESC = "desc"


class GeoPoint(BaseModel):
    """A WGS84 coordinate in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class LocatedEntity(Protocol):
    """Anything carrying optional latitude/longitude attributes."""

    @property
    def latitude(self) -> float | None: ...

    @property
    def longitude(self) -> float | None: ...


def _coerce_text(v: object) -> str:
    if v is None:
        return ""
    if isinstance(v, list | tuple):
        return ", ".join(str(item) for item in v if item)
    return str(v)


class PropertyRecord(BaseModel):
    """A flat listing row, already normalized at the ingestion boundary.

    Numeric fields are coerced permissively: anything that does not parse
    becomes None instead of failing validation.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    cod_imovel: int | None = None
    titulo: str = ""
    logradouro: str = ""
    cidade: str = ""
    bairro: str = ""
    operacao: str = ""
    tipo_imovel: str = ""
    quartos: int | None = None
    banheiros: int | None = None
    vagas: int | None = None
    valor_venda: float | None = None
    valor_locacao: float | None = None
    valor_diaria: float | None = None
    valor_mensal: float | None = None
    area_priv: float | None = None
    caracteristicas: str = ""
    latitude: float | None = None
    longitude: float | None = None
    fotos: tuple[str, ...] = ()
    user_id: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: object) -> object:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator(
        "titulo",
        "logradouro",
        "cidade",
        "bairro",
        "operacao",
        "tipo_imovel",
        "caracteristicas",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: object) -> str:
        return _coerce_text(v)

    @field_validator("quartos", "banheiros", "vagas", "cod_imovel", mode="before")
    @classmethod
    def coerce_count(cls, v: object) -> int | None:
        parsed = parse_optional_int(v)
        if parsed is None or parsed < 0:
            return None
        return parsed

    @field_validator(
        "valor_venda",
        "valor_locacao",
        "valor_diaria",
        "valor_mensal",
        "area_priv",
        "latitude",
        "longitude",
        mode="before",
    )
    @classmethod
    def coerce_number(cls, v: object) -> float | None:
        return parse_optional_float(v)

    @field_validator("fotos", mode="before")
    @classmethod
    def split_photos(cls, v: object) -> tuple[str, ...]:
        if not v:
            return ()
        if isinstance(v, str):
            return tuple(url.strip() for url in v.split(",") if url.strip())
        if isinstance(v, list | tuple):
            return tuple(str(url) for url in v if url)
        return ()

    @property
    def effective_price(self) -> float:
        """Price used for range filtering: sale, then rent, then daily rate."""
        return self.valor_venda or self.valor_locacao or self.valor_diaria or 0

    @property
    def location(self) -> GeoPoint | None:
        """Coordinates as a GeoPoint, or None when either axis is missing."""
        if self.latitude is None or self.longitude is None:
            return None
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)


SORTABLE_FIELDS: Final = frozenset(PropertyRecord.model_fields) - {"fotos"}


def _coerce_selection(v: object) -> tuple[str, ...]:
    if v is None:
        return ()
    if isinstance(v, str):
        v = [v]
    if not isinstance(v, list | tuple | set | frozenset):
        return ()
    return tuple(str(item) for item in v if item is not None and str(item).strip())


class FilterSpec(BaseModel):
    """Sidebar/search-bar filter state.

    Every field defaults to "no constraint": empty selections and None bounds
    never exclude a listing.
    """

    model_config = ConfigDict(frozen=True)

    operations: tuple[str, ...] = ()
    types: tuple[str, ...] = ()
    cities: tuple[str, ...] = ()
    neighborhoods: tuple[str, ...] = ()
    bedrooms: int | None = None
    bathrooms: int | None = None
    parking: int | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_area: float | None = None
    max_area: float | None = None
    search_query: str = ""

    @field_validator("types", "cities", "neighborhoods", mode="before")
    @classmethod
    def coerce_selection(cls, v: object) -> tuple[str, ...]:
        return _coerce_selection(v)

    @field_validator("operations", mode="before")
    @classmethod
    def coerce_operations(cls, v: object) -> tuple[str, ...]:
        return tuple(op.strip().lower() for op in _coerce_selection(v))

    @field_validator("bedrooms", "bathrooms", "parking", mode="before")
    @classmethod
    def coerce_room_count(cls, v: object) -> int | None:
        parsed = parse_optional_int(v)
        if parsed is None or parsed < 0:
            return None
        return parsed

    @field_validator("min_price", "max_price", "min_area", "max_area", mode="before")
    @classmethod
    def coerce_bound(cls, v: object) -> float | None:
        return parse_optional_float(v)

    @field_validator("search_query", mode="before")
    @classmethod
    def clean_query(cls, v: object) -> str:
        if v is None:
            return ""
        return str(v).strip()

    def active_filters(self) -> list[str]:
        """Names of the fields that currently constrain the result set."""
        return [
            name
            for name in type(self).model_fields
            if getattr(self, name) not in (None, (), "")
        ]

    @property
    def is_empty(self) -> bool:
        return not self.active_filters()


class SortSpec(BaseModel):
    """Column sort for listing tables."""

    model_config = ConfigDict(frozen=True)

    field: str
    direction: SortDirection = SortDirection.ASC

    @field_validator("field")
    @classmethod
    def check_sortable(cls, v: str) -> str:
        if v not in SORTABLE_FIELDS:
            raise ValueError(f"cannot sort by {v!r}")
        return v


class SearchRequest(BaseModel):
    """Everything one search needs: filters, optional radius, sort and page window."""

    model_config = ConfigDict(frozen=True)

    filters: FilterSpec = Field(default_factory=FilterSpec)
    center: GeoPoint | None = None
    radius_km: float | None = None
    sort: SortSpec | None = None
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=24, ge=1)
    # Listings kept regardless of distance (accepted partnerships).
    radius_exempt_ids: frozenset[str] = frozenset()


class SearchResult(BaseModel):
    """One page of filtered, sorted listings."""

    model_config = ConfigDict(frozen=True)

    items: tuple[PropertyRecord, ...]
    total: int
    page: int
    per_page: int
    total_pages: int


class Facets(BaseModel):
    """Distinct values offered as sidebar checkboxes."""

    model_config = ConfigDict(frozen=True)

    cities: tuple[str, ...] = ()
    neighborhoods: tuple[str, ...] = ()
    operations: tuple[str, ...] = ()
    types: tuple[str, ...] = ()
