"""Search API routes."""

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from imovel_search.filters.engine import PropertyFilterEngine
from imovel_search.filters.facets import collect_facets
from imovel_search.listings import ListingRepository
from imovel_search.logging import get_logger
from imovel_search.web.filters import SearchDep

logger = get_logger(__name__)

router = APIRouter()


def _get_repository(request: Request) -> ListingRepository:
    return request.app.state.repository  # type: ignore[no-any-return]


def _get_engine(request: Request) -> PropertyFilterEngine:
    return request.app.state.engine  # type: ignore[no-any-return]


@router.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse({"status": "ok"})


@router.get("/api/imoveis")
async def search_listings(request: Request, search: SearchDep) -> JSONResponse:
    """Filtered, sorted page of listings."""
    try:
        records = _get_repository(request).records
        result = _get_engine(request).search(records, search)
        return JSONResponse(result.model_dump(mode="json"))
    except Exception:
        logger.error("search_query_failed", exc_info=True)
        return JSONResponse(
            {"error": "Failed to load properties. Please try again."}, status_code=500
        )


@router.get("/api/facets")
async def listing_facets(
    request: Request, cidade: list[str] = Query(default=[])
) -> JSONResponse:
    """Sidebar options: cities, neighborhoods (of the selected cities), operations, types."""
    try:
        facets = collect_facets(_get_repository(request).records, selected_cities=cidade)
        return JSONResponse(facets.model_dump(mode="json"))
    except Exception:
        logger.error("facets_query_failed", exc_info=True)
        return JSONResponse(
            {"error": "Failed to load filter options. Please try again."}, status_code=500
        )
