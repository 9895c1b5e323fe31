"""FastAPI application factory for the listing search API."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from imovel_search.config import Settings
from imovel_search.filters.engine import PropertyFilterEngine
from imovel_search.listings import ListingRepository
from imovel_search.logging import configure_logging, get_logger, resolve_level

logger = get_logger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


def create_app(
    settings: Settings | None = None, *, repository: ListingRepository | None = None
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Application settings. Loaded from env if not provided.
        repository: Listing source. Built from ``settings.listings_path`` if not provided.
    """
    if settings is None:
        settings = Settings()

    configure_logging(json_output=settings.json_logs, level=resolve_level(settings.log_level))

    if repository is None:
        repository = ListingRepository(settings.listings_path)
    engine = PropertyFilterEngine(state_radius_km=settings.state_radius_km)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Raises ListingSourceError for an unreadable export, aborting startup
        records = repository.load()
        app.state.repository = repository
        app.state.engine = engine
        app.state.settings = settings
        logger.info("web_server_started", listings=len(records))

        yield

        logger.info("web_server_stopped")

    app = FastAPI(title="Imóvel Search", lifespan=lifespan)

    app.add_middleware(SecurityHeadersMiddleware)

    from imovel_search.web.routes import router

    app.include_router(router)

    return app
