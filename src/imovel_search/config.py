"""Application configuration using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from imovel_search.filters.engine import STATE_RADIUS_KM


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="IMOVEL_SEARCH_",
        extra="ignore",
    )

    # Listing source
    listings_path: str = Field(
        default="data/anuncios.json",
        description="JSON export of approved listings (array or {'data': [...]})",
    )

    # Search
    state_radius_km: float = Field(
        default=STATE_RADIUS_KM,
        gt=0,
        description="Radius at or above which the radius filter is disabled (state-wide)",
    )
    default_per_page: int = Field(default=24, ge=1, le=100)
    max_per_page: int = Field(default=100, ge=1)

    # Web API
    web_port: int = Field(default=8000, description="Web server port")
    web_host: str = Field(default="0.0.0.0", description="Web server host")

    # Logging
    json_logs: bool = Field(default=False, description="Emit JSON logs instead of console output")
    log_level: str = Field(default="info", description="debug, info, warning or error")

    def clamp_per_page(self, per_page: int | None) -> int:
        """Page size to use for a request, falling back to the default.

        The result never exceeds ``max_per_page``, even when the default does.
        """
        if per_page is None:
            per_page = self.default_per_page
        return max(1, min(self.max_per_page, per_page))
