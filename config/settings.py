"""
Centralized application settings using Pydantic Settings.

All environment variables are validated at startup. Missing required variables
will raise a ValidationError immediately, preventing the application from starting
with invalid configuration.
"""

from functools import lru_cache
from typing import Dict, Literal, Optional, Union

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # AstrologyAPI Configuration
    astrology_api_user_id: str
    astrology_api_key: str
    astrology_api_base_url: str = "https://json.astrologyapi.com/v1"

    # Kit (mailing list) Configuration
    kit_api_key: str
    kit_base_url: str = "https://api.kit.com"
    # Tag key (e.g. "SUN_Gemini") -> Kit tag id, supplied as a JSON object
    kit_tag_map: Dict[str, Union[int, str]] = Field(
        default_factory=dict, validation_alias="KIT_TAG_MAP_JSON"
    )

    # Provider selection
    location_provider: Literal["astrologyapi", "nominatim"] = "astrologyapi"
    timezone_provider: Literal["astrologyapi", "timezonefinder"] = "astrologyapi"
    geocoder_user_agent: str = "big-three-placements"

    # Chart Configuration
    default_country: str = "Australia"
    house_system: str = "placidus"
    request_timeout_seconds: float = 30.0

    # Application Configuration
    frontend_url: str = "http://localhost:3000"
    log_level: str = "INFO"

    # Optional: Additional CORS origins (comma-separated)
    additional_cors_origins: Optional[str] = None

    @property
    def cors_origins(self) -> list[str]:
        """Get list of allowed CORS origins."""
        origins = [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
        if self.frontend_url and self.frontend_url not in origins:
            origins.append(self.frontend_url)
        if self.additional_cors_origins:
            origins.extend(
                origin.strip()
                for origin in self.additional_cors_origins.split(",")
                if origin.strip()
            )
        return origins

    @property
    def tag_ids(self) -> Dict[str, str]:
        """Tag map with ids normalized to strings."""
        return {key: str(value) for key, value in self.kit_tag_map.items()}


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are validated on first call. Subsequent calls return the cached instance.
    This ensures environment variables are validated exactly once at startup.

    Returns:
        Settings: Validated application settings

    Raises:
        pydantic.ValidationError: If required environment variables are missing
    """
    return Settings()
