"""Application configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the outdoor assessment service."""
    model_config = SettingsConfigDict(env_prefix="OUTDOOR_", extra="ignore")

    forecast_source: str = "open_meteo"  # options: open_meteo
    open_meteo_url: str = "https://api.open-meteo.com/v1/forecast"
    request_timeout_seconds: float = 10.0
    timezone: str = "auto"
    api_key: str | None = None
    log_level: str = "INFO"

    @field_validator("open_meteo_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @field_validator("log_level", mode="after")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        """Accept lower-case level names from the environment."""
        return v.upper()


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
