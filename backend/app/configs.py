"""Application settings loaded from environment variables.

Defines all environment-driven configuration used by the leads API.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration model for the application."""

    # PostgreSQL configuration
    DATABASE_URL: str

    # Pipeline parameters
    PIPELINE_TIMEZONE: str = "Europe/Paris"
    SEED_DEMO_LEADS: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    # API parameters
    ROOT_PATH_BACKEND: str = ""
    ALLOWED_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
