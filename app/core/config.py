"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Coach Match"
    VERSION: str = "0.1.0"

    DEBUG: bool = False
    ENVIRONMENT: str = "local"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = ""
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_DBNAME: str = "postgres"

    # Full URL override (takes precedence over the individual parts)
    DATABASE_URL: Optional[str] = None

    # Reverse geocoding (OpenStreetMap Nominatim)
    GEOCODING_BASE_URL: str = "https://nominatim.openstreetmap.org"
    GEOCODING_USER_AGENT: str = "UniversalAthleticsApp"
    GEOCODING_TIMEOUT_SECONDS: float = 5.0

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (f"postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}@{self.DATABASE_HOST}"
                f":{self.DATABASE_PORT}/{self.DATABASE_DBNAME}")


# Global settings instance
settings = Settings()
