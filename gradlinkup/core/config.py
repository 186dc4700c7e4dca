"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "gradlinkup"
    postgres_password: str = "password"
    postgres_db: str = "gradlinkup"

    # Full SQLAlchemy URL, overrides the postgres_* parts when set
    database_url: str = ""

    # MongoDB (GridFS bucket for resume files)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "gradlinkup_files"
    resume_bucket: str = "resumes"
    max_resume_size_mb: int = 5

    # Base for public resume URLs handed back to clients
    public_base_url: str = "http://localhost:8000"

    # Identity provider tokens (verified only, never issued here)
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_audience: str = "authenticated"

    # Dashboards
    recommendation_limit: int = 5

    # App
    debug: bool = False
    log_level: str = "INFO"

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL"""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def sqlalchemy_url(self) -> str:
        return self.database_url or self.postgres_url

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
