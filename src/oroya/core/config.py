from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Oroya API"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Database
    database_url: str = "sqlite+aiosqlite:///./oroya.db"
    auto_migrate: bool = True  # Run alembic upgrade head on startup

    # CORS
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Storage
    storage_dir: Path = Path("storage")
    max_upload_size: int = 10 * 1024 * 1024
    max_upload_files: int = 10
    max_image_upload_size: int = 5 * 1024 * 1024
    max_image_upload_files: int = 5

    # Image processing
    thumbnail_size: int = 200
    thumbnail_quality: int = 70
    compression_quality: int = 80
    compress_max_width: int = 1920
    compress_max_height: int = 1080

    # Request logging and live stream
    request_logging_enabled: bool = True
    log_stream_queue_size: int = 100

    # Health
    health_cache_ttl: int = 10  # seconds

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("compression_quality", "thumbnail_quality")
    @classmethod
    def validate_quality(cls, v: int) -> int:
        if not 1 <= v <= 95:
            raise ValueError("JPEG quality must be between 1 and 95")
        return v

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
