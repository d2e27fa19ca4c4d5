"""Application configuration using Pydantic Settings."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Backends
    storage_backend: Literal["json", "database"] = "json"
    blob_backend: Literal["local", "s3"] = "local"

    # Database
    database_url: str | None = None

    # JSON file store
    data_file: str = "data.json"
    seed_demo_data: bool = True

    # Local uploads
    upload_dir: str = "uploads"
    public_base_url: str = "http://localhost:3005"

    # S3/MinIO
    s3_endpoint_url: str | None = None
    s3_access_key_id: str | None = None
    s3_secret_access_key: str | None = None
    s3_bucket_name: str = "portfolio-manager"
    s3_region: str = "us-east-1"
    s3_public_url: str | None = None
    s3_folder: str = "portfolio-manager"

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3005
    cors_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
