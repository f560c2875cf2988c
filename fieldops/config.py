"""Application configuration using Pydantic Settings"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    environment: str = "development"
    api_host: str = "0.0.0.0"
    api_port: int = 5000

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Redis (session store and login throttling)
    redis_url: str = "redis://localhost:6379/0"

    # Sessions
    session_cookie_name: str = "fieldops_session"
    session_ttl_days: int = 7

    # Login throttling
    login_max_attempts: int = 5
    login_attempt_window_seconds: int = 900

    # AWS / S3
    aws_region: str = "us-east-1"
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_endpoint_url: Optional[str] = None
    s3_bucket: str = "fieldops-uploads"
    upload_max_file_size: int = 50 * 1024 * 1024

    # CORS
    cors_origins: str = "http://localhost:5173,http://localhost:5000"

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_days * 24 * 60 * 60

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list"""
        return [origin.strip() for origin in self.cors_origins.split(",")]


# Global settings instance
settings = Settings()
