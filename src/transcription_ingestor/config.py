"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel, computed_field


class DatabaseConfig(BaseModel, frozen=True):
    """Immutable database connection configuration."""

    host: str
    port: str
    user: str
    password: str
    database: str

    @computed_field
    @property
    def url(self) -> str:
        """Returns the full PostgreSQL connection URL."""
        return (
            f"postgresql+psycopg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class IndexingConfig(BaseModel, frozen=True):
    """Search indexing (embeddings) service configuration."""

    base_url: str
    timeout_seconds: float = 30.0


class NotificationConfig(BaseModel, frozen=True):
    """Transactional e-mail configuration."""

    api_key: str
    api_url: str = "https://api.resend.com"
    email_domain: str = "qualsearch.io"
    app_base_url: str
    timeout_seconds: float = 10.0
    max_workers: int = 8

    @computed_field
    @property
    def sender(self) -> str:
        """Returns the no-reply sender address."""
        return f"noreply@{self.email_domain}"


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    database: DatabaseConfig
    indexing: IndexingConfig
    notification: NotificationConfig
    log_level: str = "INFO"


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        database=DatabaseConfig(
            host=os.getenv("POSTGRES_HOST", "postgres"),
            port=os.getenv("POSTGRES_PORT", "5432"),
            user=os.getenv("POSTGRES_USER", ""),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            database=os.getenv("POSTGRES_DB", "transcriptions"),
        ),
        indexing=IndexingConfig(
            base_url=os.getenv("INDEXING_BASE_URL", "http://localhost:4000"),
            timeout_seconds=float(os.getenv("INDEXING_TIMEOUT_SECONDS", "30")),
        ),
        notification=NotificationConfig(
            api_key=os.getenv("RESEND_API_KEY", ""),
            api_url=os.getenv("RESEND_API_URL", "https://api.resend.com"),
            email_domain=os.getenv("EMAIL_DOMAIN", "qualsearch.io"),
            app_base_url=os.getenv("APP_BASE_URL", "http://localhost:3003"),
            timeout_seconds=float(os.getenv("NOTIFICATION_TIMEOUT_SECONDS", "10")),
            max_workers=int(os.getenv("NOTIFICATION_MAX_WORKERS", "8")),
        ),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
