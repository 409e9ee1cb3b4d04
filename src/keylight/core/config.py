from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Keylight Intake API"
    app_version: str = "2.0.0"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True
    port: int = 3000

    # Database
    database_url: str
    database_migrations_url: str | None = None
    database_pool_size: int = 20
    database_max_overflow: int = 0
    database_pool_timeout: float = 2.0  # seconds to wait for a free connection
    database_connect_timeout: float = 2.0
    database_idle_timeout: int = 30  # seconds before a pooled connection is recycled
    database_ssl_mode: str = "disable"  # disable, prefer, require, verify-ca, verify-full
    run_migrations_on_startup: bool = False

    # Shutdown
    shutdown_grace_period: int = 30

    # Admin (loaded at startup, not consulted by request handling)
    admin_password: SecretStr | None = None

    # CORS
    cors_origins: list[str] = [
        "http://localhost:4200",
        "http://localhost:3000",
        "http://localhost:8080",
        "http://127.0.0.1:5500",
        "http://127.0.0.1:8080",
        "http://localhost:5500",
    ]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("development", "testing", "production"):
            raise ValueError("APP_ENV must be one of: development, testing, production")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Reject wildcards since credentials are allowed."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
