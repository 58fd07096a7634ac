from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.pnrelease.models.enums import Role


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Part Number Release Tracker"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    log_level: str = "INFO"
    enable_openapi: bool = True

    # Database
    database_url: str = "sqlite+aiosqlite:///./pnrelease.db"
    database_migrations_url: str | None = None
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Shutdown
    shutdown_grace_period: int = 30

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Release flow used when a request is created without an explicit chain
    default_release_chain: list[Role] = [
        Role.PRODUCT_SPECIALIST,
        Role.PRODUCT_MANAGER,
        Role.PRODUCT_SPECIALIST,
    ]

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

    @field_validator("default_release_chain")
    @classmethod
    def validate_default_release_chain(cls, v: list[Role]) -> list[Role]:
        """The default chain must be usable as remaining steps of a new workflow."""
        if not v:
            raise ValueError("DEFAULT_RELEASE_CHAIN must contain at least one role")
        for role in v:
            if not role.is_flow_role:
                raise ValueError(
                    f"Role '{role.value}' cannot be part of a release chain. "
                    "Only roles with a slot on the request (except the requester) are allowed."
                )
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    return Settings()
