from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str
    log_level: str = "INFO"
    jwt_secret_key: SecretStr
    jwt_algorithm: str = "HS256"
    jwt_access_token_expires_minutes: int = 60
    jwt_issuer: str | None = None
    jwt_audience: str | None = None
    # CORS
    cors_allow_origins: str = "*"
    # Membership requests
    product_name: str = "PhotoComp"
    allow_reapply_after_denial: bool = True
    # Email (logging provider only)
    email_from_name: str = "PhotoComp"
    email_from_address: str = "no-reply@photocomp.local"
    email_default_locale: str = "en"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def ensure_asyncpg_scheme(cls, value: str) -> str:
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        if value.startswith("postgresql://") and "+" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        return value

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Convert cors_allow_origins string to list"""
        if isinstance(self.cors_allow_origins, str):
            return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]
        return self.cors_allow_origins


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
