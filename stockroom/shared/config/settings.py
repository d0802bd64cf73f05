# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_INSECURE_SECRETS = ("dev", "development", "test", "secret", "")


def _group_config() -> SettingsConfigDict:
    return SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


class AuthConfig(BaseSettings):
    # Required: a missing signing secret must stop startup
    jwt_secret: str = Field(..., min_length=1, alias="JWT_SECRET")
    session_ttl: int = Field(60 * 60 * 24, ge=1, alias="SESSION_TTL")
    reset_token_ttl: int = Field(30 * 60, ge=1, alias="RESET_TOKEN_TTL")
    password_min_length: int = Field(6, ge=1, alias="PASSWORD_MIN_LENGTH")

    model_config = _group_config()


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///stockroom.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _group_config()


class EmailConfig(BaseSettings):
    host: str = Field("smtp.gmail.com", alias="EMAIL_HOST")
    port: int = Field(465, ge=1, alias="EMAIL_PORT")
    user: str = Field("", alias="EMAIL_USER")
    password: str = Field("", alias="EMAIL_PASS")
    timeout: float = Field(15.0, ge=0.1, alias="EMAIL_TIMEOUT")

    model_config = _group_config()


class StorageConfig(BaseSettings):
    uploads_dir: Path = Field(Path("instance/uploads"), alias="UPLOADS_DIR")
    uploads_url: str = Field("/uploads", alias="UPLOADS_URL")

    model_config = _group_config()


class SecurityConfig(BaseSettings):
    # Session cookie is sent cross-site to the frontend
    cookie_secure: bool = Field(True, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("None", alias="COOKIE_SAMESITE")

    # CORS, comma separated
    allowed_origins: str = Field("http://localhost:3000", alias="ALLOWED_ORIGINS")

    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _group_config()

    @field_validator("cookie_secure", "enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @property
    def origins(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    frontend_url: str = Field("http://localhost:3000", alias="FRONTEND_URL")

    auth: AuthConfig = Field(default_factory=AuthConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    email: EmailConfig = Field(default_factory=EmailConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @field_validator("frontend_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.auth.jwt_secret in _INSECURE_SECRETS:
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure JWT_SECRET detected in production!\n"
                "   JWT_SECRET must be a strong random value in production.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = []
        if not self.security.cookie_secure:
            warnings.append("⚠️  Cookie Secure flag is DISABLED (use HTTPS!)")
        if "*" in self.security.origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")
        if not self.email.user or not self.email.password:
            warnings.append("⚠️  EMAIL_USER/EMAIL_PASS not set, password reset mail will fail")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    def is_debug(self) -> bool:
        return self.debug_logging or self.app_env.lower() in ("development", "dev")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = ["AppConfig", "load_config"]
