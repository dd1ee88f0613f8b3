from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from repo root if present
ENV_PATH = Path(__file__).resolve().parents[3] / ".env"
if ENV_PATH.exists():
    load_dotenv(dotenv_path=ENV_PATH)


class Settings(BaseSettings):
    """Order management service settings (loaded from env).

    Routing:
      - "base_path" prefixes every order resource (default /ordermgt).
      - "public_base_url" overrides the scheme/host used in Location headers
        when the service sits behind a proxy.

    Compatibility:
      - "not_found_status" keeps the historical 200 for unknown orders;
        set it to 404 to opt into conventional semantics.
    """

    # --- service ---
    service_name: str = Field(default="ordermgt", description="Service name")
    version: str = Field(default="0.1.0", description="Service version")
    environment: str = Field(default="dev", description="Environment name (dev/staging/prod)")
    host: str = Field(default="0.0.0.0", description="API bind host")
    port: int = Field(default=9090, description="API bind port")

    # --- routing ---
    base_path: str = Field(default="/ordermgt", description="Path prefix for the order resource")
    public_base_url: Optional[str] = Field(
        default=None,
        description="External base URL for Location headers, e.g. https://api.example.com/ordermgt",
    )

    # --- behaviour ---
    not_found_status: int = Field(
        default=200,
        description="HTTP status for Retrieve/Update of an unknown order (200 or 404)",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_format: str = Field(default="text", description="text|json")

    # --- CORS ---
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])

    # pydantic-settings v2 config
    model_config = SettingsConfigDict(
        env_prefix="ORDERMGT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("base_path")
    @classmethod
    def _normalize_base_path(cls, v: str) -> str:
        v = (v or "").strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    @field_validator("public_base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip().rstrip("/")
        return v or None

    @field_validator("not_found_status")
    @classmethod
    def _not_found_status_allowed(cls, v: int) -> int:
        if v not in (200, 404):
            raise ValueError("not_found_status must be 200 or 404")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
