"""Configuration management using pydantic-settings."""

from functools import lru_cache
import json
from typing import Iterable

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RuntimeConfig(BaseSettings):
    """Runtime settings loaded from environment variables.

    Orchestrators receive an instance at construction time; they never
    look settings up on their own.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Structured storage / blob storage (Supabase)
    supabase_url: str = Field(
        default="",
        description="Base URL of the Supabase project (e.g. https://xyz.supabase.co)",
    )
    supabase_service_role_key: str = Field(
        default="",
        description="Service role key used for storage access",
    )
    documents_bucket: str = Field(
        default="documents",
        description="Blob storage bucket holding uploaded documents",
    )

    # OpenAI
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key",
    )
    llm_model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI model used for advice text",
    )

    # Collaborator timeouts
    storage_timeout_seconds: float = Field(
        default=10.0,
        ge=0.1,
        le=120.0,
        description="Timeout for a single storage or blob call",
    )
    inference_timeout_seconds: float = Field(
        default=30.0,
        ge=0.1,
        le=300.0,
        description="Timeout for a single inference call",
    )

    # Document processing
    max_file_size_mb: int = Field(
        default=25,
        ge=1,
        le=500,
        description="Maximum document size in MB",
    )

    # Audit thresholds
    risk_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    control_effectiveness_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    anomaly_zscore_threshold: float = Field(
        default=2.0,
        gt=0.0,
        description="Absolute z-score above which an item amount is an outlier",
    )

    # Server Settings
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    debug: bool = Field(default=False)

    # CORS
    cors_allowed_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        description="Comma-separated list of allowed CORS origins",
    )

    @staticmethod
    def _split_csv(value: str) -> list[str]:
        return [item.strip() for item in value.split(",") if item.strip()]

    @field_validator("cors_allowed_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: str | Iterable[str]) -> list[str]:
        """Allow comma-separated env strings for CORS origins."""
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return []
            # Try JSON (e.g., '["https://foo"]'); if it fails, fall back to CSV.
            try:
                parsed = json.loads(text)
            except json.JSONDecodeError:
                return cls._split_csv(text)
            if isinstance(parsed, list):
                return [str(item).strip() for item in parsed if str(item).strip()]
            return cls._split_csv(text)
        return list(value)

    @property
    def max_file_size_bytes(self) -> int:
        """Maximum document size in bytes."""
        return self.max_file_size_mb * 1024 * 1024

    @property
    def storage_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)

    @property
    def inference_configured(self) -> bool:
        return bool(self.openai_api_key)


@lru_cache
def get_settings() -> RuntimeConfig:
    """Get cached settings instance."""
    return RuntimeConfig()
