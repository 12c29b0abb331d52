"""Main application configuration schema."""
from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator

from .logging_schema import LoggingConfig
from .registry_schema import RegistryConfig


class AppConfig(BaseModel):
    """Application configuration."""

    version: str = Field("1.0", description="Configuration version")
    registry: RegistryConfig = Field(default_factory=lambda: RegistryConfig())
    logging: LoggingConfig = Field(default_factory=lambda: LoggingConfig())

    @field_validator("version", mode="before")
    @classmethod
    def validate_version(cls, v: Any) -> str:
        """Validate configuration version."""
        v = str(v)
        if v.split(".")[0] != "1":
            raise ValueError(f"Unsupported configuration version: {v}")
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Create configuration from a raw dictionary."""
        return cls(**(data or {}))
