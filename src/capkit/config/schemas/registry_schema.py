"""Capability registry configuration schema."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from capkit.domain.capability import Lifetime, RegistrationPolicy


class RegistrationConfig(BaseModel):
    """Configuration for a single capability registration."""

    capability: str = Field(..., description="Capability name or interface import path (module:attr)")
    implementation: str = Field(..., description="Implementation import path (module:attr)")
    name: Optional[str] = Field(None, description="Implementation name, defaults to the attribute name")
    lifetime: Optional[Lifetime] = Field(None, description="Instance lifetime")
    config: Dict[str, Any] = Field(default_factory=dict, description="Factory keyword arguments")
    enabled: bool = Field(True, description="Whether this registration is applied")

    @field_validator("implementation")
    @classmethod
    def validate_implementation(cls, v: str) -> str:
        """Implementations are referenced by import path."""
        module, _, attribute = v.partition(":")
        if not module or not attribute:
            raise ValueError(f"Implementation must be 'module:attribute', got '{v}'")
        return v

    @field_validator("capability")
    @classmethod
    def validate_capability(cls, v: str) -> str:
        """Validate capability reference."""
        if not v or not v.strip():
            raise ValueError("Capability cannot be empty")
        return v.strip()


class RegistryConfig(BaseModel):
    """Capability registry configuration."""

    policy: RegistrationPolicy = Field(RegistrationPolicy.LAST_WINS,
                                       description="Duplicate registration policy")
    cache_singletons: bool = Field(False, description="Cache one instance per registration")
    restrict_to_contract: bool = Field(False,
                                       description="Expose resolved instances only through their contract")
    include_catalog: bool = Field(True, description="Register the built-in catalog")
    seal_after_load: bool = Field(True, description="Seal the registry after initialization")
    registrations: List[RegistrationConfig] = Field(default_factory=list,
                                                    description="Additional registrations")

    @field_validator("policy", mode="before")
    @classmethod
    def normalize_policy(cls, v):
        """Accept policy names in any case."""
        if isinstance(v, str):
            return v.lower().replace("-", "_")
        return v
