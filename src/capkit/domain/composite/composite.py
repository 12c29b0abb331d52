"""Composite objects - high-level entities assembled from resolved capabilities."""
from typing import Any, Dict, FrozenSet, Iterator, List, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class CompositionSpec(BaseModel):
    """Normalized role -> capability name mapping for one composite."""
    model_config = ConfigDict(frozen=True)

    name: str = "composite"
    roles: Dict[str, str] = Field(default_factory=dict)
    optional: FrozenSet[str] = Field(default_factory=frozenset)
    selections: Dict[str, str] = Field(default_factory=dict)

    @field_validator("roles")
    @classmethod
    def validate_roles(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Role names must be usable as constructor keywords."""
        for role in v:
            if not role.isidentifier():
                raise ValueError(f"Role name '{role}' is not a valid identifier")
        return v

    @model_validator(mode="after")
    def validate_references(self) -> "CompositionSpec":
        """Optional roles and selections must refer to declared roles."""
        unknown = (set(self.optional) | set(self.selections)) - set(self.roles)
        if unknown:
            raise ValueError(f"Unknown roles referenced: {sorted(unknown)}")
        return self

    def is_optional(self, role: str) -> bool:
        return role in self.optional


class Composite:
    """
    Generic composite holding one resolved instance per role.

    Parts are reachable by attribute (``cage.door``) or by item
    (``cage["door"]``). A composite is immutable once constructed.
    """

    __slots__ = ("_name", "_parts")

    def __init__(self, name: str, parts: Mapping[str, Any]):
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_parts", dict(parts))

    @property
    def name(self) -> str:
        return self._name

    @property
    def roles(self) -> List[str]:
        return list(self._parts.keys())

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._parts)

    def __getattr__(self, item: str) -> Any:
        parts = object.__getattribute__(self, "_parts")
        if item in parts:
            return parts[item]
        raise AttributeError(f"Composite '{self._name}' has no role '{item}'")

    def __getitem__(self, role: str) -> Any:
        return self._parts[role]

    def __contains__(self, role: object) -> bool:
        return role in self._parts

    def __iter__(self) -> Iterator[str]:
        return iter(self._parts)

    def __len__(self) -> int:
        return len(self._parts)

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"Composite '{self._name}' is immutable")

    def __delattr__(self, item: str) -> None:
        raise AttributeError(f"Composite '{self._name}' is immutable")

    def __repr__(self) -> str:
        parts = ", ".join(f"{role}={type(part).__name__}" for role, part in self._parts.items())
        return f"Composite({self._name}: {parts})"
