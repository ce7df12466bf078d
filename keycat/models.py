"""Data models for KeyCat."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from keycat.defaults import DEFAULT_LOG_LEVEL, KEY_TYPE_TABLE
from keycat.types import KeyType, LogLevel

# Catalogue


class KeyTypeDescriptor(BaseModel):
    """Immutable description of one key type."""

    model_config = ConfigDict(frozen=True)

    identifier: KeyType
    code: int = Field(ge=0, description="Stable serialization code")
    display_name: str
    acceptable_sizes: tuple[int, ...] = Field(min_length=1, description="Key lengths in bits, default first")
    output_size: int = Field(ge=0, description="Fixed output size, 0 if none")

    @field_validator("acceptable_sizes")
    @classmethod
    def validate_acceptable_sizes(cls: type["KeyTypeDescriptor"], v: tuple[int, ...]) -> tuple[int, ...]:
        """Sizes must be positive and listed once."""
        for size in v:
            if size <= 0:
                raise ValueError(f"Key size must be positive: {size}")
        if len(set(v)) != len(v):
            raise ValueError(f"Duplicate key sizes: {v}")
        return v

    @property
    def default_size(self: "KeyTypeDescriptor") -> int:
        """The recommended key size."""
        return self.acceptable_sizes[0]

    def accepts(self: "KeyTypeDescriptor", size: int) -> bool:
        """Check whether a key size is valid for this type."""
        return size in self.acceptable_sizes

    def __str__(self: "KeyTypeDescriptor") -> str:
        return self.display_name


@dataclass(frozen=True)
class InvalidKeySize:
    """A key size that is not acceptable for a key type."""

    identifier: KeyType
    size: Any
    acceptable: tuple[int, ...]

    def __str__(self: "InvalidKeySize") -> str:
        allowed = ", ".join(str(s) for s in self.acceptable)
        return f"Invalid key size {self.size} for {self.identifier.value} (acceptable: {allowed})"


@dataclass(frozen=True)
class UnknownKeyType:
    """A serialized value that does not name a known key type."""

    value: Any

    def __str__(self: "UnknownKeyType") -> str:
        return f"Unrecognized key type: {self.value!r}"


# Config

_ACCEPTABLE_SIZES = {identifier: sizes for identifier, _, _, sizes, _ in KEY_TYPE_TABLE}


class CatalogConfig(BaseModel):
    """Preferred key sizes per key type."""

    key_sizes: dict[KeyType, StrictInt] = Field(default_factory=dict)

    @field_validator("key_sizes")
    @classmethod
    def validate_key_sizes(cls: type["CatalogConfig"], v: dict[KeyType, int]) -> dict[KeyType, int]:
        """Every configured size must be acceptable for its key type."""
        for identifier, size in v.items():
            if size not in _ACCEPTABLE_SIZES[identifier]:
                raise ValueError(str(InvalidKeySize(identifier, size, _ACCEPTABLE_SIZES[identifier])))
        return v


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: LogLevel = DEFAULT_LOG_LEVEL


class Config(BaseModel):
    """Loaded KeyCat configuration."""

    config_path: Path
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
