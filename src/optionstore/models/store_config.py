from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ValidatorRef(BaseModel):
    """Reference to a registered validator plus the fixed args to install it with."""

    model_config = ConfigDict(extra="forbid")

    name: str
    args: List[Any] = Field(default_factory=list)  # Appended after (key[, value]) on every call

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("validator name must not be empty")
        return v


class StoreConfig(BaseModel):
    """Declarative description of an option store.

    ``values`` are seeded through the write validator, so a value the validator
    refuses never reaches the store.
    """

    model_config = ConfigDict(extra="forbid")

    identifier: Optional[str] = None
    overlay_enabled: bool = False

    read_validator: Optional[ValidatorRef] = None   # None keeps the pass-through default
    write_validator: Optional[ValidatorRef] = None

    values: Dict[str, Any] = Field(default_factory=dict)
