"""Pydantic schemas for crate JSON validation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EntityNodeSchema(BaseModel):
    """Schema for a single entity object in a crate graph."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(alias="@id")
    type: list[str] = Field(default_factory=list, alias="@type")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id_to_string(cls, v: Any) -> str:
        """Reject empty identifiers and stringify the rest."""
        if v is None or v == "":
            raise ValueError("entity must have a non-empty @id")
        return str(v)

    @field_validator("type", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> list[str]:
        """Ensure @type is a list."""
        if v is None:
            return []
        if isinstance(v, list):
            return [str(item) for item in v]  # type: ignore[misc]
        return [str(v)]


class CrateSchema(BaseModel):
    """Schema for an RO-Crate metadata document."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    context: Any = Field(default=None, alias="@context")
    graph: list[EntityNodeSchema] = Field(alias="@graph")
