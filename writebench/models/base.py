"""Base model for all write-bench Pydantic models."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class WriteBenchBaseModel(BaseModel):
    """Base model class for all write-bench Pydantic models.

    Settings are built once at startup and never mutated afterwards, so the
    models are frozen and reject unknown fields.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        str_strip_whitespace=True,
        use_enum_values=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary with JSON-compatible values."""
        return self.model_dump(by_alias=True, mode="json")
