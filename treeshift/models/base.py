"""Base model for all treeshift Pydantic models.

Option models are passed by value into scans and engines and are never
mutated there, so the base model is frozen.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class TreeshiftBaseModel(BaseModel):
    """Base model class for all treeshift Pydantic models."""

    model_config = ConfigDict(
        # Unknown option names are a caller mistake
        extra="forbid",
        frozen=True,
        validate_default=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary with JSON-compatible values.

        Returns:
            Dictionary representation excluding unset fields
        """
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")

    def to_dict_full(self) -> dict[str, Any]:
        """Convert model to dictionary including all fields (even unset ones)."""
        return self.model_dump(by_alias=True, exclude_unset=False, mode="json")
