"""
Base model definitions for tablemeta.

Provides the common base class for all data models.
"""

from typing import Any

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict


class BaseModel(PydanticBaseModel):
    """
    Base model with common configuration for all tablemeta models.

    Features:
    - JSON serialization support
    - Validation on assignment
    - Strings kept exactly as the database returns them
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        arbitrary_types_allowed=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary."""
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        """Convert model to JSON string."""
        return self.model_dump_json()
