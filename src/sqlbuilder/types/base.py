"""Base model class for sqlbuilder value objects with serialization support."""

from typing import Any, Dict
from pydantic import BaseModel, ConfigDict


class SqlBuilderBaseModel(BaseModel):
    """Base model for all sqlbuilder metadata objects.

    Provides common functionality including:
    - Immutability (metadata is resolved once and shared through caches)
    - Serialization to dictionary via to_dict()
    - Support for ``type`` objects and annotations as field values
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        use_enum_values=True,
        frozen=True
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary for serialization.

        Class and annotation values are rendered as their names so the
        result is JSON friendly.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        data = self.model_dump(by_alias=False, exclude_none=True)

        def convert_nested(obj):
            if isinstance(obj, dict):
                return {k: convert_nested(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [convert_nested(item) for item in obj]
            elif isinstance(obj, type):
                return obj.__name__
            return obj

        return convert_nested(data)
