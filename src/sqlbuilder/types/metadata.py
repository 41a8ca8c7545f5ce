"""Metadata types describing how entity classes map to tables and columns.

These are the resolved, immutable views the metadata provider hands to the
builder. They are created once per entity class and cached.
"""

from typing import Any, List, Optional

from pydantic import Field

from sqlbuilder.types.base import SqlBuilderBaseModel


class TableMetadata(SqlBuilderBaseModel):
    """Table-level annotation attached to an entity class by ``@table``.

    Attributes:
        name: Table name used verbatim instead of the naming convention.
    """
    name: str = Field(..., min_length=1)


class FieldMetadata(SqlBuilderBaseModel):
    """One declared field of an entity class.

    Attributes:
        name: Attribute name as declared on the class.
        annotation: Declared type with ``Annotated`` extras stripped.
        column_name: Column-name override from a ``Column`` marker.
        excluded: True when the field carries a ``NotMapped`` marker.
        mappable: True when the field's kind is a supported scalar kind.
    """
    name: str
    annotation: Any = None
    column_name: Optional[str] = None
    excluded: bool = False
    mappable: bool = True

    @property
    def is_selectable(self) -> bool:
        """Whether wildcard selection includes this field."""
        return self.mappable and not self.excluded


class EntityMetadata(SqlBuilderBaseModel):
    """Resolved metadata for one entity class.

    Attributes:
        entity: The entity class.
        table_name: Table-name override from ``@table``, if any.
        fields: Declared fields in declaration order, base classes first.
    """
    entity: type
    table_name: Optional[str] = None
    fields: List[FieldMetadata] = Field(default_factory=list)

    def get_field(self, name: str) -> Optional[FieldMetadata]:
        for field in self.fields:
            if field.name == name:
                return field
        return None

    @property
    def selectable_fields(self) -> List[FieldMetadata]:
        return [field for field in self.fields if field.is_selectable]
