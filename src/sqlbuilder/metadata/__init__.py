"""Entity metadata: annotations, reflection and field selectors."""

from sqlbuilder.metadata.annotations import Column, NotMapped, get_table_metadata, table
from sqlbuilder.metadata.provider import MAPPABLE_TYPES, ReflectionMetadataProvider, get_metadata_provider
from sqlbuilder.metadata.selectors import FieldSelector, resolve_field_name
from sqlbuilder.types import EntityMetadata, FieldMetadata, TableMetadata

__all__ = [
    "Column",
    "NotMapped",
    "table",
    "get_table_metadata",
    "MAPPABLE_TYPES",
    "ReflectionMetadataProvider",
    "get_metadata_provider",
    "FieldSelector",
    "resolve_field_name",
    "EntityMetadata",
    "FieldMetadata",
    "TableMetadata",
]
