"""Shared model types for sqlbuilder."""

from sqlbuilder.types.base import SqlBuilderBaseModel
from sqlbuilder.types.metadata import EntityMetadata, FieldMetadata, TableMetadata

__all__ = [
    "SqlBuilderBaseModel",
    "EntityMetadata",
    "FieldMetadata",
    "TableMetadata",
]
