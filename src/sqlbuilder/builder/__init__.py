"""Fluent SQL builder and its per-query state."""

from sqlbuilder.builder.aliases import AliasRegistry
from sqlbuilder.builder.buffer import QueryBuffer
from sqlbuilder.builder.configuration import BuilderConfiguration, get_configuration, reset_configuration
from sqlbuilder.builder.sql_builder import SqlBuilder

__all__ = [
    "SqlBuilder",
    "AliasRegistry",
    "QueryBuffer",
    "BuilderConfiguration",
    "get_configuration",
    "reset_configuration",
]
