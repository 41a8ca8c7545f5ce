"""Protocol definitions for sqlbuilder collaborators."""

from sqlbuilder.protocols.providers import EntityMetadataProvider, NamingConvention

__all__ = [
    "NamingConvention",
    "EntityMetadataProvider",
]
