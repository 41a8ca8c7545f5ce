from sqlbuilder.__version__ import __version__
from sqlbuilder.builder import (
    SqlBuilder,
    BuilderConfiguration,
    get_configuration,
    reset_configuration,
)
from sqlbuilder.metadata import (
    Column,
    NotMapped,
    table,
    ReflectionMetadataProvider,
)
from sqlbuilder.naming import (
    IdentityNamingConvention,
    SnakeCaseNamingConvention,
    NamingConventionFactory,
)
from sqlbuilder.constants import BufferTarget, Dialect, JoinType, NamingStrategy

from sqlbuilder.common.exceptions import SqlBuilderError, ErrorCode


__all__ = [
    "__version__",

    "SqlBuilder",
    "BuilderConfiguration",
    "get_configuration",
    "reset_configuration",

    # Entity annotations
    "Column",
    "NotMapped",
    "table",
    "ReflectionMetadataProvider",

    # Naming conventions
    "IdentityNamingConvention",
    "SnakeCaseNamingConvention",
    "NamingConventionFactory",

    "BufferTarget",
    "Dialect",
    "JoinType",
    "NamingStrategy",

    # Exceptions (public API)
    "SqlBuilderError",
    "ErrorCode",
]
