"""Constants module for sqlbuilder.

This module contains all constant values and enumerations used throughout
the package. It has no dependencies on other sqlbuilder modules.

Organization:
    - sql: clause keywords, join kinds, sort directions, buffer targets
    - naming: naming strategies and identifier dialects
"""

from sqlbuilder.constants.naming import Dialect, NamingStrategy
from sqlbuilder.constants.sql import (
    COLUMN_SEPARATOR,
    DEFAULT_OPERATOR,
    SELECT_KEYWORD,
    TABLE_ALIAS_PREFIX,
    BufferTarget,
    ClauseKeyword,
    JoinType,
    SortDirection,
)

__all__ = [
    # SQL
    "TABLE_ALIAS_PREFIX",
    "SELECT_KEYWORD",
    "COLUMN_SEPARATOR",
    "DEFAULT_OPERATOR",
    "JoinType",
    "ClauseKeyword",
    "SortDirection",
    "BufferTarget",
    # Naming
    "NamingStrategy",
    "Dialect",
]
