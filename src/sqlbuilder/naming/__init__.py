"""Naming conventions for table and column identifiers.

Available conventions:
    - IdentityNamingConvention: names as declared
    - SnakeCaseNamingConvention: PascalCase/camelCase to snake_case

Both support optional table-name pluralization and SQL Server bracket
escaping.
"""

from sqlbuilder.naming.base import BaseNamingConvention
from sqlbuilder.naming.factory import NamingConventionFactory, get_naming_convention
from sqlbuilder.naming.identity import IdentityNamingConvention
from sqlbuilder.naming.snake_case import SnakeCaseNamingConvention, to_snake_case

__all__ = [
    "BaseNamingConvention",
    "IdentityNamingConvention",
    "SnakeCaseNamingConvention",
    "NamingConventionFactory",
    "get_naming_convention",
    "to_snake_case",
]
