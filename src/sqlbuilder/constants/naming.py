"""Naming convention constants."""

from enum import Enum


class NamingStrategy(str, Enum):
    """Base transform applied to type and field names.

    - IDENTITY: names are used as declared (``CustomerOrder``)
    - SNAKE_CASE: PascalCase/camelCase become snake_case (``customer_order``)
    """

    IDENTITY = "identity"
    SNAKE_CASE = "snake_case"


class Dialect(str, Enum):
    """Identifier escaping dialect.

    Only SQLSERVER changes the output: identifiers are wrapped in square
    brackets. STANDARD leaves identifiers untouched.
    """

    STANDARD = "standard"
    SQLSERVER = "sqlserver"

    @property
    def escapes_identifiers(self) -> bool:
        return self is Dialect.SQLSERVER
