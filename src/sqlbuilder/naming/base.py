"""Base naming convention.

A naming convention turns entity type names into table identifiers and
field names into column identifiers. Subclasses only provide the base
transform; pluralization and dialect escaping are applied here, in that
order, so every convention behaves the same way around them.
"""

from abc import ABC, abstractmethod
from typing import Optional

from sqlbuilder.constants import Dialect


class BaseNamingConvention(ABC):
    """Template for naming conventions.

    ``to_table_name`` applies the base transform, appends ``s`` when
    pluralization is enabled, then escapes. ``to_column_name`` applies the
    base transform, then escapes. None of the operations raise.

    Example:
        >>> convention = SnakeCaseNamingConvention().use_plural_table_names()
        >>> convention.to_table_name("CustomerOrder")
        'customer_orders'
        >>> convention.use_sql_server().to_column_name("FirstName")
        '[first_name]'
    """

    def __init__(self, plural_table_names: bool = False, dialect: Dialect = Dialect.STANDARD):
        self.plural_table_names = plural_table_names
        self.dialect = Dialect(dialect)

    @abstractmethod
    def transform(self, name: str) -> str:
        """Base transform shared by table and column names.

        Args:
            name: Type or field name as declared

        Returns:
            Transformed name, not yet pluralized or escaped
        """
        pass

    def use_plural_table_names(self, flag: bool = True) -> "BaseNamingConvention":
        self.plural_table_names = flag
        return self

    def use_sql_server(self, flag: bool = True) -> "BaseNamingConvention":
        self.dialect = Dialect.SQLSERVER if flag else Dialect.STANDARD
        return self

    def to_table_name(self, type_name: str) -> str:
        name = self.transform(type_name)
        if self.plural_table_names:
            name = f"{name}s"
        return self.escape_identifier(name)

    def to_column_name(self, field_name: str) -> str:
        return self.escape_identifier(self.transform(field_name))

    def escape_identifier(self, name: Optional[str]) -> Optional[str]:
        """Apply dialect quoting.

        SQL Server identifiers are wrapped in square brackets; every other
        dialect returns the name unchanged.

        Args:
            name: Identifier to escape, may be None

        Returns:
            Escaped identifier, or None when name is None
        """
        if name is None:
            return None
        if self.dialect.escapes_identifiers:
            return f"[{name}]"
        return name

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(plural_table_names={self.plural_table_names}, "
            f"dialect={self.dialect.value!r})"
        )
