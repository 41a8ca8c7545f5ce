"""Entity annotations for table and column mapping.

Table names are overridden with the ``table`` class decorator. Column names
and exclusions are declared per field with ``typing.Annotated`` markers, so
they work the same on dataclasses, pydantic models and plain classes.

Example:
    >>> from dataclasses import dataclass
    >>> from typing import Annotated
    >>>
    >>> @table("tbl_customers")
    ... @dataclass
    ... class Customer:
    ...     Id: Annotated[int, Column("customer_id")]
    ...     Name: str
    ...     Notes: Annotated[str, NotMapped()] = ""
"""

from dataclasses import dataclass
from typing import Callable, Optional, Type

from sqlbuilder.common.exceptions import validation_error
from sqlbuilder.types import TableMetadata

TABLE_METADATA_ATTRIBUTE = "_table_metadata"


@dataclass(frozen=True)
class Column:
    """Explicit column name for a field, used verbatim (escaped only)."""

    name: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise validation_error(
                "Column name must be a non-empty string",
                field="name",
                value=self.name,
            )


@dataclass(frozen=True)
class NotMapped:
    """Marks a field as never selected by wildcard expansion."""


def table(name: str) -> Callable[[Type], Type]:
    """Decorator overriding the table name of an entity class.

    The name is used verbatim: the naming convention's transform and
    pluralization are not applied, only identifier escaping.

    Args:
        name: Table name

    Returns:
        Decorated class with TableMetadata attached as _table_metadata attribute.

    Example:
        >>> @table("Orders")
        ... class Order:
        ...     OrderId: int
    """
    def decorator(cls: Type) -> Type:
        metadata = TableMetadata(name=name)

        setattr(cls, TABLE_METADATA_ATTRIBUTE, metadata)
        return cls

    return decorator


def get_table_metadata(cls: Type) -> Optional[TableMetadata]:
    """Return the table annotation declared directly on ``cls``.

    Subclasses do not inherit the table name of a decorated base class.
    """
    metadata = cls.__dict__.get(TABLE_METADATA_ATTRIBUTE)
    if isinstance(metadata, TableMetadata):
        return metadata
    return None
