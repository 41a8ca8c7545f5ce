"""Provider protocol definitions.

This module defines the protocols for the two pluggable collaborators of
the builder: the naming convention that turns type and field names into
SQL identifiers, and the metadata provider that describes entity classes.
Any object with matching methods can be passed to ``SqlBuilder``.
"""

from typing import List, Optional, Protocol, runtime_checkable

from sqlbuilder.types import FieldMetadata


@runtime_checkable
class NamingConvention(Protocol):
    """Protocol defining the interface for naming conventions.

    The protocol is marked as runtime_checkable to allow isinstance()
    checks at runtime, which is useful for validation and testing.
    """

    def to_table_name(self, type_name: str) -> str:
        """Derive the table identifier for an entity type name.

        Args:
            type_name: Simple class name, e.g. ``CustomerOrder``

        Returns:
            Escaped table identifier
        """
        ...

    def to_column_name(self, field_name: str) -> str:
        """Derive the column identifier for a field name.

        Args:
            field_name: Attribute name as declared on the entity

        Returns:
            Escaped column identifier
        """
        ...

    def escape_identifier(self, name: Optional[str]) -> Optional[str]:
        """Apply dialect quoting to an identifier.

        Must never raise; ``None`` is returned unchanged.
        """
        ...


@runtime_checkable
class EntityMetadataProvider(Protocol):
    """Protocol for entity metadata providers.

    Answers questions about entity classes: which fields are selectable,
    and which explicit table and column names they declare.
    """

    def get_mappable_fields(self, entity: type) -> List[FieldMetadata]:
        """Return selectable fields in declaration order.

        Excluded fields and fields of unsupported kinds are omitted.
        """
        ...

    def get_field_override_name(self, entity: type, field_name: str) -> Optional[str]:
        """Return the explicit column name of a field, or None."""
        ...

    def get_type_override_name(self, entity: type) -> Optional[str]:
        """Return the explicit table name of an entity, or None."""
        ...

    def has_field(self, entity: type, field_name: str) -> bool:
        """Whether the entity declares a field with this name.

        Excluded and unsupported fields count as declared.
        """
        ...
