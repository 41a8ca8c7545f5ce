"""Fluent SQL builder.

``SqlBuilder`` assembles ``SELECT ... FROM ... JOIN ... WHERE ... ORDER BY``
text from entity classes. Table and column names come from the entity
metadata and the active naming convention; tables are referenced through
generated aliases (``kvr0``, ``kvr1``, ...).

The builder is a string assembler, not a SQL validator. Clauses are emitted
in call order, values are emitted verbatim, and nothing checks that the
result is complete or well ordered. Never pass untrusted input as a value.

Example:
    >>> sql = (
    ...     SqlBuilder()
    ...     .select_all(Customer)
    ...     .select_all(Order)
    ...     .from_(Customer)
    ...     .join(Customer, Order, lambda c: c.Id, lambda o: o.CustomerId)
    ...     .build()
    ... )
    >>> sql
    'SELECT kvr0.Id AS Id, kvr0.Name AS Name, kvr1.OrderId AS OrderId, kvr1.CustomerId AS CustomerId FROM Customer kvr0 JOIN Orders kvr1 ON kvr0.Id = kvr1.CustomerId'

A builder is not thread safe; use one per query.
"""

import inspect
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from sqlbuilder.builder import encoding
from sqlbuilder.builder.aliases import AliasRegistry
from sqlbuilder.builder.buffer import QueryBuffer
from sqlbuilder.builder.configuration import BuilderConfiguration, get_configuration, validate_table_name
from sqlbuilder.common.exceptions import ErrorCode, invalid_entity_error, validation_error
from sqlbuilder.constants import COLUMN_SEPARATOR, DEFAULT_OPERATOR, BufferTarget, ClauseKeyword, JoinType
from sqlbuilder.metadata import FieldSelector, get_metadata_provider, resolve_field_name
from sqlbuilder.protocols import EntityMetadataProvider, NamingConvention

logger = logging.getLogger(__name__)

Selectors = Union[FieldSelector, Iterable[FieldSelector]]


def _as_selector_list(selectors: Optional[Selectors]) -> List[FieldSelector]:
    if selectors is None:
        return []
    if isinstance(selectors, str) or callable(selectors):
        return [selectors]
    return list(selectors)


class SqlBuilder:
    """Fluent builder for SELECT statements over entity classes.

    Every clause method appends to the query and returns the builder.
    Field arguments are selectors: an attribute name (``"Id"``) or a
    callable reading one attribute (``lambda c: c.Id``).

    Alias arguments:
        alias: Use this table alias as given, bypassing the registry.
        new_alias: Mint a new alias for the entity and bind it, so later
            calls that reference the entity use it (self-joins). Read it
            back with :meth:`alias_of`.
        Neither: reuse the entity's bound alias, minting one on first use.

    Table names resolve in this order: the ``table_name`` argument,
    :meth:`map_table` on this builder, process-wide mappings, the
    ``@table`` decorator, the naming convention.
    """

    def __init__(
        self,
        configuration: Optional[BuilderConfiguration] = None,
        naming_convention: Optional[NamingConvention] = None,
        metadata_provider: Optional[EntityMetadataProvider] = None,
    ):
        """Initialize a builder.

        Args:
            configuration: Defaults and process-wide table mappings. The
                process-wide configuration when omitted.
            naming_convention: Convention for this builder. Captured from
                the configuration when omitted.
            metadata_provider: Entity metadata source. The shared
                reflection provider when omitted.
        """
        self._configuration = configuration or get_configuration()
        self._naming = naming_convention or self._configuration.naming_convention
        self._metadata = metadata_provider or get_metadata_provider()
        self._aliases = AliasRegistry(self._configuration.alias_prefix)
        self._table_mappings: Dict[type, str] = {}
        self._buffer = QueryBuffer()

    @classmethod
    def create(cls, **kwargs) -> "SqlBuilder":
        return cls(**kwargs)

    @staticmethod
    def use_global_naming_convention(naming_convention: NamingConvention) -> None:
        """Set the naming convention builders created from now on start with."""
        get_configuration().use_naming_convention(naming_convention)

    @staticmethod
    def map_global_table(entity: type, name: str) -> None:
        """Register a process-wide table name for an entity class."""
        get_configuration().map_table(entity, name)

    @property
    def naming_convention(self) -> NamingConvention:
        return self._naming

    def map_table(self, entity: type, name: str) -> "SqlBuilder":
        """Register a table name for an entity class on this builder only.

        Shadows process-wide mappings and the ``@table`` decorator.
        """
        validate_table_name(entity, name)
        self._table_mappings[entity] = name
        logger.debug(f"Mapped {entity.__name__} to table {name}")
        return self

    def alias_of(self, entity: type) -> Optional[str]:
        """Return the alias currently bound to ``entity``, if any."""
        return self._aliases.peek(entity)

    # ------------------------------------------------------------------
    # Select list
    # ------------------------------------------------------------------

    def select_all(
        self,
        entity: type,
        exclude: Optional[Selectors] = None,
        first: Optional[FieldSelector] = None,
        alias: Optional[str] = None,
        new_alias: bool = False,
        from_begin: bool = False,
    ) -> "SqlBuilder":
        """Select every mappable field of an entity.

        Fields keep their declaration order. Fields of unsupported kinds
        and fields marked ``NotMapped`` are skipped.

        Args:
            entity: Entity class
            exclude: Field selector or selectors to leave out
            first: Field to move to the front of this entity's columns
            alias: Table alias to use as given
            new_alias: Mint and bind a new alias
            from_begin: Put the columns in front of previously selected ones

        Returns:
            The builder
        """
        excluded = {self._field_name(entity, selector) for selector in _as_selector_list(exclude)}
        first_name = self._field_name(entity, first) if first is not None else None

        fields = [f for f in self._metadata.get_mappable_fields(entity) if f.name not in excluded]
        if first_name is not None:
            fields.sort(key=lambda f: 0 if f.name == first_name else 1)

        table_alias = self._resolve_alias(entity, alias, new_alias)
        sql = COLUMN_SEPARATOR.join(
            self._render_select_column(entity, f.name, table_alias) for f in fields
        )
        self._buffer.append_select(sql, from_begin=from_begin)
        return self

    def select_all_of(
        self,
        *entities: type,
        first_fields: Optional[Sequence[Optional[FieldSelector]]] = None,
    ) -> "SqlBuilder":
        """Select every mappable field of several entities, in order.

        Args:
            *entities: Entity classes
            first_fields: Optional field to put first, one per entity.
                Shorter sequences leave the remaining entities unordered.
        """
        first_fields = list(first_fields or [])
        if len(first_fields) > len(entities):
            raise validation_error(
                f"Got {len(first_fields)} first fields for {len(entities)} entities",
                field="first_fields",
                error_code=ErrorCode.INVALID_ARGUMENT,
            )
        first_fields.extend([None] * (len(entities) - len(first_fields)))

        for entity, first in zip(entities, first_fields):
            self.select_all(entity, first=first)
        return self

    def select_columns(
        self,
        entity: type,
        fields: Selectors,
        alias: Optional[str] = None,
        new_alias: bool = False,
    ) -> "SqlBuilder":
        """Select exactly the given fields, in the given order."""
        names = [self._field_name(entity, selector) for selector in _as_selector_list(fields)]

        table_alias = self._resolve_alias(entity, alias, new_alias)
        sql = COLUMN_SEPARATOR.join(
            self._render_select_column(entity, name, table_alias) for name in names
        )
        self._buffer.append_select(sql)
        return self

    def select_column(
        self,
        entity: type,
        field: FieldSelector,
        column_alias: Optional[str] = None,
        alias: Optional[str] = None,
        new_alias: bool = False,
    ) -> "SqlBuilder":
        """Select one field, optionally under a custom output name.

        Args:
            entity: Entity class
            field: Field selector
            column_alias: Output name; the field name when omitted
            alias: Table alias to use as given
            new_alias: Mint and bind a new alias
        """
        name = self._field_name(entity, field)

        table_alias = self._resolve_alias(entity, alias, new_alias)
        self._buffer.append_select(
            self._render_select_column(entity, name, table_alias, output_name=column_alias)
        )
        return self

    def select_raw_column(
        self,
        entity: type,
        column: str,
        column_alias: Optional[str] = None,
        alias: Optional[str] = None,
        new_alias: bool = False,
    ) -> "SqlBuilder":
        """Select a column by its literal name.

        The column and output name are emitted as given, without naming
        convention or escaping. Useful for columns the entity does not
        declare.
        """
        self._check_entity(entity)
        if not isinstance(column, str) or not column:
            raise validation_error(
                "Column must be a non-empty string",
                field="column",
                value=column,
                error_code=ErrorCode.INVALID_ARGUMENT,
            )

        table_alias = self._resolve_alias(entity, alias, new_alias)
        self._buffer.append_select(
            encoding.render_select_column(table_alias, column, column_alias or column)
        )
        return self

    def select_none(self, entity: type) -> "SqlBuilder":
        """Mint and bind a new alias for an entity without selecting columns."""
        self._check_entity(entity)
        self._aliases.get_alias(entity, force_new=True)
        return self

    # ------------------------------------------------------------------
    # Body
    # ------------------------------------------------------------------

    def from_(
        self,
        entity: type,
        alias: Optional[str] = None,
        table_name: Optional[str] = None,
    ) -> "SqlBuilder":
        """Append `` FROM <table> <alias>``.

        Args:
            entity: Entity class
            alias: Table alias to use as given
            table_name: Literal table name, emitted verbatim
        """
        resolved_table = self._table_name(entity, table_name)

        table_alias = self._resolve_alias(entity, alias)
        self._buffer.append_body(encoding.render_from(resolved_table, table_alias))
        return self

    def select_from(self, entity: type) -> "SqlBuilder":
        """Shortcut for ``select_all(entity).from_(entity)``."""
        return self.select_all(entity).from_(entity)

    def select_from_where(
        self,
        entity: type,
        field: FieldSelector,
        value: Any,
        op: str = DEFAULT_OPERATOR,
    ) -> "SqlBuilder":
        """Shortcut for ``select_all(entity).from_(entity).where(entity, field, value)``."""
        self._field_name(entity, field)
        return self.select_all(entity).from_(entity).where(entity, field, value, op=op)

    def where(
        self,
        entity: type,
        field: FieldSelector,
        value: Any,
        op: str = DEFAULT_OPERATOR,
        alias: Optional[str] = None,
    ) -> "SqlBuilder":
        """Append `` WHERE alias.column op value``. The value is emitted verbatim."""
        return self._condition(ClauseKeyword.WHERE, entity, field, value, op, alias)

    def and_(
        self,
        entity: type,
        field: FieldSelector,
        value: Any,
        op: str = DEFAULT_OPERATOR,
        alias: Optional[str] = None,
    ) -> "SqlBuilder":
        return self._condition(ClauseKeyword.AND, entity, field, value, op, alias)

    def or_(
        self,
        entity: type,
        field: FieldSelector,
        value: Any,
        op: str = DEFAULT_OPERATOR,
        alias: Optional[str] = None,
    ) -> "SqlBuilder":
        return self._condition(ClauseKeyword.OR, entity, field, value, op, alias)

    def where_raw(self, sql: str) -> "SqlBuilder":
        """Append `` WHERE <sql>`` with the text as given, e.g. ``"kvr0.Email IS NULL"``."""
        self._buffer.append_body(encoding.render_raw_clause(ClauseKeyword.WHERE, sql))
        return self

    def and_raw(self, sql: str) -> "SqlBuilder":
        self._buffer.append_body(encoding.render_raw_clause(ClauseKeyword.AND, sql))
        return self

    def or_raw(self, sql: str) -> "SqlBuilder":
        self._buffer.append_body(encoding.render_raw_clause(ClauseKeyword.OR, sql))
        return self

    def order_by(
        self,
        entity: type,
        field: FieldSelector,
        ascending: bool = True,
        alias: Optional[str] = None,
    ) -> "SqlBuilder":
        """Append `` ORDER BY alias.column ASC|DESC``."""
        column_ref = self._column_reference(entity, field, alias)
        self._buffer.append_body(encoding.render_order_by(column_ref, ascending))
        return self

    def order_by_raw(self, sql: str, ascending: bool = True) -> "SqlBuilder":
        self._buffer.append_body(encoding.render_order_by(sql, ascending))
        return self

    def join(
        self,
        left: type,
        right: type,
        left_field: FieldSelector,
        right_field: FieldSelector,
        left_alias: Optional[str] = None,
        right_alias: Optional[str] = None,
        op: str = DEFAULT_OPERATOR,
    ) -> "SqlBuilder":
        """Append `` JOIN <right table> <right alias> ON left.col op right.col``.

        Args:
            left: Entity already in the query
            right: Entity being joined
            left_field: Key field on the left entity
            right_field: Key field on the right entity
            left_alias: Left table alias to use as given
            right_alias: Right table alias to use as given
            op: Comparison operator
        """
        return self._join(JoinType.INNER, left, right, left_field, right_field, left_alias, right_alias, op)

    def left_join(
        self,
        left: type,
        right: type,
        left_field: FieldSelector,
        right_field: FieldSelector,
        left_alias: Optional[str] = None,
        right_alias: Optional[str] = None,
        op: str = DEFAULT_OPERATOR,
    ) -> "SqlBuilder":
        return self._join(JoinType.LEFT, left, right, left_field, right_field, left_alias, right_alias, op)

    def right_join(
        self,
        left: type,
        right: type,
        left_field: FieldSelector,
        right_field: FieldSelector,
        left_alias: Optional[str] = None,
        right_alias: Optional[str] = None,
        op: str = DEFAULT_OPERATOR,
    ) -> "SqlBuilder":
        return self._join(JoinType.RIGHT, left, right, left_field, right_field, left_alias, right_alias, op)

    def full_join(
        self,
        left: type,
        right: type,
        left_field: FieldSelector,
        right_field: FieldSelector,
        left_alias: Optional[str] = None,
        right_alias: Optional[str] = None,
        op: str = DEFAULT_OPERATOR,
    ) -> "SqlBuilder":
        return self._join(JoinType.FULL, left, right, left_field, right_field, left_alias, right_alias, op)

    def append_raw(self, text: str, target: BufferTarget = BufferTarget.BODY) -> "SqlBuilder":
        """Append literal text for clauses the builder has no method for.

        Args:
            text: Text appended as given, including any leading space
            target: ``BODY`` appends after the current body (GROUP BY,
                HAVING, subqueries); ``SELECT`` appends to the select list
                without a separator.
        """
        if BufferTarget(target) is BufferTarget.SELECT:
            self._buffer.append_select_raw(text)
        else:
            self._buffer.append_body(text)
        return self

    def build(self) -> str:
        """Return the SQL text. Repeatable; the builder is not reset."""
        sql = self._buffer.render()
        logger.debug(f"Built query with {len(self._aliases)} bound aliases: {sql}")
        return sql

    def __str__(self) -> str:
        return self.build()

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _check_entity(self, entity: type) -> None:
        if not inspect.isclass(entity):
            raise invalid_entity_error(entity)

    def _field_name(self, entity: type, selector: FieldSelector) -> str:
        return resolve_field_name(entity, selector, self._metadata)

    def _resolve_alias(self, entity: type, alias: Optional[str] = None, new_alias: bool = False) -> str:
        if alias is not None:
            return alias
        return self._aliases.get_alias(entity, force_new=new_alias)

    def _table_name(self, entity: type, table_name: Optional[str] = None) -> str:
        self._check_entity(entity)
        if table_name is not None:
            return table_name

        mapped = self._table_mappings.get(entity) or self._configuration.get_table_mapping(entity)
        if mapped is not None:
            return self._naming.escape_identifier(mapped)

        override = self._metadata.get_type_override_name(entity)
        if override is not None:
            return self._naming.escape_identifier(override)

        return self._naming.to_table_name(entity.__name__)

    def _column_name(self, entity: type, field_name: str) -> str:
        override = self._metadata.get_field_override_name(entity, field_name)
        if override is not None:
            return self._naming.escape_identifier(override)
        return self._naming.to_column_name(field_name)

    def _column_reference(self, entity: type, field: FieldSelector, alias: Optional[str]) -> str:
        name = self._field_name(entity, field)
        column = self._column_name(entity, name)
        return encoding.qualify(self._resolve_alias(entity, alias), column)

    def _render_select_column(
        self,
        entity: type,
        field_name: str,
        table_alias: str,
        output_name: Optional[str] = None,
    ) -> str:
        return encoding.render_select_column(
            table_alias,
            self._column_name(entity, field_name),
            self._naming.escape_identifier(output_name or field_name),
        )

    def _condition(
        self,
        keyword: ClauseKeyword,
        entity: type,
        field: FieldSelector,
        value: Any,
        op: str,
        alias: Optional[str],
    ) -> "SqlBuilder":
        column_ref = self._column_reference(entity, field, alias)
        self._buffer.append_body(encoding.render_condition(keyword, column_ref, op, value))
        return self

    def _join(
        self,
        join_type: JoinType,
        left: type,
        right: type,
        left_field: FieldSelector,
        right_field: FieldSelector,
        left_alias: Optional[str],
        right_alias: Optional[str],
        op: str,
    ) -> "SqlBuilder":
        left_name = self._field_name(left, left_field)
        right_name = self._field_name(right, right_field)
        right_table = self._table_name(right)

        left_ref = encoding.qualify(self._resolve_alias(left, left_alias), self._column_name(left, left_name))
        right_table_alias = self._resolve_alias(right, right_alias)
        right_ref = encoding.qualify(right_table_alias, self._column_name(right, right_name))

        self._buffer.append_body(
            encoding.render_join(join_type, right_table, right_table_alias, left_ref, op, right_ref)
        )
        logger.debug(f"Appended {join_type.value} {right.__name__} on {left.__name__}.{left_name}")
        return self
