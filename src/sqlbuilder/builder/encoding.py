"""Fragment rendering helpers.

All helpers take identifiers that are already resolved and escaped; they
only place them in the clause text.
"""

from typing import Any, Optional

from sqlbuilder.constants import ClauseKeyword, JoinType, SortDirection


def qualify(alias: Optional[str], column: str) -> str:
    """Prefix a column with its table alias."""
    return f"{alias}.{column}" if alias else column


def render_select_column(alias: Optional[str], column: str, output_name: str) -> str:
    """``alias.column AS output_name``"""
    return f"{qualify(alias, column)} AS {output_name}"


def render_table(table_name: str, alias: str) -> str:
    return f"{table_name} {alias}"


def render_from(table_name: str, alias: str) -> str:
    return f" {ClauseKeyword.FROM.value} {render_table(table_name, alias)}"


def render_condition(keyword: ClauseKeyword, column_ref: str, op: str, value: Any) -> str:
    """`` WHERE|AND|OR column op value``; the value is emitted verbatim."""
    return f" {keyword.value} {column_ref} {op} {value}"


def render_raw_clause(keyword: ClauseKeyword, sql: str) -> str:
    return f" {keyword.value} {sql}"


def render_order_by(expression: str, ascending: bool = True) -> str:
    direction = SortDirection.ASC if ascending else SortDirection.DESC
    return f" {ClauseKeyword.ORDER_BY.value} {expression} {direction.value}"


def render_join(
    join_type: JoinType,
    table_name: str,
    alias: str,
    left_ref: str,
    op: str,
    right_ref: str,
) -> str:
    """`` <KIND> JOIN table alias ON left op right``"""
    return f" {join_type.value} {render_table(table_name, alias)} ON {left_ref} {op} {right_ref}"
