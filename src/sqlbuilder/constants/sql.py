"""SQL clause constants.

This module contains the fundamental enums and literal values used when
fragments are rendered. As the lowest layer of the package it has no
dependencies on other sqlbuilder modules.
"""

from enum import Enum


# Prefix of generated table aliases (kvr0, kvr1, ...)
TABLE_ALIAS_PREFIX = "kvr"

SELECT_KEYWORD = "SELECT "
COLUMN_SEPARATOR = ", "
DEFAULT_OPERATOR = "="


class JoinType(str, Enum):
    """Join kinds supported by the fluent builder.

    The value is the exact keyword emitted in front of ``JOIN``.
    """

    INNER = "JOIN"
    LEFT = "LEFT JOIN"
    RIGHT = "RIGHT JOIN"
    FULL = "FULL JOIN"


class ClauseKeyword(str, Enum):
    """Keywords that open a body fragment."""

    FROM = "FROM"
    WHERE = "WHERE"
    AND = "AND"
    OR = "OR"
    ORDER_BY = "ORDER BY"


class SortDirection(str, Enum):
    """ORDER BY direction."""

    ASC = "ASC"
    DESC = "DESC"


class BufferTarget(str, Enum):
    """Which buffer a raw fragment is appended to.

    - SELECT: the select list (everything between ``SELECT`` and ``FROM``)
    - BODY: FROM and every clause after it
    """

    SELECT = "select"
    BODY = "body"
