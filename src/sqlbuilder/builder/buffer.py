"""Accumulating output of a builder."""

from typing import List

from sqlbuilder.constants import COLUMN_SEPARATOR, SELECT_KEYWORD


class QueryBuffer:
    """Select-list fragments and body fragments of one query.

    The select list is everything between ``SELECT`` and ``FROM``; the body
    is everything from ``FROM`` on. Rendering only concatenates, so it can
    be repeated.
    """

    def __init__(self):
        self._select: List[str] = []
        self._body: List[str] = []
        self._has_select = False

    @property
    def has_select(self) -> bool:
        """Whether a select fragment has opened the select list."""
        return self._has_select

    def append_select(self, sql: str, from_begin: bool = False) -> None:
        """Add a column list to the select list.

        A separator is added when the select list is already open. With
        ``from_begin`` the fragment (and its separator) go to the front.
        """
        if self._has_select:
            if from_begin:
                self._select.insert(0, COLUMN_SEPARATOR)
            else:
                self._select.append(COLUMN_SEPARATOR)
        else:
            self._has_select = True

        if from_begin:
            self._select.insert(0, sql)
        else:
            self._select.append(sql)

    def append_select_raw(self, text: str) -> None:
        """Add literal text to the select list, without separator."""
        self._select.append(text)

    def append_body(self, text: str) -> None:
        self._body.append(text)

    def render(self) -> str:
        return SELECT_KEYWORD + "".join(self._select) + "".join(self._body)
