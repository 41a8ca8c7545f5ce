"""Logging filters for context injection.

This module provides filters that inject context variables into log records,
enabling correlation of builder logs with the request and the query being
assembled.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Dict, Optional

from sqlbuilder.__version__ import __version__

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
query_label_var: ContextVar[Optional[str]] = ContextVar("query_label", default=None)

_static_context: Dict[str, Any] = {}


class ContextFilter(logging.Filter):
    """Logging filter that adds context variables to log records.

    Request-scoped values come from context variables; static values
    (environment and arbitrary extra fields) come from
    :func:`set_logging_context`.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record.

        Args:
            record: Log record to enhance

        Returns:
            Always True (doesn't filter out any records)
        """
        for key, value in _static_context.items():
            setattr(record, key, value)

        setattr(record, "request_id", request_id_var.get())
        setattr(record, "query_label", query_label_var.get())
        setattr(record, "sdk_name", "sqlbuilder")
        setattr(record, "sdk_version", __version__)

        return True


def set_logging_context(
    environment: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """Replace the static fields stamped on every record."""
    _static_context.clear()
    if environment is not None:
        _static_context["environment"] = environment
    if extra:
        _static_context.update(extra)


def set_request_context(
    request_id: Optional[str] = None,
    query_label: Optional[str] = None,
) -> None:
    """Set request context variables."""
    if request_id is not None:
        request_id_var.set(request_id)
    if query_label is not None:
        query_label_var.set(query_label)


def clear_request_context() -> None:
    """Clear all request context variables."""
    request_id_var.set(None)
    query_label_var.set(None)
