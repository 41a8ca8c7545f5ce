"""Settings module for sqlbuilder.

Configuration management built on Pydantic Settings. Settings supply the
process-wide defaults that new builders start from: naming convention,
pluralization, identifier dialect and the table alias prefix.

Configuration Sources (precedence order):
    1. Environment Variables (highest priority)
    2. ``.env`` file in the working directory
    3. Default Values in code (lowest priority)

Environment Variable Naming:
    - Format: SQLBUILDER_SETTING_NAME
    - Case: UPPER_SNAKE_CASE (matching is case-insensitive)

Quick Start:
    >>> from sqlbuilder.settings import get_settings
    >>>
    >>> settings = get_settings()
    >>> settings.naming_convention
    <NamingStrategy.IDENTITY: 'identity'>
"""

from .main import SqlBuilderSettings, get_settings, _reload_settings
from .base import SqlBuilderBaseSettings

__all__ = [
    "SqlBuilderSettings",
    "SqlBuilderBaseSettings",
    "get_settings",
]
