from typing import Optional

from pydantic import Field, field_validator

from sqlbuilder.constants import TABLE_ALIAS_PREFIX, Dialect, NamingStrategy
from .base import SqlBuilderBaseSettings

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class SqlBuilderSettings(SqlBuilderBaseSettings):
    """Process-wide defaults for new builders.

    Every field can be set through a ``SQLBUILDER_``-prefixed environment
    variable or a ``.env`` file, e.g. ``SQLBUILDER_NAMING_CONVENTION=snake_case``.
    """

    naming_convention: NamingStrategy = Field(
        default=NamingStrategy.IDENTITY,
        description="Base transform for table and column names: 'identity' keeps names as declared, "
                    "'snake_case' converts PascalCase/camelCase to snake_case."
    )
    plural_table_names: bool = Field(
        default=False,
        description="Append 's' to table names derived from the naming convention. "
                    "Explicit table names (mappings, @table) are never pluralized."
    )
    dialect: Dialect = Field(
        default=Dialect.STANDARD,
        description="Identifier escaping dialect: 'standard' leaves identifiers untouched, "
                    "'sqlserver' wraps them in square brackets."
    )
    table_alias_prefix: str = Field(
        default=TABLE_ALIAS_PREFIX,
        description="Prefix of generated table aliases. Aliases are the prefix followed by a counter."
    )
    log_level: str = Field(
        default="INFO",
        description="Log level used by setup_logging()."
    )

    @field_validator("table_alias_prefix")
    @classmethod
    def validate_table_alias_prefix(cls, v: str) -> str:
        """Alias prefixes must be usable as unquoted SQL identifiers."""
        v = v.strip()
        if not v or not v.isidentifier():
            raise ValueError(
                f"Invalid table alias prefix '{v}'. "
                f"Prefixes must start with a letter or underscore and contain only letters, digits or underscores."
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level '{v}'. Valid levels: {', '.join(_LOG_LEVELS)}")
        return level


# Singleton instance
_settings: Optional[SqlBuilderSettings] = None


def get_settings(force_reload: bool = False) -> SqlBuilderSettings:
    """Get the singleton settings instance.

    Settings are loaded from the environment on first access and reused
    afterwards.

    Args:
        force_reload: If True, creates a new settings instance even if
                     one already exists. Useful for testing or when
                     environment variables have changed.

    Returns:
        SqlBuilderSettings: The singleton settings instance

    Note:
        This function is thread-safe for reading but not for the initial
        creation. Load settings once at application startup before
        threading begins.
    """
    global _settings

    if _settings is None or force_reload:
        _settings = SqlBuilderSettings()

    return _settings


def _reload_settings() -> SqlBuilderSettings:
    """Force reload of settings.

    This is primarily for testing purposes where you need to reset
    the singleton instance.

    Returns:
        A fresh SqlBuilderSettings instance
    """
    global _settings
    _settings = None
    return get_settings(force_reload=True)
