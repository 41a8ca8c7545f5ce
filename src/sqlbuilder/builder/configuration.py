"""Process-wide builder configuration.

``BuilderConfiguration`` holds what every new builder starts from: the
default naming convention, the table alias prefix and the process-wide
table mappings. Builders capture the naming convention and alias prefix
when they are created; process-wide table mappings are read whenever a
table name is resolved.

The process-wide instance is unsynchronized mutable state. Establish it
during single-threaded startup, before builders are used concurrently.

Example:
    >>> from sqlbuilder.builder.configuration import get_configuration
    >>> from sqlbuilder.naming import SnakeCaseNamingConvention
    >>>
    >>> config = get_configuration()
    >>> config.use_naming_convention(SnakeCaseNamingConvention())
    >>> config.map_table(Order, "Orders")
"""

import inspect
import logging
from typing import TYPE_CHECKING, Dict, Optional

from sqlbuilder.common.exceptions import invalid_entity_error, validation_error
from sqlbuilder.constants import TABLE_ALIAS_PREFIX
from sqlbuilder.naming import IdentityNamingConvention, NamingConventionFactory
from sqlbuilder.protocols import NamingConvention

if TYPE_CHECKING:
    from sqlbuilder.settings import SqlBuilderSettings

logger = logging.getLogger(__name__)


def validate_table_name(entity: type, name: str) -> None:
    """Reject mappings that could never produce a usable table reference."""
    if not inspect.isclass(entity):
        raise invalid_entity_error(entity)
    if not isinstance(name, str) or not name.strip():
        raise validation_error(
            f"Table name for {entity.__name__} must be a non-empty string",
            field="name",
            value=name,
        )


class BuilderConfiguration:
    """Defaults shared by builders.

    Attributes:
        naming_convention: Convention new builders start with
        alias_prefix: Prefix of generated table aliases
    """

    def __init__(
        self,
        naming_convention: Optional[NamingConvention] = None,
        alias_prefix: str = TABLE_ALIAS_PREFIX,
    ):
        self.naming_convention = naming_convention or IdentityNamingConvention()
        self.alias_prefix = alias_prefix
        self._table_mappings: Dict[type, str] = {}

    @classmethod
    def from_settings(cls, settings: Optional["SqlBuilderSettings"] = None) -> "BuilderConfiguration":
        """Create a configuration from environment settings.

        Args:
            settings: Settings to read; the process-wide settings when omitted

        Returns:
            Configuration with the naming convention and alias prefix the
            settings describe and no table mappings.
        """
        if settings is None:
            from sqlbuilder.settings import get_settings
            settings = get_settings()

        return cls(
            naming_convention=NamingConventionFactory.create(settings),
            alias_prefix=settings.table_alias_prefix,
        )

    def use_naming_convention(self, naming_convention: NamingConvention) -> "BuilderConfiguration":
        """Replace the default naming convention.

        Builders created before the call keep the convention they captured.
        """
        if not isinstance(naming_convention, NamingConvention):
            raise validation_error(
                "Naming convention must implement to_table_name, to_column_name and escape_identifier",
                field="naming_convention",
                value=naming_convention,
            )
        self.naming_convention = naming_convention
        logger.debug(f"Default naming convention set to {naming_convention!r}")
        return self

    def map_table(self, entity: type, name: str) -> "BuilderConfiguration":
        """Register a process-wide table name for an entity class.

        Later registrations for the same class overwrite earlier ones.
        """
        validate_table_name(entity, name)
        self._table_mappings[entity] = name
        logger.debug(f"Mapped {entity.__name__} to table {name} (process-wide)")
        return self

    def unmap_table(self, entity: type) -> "BuilderConfiguration":
        self._table_mappings.pop(entity, None)
        return self

    def get_table_mapping(self, entity: type) -> Optional[str]:
        return self._table_mappings.get(entity)

    @property
    def table_mappings(self) -> Dict[type, str]:
        """Copy of the process-wide table mappings."""
        return dict(self._table_mappings)


# Singleton instance
_configuration: Optional[BuilderConfiguration] = None


def get_configuration(force_reload: bool = False) -> BuilderConfiguration:
    """Get the process-wide builder configuration.

    Created from settings on first access and reused afterwards.

    Args:
        force_reload: If True, rebuilds the configuration from settings,
                     dropping every process-wide table mapping.

    Returns:
        BuilderConfiguration: The process-wide configuration
    """
    global _configuration

    if _configuration is None or force_reload:
        _configuration = BuilderConfiguration.from_settings()

    return _configuration


def reset_configuration() -> None:
    """Discard the process-wide configuration.

    This is primarily for testing; the next ``get_configuration`` call
    rebuilds it from settings.
    """
    global _configuration
    _configuration = None
