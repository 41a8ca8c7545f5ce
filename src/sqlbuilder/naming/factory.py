"""Naming Convention Factory.

This module provides a factory for creating naming conventions with
automatic configuration from environment settings.
"""

from typing import TYPE_CHECKING, Dict, Optional, Type

from sqlbuilder.common.exceptions import configuration_error
from sqlbuilder.constants import Dialect, NamingStrategy
from sqlbuilder.naming.base import BaseNamingConvention
from sqlbuilder.naming.identity import IdentityNamingConvention
from sqlbuilder.naming.snake_case import SnakeCaseNamingConvention

if TYPE_CHECKING:
    from sqlbuilder.settings import SqlBuilderSettings


_CONVENTIONS: Dict[NamingStrategy, Type[BaseNamingConvention]] = {
    NamingStrategy.IDENTITY: IdentityNamingConvention,
    NamingStrategy.SNAKE_CASE: SnakeCaseNamingConvention,
}


class NamingConventionFactory:
    """Factory for creating naming conventions.

    Example:
        >>> convention = NamingConventionFactory.create()  # from environment
        >>> snake = NamingConventionFactory.create_for(NamingStrategy.SNAKE_CASE)
    """

    @staticmethod
    def create_for(
        strategy: NamingStrategy,
        plural_table_names: bool = False,
        dialect: Dialect = Dialect.STANDARD,
    ) -> BaseNamingConvention:
        """Create a convention for an explicit strategy.

        Args:
            strategy: Naming strategy or its string value
            plural_table_names: Append ``s`` to derived table names
            dialect: Identifier dialect

        Returns:
            Configured naming convention

        Raises:
            SqlBuilderError: If the strategy is not supported.
        """
        try:
            convention_cls = _CONVENTIONS[NamingStrategy(strategy)]
        except ValueError as e:
            raise configuration_error(
                f"Unsupported naming convention: {strategy}. "
                f"Supported conventions: {', '.join(s.value for s in NamingStrategy)}",
                config_key="naming_convention",
                cause=e,
            ) from e

        return convention_cls(plural_table_names=plural_table_names, dialect=dialect)

    @staticmethod
    def create(settings: Optional["SqlBuilderSettings"] = None) -> BaseNamingConvention:
        """Create a naming convention auto-configured from settings.

        Args:
            settings: Settings to read; the process-wide settings when omitted

        Returns:
            Naming convention matching ``naming_convention``,
            ``plural_table_names`` and ``dialect``.
        """
        if settings is None:
            from sqlbuilder.settings import get_settings
            settings = get_settings()

        return NamingConventionFactory.create_for(
            settings.naming_convention,
            plural_table_names=settings.plural_table_names,
            dialect=settings.dialect,
        )


def get_naming_convention() -> BaseNamingConvention:
    """Get a naming convention configured from the environment."""
    return NamingConventionFactory.create()
