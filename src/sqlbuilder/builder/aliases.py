"""Table alias registry."""

import logging
from typing import Dict, Optional

from sqlbuilder.constants import TABLE_ALIAS_PREFIX

logger = logging.getLogger(__name__)


class AliasRegistry:
    """Binds entity classes to generated table aliases for one query.

    Aliases are the prefix followed by a counter that only ever increases,
    so one registry never hands out the same alias twice.

    Example:
        >>> registry = AliasRegistry()
        >>> registry.get_alias(Customer)
        'kvr0'
        >>> registry.get_alias(Customer)
        'kvr0'
        >>> registry.get_alias(Customer, force_new=True)
        'kvr1'
        >>> registry.get_alias(Customer)
        'kvr1'
    """

    def __init__(self, prefix: str = TABLE_ALIAS_PREFIX):
        self.prefix = prefix
        self._counter = 0
        self._bindings: Dict[type, str] = {}

    def get_alias(self, entity: type, force_new: bool = False) -> str:
        """Return the alias bound to ``entity``, minting one if needed.

        Args:
            entity: Entity class
            force_new: Mint a new alias even when one is already bound. The
                new alias replaces the binding.

        Returns:
            The bound alias
        """
        if not force_new:
            alias = self._bindings.get(entity)
            if alias is not None:
                return alias

        alias = f"{self.prefix}{self._counter}"
        self._counter += 1
        self._bindings[entity] = alias
        logger.debug(f"Bound alias {alias} to {getattr(entity, '__name__', entity)}")
        return alias

    def peek(self, entity: type) -> Optional[str]:
        """Return the bound alias without minting."""
        return self._bindings.get(entity)

    def __contains__(self, entity: type) -> bool:
        return entity in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)
