"""Snake case naming convention."""

from typing import Optional

from sqlbuilder.naming.base import BaseNamingConvention


def to_snake_case(name: Optional[str]) -> Optional[str]:
    """Convert a PascalCase or camelCase name to snake_case.

    The first character is lowercased. Every later uppercase letter becomes
    an underscore followed by its lowercase form; all other characters pass
    through. Consecutive capitals are not grouped, so ``ABC`` becomes
    ``a_b_c``.

    Args:
        name: Name to convert; empty strings and None are returned unchanged

    Returns:
        The snake_case name

    Example:
        >>> to_snake_case("CustomerOrder")
        'customer_order'
        >>> to_snake_case("firstName")
        'first_name'
    """
    if not name:
        return name

    parts = [name[0].lower()]
    for char in name[1:]:
        if char.isupper():
            parts.append("_")
            parts.append(char.lower())
        else:
            parts.append(char)
    return "".join(parts)


class SnakeCaseNamingConvention(BaseNamingConvention):
    """Converts type and field names to snake_case."""

    def transform(self, name: str) -> str:
        return to_snake_case(name)
