"""Field selectors.

A field can be referenced by its attribute name or by a one-argument
callable that reads exactly one attribute of the entity::

    builder.where(Customer, "Id", 5)
    builder.where(Customer, lambda c: c.Id, 5)

Callables are evaluated against a recording proxy, never against a real
instance, so they must be plain attribute reads. Anything else (arithmetic,
method calls, nested access) is rejected before any SQL is produced.
"""

from typing import Any, Callable, List, Union

from sqlbuilder.common.exceptions import invalid_field_reference_error, unknown_field_error
from sqlbuilder.protocols import EntityMetadataProvider

FieldSelector = Union[str, Callable[[Any], Any]]


class _FieldRef:
    """Result of reading one attribute from the recording proxy."""

    __slots__ = ("_name",)

    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return f"<field {self._name}>"


class _RecordingProxy:
    """Stands in for an entity instance and records attribute reads."""

    __slots__ = ("_reads",)

    def __init__(self):
        object.__setattr__(self, "_reads", [])

    def __getattribute__(self, name: str) -> _FieldRef:
        reads: List[str] = object.__getattribute__(self, "_reads")
        reads.append(name)
        return _FieldRef(name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise TypeError("selectors must not assign attributes")


def _evaluate(entity: type, selector: Callable[[Any], Any]) -> str:
    proxy = _RecordingProxy()
    try:
        result = selector(proxy)
    except Exception as e:
        raise invalid_field_reference_error(
            entity, selector, "expression is not a plain attribute read", cause=e
        ) from e

    reads: List[str] = object.__getattribute__(proxy, "_reads")
    if not isinstance(result, _FieldRef) or len(reads) != 1:
        raise invalid_field_reference_error(
            entity, selector, f"expression read {len(reads)} attribute(s) and returned {type(result).__name__}"
        )
    return result._name


def resolve_field_name(
    entity: type,
    selector: FieldSelector,
    provider: EntityMetadataProvider,
) -> str:
    """Resolve a field selector to the field's attribute name.

    Args:
        entity: Entity class the field belongs to
        selector: Attribute name or single-attribute callable
        provider: Metadata provider used to check that the field exists

    Returns:
        The field name as declared on the entity

    Raises:
        SqlBuilderError: INVALID_FIELD_REFERENCE when the selector is not a
            plain field reference; UNKNOWN_FIELD when the entity does not
            declare the field.
    """
    if isinstance(selector, str):
        name = selector
    elif callable(selector):
        name = _evaluate(entity, selector)
    else:
        raise invalid_field_reference_error(
            entity, selector, f"expected a field name or a callable, got {type(selector).__name__}"
        )

    if not provider.has_field(entity, name):
        raise unknown_field_error(entity, name)
    return name
