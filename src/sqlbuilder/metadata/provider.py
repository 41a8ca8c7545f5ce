"""Reflection-based entity metadata provider.

Entity classes are described by their annotated public attributes and
their public readable properties. The provider understands three kinds of
entity class:

    - dataclasses (``dataclasses.fields``)
    - pydantic models (``model_fields``)
    - plain classes with class-level annotations

Properties follow the annotated attributes and are typed by the getter's
return annotation. An annotation that cannot be resolved leaves its field
declared but unmappable.

Resolved metadata is cached per class; call :meth:`clear_cache` after
redefining classes at runtime (tests, notebooks).
"""

import dataclasses
import inspect
import logging
import sys
import types
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Annotated, Any, ClassVar, Dict, Iterator, List, Optional, Tuple, Union, get_args, get_origin, get_type_hints
from uuid import UUID

from pydantic import BaseModel

from sqlbuilder.common.exceptions import invalid_entity_error
from sqlbuilder.logging import get_logger
from sqlbuilder.metadata.annotations import Column, NotMapped, get_table_metadata
from sqlbuilder.types import EntityMetadata, FieldMetadata

# Field kinds selected by wildcard expansion. Membership is exact, so enums
# and other subclasses of these types are not mappable.
MAPPABLE_TYPES = frozenset({
    int, float, Decimal,
    str,
    bool,
    datetime, date, time, timedelta,
    bytes, bytearray,
    UUID,
})

_UNION_TYPES: Tuple[Any, ...] = (Union,)
if sys.version_info >= (3, 10):
    _UNION_TYPES = (Union, types.UnionType)

if sys.version_info >= (3, 14):
    import annotationlib


def _unwrap(annotation: Any) -> Tuple[Any, List[Any]]:
    """Strip ``Annotated`` and ``Optional`` layers from an annotation.

    Returns:
        The bare annotation and the ``Annotated`` extras found on the way
    """
    extras: List[Any] = []
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            args = get_args(annotation)
            annotation = args[0]
            extras.extend(args[1:])
        elif origin in _UNION_TYPES:
            members = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(members) != 1:
                return annotation, extras
            annotation = members[0]
        else:
            return annotation, extras


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _own_annotations(cls: type) -> Dict[str, Any]:
    """Annotations written in the body of ``cls`` itself, unevaluated where possible."""
    if sys.version_info >= (3, 14):
        return annotationlib.get_annotations(cls, format=annotationlib.Format.STRING)
    if sys.version_info >= (3, 10):
        return inspect.get_annotations(cls)
    return dict(cls.__dict__.get("__annotations__", {}))


def _resolve_each_annotation(entity: type) -> Dict[str, Any]:
    """Resolve annotations one at a time along the MRO.

    Annotations that cannot be resolved (names defined in a local scope or
    imported only for type checking) are kept as written, so the field is
    still declared but never mappable.
    """
    resolved: Dict[str, Any] = {}
    for cls in reversed(entity.__mro__):
        if cls is object:
            continue
        module = sys.modules.get(cls.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        localns = dict(vars(cls))
        for name, annotation in _own_annotations(cls).items():
            if not isinstance(annotation, str):
                resolved[name] = annotation
                continue
            try:
                resolved[name] = eval(annotation, globalns, localns)
            except (NameError, TypeError, AttributeError, SyntaxError):
                resolved[name] = annotation
    return resolved


def _return_annotation(getter: Any) -> Any:
    try:
        return get_type_hints(getter, include_extras=True).get("return")
    except (NameError, TypeError, AttributeError, SyntaxError):
        return getattr(getter, "__annotations__", {}).get("return")


def _readable_properties(entity: type) -> Dict[str, Any]:
    """Public properties with a getter, mapped to their return annotation.

    Properties defined by pydantic itself are not entity members.
    """
    properties: Dict[str, Any] = {}
    for cls in reversed(entity.__mro__):
        if cls is object or cls.__module__.split(".")[0] == "pydantic":
            continue
        for name, member in vars(cls).items():
            if isinstance(member, property) and member.fget is not None:
                properties[name] = _return_annotation(member.fget)
    return properties


class ReflectionMetadataProvider:
    """Metadata provider that reflects over entity class annotations.

    Column overrides and exclusions are read from ``Annotated`` markers
    (:class:`Column`, :class:`NotMapped`); table overrides from the
    ``@table`` decorator.

    Example:
        >>> provider = ReflectionMetadataProvider()
        >>> [f.name for f in provider.get_mappable_fields(Customer)]
        ['Id', 'Name']
    """

    def __init__(self):
        self.logger = get_logger(__name__)
        self._cache: Dict[type, EntityMetadata] = {}
        self._hits = 0
        self._misses = 0

    def get_metadata(self, entity: type) -> EntityMetadata:
        """Resolve (or fetch from cache) the metadata of an entity class.

        Raises:
            SqlBuilderError: If entity is not a class.
        """
        if not inspect.isclass(entity):
            raise invalid_entity_error(entity)

        cached = self._cache.get(entity)
        if cached is not None:
            self._hits += 1
            return cached

        self._misses += 1
        table_metadata = get_table_metadata(entity)
        metadata = EntityMetadata(
            entity=entity,
            table_name=table_metadata.name if table_metadata else None,
            fields=list(self._reflect_fields(entity)),
        )
        self._cache[entity] = metadata
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                f"Resolved metadata for {entity.__name__}: {len(metadata.fields)} fields, "
                f"{len(metadata.selectable_fields)} selectable",
                extra={"entity_metadata": metadata.to_dict()},
            )
        return metadata

    def get_mappable_fields(self, entity: type) -> List[FieldMetadata]:
        return self.get_metadata(entity).selectable_fields

    def get_field_override_name(self, entity: type, field_name: str) -> Optional[str]:
        field = self.get_metadata(entity).get_field(field_name)
        return field.column_name if field else None

    def get_type_override_name(self, entity: type) -> Optional[str]:
        return self.get_metadata(entity).table_name

    def has_field(self, entity: type, field_name: str) -> bool:
        return self.get_metadata(entity).get_field(field_name) is not None

    def clear_cache(self) -> None:
        """Drop all resolved metadata."""
        cleared = len(self._cache)
        self._cache.clear()
        self._hits = 0
        self._misses = 0
        self.logger.debug(f"Cleared {cleared} entity metadata cache entries")

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with entry count, hits, misses and cached class names
        """
        return {
            "entries": len(self._cache),
            "hits": self._hits,
            "misses": self._misses,
            "entities": sorted(entity.__name__ for entity in self._cache),
        }

    def _reflect_fields(self, entity: type) -> Iterator[FieldMetadata]:
        for name, annotation, extras in self._declared_members(entity):
            if name.startswith("_") or _is_class_var(annotation):
                continue

            bare, nested_extras = _unwrap(annotation)
            markers = list(extras) + nested_extras
            column_name = None
            excluded = False
            for marker in markers:
                if isinstance(marker, Column):
                    column_name = marker.name
                elif isinstance(marker, NotMapped):
                    excluded = True

            yield FieldMetadata(
                name=name,
                annotation=bare,
                column_name=column_name,
                excluded=excluded,
                mappable=bare in MAPPABLE_TYPES,
            )

    def _declared_members(self, entity: type) -> Iterator[Tuple[str, Any, List[Any]]]:
        """Yield annotated attributes, then readable properties not already declared."""
        declared = set()
        for name, annotation, extras in self._declared_annotations(entity):
            declared.add(name)
            yield name, annotation, extras

        for name, annotation in _readable_properties(entity).items():
            if name not in declared:
                yield name, annotation, []

    def _declared_annotations(self, entity: type) -> Iterator[Tuple[str, Any, List[Any]]]:
        """Yield ``(name, annotation, extras)`` for every declared attribute.

        Base-class attributes come first, in declaration order.
        """
        if issubclass(entity, BaseModel):
            for name, field_info in entity.model_fields.items():
                yield name, field_info.annotation, list(field_info.metadata)
            return

        try:
            hints = get_type_hints(entity, include_extras=True)
        except (NameError, TypeError, AttributeError, SyntaxError) as e:
            self.logger.debug(
                f"Resolving annotations of {entity.__name__} one by one: {e}"
            )
            hints = _resolve_each_annotation(entity)

        if dataclasses.is_dataclass(entity):
            for field in dataclasses.fields(entity):
                yield field.name, hints.get(field.name, field.type), []
            return

        for name, annotation in hints.items():
            yield name, annotation, []


# Singleton instance
_provider: Optional[ReflectionMetadataProvider] = None


def get_metadata_provider() -> ReflectionMetadataProvider:
    """Get the shared reflection provider used by builders by default."""
    global _provider

    if _provider is None:
        _provider = ReflectionMetadataProvider()

    return _provider
