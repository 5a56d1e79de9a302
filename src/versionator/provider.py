"""
Schema providers: the source of properties and version metadata.

The ``ExclusionCalculator`` never inspects types itself; it asks a
``SchemaProvider`` for a type's properties and for each property's
``VersionRange``.  Two providers ship here:

- ``RegistrySchemaProvider`` serves a declarative ``SchemaSpec`` (usually
  loaded from YAML), keyed by type name.
- ``ModelSchemaProvider`` reads Pydantic models whose fields carry a
  ``Versioned`` marker in their ``Annotated`` metadata::

      class Address(BaseModel):
          street: str
          zip: Annotated[str, Versioned(since="2.0")] = ""

Both raise ``SchemaIntrospectionError`` when a type or property cannot be
described; the calculator treats that as recoverable.
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    Hashable,
    Optional,
    Protocol,
    Union,
    get_args,
    get_origin,
    runtime_checkable,
)

from pydantic import BaseModel

from versionator.errors import SchemaIntrospectionError
from versionator.schema import SchemaSpec, TypeSpec, VersionRange
from versionator.version import BEGINNING_OF_TIME, END_OF_TIME


@dataclass(frozen=True)
class PropertyInfo:
    """A property as seen by the calculator."""

    name: str
    declared_type: Hashable
    is_complex: bool


@runtime_checkable
class SchemaProvider(Protocol):
    """Capability consumed by ``ExclusionCalculator``."""

    def properties_of(self, type_ref: Hashable) -> list[PropertyInfo]:
        """Ordered properties of *type_ref*."""
        ...

    def version_range_of(
        self, type_ref: Hashable, property_name: str
    ) -> Optional[VersionRange]:
        """Version range declared on a property, or ``None``."""
        ...


# ---------------------------------------------------------------------------
# Declarative registry
# ---------------------------------------------------------------------------


class RegistrySchemaProvider:
    """Serves a ``SchemaSpec``; type references are type names."""

    def __init__(self, spec: SchemaSpec) -> None:
        self._spec = spec
        self._types: dict[str, TypeSpec] = {t.name: t for t in spec.types}

    @property
    def spec(self) -> SchemaSpec:
        return self._spec

    def type_names(self) -> list[str]:
        return list(self._types)

    def properties_of(self, type_ref: Hashable) -> list[PropertyInfo]:
        type_spec = self._lookup(type_ref)
        return [
            PropertyInfo(
                name=prop.name,
                declared_type=prop.type,
                is_complex=prop.type in self._types,
            )
            for prop in type_spec.properties
        ]

    def version_range_of(
        self, type_ref: Hashable, property_name: str
    ) -> Optional[VersionRange]:
        prop = self._lookup(type_ref).get_property(property_name)
        if prop is None:
            raise SchemaIntrospectionError(type_ref, property_name, "no such property")
        return prop.versioned

    def _lookup(self, type_ref: Hashable) -> TypeSpec:
        type_spec = self._types.get(type_ref) if isinstance(type_ref, str) else None
        if type_spec is None:
            raise SchemaIntrospectionError(type_ref, reason="type is not declared")
        return type_spec


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Versioned:
    """Field marker declaring the versions a Pydantic field appears in.

    Place it in the field's ``Annotated`` metadata.  Omitted bounds are
    open.
    """

    since: str = BEGINNING_OF_TIME
    until: str = END_OF_TIME

    def to_range(self) -> VersionRange:
        return VersionRange(since=self.since, until=self.until)


def _unwrap_annotation(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Return ``(X, metadata)`` for ``Optional[X]`` or ``Optional[Annotated[X, ...]]``.

    Pydantic only collects ``Annotated`` metadata from the outermost form,
    so metadata nested inside ``Optional`` is returned here.
    """
    if get_origin(annotation) in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            annotation = args[0]
    if get_origin(annotation) is Annotated:
        inner, *metadata = get_args(annotation)
        return inner, tuple(metadata)
    return annotation, ()


def _is_model(candidate: Any) -> bool:
    return isinstance(candidate, type) and issubclass(candidate, BaseModel)


class ModelSchemaProvider:
    """Reads properties and ``Versioned`` markers from Pydantic models.

    A field is complex when its annotation (after unwrapping ``Optional``)
    is itself a ``BaseModel`` subclass.  Containers such as ``list[Model]``
    are leaves.
    """

    def properties_of(self, type_ref: Hashable) -> list[PropertyInfo]:
        if not _is_model(type_ref):
            raise SchemaIntrospectionError(type_ref, reason="not a Pydantic model")
        properties = []
        for name, field in type_ref.model_fields.items():
            declared, _ = _unwrap_annotation(field.annotation)
            properties.append(
                PropertyInfo(name=name, declared_type=declared, is_complex=_is_model(declared))
            )
        return properties

    def version_range_of(
        self, type_ref: Hashable, property_name: str
    ) -> Optional[VersionRange]:
        if not _is_model(type_ref):
            raise SchemaIntrospectionError(type_ref, property_name, "not a Pydantic model")
        field = type_ref.model_fields.get(property_name)
        if field is None:
            raise SchemaIntrospectionError(type_ref, property_name, "no such field")

        _, nested = _unwrap_annotation(field.annotation)
        markers = [m for m in (*field.metadata, *nested) if isinstance(m, Versioned)]
        if len(markers) > 1:
            raise SchemaIntrospectionError(
                type_ref, property_name, f"{len(markers)} Versioned markers"
            )
        if not markers:
            return None
        return markers[0].to_range()
