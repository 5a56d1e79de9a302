"""
Pydantic v2 models for the declarative schema format.

A schema file declares named types, their properties, and an optional
``versioned`` range on each property.  ``RegistrySchemaProvider`` serves
these models to the ``ExclusionCalculator``.

All models use ``extra="forbid"`` to reject unknown keys at parse time.

Usage::

    from versionator.schema import SchemaSpec
    import yaml

    with open("person.schema.yaml") as fh:
        raw = yaml.safe_load(fh)
    spec = SchemaSpec.model_validate(raw)
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from versionator.version import BEGINNING_OF_TIME, END_OF_TIME, Version, is_valid

# Type names that are never walked into, regardless of version metadata.
BUILTIN_LEAF_TYPES: frozenset[str] = frozenset({
    "str",
    "int",
    "float",
    "bool",
    "bytes",
    "date",
    "datetime",
    "time",
    "decimal",
    "uuid",
    "list",
    "dict",
    "any",
})


# ---------------------------------------------------------------------------
# Version range
# ---------------------------------------------------------------------------


class VersionRange(BaseModel):
    """Inclusive ``[since, until]`` applicability of a field.

    Bounds are kept as raw text; they are parsed when a range is checked
    so that malformed bounds surface as ``VersionFormatError`` at
    computation time.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    since: str = Field(BEGINNING_OF_TIME, description="First version carrying the field")
    until: str = Field(END_OF_TIME, description="Last version carrying the field")

    def bounds(self) -> tuple[Version, Version]:
        return Version(self.since), Version(self.until)

    def contains(self, version: Version | str) -> bool:
        """True if *version* lies within this range."""
        if isinstance(version, str):
            version = Version(version)
        since, until = self.bounds()
        return is_valid(version, since, until)


# ---------------------------------------------------------------------------
# Types and properties
# ---------------------------------------------------------------------------


class PropertySpec(BaseModel):
    """A named property of a declared type."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    type: str = Field("str", min_length=1, description="Declared or leaf type name")
    versioned: Optional[VersionRange] = Field(
        None, description="Applicability range; absent means always present"
    )
    description: Optional[str] = Field(None)

    @model_validator(mode="after")
    def _check_name(self) -> "PropertySpec":
        if "." in self.name:
            raise ValueError(f"Property name must not contain '.': {self.name!r}")
        return self


class TypeSpec(BaseModel):
    """A complex type and its ordered properties."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    properties: list[PropertySpec] = Field(default_factory=list)
    description: Optional[str] = Field(None)

    @model_validator(mode="after")
    def _check_unique_properties(self) -> "TypeSpec":
        seen: set[str] = set()
        for prop in self.properties:
            if prop.name in seen:
                raise ValueError(
                    f"Duplicate property {prop.name!r} in type {self.name!r}"
                )
            seen.add(prop.name)
        return self

    def get_property(self, name: str) -> Optional[PropertySpec]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


# ---------------------------------------------------------------------------
# Top-level schema
# ---------------------------------------------------------------------------


class SchemaSpec(BaseModel):
    """
    Root model for a schema YAML file.

    Every property type must name either a declared type or a leaf type
    (``BUILTIN_LEAF_TYPES`` plus ``leaf_types``).
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(
        ..., min_length=1, description="Schema file format version (e.g. 0.1.0)"
    )
    description: Optional[str] = Field(None)
    leaf_types: list[str] = Field(
        default_factory=list,
        description="Additional opaque type names that are never walked into",
    )
    types: list[TypeSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_types(self) -> "SchemaSpec":
        names = [t.name for t in self.types]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate type name(s): {', '.join(duplicates)}")

        leaves = self.all_leaf_types()
        clashes = sorted(set(names) & leaves)
        if clashes:
            raise ValueError(
                f"Type name(s) shadow leaf types: {', '.join(clashes)}"
            )

        known = set(names) | leaves
        for type_spec in self.types:
            for prop in type_spec.properties:
                if prop.type not in known:
                    raise ValueError(
                        f"Unknown type {prop.type!r} for property "
                        f"{type_spec.name}.{prop.name}"
                    )
        return self

    def all_leaf_types(self) -> frozenset[str]:
        return BUILTIN_LEAF_TYPES | frozenset(self.leaf_types)

    def get_type(self, name: str) -> Optional[TypeSpec]:
        for type_spec in self.types:
            if type_spec.name == name:
                return type_spec
        return None


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


class ExclusionReport(BaseModel):
    """Excluded property paths for one (root type, version) pair."""

    model_config = ConfigDict(extra="forbid")

    root_type: str
    version: str
    excluded: list[str] = Field(default_factory=list, description="Sorted dot paths")

    @property
    def count(self) -> int:
        return len(self.excluded)
