"""Tests for the declarative schema Pydantic models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from versionator.errors import VersionFormatError
from versionator.schema import (
    BUILTIN_LEAF_TYPES,
    ExclusionReport,
    PropertySpec,
    SchemaSpec,
    TypeSpec,
    VersionRange,
)
from versionator.version import BEGINNING_OF_TIME, END_OF_TIME, Version


# ---------------------------------------------------------------------------
# VersionRange
# ---------------------------------------------------------------------------


class TestVersionRange:
    def test_defaults_are_open(self):
        r = VersionRange()
        assert r.since == BEGINNING_OF_TIME
        assert r.until == END_OF_TIME
        assert r.contains("0.0.1")
        assert r.contains("123456")

    def test_contains_accepts_parsed_version(self):
        r = VersionRange(since="2.0", until="3.0")
        assert r.contains(Version("2.5"))
        assert not r.contains(Version("3.1"))

    def test_bounds_kept_raw(self):
        r = VersionRange(since="2.0", until="3.0")
        since, until = r.bounds()
        assert since.raw == "2.0"
        assert until.raw == "3.0"

    def test_malformed_bound_surfaces_on_use(self):
        r = VersionRange(since="2.x")
        with pytest.raises(VersionFormatError):
            r.contains("2.0")

    def test_extra_keys_rejected(self):
        with pytest.raises(ValidationError):
            VersionRange(since="1.0", deprecated=True)


# ---------------------------------------------------------------------------
# PropertySpec / TypeSpec
# ---------------------------------------------------------------------------


class TestPropertySpec:
    def test_minimal(self):
        p = PropertySpec(name="street")
        assert p.type == "str"
        assert p.versioned is None

    def test_dotted_name_rejected(self):
        with pytest.raises(ValidationError, match="must not contain"):
            PropertySpec(name="address.zip")

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            PropertySpec(name="")


class TestTypeSpec:
    def test_duplicate_property_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate property"):
            TypeSpec(
                name="Address",
                properties=[PropertySpec(name="zip"), PropertySpec(name="zip")],
            )

    def test_get_property(self):
        t = TypeSpec(name="Address", properties=[PropertySpec(name="zip")])
        assert t.get_property("zip").name == "zip"
        assert t.get_property("missing") is None


# ---------------------------------------------------------------------------
# SchemaSpec
# ---------------------------------------------------------------------------


def _schema(**kwargs) -> SchemaSpec:
    defaults = {"schema_version": "0.1.0"}
    defaults.update(kwargs)
    return SchemaSpec(**defaults)


class TestSchemaSpec:
    def test_empty_schema(self):
        spec = _schema()
        assert spec.types == []
        assert spec.all_leaf_types() == BUILTIN_LEAF_TYPES

    def test_schema_version_required(self):
        with pytest.raises(ValidationError):
            SchemaSpec()

    def test_duplicate_type_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate type"):
            _schema(types=[TypeSpec(name="A"), TypeSpec(name="A")])

    def test_unknown_property_type_rejected(self):
        with pytest.raises(ValidationError, match="Unknown type 'Money'"):
            _schema(types=[
                TypeSpec(name="Order", properties=[PropertySpec(name="total", type="Money")]),
            ])

    def test_custom_leaf_type_accepted(self):
        spec = _schema(
            leaf_types=["Money"],
            types=[TypeSpec(name="Order", properties=[PropertySpec(name="total", type="Money")])],
        )
        assert "Money" in spec.all_leaf_types()

    def test_type_shadowing_leaf_rejected(self):
        with pytest.raises(ValidationError, match="shadow leaf"):
            _schema(types=[TypeSpec(name="datetime")])

    def test_self_reference_allowed(self):
        spec = _schema(types=[
            TypeSpec(name="Node", properties=[PropertySpec(name="next", type="Node")]),
        ])
        assert spec.get_type("Node") is not None
        assert spec.get_type("Missing") is None


class TestExclusionReport:
    def test_count(self):
        report = ExclusionReport(root_type="Person", version="1.0", excluded=["a", "b.c"])
        assert report.count == 2
