"""Tests for version parsing and ordering."""

from __future__ import annotations

import math

import pytest

from versionator.errors import IncomparableVersionsError, VersionFormatError
from versionator.version import (
    BEGINNING_OF_TIME,
    END_OF_TIME,
    Version,
    compare,
    is_valid,
    parse_parts,
)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParsing:
    def test_dotted(self):
        assert Version("2.0.1.52").parts == (2, 0, 1, 52)

    def test_mixed_separators(self):
        assert Version("1-2-3").parts == (1, 2, 3)
        assert Version("1.2-3").parts == (1, 2, 3)
        assert Version("1..2").parts == (1, 2)

    def test_single_component(self):
        assert Version("9999").parts == (9999,)

    def test_raw_preserved(self):
        v = Version("1.02")
        assert v.raw == "1.02"
        assert str(v) == "1.02"
        assert v.parts == (1, 2)

    def test_beginning_sentinel(self):
        v = Version(BEGINNING_OF_TIME)
        assert v.parts == (-math.inf,)
        assert v.is_sentinel

    def test_end_sentinel(self):
        v = Version(END_OF_TIME)
        assert v.parts == (math.inf,)
        assert v.is_sentinel

    def test_parsed_parts_are_ints(self):
        assert all(isinstance(p, int) for p in Version("2.0.1.52").parts)
        assert isinstance(Version(END_OF_TIME).parts[0], float)

    def test_text_only(self):
        v = Version("abc")
        assert v.parts is None
        assert not v.is_numeric

    def test_non_numeric_token_fails(self):
        with pytest.raises(VersionFormatError) as exc_info:
            Version("1.x.3")
        assert exc_info.value.token == "x"
        assert exc_info.value.raw == "1.x.3"

    def test_suffix_token_fails(self):
        with pytest.raises(VersionFormatError):
            Version("2.0b1")

    def test_blank_fails(self):
        with pytest.raises(VersionFormatError):
            Version("")
        with pytest.raises(VersionFormatError):
            Version("   ")

    def test_non_string_fails(self):
        with pytest.raises(VersionFormatError):
            Version(2.0)  # type: ignore[arg-type]

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_parts("1.x")

    def test_classmethod_sentinels(self):
        assert Version.beginning().raw == BEGINNING_OF_TIME
        assert Version.end().raw == END_OF_TIME


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


class TestCompare:
    @pytest.mark.parametrize("raw", ["1", "1.2", "2.0.1.52", "abc", BEGINNING_OF_TIME, END_OF_TIME])
    def test_reflexive(self, raw):
        assert compare(Version(raw), Version(raw)) == 0

    def test_padding_equivalence(self):
        assert compare(Version("1.2"), Version("1.2.0")) == 0
        assert compare(Version("1.2.0.0"), Version("1.2")) == 0

    def test_shorter_precedes_longer_non_zero(self):
        assert compare(Version("2.0"), Version("2.0.1")) < 0
        assert compare(Version("2.0.1"), Version("2.0")) > 0

    def test_numeric_not_lexicographic(self):
        assert compare(Version("1.10"), Version("1.9")) > 0

    def test_first_difference_wins(self):
        assert compare(Version("2.0.0"), Version("1.99.99")) > 0

    def test_result_is_unit(self):
        assert compare(Version("1"), Version("500")) == -1
        assert compare(Version("500"), Version("1")) == 1

    def test_sentinels_bound_everything(self):
        begin, end = Version(BEGINNING_OF_TIME), Version(END_OF_TIME)
        for raw in ["0", "0.0.1", "1", "99999999999999999999999"]:
            assert compare(begin, Version(raw)) < 0
            assert compare(Version(raw), end) < 0
        assert compare(begin, end) < 0

    def test_text_only_compares_lexically(self):
        assert compare(Version("alpha"), Version("beta")) < 0
        assert compare(Version("beta"), Version("alpha")) > 0

    def test_mixed_fails(self):
        with pytest.raises(IncomparableVersionsError):
            compare(Version("1.0"), Version("abc"))
        with pytest.raises(IncomparableVersionsError):
            compare(Version("abc"), Version("1.0"))

    def test_mixed_error_is_type_error(self):
        with pytest.raises(TypeError):
            Version("1.0").compare(Version("abc"))


class TestRichComparisons:
    def test_equality_uses_padding(self):
        assert Version("1.2") == Version("1.2.0")
        assert hash(Version("1.2")) == hash(Version("1.2.0"))

    def test_set_deduplicates_equal_versions(self):
        assert len({Version("3"), Version("3.0"), Version("3.0.0")}) == 1

    def test_mixed_equality_is_false(self):
        assert Version("1.0") != Version("abc")

    def test_ordering_operators(self):
        assert Version("1.0") < Version("1.1")
        assert Version("1.1") <= Version("1.1.0")
        assert Version("2") > Version("1.9.9")
        assert Version("2") >= Version("2.0")

    def test_sorting(self):
        raws = ["1.10", "1.2", END_OF_TIME, "1.2.1", BEGINNING_OF_TIME]
        ordered = [v.raw for v in sorted(Version(r) for r in raws)]
        assert ordered == [BEGINNING_OF_TIME, "1.2", "1.2.1", "1.10", END_OF_TIME]

    def test_mixed_ordering_fails(self):
        with pytest.raises(IncomparableVersionsError):
            Version("1.0") < Version("abc")


# ---------------------------------------------------------------------------
# Range membership
# ---------------------------------------------------------------------------


class TestIsValid:
    @pytest.mark.parametrize(
        "requested,expected",
        [("1.9", False), ("2.0", True), ("2.5.3", True), ("3.0", True), ("3.0.0", True), ("3.1", False)],
    )
    def test_inclusive_bounds(self, requested, expected):
        assert is_valid(Version(requested), Version("2.0"), Version("3.0")) is expected

    @pytest.mark.parametrize("raw", ["0", "1", "2.0.1", "123.456.789"])
    def test_sentinel_range_contains_everything(self, raw):
        assert Version(raw).is_valid(Version(BEGINNING_OF_TIME), Version(END_OF_TIME))

    def test_open_upper_bound(self):
        assert is_valid(Version("42"), Version("2.0"), Version(END_OF_TIME))

    def test_mixed_propagates(self):
        with pytest.raises(IncomparableVersionsError):
            is_valid(Version("beta"), Version("1.0"), Version(END_OF_TIME))
