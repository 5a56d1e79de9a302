"""
Loosely-structured version identifiers with a total ordering.

A ``Version`` keeps the raw text it was built from and, when the text
holds digits, the sequence of numeric components split on any run of
non-alphanumeric separators (``1.2``, ``1-2-3`` and ``1.2-3`` all parse).
Text without any digit (``"beta"``) is a text-only version that orders
lexicographically against other text-only versions.

Two reserved tokens bound every numeric version::

    Version(BEGINNING_OF_TIME) <= Version("0") <= Version(END_OF_TIME)

Shorter component sequences are padded with zeros before comparing, so
``1.2 == 1.2.0`` while ``2.0 < 2.0.1``.

Usage::

    from versionator.version import Version, compare, is_valid

    compare(Version("1.2"), Version("1.10"))          # -1
    Version("2.5").is_valid(Version("2.0"), Version("3.0"))  # True
"""

from __future__ import annotations

import math
import re
from itertools import zip_longest
from typing import Optional, Union

from versionator.errors import IncomparableVersionsError, VersionFormatError

BEGINNING_OF_TIME = "__BEGINNING_OF_TIME__"
END_OF_TIME = "__END_OF_TIME__"

# Python ints are unbounded, so the extremes sit at the float infinities;
# sentinel parts are the only non-int components.
MIN_PART = -math.inf
MAX_PART = math.inf

Part = Union[int, float]

_SEPARATOR_PATTERN = re.compile(r"[\W_]+")


def parse_parts(raw: str) -> Optional[tuple[Part, ...]]:
    """Split *raw* into numeric components.

    Returns ``None`` for text-only versions (no digit anywhere).

    Raises:
        VersionFormatError: If *raw* is blank, or holds digits alongside a
            token that is not purely numeric (e.g. ``"1.x.3"``).
    """
    if raw == BEGINNING_OF_TIME:
        return (MIN_PART,)
    if raw == END_OF_TIME:
        return (MAX_PART,)
    if not raw.strip():
        raise VersionFormatError(raw)
    if not any(ch.isdecimal() for ch in raw):
        return None

    parts: list[Part] = []
    for token in _SEPARATOR_PATTERN.split(raw):
        if not token:
            continue
        if not token.isdecimal():
            raise VersionFormatError(raw, token)
        parts.append(int(token))
    return tuple(parts)


class Version:
    """A parsed, comparable version identifier."""

    __slots__ = ("_raw", "_parts")

    def __init__(self, raw: str) -> None:
        if not isinstance(raw, str):
            raise VersionFormatError(repr(raw))
        self._raw = raw
        self._parts = parse_parts(raw)

    @classmethod
    def beginning(cls) -> "Version":
        return cls(BEGINNING_OF_TIME)

    @classmethod
    def end(cls) -> "Version":
        return cls(END_OF_TIME)

    @property
    def raw(self) -> str:
        """The original text, verbatim."""
        return self._raw

    @property
    def parts(self) -> Optional[tuple[Part, ...]]:
        """Numeric components, or ``None`` for a text-only version.

        Parsed components are ``int``.  The two sentinels hold a single
        ``float`` infinity (``MIN_PART`` / ``MAX_PART``) so that they order
        outside every integer.
        """
        return self._parts

    @property
    def is_numeric(self) -> bool:
        return self._parts is not None

    @property
    def is_sentinel(self) -> bool:
        return self._raw in (BEGINNING_OF_TIME, END_OF_TIME)

    def compare(self, other: "Version") -> int:
        return compare(self, other)

    def is_valid(self, since: "Version", until: "Version") -> bool:
        """True if this version lies within ``[since, until]`` inclusive."""
        return is_valid(self, since, until)

    # -- rich comparisons --------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        if self.is_numeric != other.is_numeric:
            return False
        return compare(self, other) == 0

    def __hash__(self) -> int:
        if self._parts is None:
            return hash(("text", self._raw))
        trimmed = list(self._parts)
        while len(trimmed) > 1 and trimmed[-1] == 0:
            trimmed.pop()
        return hash(("numeric", tuple(trimmed)))

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) >= 0

    def __str__(self) -> str:
        return self._raw

    def __repr__(self) -> str:
        return f"Version(raw={self._raw!r}, parts={self._parts!r})"


def compare(a: Version, b: Version) -> int:
    """Order two versions, returning -1, 0 or 1.

    Numeric versions compare component-wise after zero-padding the shorter
    one; text-only versions compare by raw text.

    Raises:
        IncomparableVersionsError: If exactly one side is text-only.
    """
    if a.parts is not None and b.parts is not None:
        for left, right in zip_longest(a.parts, b.parts, fillvalue=0):
            if left != right:
                return -1 if left < right else 1
        return 0
    if a.parts is None and b.parts is None:
        if a.raw == b.raw:
            return 0
        return -1 if a.raw < b.raw else 1
    raise IncomparableVersionsError(a.raw, b.raw)


def is_valid(version: Version, since: Version, until: Version) -> bool:
    """True iff ``since <= version <= until``.

    Comparison errors propagate unchanged.
    """
    return compare(version, since) >= 0 and compare(version, until) <= 0
