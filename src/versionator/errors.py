"""
Exception hierarchy for versionator.

Version parsing and comparison failures are fatal and propagate to the
caller.  ``SchemaIntrospectionError`` is the one recoverable error: the
calculator logs it and treats the affected property as unconstrained.
"""

from __future__ import annotations

from typing import Any, Optional


class VersionatorError(Exception):
    """Base class for all versionator errors."""


class VersionFormatError(VersionatorError, ValueError):
    """Raised when a version string contains a non-numeric token."""

    def __init__(self, raw: str, token: Optional[str] = None) -> None:
        self.raw = raw
        self.token = token
        if token is None:
            message = f"Invalid version string: {raw!r}"
        else:
            message = f"Invalid version string {raw!r}: non-numeric part {token!r}"
        super().__init__(message)


class IncomparableVersionsError(VersionatorError, TypeError):
    """Raised when a numeric version is compared against a text-only one."""

    def __init__(self, left: str, right: str) -> None:
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot compare numeric to text-only versions: {left!r} vs {right!r}"
        )


class SchemaIntrospectionError(VersionatorError):
    """Raised by a schema provider that cannot describe a type or property."""

    def __init__(
        self,
        type_ref: Any,
        property_name: Optional[str] = None,
        reason: str = "",
    ) -> None:
        self.type_ref = type_ref
        self.property_name = property_name
        self.reason = reason
        target = _type_label(type_ref)
        if property_name is not None:
            target = f"{target}.{property_name}"
        message = f"Cannot introspect {target}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


def _type_label(type_ref: Any) -> str:
    return getattr(type_ref, "__name__", None) or str(type_ref)
