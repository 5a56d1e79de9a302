"""
Exclusion calculator: which property paths to hide at a requested version.

Walks the schema graph depth-first from a root type.  Each property with
a ``VersionRange`` that does not contain the requested version is added
to the result as a dot path and is not walked further, so the result
holds the minimal cut rather than every leaf underneath an excluded
subtree.  Properties that are included (or unconstrained) and complex are
walked into with their name appended to the path.

Usage::

    from versionator.calculator import ExclusionCalculator
    from versionator.provider import ModelSchemaProvider

    calculator = ExclusionCalculator(ModelSchemaProvider())
    calculator.compute_exclusions(Person, "1.0")   # {"address.zip"}
"""

from __future__ import annotations

import logging
from typing import Hashable, Optional, Union

from versionator.config import VersionatorConfig, get_config
from versionator.diagnostics import DiagnosticsSink, sink_from_config
from versionator.errors import SchemaIntrospectionError
from versionator.otel import emit_exclusions_computed
from versionator.provider import PropertyInfo, SchemaProvider
from versionator.schema import ExclusionReport, VersionRange
from versionator.version import Version, is_valid

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "."


def join_path(prefix: Optional[str], name: str) -> str:
    """Append *name* to a dot path; an empty prefix yields *name*."""
    if not prefix:
        return name
    return f"{prefix}{PATH_SEPARATOR}{name}"


def is_path_excluded(path: str, excluded: set[str]) -> bool:
    """True if *path* or any of its ancestors is in *excluded*."""
    if path in excluded:
        return True
    parts = path.split(PATH_SEPARATOR)
    for i in range(1, len(parts)):
        if PATH_SEPARATOR.join(parts[:i]) in excluded:
            return True
    return False


def _type_label(type_ref: Hashable) -> str:
    return getattr(type_ref, "__name__", None) or str(type_ref)


class ExclusionCalculator:
    """Computes excluded property paths for a root type at a version.

    Args:
        provider: Source of properties and version ranges.
        sink: Optional diagnostics sink notified of each exclusion.
        max_depth: Deepest nesting level walked; complex properties
            below it are treated as leaves.  ``None`` for no bound.
    """

    def __init__(
        self,
        provider: SchemaProvider,
        sink: Optional[DiagnosticsSink] = None,
        max_depth: Optional[int] = None,
    ) -> None:
        if max_depth is not None and max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        self._provider = provider
        self._sink = sink
        self._max_depth = max_depth

    @classmethod
    def from_config(
        cls, provider: SchemaProvider, config: Optional[VersionatorConfig] = None
    ) -> "ExclusionCalculator":
        """Build a calculator with the sink and depth bound from config."""
        if config is None:
            config = get_config()
        return cls(provider, sink=sink_from_config(config), max_depth=config.max_depth)

    @property
    def provider(self) -> SchemaProvider:
        return self._provider

    def compute_exclusions(
        self,
        root_type: Hashable,
        version: Union[str, Version],
        prefix: Optional[str] = None,
    ) -> set[str]:
        """Return the dot paths under *root_type* hidden at *version*.

        Args:
            root_type: Type reference understood by the provider.
            version: Requested version, raw or parsed.
            prefix: Path of *root_type* within an enclosing type, if any.

        Raises:
            VersionFormatError: If the requested version or a declared
                bound is malformed.
            IncomparableVersionsError: If a numeric version meets a
                text-only one.
        """
        target = version if isinstance(version, Version) else Version(version)
        excluded: set[str] = set()
        self._walk(prefix or "", root_type, target, excluded, (root_type,))
        emit_exclusions_computed(_type_label(root_type), target.raw, len(excluded))
        return excluded

    def report(self, root_type: Hashable, version: Union[str, Version]) -> ExclusionReport:
        """Same as ``compute_exclusions`` but returns a sorted report model."""
        excluded = self.compute_exclusions(root_type, version)
        return ExclusionReport(
            root_type=_type_label(root_type),
            version=str(version),
            excluded=sorted(excluded),
        )

    def is_visible(
        self, root_type: Hashable, path: str, version: Union[str, Version]
    ) -> bool:
        """True if the field at *path* is presented at *version*."""
        return not is_path_excluded(path, self.compute_exclusions(root_type, version))

    # -- internal helpers --------------------------------------------------

    def _walk(
        self,
        prefix: str,
        type_ref: Hashable,
        target: Version,
        excluded: set[str],
        ancestors: tuple[Hashable, ...],
    ) -> None:
        try:
            properties = self._provider.properties_of(type_ref)
        except SchemaIntrospectionError as exc:
            logger.warning("Skipping properties of %s: %s", prefix or _type_label(type_ref), exc)
            return

        for prop in properties:
            path = join_path(prefix, prop.name)
            version_range = self._range_of(type_ref, prop)

            if version_range is not None and not self._in_range(
                target, version_range, path, excluded
            ):
                continue

            if prop.is_complex:
                self._descend(path, prop, target, excluded, ancestors)

    def _range_of(self, type_ref: Hashable, prop: PropertyInfo) -> Optional[VersionRange]:
        try:
            return self._provider.version_range_of(type_ref, prop.name)
        except SchemaIntrospectionError as exc:
            logger.warning("Treating %s as unversioned: %s", prop.name, exc)
            return None

    def _in_range(
        self,
        target: Version,
        version_range: VersionRange,
        path: str,
        excluded: set[str],
    ) -> bool:
        since, until = version_range.bounds()
        if is_valid(target, since, until):
            return True

        excluded.add(path)
        logger.debug(
            "excluding [%s <= %s <= %s]: %s",
            since.raw,
            target.raw,
            until.raw,
            path,
        )
        self._notify(since.raw, target.raw, until.raw, path)
        return False

    def _descend(
        self,
        path: str,
        prop: PropertyInfo,
        target: Version,
        excluded: set[str],
        ancestors: tuple[Hashable, ...],
    ) -> None:
        child = prop.declared_type
        if child in ancestors:
            logger.warning(
                "Type %s recurs at %s; not walking it again",
                _type_label(child),
                path,
            )
            return
        if self._max_depth is not None and len(ancestors) >= self._max_depth:
            logger.warning(
                "Max depth %d reached at %s; treating it as a leaf",
                self._max_depth,
                path,
            )
            return
        self._walk(path, child, target, excluded, ancestors + (child,))

    def _notify(self, since: str, requested: str, until: str, path: str) -> None:
        if self._sink is None:
            return
        try:
            self._sink.record(since, requested, until, path)
        except Exception:
            logger.debug("Diagnostics sink failed for %s", path, exc_info=True)


def compute_exclusions(
    provider: SchemaProvider,
    root_type: Hashable,
    version: Union[str, Version],
) -> set[str]:
    """Convenience wrapper: ``ExclusionCalculator(provider).compute_exclusions(...)``."""
    return ExclusionCalculator(provider).compute_exclusions(root_type, version)
