"""
YAML schema loader with per-path caching.

Usage::

    from versionator.loader import SchemaLoader

    loader = SchemaLoader()
    spec = loader.load(Path("person.schema.yaml"))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

import yaml

from versionator.schema import SchemaSpec

logger = logging.getLogger(__name__)


class SchemaLoader:
    """Loads and caches schema specs from YAML files."""

    _cache: ClassVar[dict[str, SchemaSpec]] = {}

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the schema cache (useful in tests)."""
        cls._cache.clear()

    def load(self, path: Path) -> SchemaSpec:
        """Load a schema from a YAML file.

        Args:
            path: Path to the YAML schema file.

        Returns:
            Validated ``SchemaSpec`` instance.

        Raises:
            FileNotFoundError: If the file does not exist.
            TypeError: If the YAML root is not a mapping.
            yaml.YAMLError: If the file contains invalid YAML.
            pydantic.ValidationError: If the YAML does not match the schema.
        """
        path = Path(path)
        key = str(path.resolve())
        if key in self._cache:
            logger.debug("Schema cache hit: %s", key)
            return self._cache[key]

        if not path.exists():
            raise FileNotFoundError(f"Schema file not found: {path}")

        with open(path) as fh:
            raw = yaml.safe_load(fh)

        spec = self._validate(raw, str(path))
        self._cache[key] = spec

        logger.debug(
            "Loaded schema: types=%d, leaf_types=%d",
            len(spec.types),
            len(spec.leaf_types),
        )
        return spec

    def load_from_string(self, yaml_str: str) -> SchemaSpec:
        """Load a schema from a YAML string (convenience for testing).

        Raises:
            TypeError: If the YAML root is not a mapping.
            pydantic.ValidationError: If the YAML does not match the schema.
        """
        raw = yaml.safe_load(yaml_str)
        return self._validate(raw, "<string>")

    @staticmethod
    def _validate(raw: object, source: str) -> SchemaSpec:
        if not isinstance(raw, dict):
            raise TypeError(
                f"Expected YAML mapping at root of {source}, "
                f"got {type(raw).__name__}"
            )
        return SchemaSpec.model_validate(raw)
