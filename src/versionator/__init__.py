"""
versionator - version-aware field exclusion for evolving schemas.

Decides, for a requested version and a nested schema whose fields carry
``[since, until]`` applicability ranges, which field paths must be left
out when presenting an object at that version.

Example usage:
    from typing import Annotated, Optional
    from pydantic import BaseModel
    from versionator import ExclusionCalculator, ModelSchemaProvider, Versioned

    class Address(BaseModel):
        street: str = ""
        zip: Annotated[str, Versioned(since="2.0")] = ""

    class Person(BaseModel):
        name: str = ""
        address: Optional[Address] = None

    calculator = ExclusionCalculator(ModelSchemaProvider())
    calculator.compute_exclusions(Person, "1.0")   # {"address.zip"}
"""

__version__ = "0.1.0"
__all__ = [
    "Version",
    "compare",
    "is_valid",
    "BEGINNING_OF_TIME",
    "END_OF_TIME",
    "VersionatorError",
    "VersionFormatError",
    "IncomparableVersionsError",
    "SchemaIntrospectionError",
    "VersionRange",
    "SchemaSpec",
    "ExclusionReport",
    "PropertyInfo",
    "SchemaProvider",
    "RegistrySchemaProvider",
    "ModelSchemaProvider",
    "Versioned",
    "ExclusionCalculator",
    "compute_exclusions",
    "is_path_excluded",
    "SchemaLoader",
    "__version__",
]

from versionator.calculator import (
    ExclusionCalculator,
    compute_exclusions,
    is_path_excluded,
)
from versionator.errors import (
    IncomparableVersionsError,
    SchemaIntrospectionError,
    VersionatorError,
    VersionFormatError,
)
from versionator.loader import SchemaLoader
from versionator.provider import (
    ModelSchemaProvider,
    PropertyInfo,
    RegistrySchemaProvider,
    SchemaProvider,
    Versioned,
)
from versionator.schema import ExclusionReport, SchemaSpec, VersionRange
from versionator.version import BEGINNING_OF_TIME, END_OF_TIME, Version, compare, is_valid
