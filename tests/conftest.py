"""
Pytest fixtures for versionator tests.
"""

from __future__ import annotations

import logging
import os
from typing import Annotated, Dict, Generator, Optional

import pytest
from pydantic import BaseModel

from versionator.config import reset_config
from versionator.loader import SchemaLoader
from versionator.provider import Versioned


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture(scope="session")
def test_env() -> Dict[str, str]:
    """Test environment variables."""
    return {
        "VERSIONATOR_LOG_LEVEL": "debug",
        "VERSIONATOR_EMIT_SPAN_EVENTS": "true",
    }


@pytest.fixture(autouse=True)
def set_test_env(test_env: Dict[str, str]) -> Generator[None, None, None]:
    """Set test environment variables and reset cached state for each test."""
    original = {}
    for key, value in test_env.items():
        original[key] = os.environ.get(key)
        os.environ[key] = value
    reset_config()
    SchemaLoader.clear_cache()

    yield

    reset_config()
    SchemaLoader.clear_cache()
    logging.getLogger("versionator").handlers.clear()
    for key, value in original.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


# ============================================================================
# Model Fixtures
# ============================================================================


class Address(BaseModel):
    street: str = ""
    zip: Annotated[str, Versioned(since="2.0", until="9999")] = ""


class Person(BaseModel):
    name: str = ""
    nickname: Annotated[Optional[str], Versioned(since="2.0", until="3.0")] = None
    address: Optional[Address] = None


class Node(BaseModel):
    label: Annotated[str, Versioned(since="1.5")] = ""
    next: Optional["Node"] = None


Node.model_rebuild()


@pytest.fixture
def person_model() -> type[Person]:
    return Person


@pytest.fixture
def node_model() -> type[Node]:
    return Node


PERSON_SCHEMA_YAML = """\
schema_version: "0.1.0"
description: People and their addresses
leaf_types: [Money]
types:
  - name: Person
    properties:
      - name: name
      - name: nickname
        versioned:
          since: "2.0"
          until: "3.0"
      - name: address
        type: Address
      - name: work
        type: Address
        versioned:
          since: "1.5"
      - name: balance
        type: Money
  - name: Address
    properties:
      - name: street
      - name: zip
        versioned:
          since: "2.0"
          until: "9999"
"""


@pytest.fixture
def person_schema_yaml() -> str:
    return PERSON_SCHEMA_YAML


@pytest.fixture
def person_schema_file(tmp_path):
    path = tmp_path / "person.schema.yaml"
    path.write_text(PERSON_SCHEMA_YAML)
    return path
