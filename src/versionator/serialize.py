"""
Apply an exclusion set when presenting data.

``build_exclude_tree`` turns dot paths into the nested mapping accepted by
Pydantic's ``model_dump(exclude=...)``; ``prune`` does the same job on
plain nested dicts.
"""

from __future__ import annotations

import copy
from typing import Any, Iterable, Optional, Union

from pydantic import BaseModel

from versionator.calculator import PATH_SEPARATOR, ExclusionCalculator
from versionator.provider import ModelSchemaProvider
from versionator.version import Version


def build_exclude_tree(paths: Iterable[str]) -> dict[str, Any]:
    """Convert dot paths into a nested ``{name: True | {...}}`` mapping.

    >>> build_exclude_tree({"address.zip", "nickname"})
    {'address': {'zip': True}, 'nickname': True}
    """
    tree: dict[str, Any] = {}
    for path in sorted(paths):
        node = tree
        parts = path.split(PATH_SEPARATOR)
        for part in parts[:-1]:
            child = node.get(part)
            if child is True:
                # An ancestor is already excluded wholesale.
                break
            node = node.setdefault(part, {})
        else:
            node[parts[-1]] = True
    return tree


def prune(data: dict[str, Any], paths: Iterable[str]) -> dict[str, Any]:
    """Return a deep copy of *data* with the excluded paths removed.

    Paths that do not resolve to a key are ignored.
    """
    result = copy.deepcopy(data)
    _prune_tree(result, build_exclude_tree(paths))
    return result


def _prune_tree(data: Any, tree: dict[str, Any]) -> None:
    if not isinstance(data, dict):
        return
    for key, sub in tree.items():
        if key not in data:
            continue
        if sub is True:
            del data[key]
        else:
            _prune_tree(data[key], sub)


def dump_at_version(
    model: BaseModel,
    version: Union[str, Version],
    calculator: Optional[ExclusionCalculator] = None,
    **dump_kwargs: Any,
) -> dict[str, Any]:
    """``model_dump`` of *model* with the fields hidden at *version* removed."""
    if calculator is None:
        calculator = ExclusionCalculator(ModelSchemaProvider())
    excluded = calculator.compute_exclusions(type(model), version)
    return model.model_dump(exclude=build_exclude_tree(excluded), **dump_kwargs)
