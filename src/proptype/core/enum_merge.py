"""Merging an override Enum declaration into a base one."""

from typing import Any

from proptype.core.errors import InvalidFieldType
from proptype.core.types import COMMON_FIELDS, TypeKind, TypeNode


def deep_merge(base: Any, other: Any) -> Any:
    """Order-preserving union for lists, recursive merge for dicts, else ``other``"""
    if isinstance(base, list) and isinstance(other, list):
        result = list(base)
        for item in other:
            if item not in result:
                result.append(item)
        return result
    if isinstance(base, dict) and isinstance(other, dict):
        result = dict(base)
        for key, value in other.items():
            result[key] = deep_merge(result[key], value) if key in result else value
        return result
    return other


def merge(base: TypeNode, override: TypeNode) -> TypeNode:
    """Return a new Enum combining ``base`` with the fields ``override`` declares.

    Scalar fields set on the override replace the base's; list fields are
    unioned, keeping the base's order for entries already present. Neither
    input is modified.
    """
    for node in (base, override):
        if node.kind != TypeKind.ENUM:
            raise InvalidFieldType(
                f"Only Enum properties can be merged, got {node.type}",
                lineage=node.lineage(),
                field="type",
                expected=TypeKind.ENUM.value,
                actual=node.type,
            )

    result = base.clone()
    if override.name is not None:
        result.name = override.name

    for key in COMMON_FIELDS:
        value = getattr(override, key)
        if value is None:
            continue
        current = getattr(result, key)
        if isinstance(value, list):
            setattr(result, key, deep_merge(current or [], value))
        else:
            setattr(result, key, value)

    if override.payload.values is not None:
        result.payload.values = deep_merge(result.payload.values or [], override.payload.values)
    if override.payload.skip_docs_values is not None:
        result.payload.skip_docs_values = override.payload.skip_docs_values

    return result
