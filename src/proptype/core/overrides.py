"""Override layer: refining a base schema before it is validated.

Overrides never mutate the base node. A new node is built and swapped
into the tree in place of the old one.
"""

from typing import Any

from proptype.core.case import underscore
from proptype.core.domain.composite import check_flatten_ancestors
from proptype.core.enum_merge import merge
from proptype.core.errors import InvalidFieldType, SchemaError
from proptype.core.types import (
    COMMON_FIELDS,
    TypeKind,
    TypeNode,
    declared_fields,
    kind_for,
    new_node,
)


def _check_keys(node: TypeNode, kind: TypeKind, override: dict) -> None:
    allowed = declared_fields(kind)
    unknown = sorted(set(override) - allowed)
    if unknown:
        raise InvalidFieldType(
            f"Unknown override fields for {kind.value}: {', '.join(unknown)}",
            lineage=node.lineage(),
            field=unknown[0],
            valid_options=sorted(allowed),
        )


def retype(node: TypeNode, new_type: str, **payload_fields: Any) -> TypeNode:
    """Copy the shared fields of ``node`` into a fresh node of another variant"""
    kind = kind_for(new_type, node.lineage())
    base = node.clone()
    return new_node(kind, base.name, **base.common_fields(), **payload_fields)


def apply_override(node: TypeNode, override: dict) -> TypeNode:
    """Return a new node with ``override`` applied on top of ``node``"""
    override = dict(override)
    new_type = override.pop("new_type", None)
    kind = kind_for(new_type, node.lineage()) if new_type else node.kind
    _check_keys(node, kind, override)

    if new_type:
        payload_keys = declared_fields(kind) - set(COMMON_FIELDS) - {"name"}
        payload = {k: override.pop(k) for k in list(override) if k in payload_keys}
        result = retype(node, new_type, **payload)
    elif node.kind == TypeKind.ENUM:
        return merge(node, new_node(TypeKind.ENUM, override.pop("name", None), **override))
    else:
        result = node.clone()

    for key, value in override.items():
        if key == "name" or key in COMMON_FIELDS:
            setattr(result, key, value)
        else:
            setattr(result.payload, key, value)
    return result


def find_property(resource, path: str) -> TypeNode:
    """Locate a property by lineage path, e.g. ``disks.initialize_params``"""
    candidates = resource.all_properties()
    node = None
    for part in path.split("."):
        node = next((c for c in candidates if underscore(c.name) == part), None)
        if node is None:
            raise SchemaError(f"No property '{path}' on resource '{resource.name}'", lineage=path)
        container = node.element() or node
        candidates = container.all_properties() if container.kind == TypeKind.NESTED_OBJECT else []
    return node


def _swap(container: list, old: TypeNode, new: TypeNode) -> bool:
    for i, p in enumerate(container):
        if p is old:
            container[i] = new
            return True
    return False


def replace_node(old: TypeNode, new: TypeNode) -> None:
    """Swap ``new`` into the position ``old`` holds and wire it"""
    resource = old.resource
    parent = old.parent
    if parent is None:
        if not _swap(resource.properties, old, new):
            _swap(resource.parameters, old, new)
    elif old.is_element():
        if parent.kind == TypeKind.ARRAY:
            parent.payload.item_type = new
        else:
            parent.payload.value_type = new
    else:
        _swap(parent.payload.properties, old, new)
    new.attach(resource, parent)


def override_property(resource, path: str, override: dict) -> TypeNode:
    """Apply an override to the property at ``path`` and return the new node"""
    node = find_property(resource, path)
    result = apply_override(node, override)
    if result.flatten_object:
        check_flatten_ancestors(node)
    replace_node(node, result)
    return result
