"""Per-version exclusion of properties.

A property is excluded for a requested version when it pins an
``exact_version`` other than the requested one, or when the requested
version sorts before its effective ``min_version`` in the product's version
order. Exclusion is monotonic: the gate only ever sets
``exclude``, it never clears it.
"""

import structlog

from proptype.core.types import TypeKind, TypeNode

logger = structlog.get_logger(__name__)


def min_version(node: TypeNode):
    """Declared min_version, or the owning resource's when absent"""
    resource = node.resource
    if node.min_version is None:
        return resource.resolved_min_version()
    return resource.product.version_obj(node.min_version)


def exact_version(node: TypeNode):
    if not node.exact_version:
        return None
    return node.resource.product.version_obj(node.exact_version)


def excluded_in(node: TypeNode, version) -> bool:
    """Pure form of the gate: would ``node`` be excluded for ``version``"""
    exact = exact_version(node)
    if exact is not None and exact != version:
        return True
    return version < min_version(node)


def exclude_if_not_in_version(node: TypeNode, version) -> bool:
    """Mark ``node`` (and nested object children) excluded for ``version``.

    Returns the node's exclusion flag after the walk.
    """
    if isinstance(version, str):
        version = node.resource.product.version_obj(version)

    if not node.exclude and excluded_in(node, version):
        logger.debug("property excluded", lineage=node.lineage(), version=version.name)
        node.exclude = True
    elif node.exclude is None:
        node.exclude = False

    if node.kind == TypeKind.NESTED_OBJECT:
        for child in node.all_properties():
            exclude_if_not_in_version(child, version)
    elif node.kind == TypeKind.ARRAY:
        item = node.element()
        if item is not None and item.kind == TypeKind.NESTED_OBJECT:
            exclude_if_not_in_version(item, version)

    return node.exclude


def exclude_resource_if_not_in_version(resource, version) -> None:
    for node in resource.all_properties():
        exclude_if_not_in_version(node, version)
