"""Generated type names for the code emission stage.

Names are built from a product-scoped namespace prefix, the owning
resource's name and the node's position:

- NestedObject: resource name + every lineage segment
- Array / Map: the element's name + ``Array`` / ``Map``
- ResourceRef: resource name + target resource + imported property + ``Ref``

All segments are converted to UpperCamelCase before joining. Leaf variants
are rendered inline by the emitter and have no generated type.
"""

from proptype.core.case import camelize
from proptype.core.errors import GeneratedNameCollision
from proptype.core.lineage import segments
from proptype.core.types import TypeKind, TypeNode

DEFAULT_NAMESPACE = "Google"

# Variants the emitter generates a named type for
GENERATED_TYPE_KINDS = frozenset({
    TypeKind.NESTED_OBJECT, TypeKind.ARRAY, TypeKind.MAP, TypeKind.RESOURCE_REF,
})


def property_ns_prefix(node: TypeNode, namespace: str = DEFAULT_NAMESPACE) -> list[str]:
    product = node.resource.product
    return [camelize(namespace), camelize(product.name), "Property"]


def _path_name(node: TypeNode) -> str:
    return camelize(node.resource.name) + "".join(camelize(s) for s in segments(node))


def has_generated_type(node: TypeNode) -> bool:
    return node.kind in GENERATED_TYPE_KINDS


def class_name(node: TypeNode) -> str:
    """Unqualified generated type name"""
    kind = node.kind
    if kind == TypeKind.NESTED_OBJECT:
        return _path_name(node)

    if kind in (TypeKind.ARRAY, TypeKind.MAP):
        suffix = "Array" if kind == TypeKind.ARRAY else "Map"
        element = node.element()
        if element is not None and has_generated_type(element):
            return class_name(element) + suffix
        # Elements without a type of their own (primitive names, Enum)
        item = element.type if element is not None else str(node.payload.item_type)
        return _path_name(node) + camelize(item) + suffix

    if kind == TypeKind.RESOURCE_REF:
        ref = node.payload
        return (camelize(node.resource.name) + camelize(ref.resource)
                + camelize(ref.imports) + "Ref")

    raise TypeError(f"'{node.lineage()}' is a {node.type}, which has no generated type")


def type_name_parts(node: TypeNode, namespace: str = DEFAULT_NAMESPACE) -> list[str]:
    return property_ns_prefix(node, namespace) + [class_name(node)]


def generated_type_name(node: TypeNode, namespace: str = DEFAULT_NAMESPACE) -> str:
    """Fully qualified name, e.g. ``Google.Compute.Property.InstanceDisks``"""
    return ".".join(type_name_parts(node, namespace))


def _signature(node: TypeNode) -> tuple:
    # ResourceRefs to the same import share one generated type
    if node.kind == TypeKind.RESOURCE_REF:
        return (node.resource.name, node.kind, node.payload.resource, node.payload.imports)
    return (node.resource.name, node.kind, node.lineage())


def _walk(nodes: list[TypeNode]):
    for node in nodes:
        if has_generated_type(node):
            yield node
        yield from _walk(node.children())


def check_generated_names(product, namespace: str = DEFAULT_NAMESPACE) -> dict[str, TypeNode]:
    """Derive every generated type name in a product, failing on a collision.

    Only variants in GENERATED_TYPE_KINDS take part. Segments lose their
    boundaries once camelized, so ``foo_bar`` and ``foo.bar`` both give
    ``FooBar``; such clashes are reported rather than emitted twice.

    Returns the name -> node table of the included resources.
    """
    seen: dict[str, tuple[tuple, TypeNode]] = {}
    for resource in product.resources:
        if resource.exclude:
            continue
        for node in _walk(resource.all_properties()):
            name = generated_type_name(node, namespace)
            sig = _signature(node)
            if name in seen and seen[name][0] != sig:
                other = seen[name][1]
                raise GeneratedNameCollision(
                    f"'{name}' is derived by both '{other.lineage()}' and '{node.lineage()}'",
                    lineage=node.lineage(),
                    actual=name,
                )
            seen.setdefault(name, (sig, node))
    return {name: node for name, (_, node) in seen.items()}
