"""ResourceRef resolution.

A ResourceRef keeps only the target resource's name and the name of the
imported property. Every call looks the target up again in the owning
product, so references between resources (cycles included) never create
ownership cycles.
"""

from proptype.core.errors import MissingImportedProperty, UnresolvedResourceReference
from proptype.core.types import TypeKind, TypeNode


def _product_of(ref: TypeNode):
    resource = ref.resource
    product = resource.product if resource is not None else None
    if product is None:
        raise UnresolvedResourceReference(
            f"Cannot resolve '{ref.payload.resource}': property is not part of a product",
            lineage=ref.lineage(),
            field="resource",
            actual=ref.payload.resource,
        )
    return product


def resource_ref(ref: TypeNode):
    """Target Resource of a ResourceRef"""
    if ref.kind != TypeKind.RESOURCE_REF:
        raise TypeError(f"'{ref.lineage()}' is a {ref.type}, not a ResourceRef")
    product = _product_of(ref)
    target = product.resource(ref.payload.resource)
    if target is None:
        raise UnresolvedResourceReference(
            f"Missing resource '{ref.payload.resource}'",
            lineage=ref.lineage(),
            field="resource",
            actual=ref.payload.resource,
            valid_options=[r.name for r in product.resources],
        )
    return target


def imported_property(ref: TypeNode) -> TypeNode:
    """Property of the target Resource named by ``imports``"""
    target = resource_ref(ref)
    exported = target.exported_properties()
    for prop in exported:
        if prop.name == ref.payload.imports:
            return prop
    raise MissingImportedProperty(
        f"'{ref.payload.imports}' does not exist on '{ref.payload.resource}'",
        lineage=ref.lineage(),
        field="imports",
        actual=ref.payload.imports,
        valid_options=[p.name for p in exported],
    )


def resolve(ref: TypeNode):
    """Return ``(target resource, imported property)``"""
    return resource_ref(ref), imported_property(ref)
