"""ResourceRef validation mixin."""

from proptype.core.constraints import check
from proptype.core.references import imported_property, resource_ref
from proptype.core.types import TypeNode


class ReferenceValidationMixin:
    """Mixin providing ResourceRef target checks."""

    def _prepare_resource_ref(self, node: TypeNode) -> None:
        if node.name is None:
            node.name = node.payload.resource
        if node.description is None:
            node.description = f"A reference to {node.payload.resource} resource"

    def _validate_resource_ref(self, node: TypeNode) -> None:
        owner = node.resource
        if owner is None or owner.exclude or node.exclude:
            return

        lineage = node.lineage()
        check(node.payload, "resource", type_=str, required=True, lineage=lineage)
        check(node.payload, "imports", type_=str, required=True, lineage=lineage)

        # Detached resources have nothing to resolve against yet
        if owner.product is None:
            return

        resource_ref(node)
        imported_property(node)
