"""Composite variant validation mixin: arrays, nested objects and maps."""

from proptype.core.constraints import check
from proptype.core.errors import (
    EmptyNestedObject,
    InvalidFieldType,
    PartialFlattenNotSupported,
    UnknownItemType,
)
from proptype.core.types import (
    ARRAY_NODE_ITEM_KINDS,
    PRIMITIVE_REGISTRY,
    TypeKind,
    TypeNode,
)


def check_flatten_ancestors(node: TypeNode) -> None:
    """Every NestedObject between ``node`` and the resource must be flattened too"""
    parent = node.parent
    while parent is not None:
        if parent.kind != TypeKind.NESTED_OBJECT or parent.is_element():
            raise PartialFlattenNotSupported(
                f"Cannot flatten '{node.lineage()}' inside {parent.type} '{parent.lineage()}'",
                lineage=node.lineage(),
                field="flatten_object",
            )
        if not parent.flatten_object:
            raise PartialFlattenNotSupported(
                f"Cannot flatten '{node.lineage()}' without flattening its parent '{parent.lineage()}'",
                lineage=node.lineage(),
                field="flatten_object",
            )
        parent = parent.parent


class CompositeValidationMixin:
    """Mixin providing validation for composite variants."""

    def _validate_array(self, node: TypeNode) -> None:
        lineage = node.lineage()
        item = node.payload.item_type
        check(node.payload, "item_type", type_=(str, TypeNode), required=True, lineage=lineage)

        if isinstance(item, TypeNode):
            if item.kind not in ARRAY_NODE_ITEM_KINDS:
                raise UnknownItemType(
                    f"Invalid item type {item.type}",
                    lineage=lineage,
                    field="item_type",
                    actual=item.type,
                    valid_options=sorted(k.value for k in ARRAY_NODE_ITEM_KINDS),
                )
            self.validate_node(item)
        elif item not in PRIMITIVE_REGISTRY:
            raise UnknownItemType(
                f"Invalid type {item}",
                lineage=lineage,
                field="item_type",
                actual=item,
                valid_options=sorted(PRIMITIVE_REGISTRY),
            )

        check(node.payload, "min_size", type_=int, lineage=lineage)
        check(node.payload, "max_size", type_=int, lineage=lineage)

    def _prepare_nested_object(self, node: TypeNode) -> None:
        if node.description is None:
            node.description = "A nested object resource"

    def _validate_nested_object(self, node: TypeNode) -> None:
        lineage = node.lineage()
        properties = node.payload.properties
        if not properties:
            raise EmptyNestedObject(
                f"Properties missing on {node.name}",
                lineage=lineage,
                field="properties",
            )
        check(node.payload, "properties", type_=list, item_type=TypeNode, lineage=lineage)

        for p in properties:
            self.validate_node(p)

    def _validate_map(self, node: TypeNode) -> None:
        lineage = node.lineage()
        check(node.payload, "key_name", type_=str, required=True, lineage=lineage)
        check(node.payload, "key_description", type_=str, lineage=lineage)

        value_type = node.payload.value_type
        check(node.payload, "value_type", type_=(str, TypeNode), required=True, lineage=lineage)
        if isinstance(value_type, str):
            if value_type in PRIMITIVE_REGISTRY:
                raise InvalidFieldType(
                    f"Map values must be a NestedObject, got {value_type}",
                    lineage=lineage,
                    field="value_type",
                    expected=TypeKind.NESTED_OBJECT.value,
                    actual=value_type,
                )
            raise UnknownItemType(
                f"Invalid type {value_type}",
                lineage=lineage,
                field="value_type",
                actual=value_type,
            )
        if value_type.kind != TypeKind.NESTED_OBJECT:
            raise InvalidFieldType(
                f"Map values must be a NestedObject, got {value_type.type}",
                lineage=lineage,
                field="value_type",
                expected=TypeKind.NESTED_OBJECT.value,
                actual=value_type.type,
            )
        self.validate_node(value_type)

    def _validate_flatten(self, node: TypeNode) -> None:
        if not node.flatten_object:
            return
        if node.kind != TypeKind.NESTED_OBJECT:
            raise InvalidFieldType(
                f"Only NestedObject properties can be flattened, got {node.type}",
                lineage=node.lineage(),
                field="flatten_object",
                actual=node.type,
            )
        check_flatten_ancestors(node)
