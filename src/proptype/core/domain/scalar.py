"""Scalar variant validation mixin: defaults, enums and constants."""

from proptype.core.constraints import BOOLEAN, check
from proptype.core.errors import InvalidFieldType
from proptype.core.types import TypeKind, TypeNode

# Accepted default_value shape per variant
DEFAULT_VALUE_TYPES = {
    TypeKind.STRING: str,
    TypeKind.INTEGER: int,
    TypeKind.DOUBLE: float,
    TypeKind.ENUM: str,
    TypeKind.BOOLEAN: BOOLEAN,
    TypeKind.RESOURCE_REF: (str, dict),
}


class ScalarValidationMixin:
    """Mixin providing validation for leaf variants."""

    def _validate_default_value(self, node: TypeNode) -> None:
        """default_value must match the variant's value type"""
        if node.default_value is None:
            return

        expected = DEFAULT_VALUE_TYPES.get(node.kind)
        if expected is None:
            raise InvalidFieldType(
                f"Default values are not supported for type {node.type}",
                lineage=node.lineage(),
                field="default_value",
                actual=node.default_value,
            )
        check(node, "default_value", type_=expected, lineage=node.lineage())

    def _validate_enum(self, node: TypeNode) -> None:
        lineage = node.lineage()
        check(node.payload, "values", type_=list, item_type=(str, int),
              required=True, lineage=lineage)
        check(node.payload, "skip_docs_values", type_=BOOLEAN, lineage=lineage)

        if node.default_value is not None and node.default_value not in node.payload.values:
            raise InvalidFieldType(
                f"Default value '{node.default_value}' is not one of the enum values",
                lineage=lineage,
                field="default_value",
                actual=node.default_value,
                valid_options=[str(v) for v in node.payload.values],
            )

    def _prepare_constant(self, node: TypeNode) -> None:
        node.description = f"This is always {node.payload.value}."
