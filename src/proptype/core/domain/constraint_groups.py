"""Constraint group validation mixin (conflicts, at_least_one_of, ...)."""

from proptype.core.constraints import check
from proptype.core.types import TypeNode

CONSTRAINT_GROUPS = ("conflicts", "at_least_one_of", "exactly_one_of", "required_with")


class ConstraintGroupValidationMixin:
    """Mixin providing constraint group list checks.

    Members are lineage paths (``parent.child``) of other properties. They
    are accepted as declared: nested members are only meaningful to the
    generator, so their existence is not checked here.
    """

    def _validate_constraint_groups(self, node: TypeNode) -> None:
        for group in CONSTRAINT_GROUPS:
            check(node, group, type_=list, default=[], item_type=str, lineage=node.lineage())
