"""Variant-specific validation mixins for the schema validator."""

from proptype.core.domain.scalar import ScalarValidationMixin
from proptype.core.domain.composite import CompositeValidationMixin
from proptype.core.domain.resource_ref import ReferenceValidationMixin
from proptype.core.domain.constraint_groups import ConstraintGroupValidationMixin

__all__ = [
    "ScalarValidationMixin",
    "CompositeValidationMixin",
    "ReferenceValidationMixin",
    "ConstraintGroupValidationMixin",
]
