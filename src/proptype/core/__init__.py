"""Core type model, validation and resolution components."""

from proptype.core.errors import (
    EmptyNestedObject,
    GeneratedNameCollision,
    InvalidFieldType,
    MissingImportedProperty,
    MissingRequiredField,
    MutualExclusionViolation,
    PartialFlattenNotSupported,
    SchemaError,
    StructuredError,
    UnknownItemType,
    UnknownVersion,
    UnresolvedResourceReference,
    ValidationResult,
)
from proptype.core.enum_merge import merge
from proptype.core.lineage import lineage
from proptype.core.naming import generated_type_name
from proptype.core.overrides import apply_override, override_property
from proptype.core.references import resolve
from proptype.core.validator import SchemaValidator, validate_product
from proptype.core.version_gate import exclude_if_not_in_version

__all__ = [
    "SchemaValidator",
    "validate_product",
    "ValidationResult",
    "StructuredError",
    "SchemaError",
    "MutualExclusionViolation",
    "MissingRequiredField",
    "InvalidFieldType",
    "UnknownItemType",
    "EmptyNestedObject",
    "UnresolvedResourceReference",
    "MissingImportedProperty",
    "PartialFlattenNotSupported",
    "UnknownVersion",
    "GeneratedNameCollision",
    "merge",
    "lineage",
    "generated_type_name",
    "apply_override",
    "override_property",
    "resolve",
    "exclude_if_not_in_version",
]
