"""proptype - Property type schema model, validation and resolution."""

__version__ = "0.2.0"

from proptype.core.validator import SchemaValidator, ValidationResult, StructuredError
from proptype.core.product import Product, Resource, Version
from proptype.core.types import TypeKind, TypeNode, new_node
from proptype.config.project import ProjectConfig

__all__ = [
    "SchemaValidator",
    "ValidationResult",
    "StructuredError",
    "Product",
    "Resource",
    "Version",
    "TypeKind",
    "TypeNode",
    "new_node",
    "ProjectConfig",
]
