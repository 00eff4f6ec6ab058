"""Error types and validation result for the property type validator."""

from dataclasses import dataclass, field as dataclass_field
from typing import Any, Literal


# Error code prefixes
# SCH-xxx: Schema shape violations
# REF-xxx: Reference errors
# TYP-xxx: Type errors
# CNS-xxx: Constraint errors


@dataclass
class StructuredError:
    """Machine-processable error format"""

    # Location info
    path: str  # Lineage: "disks.initialize_params.source_image"
    field: str | None = None  # Offending field on the node, if any

    # Error classification
    code: str = ""  # Systematic code: "TYP-001", "REF-002"
    category: Literal["schema", "reference", "type", "constraint"] = "schema"
    severity: Literal["critical", "error", "warning"] = "error"
    message: str = ""

    # Machine-processable info
    expected: Any = None
    actual: Any = None
    valid_options: list[str] = dataclass_field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            "path": self.path,
            "field": self.field,
            "code": self.code,
            "category": self.category,
            "severity": self.severity,
            "message": self.message,
            "expected": self.expected,
            "actual": self.actual,
            "valid_options": self.valid_options,
        }


class SchemaError(Exception):
    """Base class for every schema violation.

    Carries the lineage of the offending node and the field that failed so the
    generator run can report exactly where the declaration is wrong.
    """

    code = "SCH-000"
    category = "schema"

    def __init__(
        self,
        message: str,
        lineage: str | None = None,
        field: str | None = None,
        expected: Any = None,
        actual: Any = None,
        valid_options: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.lineage = lineage
        self.field = field
        self.expected = expected
        self.actual = actual
        self.valid_options = valid_options or []

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.lineage:
            result = f"{result} (at {self.lineage})"
        return result

    def to_structured(self) -> StructuredError:
        """Convert to StructuredError"""
        return StructuredError(
            path=self.lineage or "root",
            field=self.field,
            code=self.code,
            category=self.category,
            message=self.message,
            expected=self.expected,
            actual=self.actual,
            valid_options=list(self.valid_options),
        )


class MutualExclusionViolation(SchemaError):
    """Two fields that may not be set together were both set."""

    code = "CNS-001"
    category = "constraint"


class GeneratedNameCollision(SchemaError):
    """Two different nodes derive the same generated type name."""

    code = "CNS-002"
    category = "constraint"


class MissingRequiredField(SchemaError):
    code = "SCH-001"


class EmptyNestedObject(SchemaError):
    code = "SCH-002"


class PartialFlattenNotSupported(SchemaError):
    code = "SCH-003"


class InvalidFieldType(SchemaError):
    code = "TYP-001"
    category = "type"


class UnknownItemType(SchemaError):
    """Array item or Map value kind is not a known variant."""

    code = "TYP-002"
    category = "type"


class UnresolvedResourceReference(SchemaError):
    code = "REF-001"
    category = "reference"


class MissingImportedProperty(SchemaError):
    code = "REF-002"
    category = "reference"


class UnknownVersion(SchemaError):
    code = "REF-003"
    category = "reference"


@dataclass
class ValidationResult:
    """Result of a validation operation."""
    valid: bool
    errors: list[SchemaError]
    warnings: list[StructuredError]

    def to_structured_errors(self) -> list[StructuredError]:
        """Convert all errors to StructuredError format"""
        return [e.to_structured() for e in self.errors]

    def raise_for_errors(self) -> None:
        """Abort with the first error encountered, if any"""
        if self.errors:
            raise self.errors[0]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.to_structured_errors()],
            "warnings": [w.to_dict() for w in self.warnings],
        }
