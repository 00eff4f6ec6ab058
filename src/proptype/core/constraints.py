"""Field constraint primitive shared by every type variant.

``check`` looks up a field on a node (or on a node's payload), assigns the
default when the field is absent, and verifies its type, its item types and
the allowed literal set.
"""

from typing import Any

from proptype.core.errors import InvalidFieldType, MissingRequiredField

# Marker for boolean fields. ``bool`` is a subclass of ``int`` so plain
# isinstance checks cannot tell them apart.
BOOLEAN = "boolean"


def _type_name(expected: Any) -> str:
    if expected == BOOLEAN:
        return "boolean"
    if isinstance(expected, tuple):
        return " or ".join(_type_name(e) for e in expected)
    return getattr(expected, "__name__", str(expected))


def matches(value: Any, expected: Any) -> bool:
    """Check a value against a type, a tuple of types or BOOLEAN"""
    if isinstance(expected, tuple):
        return any(matches(value, e) for e in expected)
    if expected == BOOLEAN:
        return isinstance(value, bool)
    if isinstance(value, bool) and expected is not bool:
        return False
    return isinstance(value, expected)


def check(
    obj: Any,
    field: str,
    type_: Any,
    default: Any = None,
    allowed: list | tuple | None = None,
    required: bool = False,
    item_type: Any = None,
    lineage: str | None = None,
) -> Any:
    """Validate a single field, returning its (possibly defaulted) value"""
    value = getattr(obj, field)

    if value is None and default is not None:
        value = list(default) if isinstance(default, list) else default
        setattr(obj, field, value)

    if value is None:
        if required:
            raise MissingRequiredField(
                f"Missing required field '{field}'",
                lineage=lineage,
                field=field,
                expected=_type_name(type_),
            )
        return None

    if not matches(value, type_):
        raise InvalidFieldType(
            f"Field '{field}' must be {_type_name(type_)}, got {type(value).__name__}",
            lineage=lineage,
            field=field,
            expected=_type_name(type_),
            actual=type(value).__name__,
        )

    if item_type is not None:
        for i, item in enumerate(value):
            if not matches(item, item_type):
                raise InvalidFieldType(
                    f"Item {i} of '{field}' must be {_type_name(item_type)}, got {type(item).__name__}",
                    lineage=lineage,
                    field=field,
                    expected=_type_name(item_type),
                    actual=type(item).__name__,
                )

    if allowed is not None and value not in allowed:
        raise InvalidFieldType(
            f"Invalid value '{value}' for '{field}'",
            lineage=lineage,
            field=field,
            actual=value,
            valid_options=[str(a) for a in allowed],
        )

    return value
