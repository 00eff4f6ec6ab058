"""
Enum Merge Test Suite

Tests for enum_merge.py:
- Value union keeping base order
- Scalar fields replaced, list fields unioned
- Inputs left untouched
"""

import sys
from pathlib import Path

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from proptype.core.enum_merge import deep_merge, merge
from proptype.core.errors import InvalidFieldType
from proptype.core.types import new_node


def enum(name, values, **kwargs):
    return new_node("Enum", name, values=values, **kwargs)


class TestValueUnion:
    """values are unioned"""

    def test_union_keeps_base_order(self):
        result = merge(enum("state", ["A", "B"]), enum("state", ["B", "C"]))
        assert result.payload.values == ["A", "B", "C"]

    def test_override_without_values(self):
        result = merge(enum("state", ["A"]), enum(None, None, description="State"))
        assert result.payload.values == ["A"]
        assert result.name == "state"
        assert result.description == "State"

    def test_inputs_untouched(self):
        base = enum("state", ["A", "B"], conflicts=["other"])
        override = enum("state", ["C"], conflicts=["third"])

        result = merge(base, override)

        assert base.payload.values == ["A", "B"]
        assert base.conflicts == ["other"]
        assert override.payload.values == ["C"]
        assert result is not base
        assert result.payload is not base.payload

    def test_associative_on_values(self):
        a, b, c = enum("s", ["A"]), enum("s", ["B", "A"]), enum("s", ["C"])
        left = merge(merge(a, b), c)
        right = merge(a, merge(b, c))
        assert left.payload.values == right.payload.values == ["A", "B", "C"]


class TestFieldMerge:
    """Common fields on the override"""

    def test_scalar_replaced(self):
        base = enum("state", ["A"], description="Old", required=True)
        result = merge(base, enum(None, None, description="New"))

        assert result.description == "New"
        assert result.required is True

    def test_override_name_wins(self):
        assert merge(enum("state", ["A"]), enum("status", None)).name == "status"

    def test_false_is_applied(self):
        result = merge(enum("state", ["A"], required=True), enum(None, None, required=False))
        assert result.required is False

    def test_list_fields_unioned(self):
        base = enum("state", ["A"], conflicts=["a", "b"])
        result = merge(base, enum(None, None, conflicts=["b", "c"]))
        assert result.conflicts == ["a", "b", "c"]

    def test_skip_docs_values_overridden(self):
        result = merge(enum("state", ["A"], skip_docs_values=False),
                       enum(None, None, skip_docs_values=True))
        assert result.payload.skip_docs_values is True


class TestMergeErrors:
    """Only Enums merge"""

    def test_non_enum_base(self):
        with pytest.raises(InvalidFieldType) as exc:
            merge(new_node("String", "state", description="S"), enum("state", ["A"]))
        assert exc.value.expected == "Enum"

    def test_non_enum_override(self):
        with pytest.raises(InvalidFieldType):
            merge(enum("state", ["A"]), new_node("Integer", "state"))


class TestDeepMerge:
    """deep_merge()"""

    def test_lists(self):
        assert deep_merge([1, 2], [2, 3]) == [1, 2, 3]

    def test_dicts(self):
        base = {"a": [1], "b": {"x": 1}}
        other = {"a": [2], "b": {"y": 2}, "c": 3}
        assert deep_merge(base, other) == {"a": [1, 2], "b": {"x": 1, "y": 2}, "c": 3}
        assert base == {"a": [1], "b": {"x": 1}}

    def test_scalars(self):
        assert deep_merge("old", "new") == "new"
