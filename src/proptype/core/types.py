"""Property type nodes.

A property is exactly one variant, identified by its ``TypeKind`` tag.
Variant-specific fields live in a payload dataclass embedded in the node;
fields shared by every variant live on ``TypeNode`` itself.

Ownership flows downward only: a Resource holds its top-level nodes, a
composite node holds its children. The upward links (owning resource,
parent) are weak references assigned once by ``attach``.
"""

import weakref
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from proptype.core.errors import UnknownItemType
from proptype.core.lineage import lineage


class TypeKind(str, Enum):
    """Closed set of property variants"""
    CONSTANT = "Constant"
    BOOLEAN = "Boolean"
    INTEGER = "Integer"
    DOUBLE = "Double"
    STRING = "String"
    PATH = "Path"
    TIME = "Time"
    FINGERPRINT = "Fingerprint"
    SELF_LINK = "SelfLink"
    ENUM = "Enum"
    ARRAY = "Array"
    NESTED_OBJECT = "NestedObject"
    MAP = "Map"
    KEY_VALUE_PAIRS = "KeyValuePairs"
    RESOURCE_REF = "ResourceRef"


SCALAR_KINDS = frozenset({
    TypeKind.BOOLEAN, TypeKind.INTEGER, TypeKind.DOUBLE,
    TypeKind.STRING, TypeKind.PATH, TypeKind.TIME,
})
FETCHED_EXTERNAL_KINDS = frozenset({TypeKind.FINGERPRINT, TypeKind.SELF_LINK})

# Node variants an Array may hold as item_type (other items are primitive names)
ARRAY_NODE_ITEM_KINDS = frozenset({TypeKind.NESTED_OBJECT, TypeKind.RESOURCE_REF, TypeKind.ENUM})

SELF_LINK_NAME = "selfLink"
DEFAULT_KEY_EXPANDER = "expandString"


@dataclass
class Validation:
    """ValidateFunc descriptor attached to a property"""
    regex: str | None = None
    function: str | None = None

    def to_dict(self) -> dict:
        out = {}
        if self.regex:
            out["regex"] = self.regex
        if self.function:
            out["function"] = self.function
        return out


# =========================================================================
# Variant payloads
# =========================================================================

@dataclass
class ConstantPayload:
    value: Any = None

    def clone(self) -> "ConstantPayload":
        return ConstantPayload(value=self.value)

    def to_dict(self) -> dict:
        return {"value": self.value}


@dataclass
class EnumPayload:
    values: list | None = None
    skip_docs_values: bool | None = None

    def clone(self) -> "EnumPayload":
        return EnumPayload(
            values=list(self.values) if self.values is not None else None,
            skip_docs_values=self.skip_docs_values,
        )

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"values": list(self.values or [])}
        if self.skip_docs_values:
            out["skip_docs_values"] = True
        return out


@dataclass
class ArrayPayload:
    # Primitive type name ("String") or a NestedObject / ResourceRef / Enum node
    item_type: "str | TypeNode | None" = None
    min_size: int | None = None
    max_size: int | None = None

    def clone(self) -> "ArrayPayload":
        item = self.item_type.clone() if isinstance(self.item_type, TypeNode) else self.item_type
        return ArrayPayload(item_type=item, min_size=self.min_size, max_size=self.max_size)

    def to_dict(self) -> dict:
        item = self.item_type.to_dict() if isinstance(self.item_type, TypeNode) else self.item_type
        out: dict[str, Any] = {"item_type": item}
        if self.min_size is not None:
            out["min_size"] = self.min_size
        if self.max_size is not None:
            out["max_size"] = self.max_size
        return out


@dataclass
class NestedObjectPayload:
    properties: "list[TypeNode] | None" = None

    def clone(self) -> "NestedObjectPayload":
        if self.properties is None:
            return NestedObjectPayload()
        return NestedObjectPayload(properties=[p.clone() for p in self.properties])

    def to_dict(self) -> dict:
        return {"properties": [p.to_dict() for p in self.properties or []]}


@dataclass
class MapPayload:
    key_name: str | None = None
    key_description: str | None = None
    value_type: "TypeNode | str | None" = None

    def clone(self) -> "MapPayload":
        value = self.value_type.clone() if isinstance(self.value_type, TypeNode) else self.value_type
        return MapPayload(key_name=self.key_name, key_description=self.key_description, value_type=value)

    def to_dict(self) -> dict:
        out: dict[str, Any] = {"key_name": self.key_name}
        if self.key_description:
            out["key_description"] = self.key_description
        if isinstance(self.value_type, TypeNode):
            out["value_type"] = self.value_type.to_dict()
        elif self.value_type is not None:
            out["value_type"] = self.value_type
        return out


@dataclass
class ResourceRefPayload:
    resource: str | None = None
    imports: str | None = None

    def clone(self) -> "ResourceRefPayload":
        return ResourceRefPayload(resource=self.resource, imports=self.imports)

    def to_dict(self) -> dict:
        return {"resource": self.resource, "imports": self.imports}


# Every kind maps to its payload type; kinds without extra fields map to None.
PAYLOAD_TYPES: dict[TypeKind, type | None] = {
    TypeKind.CONSTANT: ConstantPayload,
    TypeKind.BOOLEAN: None,
    TypeKind.INTEGER: None,
    TypeKind.DOUBLE: None,
    TypeKind.STRING: None,
    TypeKind.PATH: None,
    TypeKind.TIME: None,
    TypeKind.FINGERPRINT: None,
    TypeKind.SELF_LINK: None,
    TypeKind.ENUM: EnumPayload,
    TypeKind.ARRAY: ArrayPayload,
    TypeKind.NESTED_OBJECT: NestedObjectPayload,
    TypeKind.MAP: MapPayload,
    TypeKind.KEY_VALUE_PAIRS: None,
    TypeKind.RESOURCE_REF: ResourceRefPayload,
}

# Primitive names accepted as a string Array item_type
PRIMITIVE_REGISTRY: dict[str, TypeKind] = {kind.value: kind for kind in SCALAR_KINDS}


def _verify_registry() -> None:
    missing = [k.value for k in TypeKind if k not in PAYLOAD_TYPES]
    if missing:
        raise RuntimeError(f"No payload registered for type kinds: {', '.join(missing)}")
    unhandled = [k.value for k in SCALAR_KINDS if PRIMITIVE_REGISTRY.get(k.value) is not k]
    if unhandled:
        raise RuntimeError(f"Primitive kinds missing from registry: {', '.join(unhandled)}")


_verify_registry()


# Shared fields in serialization order
COMMON_FIELDS = (
    "description", "exclude", "deprecation_message", "removed_message",
    "output", "required", "immutable", "url_param_only", "sensitive",
    "default_value", "default_from_api", "min_version", "exact_version",
    "conflicts", "at_least_one_of", "exactly_one_of", "required_with",
    "send_empty_value", "allow_empty_object", "read_query_params",
    "update_verb", "update_url", "update_id", "fingerprint_name", "pattern",
    "diff_suppress_func", "state_func", "ignore_read", "validation",
    "unordered_list", "is_set", "set_hash_func", "schema_config_mode_attr",
    "key_expander", "key_diff_suppress_func", "flatten_object",
    "custom_expand", "custom_flatten",
)


@dataclass(eq=False)
class TypeNode:
    """A single declared property"""

    name: str | None
    kind: TypeKind
    payload: Any = None

    # Documentation / lifecycle
    description: str | None = None
    exclude: bool | None = None
    deprecation_message: str | None = None
    removed_message: str | None = None

    # Behaviour flags
    output: bool | None = None
    required: bool | None = None
    immutable: bool | None = None
    url_param_only: bool | None = None
    sensitive: bool | None = None

    default_value: Any = None
    default_from_api: bool | None = None

    min_version: str | None = None
    exact_version: str | None = None

    # Constraint groups, as lineage paths of other properties
    conflicts: list[str] | None = None
    at_least_one_of: list[str] | None = None
    exactly_one_of: list[str] | None = None
    required_with: list[str] | None = None

    # Request shaping
    send_empty_value: bool | None = None
    allow_empty_object: bool | None = None
    read_query_params: str | None = None
    update_verb: str | None = None
    update_url: str | None = None
    update_id: str | None = None
    fingerprint_name: str | None = None
    pattern: str | None = None

    # Generator hooks
    diff_suppress_func: str | None = None
    state_func: str | None = None
    ignore_read: bool | None = None
    validation: Validation | None = None
    unordered_list: bool | None = None
    is_set: bool | None = None
    set_hash_func: str | None = None
    schema_config_mode_attr: bool | None = None
    key_expander: str | None = None
    key_diff_suppress_func: str | None = None
    flatten_object: bool | None = None
    custom_expand: str | None = None
    custom_flatten: str | None = None

    _resource: Any = field(default=None, init=False, repr=False)
    _parent: Any = field(default=None, init=False, repr=False)

    # ---------------------------------------------------------------------
    # Ownership
    # ---------------------------------------------------------------------

    @property
    def resource(self):
        """Owning Resource, or None when not attached"""
        return self._resource() if self._resource is not None else None

    @property
    def parent(self) -> "TypeNode | None":
        """Nearest enclosing composite node, None for top-level properties"""
        return self._parent() if self._parent is not None else None

    def attach(self, resource, parent: "TypeNode | None" = None) -> None:
        """Wire this node and its subtree to an owning resource"""
        self._resource = weakref.ref(resource) if resource is not None else None
        self._parent = weakref.ref(parent) if parent is not None else None

        element = self.element()
        if element is not None and element.name is None:
            element.name = self.name
        for child in self.children():
            child.attach(resource, self)

    def children(self) -> "list[TypeNode]":
        """Direct child nodes, excluded ones included"""
        if self.kind == TypeKind.NESTED_OBJECT:
            return [p for p in self.payload.properties or [] if isinstance(p, TypeNode)]
        element = self.element()
        return [element] if element is not None else []

    def element(self) -> "TypeNode | None":
        """Array item or Map value node, if any"""
        if self.kind == TypeKind.ARRAY and isinstance(self.payload.item_type, TypeNode):
            return self.payload.item_type
        if self.kind == TypeKind.MAP and isinstance(self.payload.value_type, TypeNode):
            return self.payload.value_type
        return None

    def is_element(self) -> bool:
        parent = self.parent
        return parent is not None and parent.element() is self

    # ---------------------------------------------------------------------
    # Tag queries
    # ---------------------------------------------------------------------

    @property
    def type(self) -> str:
        return self.kind.value

    def is_fetched_external(self) -> bool:
        return self.kind in FETCHED_EXTERNAL_KINDS

    def is_deprecated(self) -> bool:
        return bool(self.deprecation_message)

    def is_removed(self) -> bool:
        return bool(self.removed_message)

    def lineage(self) -> str:
        return lineage(self)

    # ---------------------------------------------------------------------
    # Nested structure
    # ---------------------------------------------------------------------

    def all_properties(self) -> "list[TypeNode]":
        """NestedObject properties including excluded ones"""
        if self.kind != TypeKind.NESTED_OBJECT:
            raise TypeError(f"'{self.lineage()}' is a {self.type}, not a NestedObject")
        return list(self.payload.properties or [])

    def properties(self) -> "list[TypeNode]":
        """NestedObject properties that are not excluded"""
        return [p for p in self.all_properties() if not p.exclude]

    def nested_properties(self) -> "list[TypeNode]":
        """Child properties a generator should render for this node.

        NestedObject returns its own properties, Array and Map delegate to a
        NestedObject element. Every other variant has none.
        """
        if self.kind == TypeKind.NESTED_OBJECT:
            return self.properties()
        element = self.element()
        if self.kind in (TypeKind.ARRAY, TypeKind.MAP) and element is not None \
                and element.kind == TypeKind.NESTED_OBJECT:
            return element.nested_properties()
        return []

    def root_properties(self) -> "list[TypeNode]":
        """Properties once children flagged flatten_object are collapsed"""
        result = []
        for p in self.properties():
            if p.flatten_object and p.kind == TypeKind.NESTED_OBJECT:
                result.extend(p.root_properties())
            else:
                result.append(p)
        return result

    # ---------------------------------------------------------------------
    # Constraint groups
    # ---------------------------------------------------------------------

    def conflicting(self) -> list[str]:
        if self.resource is None:
            return []
        return list(self.conflicts or [])

    def at_least_one_of_list(self) -> list[str]:
        if self.resource is None:
            return []
        return list(self.at_least_one_of or [])

    def exactly_one_of_list(self) -> list[str]:
        if self.resource is None:
            return []
        return list(self.exactly_one_of or [])

    def required_with_list(self) -> list[str]:
        if self.resource is None:
            return []
        return list(self.required_with or [])

    # ---------------------------------------------------------------------
    # Copy / serialization
    # ---------------------------------------------------------------------

    def common_fields(self) -> dict[str, Any]:
        return {f: getattr(self, f) for f in COMMON_FIELDS}

    def clone(self) -> "TypeNode":
        """Detached copy of this node and its subtree"""
        fields_ = self.common_fields()
        for key in ("conflicts", "at_least_one_of", "exactly_one_of", "required_with"):
            if fields_[key] is not None:
                fields_[key] = list(fields_[key])
        if self.validation is not None:
            fields_["validation"] = Validation(self.validation.regex, self.validation.function)
        payload = self.payload.clone() if self.payload is not None else None
        return TypeNode(name=self.name, kind=self.kind, payload=payload, **fields_)

    def to_dict(self) -> dict:
        """Declared fields, omitting the ones at their default or empty"""
        out: dict[str, Any] = {"name": self.name, "type": self.type}
        resource = self.resource
        for key, value in self.common_fields().items():
            if value is None or value is False or value == []:
                continue
            if key == "key_expander" and value == DEFAULT_KEY_EXPANDER:
                continue
            if key == "update_verb" and resource is not None and value == resource.update_verb:
                continue
            if key == "validation":
                value = value.to_dict()
            out[key] = value
        if self.payload is not None:
            out.update(self.payload.to_dict())
        return out


def declared_fields(kind: TypeKind) -> set[str]:
    """Field names a declaration of this variant may set"""
    payload_cls = PAYLOAD_TYPES[kind]
    payload_keys = {f.name for f in fields(payload_cls)} if payload_cls else set()
    return set(COMMON_FIELDS) | payload_keys | {"name"}


def kind_for(type_name: str, lineage_path: str | None = None) -> TypeKind:
    """Map a declared type name to its variant tag"""
    try:
        return TypeKind(type_name)
    except ValueError:
        raise UnknownItemType(
            f"Unknown type '{type_name}'",
            lineage=lineage_path,
            field="type",
            actual=type_name,
            valid_options=[k.value for k in TypeKind],
        ) from None


def new_node(kind: TypeKind | str, name: str | None = None, **fields_) -> TypeNode:
    """Build a node of the given variant, routing payload fields to its payload"""
    if not isinstance(kind, TypeKind):
        kind = kind_for(kind)
    payload_cls = PAYLOAD_TYPES[kind]
    payload = None
    if payload_cls is not None:
        payload_keys = {f.name for f in fields(payload_cls)}
        payload = payload_cls(**{k: fields_.pop(k) for k in list(fields_) if k in payload_keys})
    if kind == TypeKind.SELF_LINK:
        name = SELF_LINK_NAME
    return TypeNode(name=name, kind=kind, payload=payload, **fields_)
