"""Product, Resource and API version registry."""

import weakref
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Any

from proptype.core.errors import UnknownVersion
from proptype.core.types import SELF_LINK_NAME, TypeKind, TypeNode, new_node
from proptype.core.version_gate import exclude_resource_if_not_in_version

DEFAULT_VERSION_ORDER = ("ga", "beta", "alpha")
UPDATE_VERBS = ("POST", "PUT", "PATCH", "NONE")


@total_ordering
@dataclass(frozen=True)
class Version:
    """An API version; ordered by stability, most stable first"""
    name: str
    rank: int
    base_url: str | None = None

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.rank < other.rank

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.rank == other.rank and self.name == other.name

    def __hash__(self) -> int:
        return hash((self.name, self.rank))


@dataclass(eq=False)
class Resource:
    """A schema unit owning an ordered set of top-level properties"""

    name: str
    properties: list[TypeNode] = field(default_factory=list)
    parameters: list[TypeNode] = field(default_factory=list)
    description: str | None = None
    update_verb: str = "PUT"
    min_version: str | None = None
    exclude: bool = False
    has_self_link: bool = False

    _product: Any = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        for node in self.properties + self.parameters:
            node.attach(self, None)

    @property
    def product(self) -> "Product | None":
        return self._product() if self._product is not None else None

    def all_properties(self) -> list[TypeNode]:
        """Properties and parameters, excluded ones included"""
        return self.properties + self.parameters

    def user_properties(self) -> list[TypeNode]:
        return [p for p in self.properties if not p.exclude]

    def all_user_properties(self) -> list[TypeNode]:
        """Non-excluded properties followed by non-excluded parameters"""
        return self.user_properties() + [p for p in self.parameters if not p.exclude]

    def exported_properties(self) -> list[TypeNode]:
        """Properties another resource may import through a ResourceRef"""
        exported = self.all_user_properties()
        if self.has_self_link and not any(p.name == SELF_LINK_NAME for p in exported):
            exported.append(self.self_link_property())
        return exported

    def self_link_property(self) -> TypeNode:
        node = new_node(TypeKind.STRING, SELF_LINK_NAME,
                        description=f"The URI of the created {self.name} resource.",
                        output=True)
        node.attach(self, None)
        return node

    def root_properties(self) -> list[TypeNode]:
        """Top-level properties with flatten_object children collapsed"""
        result = []
        for p in self.user_properties():
            if p.flatten_object and p.kind == TypeKind.NESTED_OBJECT:
                result.extend(p.root_properties())
            else:
                result.append(p)
        return result

    def resolved_min_version(self) -> Version:
        product = self.product
        if product is None:
            raise UnknownVersion(f"Resource '{self.name}' is not part of a product")
        if self.min_version is None:
            return product.lowest_version()
        return product.version_obj(self.min_version)

    def property_named(self, name: str) -> TypeNode | None:
        for p in self.all_properties():
            if p.name == name:
                return p
        return None


class Product:
    """Root collection of resources plus the version registry"""

    def __init__(
        self,
        name: str,
        resources: list[Resource] | None = None,
        versions: list[dict] | list[str] | None = None,
        version_order: tuple[str, ...] | list[str] = DEFAULT_VERSION_ORDER,
    ):
        self.name = name
        self.version_order = tuple(version_order)
        self._versions: dict[str, Version] = {}
        for v in versions or [version_order[0]]:
            if isinstance(v, str):
                v = {"name": v}
            self._register_version(v["name"], v.get("base_url"))

        self._resources: tuple[Resource, ...] = tuple(resources or [])
        for resource in self._resources:
            resource._product = weakref.ref(self)

    def _register_version(self, name: str, base_url: str | None) -> None:
        if name not in self.version_order:
            raise UnknownVersion(
                f"Version '{name}' is not in the version order",
                field="versions",
                actual=name,
                valid_options=list(self.version_order),
            )
        self._versions[name] = Version(name=name, rank=self.version_order.index(name), base_url=base_url)

    @property
    def resources(self) -> tuple[Resource, ...]:
        return self._resources

    @property
    def versions(self) -> list[Version]:
        return sorted(self._versions.values())

    def version_obj(self, name: str) -> Version:
        """Look up a version declared in this product by name"""
        if name not in self._versions:
            raise UnknownVersion(
                f"Version '{name}' is not declared by product '{self.name}'",
                actual=name,
                valid_options=list(self._versions),
            )
        return self._versions[name]

    def lowest_version(self) -> Version:
        return self.versions[0]

    def resource(self, name: str) -> Resource | None:
        for r in self._resources:
            if r.name == name:
                return r
        return None

    def exclude_if_not_in_version(self, version: Version | str) -> None:
        """Apply the version gate to every property of every resource"""
        if isinstance(version, str):
            version = self.version_obj(version)
        for r in self._resources:
            exclude_resource_if_not_in_version(r, version)
