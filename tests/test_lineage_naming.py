"""
Lineage and Generated Name Test Suite

Tests for lineage.py, naming.py and case.py:
- Dotted lineage paths, including array items and map values
- Generated type names per variant
- Case conversion helpers
"""

import sys
from pathlib import Path

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from proptype.core.case import camelize, underscore
from proptype.core.errors import GeneratedNameCollision
from proptype.core.lineage import lineage
from proptype.core.naming import (
    check_generated_names,
    class_name,
    generated_type_name,
    has_generated_type,
    type_name_parts,
)
from proptype.core.product import Product, Resource
from proptype.core.types import new_node


def string(name, **kwargs):
    kwargs.setdefault("description", f"The {name}")
    return new_node("String", name, **kwargs)


def nested(name, properties, **kwargs):
    return new_node("NestedObject", name, properties=properties, **kwargs)


class TestLineage:
    """lineage()"""

    def test_top_level(self):
        node = string("name")
        Resource("Instance", properties=[node])
        assert lineage(node) == "name"

    def test_three_levels(self):
        c = string("c")
        b = nested("b", [c])
        a = nested("a", [b])
        resource = Resource("Instance", properties=[a])

        assert lineage(c) == "a.b.c"
        assert c.lineage() == "a.b.c"
        assert resource.properties[0] is a

    def test_names_are_underscored(self):
        leaf = string("labelFingerprint")
        resource = Resource("Instance", properties=[nested("metaData", [leaf])])
        assert lineage(leaf) == "meta_data.label_fingerprint"
        assert resource.name == "Instance"

    def test_array_item_is_transparent(self):
        source = string("source")
        item = nested(None, [source])
        disks = new_node("Array", "disks", description="Disks", item_type=item)
        resource = Resource("Instance", properties=[disks])

        assert lineage(item) == "disks"
        assert lineage(source) == "disks.source"
        assert item.parent is disks
        assert resource.properties == [disks]

    def test_map_value_is_transparent(self):
        content = string("content")
        files = new_node("Map", "files", description="Files", key_name="path",
                         value_type=nested(None, [content]))
        resource = Resource("Instance", properties=[files])

        assert lineage(content) == "files.content"
        assert resource.properties == [files]

    def test_parent_links(self):
        c = string("c")
        b = nested("b", [c])
        resource = Resource("Instance", properties=[b])

        assert c.parent is b
        assert b.parent is None
        assert c.resource is resource


class TestGeneratedNames:
    """generated_type_name()"""

    def setup_method(self):
        self.initialize = nested("initializeParams", [string("sourceImage")])
        self.disk_item = nested(None, [string("deviceName"), self.initialize])
        self.disks = new_node("Array", "disks", description="Disks", item_type=self.disk_item)
        self.tags = new_node("Array", "tags", description="Tags", item_type="String")
        self.metadata = new_node("Map", "metadata", description="Metadata", key_name="key",
                                 value_type=nested(None, [string("value")]))
        self.network = new_node("ResourceRef", "network", resource="Network", imports="selfLink")
        self.name = string("name")
        self.instance = Resource("Instance", properties=[
            self.name, self.disks, self.tags, self.metadata, self.network,
        ])
        self.product = Product("compute", resources=[self.instance])

    def test_nested_object(self):
        assert class_name(self.initialize) == "InstanceDisksInitializeParams"

    def test_array_of_objects(self):
        assert class_name(self.disk_item) == "InstanceDisks"
        assert class_name(self.disks) == "InstanceDisksArray"

    def test_array_of_primitives(self):
        assert class_name(self.tags) == "InstanceTagsStringArray"

    def test_map(self):
        assert class_name(self.metadata) == "InstanceMetadataMap"

    def test_resource_ref(self):
        assert class_name(self.network) == "InstanceNetworkSelfLinkRef"

    def test_array_of_enums(self):
        states = new_node("Array", "states", description="States",
                          item_type=new_node("Enum", None, values=["UP", "DOWN"]))
        resource = Resource("Instance", properties=[states])
        assert class_name(states) == "InstanceStatesEnumArray"
        assert resource.properties == [states]

    def test_leaf_has_no_generated_type(self):
        assert not has_generated_type(self.name)
        with pytest.raises(TypeError):
            class_name(self.name)

    def test_qualified(self):
        assert generated_type_name(self.disks) == "Google.Compute.Property.InstanceDisksArray"
        assert type_name_parts(self.network, "Acme") == [
            "Acme", "Compute", "Property", "InstanceNetworkSelfLinkRef",
        ]

    def test_deterministic(self):
        assert generated_type_name(self.initialize) == generated_type_name(self.initialize)

    def test_distinct_paths_distinct_names(self):
        first = nested("options", [string("a")])
        second = nested("options", [string("b")])
        resource = Resource("Instance", properties=[nested("boot", [first]), nested("data", [second])])
        product = Product("compute", resources=[resource])

        assert generated_type_name(first) != generated_type_name(second)
        assert product.name == "compute"


class TestNameCollisions:
    """check_generated_names() across variants"""

    def names(self, *properties):
        product = Product("compute", resources=[Resource("Instance", properties=list(properties))])
        return check_generated_names(product)

    def test_leaf_and_object_share_no_name(self):
        table = self.names(string("foo"), nested("foo_string", [string("x")]))
        assert list(table) == ["Google.Compute.Property.InstanceFooString"]
        assert table["Google.Compute.Property.InstanceFooString"].name == "foo_string"

    def test_only_generated_variants_listed(self):
        table = self.names(string("name"), new_node("Fingerprint", "fingerprint"),
                           nested("meta", [string("a")]))
        assert list(table) == ["Google.Compute.Property.InstanceMeta"]

    def test_segment_boundary_clash(self):
        """foo_bar and foo.bar camelize to the same name"""
        with pytest.raises(GeneratedNameCollision) as exc:
            self.names(nested("foo_bar", [string("x")]),
                       nested("foo", [nested("bar", [string("y")])]))
        assert exc.value.lineage == "foo.bar"

    def test_array_and_object_clash(self):
        item = nested(None, [string("source")])
        with pytest.raises(GeneratedNameCollision):
            self.names(new_node("Array", "disks", description="Disks", item_type=item),
                       nested("disks_array", [string("x")]))

    def test_references_to_same_import_share_a_name(self):
        first = new_node("ResourceRef", "network", resource="Network", imports="selfLink")
        second = new_node("ResourceRef", "backup_network", resource="Network", imports="selfLink")
        table = self.names(first, second)
        assert list(table) == ["Google.Compute.Property.InstanceNetworkSelfLinkRef"]


class TestCase:
    """Case conversion"""

    def test_underscore(self):
        assert underscore("selfLink") == "self_link"
        assert underscore("IPAddress") == "ip_address"
        assert underscore("already_snake") == "already_snake"
        assert underscore(None) is None

    def test_camelize(self):
        assert camelize("initialize_params") == "InitializeParams"
        assert camelize("selfLink") == "SelfLink"
        assert camelize("compute") == "Compute"


class TestNestedProperties:
    """nested_properties() per variant"""

    def test_map_delegates_to_value(self):
        content = string("content")
        files = new_node("Map", "files", description="Files", key_name="path",
                         value_type=nested(None, [content]))
        resource = Resource("Instance", properties=[files])

        assert files.nested_properties() == [content]
        assert resource.properties == [files]

    def test_primitive_array_has_none(self):
        tags = new_node("Array", "tags", description="Tags", item_type="String")
        assert tags.nested_properties() == []

    def test_leaf_has_none(self):
        assert string("name").nested_properties() == []

    def test_root_properties_requires_nested_object(self):
        with pytest.raises(TypeError):
            string("name").root_properties()
