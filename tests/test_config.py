"""
Project Configuration Test Suite

Tests for config/project.py
"""

import json
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from proptype.config.project import ProjectConfig
from proptype.core.product import Product, Resource
from proptype.core.types import new_node
from proptype.core.validator import SchemaValidator
from proptype.loader import load_product


class TestProjectConfig:
    """ProjectConfig load/save"""

    def test_defaults_without_file(self, tmp_path):
        config = ProjectConfig(tmp_path)

        assert not config.exists()
        assert config.load() == ProjectConfig.DEFAULT_CONFIG

    def test_load_does_not_share_defaults(self, tmp_path):
        loaded = ProjectConfig(tmp_path).load()
        loaded["version_order"].append("preview")

        assert ProjectConfig.DEFAULT_CONFIG["version_order"] == ["ga", "beta", "alpha"]

    def test_file_merged_over_defaults(self, tmp_path):
        config = ProjectConfig(tmp_path)
        config.save({"namespace": "Acme"})

        loaded = config.load()

        assert config.exists()
        assert loaded["namespace"] == "Acme"
        assert loaded["default_update_verb"] == "PUT"

    def test_init(self, tmp_path):
        config = ProjectConfig(tmp_path)
        result = config.init(namespace="Acme", version_order=["v1", "v2"])

        on_disk = json.loads((tmp_path / ".proptype" / "config.json").read_text())
        assert on_disk == result
        assert on_disk["version_order"] == ["v1", "v2"]


class TestValidatorConfig:
    """Validator behaviour driven by config"""

    def make_product(self):
        broken = [new_node("String", "a"), new_node("String", "b")]
        return Product("compute", resources=[
            Resource("Instance", properties=broken),
            Resource("Disk", properties=[new_node("String", "c")]),
        ])

    def test_collect_sibling_errors(self):
        product = self.make_product()
        result = SchemaValidator(dict(ProjectConfig.DEFAULT_CONFIG)).validate(product)

        assert [e.lineage for e in result.errors] == ["a", "b", "c"]

    def test_stop_at_first_error(self):
        config = dict(ProjectConfig.DEFAULT_CONFIG, collect_sibling_errors=False)
        product = self.make_product()
        result = SchemaValidator(config).validate(product)

        assert [e.lineage for e in result.errors] == ["a"]

    def test_default_from_working_directory(self, tmp_path, monkeypatch):
        ProjectConfig(tmp_path).save({"namespace": "Acme"})
        monkeypatch.chdir(tmp_path)

        assert SchemaValidator().config["namespace"] == "Acme"

    def test_loader_uses_same_config(self, tmp_path, monkeypatch):
        """Loading and validating read one project config"""
        ProjectConfig(tmp_path).init(namespace="Acme", version_order=["v1", "v2"])
        monkeypatch.chdir(tmp_path)
        document = {
            "name": "compute",
            "versions": ["v1", "v2"],
            "resources": [{
                "name": "Instance",
                "properties": [
                    {"name": "name", "type": "String", "description": "Name"},
                    {"name": "preview", "type": "String", "description": "Preview",
                     "min_version": "v2"},
                ],
            }],
        }

        product = load_product(document)
        result = SchemaValidator().validate(product)

        assert result.valid, [str(e) for e in result.errors]
        assert [v.name for v in product.versions] == ["v1", "v2"]
        assert product.resource("Instance").update_verb == "PUT"
