"""Product to YAML Generator (Human View)"""

import yaml

from proptype.core.naming import generated_type_name, has_generated_type
from proptype.core.product import Product, Resource
from proptype.core.types import TypeNode


class YAMLGenerator:
    """Generates human-readable YAML from a validated product"""

    def __init__(self, product: Product, namespace: str = "Google"):
        self.product = product
        self.namespace = namespace

    def generate(self) -> str:
        """Generate full YAML view"""
        return yaml.dump(self._transform_product(), allow_unicode=True,
                         default_flow_style=False, sort_keys=False)

    def generate_resource(self, name: str) -> str:
        """Generate YAML for a single resource"""
        resource = self.product.resource(name)
        if resource is None:
            return f"# Resource '{name}' not found"
        return yaml.dump({name: self._transform_resource(resource)}, allow_unicode=True,
                         default_flow_style=False, sort_keys=False)

    def _transform_product(self) -> dict:
        return {
            "name": self.product.name,
            "versions": [v.name for v in self.product.versions],
            "resources": {
                r.name: self._transform_resource(r)
                for r in self.product.resources if not r.exclude
            },
        }

    def _transform_resource(self, resource: Resource) -> dict:
        out = {}
        if resource.description:
            out["description"] = resource.description
        out["update_verb"] = resource.update_verb
        if resource.min_version:
            out["min_version"] = resource.min_version
        out["properties"] = [self._transform_node(p) for p in resource.user_properties()]
        params = [p for p in resource.parameters if not p.exclude]
        if params:
            out["parameters"] = [self._transform_node(p) for p in params]
        return out

    def _transform_node(self, node: TypeNode) -> dict:
        """Declared fields plus the generated type name where the variant has one"""
        out = node.to_dict()
        if has_generated_type(node):
            out["generated_type"] = generated_type_name(node, self.namespace)
        return out
