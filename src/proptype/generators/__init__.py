"""Output generators for validated products."""

from proptype.generators.yaml_gen import YAMLGenerator

__all__ = ["YAMLGenerator"]
