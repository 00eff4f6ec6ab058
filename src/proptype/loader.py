"""Build a wired Product from a declaration document."""

import json
from pathlib import Path
from typing import Any

import structlog
import yaml
from jsonschema import Draft202012Validator

from proptype.config.project import ProjectConfig
from proptype.core.errors import InvalidFieldType, MissingRequiredField, SchemaError
from proptype.core.product import DEFAULT_VERSION_ORDER, Product, Resource
from proptype.core.types import TypeKind, TypeNode, Validation, declared_fields, kind_for, new_node

logger = structlog.get_logger(__name__)

SCHEMA_FILE = Path(__file__).parent / "schemas" / "product.schema.json"


def _load_schema() -> dict:
    with open(SCHEMA_FILE) as f:
        return json.load(f)


def check_document(document: dict) -> list[SchemaError]:
    """Validate a declaration document against the bundled JSON Schema"""
    validator = Draft202012Validator(_load_schema())
    errors: list[SchemaError] = []
    for error in validator.iter_errors(document):
        path = ".".join(str(p) for p in error.absolute_path) or "root"
        cls = MissingRequiredField if error.validator == "required" else InvalidFieldType
        errors.append(cls(error.message, lineage=path, field=str(error.validator)))
    return errors


def build_node(declaration: dict, path: str = "") -> TypeNode:
    """Build an unattached node (and its subtree) from a declaration mapping"""
    decl = dict(declaration)
    name = decl.pop("name", None)
    lineage = f"{path}.{name}" if path and name else (name or path)
    kind = kind_for(decl.pop("type"), lineage)

    unknown = sorted(set(decl) - declared_fields(kind))
    if unknown:
        raise InvalidFieldType(
            f"Unknown fields for {kind.value}: {', '.join(unknown)}",
            lineage=lineage,
            field=unknown[0],
        )

    if kind == TypeKind.ARRAY and isinstance(decl.get("item_type"), dict):
        decl["item_type"] = build_node(decl["item_type"], lineage)
    elif kind == TypeKind.MAP and isinstance(decl.get("value_type"), dict):
        decl["value_type"] = build_node(decl["value_type"], lineage)
    elif kind == TypeKind.NESTED_OBJECT and decl.get("properties") is not None:
        decl["properties"] = [build_node(p, lineage) for p in decl["properties"]]

    if isinstance(decl.get("validation"), dict):
        decl["validation"] = Validation(**decl["validation"])

    return new_node(kind, name, **decl)


def build_resource(declaration: dict, default_update_verb: str = "PUT") -> Resource:
    decl = dict(declaration)
    decl.setdefault("update_verb", default_update_verb)
    properties = [build_node(p) for p in decl.pop("properties", [])]
    parameters = [build_node(p) for p in decl.pop("parameters", [])]
    return Resource(properties=properties, parameters=parameters, **decl)


def load_product(document: dict[str, Any], config: dict | None = None) -> Product:
    """Check a document's shape, then build and wire its Product.

    Without ``config`` the project config of the working directory is used,
    the same one SchemaValidator falls back to.
    """
    errors = check_document(document)
    if errors:
        raise errors[0]

    config = config or ProjectConfig().load()
    version_order = config.get("version_order", DEFAULT_VERSION_ORDER)
    update_verb = config.get("default_update_verb", "PUT")
    resources = [build_resource(r, update_verb) for r in document.get("resources", [])]
    product = Product(
        name=document["name"],
        resources=resources,
        versions=document.get("versions"),
        version_order=version_order,
    )
    logger.info("product loaded", product=product.name, resources=len(resources))
    return product


def load_product_file(path: str | Path, config: dict | None = None) -> Product:
    """Load a product declaration from a .yaml/.yml or .json file"""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")

    with open(path) as f:
        if path.suffix in (".yaml", ".yml"):
            document = yaml.safe_load(f)
        elif path.suffix == ".json":
            document = json.load(f)
        else:
            raise ValueError(f"Unsupported schema file type: {path.suffix}")

    logger.debug("schema file read", path=str(path))
    return load_product(document, config)
