"""Property type schema validator"""

import structlog

from proptype.config.project import ProjectConfig
from proptype.core.constraints import BOOLEAN, check
from proptype.core.domain import (
    CompositeValidationMixin,
    ConstraintGroupValidationMixin,
    ReferenceValidationMixin,
    ScalarValidationMixin,
)
from proptype.core.errors import (
    MutualExclusionViolation,
    SchemaError,
    StructuredError,
    ValidationResult,
)
from proptype.core.naming import check_generated_names
from proptype.core.product import UPDATE_VERBS, Product, Resource
from proptype.core.types import DEFAULT_KEY_EXPANDER, TypeKind, TypeNode, Validation

logger = structlog.get_logger(__name__)

STRING_FIELDS = (
    "deprecation_message", "removed_message", "min_version", "exact_version",
    "read_query_params", "update_url", "update_id", "fingerprint_name", "pattern",
    "key_diff_suppress_func", "diff_suppress_func", "state_func", "set_hash_func",
    "custom_flatten", "custom_expand",
)
OPTIONAL_BOOLEAN_FIELDS = (
    "output", "required", "send_empty_value", "allow_empty_object",
    "url_param_only", "immutable",
)
DEFAULT_FALSE_FIELDS = (
    "sensitive", "is_set", "default_from_api", "unordered_list",
    "schema_config_mode_attr", "ignore_read", "flatten_object",
)


class SchemaValidator(
    ScalarValidationMixin,
    CompositeValidationMixin,
    ReferenceValidationMixin,
    ConstraintGroupValidationMixin,
):
    """Validates a product's property trees.

    Each top-level property is validated on its own and stops at its first
    violation; the other properties are still checked so a single run
    reports every broken declaration.
    """

    def __init__(self, config: dict | None = None):
        self.config = config or ProjectConfig().load()

    def validate(self, product: Product) -> ValidationResult:
        """Validate every resource of a product"""
        errors: list[SchemaError] = []
        warnings: list[StructuredError] = []
        collect = self.config.get("collect_sibling_errors", True)

        for resource in product.resources:
            errors.extend(self.validate_resource(resource, stop_early=not collect))
            warnings.extend(self._lifecycle_warnings(resource))
            if errors and not collect:
                break

        # Names are derived from the checked tree only
        if not errors:
            try:
                check_generated_names(product, self.config.get("namespace", "Google"))
            except SchemaError as e:
                errors.append(e)

        logger.info(
            "product validated",
            product=product.name,
            errors=len(errors),
            warnings=len(warnings),
        )
        return ValidationResult(valid=len(errors) == 0, errors=errors, warnings=warnings)

    def check(self, product: Product) -> None:
        """Validate and raise the first error found"""
        self.validate(product).raise_for_errors()

    def validate_resource(self, resource: Resource, stop_early: bool = False) -> list[SchemaError]:
        """Validate one resource, returning the first error of each property"""
        logger.debug(
            "validating resource",
            resource=resource.name,
            properties=len(resource.properties),
            parameters=len(resource.parameters),
        )
        errors = []
        try:
            self._validate_resource_fields(resource)
        except SchemaError as e:
            errors.append(e)
            if stop_early:
                return errors

        for node in resource.all_properties():
            try:
                self.validate_node(node)
            except SchemaError as e:
                logger.debug("property invalid", resource=resource.name, code=e.code, lineage=e.lineage)
                errors.append(e)
                if stop_early:
                    break
        return errors

    def _validate_resource_fields(self, resource: Resource) -> None:
        check(resource, "update_verb", type_=str, allowed=UPDATE_VERBS, lineage=resource.name)
        if resource.product is not None and resource.min_version is not None:
            resource.resolved_min_version()

    # =====================================================================
    # Per node
    # =====================================================================

    def validate_node(self, node: TypeNode) -> None:
        """Validate a node and its subtree, raising on the first violation"""
        if node.is_fetched_external():
            self._validate_fetched_external(node)
            return

        if node.kind == TypeKind.CONSTANT:
            self._prepare_constant(node)
        elif node.kind == TypeKind.NESTED_OBJECT:
            self._prepare_nested_object(node)
        elif node.kind == TypeKind.RESOURCE_REF:
            self._prepare_resource_ref(node)

        self._validate_common(node)

        if node.kind == TypeKind.ENUM:
            self._validate_enum(node)
        elif node.kind == TypeKind.ARRAY:
            self._validate_array(node)
        elif node.kind == TypeKind.NESTED_OBJECT:
            self._validate_nested_object(node)
        elif node.kind == TypeKind.MAP:
            self._validate_map(node)
        elif node.kind == TypeKind.RESOURCE_REF:
            self._validate_resource_ref(node)

        self._validate_flatten(node)

    def _validate_common(self, node: TypeNode) -> None:
        lineage = node.lineage()
        check(node, "name", type_=str, required=True, lineage=lineage)
        check(node, "description", type_=str, required=True, lineage=lineage)
        check(node, "exclude", type_=BOOLEAN, default=False, required=True, lineage=lineage)
        for f in STRING_FIELDS:
            check(node, f, type_=str, lineage=lineage)
        for f in OPTIONAL_BOOLEAN_FIELDS:
            check(node, f, type_=BOOLEAN, default=False, lineage=lineage)

        self._check_output_required(node)

        owner = node.resource
        check(node, "update_verb", type_=str, allowed=UPDATE_VERBS,
              default=owner.update_verb if owner is not None else None, lineage=lineage)

        self._validate_default_value(node)
        self._validate_constraint_groups(node)

        for f in DEFAULT_FALSE_FIELDS:
            check(node, f, type_=BOOLEAN, default=False, lineage=lineage)

        check(node, "key_expander", type_=str, default=DEFAULT_KEY_EXPANDER, lineage=lineage)
        check(node, "validation", type_=Validation, lineage=lineage)
        if node.validation is not None:
            check(node.validation, "regex", type_=str, lineage=lineage)
            check(node.validation, "function", type_=str, lineage=lineage)

        self._check_default_sources(node)

        self._validate_versions(node)

    def _validate_versions(self, node: TypeNode) -> None:
        """Declared versions must exist in the owning product"""
        owner = node.resource
        product = owner.product if owner is not None else None
        if product is None:
            return
        for f in ("min_version", "exact_version"):
            name = getattr(node, f)
            if name:
                try:
                    product.version_obj(name)
                except SchemaError as e:
                    e.lineage = node.lineage()
                    e.field = f
                    raise

    def _validate_fetched_external(self, node: TypeNode) -> None:
        """Fetched values are never sent: only the group lists are defaulted and
        the exclusivity rules checked"""
        for group in ("conflicts", "at_least_one_of", "exactly_one_of", "required_with"):
            if getattr(node, group) is None:
                setattr(node, group, [])
        if node.exclude is None:
            node.exclude = False
        if node.kind == TypeKind.FINGERPRINT and node.output is None:
            node.output = True

        self._check_output_required(node)
        self._check_default_sources(node)

    def _check_output_required(self, node: TypeNode) -> None:
        if node.output and node.required:
            raise MutualExclusionViolation(
                "Property cannot be output and required at the same time.",
                lineage=node.lineage(),
                field="required",
            )

    def _check_default_sources(self, node: TypeNode) -> None:
        if node.default_from_api and node.default_value is not None:
            raise MutualExclusionViolation(
                "'default_value' and 'default_from_api' cannot be both set",
                lineage=node.lineage(),
                field="default_from_api",
            )

    def _lifecycle_warnings(self, resource: Resource) -> list[StructuredError]:
        warnings = []
        for node in resource.all_properties():
            if node.is_deprecated():
                warnings.append(StructuredError(
                    path=node.lineage(),
                    field="deprecation_message",
                    code="LCY-001",
                    severity="warning",
                    message=f"Property is deprecated: {node.deprecation_message}",
                ))
            if node.is_removed() and not node.exclude:
                warnings.append(StructuredError(
                    path=node.lineage(),
                    field="removed_message",
                    code="LCY-002",
                    severity="warning",
                    message=f"Removed property is not excluded: {node.removed_message}",
                ))
        return warnings


def validate_product(product: Product, config: dict | None = None) -> ValidationResult:
    """Convenience wrapper: validate with a fresh validator"""
    return SchemaValidator(config).validate(product)
