"""Build flat field registries from introspected type metadata.

Each introspected field is unwrapped and mapped to a :class:`FieldDefinition`.
Enum fields keep their values, mapped scalars get their simplified type, and
object fields are recursed into (prefixing key and path) while the depth
budget lasts. Unmapped scalars and objects that cannot be resolved are
skipped; skips are logged at debug level.
"""

from collections.abc import Iterator, Mapping

from gql_drift import log
from gql_drift.core.introspection import introspect_type, unwrap_type
from gql_drift.core.naming import capitalize, format_label, get_input_type_name
from gql_drift.core.types import (
    DriftConfig,
    FieldDefinition,
    FieldType,
    IntrospectionField,
    IntrospectionResult,
    IntrospectionType,
    MutationOperation,
    TypeKind,
    get_editable_fields,
)
from gql_drift.errors import InputTypeNotFoundError, SchemaLookupError

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_SCALAR_MAP",
    "build_input_registry",
    "build_registry",
    "build_registry_async",
    "get_editable_fields",
    "resolve_scalar_map",
    "with_labels",
]

DEFAULT_MAX_DEPTH = 1

DEFAULT_SCALAR_MAP: dict[str, FieldType] = {
    "String": FieldType.STRING,
    "Int": FieldType.NUMBER,
    "Float": FieldType.NUMBER,
    "Boolean": FieldType.BOOLEAN,
    "DateTime": FieldType.DATE,
    "ID": FieldType.STRING,
}


def resolve_scalar_map(overrides: Mapping[str, FieldType | str] | None = None) -> dict[str, FieldType]:
    """Merge caller overrides on top of the default scalar map, keyed by scalar name."""
    scalar_map = dict(DEFAULT_SCALAR_MAP)
    for scalar_name, field_type in (overrides or {}).items():
        scalar_map[scalar_name] = FieldType(field_type)
    return scalar_map


def with_labels(fields: list[FieldDefinition], labels: Mapping[str, str]) -> list[FieldDefinition]:
    """Apply label overrides by field key.

    Returns a new list; neither the fields nor the overrides are mutated.
    """
    return [
        field.model_copy(update={"label": labels[field.key]}) if labels.get(field.key) else field for field in fields
    ]


def _iter_fields(
    introspection: IntrospectionResult, key_prefix: str, path_prefix: str
) -> Iterator[tuple[IntrospectionField, IntrospectionType, str, str]]:
    for field in introspection.fields:
        # id is always selected by the query and mutation builders
        if field.name == "id":
            continue

        key = f"{key_prefix}{capitalize(field.name)}" if key_prefix else field.name
        graphql_path = f"{path_prefix}.{field.name}" if path_prefix else field.name
        yield field, unwrap_type(field.type), key, graphql_path


def _resolve_field(
    unwrapped: IntrospectionType,
    key: str,
    name: str,
    graphql_path: str,
    scalar_map: Mapping[str, FieldType],
) -> FieldDefinition | None:
    if unwrapped.kind == TypeKind.ENUM:
        return FieldDefinition(
            key=key,
            label=format_label(name),
            graphql_path=graphql_path,
            type=FieldType.ENUM,
            enum_values=list(unwrapped.enum_values or []),
        )
    if unwrapped.kind == TypeKind.SCALAR and unwrapped.name in scalar_map:
        return FieldDefinition(
            key=key,
            label=format_label(name),
            graphql_path=graphql_path,
            type=scalar_map[unwrapped.name],
        )
    return None


def _is_nestable(unwrapped: IntrospectionType, depth_budget: int) -> bool:
    return unwrapped.kind == TypeKind.OBJECT and depth_budget > 0 and bool(unwrapped.name)


def _log_skip(graphql_path: str, unwrapped: IntrospectionType, depth_budget: int) -> None:
    if unwrapped.kind == TypeKind.SCALAR:
        log.debug(f"Skipping '{graphql_path}': scalar '{unwrapped.name}' is not in the scalar map")
    elif unwrapped.kind == TypeKind.OBJECT and depth_budget <= 0:
        log.debug(f"Skipping '{graphql_path}': max depth reached")
    elif unwrapped.kind == TypeKind.OBJECT:
        log.debug(f"Skipping '{graphql_path}': no metadata for nested type '{unwrapped.name}'")
    else:
        log.debug(f"Skipping '{graphql_path}': unsupported kind {unwrapped.kind.value}")


def _build_sync(
    introspection: IntrospectionResult,
    scalar_map: Mapping[str, FieldType],
    nested_types: Mapping[str, IntrospectionResult],
    depth_budget: int,
    key_prefix: str,
    path_prefix: str,
) -> list[FieldDefinition]:
    fields: list[FieldDefinition] = []
    for field, unwrapped, key, graphql_path in _iter_fields(introspection, key_prefix, path_prefix):
        resolved = _resolve_field(unwrapped, key, field.name, graphql_path, scalar_map)
        if resolved is not None:
            fields.append(resolved)
        elif _is_nestable(unwrapped, depth_budget) and unwrapped.name in nested_types:
            nested = nested_types[str(unwrapped.name)]
            fields.extend(_build_sync(nested, scalar_map, nested_types, depth_budget - 1, key, graphql_path))
        else:
            _log_skip(graphql_path, unwrapped, depth_budget)
    return fields


def build_registry(
    introspection: IntrospectionResult,
    max_depth: int = DEFAULT_MAX_DEPTH,
    scalar_map: Mapping[str, FieldType | str] | None = None,
    nested_types: Mapping[str, IntrospectionResult] | None = None,
    labels: Mapping[str, str] | None = None,
) -> list[FieldDefinition]:
    """Build a flat field registry from an introspection result.

    Nested OBJECT fields are resolved from ``nested_types`` without any network
    request, recursing at most ``max_depth`` levels.

    Args:
        introspection: The introspected type
        max_depth: Nesting budget for object fields (0 disables nesting)
        scalar_map: Scalar overrides merged on top of the default map
        nested_types: Type name to introspection result for nested object types
        labels: Label overrides keyed by resulting field key

    Returns:
        The ordered list of field definitions
    """
    fields = _build_sync(
        introspection,
        resolve_scalar_map(scalar_map),
        nested_types or {},
        max_depth,
        "",
        "",
    )
    return with_labels(fields, labels) if labels else fields


async def _build_async(
    introspection: IntrospectionResult,
    config: DriftConfig,
    scalar_map: Mapping[str, FieldType],
    depth_budget: int,
    key_prefix: str,
    path_prefix: str,
    seen: dict[str, IntrospectionResult],
) -> list[FieldDefinition]:
    fields: list[FieldDefinition] = []
    for field, unwrapped, key, graphql_path in _iter_fields(introspection, key_prefix, path_prefix):
        resolved = _resolve_field(unwrapped, key, field.name, graphql_path, scalar_map)
        if resolved is not None:
            fields.append(resolved)
        elif _is_nestable(unwrapped, depth_budget):
            nested_name = str(unwrapped.name)
            if nested_name not in seen:
                seen[nested_name] = await introspect_type(nested_name, config)
            fields.extend(
                await _build_async(
                    seen[nested_name], config, scalar_map, depth_budget - 1, key, graphql_path, seen
                )
            )
        else:
            _log_skip(graphql_path, unwrapped, depth_budget)
    return fields


async def build_registry_async(
    type_name: str,
    config: DriftConfig,
    labels: Mapping[str, str] | None = None,
) -> list[FieldDefinition]:
    """Build a field registry, introspecting nested object types as they are reached.

    Each nested type is introspected at most once per call.

    Args:
        type_name: Name of the type to introspect
        config: Runtime configuration (transport, max depth, scalar overrides)
        labels: Label overrides keyed by resulting field key

    Returns:
        The ordered list of field definitions
    """
    introspection = await introspect_type(type_name, config)
    fields = await _build_async(
        introspection,
        config,
        resolve_scalar_map(config.scalar_map),
        config.max_depth,
        "",
        "",
        {},
    )
    return with_labels(fields, labels) if labels else fields


async def build_input_registry(type_name: str, config: DriftConfig) -> list[FieldDefinition]:
    """Build the input field registry from the ``Update{TypeName}Input`` type.

    Raises:
        InputTypeNotFoundError: If the conventional input type does not exist
    """
    input_type_name = get_input_type_name(type_name, MutationOperation.UPDATE)
    try:
        input_type = await introspect_type(input_type_name, config)
    except SchemaLookupError as e:
        raise InputTypeNotFoundError(type_name, input_type_name) from e

    return build_registry(input_type, max_depth=config.max_depth, scalar_map=config.scalar_map)
