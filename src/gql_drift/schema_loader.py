"""Introspect a local SDL schema with graphql-core instead of an endpoint."""

from collections.abc import Iterator, Mapping
from pathlib import Path

from ariadne import load_schema_from_path
from ariadne.exceptions import GraphQLFileSyntaxError
from graphql import (
    GraphQLError,
    GraphQLField,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
    build_schema,
    graphql_sync,
)

from gql_drift import log
from gql_drift.core.introspection import INTROSPECTION_QUERY, match_mutations, parse_introspection_data
from gql_drift.core.naming import get_input_type_name
from gql_drift.core.registry import DEFAULT_MAX_DEPTH, build_registry
from gql_drift.core.types import (
    FieldDefinition,
    FieldType,
    IntrospectionResult,
    MutationOperation,
    ResolvedType,
)
from gql_drift.errors import InputTypeNotFoundError, SchemaLoadError, SchemaLookupError, TransportError

GRAPHQL_FILE_SUFFIXES = (".graphql", ".graphqls", ".gql")


def resolve_graphql_files(paths: list[Path]) -> list[Path]:
    """Resolve files and directories into a sorted, de-duplicated list of GraphQL files.

    Args:
        paths: List of file or directory paths

    Returns:
        The GraphQL files
    """
    resolved_files: set[Path] = set()

    for path in paths:
        if path.is_file():
            resolved_files.add(path)
        elif path.is_dir():
            resolved_files.update(file for file in path.rglob("*") if file.suffix in GRAPHQL_FILE_SUFFIXES)

    return sorted(resolved_files)


def ensure_query(schema: GraphQLSchema) -> GraphQLSchema:
    """Add a generic Query type to a schema that has none, so it can be executed."""
    if schema.query_type:
        return schema

    log.debug("The provided schema has no Query type, adding a generic one.")
    query_type = GraphQLObjectType(name="Query", fields={"ping": GraphQLField(GraphQLString)})
    return GraphQLSchema(
        query=query_type,
        mutation=schema.mutation_type,
        subscription=schema.subscription_type,
        types=list(schema.type_map.values()),
        directives=schema.directives,
    )


def load_schema_from_file(path: Path) -> GraphQLSchema:
    """Build a GraphQL schema from an SDL file or a directory of SDL files.

    Raises:
        SchemaLoadError: If no file can be read or the SDL does not parse
    """
    files = resolve_graphql_files([path])
    if not files:
        raise SchemaLoadError(f"No GraphQL schema files found at '{path}'")

    try:
        sdl = "\n".join(load_schema_from_path(file) for file in files)
    except OSError as e:
        raise SchemaLoadError(f"Failed to read schema file '{path}': {e}") from e
    except GraphQLFileSyntaxError as e:
        raise SchemaLoadError(f"Failed to parse schema file '{path}': {e}") from e

    try:
        schema = build_schema(sdl)
    except (GraphQLError, TypeError) as e:
        raise SchemaLoadError(f"Failed to parse schema file '{path}': {e}") from e

    log.debug(f"Loaded schema from {len(files)} file(s) at '{path}'")
    return ensure_query(schema)


def introspect_type_from_schema(type_name: str, schema: GraphQLSchema) -> IntrospectionResult:
    """Introspect a type from a local schema, with the same document used against endpoints.

    Raises:
        TransportError: If executing the introspection document fails
        SchemaLookupError: If the schema has no such type
    """
    result = graphql_sync(schema, INTROSPECTION_QUERY, variable_values={"typeName": type_name})
    if result.errors:
        messages = [error.message for error in result.errors]
        raise TransportError(f"Schema introspection errors: {', '.join(messages)}", errors=messages)

    return parse_introspection_data(type_name, result.data)


class SchemaTypeLookup(Mapping[str, IntrospectionResult]):
    """Read-only mapping of type name to introspection result over a local schema.

    Types are introspected on first access and memoized. Used as the
    ``nested_types`` argument of :func:`build_registry`.
    """

    def __init__(self, schema: GraphQLSchema) -> None:
        self.schema = schema
        self._introspected: dict[str, IntrospectionResult] = {}

    def __getitem__(self, type_name: str) -> IntrospectionResult:
        if type_name not in self._introspected:
            try:
                self._introspected[type_name] = introspect_type_from_schema(type_name, self.schema)
            except SchemaLookupError as e:
                raise KeyError(type_name) from e
        return self._introspected[type_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.schema.type_map)

    def __len__(self) -> int:
        return len(self.schema.type_map)


def discover_mutations_from_schema(type_name: str, schema: GraphQLSchema) -> dict[MutationOperation, str]:
    """Discover conventional mutations for a type; a schema without mutations yields none."""
    if schema.mutation_type is None:
        return {}
    mutation_root = introspect_type_from_schema(schema.mutation_type.name, schema)
    return match_mutations(type_name, mutation_root)


def build_input_registry_from_schema(
    type_name: str,
    schema: GraphQLSchema,
    max_depth: int = DEFAULT_MAX_DEPTH,
    scalar_map: Mapping[str, FieldType | str] | None = None,
) -> list[FieldDefinition]:
    """Build the input registry from ``Update{TypeName}Input`` in a local schema.

    Raises:
        InputTypeNotFoundError: If the conventional input type does not exist
    """
    input_type_name = get_input_type_name(type_name, MutationOperation.UPDATE)
    try:
        input_type = introspect_type_from_schema(input_type_name, schema)
    except SchemaLookupError as e:
        raise InputTypeNotFoundError(type_name, input_type_name) from e

    return build_registry(input_type, max_depth=max_depth, scalar_map=scalar_map)


def resolve_type_from_schema(
    type_name: str,
    schema: GraphQLSchema,
    max_depth: int = DEFAULT_MAX_DEPTH,
    scalar_map: Mapping[str, FieldType | str] | None = None,
) -> ResolvedType:
    """Resolve fields, mutations and editable fields of a type from a local schema."""
    lookup = SchemaTypeLookup(schema)
    introspection = introspect_type_from_schema(type_name, schema)
    fields = build_registry(introspection, max_depth=max_depth, scalar_map=scalar_map, nested_types=lookup)
    mutations = discover_mutations_from_schema(type_name, schema)

    input_fields: list[FieldDefinition] = []
    try:
        input_fields = build_input_registry_from_schema(type_name, schema, max_depth, scalar_map)
    except InputTypeNotFoundError as e:
        log.debug(f"{e} Treating '{type_name}' as read-only.")

    return ResolvedType(type_name=type_name, fields=fields, mutations=mutations, input_fields=input_fields)
