import re
from typing import Any

from graphql import GraphQLObjectType, GraphQLSchema

from gql_drift.core.transport import gql_fetch
from gql_drift.core.types import DriftConfig, TypeKind
from gql_drift.errors import SchemaLookupError

SCHEMA_TYPES_QUERY = """
query DiscoverTypes {
  __schema {
    types { name kind }
    queryType { name }
    mutationType { name }
    subscriptionType { name }
  }
}
"""


def match_pattern(name: str, pattern: str) -> bool:
    """Match a type name against a glob where only ``*`` is special (zero or more characters)."""
    regex = ".*".join(re.escape(part) for part in pattern.split("*"))
    return re.fullmatch(regex, name) is not None


def matches_any(name: str, patterns: list[str]) -> bool:
    return any(match_pattern(name, pattern) for pattern in patterns)


def filter_type_names(type_names: list[str], exclude: list[str] | None) -> list[str]:
    """Remove type names matching any of the exclude patterns."""
    if not exclude:
        return type_names
    return [name for name in type_names if not matches_any(name, exclude)]


def _is_discoverable(name: str, root_type_names: set[str]) -> bool:
    return not name.startswith("__") and name not in root_type_names


async def discover_types_from_endpoint(config: DriftConfig) -> list[str]:
    """Discover all OBJECT type names from an endpoint, excluding built-in and root types.

    Raises:
        SchemaLookupError: If the response carries no ``__schema``
    """
    data: Any = await gql_fetch(config, SCHEMA_TYPES_QUERY)
    schema_info = data.get("__schema") if isinstance(data, dict) else None
    if not schema_info:
        raise SchemaLookupError(
            "__schema",
            "Introspection did not return __schema. Ensure introspection is enabled on the endpoint.",
        )

    root_type_names = {
        root["name"]
        for root in (schema_info.get(key) for key in ("queryType", "mutationType", "subscriptionType"))
        if root and root.get("name")
    }
    return sorted(
        t["name"]
        for t in schema_info.get("types", [])
        if TypeKind(t["kind"]) == TypeKind.OBJECT and _is_discoverable(t["name"], root_type_names)
    )


def discover_types_from_schema(schema: GraphQLSchema) -> list[str]:
    """Discover all OBJECT type names from a local schema, excluding built-in and root types."""
    root_type_names = {
        root.name for root in (schema.query_type, schema.mutation_type, schema.subscription_type) if root is not None
    }
    return sorted(
        name
        for name, named_type in schema.type_map.items()
        if isinstance(named_type, GraphQLObjectType) and _is_discoverable(name, root_type_names)
    )
