from typing import Any

from gql_drift import log
from gql_drift.core.naming import get_mutation_name
from gql_drift.core.transport import gql_fetch
from gql_drift.core.types import DriftConfig, IntrospectionResult, IntrospectionType, MutationOperation
from gql_drift.errors import MutationDiscoveryError, SchemaLookupError

MUTATION_ROOT_TYPE = "Mutation"

# Three levels of ofType cover NON_NULL(LIST(NON_NULL(Type))).
INTROSPECTION_QUERY = """
query IntrospectType($typeName: String!) {
  __type(name: $typeName) {
    name
    fields {
      name
      type { ...TypeRef }
    }
    inputFields {
      name
      type { ...TypeRef }
    }
  }
}

fragment TypeRef on __Type {
  name
  kind
  enumValues { name }
  ofType {
    name
    kind
    enumValues { name }
    ofType {
      name
      kind
      enumValues { name }
      ofType {
        name
        kind
        enumValues { name }
      }
    }
  }
}
"""


def unwrap_type(type_: IntrospectionType) -> IntrospectionType:
    """Strip NON_NULL and LIST wrappers to reach the underlying type.

    Stops early when a wrapper has no ``of_type`` (the introspection depth ran
    out), returning the innermost node available.
    """
    current = type_
    while current.kind.is_wrapper and current.of_type is not None:
        current = current.of_type
    return current


def parse_introspection_data(type_name: str, data: Any) -> IntrospectionResult:
    """Convert the ``data`` payload of the introspection document into a result.

    Raises:
        SchemaLookupError: If the schema has no type named ``type_name``
    """
    type_data = data.get("__type") if isinstance(data, dict) else None
    if not type_data:
        raise SchemaLookupError(type_name)
    return IntrospectionResult.model_validate(type_data)


async def introspect_type(type_name: str, config: DriftConfig) -> IntrospectionResult:
    """Introspect a single type through the configured transport."""
    log.debug(f"Introspecting type '{type_name}'")
    data = await gql_fetch(config, INTROSPECTION_QUERY, {"typeName": type_name})
    return parse_introspection_data(type_name, data)


def match_mutations(type_name: str, mutation_root: IntrospectionResult) -> dict[MutationOperation, str]:
    """Find the conventional update/create/delete mutations present on the mutation root."""
    root_field_names = {field.name for field in mutation_root.fields}
    available: dict[MutationOperation, str] = {}
    for operation in MutationOperation:
        name = get_mutation_name(type_name, operation)
        if name in root_field_names:
            available[operation] = name
    return available


async def discover_mutations(type_name: str, config: DriftConfig) -> dict[MutationOperation, str]:
    """Discover the mutations available for a type by naming convention.

    Raises:
        MutationDiscoveryError: If the Mutation root type cannot be introspected
    """
    try:
        mutation_root = await introspect_type(MUTATION_ROOT_TYPE, config)
    except Exception as e:
        raise MutationDiscoveryError(
            "Could not introspect Mutation type. Check that mutations are defined and introspection is enabled."
        ) from e

    return match_mutations(type_name, mutation_root)
