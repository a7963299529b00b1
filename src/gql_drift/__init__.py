from gql_drift.logger import get_logger

__author__ = """gql-drift contributors"""
__version__ = "0.3.0"

log = get_logger("gql_drift")

from gql_drift.core.drift import (  # noqa: E402
    DriftClient,
    FetchResult,
    TypeCache,
    create_drift,
    create_drift_from_registry,
    define_drift_type,
    resolve_type,
)
from gql_drift.core.flatten import flatten, unflatten  # noqa: E402
from gql_drift.core.introspection import discover_mutations, introspect_type, unwrap_type  # noqa: E402
from gql_drift.core.mutation_builder import build_create_mutation, build_update_mutation  # noqa: E402
from gql_drift.core.naming import (  # noqa: E402
    capitalize,
    default_query_name,
    format_label,
    get_input_type_name,
    get_mutation_name,
)
from gql_drift.core.query_builder import build_query, build_selection_set  # noqa: E402
from gql_drift.core.registry import (  # noqa: E402
    DEFAULT_SCALAR_MAP,
    build_input_registry,
    build_registry,
    build_registry_async,
    get_editable_fields,
    with_labels,
)
from gql_drift.core.render import HtmlInputType, format_value, input_type, is_editable, parse_input  # noqa: E402
from gql_drift.core.transport import HttpTransport, gql_fetch  # noqa: E402
from gql_drift.core.types import (  # noqa: E402
    DriftConfig,
    FieldDefinition,
    FieldType,
    IntrospectionField,
    IntrospectionResult,
    IntrospectionType,
    MutationInfo,
    MutationOperation,
    ResolvedType,
    Transport,
    TypeKind,
)

__all__ = [
    "DEFAULT_SCALAR_MAP",
    "DriftClient",
    "DriftConfig",
    "FetchResult",
    "FieldDefinition",
    "FieldType",
    "HtmlInputType",
    "HttpTransport",
    "IntrospectionField",
    "IntrospectionResult",
    "IntrospectionType",
    "MutationInfo",
    "MutationOperation",
    "ResolvedType",
    "Transport",
    "TypeCache",
    "TypeKind",
    "build_create_mutation",
    "build_input_registry",
    "build_query",
    "build_registry",
    "build_registry_async",
    "build_selection_set",
    "build_update_mutation",
    "capitalize",
    "create_drift",
    "create_drift_from_registry",
    "default_query_name",
    "define_drift_type",
    "discover_mutations",
    "flatten",
    "format_label",
    "format_value",
    "get_editable_fields",
    "get_input_type_name",
    "get_mutation_name",
    "gql_fetch",
    "input_type",
    "introspect_type",
    "is_editable",
    "log",
    "parse_input",
    "resolve_type",
    "unflatten",
    "unwrap_type",
    "with_labels",
]
