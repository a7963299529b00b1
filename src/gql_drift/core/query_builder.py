from gql_drift.core.naming import capitalize
from gql_drift.core.types import FieldDefinition

ID_FIELD = "id"


def build_selection_set(paths: list[str]) -> list[str]:
    """Group dotted paths into GraphQL selections.

    Root paths come first in the order given, followed by one group per parent
    in first-seen order. Groups nest recursively, so
    ``["id", "shippingAddress.city", "shippingAddress.geo.lat"]`` becomes
    ``["id", "shippingAddress { city geo { lat } }"]``. Duplicates collapse.

    Args:
        paths: Dot-separated field paths

    Returns:
        The selection entries
    """
    roots: list[str] = []
    nested: dict[str, list[str]] = {}

    for path in paths:
        parent, dot, child = path.partition(".")
        if not dot:
            if path not in roots:
                roots.append(path)
        else:
            nested.setdefault(parent, []).append(child)

    groups = [f"{parent} {{ {' '.join(build_selection_set(children))} }}" for parent, children in nested.items()]
    return roots + groups


def _selection_paths(fields: list[FieldDefinition]) -> list[str]:
    return [ID_FIELD, *(field.graphql_path for field in fields)]


def render_operation(
    operation: str,
    name: str,
    variable_declarations: list[str],
    root_field: str,
    arguments: list[str],
    selections: list[str],
) -> str:
    """Render a single-root-field operation document."""
    variables = f"({', '.join(variable_declarations)})" if variable_declarations else ""
    args = f"({', '.join(arguments)})" if arguments else ""
    body = "\n    ".join(selections)
    return f"{operation} {name}{variables} {{\n  {root_field}{args} {{\n    {body}\n  }}\n}}"


def build_query(
    query_name: str,
    fields: list[FieldDefinition],
    filter_type_name: str | None = None,
    extra_variables: str | None = None,
) -> str:
    """Build a query document for a list query.

    ``id`` is always selected. With ``filter_type_name`` the query declares
    ``$filter`` and passes it as the ``filter`` argument; ``extra_variables``
    (e.g. ``"$limit: Int"``) is appended to the variable declarations as-is.

    ``build_query("orders", fields, filter_type_name="OrderFilter")`` renders::

        query Orders($filter: OrderFilter) {
          orders(filter: $filter) {
            id
            status
          }
        }
    """
    declarations: list[str] = []
    arguments: list[str] = []

    if filter_type_name:
        declarations.append(f"$filter: {filter_type_name}")
        arguments.append("filter: $filter")
    if extra_variables:
        declarations.append(extra_variables)

    return render_operation(
        "query",
        capitalize(query_name),
        declarations,
        query_name,
        arguments,
        build_selection_set(_selection_paths(fields)),
    )
