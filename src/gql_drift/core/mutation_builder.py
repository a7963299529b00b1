from gql_drift.core.naming import capitalize, get_input_type_name, get_mutation_name
from gql_drift.core.query_builder import ID_FIELD, build_selection_set, render_operation
from gql_drift.core.types import FieldDefinition, MutationOperation


def _return_selections(return_fields: list[FieldDefinition]) -> list[str]:
    return build_selection_set([ID_FIELD, *(field.graphql_path for field in return_fields)])


def build_update_mutation(
    type_name: str,
    return_fields: list[FieldDefinition],
    input_type_name: str | None = None,
) -> str:
    """Build an update mutation document.

    Produces::

        mutation UpdateOrder($id: ID!, $input: UpdateOrderInput!) {
          updateOrder(id: $id, input: $input) {
            id
            ...
          }
        }

    Args:
        type_name: The GraphQL type name, e.g. "Order"
        return_fields: Fields to select from the mutation result
        input_type_name: Overrides the conventional ``Update{TypeName}Input``

    Returns:
        The mutation document
    """
    mutation_name = get_mutation_name(type_name, MutationOperation.UPDATE)
    input_type = input_type_name or get_input_type_name(type_name, MutationOperation.UPDATE)

    return render_operation(
        "mutation",
        capitalize(mutation_name),
        ["$id: ID!", f"$input: {input_type}!"],
        mutation_name,
        ["id: $id", "input: $input"],
        _return_selections(return_fields),
    )


def build_create_mutation(
    type_name: str,
    return_fields: list[FieldDefinition],
    input_type_name: str | None = None,
) -> str:
    """Build a create mutation document. Unlike updates it takes no ``$id``.

    Args:
        type_name: The GraphQL type name, e.g. "Order"
        return_fields: Fields to select from the mutation result
        input_type_name: Overrides the conventional ``Create{TypeName}Input``

    Returns:
        The mutation document
    """
    mutation_name = get_mutation_name(type_name, MutationOperation.CREATE)
    input_type = input_type_name or get_input_type_name(type_name, MutationOperation.CREATE)

    return render_operation(
        "mutation",
        capitalize(mutation_name),
        [f"$input: {input_type}!"],
        mutation_name,
        ["input: $input"],
        _return_selections(return_fields),
    )
