"""Convert between nested GraphQL response objects and flat rows.

``{"shippingAddress": {"city": "Berlin"}}`` <-> ``{"shippingAddressCity": "Berlin"}``
"""

from collections.abc import Mapping
from typing import Any

from graphql.pyutils import Undefined

from gql_drift.core.query_builder import ID_FIELD
from gql_drift.core.types import FieldDefinition


def flatten(data: Mapping[str, Any], fields: list[FieldDefinition]) -> dict[str, Any]:
    """Flatten a nested response object into a row keyed by field key.

    ``id`` is always copied when present. When a parent object on the way to
    a field is null or absent the field's value is ``Undefined``; a leaf that
    is explicitly null stays ``None``.

    Args:
        data: One nested object from the GraphQL response
        fields: Field definitions driving the mapping

    Returns:
        The flat row
    """
    row: dict[str, Any] = {}
    if ID_FIELD in data:
        row[ID_FIELD] = data[ID_FIELD]

    for field in fields:
        value: Any = data
        for segment in field.graphql_path.split("."):
            if value is None or value is Undefined:
                value = Undefined
                break
            value = value.get(segment, Undefined) if isinstance(value, Mapping) else Undefined
        row[field.key] = value

    return row


def unflatten(row: Mapping[str, Any], fields: list[FieldDefinition]) -> dict[str, Any]:
    """Rebuild a nested object from a flat row.

    Only fields whose key is present in ``row`` are written, so a sparse row
    yields a sparse object suitable for partial updates. ``Undefined`` values
    count as absent. Fields sharing a parent segment share one nested mapping.

    Args:
        row: Flat key-value pairs, e.g. the changed cells of a table row
        fields: Field definitions driving the mapping

    Returns:
        The nested object
    """
    result: dict[str, Any] = {}

    for field in fields:
        if field.key not in row or row[field.key] is Undefined:
            continue

        *parents, leaf = field.graphql_path.split(".")
        target = result
        for segment in parents:
            target = target.setdefault(segment, {})
        target[leaf] = row[field.key]

    return result
