"""Naming conventions used to infer operation and type names.

These are conventions, not schema facts. Nothing here checks that a derived
name exists; whoever consumes the name establishes that.
"""

import re

from gql_drift.core.types import MutationOperation

_LOWER_UPPER_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def capitalize(text: str) -> str:
    """Uppercase the first character and leave the rest untouched."""
    return text[:1].upper() + text[1:]


def format_label(field_name: str) -> str:
    """Convert a camelCase field name to a human-readable label.

    Example: "shippingAddress" -> "Shipping Address"
    """
    return capitalize(_LOWER_UPPER_BOUNDARY.sub(r"\1 \2", field_name))


def get_mutation_name(type_name: str, operation: MutationOperation | str) -> str:
    """Get the mutation name for a type, e.g. ("Order", "update") -> "updateOrder"."""
    return f"{MutationOperation(operation).value}{type_name}"


def get_input_type_name(type_name: str, operation: MutationOperation | str) -> str:
    """Get the input type name for a type, e.g. ("Order", "update") -> "UpdateOrderInput"."""
    return f"{capitalize(MutationOperation(operation).value)}{type_name}Input"


def default_query_name(type_name: str) -> str:
    """Get the default list query name for a type, e.g. "Order" -> "orders"."""
    return f"{type_name.lower()}s"
