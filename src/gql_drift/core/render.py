"""Display and form helpers driven by a field's simplified type."""

import math
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any

from graphql.pyutils import Undefined

from gql_drift.core.types import FieldDefinition, FieldType
from gql_drift.errors import MalformedInputError


class HtmlInputType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    CHECKBOX = "checkbox"
    SELECT = "select"


INPUT_TYPES = {
    FieldType.STRING: HtmlInputType.TEXT,
    FieldType.NUMBER: HtmlInputType.NUMBER,
    FieldType.DATE: HtmlInputType.DATE,
    FieldType.BOOLEAN: HtmlInputType.CHECKBOX,
    FieldType.ENUM: HtmlInputType.SELECT,
}


def input_type(field: FieldDefinition) -> HtmlInputType:
    """Get the HTML input type used to edit a field."""
    return INPUT_TYPES.get(field.type, HtmlInputType.TEXT)


def _to_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, int | float) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / 1000, tz=UTC).date()
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


def format_value(field: FieldDefinition, value: Any) -> str:
    """Format a raw value for display based on the field type.

    - string / enum: the value as-is
    - number: grouped with thousands separators, e.g. ``1,234.5``
    - date: ISO date (accepts date, datetime, ISO string or epoch milliseconds)
    - boolean: ``Yes`` / ``No``

    Missing values format as an empty string; values that do not fit the
    field type fall back to ``str(value)``.
    """
    if value is None or value is Undefined:
        return ""

    if field.type == FieldType.NUMBER:
        if isinstance(value, bool):
            return str(value)
        try:
            number = value if isinstance(value, int | float) else float(value)
        except (TypeError, ValueError):
            return str(value)
        return f"{number:,}"

    if field.type == FieldType.DATE:
        parsed = _to_date(value)
        return parsed.isoformat() if parsed else str(value)

    if field.type == FieldType.BOOLEAN:
        return "Yes" if value else "No"

    return str(value)


def parse_input(field: FieldDefinition, raw: str | bool) -> Any:
    """Parse a raw form value into the field's type before building mutation input.

    Raises:
        MalformedInputError: If a number field receives a non-numeric value
    """
    if field.type == FieldType.NUMBER:
        text = str(raw).strip()
        if isinstance(raw, bool) or not text:
            raise MalformedInputError(field.key, raw, "number")
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError as e:
            raise MalformedInputError(field.key, raw, "number") from e
        if math.isnan(number):
            raise MalformedInputError(field.key, raw, "number")
        return number

    if field.type == FieldType.BOOLEAN:
        return raw if isinstance(raw, bool) else raw == "true"

    return str(raw)


def is_editable(field: FieldDefinition, editable_keys: set[str]) -> bool:
    return field.key in editable_keys
