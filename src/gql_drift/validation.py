"""Runtime validators for flat rows, built with pydantic.

The models match the flat shape, so validate rows after :func:`flatten` and
user input before :func:`unflatten`.
"""

from typing import Any, Literal

from graphql.pyutils import Undefined
from pydantic import BaseModel, ConfigDict, create_model, model_validator

from gql_drift.core.types import FieldDefinition, FieldType

PYTHON_TYPES: dict[FieldType, Any] = {
    FieldType.STRING: str,
    FieldType.NUMBER: float,
    FieldType.DATE: str,
    FieldType.BOOLEAN: bool,
}


class FlatRow(BaseModel):
    """Base for generated row models.

    :func:`flatten` marks values under a null or missing parent as ``Undefined``;
    those keys are treated as absent.
    """

    model_config = ConfigDict(strict=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_undefined(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not Undefined}
        return data


class FlatInput(FlatRow):
    model_config = ConfigDict(strict=True, extra="forbid")


def python_type_for_field(field: FieldDefinition) -> Any:
    """Get the annotation used to validate a field's flat value."""
    if field.type == FieldType.ENUM:
        if field.enum_values:
            return Literal[tuple(field.enum_values)]
        return str
    return PYTHON_TYPES.get(field.type, str)


def _field_definitions(fields: list[FieldDefinition]) -> dict[str, Any]:
    return {field.key: (python_type_for_field(field) | None, None) for field in fields}


def build_result_model(fields: list[FieldDefinition], model_name: str = "ResultRow") -> type[BaseModel]:
    """Build a strict model validating flattened query rows.

    ``id`` is always required; every other field may be null or missing.
    """
    return create_model(  # type: ignore[call-overload, no-any-return]
        model_name,
        __base__=FlatRow,
        id=(str, ...),
        **_field_definitions(fields),
    )


def build_input_model(fields: list[FieldDefinition], model_name: str = "InputRow") -> type[BaseModel]:
    """Build a strict model validating flat user input.

    All fields are optional so sparse updates validate; unknown keys are rejected.
    """
    return create_model(  # type: ignore[call-overload, no-any-return]
        model_name,
        __base__=FlatInput,
        **_field_definitions(fields),
    )
