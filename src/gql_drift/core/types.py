from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

Transport = Callable[[str, dict[str, Any] | None], Awaitable[Any]]
"""Async callable taking ``(document, variables)`` and returning the ``data`` payload."""


class FieldType(str, Enum):
    """Simplified scalar type used for formatting and validation."""

    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    ENUM = "enum"


class MutationOperation(str, Enum):
    UPDATE = "update"
    CREATE = "create"
    DELETE = "delete"


class TypeKind(str, Enum):
    """GraphQL ``__TypeKind`` values. Unknown kinds decode to ``OTHER``."""

    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT_OBJECT = "INPUT_OBJECT"
    LIST = "LIST"
    NON_NULL = "NON_NULL"
    OTHER = "OTHER"

    @classmethod
    def _missing_(cls, value: object) -> "TypeKind":
        return cls.OTHER

    @property
    def is_wrapper(self) -> bool:
        return self in (TypeKind.NON_NULL, TypeKind.LIST)


class DriftModel(BaseModel):
    """Base model accepting snake_case or camelCase input and dumping camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dict with camelCase keys and without None values."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class FieldDefinition(DriftModel):
    """A single field flowing through the whole pipeline.

    Args:
        key: Flat property name used in rows, e.g. "shippingAddressCity"
        label: Human-readable label, e.g. "City"
        graphql_path: Dot-notation path into the response, e.g. "shippingAddress.city"
        type: Simplified field type
        enum_values: Allowed values, only for enum fields
    """

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    graphql_path: str
    type: FieldType
    enum_values: list[str] | None = None


class IntrospectionType(DriftModel):
    """A (possibly wrapped) type node as returned by ``__type`` introspection."""

    name: str | None = None
    kind: TypeKind
    of_type: "IntrospectionType | None" = None
    enum_values: list[str] | None = None

    @field_validator("kind", mode="before")
    @classmethod
    def _closed_kind(cls, value: Any) -> TypeKind:
        return value if isinstance(value, TypeKind) else TypeKind(value)

    @field_validator("enum_values", mode="before")
    @classmethod
    def _enum_value_names(cls, value: Any) -> Any:
        if value is None:
            return None
        return [item["name"] if isinstance(item, dict) else item for item in value]


class IntrospectionField(DriftModel):
    name: str
    type: IntrospectionType


class IntrospectionResult(DriftModel):
    """Name and fields of one introspected type.

    Input object types report their fields under ``inputFields`` and leave
    ``fields`` null, so those are used as the field list instead.
    """

    name: str
    fields: list[IntrospectionField] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _input_fields_fallback(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("fields") is None:
            input_fields = data.get("inputFields", data.get("input_fields"))
            data = {**data, "fields": input_fields or []}
        return data


class MutationInfo(DriftModel):
    """Mutation metadata recorded by code generation."""

    operation: MutationOperation
    mutation_name: str
    input_type_name: str


def get_editable_fields(
    query_fields: list[FieldDefinition],
    input_fields: list[FieldDefinition],
) -> list[FieldDefinition]:
    """Get the fields that are both readable and writable.

    Args:
        query_fields: The query registry
        input_fields: The input registry

    Returns:
        The query fields whose key also appears among the input fields, in query order
    """
    input_keys = {field.key for field in input_fields}
    return [field for field in query_fields if field.key in input_keys]


class ResolvedType(DriftModel):
    """Resolved registry of one GraphQL type.

    ``editable_fields`` is recomputed from ``fields`` and ``input_fields``
    unless it is passed explicitly.
    """

    type_name: str
    fields: list[FieldDefinition]
    mutations: dict[MutationOperation, str] = Field(default_factory=dict)
    input_fields: list[FieldDefinition] = Field(default_factory=list)
    editable_fields: list[FieldDefinition] | None = None

    @model_validator(mode="after")
    def _derive_editable_fields(self) -> "ResolvedType":
        if self.editable_fields is None:
            self.editable_fields = get_editable_fields(self.fields, self.input_fields)
        return self


class DriftConfig(DriftModel):
    """Runtime configuration for introspection and data operations.

    Args:
        endpoint: GraphQL endpoint URL
        headers: Extra HTTP headers (auth tokens etc.)
        max_depth: Maximum nesting depth for nested object fields
        scalar_map: Scalar name to field type overrides
        transport: Custom async transport used instead of HTTP POST
    """

    endpoint: str = ""
    headers: dict[str, str] = Field(default_factory=dict)
    max_depth: int = 1
    scalar_map: dict[str, FieldType] = Field(default_factory=dict)
    transport: Transport | None = Field(default=None, exclude=True)
