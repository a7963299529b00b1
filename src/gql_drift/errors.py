class DriftError(Exception):
    """Base class for every error raised by gql-drift."""


class SchemaLookupError(DriftError):
    """Raised when introspection finds no type with the requested name."""

    def __init__(self, type_name: str, message: str | None = None) -> None:
        self.type_name = type_name
        super().__init__(
            message
            or f"Type '{type_name}' not found in schema. "
            "Check that the type name is correct and introspection is enabled."
        )


class InputTypeNotFoundError(SchemaLookupError):
    """Raised when the conventional update input type does not exist.

    This is an expected schema shape (a read-only type), so callers resolving a
    whole type catch it and fall back to empty input/editable field lists.
    """

    def __init__(self, type_name: str, input_type_name: str) -> None:
        self.input_type_name = input_type_name
        super().__init__(
            type_name,
            f"Input type '{input_type_name}' not found in schema. "
            f"Expected an input type following the convention Update{{TypeName}}Input for '{type_name}'.",
        )


class TransportError(DriftError):
    """Raised on a non-success transport response or a GraphQL error list."""

    def __init__(self, message: str, status_code: int | None = None, errors: list[str] | None = None) -> None:
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)


class MutationDiscoveryError(DriftError):
    """Raised when the root Mutation type itself cannot be introspected."""


class MalformedInputError(DriftError, ValueError):
    """Raised when a raw value cannot be coerced to a field's declared type."""

    def __init__(self, field_key: str, raw: object, expected: str) -> None:
        self.field_key = field_key
        self.raw = raw
        super().__init__(f"Invalid {expected} for field '{field_key}': {raw!r}")


class SchemaLoadError(DriftError):
    """Raised when a local SDL schema file cannot be read or parsed."""


class ConfigError(DriftError):
    """Raised when a gql-drift config file cannot be parsed or validated."""
