from pathlib import Path
from typing import Any

import pytest
from graphql import GraphQLSchema, graphql_sync

from gql_drift.core.types import DriftConfig, FieldDefinition, FieldType
from gql_drift.errors import TransportError
from gql_drift.schema_loader import load_schema_from_file


class TestSchemaData:
    TESTS_DATA_DIR: Path = Path(__file__).parent / "data"
    SHOP_SCHEMA: Path = TESTS_DATA_DIR / "shop.graphql"
    SPLIT_SCHEMA_DIR: Path = TESTS_DATA_DIR / "split"


# Field keys of Order at the default depth, in registry order
ORDER_FIELD_KEYS = [
    "orderNumber",
    "status",
    "total",
    "quantity",
    "paid",
    "createdAt",
    "shippingAddressStreet",
    "shippingAddressCity",
    "customerName",
    "customerEmail",
    "tags",
]

ORDER_EDITABLE_KEYS = ["status", "total", "paid"]

ORDER_ROWS = [
    {
        "id": "1",
        "orderNumber": "A-1",
        "status": "PENDING",
        "total": 1234.5,
        "quantity": 2,
        "paid": False,
        "createdAt": "2024-03-01T10:00:00Z",
        "metadata": None,
        "shippingAddress": {"street": "Main St 1", "city": "Berlin", "geo": None},
        "customer": {"id": "c1", "name": "Ada", "email": "ada@example.com"},
        "tags": ["rush"],
    },
    {
        "id": "2",
        "orderNumber": "A-2",
        "status": "SHIPPED",
        "total": None,
        "quantity": 1,
        "paid": True,
        "createdAt": None,
        "metadata": None,
        "shippingAddress": None,
        "customer": None,
        "tags": [],
    },
]


class SchemaTransport:
    """Transport executing documents against a local schema, recording every call."""

    def __init__(self, schema: GraphQLSchema, root_value: dict[str, Any] | None = None) -> None:
        self.schema = schema
        self.root_value = root_value or {}
        self.calls: list[tuple[str, dict[str, Any] | None]] = []

    async def __call__(self, query: str, variables: dict[str, Any] | None = None) -> Any:
        self.calls.append((query, variables))
        result = graphql_sync(self.schema, query, root_value=self.root_value, variable_values=variables)
        if result.errors:
            raise TransportError(", ".join(error.message for error in result.errors))
        return result.data

    def introspected_type_names(self) -> list[str]:
        return [variables["typeName"] for _, variables in self.calls if variables and "typeName" in variables]


def make_field(key: str, graphql_path: str | None = None, type: FieldType = FieldType.STRING, **kwargs: Any) -> FieldDefinition:
    return FieldDefinition(key=key, label=key, graphql_path=graphql_path or key, type=type, **kwargs)


@pytest.fixture(scope="module")
def shop_schema() -> GraphQLSchema:
    assert TestSchemaData.SHOP_SCHEMA.exists(), f"Missing test file: {TestSchemaData.SHOP_SCHEMA}"
    return load_schema_from_file(TestSchemaData.SHOP_SCHEMA)


@pytest.fixture
def shop_transport(shop_schema: GraphQLSchema) -> SchemaTransport:
    return SchemaTransport(shop_schema)


@pytest.fixture
def shop_config(shop_transport: SchemaTransport) -> DriftConfig:
    return DriftConfig(endpoint="http://shop.test/graphql", transport=shop_transport)


@pytest.fixture
def address_fields() -> list[FieldDefinition]:
    return [
        make_field("orderNumber"),
        make_field("shippingAddressCity", "shippingAddress.city"),
        make_field("shippingAddressStreet", "shippingAddress.street"),
    ]
