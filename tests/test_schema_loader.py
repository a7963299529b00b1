from pathlib import Path

import pytest
from graphql import GraphQLSchema, build_schema

from gql_drift.core.types import MutationOperation
from gql_drift.errors import InputTypeNotFoundError, SchemaLoadError, SchemaLookupError
from gql_drift.schema_loader import (
    SchemaTypeLookup,
    build_input_registry_from_schema,
    discover_mutations_from_schema,
    ensure_query,
    introspect_type_from_schema,
    load_schema_from_file,
    resolve_graphql_files,
    resolve_type_from_schema,
)
from tests.conftest import ORDER_EDITABLE_KEYS, ORDER_FIELD_KEYS, TestSchemaData


class TestLoadSchema:
    def test_resolve_graphql_files_filters_suffixes(self) -> None:
        files = resolve_graphql_files([TestSchemaData.SPLIT_SCHEMA_DIR])
        assert [file.name for file in files] == ["query.gql", "types.graphql"]

    def test_resolve_graphql_files_deduplicates(self) -> None:
        files = resolve_graphql_files([TestSchemaData.SHOP_SCHEMA, TestSchemaData.SHOP_SCHEMA])
        assert files == [TestSchemaData.SHOP_SCHEMA]

    def test_load_file(self, shop_schema: GraphQLSchema) -> None:
        assert "Order" in shop_schema.type_map
        assert shop_schema.mutation_type is not None

    def test_load_directory(self) -> None:
        schema = load_schema_from_file(TestSchemaData.SPLIT_SCHEMA_DIR)
        assert {"Product", "Category"} <= set(schema.type_map)

    def test_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(SchemaLoadError, match="No GraphQL schema files found"):
            load_schema_from_file(tmp_path / "missing.graphql")

    def test_invalid_sdl(self, tmp_path: Path) -> None:
        schema_file = tmp_path / "broken.graphql"
        schema_file.write_text("type Order {", encoding="utf-8")

        with pytest.raises(SchemaLoadError, match="Failed to parse schema file"):
            load_schema_from_file(schema_file)

    def test_schema_without_query_gets_one(self, tmp_path: Path) -> None:
        schema_file = tmp_path / "types.graphql"
        schema_file.write_text("type Order { id: ID! number: String }", encoding="utf-8")

        schema = load_schema_from_file(schema_file)

        assert schema.query_type is not None
        assert "Order" in schema.type_map

    def test_ensure_query_keeps_existing_query(self, shop_schema: GraphQLSchema) -> None:
        assert ensure_query(shop_schema) is shop_schema


class TestIntrospectFromSchema:
    def test_object_type(self, shop_schema: GraphQLSchema) -> None:
        result = introspect_type_from_schema("Address", shop_schema)
        assert [field.name for field in result.fields] == ["street", "city", "geo"]

    def test_input_type(self, shop_schema: GraphQLSchema) -> None:
        result = introspect_type_from_schema("CreateOrderInput", shop_schema)
        assert [field.name for field in result.fields] == ["orderNumber", "status"]

    def test_missing_type(self, shop_schema: GraphQLSchema) -> None:
        with pytest.raises(SchemaLookupError):
            introspect_type_from_schema("Missing", shop_schema)

    def test_lookup_mapping(self, shop_schema: GraphQLSchema) -> None:
        lookup = SchemaTypeLookup(shop_schema)

        assert "Address" in lookup
        assert "Missing" not in lookup
        assert lookup["Address"] is lookup["Address"]
        assert len(lookup) == len(shop_schema.type_map)
        with pytest.raises(KeyError):
            lookup["Missing"]


class TestResolveFromSchema:
    def test_writable_type(self, shop_schema: GraphQLSchema) -> None:
        order = resolve_type_from_schema("Order", shop_schema)

        assert [field.key for field in order.fields] == ORDER_FIELD_KEYS
        assert [field.key for field in order.editable_fields or []] == ORDER_EDITABLE_KEYS
        assert order.mutations == {
            MutationOperation.UPDATE: "updateOrder",
            MutationOperation.CREATE: "createOrder",
            MutationOperation.DELETE: "deleteOrder",
        }

    def test_read_only_type(self, shop_schema: GraphQLSchema) -> None:
        customer = resolve_type_from_schema("Customer", shop_schema)

        assert customer.mutations == {}
        assert customer.input_fields == []
        assert customer.editable_fields == []

    def test_depth(self, shop_schema: GraphQLSchema) -> None:
        keys = [field.key for field in resolve_type_from_schema("Order", shop_schema, max_depth=2).fields]
        assert "shippingAddressGeoLat" in keys
        assert "shippingAddressGeoLng" in keys

    def test_scalar_map(self, shop_schema: GraphQLSchema) -> None:
        order = resolve_type_from_schema("Order", shop_schema, scalar_map={"JSON": "string"})
        assert "metadata" in [field.key for field in order.fields]

    def test_missing_type(self, shop_schema: GraphQLSchema) -> None:
        with pytest.raises(SchemaLookupError):
            resolve_type_from_schema("Missing", shop_schema)

    def test_schema_without_mutation_type(self) -> None:
        schema = build_schema("type Product { id: ID! title: String } type Query { products: [Product] }")
        assert discover_mutations_from_schema("Product", schema) == {}

    def test_input_registry(self, shop_schema: GraphQLSchema) -> None:
        fields = build_input_registry_from_schema("Order", shop_schema)
        assert [field.key for field in fields] == ["status", "total", "paid", "notes"]

    def test_missing_input_registry(self, shop_schema: GraphQLSchema) -> None:
        with pytest.raises(InputTypeNotFoundError):
            build_input_registry_from_schema("Customer", shop_schema)
