import pytest
from graphql import build_schema
from hypothesis import given
from hypothesis import strategies as st

from gql_drift.core.introspection import (
    discover_mutations,
    introspect_type,
    match_mutations,
    parse_introspection_data,
    unwrap_type,
)
from gql_drift.core.types import DriftConfig, IntrospectionResult, IntrospectionType, MutationOperation, TypeKind
from gql_drift.errors import MutationDiscoveryError, SchemaLookupError, TransportError
from tests.conftest import SchemaTransport

BASE_TYPES = [
    IntrospectionType(name="String", kind=TypeKind.SCALAR),
    IntrospectionType(name="Address", kind=TypeKind.OBJECT),
    IntrospectionType(name="OrderStatus", kind=TypeKind.ENUM, enum_values=["PENDING", "SHIPPED"]),
]


def wrap(base: IntrospectionType, wrappers: list[TypeKind]) -> IntrospectionType:
    current = base
    for kind in reversed(wrappers):
        current = IntrospectionType(kind=kind, of_type=current)
    return current


class TestUnwrapType:
    @given(
        base=st.sampled_from(BASE_TYPES),
        wrappers=st.lists(st.sampled_from([TypeKind.NON_NULL, TypeKind.LIST]), max_size=6),
    )
    def test_unwrap_reaches_named_type(self, base: IntrospectionType, wrappers: list[TypeKind]) -> None:
        assert unwrap_type(wrap(base, wrappers)) == base

    def test_unwrapped_type_is_returned_as_is(self) -> None:
        scalar = IntrospectionType(name="Int", kind=TypeKind.SCALAR)
        assert unwrap_type(scalar) is scalar

    def test_truncated_wrapper_returns_innermost_node(self) -> None:
        truncated = IntrospectionType(kind=TypeKind.NON_NULL, of_type=IntrospectionType(kind=TypeKind.LIST))
        unwrapped = unwrap_type(truncated)
        assert unwrapped.kind == TypeKind.LIST
        assert unwrapped.name is None

    def test_from_introspection_payload(self) -> None:
        payload = {
            "name": None,
            "kind": "NON_NULL",
            "enumValues": None,
            "ofType": {
                "name": None,
                "kind": "LIST",
                "enumValues": None,
                "ofType": {
                    "name": "OrderStatus",
                    "kind": "ENUM",
                    "enumValues": [{"name": "PENDING"}, {"name": "SHIPPED"}],
                    "ofType": None,
                },
            },
        }
        unwrapped = unwrap_type(IntrospectionType.model_validate(payload))
        assert unwrapped.name == "OrderStatus"
        assert unwrapped.enum_values == ["PENDING", "SHIPPED"]


def test_unknown_kind_decodes_to_other() -> None:
    assert IntrospectionType.model_validate({"name": "X", "kind": "SOMETHING_NEW"}).kind == TypeKind.OTHER


class TestParseIntrospectionData:
    def test_missing_type_raises(self) -> None:
        with pytest.raises(SchemaLookupError, match="Type 'Missing' not found"):
            parse_introspection_data("Missing", {"__type": None})

    def test_non_mapping_data_raises(self) -> None:
        with pytest.raises(SchemaLookupError):
            parse_introspection_data("Order", None)

    def test_input_fields_are_used_for_input_types(self) -> None:
        result = parse_introspection_data(
            "UpdateOrderInput",
            {
                "__type": {
                    "name": "UpdateOrderInput",
                    "fields": None,
                    "inputFields": [{"name": "notes", "type": {"name": "String", "kind": "SCALAR"}}],
                }
            },
        )
        assert [field.name for field in result.fields] == ["notes"]


class TestIntrospectType:
    @pytest.mark.asyncio
    async def test_object_type(self, shop_config: DriftConfig, shop_transport: SchemaTransport) -> None:
        result = await introspect_type("Order", shop_config)

        assert result.name == "Order"
        assert [field.name for field in result.fields][:3] == ["id", "orderNumber", "status"]
        assert shop_transport.introspected_type_names() == ["Order"]

    @pytest.mark.asyncio
    async def test_input_type(self, shop_config: DriftConfig) -> None:
        result = await introspect_type("UpdateOrderInput", shop_config)
        assert [field.name for field in result.fields] == ["status", "total", "paid", "shippingAddress", "notes"]

    @pytest.mark.asyncio
    async def test_unknown_type(self, shop_config: DriftConfig) -> None:
        with pytest.raises(SchemaLookupError):
            await introspect_type("Missing", shop_config)


class TestDiscoverMutations:
    @pytest.mark.asyncio
    async def test_all_conventional_mutations(self, shop_config: DriftConfig) -> None:
        mutations = await discover_mutations("Order", shop_config)
        assert mutations == {
            MutationOperation.UPDATE: "updateOrder",
            MutationOperation.CREATE: "createOrder",
            MutationOperation.DELETE: "deleteOrder",
        }

    @pytest.mark.asyncio
    async def test_type_without_mutations(self, shop_config: DriftConfig) -> None:
        assert await discover_mutations("Customer", shop_config) == {}

    @pytest.mark.asyncio
    async def test_schema_without_mutation_type(self) -> None:
        config = DriftConfig(transport=SchemaTransport(build_schema("type Query { ping: String }")))
        with pytest.raises(MutationDiscoveryError) as exc_info:
            await discover_mutations("Order", config)
        assert isinstance(exc_info.value.__cause__, SchemaLookupError)

    @pytest.mark.asyncio
    async def test_transport_failure(self) -> None:
        async def failing(query: str, variables: dict | None = None) -> None:
            raise TransportError("GraphQL request failed: 500 Internal Server Error", status_code=500)

        with pytest.raises(MutationDiscoveryError, match="Could not introspect Mutation type"):
            await discover_mutations("Order", DriftConfig(transport=failing))


def test_match_mutations_ignores_other_names() -> None:
    root = IntrospectionResult.model_validate(
        {
            "name": "Mutation",
            "fields": [
                {"name": "updateOrder", "type": {"name": "Order", "kind": "OBJECT"}},
                {"name": "updateOrders", "type": {"name": "Order", "kind": "OBJECT"}},
                {"name": "archiveOrder", "type": {"name": "Order", "kind": "OBJECT"}},
            ],
        }
    )
    assert match_mutations("Order", root) == {MutationOperation.UPDATE: "updateOrder"}
