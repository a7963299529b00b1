import pytest

from gql_drift.core.naming import capitalize, default_query_name, format_label, get_input_type_name, get_mutation_name
from gql_drift.core.types import MutationOperation


@pytest.mark.parametrize(
    "field_name, expected",
    [
        ("status", "Status"),
        ("orderNumber", "Order Number"),
        ("shippingAddressCity", "Shipping Address City"),
        ("createdAt", "Created At"),
        ("URL", "URL"),
        ("", ""),
    ],
)
def test_format_label(field_name: str, expected: str) -> None:
    assert format_label(field_name) == expected


@pytest.mark.parametrize(
    "text, expected",
    [("order", "Order"), ("Order", "Order"), ("o", "O"), ("", "")],
)
def test_capitalize(text: str, expected: str) -> None:
    assert capitalize(text) == expected


class TestMutationNames:
    @pytest.mark.parametrize(
        "operation, expected",
        [
            (MutationOperation.UPDATE, "updateOrder"),
            (MutationOperation.CREATE, "createOrder"),
            (MutationOperation.DELETE, "deleteOrder"),
            ("update", "updateOrder"),
        ],
    )
    def test_get_mutation_name(self, operation: MutationOperation | str, expected: str) -> None:
        assert get_mutation_name("Order", operation) == expected

    @pytest.mark.parametrize(
        "operation, expected",
        [
            (MutationOperation.UPDATE, "UpdateOrderInput"),
            (MutationOperation.CREATE, "CreateOrderInput"),
            (MutationOperation.DELETE, "DeleteOrderInput"),
        ],
    )
    def test_get_input_type_name(self, operation: MutationOperation, expected: str) -> None:
        assert get_input_type_name("Order", operation) == expected

    def test_unknown_operation_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            get_mutation_name("Order", "upsert")


def test_default_query_name() -> None:
    assert default_query_name("Order") == "orders"
    assert default_query_name("OrderItem") == "orderitems"
