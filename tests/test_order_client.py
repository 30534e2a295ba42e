"""
Tests for OrderClient against a recording fake transport.
"""

import pytest

from src.exchange_client.core.models.enums import OrderSide, OrderStatus, OrderType, SelfTradePrevention
from src.exchange_client.core.models.order import NewOrder
from src.exchange_client.exchanges.base.transport import ExchangeHTTPError
from src.exchange_client.exchanges.coinbase.order_api import OrderClient

ORDER_ID = "8eba9e7b-08d6-4667-90ca-6db445d743c1"


def test_place_market_order(transport, market_order_json):
    transport.reply(market_order_json)
    client = OrderClient(transport)

    order = client.place_order(
        NewOrder(product_id="BTC-EUR", side=OrderSide.BUY, size="0.1", type=OrderType.MARKET)
    )

    assert len(transport.calls) == 1
    call = transport.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "/orders"
    assert call["body"] == {"product_id": "BTC-EUR", "side": "buy", "type": "market", "size": "0.1"}

    assert order.product_id == "BTC-EUR"
    assert order.side == OrderSide.BUY
    assert order.type == OrderType.MARKET
    assert order.size == "0.10000000"
    assert order.status == OrderStatus.PENDING
    assert order.stp == SelfTradePrevention.DECREMENT_AND_CANCEL


def test_place_limit_order_sends_price(transport, market_order_json):
    market_order_json.update(type="limit", size="1.00000000")
    transport.reply(market_order_json)
    client = OrderClient(transport)

    order = client.place_order(
        NewOrder(product_id="BTC-EUR", side=OrderSide.BUY, size="1", price="18427.33", type=OrderType.LIMIT)
    )

    assert transport.calls[0]["body"]["price"] == "18427.33"
    assert order.size == "1.00000000"
    assert order.type == OrderType.LIMIT


def test_place_limit_order_without_price_is_not_validated_locally(transport):
    transport.reply({"message": "price is required"}, status=400)
    client = OrderClient(transport)

    with pytest.raises(ExchangeHTTPError) as ei:
        client.place_order(NewOrder(product_id="BTC-EUR", side=OrderSide.SELL, size="1"))

    assert ei.value.status_code == 400
    assert "price" not in transport.calls[0]["body"]


def test_get_orders_without_filter_has_no_query(transport, market_order_json):
    market_order_json["status"] = "open"
    transport.reply([market_order_json])
    client = OrderClient(transport)

    page = client.get_orders()

    assert transport.calls[0]["method"] == "GET"
    assert transport.calls[0]["url"] == "/orders"
    assert len(page.data) == 1
    assert page.data[0].status == OrderStatus.OPEN
    assert page.pagination.before is None
    assert page.pagination.after is None


def test_get_orders_repeats_status_keys_in_order(transport, market_order_json):
    transport.reply([market_order_json])
    client = OrderClient(transport)

    page = client.get_orders(status=[OrderStatus.OPEN, OrderStatus.PENDING])

    assert transport.calls[0]["url"] == "/orders?status=open&status=pending"
    assert len(page.data) == 1


def test_get_orders_keeps_caller_order_and_duplicates(transport):
    transport.reply([])
    client = OrderClient(transport)

    client.get_orders(status=[OrderStatus.PENDING, OrderStatus.OPEN, OrderStatus.PENDING])

    assert transport.calls[0]["url"] == "/orders?status=pending&status=open&status=pending"


def test_get_orders_pagination_cursors(transport, market_order_json):
    transport.reply([market_order_json], headers={"cb-before": "10", "cb-after": "42"})
    client = OrderClient(transport)

    page = client.get_orders(product_id="BTC-EUR", limit=1, after="43")

    assert transport.calls[0]["url"] == "/orders?product_id=BTC-EUR&after=43&limit=1"
    assert page.pagination.before == "10"
    assert page.pagination.after == "42"


def test_get_order(transport, done_order_json):
    transport.reply(done_order_json)
    client = OrderClient(transport)

    order = client.get_order(ORDER_ID)

    assert transport.calls[0]["url"] == f"/orders/{ORDER_ID}"
    assert order is not None
    assert order.id == ORDER_ID
    assert order.status == OrderStatus.DONE
    assert order.settled is True
    assert order.done_reason == "filled"
    assert order.specified_funds == "10.0000000000000000"
    assert order.executed_value == "9.9750556620000000"
    assert order.fill_fees == "0.0249376391550000"
    assert order.filled_size == "0.01291771"


def test_get_order_returns_none_on_404(transport):
    transport.reply(status=404)
    client = OrderClient(transport)

    assert client.get_order("123") is None


@pytest.mark.parametrize("status", [400, 403, 500])
def test_get_order_rethrows_other_errors(transport, status):
    transport.reply({"message": "nope"}, status=status)
    client = OrderClient(transport)

    with pytest.raises(ExchangeHTTPError) as ei:
        client.get_order("123")

    assert ei.value.status_code == status
    assert ei.value.body == {"message": "nope"}


def test_cancel_order(transport):
    transport.reply(ORDER_ID)
    client = OrderClient(transport)

    canceled = client.cancel_order(ORDER_ID)

    assert transport.calls[0]["method"] == "DELETE"
    assert transport.calls[0]["url"] == f"/orders/{ORDER_ID}"
    assert canceled == ORDER_ID


def test_cancel_order_with_product_id(transport):
    transport.reply(ORDER_ID)
    client = OrderClient(transport)

    canceled = client.cancel_order(ORDER_ID, "BTC-USD")

    assert transport.calls[0]["url"] == f"/orders/{ORDER_ID}?product_id=BTC-USD"
    assert canceled == ORDER_ID


def test_cancel_open_orders(transport):
    transport.reply([ORDER_ID])
    client = OrderClient(transport)

    canceled = client.cancel_open_orders()

    assert transport.calls[0]["method"] == "DELETE"
    assert transport.calls[0]["url"] == "/orders"
    assert canceled == [ORDER_ID]


def test_cancel_open_orders_for_product(transport):
    transport.reply([ORDER_ID])
    client = OrderClient(transport)

    canceled = client.cancel_open_orders("ETH-EUR")

    assert transport.calls[0]["url"] == "/orders?product_id=ETH-EUR"
    assert canceled == [ORDER_ID]


@pytest.mark.parametrize("status", [OrderStatus.OPEN, "open"])
def test_get_orders_single_status_is_not_split(transport, status):
    transport.reply([])
    client = OrderClient(transport)

    client.get_orders(status=status)

    assert transport.calls[0]["url"] == "/orders?status=open"


def test_cancel_order_numeric_id_is_returned_as_string(transport):
    transport.reply(123)
    client = OrderClient(transport)

    canceled = client.cancel_order("123")

    assert canceled == "123"
    assert isinstance(canceled, str)
