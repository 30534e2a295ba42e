"""
Shared fixtures: a recording fake transport and sample order payloads.
"""

from __future__ import annotations

from typing import Any

import pytest

from src.exchange_client.exchanges.base.transport import ExchangeHTTPError, RestResponse
from src.exchange_client.exchanges.coinbase.rest import build_query


class FakeTransport:
    """Records every request and replies from a queue (RestResponse or exception)."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self._replies: list[Any] = []

    def reply(self, data: Any = None, *, status: int = 200, headers: dict | None = None) -> None:
        if status >= 400:
            self._replies.append(ExchangeHTTPError(status, data))
        else:
            self._replies.append(RestResponse(status_code=status, data=data, headers=headers or {}))

    def request(self, method, path, *, params=None, body=None) -> RestResponse:
        qs = build_query(params)
        self.calls.append({
            "method": method,
            "path": path,
            "params": params,
            "body": body,
            "url": f"{path}?{qs}" if qs else path,
        })
        r = self._replies.pop(0)
        if isinstance(r, Exception):
            raise r
        return r


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def market_order_json() -> dict[str, Any]:
    return {
        "created_at": "2019-04-22T20:21:20.897409Z",
        "executed_value": "0.0000000000000000",
        "fill_fees": "0.0000000000000000",
        "filled_size": "0.00000000",
        "funds": "207850.8486540300000000",
        "id": "8eba9e7b-08d6-4667-90ca-6db445d743c0",
        "post_only": False,
        "product_id": "BTC-EUR",
        "settled": False,
        "side": "buy",
        "size": "0.10000000",
        "status": "pending",
        "stp": "dc",
        "type": "market",
    }


@pytest.fixture
def done_order_json() -> dict[str, Any]:
    return {
        "created_at": "2016-12-08T20:09:05.508883Z",
        "done_at": "2016-12-08T20:09:05.527Z",
        "done_reason": "filled",
        "executed_value": "9.9750556620000000",
        "fill_fees": "0.0249376391550000",
        "filled_size": "0.01291771",
        "funds": "9.9750623400000000",
        "id": "8eba9e7b-08d6-4667-90ca-6db445d743c1",
        "post_only": False,
        "product_id": "BTC-USD",
        "settled": True,
        "side": "buy",
        "size": "1.00000000",
        "specified_funds": "10.0000000000000000",
        "status": "done",
        "stp": "dc",
        "type": "market",
    }
