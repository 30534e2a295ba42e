# src/exchange_client/exchanges/coinbase/order_api.py
from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from src.exchange_client.core.models.enums import OrderStatus
from src.exchange_client.core.models.order import NewOrder, Order, PaginatedOrders, Pagination
from src.exchange_client.exchanges.base.transport import ExchangeHTTPError, RestTransport

log = logging.getLogger("exchange_client.exchanges.coinbase.order_api")


class OrderClient:
    """
    Order management over the /orders resource.

    IMPORTANT:
      - stateless: every call is one HTTP request, nothing is cached
      - the only recovered error is 404 on get_order() -> None
      - no local validation; the exchange rejects malformed orders
    """

    class URL:
        ORDERS = "/orders"

    def __init__(self, rest: RestTransport):
        self.rest = rest

    # ------------------------------------------------------------------
    # place
    # ------------------------------------------------------------------

    def place_order(self, new_order: NewOrder) -> Order:
        payload = new_order.to_payload()
        log.debug("place_order %s", payload)
        resp = self.rest.request("POST", self.URL.ORDERS, body=payload)
        return Order.from_dict(resp.data)

    # ------------------------------------------------------------------
    # read
    # ------------------------------------------------------------------

    def get_orders(
        self,
        status: Optional[OrderStatus | str | Sequence[OrderStatus | str]] = None,
        product_id: Optional[str] = None,
        *,
        before: Optional[str] = None,
        after: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> PaginatedOrders:
        """
        List orders. `status` goes out as repeated keys in caller order
        (?status=open&status=pending), which the API requires.
        """
        params: dict[str, Any] = {}
        if isinstance(status, str):
            status = [status]
        if status:
            params["status"] = list(status)
        if product_id:
            params["product_id"] = product_id
        if before is not None:
            params["before"] = before
        if after is not None:
            params["after"] = after
        if limit is not None:
            params["limit"] = int(limit)

        log.debug("get_orders %s", params)
        resp = self.rest.request("GET", self.URL.ORDERS, params=params or None)

        headers = resp.headers or {}
        return PaginatedOrders(
            data=[Order.from_dict(r) for r in resp.data or []],
            pagination=Pagination(
                before=headers.get("cb-before"),
                after=headers.get("cb-after"),
            ),
        )

    def get_order(self, order_id: str) -> Optional[Order]:
        log.debug("get_order %s", order_id)
        try:
            resp = self.rest.request("GET", f"{self.URL.ORDERS}/{order_id}")
        except ExchangeHTTPError as e:
            if e.status_code == 404:
                return None
            raise
        return Order.from_dict(resp.data)

    # ------------------------------------------------------------------
    # cancel
    # ------------------------------------------------------------------

    def cancel_order(self, order_id: str, product_id: Optional[str] = None) -> str:
        """
        product_id is a lookup hint for the exchange, the order is still
        addressed by id.
        """
        params = {"product_id": product_id} if product_id else None
        log.debug("cancel_order %s product=%s", order_id, product_id)
        resp = self.rest.request("DELETE", f"{self.URL.ORDERS}/{order_id}", params=params)
        return None if resp.data is None else str(resp.data)

    def cancel_open_orders(self, product_id: Optional[str] = None) -> list[str]:
        """Cancel all open orders, or only those of product_id."""
        params = {"product_id": product_id} if product_id else None
        log.debug("cancel_open_orders product=%s", product_id)
        resp = self.rest.request("DELETE", self.URL.ORDERS, params=params)
        return resp.data
