# src/exchange_client/cli/orders.py
from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Optional

from src.exchange_client.config import ClientSettings
from src.exchange_client.core.models.enums import OrderSide, OrderStatus, OrderType, TimeInForce
from src.exchange_client.core.models.order import NewOrder
from src.exchange_client.exchanges.base.transport import ExchangeHTTPError
from src.exchange_client.exchanges.registry import build_order_client

log = logging.getLogger("exchange_client.cli.orders")


def _dump(obj: Any) -> None:
    print(json.dumps(obj, indent=2, default=str))


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="exchange-orders",
        description="Place, list and cancel exchange orders",
    )
    ap.add_argument("--config", type=str, default="", help="YAML config; env/.env if omitted")
    ap.add_argument("--verbose", "-v", action="store_true")

    sub = ap.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("list", help="list orders")
    p.add_argument("--status", action="append", default=[],
                   choices=[s.value for s in OrderStatus], help="repeatable")
    p.add_argument("--product-id", default=None)

    p = sub.add_parser("get", help="show one order")
    p.add_argument("order_id")

    p = sub.add_parser("place", help="place an order")
    p.add_argument("--product-id", required=True)
    p.add_argument("--side", required=True, choices=[s.value for s in OrderSide])
    p.add_argument("--type", default=OrderType.LIMIT.value, choices=[t.value for t in OrderType])
    p.add_argument("--size", default=None)
    p.add_argument("--funds", default=None)
    p.add_argument("--price", default=None)
    p.add_argument("--time-in-force", default=None, choices=[t.value for t in TimeInForce])
    p.add_argument("--post-only", action="store_true")
    p.add_argument("--client-oid", default=None)

    p = sub.add_parser("cancel", help="cancel one order")
    p.add_argument("order_id")
    p.add_argument("--product-id", default=None)

    p = sub.add_parser("cancel-all", help="cancel all open orders")
    p.add_argument("--product-id", default=None)

    return ap


def _run(client, args: argparse.Namespace) -> int:
    if args.cmd == "list":
        page = client.get_orders(status=args.status or None, product_id=args.product_id)
        _dump({
            "data": [o.to_dict() for o in page.data],
            "pagination": {"before": page.pagination.before, "after": page.pagination.after},
        })
        return 0

    if args.cmd == "get":
        order = client.get_order(args.order_id)
        _dump(order.to_dict() if order else None)
        return 0 if order else 1

    if args.cmd == "place":
        new_order = NewOrder(
            product_id=args.product_id,
            side=OrderSide(args.side),
            type=OrderType(args.type),
            size=args.size,
            funds=args.funds,
            price=args.price,
            time_in_force=TimeInForce(args.time_in_force) if args.time_in_force else None,
            post_only=True if args.post_only else None,
            client_oid=args.client_oid,
        )
        _dump(client.place_order(new_order).to_dict())
        return 0

    if args.cmd == "cancel":
        _dump(client.cancel_order(args.order_id, args.product_id))
        return 0

    if args.cmd == "cancel-all":
        _dump(client.cancel_open_orders(args.product_id))
        return 0

    raise ValueError(f"Unknown command: {args.cmd}")


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    settings = ClientSettings.from_yaml(args.config) if args.config else ClientSettings.from_env()
    log.info("REST %s (sandbox=%s)", settings.base_url, settings.sandbox)

    client = build_order_client(settings)
    try:
        return _run(client, args)
    except ExchangeHTTPError as e:
        log.error("%s", e)
        _dump({"error": e.status_code, "body": e.body})
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
