# src/exchange_client/core/models/order.py
from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar, Union

from src.exchange_client.core.models.enums import (
    CancelOrderPeriod,
    OrderSide,
    OrderStatus,
    OrderType,
    SelfTradePrevention,
    StopDirection,
    TimeInForce,
)

E = TypeVar("E", bound=Enum)

ZERO = "0.00000000"

DecimalLike = Union[str, Decimal, int]

# fields a MARKET order must not carry
_LIMIT_ONLY_FIELDS = ("price", "time_in_force", "cancel_after", "post_only")


# ----------------------------------------------------------------------
# helpers
# ----------------------------------------------------------------------

def _enum_or_raw(cls: Type[E], value: Any) -> Union[E, str, None]:
    """
    Server may add new values (statuses, stp codes) before we know them.
    Unknown values are kept as raw strings instead of failing the parse.
    """
    if value is None:
        return None
    try:
        return cls(value)
    except ValueError:
        return str(value)


def _dec_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        raise TypeError(f"decimal field got float {value!r}; pass str or Decimal")
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def _wire(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


# ----------------------------------------------------------------------
# request
# ----------------------------------------------------------------------

@dataclass(slots=True)
class NewOrder:
    """
    Order placement payload.

    Not validated locally: a LIMIT order without price is sent as-is and
    rejected by the exchange.
    """

    product_id: str
    side: OrderSide
    type: OrderType = OrderType.LIMIT

    # --- sizing (decimal strings) ---
    size: Optional[DecimalLike] = None
    funds: Optional[DecimalLike] = None
    price: Optional[DecimalLike] = None

    # --- flags ---
    client_oid: Optional[str] = None
    stp: Optional[SelfTradePrevention] = None
    stop: Optional[StopDirection] = None
    stop_price: Optional[DecimalLike] = None
    time_in_force: Optional[TimeInForce] = None
    cancel_after: Optional[CancelOrderPeriod] = None
    post_only: Optional[bool] = None

    def to_payload(self) -> dict[str, Any]:
        """JSON body for POST /orders. None fields are omitted."""
        payload: dict[str, Any] = {
            "product_id": self.product_id,
            "side": _wire(self.side),
            "type": _wire(self.type),
            "size": _dec_str(self.size),
            "funds": _dec_str(self.funds),
            "price": _dec_str(self.price),
            "client_oid": self.client_oid,
            "stp": _wire(self.stp),
            "stop": _wire(self.stop),
            "stop_price": _dec_str(self.stop_price),
            "time_in_force": _wire(self.time_in_force),
            "cancel_after": _wire(self.cancel_after),
            "post_only": self.post_only,
        }

        if _wire(self.type) == OrderType.MARKET.value:
            for k in _LIMIT_ONLY_FIELDS:
                payload.pop(k, None)

        return {k: v for k, v in payload.items() if v is not None}


# ----------------------------------------------------------------------
# response
# ----------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Order:
    """Snapshot of an order as reported by the exchange."""

    # --- identity ---
    id: str
    product_id: str
    side: Union[OrderSide, str]
    type: Union[OrderType, str]

    # --- lifecycle ---
    status: Union[OrderStatus, str, None] = None
    created_at: Optional[str] = None
    done_at: Optional[str] = None
    done_reason: Optional[str] = None
    reject_reason: Optional[str] = None
    settled: bool = False

    # --- sizing ---
    size: Optional[str] = None
    price: Optional[str] = None
    funds: Optional[str] = None
    specified_funds: Optional[str] = None

    # --- execution ---
    filled_size: str = ZERO
    executed_value: str = ZERO
    fill_fees: str = ZERO

    # --- flags ---
    stp: Union[SelfTradePrevention, str, None] = SelfTradePrevention.DECREMENT_AND_CANCEL
    post_only: bool = False
    time_in_force: Union[TimeInForce, str, None] = None
    expire_time: Optional[str] = None
    stop: Union[StopDirection, str, None] = None
    stop_price: Optional[str] = None

    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, r: Mapping[str, Any]) -> "Order":
        return cls(
            id=str(r["id"]),
            product_id=str(r.get("product_id") or ""),
            side=_enum_or_raw(OrderSide, r.get("side")),
            type=_enum_or_raw(OrderType, r.get("type")),
            status=_enum_or_raw(OrderStatus, r.get("status")),
            created_at=r.get("created_at"),
            done_at=r.get("done_at"),
            done_reason=r.get("done_reason"),
            reject_reason=r.get("reject_reason"),
            settled=bool(r.get("settled", False)),
            size=_dec_str(r.get("size")),
            price=_dec_str(r.get("price")),
            funds=_dec_str(r.get("funds")),
            specified_funds=_dec_str(r.get("specified_funds")),
            filled_size=_dec_str(r.get("filled_size")) or ZERO,
            executed_value=_dec_str(r.get("executed_value")) or ZERO,
            fill_fees=_dec_str(r.get("fill_fees")) or ZERO,
            stp=_enum_or_raw(SelfTradePrevention, r.get("stp", SelfTradePrevention.DECREMENT_AND_CANCEL.value)),
            post_only=bool(r.get("post_only", False)),
            time_in_force=_enum_or_raw(TimeInForce, r.get("time_in_force")),
            expire_time=r.get("expire_time"),
            stop=_enum_or_raw(StopDirection, r.get("stop")),
            stop_price=_dec_str(r.get("stop_price")),
            raw=dict(r),
        )

    def to_dict(self) -> dict[str, Any]:
        """Wire-shaped dict (enum values, decimal strings). Used by the CLI."""
        out: dict[str, Any] = {}
        for f in fields(self):
            if f.name == "raw":
                continue
            out[f.name] = _wire(getattr(self, f.name))
        return out


@dataclass(frozen=True, slots=True)
class Pagination:
    """Cursor pair from CB-BEFORE / CB-AFTER headers."""

    before: Optional[str] = None
    after: Optional[str] = None


@dataclass(frozen=True, slots=True)
class PaginatedOrders:
    data: list[Order]
    pagination: Pagination = field(default_factory=Pagination)
