# src/exchange_client/core/models/enums.py
from __future__ import annotations
from enum import Enum

class OrderSide(str, Enum):
    BUY = "buy"
    SELL = "sell"

class OrderType(str, Enum):
    LIMIT = "limit"
    MARKET = "market"
    STOP = "stop"

class OrderStatus(str, Enum):
    ACTIVE = "active"
    DONE = "done"
    OPEN = "open"
    PENDING = "pending"
    RECEIVED = "received"
    REJECTED = "rejected"
    SETTLED = "settled"
    ALL = "all"

class SelfTradePrevention(str, Enum):
    CANCEL_BOTH = "cb"
    CANCEL_NEWEST = "cn"
    CANCEL_OLDEST = "co"
    DECREMENT_AND_CANCEL = "dc"

class TimeInForce(str, Enum):
    FILL_OR_KILL = "FOK"
    GOOD_TILL_CANCELED = "GTC"
    GOOD_TILL_TIME = "GTT"
    IMMEDIATE_OR_CANCEL = "IOC"

class CancelOrderPeriod(str, Enum):
    ONE_DAY = "day"
    ONE_HOUR = "hour"
    ONE_MINUTE = "min"

class StopDirection(str, Enum):
    ENTRY = "entry"
    LOSS = "loss"
