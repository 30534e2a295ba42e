# src/exchange_client/exchanges/base/transport.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol


# -------- params --------

# scalar or list value; lists become repeated keys (?status=open&status=pending)
QueryParams = Mapping[str, Any]


# -------- response / error --------

@dataclass(frozen=True, slots=True)
class RestResponse:
    """
    Parsed 2xx response.

    data    : JSON body, raw text if body is not JSON, None if empty
    headers : lower-cased header names
    """
    status_code: int
    data: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)


class ExchangeHTTPError(RuntimeError):
    """
    Non-2xx response from the exchange.
    status_code and body are kept as-is for the caller.
    """

    def __init__(
        self,
        status_code: int,
        body: Any = None,
        *,
        method: str = "",
        path: str = "",
    ):
        self.status_code = int(status_code)
        self.body = body
        self.method = method
        self.path = path

        msg = body.get("message") if isinstance(body, dict) else None
        if msg is None and isinstance(body, str):
            msg = body[:500]
        super().__init__(f"HTTP {self.status_code} {method} {path}: {msg}")


# -------- transport --------

class RestTransport(Protocol):
    """
    Authenticated request capability consumed by resource clients.
    MUST raise ExchangeHTTPError for any non-2xx response.
    """

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[QueryParams] = None,
        body: Any = None,
    ) -> RestResponse:
        ...
