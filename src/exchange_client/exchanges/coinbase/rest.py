# src/exchange_client/exchanges/coinbase/rest.py
from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
import time
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from urllib.parse import urlencode

import requests

from src.exchange_client.exchanges.base.transport import (
    ExchangeHTTPError,
    QueryParams,
    RestResponse,
)

BASE_URL = "https://api.pro.coinbase.com"
SANDBOX_URL = "https://api-public.sandbox.pro.coinbase.com"

log = logging.getLogger("exchange_client.exchanges.coinbase.rest")


def _ts_s() -> str:
    return f"{time.time():.3f}"


def _q(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def build_query(params: Optional[QueryParams]) -> str:
    """
    urlencode with repeated keys for list values.
    Insertion order is kept, None values are dropped, nothing is sorted.
    """
    pairs: list[tuple[str, Any]] = []
    for k, v in (params or {}).items():
        if v is None:
            continue
        if isinstance(v, (list, tuple)):
            pairs.extend((k, _q(x)) for x in v)
        else:
            pairs.append((k, _q(v)))
    return urlencode(pairs)


class CoinbaseREST:
    """
    Coinbase-Pro-style REST transport (signed + public).
    Raises ExchangeHTTPError for any non-2xx; no retries.
    """

    def __init__(
        self,
        api_key: str = "",
        api_secret: str = "",
        passphrase: str = "",
        *,
        base_url: str = BASE_URL,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key or ""
        self.api_secret = api_secret or ""
        self.passphrase = passphrase or ""
        self.timeout = float(timeout)

        self.sess = requests.Session()
        self.sess.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json",
        })

    # ---------------------------------------------------------------------
    # SIGN
    # ---------------------------------------------------------------------

    def _sign_headers(self, method: str, request_path: str, body_text: str) -> dict[str, str]:
        """
        CB-ACCESS-SIGN = base64(HMAC_SHA256(b64decode(secret), ts + METHOD + path + body))
        request_path includes the query string.
        """
        if not self.api_secret:
            raise RuntimeError("Signed request requires api_secret")

        ts = _ts_s()
        what = f"{ts}{method.upper()}{request_path}{body_text}"
        key = base64.b64decode(self.api_secret)
        sig = base64.b64encode(hmac.new(key, what.encode("utf-8"), hashlib.sha256).digest())

        return {
            "CB-ACCESS-KEY": self.api_key,
            "CB-ACCESS-SIGN": sig.decode("utf-8"),
            "CB-ACCESS-TIMESTAMP": ts,
            "CB-ACCESS-PASSPHRASE": self.passphrase,
        }

    # ---------------------------------------------------------------------
    # CORE REQUEST
    # ---------------------------------------------------------------------

    @staticmethod
    def _parse_body(r: requests.Response) -> Any:
        if not r.text:
            return None
        try:
            # decimals stay exact; the API sends them as strings anyway
            data = r.json(parse_float=Decimal)
        except ValueError:
            return r.text
        # bare scalar bodies (a canceled id like 123) stay as sent
        if isinstance(data, (int, Decimal)):
            return r.text
        return data

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[QueryParams] = None,
        body: Any = None,
    ) -> RestResponse:
        method = method.upper()
        qs = build_query(params)
        request_path = f"{path}?{qs}" if qs else path
        body_text = json.dumps(body) if body is not None else ""

        headers: dict[str, str] = {}
        if self.api_key:
            headers.update(self._sign_headers(method, request_path, body_text))

        log.debug("%s %s", method, request_path)

        r = self.sess.request(
            method=method,
            url=f"{self.base_url}{request_path}",
            data=body_text or None,
            headers=headers,
            timeout=self.timeout,
        )

        data = self._parse_body(r)

        if not 200 <= r.status_code < 300:
            log.warning("HTTP %d %s %s", r.status_code, method, request_path)
            raise ExchangeHTTPError(r.status_code, data, method=method, path=request_path)

        return RestResponse(
            status_code=r.status_code,
            data=data,
            headers={k.lower(): v for k, v in r.headers.items()},
        )

