# src/exchange_client/exchanges/registry.py
from __future__ import annotations

from src.exchange_client.config import ClientSettings
from src.exchange_client.exchanges.coinbase.order_api import OrderClient
from src.exchange_client.exchanges.coinbase.rest import CoinbaseREST


def build_rest(settings: ClientSettings) -> CoinbaseREST:
    return CoinbaseREST(
        settings.api_key,
        settings.api_secret,
        settings.passphrase,
        base_url=settings.base_url,
        timeout=settings.timeout,
    )


def build_order_client(settings: ClientSettings) -> OrderClient:
    return OrderClient(build_rest(settings))
