# src/exchange_client/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from src.exchange_client.exchanges.coinbase.rest import BASE_URL, SANDBOX_URL

ENV_PREFIX = "EXCHANGE_"


def _truthy(v: Any) -> bool:
    return str(v).strip().lower() in ("1", "true", "yes", "on")


def _env(name: str, default: str = "") -> str:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


@dataclass(frozen=True)
class ClientSettings:
    """
    Connection settings for the REST client.

    Secrets come from env / .env (EXCHANGE_API_KEY, EXCHANGE_API_SECRET,
    EXCHANGE_PASSPHRASE). YAML holds the rest and may leave them out.
    """

    api_key: str = ""
    api_secret: str = ""
    passphrase: str = ""
    rest_url: Optional[str] = None
    sandbox: bool = False
    timeout: float = 10.0

    @property
    def base_url(self) -> str:
        if self.rest_url:
            return self.rest_url
        return SANDBOX_URL if self.sandbox else BASE_URL

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> "ClientSettings":
        if dotenv:
            load_dotenv(override=False)

        return cls(
            api_key=_env("API_KEY"),
            api_secret=_env("API_SECRET"),
            passphrase=_env("PASSPHRASE"),
            rest_url=_env("REST_URL") or None,
            sandbox=_truthy(_env("SANDBOX", "0")),
            timeout=float(_env("TIMEOUT", "10")),
        )

    @classmethod
    def from_yaml(cls, path: str | Path, *, dotenv: bool = True) -> "ClientSettings":
        p = Path(path)
        if not p.exists():
            raise SystemExit(f"Config file not found: {p}")

        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
        cfg = data.get("exchange") or {}

        env = cls.from_env(dotenv=dotenv)
        return cls(
            api_key=str(cfg.get("api_key") or env.api_key),
            api_secret=str(cfg.get("api_secret") or env.api_secret),
            passphrase=str(cfg.get("passphrase") or env.passphrase),
            rest_url=cfg.get("rest_url") or env.rest_url,
            sandbox=_truthy(cfg["sandbox"]) if "sandbox" in cfg else env.sandbox,
            timeout=float(cfg.get("timeout") or env.timeout),
        )
