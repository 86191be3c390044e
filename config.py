# config.py - Process configuration, read once at startup.
"""
All venue settings are loaded from the environment (or .env via main.py)
into one frozen Settings value. Services receive it explicitly instead of
calling os.getenv() in handler bodies.

Environment:
- BINANCE_API_KEY / BINANCE_SECRET_KEY: API credentials
- BINANCE_TESTNET: "true" to use the spot testnet
- HTTP_PROXY / HTTPS_PROXY: optional forward proxy (first one set wins)
- BINANCE_RECV_WINDOW: staleness window in ms for signed requests (default 5000)
"""

import os
from dataclasses import dataclass
from typing import Mapping

PRODUCTION_URL = "https://api.binance.com"
TESTNET_URL = "https://testnet.binance.vision"

DEFAULT_RECV_WINDOW = 5000


def env_flag(value: str | None) -> bool:
    return (value or "").strip().lower() == "true"


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    secret_key: str = ""
    testnet: bool = False
    proxy_url: str | None = None
    recv_window: int = DEFAULT_RECV_WINDOW
    base_url: str | None = None  # Override for local test servers only

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from a mapping (defaults to os.environ)."""
        env = os.environ if environ is None else environ

        proxy_url = env.get("HTTP_PROXY") or env.get("HTTPS_PROXY") or None
        recv_window = int(env.get("BINANCE_RECV_WINDOW") or DEFAULT_RECV_WINDOW)

        return cls(
            api_key=env.get("BINANCE_API_KEY", ""),
            secret_key=env.get("BINANCE_SECRET_KEY", ""),
            testnet=env_flag(env.get("BINANCE_TESTNET")),
            proxy_url=proxy_url,
            recv_window=recv_window,
        )

    def __repr__(self) -> str:
        # No keys in repr
        return (
            f"Settings(testnet={self.testnet}, proxy_url={self.proxy_url!r}, "
            f"recv_window={self.recv_window})"
        )
