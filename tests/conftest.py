from __future__ import annotations

from typing import Any

import pytest

from config import Settings
from services.errors import TransportError


class FakeBinanceAPI:
    """Records requests instead of sending them."""

    def __init__(self, response: Any = None, error: Exception | None = None):
        self.response = {} if response is None else response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def request(self, method: str, path: str, query_string: str = "", api_key: str | None = None) -> Any:
        self.calls.append({
            "method": method,
            "path": path,
            "query_string": query_string,
            "api_key": api_key,
        })
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self) -> None:
        pass


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-api-key-1234", secret_key="test-secret-key-5678")


@pytest.fixture
def no_credentials() -> Settings:
    return Settings()


@pytest.fixture
def fake_api() -> FakeBinanceAPI:
    return FakeBinanceAPI()


@pytest.fixture
def failing_api() -> FakeBinanceAPI:
    return FakeBinanceAPI(error=TransportError("Invalid symbol.", status=400, code=-1121))
