"""
Shared fixtures: a fully configured environment and a started TestClient.
Outbound calls are always mocked at the boundary, tests never hit the network.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from main import app

API_KEYS = {
    "ETHERSCAN_API_KEY": "eth-test-key",
    "POLYGONSCAN_API_KEY": "polygon-test-key",
    "BSCSCAN_API_KEY": "bsc-test-key",
}

OPTIONAL_VARS = (
    "ETHERSCAN_API_URL",
    "POLYGONSCAN_API_URL",
    "BSCSCAN_API_URL",
    "SOLANA_MAINNET_RPC_URL",
    "REQUEST_TIMEOUT_SECONDS",
)


@pytest.fixture
def gateway_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    for name in OPTIONAL_VARS:
        monkeypatch.delenv(name, raising=False)
    for name, value in API_KEYS.items():
        monkeypatch.setenv(name, value)
    return dict(API_KEYS)


@pytest.fixture
def client(gateway_env: dict[str, str]):
    with TestClient(app) as test_client:
        yield test_client
