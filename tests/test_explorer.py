"""
Tests for the Etherscan/Polygonscan/Bscscan lookups, both the client and the routes.
"""
from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests
from fastapi.testclient import TestClient

from services.config.config import ExplorerSettings
from services.exceptions import UpstreamError, UpstreamTimeoutError
from services.networks import explorer as explorer_service

TX_HASH = "0x5c504ed432cb51138bcf09aa5e8a410dd4a1e204ef84bfed1be16dfba1b22060"

EXPLORER = ExplorerSettings(name="Ethereum", api_key="secret-key", api_url="https://api.etherscan.io/api")


def make_response(payload: object = None, status_code: int = 200, json_error: bool = False) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = "<html>bad gateway</html>" if json_error else ""
    if json_error:
        response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        response.json.return_value = payload
    return response


class TestExplorerClient:
    def test_builds_proxy_query(self) -> None:
        payload = {"jsonrpc": "2.0", "id": 1, "result": {"hash": TX_HASH}}
        with patch("services.networks.explorer.requests.get", return_value=make_response(payload)) as mock_get:
            result = explorer_service.get_transaction(EXPLORER, TX_HASH, timeout=7)

        assert result == payload
        mock_get.assert_called_once_with(
            "https://api.etherscan.io/api",
            params={
                "module": "proxy",
                "action": "eth_getTransactionByHash",
                "txhash": TX_HASH,
                "apikey": "secret-key",
            },
            timeout=7,
        )

    def test_explorer_error_payload_passed_through(self) -> None:
        payload = {"status": "0", "message": "NOTOK", "result": "Invalid API Key"}
        with patch("services.networks.explorer.requests.get", return_value=make_response(payload)):
            assert explorer_service.get_transaction(EXPLORER, TX_HASH, timeout=5) == payload

    def test_timeout_is_distinct(self) -> None:
        with patch("services.networks.explorer.requests.get", side_effect=requests.exceptions.ReadTimeout("read timed out")):
            with pytest.raises(UpstreamTimeoutError) as exc_info:
                explorer_service.get_transaction(EXPLORER, TX_HASH, timeout=5)

        assert exc_info.value.status_code == 504
        assert "5 seconds" in exc_info.value.message

    def test_network_failure_hides_api_key(self) -> None:
        error = requests.exceptions.ConnectionError(
            "Max retries exceeded with url: /api?module=proxy&apikey=secret-key"
        )
        with patch("services.networks.explorer.requests.get", side_effect=error):
            with pytest.raises(UpstreamError) as exc_info:
                explorer_service.get_transaction(EXPLORER, TX_HASH, timeout=5)

        assert not isinstance(exc_info.value, UpstreamTimeoutError)
        assert "secret-key" not in exc_info.value.message
        assert "Max retries exceeded" in exc_info.value.message

    def test_non_json_body(self) -> None:
        with patch("services.networks.explorer.requests.get", return_value=make_response(status_code=502, json_error=True)):
            with pytest.raises(UpstreamError, match="invalid JSON"):
                explorer_service.get_transaction(EXPLORER, TX_HASH, timeout=5)


@pytest.mark.parametrize(
    "route, chain_name, api_url, api_key",
    [
        ("ethereum", "Ethereum", "https://api.etherscan.io/api", "eth-test-key"),
        ("polygon", "Polygon", "https://api.polygonscan.com/api", "polygon-test-key"),
        ("bsc", "BSC", "https://api.bscscan.com/api", "bsc-test-key"),
    ],
)
def test_route_wraps_payload(client: TestClient, route: str, chain_name: str, api_url: str, api_key: str) -> None:
    payload = {"jsonrpc": "2.0", "id": 1, "result": {"hash": TX_HASH, "blockNumber": "0x10"}}
    with patch("services.networks.explorer.requests.get", return_value=make_response(payload)) as mock_get:
        response = client.get(f"/{route}/{TX_HASH}")

    assert response.status_code == 200
    assert response.json() == {
        "status_code": 200,
        "message": f"{chain_name} Transaction found",
        "data": payload,
    }
    args, kwargs = mock_get.call_args
    assert args[0] == api_url
    assert kwargs["params"]["apikey"] == api_key
    assert kwargs["params"]["txhash"] == TX_HASH
    assert kwargs["timeout"] == 30.0


@pytest.mark.parametrize("route", ["ethereum", "polygon", "bsc"])
def test_route_network_failure_is_500(client: TestClient, route: str) -> None:
    with patch("services.networks.explorer.requests.get", side_effect=requests.exceptions.ConnectionError("connection refused")):
        response = client.get(f"/{route}/{TX_HASH}")

    body = response.json()
    assert response.status_code == 500
    assert body["status_code"] == 500
    assert body["data"] is None
    assert body["message"]


def test_route_timeout_is_504(client: TestClient) -> None:
    with patch("services.networks.explorer.requests.get", side_effect=requests.exceptions.ConnectTimeout("timed out")):
        response = client.get(f"/polygon/{TX_HASH}")

    assert response.status_code == 504
    assert response.json()["status_code"] == 504
    assert response.json()["data"] is None


def test_repeated_lookup_same_envelope(client: TestClient) -> None:
    payload = {"jsonrpc": "2.0", "id": 1, "result": None}
    with patch("services.networks.explorer.requests.get", return_value=make_response(payload)):
        first = client.get(f"/bsc/{TX_HASH}").json()
        second = client.get(f"/bsc/{TX_HASH}").json()

    assert first == second
