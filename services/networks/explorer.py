import requests
import logging
from typing import Any
from services.config.config import ExplorerSettings
from services.exceptions import UpstreamError, UpstreamTimeoutError

logger = logging.getLogger(__name__)


def build_params(tx_hash: str, api_key: str) -> dict:
    """Query string shared by Etherscan, Polygonscan and Bscscan"""
    return {
        "module": "proxy",
        "action": "eth_getTransactionByHash",
        "txhash": tx_hash,
        "apikey": api_key,
    }


def get_transaction(explorer: ExplorerSettings, tx_hash: str, timeout: float) -> Any:
    """
    Look up a transaction on a block explorer.

    The explorer's JSON document is returned as-is, including its own error
    payloads (e.g. {"status": "0", "message": "NOTOK", ...}).

    Raises:
        UpstreamTimeoutError: the explorer did not answer within `timeout` seconds
        UpstreamError: network failure or a body that is not JSON
    """
    logger.info(f"[{explorer.name}] Fetching transaction {tx_hash}")
    try:
        response = requests.get(
            explorer.api_url,
            params=build_params(tx_hash, explorer.api_key),
            timeout=timeout
        )
    except requests.exceptions.Timeout:
        logger.warning(f"[{explorer.name}] Explorer timed out after {timeout}s for tx {tx_hash}")
        raise UpstreamTimeoutError(f"{explorer.name} explorer did not respond within {timeout:g} seconds")
    except requests.exceptions.RequestException as e:
        # the request URL carries the api key
        reason = str(e).replace(explorer.api_key, "***") or type(e).__name__
        logger.error(f"[{explorer.name}] Explorer request failed for tx {tx_hash}: {reason}")
        raise UpstreamError(f"{explorer.name} explorer request failed: {reason}")

    if response.status_code != 200:
        logger.warning(f"[{explorer.name}] Explorer answered HTTP {response.status_code} for tx {tx_hash}")

    try:
        return response.json()
    except ValueError as e:
        logger.error(f"[{explorer.name}] Invalid JSON from explorer (status {response.status_code}): {response.text[:200]}")
        raise UpstreamError(f"{explorer.name} explorer returned an invalid JSON body: {e}")
