import json
import logging
import httpx
from decimal import Decimal
from typing import Any, List
from solana.rpc.api import Client
from solana.rpc.core import RPCException
from solana.exceptions import SolanaRpcException
from solders.errors import SerdeJSONError
from solders.pubkey import Pubkey
from solders.signature import Signature
from schemas.solana import BalanceError, BalanceReport
from services.exceptions import InvalidInputError, UpstreamError, UpstreamTimeoutError

logger = logging.getLogger(__name__)

LAMPORTS_PER_SOL = Decimal(10 ** 9)


def parse_signature(tx_hash: str) -> Signature:
    try:
        return Signature.from_string(tx_hash)
    except ValueError as e:
        raise InvalidInputError(f"Invalid Solana transaction signature '{tx_hash}': {e}")


def parse_public_key(public_key: str) -> Pubkey:
    try:
        return Pubkey.from_string(public_key)
    except ValueError as e:
        raise InvalidInputError(f"Invalid Solana public key '{public_key}': {e}")


def lamports_to_sol(lamports: int) -> str:
    """Exact SOL amount without float rounding or exponent notation, e.g. 1500000000 -> '1.5'"""
    return format((Decimal(lamports) / LAMPORTS_PER_SOL).normalize(), "f")


def _rpc_failure(exc: Exception, rpc_url: str, timeout: float) -> UpstreamError:
    if isinstance(exc, SolanaRpcException) and isinstance(exc.__cause__, httpx.TimeoutException):
        return UpstreamTimeoutError(f"Solana RPC {rpc_url} did not respond within {timeout:g} seconds")
    return UpstreamError(f"Solana RPC request failed: {exc}")


def get_transaction(tx_hash: str, rpc_url: str, timeout: float) -> Any:
    """
    Fetch a transaction by signature and return it as plain JSON.

    This is a blocking call; route handlers run it in the threadpool.

    Raises:
        InvalidInputError: `tx_hash` is not a base-58 signature
        UpstreamTimeoutError: the RPC node did not answer in time
        UpstreamError: RPC error, unknown transaction or an unreadable result
    """
    signature = parse_signature(tx_hash)
    client = Client(rpc_url, timeout=timeout)

    logger.info(f"Fetching Solana transaction {signature} from {rpc_url}")
    try:
        resp = client.get_transaction(signature, encoding="json", max_supported_transaction_version=0)
    except (SolanaRpcException, RPCException, SerdeJSONError) as e:
        logger.error(f"Solana getTransaction failed for {signature}: {e}")
        raise _rpc_failure(e, rpc_url, timeout)

    if resp.value is None:
        logger.info(f"Solana transaction {signature} not found")
        raise UpstreamError(f"Solana transaction {signature} not found")

    try:
        return json.loads(resp.value.to_json())
    except ValueError as e:
        logger.error(f"Could not serialize Solana transaction {signature}: {e}")
        raise UpstreamError(f"Could not serialize Solana transaction: {e}")


def get_balances(rpc_url: str, public_keys: List[str], timeout: float) -> BalanceReport:
    """
    Query the native balance of every key, in order.

    Non-zero balances are listed as "<key>: <amount> SOL". Keys that fail to
    parse or whose lookup fails are reported in `errors` instead of stopping
    the whole request; zero balances appear in neither list.
    """
    report = BalanceReport()
    client = Client(rpc_url, timeout=timeout)

    for public_key in public_keys:
        try:
            pubkey = parse_public_key(public_key)
        except InvalidInputError as e:
            logger.info(e.message)
            report.errors.append(BalanceError(public_key=public_key, error=e.message))
            continue

        try:
            lamports = client.get_balance(pubkey).value
        except Exception as e:
            failure = _rpc_failure(e, rpc_url, timeout)
            logger.warning(f"Balance lookup failed for {public_key}: {failure.message}")
            report.errors.append(BalanceError(public_key=public_key, error=failure.message))
            continue

        if lamports > 0:
            report.accounts.append(f"{public_key}: {lamports_to_sol(lamports)} SOL")

    logger.info(f"Fetched {len(public_keys)} Solana balances from {rpc_url}: {len(report.accounts)} non-zero, {len(report.errors)} failed")
    return report
