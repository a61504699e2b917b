from fastapi import APIRouter, Depends, Query
from starlette.concurrency import run_in_threadpool
from services.config.config import Settings, get_settings
from services.common import success_response
from services.networks import solana as solana_service
from typing import List, Optional

router = APIRouter()


def split_public_keys(values: List[str]) -> List[str]:
    """Accept repeated ?public_keys= values as well as comma-separated lists"""
    keys = []
    for value in values:
        keys.extend(key.strip() for key in value.split(",") if key.strip())
    return keys


@router.get("/solana/{tx_hash}")
async def get_solana_transaction(tx_hash: str, settings: Settings = Depends(get_settings)):
    """
    Look up a transaction by signature on Solana mainnet.

    The RPC client is blocking, so the call runs in the threadpool.
    """
    data = await run_in_threadpool(
        solana_service.get_transaction, tx_hash, settings.solana_rpc_url, settings.request_timeout
    )
    return success_response("Solana Transaction found", data)


@router.get("/solana-balances")
async def get_solana_balances(
    public_keys: List[str] = Query(..., min_length=1, description="Base-58 public keys, repeated or comma-separated"),
    rpc: Optional[str] = Query(None, description="RPC endpoint (defaults to Solana mainnet)"),
    settings: Settings = Depends(get_settings)
):
    """
    Non-zero SOL balances for a list of public keys.

    Keys that cannot be parsed or queried are listed under `errors`.
    """
    rpc_url = rpc.strip() if rpc and rpc.strip() else settings.solana_rpc_url
    report = await run_in_threadpool(
        solana_service.get_balances, rpc_url, split_public_keys(public_keys), settings.request_timeout
    )
    return success_response("Solana balances fetched", report.model_dump())
