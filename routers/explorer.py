from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool
from services.config.config import Settings, get_settings
from services.common import success_response
from services.networks import explorer as explorer_service

router = APIRouter()


async def _lookup(chain: str, tx_hash: str, settings: Settings):
    explorer = settings.explorer(chain)
    data = await run_in_threadpool(
        explorer_service.get_transaction, explorer, tx_hash, settings.request_timeout
    )
    return success_response(f"{explorer.name} Transaction found", data)


@router.get("/ethereum/{tx_hash}")
async def get_ethereum_transaction(tx_hash: str, settings: Settings = Depends(get_settings)):
    """Look up a transaction on Etherscan"""
    return await _lookup("ethereum", tx_hash, settings)


@router.get("/polygon/{tx_hash}")
async def get_polygon_transaction(tx_hash: str, settings: Settings = Depends(get_settings)):
    """Look up a transaction on Polygonscan"""
    return await _lookup("polygon", tx_hash, settings)


@router.get("/bsc/{tx_hash}")
async def get_bsc_transaction(tx_hash: str, settings: Settings = Depends(get_settings)):
    """Look up a transaction on Bscscan"""
    return await _lookup("bsc", tx_hash, settings)
