# config.py
import os
from typing import Mapping, Optional, Dict
from fastapi import Request
from pydantic import BaseModel, ConfigDict
from services.exceptions import ConfigError

DEFAULT_TIMEOUT_SECONDS = 30.0
SOLANA_MAINNET_RPC = "https://api.mainnet-beta.solana.com"

# Explorer chains share the same proxy-style query shape, only host and key differ
EXPLORER_CONFIGS = {
    "ethereum": {
        "name": "Ethereum",
        "api_key_env": "ETHERSCAN_API_KEY",
        "api_url_env": "ETHERSCAN_API_URL",
        "default_api_url": "https://api.etherscan.io/api",
    },
    "polygon": {
        "name": "Polygon",
        "api_key_env": "POLYGONSCAN_API_KEY",
        "api_url_env": "POLYGONSCAN_API_URL",
        "default_api_url": "https://api.polygonscan.com/api",
    },
    "bsc": {
        "name": "BSC",
        "api_key_env": "BSCSCAN_API_KEY",
        "api_url_env": "BSCSCAN_API_URL",
        "default_api_url": "https://api.bscscan.com/api",
    },
}


class ExplorerSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    api_key: str
    api_url: str


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    explorers: Dict[str, ExplorerSettings]
    solana_rpc_url: str = SOLANA_MAINNET_RPC
    request_timeout: float = DEFAULT_TIMEOUT_SECONDS

    def explorer(self, chain: str) -> ExplorerSettings:
        return self.explorers[chain]


def _get(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigError(f"REQUEST_TIMEOUT_SECONDS must be a number, got '{raw}'")
    if timeout <= 0:
        raise ConfigError(f"REQUEST_TIMEOUT_SECONDS must be positive, got '{raw}'")
    return timeout


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build the process-wide settings from the environment.

    All required API keys are checked together so a misconfigured deployment
    reports every missing variable in a single ConfigError.
    """
    if environ is None:
        environ = os.environ

    missing = []
    explorers = {}
    for chain, cfg in EXPLORER_CONFIGS.items():
        api_key = _get(environ, cfg["api_key_env"])
        if api_key is None:
            missing.append(cfg["api_key_env"])
            continue
        explorers[chain] = ExplorerSettings(
            name=cfg["name"],
            api_key=api_key,
            api_url=(_get(environ, cfg["api_url_env"]) or cfg["default_api_url"]).rstrip("/"),
        )

    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    return Settings(
        explorers=explorers,
        solana_rpc_url=_get(environ, "SOLANA_MAINNET_RPC_URL") or SOLANA_MAINNET_RPC,
        request_timeout=_parse_timeout(_get(environ, "REQUEST_TIMEOUT_SECONDS")),
    )


def get_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings loaded at startup"""
    return request.app.state.settings
