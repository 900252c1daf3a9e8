import os
from pathlib import Path

from dotenv import load_dotenv

from .constants import (
    DEFAULT_BURN_FEE,
    DEFAULT_COLLATERALIZATION_THRESHOLD,
    DEFAULT_EXCHANGE_VENUE,
    DEFAULT_MINT_FEE,
    DEFAULT_SWAP_FEE,
    DEFAULT_TREASURY,
    DEFAULT_WRAPPED_NATIVE,
)
from .state.protocol_config import ProtocolConfig

# Load .env from the vault_model folder
env_path = Path(__file__).resolve().parents[1] / ".env"
load_dotenv(dotenv_path=env_path)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def load_protocol_config() -> ProtocolConfig:
    """Registry configuration from VAULT_* environment variables"""
    return ProtocolConfig(
        mint_fee=_env_int("VAULT_MINT_FEE", DEFAULT_MINT_FEE),
        burn_fee=_env_int("VAULT_BURN_FEE", DEFAULT_BURN_FEE),
        swap_fee=_env_int("VAULT_SWAP_FEE", DEFAULT_SWAP_FEE),
        collateralization_threshold=_env_int(
            "VAULT_COLLATERALIZATION_THRESHOLD", DEFAULT_COLLATERALIZATION_THRESHOLD
        ),
        treasury=os.getenv("VAULT_TREASURY") or DEFAULT_TREASURY,
        exchange_venue=os.getenv("VAULT_EXCHANGE_VENUE") or DEFAULT_EXCHANGE_VENUE,
        wrapped_native=os.getenv("VAULT_WRAPPED_NATIVE") or DEFAULT_WRAPPED_NATIVE,
    )
