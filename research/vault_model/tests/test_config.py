import pytest

from vault_model.src.config import load_protocol_config
from vault_model.src.constants import DEFAULT_COLLATERALIZATION_THRESHOLD, DEFAULT_MINT_FEE
from vault_model.src.state.protocol_config import ProtocolConfig

ENV_VARS = [
    "VAULT_MINT_FEE",
    "VAULT_BURN_FEE",
    "VAULT_SWAP_FEE",
    "VAULT_COLLATERALIZATION_THRESHOLD",
    "VAULT_TREASURY",
    "VAULT_EXCHANGE_VENUE",
    "VAULT_WRAPPED_NATIVE",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_without_env(clean_env):
    config = load_protocol_config()
    assert config.mint_fee == DEFAULT_MINT_FEE
    assert config.collateralization_threshold == DEFAULT_COLLATERALIZATION_THRESHOLD


def test_env_overrides(clean_env):
    clean_env.setenv("VAULT_MINT_FEE", "250")
    clean_env.setenv("VAULT_COLLATERALIZATION_THRESHOLD", "120000")
    clean_env.setenv("VAULT_TREASURY", "dao_treasury")
    clean_env.setenv("VAULT_SWAP_FEE", "")

    config = load_protocol_config()
    assert config.mint_fee == 250
    assert config.collateralization_threshold == 120_000
    assert config.treasury == "dao_treasury"
    assert config.swap_fee == ProtocolConfig().swap_fee


def test_invalid_rates_rejected(clean_env):
    clean_env.setenv("VAULT_BURN_FEE", "100001")
    with pytest.raises(ValueError):
        load_protocol_config()
    with pytest.raises(ValueError):
        ProtocolConfig(collateralization_threshold=0)


def test_registry_update_config_validates(registry):
    with pytest.raises(ValueError):
        registry.update_config(mint_fee=-1)
    registry.update_config(treasury="new_treasury")
    assert registry.treasury == "new_treasury"
