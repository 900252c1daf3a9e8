"""
Pytest fixtures: a small world with three approved assets, a price oracle,
the pegged unit, an exchange venue and one vault owned by alice.
"""
from decimal import Decimal

import pytest

from vault_model.src.constants import NATIVE_ASSET
from vault_model.src.oracle import PriceOracle, usd
from vault_model.src.stablecoin import Stablecoin
from vault_model.src.state.collateral import Asset, TokenRegistry
from vault_model.src.state.ledger import Ledger
from vault_model.src.state.protocol_config import ProtocolConfig, VaultRegistry
from vault_model.src.venue import ExchangeVenue

ETH = Asset("ETH", NATIVE_ASSET, 18)
WBTC = Asset("WBTC", "WBTC", 8)
USDC = Asset("USDC", "USDC", 6)

OWNER = "alice"
WNATIVE = "WNATIVE"
TREASURY = "treasury"


def units(amount, decimals=18):
    """Whole tokens to base units"""
    return int(Decimal(str(amount)) * 10 ** decimals)


@pytest.fixture
def ledger():
    return Ledger()


@pytest.fixture
def token_registry():
    return TokenRegistry(assets=[ETH, WBTC, USDC])


@pytest.fixture
def oracle():
    oracle = PriceOracle()
    oracle.set_price(ETH.address, usd(2000))
    oracle.set_price(WBTC.address, usd(60000))
    oracle.set_price(USDC.address, usd(1))
    return oracle


@pytest.fixture
def stablecoin(ledger):
    return Stablecoin(ledger)


@pytest.fixture
def config():
    return ProtocolConfig(
        mint_fee=500,
        burn_fee=500,
        swap_fee=300,
        collateralization_threshold=150_000,
        treasury=TREASURY,
        exchange_venue="venue",
        wrapped_native=WNATIVE,
    )


@pytest.fixture
def venue(ledger, oracle, token_registry):
    venue = ExchangeVenue(ledger, oracle, token_registry, wrapped_native=WNATIVE, address="venue")
    ledger.mint_token(WNATIVE, venue.address, units(1_000))
    ledger.mint_token(USDC.address, venue.address, units(10_000_000, 6))
    ledger.mint_token(WBTC.address, venue.address, units(100, 8))
    return venue


@pytest.fixture
def registry(ledger, token_registry, oracle, stablecoin, config, venue):
    registry = VaultRegistry(ledger, token_registry, oracle, stablecoin, config=config)
    registry.register_venue(venue)
    return registry


@pytest.fixture
def vault(registry):
    return registry.create_vault(owner=OWNER)


@pytest.fixture
def events(vault):
    received = []
    vault.events.subscribe(received.append)
    return received


@pytest.fixture
def deposit(ledger, vault):
    """Fund the vault with whole units of an asset"""

    def _deposit(asset, amount):
        ledger.mint_token(asset.address, vault.address, units(amount, asset.decimals))

    return _deposit
