"""Withdrawal gating for collateral, native collateral and stray assets"""
import pytest

from conftest import ETH, USDC, WBTC, units
from vault_model.src.errors import (
    AssetNotFoundError,
    UnauthorizedError,
    UndercollateralizedError,
)
from vault_model.src.events import AssetRemoved, CollateralRemoved
from vault_model.src.instructions.mint import mint
from vault_model.src.instructions.remove_collateral import (
    remove_asset,
    remove_collateral,
    remove_collateral_native,
)
from vault_model.src.instructions.valuation import max_mintable


@pytest.fixture
def indebted(vault, registry, deposit):
    """1000 minted against 1925 of USDC (max mintable 1283.33)"""
    registry.update_config(mint_fee=0)
    deposit(USDC, 1925)
    mint(vault, "alice", "alice", units(1000))
    return vault


def test_withdrawal_that_breaks_ratio_is_rejected(indebted, ledger):
    # 1425 left would only support 950
    with pytest.raises(UndercollateralizedError):
        remove_collateral(indebted, "alice", "USDC", units(500, 6), "alice")
    assert ledger.balance_of(USDC.address, indebted.address) == units(1925, 6)


def test_withdrawal_within_ratio_is_allowed(indebted, ledger, events):
    remove_collateral(indebted, "alice", "USDC", units(200, 6), "alice")
    assert ledger.balance_of(USDC.address, "alice") == units(200, 6)
    assert indebted.minted_amount <= max_mintable(indebted)
    assert events[-1] == CollateralRemoved(indebted.address, "USDC", units(200, 6), "alice")


def test_withdrawal_limit_is_max_mintable_minus_removed_value(indebted, ledger):
    # 1283.33 mintable: taking 283.34 leaves 999.99 < 1000, 283.33 leaves 1000.0033
    with pytest.raises(UndercollateralizedError):
        remove_collateral(indebted, "alice", "USDC", units(283.34, 6), "alice")
    remove_collateral(indebted, "alice", "USDC", units(283.33, 6), "alice")
    assert ledger.balance_of(USDC.address, "alice") == units(283.33, 6)


def test_withdrawal_of_425_is_rejected(indebted, ledger):
    # 1500 would remain, but 1283.33 - 425 = 858.33 < 1000
    with pytest.raises(UndercollateralizedError):
        remove_collateral(indebted, "alice", "USDC", units(425, 6), "alice")
    assert ledger.balance_of(USDC.address, indebted.address) == units(1925, 6)


def test_withdrawal_worth_more_than_max_mintable_is_rejected(indebted, ledger):
    # 1283.33 < 1500 < 1925: within collateral value, above max mintable
    with pytest.raises(UndercollateralizedError):
        remove_collateral(indebted, "alice", "USDC", units(1500, 6), "alice")
    assert ledger.balance_of(USDC.address, indebted.address) == units(1925, 6)
    assert indebted.minted_amount == units(1000)


def test_withdrawal_worth_more_than_collateral_is_rejected(indebted, deposit):
    with pytest.raises(UndercollateralizedError):
        remove_collateral(indebted, "alice", "USDC", units(5000, 6), "alice")


def test_anything_goes_without_debt(vault, ledger, deposit):
    deposit(WBTC, 0.5)
    remove_collateral(vault, "alice", "WBTC", units(0.5, 8), "bob")
    assert ledger.balance_of(WBTC.address, "bob") == units(0.5, 8)


def test_withdrawal_requires_owner(vault, deposit):
    deposit(USDC, 10)
    with pytest.raises(UnauthorizedError):
        remove_collateral(vault, "mallory", "USDC", 1, "mallory")


def test_unknown_symbol(vault):
    with pytest.raises(AssetNotFoundError):
        remove_collateral(vault, "alice", "DOGE", 1, "alice")


def test_native_withdrawal_gated(vault, registry, ledger, deposit, events):
    registry.update_config(mint_fee=0)
    deposit(ETH, 1)
    mint(vault, "alice", "alice", units(1000))

    with pytest.raises(UndercollateralizedError):
        remove_collateral_native(vault, "alice", units(0.5), "alice")

    # 1333.33 - 400 = 933.33 < 1000
    with pytest.raises(UndercollateralizedError):
        remove_collateral_native(vault, "alice", units(0.2), "alice")

    # 1333.33 - 300 = 1033.33
    remove_collateral_native(vault, "alice", units(0.15), "alice")
    assert ledger.native_balance("alice") == units(0.15)
    assert events[-1] == CollateralRemoved(vault.address, "ETH", units(0.15), "alice")


def test_remove_untracked_asset_is_unconstrained(indebted, ledger, events):
    ledger.mint_token("AIRDROP", indebted.address, units(7))
    remove_asset(indebted, "alice", "AIRDROP", units(7), "alice")
    assert ledger.balance_of("AIRDROP", "alice") == units(7)
    assert events[-1] == AssetRemoved(indebted.address, "AIRDROP", units(7), "alice")


def test_remove_asset_checks_tracked_address(indebted):
    with pytest.raises(UndercollateralizedError):
        remove_asset(indebted, "alice", USDC.address, units(500, 6), "alice")
    remove_asset(indebted, "alice", USDC.address, units(100, 6), "alice")


def test_reentrant_native_withdrawal_is_blocked(vault, ledger, deposit):
    deposit(ETH, 1)
    seen = []

    def reenter(ledger_, asset, sender, amount):
        try:
            remove_collateral_native(vault, "alice", units(0.5), "alice")
        except Exception as exc:
            seen.append(type(exc).__name__)

    ledger.register_hook("alice", reenter)
    remove_collateral_native(vault, "alice", units(0.5), "alice")

    assert seen == ["ReentrancyError"]
    assert ledger.native_balance("alice") == units(0.5)
    assert ledger.native_balance(vault.address) == units(0.5)
