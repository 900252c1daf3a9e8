"""Collateral valuation, the collateralization predicate and the status query

Nothing here is cached: every call walks the approved-asset registry, reads
live balances and live prices, and reads the threshold from the registry
authority.
"""
import logging
from dataclasses import dataclass, field
from typing import List

import pandas as pd

from ..constants import ONE_HUNDRED_PERCENT, REFERENCE_SCALE, VAULT_TYPE, VAULT_VERSION
from ..errors import UndercollateralizedError
from ..fixed_point import checked_add, mul_div, mul_div_up, saturating_sub
from ..state.collateral import Asset
from ..state.vault import Vault

LOG = logging.getLogger("vault_model.valuation")


def total_collateral_value(vault: Vault) -> int:
    """Sum of every approved asset balance at its average price"""
    registry = vault.registry
    total = 0
    for asset in registry.token_registry.list_approved_assets():
        balance = vault.balance_of(asset)
        if balance == 0:
            continue
        total = checked_add(total, registry.oracle.to_reference(asset, balance))
    LOG.debug("[valuation] vault=%s total_collateral_value=%d", vault.address, total)
    return total


def max_mintable_for_value(vault: Vault, collateral_value: int) -> int:
    # max_mintable = value * 100% / threshold
    return mul_div(collateral_value, ONE_HUNDRED_PERCENT, vault.registry.collateralization_threshold)


def max_mintable(vault: Vault) -> int:
    return max_mintable_for_value(vault, total_collateral_value(vault))


def undercollateralized(vault: Vault) -> bool:
    return vault.minted_amount > max_mintable(vault)


def required_collateral_value(vault: Vault) -> int:
    """Smallest collateral value that keeps minted_amount within max_mintable"""
    # required = minted * threshold / 100%, rounded up
    return mul_div_up(vault.minted_amount, vault.registry.collateralization_threshold, ONE_HUNDRED_PERCENT)


def require_removal_allowed(vault: Vault, asset: Asset, amount: int) -> None:
    """Reject removing amount of asset if minted_amount would exceed what remains mintable"""
    if vault.minted_amount == 0:
        return
    current = max_mintable(vault)
    removed_value = vault.registry.oracle.to_reference(asset, amount)
    if removed_value > current:
        raise UndercollateralizedError(
            f"Removing {amount} {asset.symbol} worth {removed_value} exceeds max mintable {current}"
        )
    # remaining = current max mintable - value removed
    remaining = current - removed_value
    if vault.minted_amount > remaining:
        LOG.warning(
            "[valuation] removal rejected vault=%s asset=%s minted=%d remaining_max=%d",
            vault.address, asset.symbol, vault.minted_amount, remaining,
        )
        raise UndercollateralizedError(
            f"Minted {vault.minted_amount} would exceed max mintable {remaining} after removal"
        )


def calculate_minimum_amount_out(vault: Vault, asset_in: Asset, amount_in: int, asset_out: Asset) -> int:
    """Least output of asset_out that keeps the vault collateralized after giving up amount_in

    Zero when the collateral left after the input leaves still covers the
    minted amount; otherwise the reference-currency shortfall expressed in
    asset_out units.
    """
    oracle = vault.registry.oracle
    post_value = saturating_sub(total_collateral_value(vault), oracle.to_reference(asset_in, amount_in))
    required = required_collateral_value(vault)
    if post_value >= required:
        return 0
    return oracle.from_reference(asset_out, required - post_value)


@dataclass
class AssetPosition:
    symbol: str
    address: str
    balance: int
    value: int
    spot_value: int


@dataclass
class VaultStatusReport:
    vault: str
    minted_amount: int
    max_mintable: int
    total_collateral_value: int
    liquidated: bool
    version: str = VAULT_VERSION
    vault_type: str = VAULT_TYPE
    positions: List[AssetPosition] = field(default_factory=list)

    @property
    def collateral_ratio(self) -> float:
        """Collateral value over minted amount as a percentage, inf when nothing is minted"""
        if self.minted_amount == 0:
            return float("inf")
        return self.total_collateral_value * 100 / self.minted_amount

    def to_frame(self) -> pd.DataFrame:
        """Per-asset table in whole reference units"""
        rows = [
            {
                "symbol": p.symbol,
                "address": p.address,
                "balance": p.balance,
                "value": p.value / REFERENCE_SCALE,
                "spot_value": p.spot_value / REFERENCE_SCALE,
            }
            for p in self.positions
        ]
        return pd.DataFrame(rows, columns=["symbol", "address", "balance", "value", "spot_value"])


def vault_status(vault: Vault) -> VaultStatusReport:
    registry = vault.registry
    positions = []
    total = 0
    for asset in registry.token_registry.list_approved_assets():
        balance = vault.balance_of(asset)
        value = registry.oracle.to_reference(asset, balance)
        positions.append(
            AssetPosition(
                symbol=asset.symbol,
                address=asset.address,
                balance=balance,
                value=value,
                spot_value=registry.oracle.to_reference_spot(asset, balance),
            )
        )
        total = checked_add(total, value)
    return VaultStatusReport(
        vault=vault.address,
        minted_amount=vault.minted_amount,
        max_mintable=max_mintable_for_value(vault, total),
        total_collateral_value=total,
        liquidated=vault.liquidated,
        positions=positions,
    )
