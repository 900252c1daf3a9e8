"""Forced liquidation of an undercollateralized vault"""
import logging
from typing import List, Tuple

from ..errors import NotLiquidatableError
from ..events import Liquidated
from ..guards import vault_operation
from ..state.vault import Vault
from .valuation import max_mintable

LOG = logging.getLogger("vault_model.liquidate")


@vault_operation
def liquidate(vault: Vault, caller: str) -> Tuple[Tuple[str, int], ...]:
    """Seize all collateral to the treasury and zero the minted amount

    Only the registry authority may call this, and only while the vault is
    undercollateralized. The vault is latched liquidated before any value
    leaves it; a failed sweep of any asset rolls the whole call back.
    Returns the swept (asset, amount) pairs.
    """
    vault.require_authority(caller)
    limit = max_mintable(vault)
    if vault.minted_amount <= limit:
        raise NotLiquidatableError(
            f"Vault {vault.address} minted {vault.minted_amount} within max mintable {limit}"
        )
    registry = vault.registry
    treasury = registry.treasury
    LOG.warning(
        "[liquidate] vault=%s minted=%d max_mintable=%d treasury=%s",
        vault.address, vault.minted_amount, limit, treasury,
    )

    vault.mark_liquidated()

    swept: List[Tuple[str, int]] = []
    native_balance = vault.balance_of_address(vault.native_asset_tag)
    if native_balance:
        vault.send(vault.native_asset_tag, treasury, native_balance)
        swept.append((vault.native_asset_tag, native_balance))

    for asset in registry.token_registry.list_approved_assets():
        if vault.is_native(asset.address):
            continue
        balance = vault.balance_of(asset)
        if balance == 0:
            continue
        vault.send(asset.address, treasury, balance)
        swept.append((asset.address, balance))

    vault.events.emit(Liquidated(vault.address, treasury, tuple(swept)))
    return tuple(swept)
