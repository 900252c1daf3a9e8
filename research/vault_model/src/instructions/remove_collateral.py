"""Owner withdrawals of collateral and stray assets"""
import logging

from ..events import AssetRemoved, CollateralRemoved
from ..guards import vault_operation
from ..state.collateral import NULL_ASSET
from ..state.vault import Vault
from .valuation import require_removal_allowed

LOG = logging.getLogger("vault_model.remove_collateral")


@vault_operation
def remove_collateral(vault: Vault, caller: str, symbol: str, amount: int, to: str) -> None:
    vault.require_owner(caller)
    vault.require_active()
    asset = vault.registry.token_registry.get_asset(symbol)
    require_removal_allowed(vault, asset, amount)
    vault.send(asset.address, to, amount)
    LOG.info("[remove_collateral] vault=%s %s amount=%d to=%s", vault.address, symbol, amount, to)
    vault.events.emit(CollateralRemoved(vault.address, symbol, amount, to))


@vault_operation
def remove_collateral_native(vault: Vault, caller: str, amount: int, to: str) -> None:
    vault.require_owner(caller)
    vault.require_active()
    asset = vault.registry.token_registry.get_asset_if_tracked(vault.native_asset_tag)
    if asset is not NULL_ASSET:
        require_removal_allowed(vault, asset, amount)
    vault.send(vault.native_asset_tag, to, amount)
    symbol = asset.symbol or vault.native_asset_tag
    LOG.info("[remove_collateral] vault=%s native amount=%d to=%s", vault.address, amount, to)
    vault.events.emit(CollateralRemoved(vault.address, symbol, amount, to))


@vault_operation
def remove_asset(vault: Vault, caller: str, address: str, amount: int, to: str) -> None:
    """Withdraw any asset by address

    Assets outside the approved registry never counted as collateral, so they
    are swept without a collateral check.
    """
    vault.require_owner(caller)
    vault.require_active()
    asset = vault.registry.token_registry.get_asset_if_tracked(address)
    if asset is not NULL_ASSET:
        require_removal_allowed(vault, asset, amount)
    vault.send(address, to, amount)
    LOG.info("[remove_asset] vault=%s asset=%s amount=%d to=%s", vault.address, address, amount, to)
    vault.events.emit(AssetRemoved(vault.address, address, amount, to))
