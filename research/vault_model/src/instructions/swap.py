"""Collateral-preserving exchange of one approved asset for another"""
import logging

from ..constants import ONE_HUNDRED_PERCENT, SWAP_DEADLINE_SECONDS
from ..errors import AssetNotFoundError, InsufficientBalanceError, UndercollateralizedError
from ..events import Swapped
from ..fixed_point import checked_sub, percent_of
from ..guards import vault_operation
from ..state.collateral import NULL_ASSET, Asset
from ..state.vault import Vault
from .valuation import calculate_minimum_amount_out, max_mintable

LOG = logging.getLogger("vault_model.swap")


def _approved(vault: Vault, address: str) -> Asset:
    asset = vault.registry.token_registry.get_asset_if_tracked(address)
    if asset is NULL_ASSET:
        raise AssetNotFoundError(f"{address} is not an approved asset")
    return asset


def _venue_address(vault: Vault, asset: Asset) -> str:
    if vault.is_native(asset.address):
        return vault.registry.wrapped_native
    return asset.address


@vault_operation
def swap(vault: Vault, caller: str, token_in: str, token_out: str, amount: int) -> int:
    """Exchange amount of token_in (fee included) for token_out. Returns amount received.

    The venue is given a minimum output that keeps the vault collateralized,
    so the swap either preserves the invariant or fails. minted_amount is
    never touched.
    """
    vault.require_owner(caller)
    vault.require_active()
    if token_in == token_out:
        raise ValueError("token_in and token_out must differ")
    registry = vault.registry
    asset_in = _approved(vault, token_in)
    asset_out = _approved(vault, token_out)

    balance = vault.balance_of(asset_in)
    if amount > balance:
        raise InsufficientBalanceError(f"Vault holds {balance} {asset_in.symbol}, cannot swap {amount}")

    swap_fee = percent_of(amount, registry.swap_fee, ONE_HUNDRED_PERCENT)
    amount_in = checked_sub(amount, swap_fee)
    # fee and input both leave the vault
    minimum_amount_out = calculate_minimum_amount_out(vault, asset_in, amount, asset_out)

    venue = registry.exchange_venue()
    venue_in = _venue_address(vault, asset_in)
    venue_out = _venue_address(vault, asset_out)
    deadline = venue.clock() + SWAP_DEADLINE_SECONDS
    treasury = registry.treasury
    ledger = registry.ledger

    if vault.is_native(asset_in.address):
        if swap_fee:
            ledger.send_native(vault.address, treasury, swap_fee)
        amount_out = venue.exchange(
            vault.address, venue_in, venue_out, amount_in, minimum_amount_out,
            vault.address, deadline, value=amount_in,
        )
    else:
        if swap_fee:
            ledger.transfer(asset_in.address, vault.address, treasury, swap_fee)
        ledger.approve(asset_in.address, vault.address, venue.address, amount_in)
        amount_out = venue.exchange(
            vault.address, venue_in, venue_out, amount_in, minimum_amount_out,
            vault.address, deadline,
        )
        if vault.is_native(asset_out.address):
            ledger.unwrap(registry.wrapped_native, vault.address, amount_out)

    if vault.minted_amount:
        limit = max_mintable(vault)
        if vault.minted_amount > limit:
            raise UndercollateralizedError(
                f"Swap left minted {vault.minted_amount} above max mintable {limit}"
            )

    LOG.info(
        "[swap] vault=%s %d %s -> %d %s fee=%d min_out=%d",
        vault.address, amount_in, asset_in.symbol, amount_out, asset_out.symbol,
        swap_fee, minimum_amount_out,
    )
    vault.events.emit(
        Swapped(vault.address, asset_in.address, asset_out.address, amount_in, swap_fee, amount_out, minimum_amount_out)
    )
    return amount_out
