"""Issue the pegged unit against vault collateral"""
import logging

from ..constants import ONE_HUNDRED_PERCENT
from ..errors import UndercollateralizedError
from ..events import Minted
from ..fixed_point import checked_add, percent_of
from ..guards import vault_operation
from ..state.vault import Vault
from .valuation import max_mintable

LOG = logging.getLogger("vault_model.mint")


@vault_operation
def mint(vault: Vault, caller: str, recipient: str, amount: int) -> int:
    """Mint amount to recipient, charging the mint fee to the vault. Returns the fee."""
    vault.require_owner(caller)
    vault.require_active()
    registry = vault.registry

    fee = percent_of(amount, registry.mint_fee, ONE_HUNDRED_PERCENT)
    new_minted = checked_add(checked_add(vault.minted_amount, amount), fee)
    limit = max_mintable(vault)
    if new_minted > limit:
        LOG.warning(
            "[mint] rejected vault=%s amount=%d fee=%d minted=%d max_mintable=%d",
            vault.address, amount, fee, vault.minted_amount, limit,
        )
        raise UndercollateralizedError(f"Minting {amount} + fee {fee} exceeds max mintable {limit}")

    # minted amount is committed before the issuance ledger is called
    vault.minted_amount = new_minted
    registry.stablecoin.mint(vault.address, recipient, amount)
    if fee:
        registry.stablecoin.mint(vault.address, registry.treasury, fee)

    LOG.info("[mint] vault=%s recipient=%s amount=%d fee=%d", vault.address, recipient, amount, fee)
    vault.events.emit(Minted(vault.address, recipient, amount, fee))
    return fee
