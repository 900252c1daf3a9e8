"""Redeem the pegged unit against a vault's minted amount"""
import logging

from ..constants import ONE_HUNDRED_PERCENT
from ..errors import InsufficientMintedError
from ..events import Burned
from ..fixed_point import percent_of
from ..guards import vault_operation
from ..state.vault import Vault

LOG = logging.getLogger("vault_model.burn")


@vault_operation
def burn(vault: Vault, caller: str, amount: int) -> int:
    """Burn amount from caller and reduce the vault's minted amount. Returns the fee.

    Anyone may repay a vault. The fee is paid on top, in the pegged unit, from
    the caller to the treasury; the caller must have approved the vault for it.
    Collateralization is not re-checked since repayment can only improve it.
    """
    vault.require_active()
    if vault.minted_amount < amount:
        raise InsufficientMintedError(
            f"Cannot burn {amount}, vault {vault.address} has {vault.minted_amount} minted"
        )
    registry = vault.registry
    fee = percent_of(amount, registry.burn_fee, ONE_HUNDRED_PERCENT)

    vault.decrease_minted(amount)
    registry.stablecoin.burn(vault.address, caller, amount)
    if fee:
        registry.stablecoin.transfer_from(vault.address, caller, registry.treasury, fee)

    LOG.info("[burn] vault=%s payer=%s amount=%d fee=%d", vault.address, caller, amount, fee)
    vault.events.emit(Burned(vault.address, caller, amount, fee))
    return fee
