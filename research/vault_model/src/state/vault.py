"""Vault state management"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Tuple

from ..constants import NATIVE_ASSET
from ..errors import UnauthorizedError, VaultLiquidatedError
from ..events import EventEmitter, OwnerChanged
from ..fixed_point import checked_add, checked_sub
from .collateral import Asset

if TYPE_CHECKING:
    from .protocol_config import VaultRegistry

LOG = logging.getLogger("vault_model.vault")


class VaultState(Enum):
    ACTIVE = "active"
    LIQUIDATED = "liquidated"


@dataclass
class Vault:
    """A single-owner collateral vault

    Collateral holdings are not stored here; they are whatever the ledger says
    this vault's address holds of each approved asset.
    """
    address: str
    owner: str
    registry: "VaultRegistry" = field(repr=False)
    native_asset_tag: str = NATIVE_ASSET
    minted_amount: int = 0  # pegged-unit base units
    state: VaultState = VaultState.ACTIVE
    events: EventEmitter = field(default_factory=EventEmitter, repr=False, compare=False)
    entered: bool = field(default=False, repr=False, compare=False)

    @property
    def registry_authority(self) -> str:
        return self.registry.address

    @property
    def liquidated(self) -> bool:
        return self.state is VaultState.LIQUIDATED

    # --- access checks ----------------------------------------------------

    def require_owner(self, caller: str) -> None:
        if caller != self.owner:
            raise UnauthorizedError(f"{caller} is not the owner of vault {self.address}")

    def require_authority(self, caller: str) -> None:
        if caller != self.registry_authority:
            raise UnauthorizedError(f"{caller} is not the registry authority of vault {self.address}")

    def require_active(self) -> None:
        if self.liquidated:
            raise VaultLiquidatedError(f"Vault {self.address} is liquidated")

    # --- ledger -----------------------------------------------------------

    def increase_minted(self, amount: int) -> None:
        self.minted_amount = checked_add(self.minted_amount, amount)

    def decrease_minted(self, amount: int) -> None:
        self.minted_amount = checked_sub(self.minted_amount, amount)

    def mark_liquidated(self) -> None:
        """ACTIVE -> LIQUIDATED, the only transition; zeroes the minted amount"""
        self.require_active()
        self.state = VaultState.LIQUIDATED
        self.minted_amount = 0

    def set_owner(self, caller: str, new_owner: str) -> None:
        self.require_authority(caller)
        previous = self.owner
        self.owner = new_owner
        LOG.info("[vault] owner changed vault=%s %s -> %s", self.address, previous, new_owner)
        self.events.emit(OwnerChanged(self.address, previous, new_owner))

    # --- holdings ---------------------------------------------------------

    def is_native(self, address: str) -> bool:
        return address == self.native_asset_tag

    def balance_of(self, asset: Asset) -> int:
        return self.balance_of_address(asset.address)

    def balance_of_address(self, address: str) -> int:
        ledger = self.registry.ledger
        if self.is_native(address):
            return ledger.native_balance(self.address)
        return ledger.balance_of(address, self.address)

    def send(self, address: str, recipient: str, amount: int) -> None:
        """Move amount of an asset (native or token) out of the vault"""
        ledger = self.registry.ledger
        if self.is_native(address):
            ledger.send_native(self.address, recipient, amount)
        else:
            ledger.transfer(address, self.address, recipient, amount)

    # --- rollback ---------------------------------------------------------

    def snapshot(self) -> Tuple[str, int, VaultState]:
        return (self.owner, self.minted_amount, self.state)

    def restore(self, snapshot: Tuple[str, int, VaultState]) -> None:
        self.owner, self.minted_amount, self.state = snapshot
