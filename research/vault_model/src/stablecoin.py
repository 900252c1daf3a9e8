"""Pegged-unit issuance ledger"""
import logging
from typing import Set

from .constants import STABLECOIN_ADDRESS
from .errors import UnauthorizedError
from .state.ledger import Ledger

LOG = logging.getLogger("vault_model.stablecoin")


class Stablecoin:
    """Pegged unit whose balances live in the shared ledger

    Only registered minters (vaults) may issue or redeem.
    """

    def __init__(self, ledger: Ledger, address: str = STABLECOIN_ADDRESS):
        self.ledger = ledger
        self.address = address
        self.minters: Set[str] = set()

    def add_minter(self, minter: str) -> None:
        self.minters.add(minter)

    def _require_minter(self, caller: str) -> None:
        if caller not in self.minters:
            raise UnauthorizedError(f"{caller} may not issue or redeem {self.address}")

    def balance_of(self, holder: str) -> int:
        return self.ledger.balance_of(self.address, holder)

    def total_supply(self) -> int:
        return self.ledger.total_supply(self.address)

    def mint(self, caller: str, to: str, amount: int) -> None:
        self._require_minter(caller)
        self.ledger.mint_token(self.address, to, amount)
        LOG.debug("[stablecoin] issued %d to %s by %s", amount, to, caller)

    def burn(self, caller: str, holder: str, amount: int) -> None:
        self._require_minter(caller)
        self.ledger.burn_token(self.address, holder, amount)
        LOG.debug("[stablecoin] redeemed %d from %s by %s", amount, holder, caller)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        self.ledger.approve(self.address, owner, spender, amount)

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        self.ledger.transfer(self.address, sender, recipient, amount)

    def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> None:
        self.ledger.transfer_from(self.address, spender, owner, recipient, amount)
