"""Balances of the native asset and tokens held by every address"""
import copy
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Tuple

from ..constants import NATIVE_ASSET
from ..errors import (
    InsufficientAllowanceError,
    InsufficientBalanceError,
    ProtocolError,
    TransferRejectedError,
)
from ..fixed_point import checked_add

LOG = logging.getLogger("vault_model.ledger")

# hook(ledger, asset, sender, amount) runs after value lands on the hooked address
ReceiveHook = Callable[["Ledger", str, str, int], None]


@dataclass
class Ledger:
    """In-memory value ledger shared by the vault and its collaborators"""
    native: Dict[str, int] = field(default_factory=dict)
    tokens: Dict[str, Dict[str, int]] = field(default_factory=dict)
    allowances: Dict[Tuple[str, str, str], int] = field(default_factory=dict)
    hooks: Dict[str, ReceiveHook] = field(default_factory=dict, repr=False)

    # --- reads -----------------------------------------------------------

    def native_balance(self, holder: str) -> int:
        return self.native.get(holder, 0)

    def balance_of(self, token: str, holder: str) -> int:
        if token == NATIVE_ASSET:
            return self.native_balance(holder)
        return self.tokens.get(token, {}).get(holder, 0)

    def total_supply(self, token: str) -> int:
        return sum(self.tokens.get(token, {}).values())

    def allowance(self, token: str, owner: str, spender: str) -> int:
        return self.allowances.get((token, owner, spender), 0)

    # --- supply ----------------------------------------------------------

    def deal_native(self, holder: str, amount: int) -> None:
        """Credit native units out of thin air (genesis / test funding)"""
        self.native[holder] = checked_add(self.native_balance(holder), amount)

    def mint_token(self, token: str, holder: str, amount: int) -> None:
        if token == NATIVE_ASSET:
            self.deal_native(holder, amount)
            return
        balances = self.tokens.setdefault(token, {})
        balances[holder] = checked_add(balances.get(holder, 0), amount)

    def burn_token(self, token: str, holder: str, amount: int) -> None:
        balance = self.balance_of(token, holder)
        if amount > balance:
            raise InsufficientBalanceError(
                f"{holder} holds {balance} {token}, cannot burn {amount}"
            )
        self.tokens.setdefault(token, {})[holder] = balance - amount

    # --- movement --------------------------------------------------------

    def send_native(self, sender: str, recipient: str, amount: int) -> None:
        balance = self.native_balance(sender)
        if amount > balance:
            raise InsufficientBalanceError(
                f"{sender} holds {balance} native, cannot send {amount}"
            )
        self.native[sender] = balance - amount
        self.native[recipient] = checked_add(self.native_balance(recipient), amount)
        self._notify(recipient, NATIVE_ASSET, sender, amount)

    def transfer(self, token: str, sender: str, recipient: str, amount: int) -> None:
        if token == NATIVE_ASSET:
            self.send_native(sender, recipient, amount)
            return
        balance = self.balance_of(token, sender)
        if amount > balance:
            raise InsufficientBalanceError(
                f"{sender} holds {balance} {token}, cannot transfer {amount}"
            )
        balances = self.tokens.setdefault(token, {})
        balances[sender] = balance - amount
        balances[recipient] = checked_add(balances.get(recipient, 0), amount)
        self._notify(recipient, token, sender, amount)

    def approve(self, token: str, owner: str, spender: str, amount: int) -> None:
        self.allowances[(token, owner, spender)] = amount

    def transfer_from(self, token: str, spender: str, owner: str, recipient: str, amount: int) -> None:
        allowed = self.allowance(token, owner, spender)
        if amount > allowed:
            raise InsufficientAllowanceError(
                f"{spender} may move {allowed} {token} of {owner}, requested {amount}"
            )
        self.allowances[(token, owner, spender)] = allowed - amount
        self.transfer(token, owner, recipient, amount)

    def wrap(self, wrapped: str, holder: str, amount: int) -> None:
        """Convert native units of holder into the wrapped token 1:1"""
        balance = self.native_balance(holder)
        if amount > balance:
            raise InsufficientBalanceError(f"{holder} cannot wrap {amount}, holds {balance}")
        self.native[holder] = balance - amount
        self.mint_token(wrapped, holder, amount)

    def unwrap(self, wrapped: str, holder: str, amount: int) -> None:
        """Convert wrapped tokens of holder back into native units 1:1"""
        self.burn_token(wrapped, holder, amount)
        self.deal_native(holder, amount)

    # --- hooks -----------------------------------------------------------

    def register_hook(self, address: str, hook: ReceiveHook) -> None:
        self.hooks[address] = hook

    def remove_hook(self, address: str) -> None:
        self.hooks.pop(address, None)

    def _notify(self, recipient: str, asset: str, sender: str, amount: int) -> None:
        hook = self.hooks.get(recipient)
        if hook is None:
            return
        LOG.debug("[ledger] receive hook recipient=%s asset=%s amount=%d", recipient, asset, amount)
        try:
            hook(self, asset, sender, amount)
        except ProtocolError:
            raise
        except Exception as exc:
            raise TransferRejectedError(f"{recipient} rejected {amount} {asset}: {exc}") from exc

    # --- rollback --------------------------------------------------------

    def snapshot(self) -> Tuple[Dict, Dict, Dict]:
        return (
            dict(self.native),
            copy.deepcopy(self.tokens),
            dict(self.allowances),
        )

    def restore(self, snapshot: Tuple[Dict, Dict, Dict]) -> None:
        native, tokens, allowances = snapshot
        self.native = dict(native)
        self.tokens = copy.deepcopy(tokens)
        self.allowances = dict(allowances)
