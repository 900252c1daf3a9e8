"""Lifecycle events emitted by vault operations

Events are observable but never stored on the vault. While a mutating
operation is running they are held back and only dispatched once the
operation commits, so subscribers never see events from a rolled back call.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Tuple

LOG = logging.getLogger("vault_model.events")


@dataclass(frozen=True)
class VaultEvent:
    vault: str


@dataclass(frozen=True)
class CollateralRemoved(VaultEvent):
    symbol: str
    amount: int
    recipient: str


@dataclass(frozen=True)
class AssetRemoved(VaultEvent):
    asset: str
    amount: int
    recipient: str


@dataclass(frozen=True)
class Minted(VaultEvent):
    recipient: str
    amount: int
    fee: int


@dataclass(frozen=True)
class Burned(VaultEvent):
    payer: str
    amount: int
    fee: int


@dataclass(frozen=True)
class Liquidated(VaultEvent):
    treasury: str
    swept: Tuple[Tuple[str, int], ...]


@dataclass(frozen=True)
class OwnerChanged(VaultEvent):
    previous_owner: str
    new_owner: str


@dataclass(frozen=True)
class Swapped(VaultEvent):
    token_in: str
    token_out: str
    amount_in: int
    fee: int
    amount_out: int
    minimum_amount_out: int


class EventEmitter:
    """Dispatches vault events to subscribers"""

    def __init__(self) -> None:
        self._subscribers: List[Callable[[VaultEvent], None]] = []
        self._pending: List[VaultEvent] = []
        self._depth = 0

    def subscribe(self, callback: Callable[[VaultEvent], None]) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[VaultEvent], None]) -> None:
        self._subscribers.remove(callback)

    def emit(self, event: VaultEvent) -> None:
        if self._depth:
            self._pending.append(event)
            return
        self._dispatch(event)

    def begin(self) -> None:
        self._depth += 1

    def commit(self) -> None:
        self._depth -= 1
        if self._depth:
            return
        pending, self._pending = self._pending, []
        for event in pending:
            self._dispatch(event)

    def discard(self) -> None:
        self._depth -= 1
        if not self._depth:
            self._pending = []

    def _dispatch(self, event: VaultEvent) -> None:
        LOG.info("[events] %s %s", type(event).__name__, event)
        for callback in list(self._subscribers):
            callback(event)
