"""Reentrancy latch and all-or-nothing rollback for vault operations"""
import functools
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from .errors import ReentrancyError

if TYPE_CHECKING:
    from .state.vault import Vault

LOG = logging.getLogger("vault_model.guards")


@contextmanager
def atomic(vault: "Vault") -> Iterator[None]:
    """Restore ledger and vault state if the wrapped block raises"""
    ledger = vault.registry.ledger
    ledger_snapshot = ledger.snapshot()
    vault_snapshot = vault.snapshot()
    vault.events.begin()
    try:
        yield
    except Exception as exc:
        ledger.restore(ledger_snapshot)
        vault.restore(vault_snapshot)
        vault.events.discard()
        LOG.warning("[guards] rolled back vault=%s err=%s", vault.address, exc)
        raise
    vault.events.commit()


def vault_operation(func):
    """Run a mutating vault call behind the reentrancy latch, atomically"""

    @functools.wraps(func)
    def wrapper(vault: "Vault", *args, **kwargs):
        if vault.entered:
            raise ReentrancyError(f"Reentrant call to {func.__name__} on vault {vault.address}")
        vault.entered = True
        try:
            with atomic(vault):
                return func(vault, *args, **kwargs)
        finally:
            vault.entered = False

    return wrapper
