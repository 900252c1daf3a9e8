"""Reentrancy latch, rollback and deferred events"""
import pytest

from conftest import ETH, TREASURY, units
from vault_model.src.errors import ReentrancyError, UndercollateralizedError
from vault_model.src.events import EventEmitter, Minted
from vault_model.src.guards import atomic, vault_operation
from vault_model.src.instructions.mint import mint


def test_latch_blocks_nested_calls(vault):
    @vault_operation
    def outer(vault_):
        return mint(vault_, "alice", "alice", 0)

    with pytest.raises(ReentrancyError):
        outer(vault)
    assert vault.entered is False


def test_latch_released_after_failure(vault, deposit):
    with pytest.raises(UndercollateralizedError):
        mint(vault, "alice", "alice", units(1))
    assert vault.entered is False
    deposit(ETH, 1)
    mint(vault, "alice", "alice", units(1))


def test_atomic_restores_ledger_and_vault(vault, ledger):
    ledger.deal_native(vault.address, 5)
    with pytest.raises(RuntimeError):
        with atomic(vault):
            vault.minted_amount = 42
            vault.owner = "mallory"
            ledger.send_native(vault.address, "mallory", 5)
            raise RuntimeError("boom")
    assert vault.minted_amount == 0
    assert vault.owner == "alice"
    assert ledger.native_balance(vault.address) == 5
    assert ledger.native_balance("mallory") == 0


def test_treasury_hook_sees_committed_minted_amount(vault, ledger, stablecoin, deposit):
    deposit(ETH, 1)
    seen = []
    ledger.register_hook(TREASURY, lambda *_: seen.append(vault.minted_amount))
    mint(vault, "alice", "alice", units(100))
    # issuance is not a transfer, so the hook only fires on transfers
    stablecoin.transfer("alice", TREASURY, units(1))
    assert seen == [units(100.5)]


def test_events_dispatched_only_on_commit(vault, deposit, events):
    deposit(ETH, 1)
    with pytest.raises(UndercollateralizedError):
        mint(vault, "alice", "alice", units(5000))
    assert events == []

    mint(vault, "alice", "bob", units(10))
    assert events == [Minted(vault.address, "bob", units(10), units(0.05))]


def test_emitter_nesting():
    emitter = EventEmitter()
    received = []
    emitter.subscribe(received.append)

    emitter.begin()
    emitter.emit("a")
    emitter.begin()
    emitter.emit("b")
    emitter.commit()
    assert received == []
    emitter.commit()
    assert received == ["a", "b"]

    emitter.begin()
    emitter.emit("c")
    emitter.discard()
    assert received == ["a", "b"]


def test_unsubscribed_listener_stops_receiving(vault, deposit, events):
    deposit(ETH, 1)
    late = []
    vault.events.subscribe(late.append)
    mint(vault, "alice", "alice", units(1))
    vault.events.unsubscribe(late.append)
    mint(vault, "alice", "alice", units(1))

    assert len(late) == 1
    assert len(events) == 2
