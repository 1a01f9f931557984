# [TESTER] v1

from __future__ import annotations

import pytest

from amm_theory.core.transitions import Deposit, Swap
from amm_theory.state import Atomic, LedgerState, mint
from amm_theory.state.canonical import canonical_json_bytes
from amm_theory.state.snapshot import render_state, snapshot_from_state, state_from_snapshot


T0 = Atomic("t0")
T1 = Atomic("t1")


def _after_deposit() -> LedgerState:
    state = LedgerState.from_balances({"A": {T0: 150, T1: 100}})
    return Deposit("A", 100, T0, 100, T1).apply(state)


def test_render_state_shows_wallets_then_pools() -> None:
    assert render_state(_after_deposit()) == "A[50:t0,0:t1,200:t0+t1] | {100:t0 100:t1}"
    assert str(_after_deposit()) == render_state(_after_deposit())


def test_render_state_after_swap() -> None:
    state = LedgerState.from_balances({"O": {T0: 100, T1: 100}, "B": {T0: 20}})
    state = Deposit("O", 100, T0, 100, T1).apply(state)
    state = Swap("B", T0, T1, 20).apply(state)
    assert render_state(state) == "O[0:t0,0:t1,200:t0+t1] | B[0:t0,16:t1] | {120:t0 84:t1}"


def test_snapshot_round_trip_preserves_state() -> None:
    state = _after_deposit()
    snap = snapshot_from_state(state)
    restored = state_from_snapshot(snap.data)
    assert restored == state
    assert render_state(restored) == render_state(state)


def test_snapshot_data_is_canonical_json() -> None:
    snap = snapshot_from_state(_after_deposit())
    assert snap.data["pools"] == [{"token0": "t0", "reserve0": 100, "token1": "t1", "reserve1": 100}]
    assert snap.data["wallets"][0]["balances"][-1] == {"token": "t0+t1", "amount": 200}
    assert snap.canonical_bytes() == canonical_json_bytes(snap.data)


def test_commitment_is_deterministic_and_state_sensitive() -> None:
    a = snapshot_from_state(_after_deposit())
    b = snapshot_from_state(_after_deposit())
    assert a.commitment_hex() == b.commitment_hex()
    assert a.commitment_hex().startswith("0x")
    assert len(a.commitment_bytes()) == 32

    other = Swap("A", T0, T1, 10).apply(_after_deposit())
    assert snapshot_from_state(other).commitment_hex() != a.commitment_hex()


def test_state_from_snapshot_rejects_duplicates() -> None:
    data = snapshot_from_state(_after_deposit()).data
    dup_wallet = dict(data, wallets=data["wallets"] * 2)
    with pytest.raises(ValueError):
        state_from_snapshot(dup_wallet)

    dup_pool = dict(data, pools=data["pools"] * 2)
    with pytest.raises(ValueError):
        state_from_snapshot(dup_pool)


def test_state_from_snapshot_rejects_bad_values() -> None:
    with pytest.raises(ValueError):
        state_from_snapshot({"version": 2})
    with pytest.raises(TypeError):
        state_from_snapshot({"wallets": [{"user": "A", "balances": [{"token": "t0", "amount": 1.0}]}]})
    with pytest.raises(ValueError):
        state_from_snapshot({"wallets": [{"user": "A", "balances": [{"token": "t0", "amount": -1}]}]})


def test_state_from_snapshot_canonicalizes_pool_order() -> None:
    state = state_from_snapshot(
        {"pools": [{"token0": "t1", "reserve0": 5, "token1": "t0", "reserve1": 9}]}
    )
    pool = state.get_pool(T0, T1)
    assert pool is not None
    assert (pool.token0, pool.reserve0, pool.reserve1) == (T0, 9, 5)


def test_snapshot_lists_lp_token_by_name() -> None:
    state = state_from_snapshot(
        {"wallets": [{"user": "A", "balances": [{"token": "t1+t0", "amount": 3}]}]}
    )
    assert state.wallets.get("A", mint(T0, T1)) == 3
