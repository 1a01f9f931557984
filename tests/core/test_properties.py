"""Property tests: random Deposit/Swap/Redeem sequences against the ledger invariants.

Hypothesis fuzzes transition sequences over a few users and tokens and checks
conservation, non-negativity and the constant-product bound after every step.
"""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import given, settings

from amm_theory.core.cpmm import swap_exact_in
from amm_theory.core.engine import step
from amm_theory.core.invariants import check_state
from amm_theory.core.transitions import Deposit, Redeem, Swap, Transition
from amm_theory.state import Atomic, LedgerState, get_balance, get_reserve, mint, token_supply
from amm_theory.state.snapshot import snapshot_from_state

USERS = ["A", "B", "C"]
ATOMICS = [Atomic("t0"), Atomic("t1"), Atomic("t2")]
SEED_BALANCE = 1_000


def _genesis() -> LedgerState:
    return LedgerState.from_balances({user: {t: SEED_BALANCE for t in ATOMICS} for user in USERS})


def transition_strategy() -> st.SearchStrategy[Transition]:
    user = st.sampled_from(USERS)
    token = st.sampled_from(ATOMICS)
    amount = st.integers(min_value=-2, max_value=600)
    return st.one_of(
        st.builds(Deposit, sender=user, amount0=amount, token0=token, amount1=amount, token1=token),
        st.builds(Swap, sender=user, token_in=token, token_out=token, amount_in=amount),
        st.builds(Redeem, sender=user, token0=token, token1=token, share_amount=amount),
    )


class TestRandomSequences:
    @given(transitions=st.lists(transition_strategy(), min_size=1, max_size=25))
    @settings(max_examples=200, deadline=5000)
    def test_invariants_hold_after_every_step(self, transitions: list[Transition]) -> None:
        state = _genesis()
        for transition in transitions:
            before = snapshot_from_state(state).commitment_hex()
            result = step(state, transition)

            # Rejections come from preconditions, never from a broken post-state.
            assert result.rejection is None or not result.rejection.startswith("invariant:")
            assert snapshot_from_state(state).commitment_hex() == before

            if not result.accepted:
                continue
            assert result.state is not None
            state = result.state
            assert check_state(state) == []
            for token in ATOMICS:
                assert token_supply(state, token) == SEED_BALANCE * len(USERS)

    @given(transitions=st.lists(transition_strategy(), min_size=1, max_size=25))
    @settings(max_examples=200, deadline=5000)
    def test_swaps_never_decrease_constant_product(self, transitions: list[Transition]) -> None:
        state = _genesis()
        for transition in transitions:
            result = step(state, transition)
            if not result.accepted:
                continue
            assert result.state is not None
            if isinstance(transition, Swap):
                t_in, t_out = transition.token_in, transition.token_out
                k_pre = get_reserve(state, t_in, t_out) * get_reserve(state, t_out, t_in)
                k_post = get_reserve(result.state, t_in, t_out) * get_reserve(result.state, t_out, t_in)
                assert k_post >= k_pre
            state = result.state

    @given(transitions=st.lists(transition_strategy(), min_size=1, max_size=25))
    @settings(max_examples=200, deadline=5000)
    def test_lp_supply_tracks_mints_and_burns(self, transitions: list[Transition]) -> None:
        state = _genesis()
        expected: dict = {}
        for transition in transitions:
            result = step(state, transition)
            if not result.accepted:
                continue
            delta = transition.minted_delta()
            if delta is not None:
                lp, change = delta
                expected[lp] = expected.get(lp, 0) + change
            assert result.state is not None
            state = result.state
        for lp, supply in expected.items():
            assert token_supply(state, lp) == supply


@given(
    amount0=st.integers(min_value=1, max_value=10**12),
    amount1=st.integers(min_value=1, max_value=10**12),
)
@settings(max_examples=200, deadline=2000)
def test_deposit_then_full_redeem_round_trips(amount0: int, amount1: int) -> None:
    t0, t1 = ATOMICS[0], ATOMICS[1]
    pre = LedgerState.from_balances({"A": {t0: amount0, t1: amount1}})
    mid = Deposit("A", amount0, t0, amount1, t1).apply(pre)
    post = Redeem("A", t0, t1, amount0 + amount1).apply(mid)
    assert get_balance(post, "A", t0) == amount0
    assert get_balance(post, "A", t1) == amount1
    assert get_reserve(post, t0, t1) == 0
    assert get_reserve(post, t1, t0) == 0
    assert token_supply(post, mint(t0, t1)) == 0


@given(
    reserve_in=st.integers(min_value=1, max_value=10**18),
    reserve_out=st.integers(min_value=1, max_value=10**18),
    amount_in=st.integers(min_value=1, max_value=10**18),
)
@settings(max_examples=500, deadline=2000)
def test_swap_product_bounds(reserve_in: int, reserve_out: int, amount_in: int) -> None:
    amount_out, (new_in, new_out) = swap_exact_in(reserve_in, reserve_out, amount_in)
    k = reserve_in * reserve_out
    assert 0 <= amount_out < reserve_out
    assert new_out >= 1
    assert k <= new_in * new_out < k + new_in
