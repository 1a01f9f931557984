from __future__ import annotations

from amm_theory.core.trajectory import run_trajectory
from amm_theory.core.transitions import Deposit, Redeem, Swap
from amm_theory.state import Atomic, LedgerState, get_balance, get_reserve, mint


T0 = Atomic("t0")
T1 = Atomic("t1")


def _genesis() -> LedgerState:
    return LedgerState.from_balances({"O": {T0: 100, T1: 100}, "B": {T0: 20}})


def test_transitions_apply_in_order() -> None:
    run = run_trajectory(
        _genesis(),
        [
            Deposit("O", 100, T0, 100, T1),
            Swap("B", T0, T1, 20),
            Redeem("O", T0, T1, 200),
        ],
    )
    assert run.ok
    assert run.first_rejection is None
    assert len(run.states) == 4
    assert run.start == _genesis()
    assert get_reserve(run.states[2], T0, T1) == 120
    assert get_balance(run.final, "O", T0) == 120
    assert get_balance(run.final, "O", T1) == 84
    assert get_balance(run.final, "O", mint(T0, T1)) == 0


def test_stops_on_first_rejection_by_default() -> None:
    run = run_trajectory(
        _genesis(),
        [
            Deposit("O", 100, T0, 100, T1),
            Swap("B", T0, T1, 50),
            Swap("B", T0, T1, 10),
        ],
    )
    assert not run.ok
    assert len(run.results) == 2
    assert len(run.states) == 2
    index, result = run.first_rejection
    assert index == 1
    assert result.rejection == "insufficient_balance"


def test_can_continue_past_rejections() -> None:
    run = run_trajectory(
        _genesis(),
        [
            Deposit("O", 100, T0, 100, T1),
            Swap("B", T0, T1, 50),
            Swap("B", T0, T1, 10),
        ],
        stop_on_error=False,
    )
    assert [r.accepted for r in run.results] == [True, False, True]
    assert len(run.states) == 3
    assert get_balance(run.final, "B", T0) == 10


def test_runs_from_one_start_are_independent() -> None:
    start = _genesis()
    first = run_trajectory(start, [Deposit("O", 100, T0, 100, T1), Swap("B", T0, T1, 20)])
    second = run_trajectory(start, [Deposit("O", 50, T0, 50, T1)])
    assert get_balance(first.final, "O", mint(T0, T1)) == 200
    assert get_balance(second.final, "O", mint(T0, T1)) == 100
    assert get_balance(start, "O", T0) == 100
    assert first.start is start and second.start is start
