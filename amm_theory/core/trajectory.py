"""Trajectories: a start state folded through an ordered list of transitions.

Transitions are applied strictly in the order given. Each state in the
trajectory is its own value; two trajectories run from the same start state
share no mutable data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..state.ledger import LedgerState
from .engine import StepResult, step
from .transitions import Transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Trajectory:
    """
    States visited by a run. `states[0]` is the start state and `states[i + 1]`
    is the state after the i-th accepted transition.
    """

    states: List[LedgerState]
    results: List[StepResult] = field(default_factory=list)
    transitions: List[Transition] = field(default_factory=list)

    @property
    def start(self) -> LedgerState:
        return self.states[0]

    @property
    def final(self) -> LedgerState:
        return self.states[-1]

    @property
    def ok(self) -> bool:
        return all(r.accepted for r in self.results)

    @property
    def first_rejection(self) -> Optional[tuple[int, StepResult]]:
        for index, result in enumerate(self.results):
            if not result.accepted:
                return index, result
        return None


def run_trajectory(
    state: LedgerState,
    transitions: Iterable[Transition],
    *,
    stop_on_error: bool = True,
) -> Trajectory:
    """
    Fold `transitions` over `state` in order.

    With `stop_on_error` (default) the run ends at the first rejection. Otherwise
    the rejection is recorded and the next transition starts from the last
    accepted state.
    """
    states = [state]
    results: List[StepResult] = []
    applied: List[Transition] = []
    current = state
    for index, transition in enumerate(transitions):
        result = step(current, transition)
        results.append(result)
        applied.append(transition)
        if result.accepted and result.state is not None:
            current = result.state
            states.append(current)
            continue
        logger.info("trajectory step %d rejected: %s", index, result.rejection)
        if stop_on_error:
            break
    return Trajectory(states=states, results=results, transitions=applied)
