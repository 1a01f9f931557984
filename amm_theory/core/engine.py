"""Step engine for ledger transitions.

``step(state, transition)`` is the single checked entry point. It:

1. Applies the transition (preconditions raise ``TransitionError``).
2. Checks all state and transition invariants on the post-state.
3. Returns a ``StepResult`` (accepted, or rejected with a reason code).

``step_or_raise`` is the exception-raising variant.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..errors import InvariantViolationError, LedgerError, TransitionError
from ..state.ledger import LedgerState
from .invariants import check_all
from .transitions import Transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepResult:
    """Result of a single engine step."""

    accepted: bool
    state: LedgerState | None = None
    rejection: str | None = None
    error: Exception | None = None


def step(state: LedgerState, transition: Transition) -> StepResult:
    """Execute one transition against the given state.

    Returns ``StepResult`` with ``accepted=True`` and the post-state on success,
    or ``accepted=False`` with a ``rejection`` code. The input state is never
    modified either way.
    """
    try:
        post = transition.apply(state)
    except TransitionError as exc:
        logger.info("rejected %s: %s (%s)", transition.describe(), exc.code, exc)
        return StepResult(accepted=False, rejection=exc.code, error=exc)

    violations = check_all(state, post, transition)
    if violations:
        logger.warning("invariant violation after %s: %s", transition.describe(), ", ".join(violations))
        return StepResult(
            accepted=False,
            rejection=f"invariant:{','.join(violations)}",
            error=InvariantViolationError(violations),
        )

    logger.debug("accepted %s", transition.describe())
    return StepResult(accepted=True, state=post)


def step_or_raise(state: LedgerState, transition: Transition) -> LedgerState:
    """Like ``step()`` but returns the post-state or raises on rejection.

    Raises:
        TransitionError: A precondition is not satisfied (typed subclass).
        InvariantViolationError: Post-state violates one or more invariants.
    """
    result = step(state, transition)
    if result.error is not None:
        raise result.error
    if result.state is None:
        raise LedgerError(f"{transition.describe()} produced no state")
    return result.state
