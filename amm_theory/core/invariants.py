"""Invariant checkers for the ledger.

State invariants take one state; transition invariants compare the pre- and
post-state of one transition. Each function returns True when the invariant
holds, and the ``check_*`` helpers return the list of violated invariant IDs
(empty = all pass).
"""

from __future__ import annotations

from typing import Callable

from ..state.ledger import LedgerState, token_supply, tokens
from ..state.tokens import Atomic, Minted
from .transitions import Swap, Transition


def inv_balances_non_negative(s: LedgerState) -> bool:
    return s.wallets.verify_non_negative()


def inv_reserves_non_negative(s: LedgerState) -> bool:
    return s.pools.verify_non_negative()


def inv_pools_canonical(s: LedgerState) -> bool:
    return all(p.token0 < p.token1 for p in s.pools.pools())


def inv_pools_unique(s: LedgerState) -> bool:
    keys = [frozenset((p.token0, p.token1)) for p in s.pools.pools()]
    return len(keys) == len(set(keys))


def inv_atomic_supply_conserved(pre: LedgerState, post: LedgerState, t: Transition) -> bool:
    touched = set(tokens(pre)) | set(tokens(post))
    return all(
        token_supply(pre, token) == token_supply(post, token)
        for token in touched
        if isinstance(token, Atomic)
    )


def inv_lp_supply_delta(pre: LedgerState, post: LedgerState, t: Transition) -> bool:
    expected = t.minted_delta()
    touched = set(tokens(pre)) | set(tokens(post))
    for token in touched:
        if not isinstance(token, Minted):
            continue
        delta = token_supply(post, token) - token_supply(pre, token)
        want = expected[1] if expected is not None and expected[0] == token else 0
        if delta != want:
            return False
    return True


def _pool_product(s: LedgerState, t: Swap) -> int:
    pool = s.get_pool(t.token_in, t.token_out)
    return 0 if pool is None else pool.get_constant_product()


def inv_constant_product(pre: LedgerState, post: LedgerState, t: Transition) -> bool:
    if not isinstance(t, Swap):
        return True
    return _pool_product(post, t) >= _pool_product(pre, t)


# ---------------------------------------------------------------------------
# Registries + check_all
# ---------------------------------------------------------------------------

STATE_INVARIANTS: dict[str, Callable[[LedgerState], bool]] = {
    "inv_balances_non_negative": inv_balances_non_negative,
    "inv_reserves_non_negative": inv_reserves_non_negative,
    "inv_pools_canonical": inv_pools_canonical,
    "inv_pools_unique": inv_pools_unique,
}

TRANSITION_INVARIANTS: dict[str, Callable[[LedgerState, LedgerState, Transition], bool]] = {
    "inv_atomic_supply_conserved": inv_atomic_supply_conserved,
    "inv_lp_supply_delta": inv_lp_supply_delta,
    "inv_constant_product": inv_constant_product,
}


def check_state(state: LedgerState) -> list[str]:
    """Return list of violated state invariant IDs."""
    return [inv_id for inv_id, check_fn in STATE_INVARIANTS.items() if not check_fn(state)]


def check_transition(pre: LedgerState, post: LedgerState, transition: Transition) -> list[str]:
    """Return list of violated transition invariant IDs."""
    return [
        inv_id
        for inv_id, check_fn in TRANSITION_INVARIANTS.items()
        if not check_fn(pre, post, transition)
    ]


def check_all(pre: LedgerState, post: LedgerState, transition: Transition) -> list[str]:
    return check_state(post) + check_transition(pre, post, transition)
