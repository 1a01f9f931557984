"""
Ledger state and state accessors.

`LedgerState` is an immutable point-in-time snapshot of every wallet balance
and every pool reserve. The accessor writers (`set_balance`, `set_reserve`)
return a new state that shares no table with their argument; transitions clone
once and write into the clone.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from .balances import WalletTable
from .pools import PoolState, PoolTable
from .tokens import Amount, Token, User, token_sort_key


@dataclass(frozen=True)
class LedgerState:
    """
    Wallets and pools at one point in time.

    The tables are mutable objects; only a fresh `clone()` may be written to.
    Every state handed out by an accessor or a transition owns its tables, so
    writing to one never changes another.
    """

    wallets: WalletTable = field(default_factory=WalletTable)
    pools: PoolTable = field(default_factory=PoolTable)

    @classmethod
    def empty(cls) -> "LedgerState":
        return cls()

    @classmethod
    def from_balances(cls, balances: Mapping[User, Mapping[Token, Amount]]) -> "LedgerState":
        """Genesis state holding only the given wallet balances."""
        return cls(wallets=WalletTable.from_mapping(balances))

    def clone(self) -> "LedgerState":
        """Copy both tables so the clone shares no mutable data with self."""
        return LedgerState(wallets=self.wallets.copy(), pools=self.pools.copy())

    def get_pool(self, token_a: Token, token_b: Token) -> Optional[PoolState]:
        return self.pools.get(token_a, token_b)

    def __str__(self) -> str:
        from .snapshot import render_state

        return render_state(self)


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


def token_supply(state: LedgerState, token: Token) -> Amount:
    """Sum of `token` across all pool reserves and all wallet balances."""
    return state.pools.total(token) + state.wallets.total(token)


def get_reserve(state: LedgerState, token: Token, other: Token) -> Amount:
    """Reserve of `token` in the {token, other} pool; 0 if no such pool exists."""
    return state.pools.get_reserve(token, other)


def set_reserve(state: LedgerState, t0: Token, r0: Amount, t1: Token, r1: Amount) -> LedgerState:
    """Return a new state with the {t0, t1} pool upserted to (r0, r1)."""
    post = state.clone()
    post.pools.set_reserves(t0, r0, t1, r1)
    return post


def get_balance(state: LedgerState, user: User, token: Token) -> Amount:
    """The user's balance of `token`; 0 if the wallet or entry does not exist."""
    return state.wallets.get(user, token)


def set_balance(state: LedgerState, user: User, token: Token, amount: Amount) -> LedgerState:
    """Return a new state with the user's `token` balance set to exactly `amount`."""
    post = state.clone()
    post.wallets.set(user, token, amount)
    return post


def tokens(state: LedgerState) -> List[Token]:
    """Every token held by a wallet or a pool, in token order."""
    seen = {token for _, token, _ in state.wallets.entries()}
    for pool in state.pools.pools():
        seen.add(pool.token0)
        seen.add(pool.token1)
    return sorted(seen, key=token_sort_key)
