"""
Pool state management for constant-product pools.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from .balances import require_amount
from .tokens import Amount, Token, is_token


PoolKey = Tuple[Token, Token]


def pool_key(token_a: Token, token_b: Token) -> PoolKey:
    """
    Canonical key for the unordered pair {token_a, token_b}.

    Raises:
        ValueError: If both tokens are the same
    """
    if not is_token(token_a) or not is_token(token_b):
        raise TypeError(f"pool tokens must be tokens: {token_a!r}, {token_b!r}")
    if token_a == token_b:
        raise ValueError(f"A pool needs two distinct tokens: {token_a}")
    if token_a < token_b:
        return (token_a, token_b)
    return (token_b, token_a)


@dataclass(frozen=True)
class PoolState:
    """
    Reserves of one pool.

    Attributes:
        token0: First token (must be < token1 in the token order)
        reserve0: Reserve amount for token0
        token1: Second token
        reserve1: Reserve amount for token1
    """
    token0: Token
    reserve0: Amount
    token1: Token
    reserve1: Amount

    def __post_init__(self) -> None:
        """Validate pool state invariants."""
        if not (self.token0 < self.token1):
            raise ValueError(
                f"Tokens must be in canonical order: {self.token0} < {self.token1}"
            )
        require_amount(self.reserve0, name="reserve0")
        require_amount(self.reserve1, name="reserve1")
        if self.reserve0 < 0 or self.reserve1 < 0:
            raise ValueError(
                f"Reserves must be non-negative: ({self.reserve0}, {self.reserve1})"
            )

    @property
    def key(self) -> PoolKey:
        return (self.token0, self.token1)

    def get_reserve(self, token: Token) -> Amount:
        """
        Get reserve for a specific token.

        Raises:
            ValueError: If token is not in this pool
        """
        if token == self.token0:
            return self.reserve0
        elif token == self.token1:
            return self.reserve1
        else:
            raise ValueError(f"Token {token} not in pool {self}")

    def get_constant_product(self) -> int:
        """Compute k = reserve0 * reserve1 (CPMM constant)."""
        return self.reserve0 * self.reserve1

    def with_reserves(self, token_a: Token, reserve_a: Amount, token_b: Token, reserve_b: Amount) -> "PoolState":
        """Overwrite reserves positionally by token identity, whatever the argument order."""
        if pool_key(token_a, token_b) != self.key:
            raise ValueError(f"Tokens {token_a}/{token_b} do not match pool {self}")
        if token_a == self.token0:
            return replace(self, reserve0=reserve_a, reserve1=reserve_b)
        return replace(self, reserve0=reserve_b, reserve1=reserve_a)

    def __str__(self) -> str:
        return f"{{{self.reserve0}:{self.token0} {self.reserve1}:{self.token1}}}"


def new_pool(token_a: Token, reserve_a: Amount, token_b: Token, reserve_b: Amount) -> PoolState:
    """Create a pool, storing the pair canonically regardless of argument order."""
    t0, t1 = pool_key(token_a, token_b)
    if t0 == token_a:
        return PoolState(token0=t0, reserve0=reserve_a, token1=t1, reserve1=reserve_b)
    return PoolState(token0=t0, reserve0=reserve_b, token1=t1, reserve1=reserve_a)


class PoolTable:
    """
    Pools keyed by canonical token pair, in first-write order.

    At most one pool exists per unordered pair. `PoolState` values are frozen,
    so a shallow dict copy is enough to detach two tables.
    """

    def __init__(self) -> None:
        self._pools: Dict[PoolKey, PoolState] = {}

    def get(self, token_a: Token, token_b: Token) -> Optional[PoolState]:
        if token_a == token_b:
            return None
        return self._pools.get(pool_key(token_a, token_b))

    def get_reserve(self, token: Token, other: Token) -> Amount:
        """Reserve of `token` in the {token, other} pool; 0 if no such pool."""
        pool = self.get(token, other)
        if pool is None:
            return 0
        return pool.get_reserve(token)

    def set_reserves(self, token_a: Token, reserve_a: Amount, token_b: Token, reserve_b: Amount) -> PoolState:
        """Upsert the {token_a, token_b} pool with the given reserves."""
        key = pool_key(token_a, token_b)
        existing = self._pools.get(key)
        if existing is None:
            pool = new_pool(token_a, reserve_a, token_b, reserve_b)
        else:
            pool = existing.with_reserves(token_a, reserve_a, token_b, reserve_b)
        self._pools[key] = pool
        return pool

    def put(self, pool: PoolState) -> None:
        self._pools[pool.key] = pool

    def pools(self) -> List[PoolState]:
        return list(self._pools.values())

    def total(self, token: Token) -> Amount:
        total = 0
        for pool in self._pools.values():
            if token == pool.token0:
                total += pool.reserve0
            elif token == pool.token1:
                total += pool.reserve1
        return total

    def verify_non_negative(self) -> bool:
        return all(p.reserve0 >= 0 and p.reserve1 >= 0 for p in self._pools.values())

    def copy(self) -> "PoolTable":
        out = PoolTable()
        out._pools = dict(self._pools)
        return out

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PoolTable):
            return NotImplemented
        return self._pools == other._pools

    def __len__(self) -> int:
        return len(self._pools)

    def __repr__(self) -> str:
        return f"PoolTable({len(self._pools)} pools)"
