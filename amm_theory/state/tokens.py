"""
Token identities for the AMM ledger.

A token is either an atomic asset (`Atomic("t0")`) or a liquidity share minted
from a pair of atomic assets (`Minted("t0", "t1")`).

Total order (used to canonicalize pool storage):
- every `Atomic` sorts before every `Minted`,
- atomics compare by symbol,
- minted tokens compare by `(symbol0, symbol1)`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from ..errors import InvalidMintError


# Type aliases
User = str  # Wallet owner identity
Amount = int  # Non-negative integer (arbitrary precision)

_ATOMIC_RANK = 0
_MINTED_RANK = 1


def _require_symbol(value: object, *, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a str")
    if not value or value != value.strip():
        raise ValueError(f"{name} must be a non-empty, unpadded string: {value!r}")
    if "+" in value:
        raise ValueError(f"{name} must not contain '+': {value!r}")
    return value


class _Ordered:
    """Rich comparisons across token variants via `token_sort_key`."""

    __slots__ = ()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, (Atomic, Minted)):
            return NotImplemented
        return token_sort_key(self) < token_sort_key(other)  # type: ignore[arg-type]

    def __le__(self, other: object) -> bool:
        if not isinstance(other, (Atomic, Minted)):
            return NotImplemented
        return token_sort_key(self) <= token_sort_key(other)  # type: ignore[arg-type]

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, (Atomic, Minted)):
            return NotImplemented
        return token_sort_key(self) > token_sort_key(other)  # type: ignore[arg-type]

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, (Atomic, Minted)):
            return NotImplemented
        return token_sort_key(self) >= token_sort_key(other)  # type: ignore[arg-type]


@dataclass(frozen=True, eq=True)
class Atomic(_Ordered):
    """A base asset identified by its symbol."""

    symbol: str

    def __post_init__(self) -> None:
        _require_symbol(self.symbol, name="symbol")

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True, eq=True)
class Minted(_Ordered):
    """
    A liquidity share for a pair of atomic assets.

    Do not construct directly; use `mint()`, which validates the pair and
    canonicalizes the constituent order.
    """

    symbol0: str
    symbol1: str

    def __post_init__(self) -> None:
        _require_symbol(self.symbol0, name="symbol0")
        _require_symbol(self.symbol1, name="symbol1")
        if self.symbol0 >= self.symbol1:
            raise InvalidMintError(
                f"minted pair must be canonical and distinct: {self.symbol0} < {self.symbol1}"
            )

    @property
    def underlying(self) -> Tuple[Atomic, Atomic]:
        return Atomic(self.symbol0), Atomic(self.symbol1)

    def __str__(self) -> str:
        return f"{self.symbol0}+{self.symbol1}"


Token = Union[Atomic, Minted]


def token_sort_key(token: Token) -> Tuple[int, str, str]:
    """Explicit total order over both token variants."""
    if isinstance(token, Atomic):
        return (_ATOMIC_RANK, token.symbol, "")
    if isinstance(token, Minted):
        return (_MINTED_RANK, token.symbol0, token.symbol1)
    raise TypeError(f"not a token: {token!r}")


def is_token(value: object) -> bool:
    return isinstance(value, (Atomic, Minted))


def mint(token_a: Token, token_b: Token) -> Minted:
    """
    Produce the LP share token for a pair of distinct atomic tokens.

    `mint(a, b) == mint(b, a)`: the pair is stored in canonical order so each
    pool has exactly one LP token. The argument order is deliberately not kept
    as an ordered pair; `Minted("t1", "t0")` cannot be built.

    Raises:
        InvalidMintError: If either token is not atomic, or both are the same.
    """
    if not isinstance(token_a, Atomic) or not isinstance(token_b, Atomic):
        raise InvalidMintError(f"invalid token pair mint: {token_a} / {token_b}")
    if token_a == token_b:
        raise InvalidMintError(f"cannot mint a pair of identical tokens: {token_a}")
    lo, hi = sorted((token_a.symbol, token_b.symbol))
    return Minted(lo, hi)


def parse_token(text: str) -> Token:
    """Inverse of `str(token)`: `"t0"` -> Atomic, `"t0+t1"` -> Minted."""
    if not isinstance(text, str):
        raise TypeError("token text must be a str")
    if "+" in text:
        left, _, right = text.partition("+")
        return mint(Atomic(left), Atomic(right))
    return Atomic(text)
