"""Ledger transitions: Deposit, Swap, Redeem.

Each transition is an immutable parameter record with ``apply(pre_state)``.

Semantics:
- every read and every precondition is evaluated against the PRE-state,
- writes go to a clone of the pre-state, never to the pre-state itself,
- a failing precondition raises a ``TransitionError`` subclass before any
  write, so a rejected transition leaves the caller's state as it was.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import (
    DegenerateSupplyError,
    InsufficientBalanceError,
    InsufficientReservesError,
    InvalidDepositRatioError,
    InvalidRedeemAmountError,
)
from ..state.balances import require_amount
from ..state.ledger import LedgerState, get_balance, get_reserve, token_supply
from ..state.tokens import Amount, Minted, Token, User, is_token, mint
from .cpmm import compute_lp_burn, compute_lp_mint, swap_exact_in


def _require_user(value: object) -> None:
    if not isinstance(value, str) or not value:
        raise TypeError("sender must be a non-empty str")


def _require_token(value: object, *, name: str) -> None:
    if not is_token(value):
        raise TypeError(f"{name} must be a token, got {value!r}")


def _require_funds(state: LedgerState, user: User, token: Token, amount: Amount) -> None:
    balance = get_balance(state, user, token)
    if balance < amount:
        raise InsufficientBalanceError(
            f"{user} holds {balance} {token}, needs {amount}"
        )


class Transition(ABC):
    """A pure function from one ledger state to the next."""

    kind: str = "transition"

    @abstractmethod
    def apply(self, pre: LedgerState) -> LedgerState:
        """Return the post-state, or raise a ``TransitionError``."""

    def minted_delta(self) -> Optional[Tuple[Minted, int]]:
        """LP token whose supply this transition changes, with the signed change."""
        return None

    def describe(self) -> str:
        return self.kind


@dataclass(frozen=True)
class Deposit(Transition):
    """Add `amount0` of `token0` and `amount1` of `token1` to their pool."""

    sender: User
    amount0: Amount
    token0: Token
    amount1: Amount
    token1: Token

    kind = "deposit"

    def __post_init__(self) -> None:
        _require_user(self.sender)
        _require_token(self.token0, name="token0")
        _require_token(self.token1, name="token1")
        require_amount(self.amount0, name="amount0")
        require_amount(self.amount1, name="amount1")

    @property
    def lp_token(self) -> Minted:
        return mint(self.token0, self.token1)

    def minted_delta(self) -> Optional[Tuple[Minted, int]]:
        return self.lp_token, self.amount0 + self.amount1

    def describe(self) -> str:
        return f"deposit {self.sender}: {self.amount0}:{self.token0} + {self.amount1}:{self.token1}"

    def apply(self, pre: LedgerState) -> LedgerState:
        if self.amount0 <= 0 or self.amount1 <= 0:
            raise InvalidDepositRatioError(
                f"Deposit amounts must be positive: ({self.amount0}, {self.amount1})"
            )
        lp_token = self.lp_token
        _require_funds(pre, self.sender, self.token0, self.amount0)
        _require_funds(pre, self.sender, self.token1, self.amount1)
        reserve0 = get_reserve(pre, self.token0, self.token1)
        reserve1 = get_reserve(pre, self.token1, self.token0)
        lp_minted = compute_lp_mint(self.amount0, self.amount1)

        post = pre.clone()
        post.wallets.subtract(self.sender, self.token0, self.amount0)
        post.wallets.subtract(self.sender, self.token1, self.amount1)
        post.pools.set_reserves(
            self.token0, reserve0 + self.amount0,
            self.token1, reserve1 + self.amount1,
        )
        post.wallets.add(self.sender, lp_token, lp_minted)
        return post


@dataclass(frozen=True)
class Swap(Transition):
    """Sell `amount_in` of `token_in` to the {token_in, token_out} pool."""

    sender: User
    token_in: Token
    token_out: Token
    amount_in: Amount

    kind = "swap"

    def __post_init__(self) -> None:
        _require_user(self.sender)
        _require_token(self.token_in, name="token_in")
        _require_token(self.token_out, name="token_out")
        require_amount(self.amount_in, name="amount_in")

    def describe(self) -> str:
        return f"swap {self.sender}: {self.amount_in}:{self.token_in} -> {self.token_out}"

    def quote(self, pre: LedgerState) -> Tuple[Amount, Tuple[Amount, Amount]]:
        """Output amount and post-swap (reserve_in, reserve_out), without writing."""
        if self.amount_in <= 0:
            raise InsufficientReservesError(f"amount_in must be positive: {self.amount_in}")
        if self.token_in == self.token_out:
            raise InsufficientReservesError(f"no pool can pair {self.token_in} with itself")
        if pre.get_pool(self.token_in, self.token_out) is None:
            raise InsufficientReservesError(f"no pool for {self.token_in}/{self.token_out}")
        reserve_in = get_reserve(pre, self.token_in, self.token_out)
        reserve_out = get_reserve(pre, self.token_out, self.token_in)
        if reserve_in <= 0 or reserve_out <= 0:
            raise InsufficientReservesError(
                f"pool {self.token_in}/{self.token_out} is empty: ({reserve_in}, {reserve_out})"
            )
        return swap_exact_in(reserve_in, reserve_out, self.amount_in)

    def apply(self, pre: LedgerState) -> LedgerState:
        amount_out, (new_reserve_in, new_reserve_out) = self.quote(pre)
        _require_funds(pre, self.sender, self.token_in, self.amount_in)

        post = pre.clone()
        post.wallets.subtract(self.sender, self.token_in, self.amount_in)
        post.wallets.add(self.sender, self.token_out, amount_out)
        post.pools.set_reserves(self.token_in, new_reserve_in, self.token_out, new_reserve_out)
        return post


@dataclass(frozen=True)
class Redeem(Transition):
    """Burn `share_amount` LP tokens of the {token0, token1} pool for a pro-rata payout."""

    sender: User
    token0: Token
    token1: Token
    share_amount: Amount

    kind = "redeem"

    def __post_init__(self) -> None:
        _require_user(self.sender)
        _require_token(self.token0, name="token0")
        _require_token(self.token1, name="token1")
        require_amount(self.share_amount, name="share_amount")

    @property
    def lp_token(self) -> Minted:
        return mint(self.token0, self.token1)

    def minted_delta(self) -> Optional[Tuple[Minted, int]]:
        return self.lp_token, -self.share_amount

    def describe(self) -> str:
        return f"redeem {self.sender}: {self.share_amount}:{self.token0}+{self.token1}"

    def apply(self, pre: LedgerState) -> LedgerState:
        if self.share_amount <= 0:
            raise InvalidRedeemAmountError(f"Redeem amount must be positive: {self.share_amount}")
        lp_token = self.lp_token
        lp_supply = token_supply(pre, lp_token)
        if lp_supply == 0:
            raise DegenerateSupplyError(f"no {lp_token} shares outstanding")
        if self.share_amount > lp_supply:
            raise InvalidRedeemAmountError(
                f"Cannot redeem more than supply: {self.share_amount} > {lp_supply}"
            )
        _require_funds(pre, self.sender, lp_token, self.share_amount)

        reserve0 = get_reserve(pre, self.token0, self.token1)
        reserve1 = get_reserve(pre, self.token1, self.token0)
        out0, out1 = compute_lp_burn(self.share_amount, reserve0, reserve1, lp_supply)

        post = pre.clone()
        # Shares can exist without a pool (seeded balances); never create one here.
        if pre.get_pool(self.token0, self.token1) is not None:
            post.pools.set_reserves(self.token0, reserve0 - out0, self.token1, reserve1 - out1)
        post.wallets.add(self.sender, self.token0, out0)
        post.wallets.add(self.sender, self.token1, out1)
        post.wallets.subtract(self.sender, lp_token, self.share_amount)
        return post
