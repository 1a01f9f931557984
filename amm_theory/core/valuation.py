"""
Valuation of ledger states: price oracle and net wealth.

Read-only observers used to evaluate the economic outcome of a trajectory
(e.g. value extracted by a sandwiching trader). Nothing here writes to a state.

Values are `fractions.Fraction`, so LP share prices are exact rationals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Callable, Dict, Mapping, Union

from ..errors import DegenerateSupplyError
from ..state.ledger import LedgerState, get_reserve, token_supply
from ..state.tokens import Atomic, Minted, Token, User

PriceFn = Callable[[LedgerState, Token], Fraction]
PriceLike = Union[int, Fraction, str]


def to_price(value: PriceLike, *, name: str = "price") -> Fraction:
    """Parse an int, Fraction or decimal string ("1000.5") into a Fraction."""
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"{name} must be an int, Fraction or decimal string, got {value!r}")
    if isinstance(value, (int, Fraction)):
        price = Fraction(value)
    elif isinstance(value, str):
        try:
            price = Fraction(value.strip())
        except ValueError as exc:
            raise ValueError(f"invalid {name}: {value!r}") from exc
    else:
        raise TypeError(f"{name} must be an int, Fraction or decimal string, got {value!r}")
    if price < 0:
        raise ValueError(f"{name} must be non-negative: {value!r}")
    return price


@dataclass(frozen=True)
class ReferencePrices:
    """Fixed external prices for atomic tokens, keyed by symbol."""

    prices: Mapping[str, Fraction] = field(default_factory=dict)
    default: Fraction = Fraction(0)

    @classmethod
    def of(cls, prices: Mapping[str, PriceLike], default: PriceLike = 0) -> "ReferencePrices":
        parsed: Dict[str, Fraction] = {
            symbol: to_price(value, name=f"price of {symbol}") for symbol, value in prices.items()
        }
        return cls(prices=parsed, default=to_price(default, name="default price"))

    def price_of(self, token: Atomic) -> Fraction:
        return self.prices.get(token.symbol, self.default)


def price_oracle(state: LedgerState, token: Token, prices: ReferencePrices) -> Fraction:
    """
    Unit price of `token` in `state`.

    Atomic tokens use the reference price. An LP share is worth its claim on
    both reserves: (p0 * r0 + p1 * r1) / total LP supply. The divisor is
    `token_supply`, so shares held in pool reserves count as well as shares
    held in wallets.

    Raises:
        DegenerateSupplyError: If an LP token has zero supply.
    """
    if isinstance(token, Atomic):
        return prices.price_of(token)
    if isinstance(token, Minted):
        t0, t1 = token.underlying
        supply = token_supply(state, token)
        if supply == 0:
            raise DegenerateSupplyError(f"no {token} shares outstanding")
        r0 = get_reserve(state, t0, t1)
        r1 = get_reserve(state, t1, t0)
        return (prices.price_of(t0) * r0 + prices.price_of(t1) * r1) / supply
    raise TypeError(f"not a token: {token!r}")


def make_price_fn(prices: ReferencePrices) -> PriceFn:
    def price_fn(state: LedgerState, token: Token) -> Fraction:
        return price_oracle(state, token, prices)

    return price_fn


def net_wealth_of(state: LedgerState, user: User, price_fn: PriceFn) -> Fraction:
    """Value of one user's wallet; 0 for an unknown user."""
    total = Fraction(0)
    for token, amount in state.wallets.wallet(user).items():
        if amount == 0:
            continue
        total += price_fn(state, token) * amount
    return total


def net_wealth(state: LedgerState, price_fn: PriceFn) -> Fraction:
    """Value of every balance in every wallet."""
    return sum(
        (net_wealth_of(state, user, price_fn) for user in state.wallets.users()),
        Fraction(0),
    )


def wealth_by_user(state: LedgerState, price_fn: PriceFn) -> Dict[User, Fraction]:
    return {user: net_wealth_of(state, user, price_fn) for user in state.wallets.users()}
