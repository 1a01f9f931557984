"""
Trade sizing helpers for sandwich (MEV) analysis.

Integer square roots use `math.isqrt`, so results are exact floors rather than
float approximations.
"""

from __future__ import annotations

import math
from fractions import Fraction

from ..state.tokens import Amount, User
from .cpmm import ceil_div
from .trajectory import Trajectory
from .valuation import PriceFn, PriceLike, net_wealth_of, to_price


def sandwich_front_run_reserve(
    victim_in: Amount,
    victim_min_out: Amount,
    reserve_in: Amount,
    reserve_out: Amount,
) -> Amount:
    """
    Largest input-side reserve at which a victim swap still meets its limit.

    A victim selling `victim_in` and requiring at least `victim_min_out` gets
    k / r - k / (r + victim_in) from a pool whose input reserve is r. Setting
    that equal to the limit gives

        v1 * r^2 + v0 * v1 * r - v0 * k = 0

    whose positive root is returned, floored. Front-running moves the pool's
    input reserve up to this value (before swap rounding).
    """
    if victim_in <= 0 or victim_min_out <= 0:
        raise ValueError(f"victim amounts must be positive: ({victim_in}, {victim_min_out})")
    if reserve_in <= 0 or reserve_out <= 0:
        raise ValueError(f"Reserves must be positive: ({reserve_in}, {reserve_out})")
    k = reserve_in * reserve_out
    b = victim_in * victim_min_out
    disc = b * b + 4 * victim_min_out * victim_in * k
    return (math.isqrt(disc) - b) // (2 * victim_min_out)


def sandwich_front_run_amount(
    victim_in: Amount,
    victim_min_out: Amount,
    reserve_in: Amount,
    reserve_out: Amount,
) -> Amount:
    """Input the front-runner sells; 0 when the victim's limit leaves no room."""
    target = sandwich_front_run_reserve(victim_in, victim_min_out, reserve_in, reserve_out)
    return max(0, target - reserve_in)


def sandwich_counter_reserve(reserve_in: Amount, reserve_out: Amount, front_reserve: Amount) -> Amount:
    """Output-side reserve once the input side has been pushed to `front_reserve`."""
    if front_reserve <= 0:
        raise ValueError(f"front_reserve must be positive: {front_reserve}")
    return ceil_div(reserve_in * reserve_out, front_reserve)


def price_alignment_amount(
    price_in: PriceLike,
    price_out: PriceLike,
    reserve_in: Amount,
    reserve_out: Amount,
) -> int:
    """
    Input amount that moves the pool's marginal price to the external price ratio.

    After selling w of the input token, reserve_in' = sqrt(price_out / price_in * k),
    which makes reserve_out' / reserve_in' == price_in / price_out. A negative result
    means the pool is already past that point and the trade runs the other way.
    """
    p_in = to_price(price_in, name="price_in")
    p_out = to_price(price_out, name="price_out")
    if p_in == 0:
        raise ValueError("price_in must be positive")
    if reserve_in <= 0 or reserve_out <= 0:
        raise ValueError(f"Reserves must be positive: ({reserve_in}, {reserve_out})")
    target_sq = math.floor(Fraction(p_out) / p_in * reserve_in * reserve_out)
    return math.isqrt(target_sq) - reserve_in


def extracted_value(trajectory: Trajectory, user: User, price_fn: PriceFn) -> Fraction:
    """Change in `user`'s net wealth from the first to the final state."""
    return net_wealth_of(trajectory.final, user, price_fn) - net_wealth_of(trajectory.start, user, price_fn)
