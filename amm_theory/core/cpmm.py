"""
Constant Product Market Maker (CPMM) arithmetic.

All amounts are arbitrary-precision integers; every division has an explicit
rounding rule.

Algorithm Design:
- Type: Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1) per operation
- Invariant: After each swap, x' * y' >= k (k = x * y before the swap, zero fee)

Rounding contract:
- Swap: the new output reserve is rounded UP, so the trader's output is rounded
  down and the pool never loses value. The product overshoots k by less than
  one unit of the new input reserve: k <= x' * y' < k + x'.
- Burn: payouts are rounded DOWN. Burning the whole LP supply pays the full
  reserves, so a complete redemption leaves nothing locked.
"""

from __future__ import annotations

from typing import Tuple

from ..state.tokens import Amount


def ceil_div(numerator: int, denominator: int) -> int:
    """Ceiling division for a non-negative numerator and positive denominator."""
    if denominator <= 0:
        raise ValueError(f"denominator must be positive: {denominator}")
    if numerator < 0:
        raise ValueError(f"numerator must be non-negative: {numerator}")
    return -(-numerator // denominator)


def swap_exact_in(
    reserve_in: Amount,
    reserve_out: Amount,
    amount_in: Amount,
) -> Tuple[Amount, Tuple[Amount, Amount]]:
    """
    Sell exactly `amount_in` into a zero-fee pool.

    The input reserve grows by `amount_in`; the output reserve drops to
    ceil(k / new_reserve_in). Returns `(amount_out, (new_reserve_in, new_reserve_out))`.

    Raises `ValueError` for empty reserves or a non-positive input.
    """
    if reserve_in <= 0 or reserve_out <= 0:
        raise ValueError(f"Reserves must be positive: ({reserve_in}, {reserve_out})")
    if amount_in <= 0:
        raise ValueError(f"amount_in must be positive: {amount_in}")

    k = reserve_in * reserve_out
    new_reserve_in = reserve_in + amount_in
    new_reserve_out = ceil_div(k, new_reserve_in)
    amount_out = reserve_out - new_reserve_out

    # ceil(k / x') <= k / x < y for x' > x, so the output can never go negative.
    if amount_out < 0:
        raise ValueError(f"Computed amount_out is negative: {amount_out}")
    if new_reserve_in * new_reserve_out < k:
        raise ValueError(
            f"Invariant violation: new_k ({new_reserve_in * new_reserve_out}) < old_k ({k})"
        )

    return amount_out, (new_reserve_in, new_reserve_out)


def compute_lp_mint(amount0: Amount, amount1: Amount) -> Amount:
    """
    Shares minted for a deposit: the plain sum of the deposited amounts (not the
    geometric mean), whatever the pool's current reserves.
    """
    if amount0 <= 0 or amount1 <= 0:
        raise ValueError(f"Deposit amounts must be positive: ({amount0}, {amount1})")
    return amount0 + amount1


def compute_lp_burn(
    lp_amount: Amount,
    reserve0: Amount,
    reserve1: Amount,
    lp_supply: Amount,
) -> Tuple[Amount, Amount]:
    """
    Pro-rata payout for burning `lp_amount` of `lp_supply` shares:
    floor(lp_amount * reserve_i / lp_supply) of each reserve.
    """
    if lp_amount <= 0:
        raise ValueError(f"LP amount must be positive: {lp_amount}")
    if lp_supply <= 0:
        raise ValueError(f"LP supply must be positive: {lp_supply}")
    if lp_amount > lp_supply:
        raise ValueError(f"Cannot burn more LP than supply: {lp_amount} > {lp_supply}")
    if reserve0 < 0 or reserve1 < 0:
        raise ValueError(f"Reserves must be non-negative: ({reserve0}, {reserve1})")

    amount0 = (lp_amount * reserve0) // lp_supply
    amount1 = (lp_amount * reserve1) // lp_supply
    return amount0, amount1
