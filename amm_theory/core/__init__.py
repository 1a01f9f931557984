"""
Core ledger algorithms: CPMM math, transitions, invariants, valuation.
"""

from .analysis import (
    extracted_value,
    price_alignment_amount,
    sandwich_counter_reserve,
    sandwich_front_run_amount,
    sandwich_front_run_reserve,
)
from .cpmm import compute_lp_burn, compute_lp_mint, swap_exact_in
from .engine import StepResult, step, step_or_raise
from .invariants import check_all, check_state, check_transition
from .trajectory import Trajectory, run_trajectory
from .transitions import Deposit, Redeem, Swap, Transition
from .valuation import (
    PriceFn,
    ReferencePrices,
    make_price_fn,
    net_wealth,
    net_wealth_of,
    price_oracle,
    wealth_by_user,
)

__all__ = [
    "swap_exact_in",
    "compute_lp_mint",
    "compute_lp_burn",
    "Transition",
    "Deposit",
    "Swap",
    "Redeem",
    "StepResult",
    "step",
    "step_or_raise",
    "check_all",
    "check_state",
    "check_transition",
    "Trajectory",
    "run_trajectory",
    "PriceFn",
    "ReferencePrices",
    "price_oracle",
    "make_price_fn",
    "net_wealth",
    "net_wealth_of",
    "wealth_by_user",
    "sandwich_front_run_reserve",
    "sandwich_front_run_amount",
    "sandwich_counter_reserve",
    "price_alignment_amount",
    "extracted_value",
]
