"""`amm_theory`: a deterministic ledger model of a zero-fee constant-product AMM.

- immutable ledger states (wallets + pools),
- integer-only Deposit / Swap / Redeem transitions with typed failures,
- invariant checks after every step, and read-only valuation.

Public API:
- `LedgerState`, `Atomic`, `mint(a, b)`
- `Deposit`, `Swap`, `Redeem` with `.apply(state) -> LedgerState`
- `step(state, transition) -> StepResult`
- `get_balance`, `get_reserve`, `token_supply`, `price_oracle`, `net_wealth`, `net_wealth_of`
"""

from .core import (
    Deposit,
    Redeem,
    ReferencePrices,
    StepResult,
    Swap,
    Trajectory,
    make_price_fn,
    net_wealth,
    net_wealth_of,
    price_oracle,
    run_trajectory,
    step,
    step_or_raise,
)
from .errors import (
    DegenerateSupplyError,
    InsufficientBalanceError,
    InsufficientReservesError,
    InvalidDepositRatioError,
    InvalidMintError,
    InvalidRedeemAmountError,
    InvariantViolationError,
    LedgerError,
    TransitionError,
)
from .state import (
    Atomic,
    LedgerState,
    Minted,
    get_balance,
    get_reserve,
    mint,
    set_balance,
    set_reserve,
    token_supply,
)

__all__ = [
    "Atomic",
    "Minted",
    "mint",
    "LedgerState",
    "get_balance",
    "set_balance",
    "get_reserve",
    "set_reserve",
    "token_supply",
    "Deposit",
    "Swap",
    "Redeem",
    "StepResult",
    "step",
    "step_or_raise",
    "Trajectory",
    "run_trajectory",
    "ReferencePrices",
    "price_oracle",
    "make_price_fn",
    "net_wealth",
    "net_wealth_of",
    "LedgerError",
    "TransitionError",
    "InsufficientBalanceError",
    "InsufficientReservesError",
    "InvalidDepositRatioError",
    "InvalidRedeemAmountError",
    "DegenerateSupplyError",
    "InvalidMintError",
    "InvariantViolationError",
]
