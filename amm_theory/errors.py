"""Exception types for the AMM ledger.

Transitions raise `TransitionError` subclasses from ``apply()``; ``step()`` in
``core/engine.py`` converts them into a rejected ``StepResult`` for callers
that prefer result inspection over exceptions.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for every error raised by this package."""


class TransitionError(LedgerError):
    """A transition's precondition is not satisfied in the pre-state."""

    code = "transition"


class InsufficientBalanceError(TransitionError):
    """A debit would drive a wallet balance negative."""

    code = "insufficient_balance"


class InsufficientReservesError(TransitionError):
    """The pool is missing, empty, or the swap input is non-positive."""

    code = "insufficient_reserves"


class InvalidDepositRatioError(TransitionError):
    """A deposit amount is not strictly positive."""

    code = "invalid_deposit_ratio"


class InvalidRedeemAmountError(TransitionError):
    """A redeem amount is non-positive or exceeds the outstanding LP supply."""

    code = "invalid_redeem_amount"


class DegenerateSupplyError(TransitionError):
    """A ratio would divide by a zero LP supply."""

    code = "degenerate_supply"


class InvalidMintError(TransitionError, ValueError):
    """Minting from a non-atomic or identical token pair."""

    code = "invalid_mint"


class InvariantViolationError(LedgerError):
    """Raised when a post-state violates one or more invariants."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")


class ConfigError(LedgerError):
    """Raised when a configuration document is malformed."""
