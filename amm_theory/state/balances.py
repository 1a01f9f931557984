"""
Wallet balance tracking with first-write ordering.

Implements WalletTable[User, Token] -> Amount
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Tuple

from .tokens import Amount, Token, User, is_token


def require_amount(value: object, *, name: str = "amount") -> Amount:
    """Amounts are plain ints; bools are rejected."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    return int(value)


class WalletTable:
    """
    Balance table mapping user -> (token -> amount).

    Users iterate in first-write order, and so do the tokens inside a wallet.
    Unlike a sparse table, zero balances are kept once written: a wallet
    exists from its first write on, whatever its amounts.
    """

    def __init__(self) -> None:
        self._wallets: Dict[User, Dict[Token, Amount]] = {}

    def get(self, user: User, token: Token) -> Amount:
        """Get balance for (user, token). Returns 0 if not found."""
        wallet = self._wallets.get(user)
        if wallet is None:
            return 0
        return wallet.get(token, 0)

    def set(self, user: User, token: Token, amount: Amount) -> None:
        """
        Set balance for (user, token), creating the wallet and entry if absent.

        Args:
            user: Wallet owner
            token: Token identity
            amount: Non-negative amount (exact, not additive)

        Raises:
            ValueError: If amount is negative
        """
        if not isinstance(user, str):
            raise TypeError("user must be a str")
        if not is_token(token):
            raise TypeError(f"not a token: {token!r}")
        amount = require_amount(amount)
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        self._wallets.setdefault(user, {})[token] = amount

    def add(self, user: User, token: Token, delta: int) -> None:
        """
        Add delta to balance. Equivalent to set(user, token, get(...) + delta).

        Raises:
            ValueError: If resulting balance would be negative
        """
        current = self.get(user, token)
        new_balance = current + require_amount(delta, name="delta")
        if new_balance < 0:
            raise ValueError(
                f"Insufficient balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(user, token, new_balance)

    def subtract(self, user: User, token: Token, delta: Amount) -> None:
        """Subtract a non-negative amount from a balance."""
        if require_amount(delta, name="delta") < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(user, token, -delta)

    def has_user(self, user: User) -> bool:
        return user in self._wallets

    def users(self) -> List[User]:
        return list(self._wallets)

    def wallet(self, user: User) -> Dict[Token, Amount]:
        """Return a copy of one user's balances (empty if unknown)."""
        return dict(self._wallets.get(user, {}))

    def holdings(self, token: Token) -> Dict[User, Amount]:
        """All wallet balances of one token, keyed by user."""
        result = {}
        for user, wallet in self._wallets.items():
            if token in wallet:
                result[user] = wallet[token]
        return result

    def total(self, token: Token) -> Amount:
        return sum(self.holdings(token).values())

    def entries(self) -> Iterator[Tuple[User, Token, Amount]]:
        for user, wallet in self._wallets.items():
            for token, amount in wallet.items():
                yield user, token, amount

    def get_all_balances(self) -> Dict[Tuple[User, Token], Amount]:
        """
        Get all balances as a dictionary.

        Returns:
            Dictionary mapping (user, token) -> amount
        """
        return {(user, token): amount for user, token, amount in self.entries()}

    def verify_non_negative(self) -> bool:
        return all(amount >= 0 for amount in self.get_all_balances().values())

    def copy(self) -> "WalletTable":
        """Deep copy: no wallet dict is shared between the two tables."""
        out = WalletTable()
        out._wallets = {user: dict(wallet) for user, wallet in self._wallets.items()}
        return out

    @classmethod
    def from_mapping(cls, balances: Mapping[User, Mapping[Token, Amount]]) -> "WalletTable":
        table = cls()
        for user, wallet in balances.items():
            for token, amount in wallet.items():
                table.set(user, token, amount)
        return table

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WalletTable):
            return NotImplemented
        return self._wallets == other._wallets

    def __len__(self) -> int:
        return len(self._wallets)

    def __repr__(self) -> str:
        return f"WalletTable({len(self._wallets)} wallets)"
