"""
Ledger state for the AMM economy: tokens, wallets, pools.
"""

from .balances import WalletTable
from .ledger import (
    LedgerState,
    get_balance,
    get_reserve,
    set_balance,
    set_reserve,
    token_supply,
    tokens,
)
from .pools import PoolState, PoolTable, pool_key
from .snapshot import LedgerSnapshot, render_state, snapshot_from_state, state_from_snapshot
from .tokens import Atomic, Minted, Token, User, mint, parse_token, token_sort_key

__all__ = [
    "Atomic",
    "Minted",
    "Token",
    "User",
    "mint",
    "parse_token",
    "token_sort_key",
    "WalletTable",
    "PoolState",
    "PoolTable",
    "pool_key",
    "LedgerState",
    "token_supply",
    "get_reserve",
    "set_reserve",
    "get_balance",
    "set_balance",
    "tokens",
    "LedgerSnapshot",
    "snapshot_from_state",
    "state_from_snapshot",
    "render_state",
]
