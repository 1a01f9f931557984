"""
Ledger state snapshot encoding.

Goals:
- Deterministic JSON serialization for test comparison and trajectory logs.
- Round-trippable into `LedgerState` (first-write order is preserved).
- A short human-readable rendering for debugging.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from .balances import WalletTable
from .canonical import canonical_json_bytes, domain_sep_bytes, sha256_hex
from .ledger import LedgerState
from .pools import PoolTable, new_pool
from .tokens import parse_token


LEDGER_SNAPSHOT_VERSION = 1


def _require_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    if not value:
        raise ValueError(f"{name} must be non-empty")
    return value


def _require_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    return int(value)


@dataclass(frozen=True)
class LedgerSnapshot:
    """
    Deterministic, versioned snapshot of `LedgerState`.

    The commitment is *not* included inside `data` to avoid self-reference.
    """

    version: int
    data: Dict[str, Any]

    def canonical_bytes(self) -> bytes:
        return canonical_json_bytes(self.data)

    def commitment_bytes(self) -> bytes:
        payload = domain_sep_bytes("ledger_snapshot", version=self.version) + self.canonical_bytes()
        return hashlib.sha256(payload).digest()

    def commitment_hex(self) -> str:
        payload = domain_sep_bytes("ledger_snapshot", version=self.version) + self.canonical_bytes()
        return sha256_hex(payload)


def snapshot_from_state(state: LedgerState, *, version: int = LEDGER_SNAPSHOT_VERSION) -> LedgerSnapshot:
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")

    wallets_entries: List[Dict[str, Any]] = []
    for user in state.wallets.users():
        wallets_entries.append(
            {
                "user": user,
                "balances": [
                    {"token": str(token), "amount": int(amount)}
                    for token, amount in state.wallets.wallet(user).items()
                ],
            }
        )

    pools_entries = [
        {
            "token0": str(pool.token0),
            "reserve0": int(pool.reserve0),
            "token1": str(pool.token1),
            "reserve1": int(pool.reserve1),
        }
        for pool in state.pools.pools()
    ]

    data: Dict[str, Any] = {
        "version": int(version),
        "wallets": wallets_entries,
        "pools": pools_entries,
    }
    return LedgerSnapshot(version=version, data=data)


def state_from_snapshot(snapshot: Mapping[str, Any]) -> LedgerState:
    if not isinstance(snapshot, Mapping):
        raise TypeError("snapshot must be a mapping")

    version = snapshot.get("version", LEDGER_SNAPSHOT_VERSION)
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("snapshot.version must be a positive int")
    if version != LEDGER_SNAPSHOT_VERSION:
        raise ValueError(f"unsupported snapshot version: {version}")

    wallets = WalletTable()
    wallets_entries = snapshot.get("wallets") or []
    if not isinstance(wallets_entries, list):
        raise TypeError("snapshot.wallets must be a list")
    seen_users: set[str] = set()
    for entry in wallets_entries:
        if not isinstance(entry, Mapping):
            raise TypeError("snapshot.wallets entries must be objects")
        user = _require_str(entry.get("user"), name="wallet.user")
        if user in seen_users:
            raise ValueError(f"duplicate wallet entry: {user}")
        seen_users.add(user)
        balances = entry.get("balances") or []
        if not isinstance(balances, list):
            raise TypeError("wallet.balances must be a list")
        seen_tokens = set()
        for bal in balances:
            if not isinstance(bal, Mapping):
                raise TypeError("wallet.balances entries must be objects")
            token = parse_token(_require_str(bal.get("token"), name="balance.token"))
            if token in seen_tokens:
                raise ValueError(f"duplicate balance entry: {user}/{token}")
            seen_tokens.add(token)
            wallets.set(user, token, _require_int(bal.get("amount"), name="balance.amount"))

    pools = PoolTable()
    pools_entries = snapshot.get("pools") or []
    if not isinstance(pools_entries, list):
        raise TypeError("snapshot.pools must be a list")
    for entry in pools_entries:
        if not isinstance(entry, Mapping):
            raise TypeError("snapshot.pools entries must be objects")
        pool = new_pool(
            parse_token(_require_str(entry.get("token0"), name="pool.token0")),
            _require_int(entry.get("reserve0"), name="pool.reserve0"),
            parse_token(_require_str(entry.get("token1"), name="pool.token1")),
            _require_int(entry.get("reserve1"), name="pool.reserve1"),
        )
        if pools.get(pool.token0, pool.token1) is not None:
            raise ValueError(f"duplicate pool entry: {pool.token0}/{pool.token1}")
        pools.put(pool)

    return LedgerState(wallets=wallets, pools=pools)


def render_wallet(state: LedgerState, user: str) -> str:
    balances = ",".join(f"{amount}:{token}" for token, amount in state.wallets.wallet(user).items())
    return f"{user}[{balances}]"


def render_state(state: LedgerState) -> str:
    """
    Render a state as `A[80:t0,0:t1] | {120:t0 84:t1}`.

    Wallets then pools, each in first-write order.
    """
    parts = [render_wallet(state, user) for user in state.wallets.users()]
    parts.extend(str(pool) for pool in state.pools.pools())
    return " | ".join(parts)
