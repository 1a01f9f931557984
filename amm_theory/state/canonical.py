"""
Canonical JSON encoding and hashing for ledger snapshots.

Equal states encode to equal bytes and therefore to equal commitments.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


def _check_text(s: str) -> None:
    # Lone surrogates cannot be encoded as UTF-8.
    if any(0xD800 <= ord(ch) <= 0xDFFF for ch in s):
        raise TypeError("surrogate code points are not allowed in canonical encoding")


def _check_encodable(value: Any) -> None:
    if isinstance(value, float):
        raise TypeError("floats are not allowed in canonical encoding")
    if isinstance(value, str):
        _check_text(value)
    elif isinstance(value, dict):
        for k, v in value.items():
            if not isinstance(k, str):
                raise TypeError("dict keys must be str for canonical encoding")
            _check_text(k)
            _check_encodable(v)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _check_encodable(item)


def canonical_json_bytes(value: Any) -> bytes:
    """
    UTF-8 JSON with sorted keys and no whitespace.

    Floats are rejected: ledger amounts are ints and must encode exactly.
    """
    _check_encodable(value)
    text = json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.encode("utf-8")


def sha256_hex(data: bytes) -> str:
    return "0x" + hashlib.sha256(data).hexdigest()


def domain_sep_bytes(label: str, version: int = 1) -> bytes:
    """ASCII, NUL-terminated prefix that keeps hashes of different payload kinds apart."""
    if not isinstance(label, str) or not label:
        raise TypeError("label must be a non-empty str")
    if "\x00" in label:
        raise ValueError("label must not contain NUL")
    try:
        label_bytes = label.encode("ascii")
    except UnicodeEncodeError as exc:
        raise ValueError("label must be ASCII") from exc
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")
    return b"amm_theory:" + label_bytes + b":v" + str(version).encode("ascii") + b"\x00"
