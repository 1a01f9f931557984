# [TESTER] v1

from __future__ import annotations

import pytest

from amm_theory.state.canonical import canonical_json_bytes, domain_sep_bytes, sha256_hex


def test_canonical_json_sorts_keys_without_whitespace() -> None:
    assert canonical_json_bytes({"b": [1, 2], "a": "x"}) == b'{"a":"x","b":[1,2]}'


def test_canonical_json_keeps_big_ints_exact() -> None:
    n = 123456789012345678901234567890
    assert canonical_json_bytes({"amount": n}) == b'{"amount":' + str(n).encode() + b"}"


def test_canonical_json_is_utf8() -> None:
    assert canonical_json_bytes("Ω") == '"Ω"'.encode("utf-8")


@pytest.mark.parametrize("value", [1.0, {"k": 0.5}, [1, [2.5]], "\ud800", {"\udfff": 1}, {1: "x"}])
def test_canonical_json_rejects_unencodable_values(value: object) -> None:
    with pytest.raises(TypeError):
        canonical_json_bytes(value)


def test_sha256_hex_prefix() -> None:
    digest = sha256_hex(b"")
    assert digest == "0xe3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_domain_sep_bytes() -> None:
    assert domain_sep_bytes("ledger_snapshot", version=1) == b"amm_theory:ledger_snapshot:v1\x00"
    with pytest.raises(TypeError):
        domain_sep_bytes("")
    with pytest.raises(ValueError):
        domain_sep_bytes("a\x00b")
    with pytest.raises(ValueError):
        domain_sep_bytes("Ω")
    with pytest.raises(ValueError):
        domain_sep_bytes("x", version=0)
