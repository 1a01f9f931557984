# [TESTER] v1

from __future__ import annotations

import pytest

from amm_theory.errors import InvalidMintError, TransitionError
from amm_theory.state.tokens import Atomic, Minted, mint, parse_token, token_sort_key


T0 = Atomic("t0")
T1 = Atomic("t1")
T2 = Atomic("t2")


def test_mint_is_symmetric() -> None:
    assert mint(T0, T1) == mint(T1, T0)
    assert mint(T1, T0) == Minted("t0", "t1")


def test_mint_exposes_underlying_pair_in_canonical_order() -> None:
    assert mint(T1, T0).underlying == (T0, T1)
    assert str(mint(T1, T0)) == "t0+t1"


def test_mint_rejects_identical_tokens() -> None:
    with pytest.raises(InvalidMintError):
        mint(T0, T0)


def test_mint_rejects_minted_inputs() -> None:
    lp = mint(T0, T1)
    with pytest.raises(InvalidMintError):
        mint(lp, T2)
    with pytest.raises(InvalidMintError):
        mint(T2, lp)


def test_invalid_mint_is_a_transition_error_and_value_error() -> None:
    with pytest.raises(TransitionError) as excinfo:
        mint(T0, T0)
    assert isinstance(excinfo.value, ValueError)
    assert excinfo.value.code == "invalid_mint"


def test_minted_constructor_requires_canonical_distinct_pair() -> None:
    with pytest.raises(InvalidMintError):
        Minted("t1", "t0")
    with pytest.raises(InvalidMintError):
        Minted("t0", "t0")


@pytest.mark.parametrize("symbol", ["", " t0", "t0 ", "a+b"])
def test_atomic_rejects_bad_symbols(symbol: str) -> None:
    with pytest.raises(ValueError):
        Atomic(symbol)


def test_atomic_rejects_non_string_symbol() -> None:
    with pytest.raises(TypeError):
        Atomic(0)  # type: ignore[arg-type]


def test_token_order_atomics_before_minted() -> None:
    lp = mint(T0, T1)
    assert T0 < T1 < T2 < lp
    assert lp > T2
    assert sorted([lp, T2, T0, mint(T1, T2), T1]) == [T0, T1, T2, lp, mint(T1, T2)]


def test_token_order_is_total_and_consistent_with_equality() -> None:
    tokens = [T0, T1, mint(T0, T1), mint(T0, T2)]
    for a in tokens:
        for b in tokens:
            assert (a < b) + (a == b) + (a > b) == 1
            assert (a <= b) == (token_sort_key(a) <= token_sort_key(b))


def test_tokens_are_hashable_values() -> None:
    assert len({Atomic("t0"), Atomic("t0"), mint(T0, T1), mint(T1, T0)}) == 2


def test_parse_token_inverts_str() -> None:
    for token in (T0, mint(T2, T1)):
        assert parse_token(str(token)) == token
    assert parse_token("t1+t0") == mint(T0, T1)


def test_parse_token_rejects_degenerate_pair() -> None:
    with pytest.raises(InvalidMintError):
        parse_token("t0+t0")
