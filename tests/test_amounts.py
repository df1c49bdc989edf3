from decimal import Decimal

import hypothesis
import hypothesis.strategies as st
import pytest

from swapstake.amounts import check_uint256, fractional_digits, from_native_units, to_native_units
from swapstake.constants import MAX_UINT256
from swapstake.exceptions import InvalidAmount


@pytest.mark.parametrize(
    ("amount", "decimals", "expected"),
    [
        ("1", 6, 1_000_000),
        ("1.5", 6, 1_500_000),
        ("0.000001", 6, 1),
        ("1.500000000", 6, 1_500_000),
        (1, 18, 10**18),
        (0.5, 18, 5 * 10**17),
        (0.1, 18, 10**17),
        (Decimal("123.456"), 3, 123_456),
        ("0", 0, 0),
        ("42", 0, 42),
        (" 2.25 ", 2, 225),
        ("1_000", 6, 1_000_000_000),
    ],
)
def test_to_native_units(amount, decimals, expected):
    assert to_native_units(amount, decimals) == expected


def test_too_many_fractional_digits():
    with pytest.raises(InvalidAmount, match="7 fractional digits exceeds the token precision of 6"):
        to_native_units("1.0000001", 6)


@pytest.mark.parametrize(
    "amount",
    [
        "-1",
        "-0.5",
        "abc",
        "",
        "NaN",
        "Infinity",
        float("inf"),
        float("nan"),
        True,
        None,
        [1],
    ],
)
def test_invalid_amounts(amount):
    with pytest.raises(InvalidAmount):
        to_native_units(amount, 18)


@pytest.mark.parametrize("decimals", [-1, 1.5, True, "6"])
def test_invalid_decimals(decimals):
    with pytest.raises(InvalidAmount):
        to_native_units("1", decimals)


def test_uint256_overflow():
    assert to_native_units(MAX_UINT256, 0) == MAX_UINT256
    with pytest.raises(InvalidAmount, match="maximum uint256"):
        to_native_units(MAX_UINT256 + 1, 0)
    with pytest.raises(InvalidAmount, match="maximum uint256"):
        to_native_units(MAX_UINT256, 1)


def test_float_uses_shortest_repr():
    # 0.1 cannot be represented exactly in binary, but is read as the literal the user typed
    assert to_native_units(0.1, 1) == 1
    with pytest.raises(InvalidAmount):
        to_native_units(0.1 + 0.2, 6)


def test_fractional_digits():
    assert fractional_digits("1") == 0
    assert fractional_digits("1.10") == 1
    assert fractional_digits("0.000") == 0
    assert fractional_digits("100") == 0
    assert fractional_digits(Decimal("1E+3")) == 0
    assert fractional_digits(Decimal("1E-30")) == 30


def test_from_native_units():
    assert from_native_units(1_500_000, 6) == Decimal("1.5")
    assert from_native_units(0, 18) == 0
    assert from_native_units(1, 18) == Decimal("0.000000000000000001")
    with pytest.raises(InvalidAmount):
        from_native_units(-1, 6)
    with pytest.raises(InvalidAmount):
        from_native_units(1.5, 6)  # type: ignore[arg-type]


def test_check_uint256():
    assert check_uint256(0) == 0
    assert check_uint256(MAX_UINT256) == MAX_UINT256
    for value in (-1, MAX_UINT256 + 1, 1.0, False):
        with pytest.raises(InvalidAmount):
            check_uint256(value)  # type: ignore[arg-type]


@hypothesis.given(
    native=st.integers(min_value=0, max_value=10**40),
    decimals=st.integers(min_value=0, max_value=36),
)
def test_native_round_trip(native: int, decimals: int):
    assert to_native_units(from_native_units(native, decimals), decimals) == native


@hypothesis.given(
    digits=st.integers(min_value=0, max_value=10**30),
    places=st.integers(min_value=0, max_value=18),
    extra_decimals=st.integers(min_value=0, max_value=6),
)
def test_human_round_trip(digits: int, places: int, extra_decimals: int):
    amount = Decimal(digits).scaleb(-places)
    decimals = places + extra_decimals
    assert from_native_units(to_native_units(amount, decimals), decimals) == amount
    assert from_native_units(to_native_units(str(amount), decimals), decimals) == amount
