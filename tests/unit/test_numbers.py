from decimal import Decimal

import pytest

from timeless.utils.numbers import to_number


@pytest.mark.parametrize(
    "raw, expected",
    [
        (5, Decimal("5")),
        (-3, Decimal("-3")),
        (1000.125, Decimal("1000.125")),
        (Decimal("2.50"), Decimal("2.50")),
        ("42", Decimal("42")),
        (" 12.5 ", Decimal("12.5")),
        ("1,000.50", Decimal("1000.50")),
    ],
)
def test_to_number_accepts_finite_numbers(raw, expected):
    assert to_number(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [None, True, False, "", "  ", "abc", float("nan"), float("inf"), "NaN", "-Infinity", [], object()],
)
def test_to_number_rejects_unusable_values(raw):
    assert to_number(raw) is None
