"""Tests for fail-soft numeric coercion."""

import pytest

from imovel_search.utils.coercion import parse_optional_float, parse_optional_int


class TestParseOptionalFloat:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (12, 12.0),
            (3.5, 3.5),
            ("42", 42.0),
            (" 42.5 ", 42.5),
            ("-5.79", -5.79),
            ("95,5", 95.5),
            ("1.250.000", 1250000.0),
            ("1.250.000,50", 1250000.5),
            ("R$ 350.000,00", 350000.0),
            ("R$1200", 1200.0),
        ],
    )
    def test_parses(self, value: object, expected: float) -> None:
        assert parse_optional_float(value) == expected

    @pytest.mark.parametrize(
        "value",
        [None, "", "   ", "R$", "abc", "n/a", "nan", float("nan"), True, False, [1], {}],
    )
    def test_unparseable_is_none(self, value: object) -> None:
        assert parse_optional_float(value) is None

    def test_single_dot_is_decimal(self) -> None:
        assert parse_optional_float("350.000") == 350.0

    @pytest.mark.parametrize(
        "value", ["inf", "Infinity", "-inf", "1e400", float("inf"), float("-inf"), 10**400]
    )
    def test_non_finite_is_none(self, value: object) -> None:
        assert parse_optional_float(value) is None


class TestParseOptionalInt:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(3, 3), ("3", 3), ("2.9", 2), (4.0, 4), ("-1", -1), ("1.000.000", 1000000)],
    )
    def test_parses(self, value: object, expected: int) -> None:
        assert parse_optional_int(value) == expected

    @pytest.mark.parametrize("value", [None, "", "quatro", True, "inf", "1e400", float("-inf")])
    def test_unparseable_is_none(self, value: object) -> None:
        assert parse_optional_int(value) is None
