"""
Тесты для разбора десятичных строк

Проверяет:
1. Разбор знака, целой части, дроби и экспоненты
2. Отклонение некорректного ввода (пробелы, лишние символы)
3. Перенос десятичной точки по экспоненте
4. Перевод дроби в двоичную с бюджетом бит
"""

import pytest

from src.core.math.decimal_parsing import (
    ParsedDecimal,
    fraction_to_binary,
    parse_decimal,
    shift_decimal_point,
)


class TestParseDecimal:
    """Тесты parse_decimal"""

    def test_full_form(self) -> None:
        assert parse_decimal("-123.456e-7") == ParsedDecimal("123", "456", -7, True)

    def test_plain_integer(self) -> None:
        assert parse_decimal("42") == ParsedDecimal("42", "", 0, False)

    def test_leading_plus_and_capital_marker(self) -> None:
        assert parse_decimal("+5E3") == ParsedDecimal("5", "", 3, False)

    def test_missing_whole_part(self) -> None:
        """".5" — целая часть нулевая"""
        assert parse_decimal(".5") == ParsedDecimal("0", "5", 0, False)

    def test_trailing_point(self) -> None:
        assert parse_decimal("7.") == ParsedDecimal("7", "", 0, False)

    def test_exponent_with_plus(self) -> None:
        assert parse_decimal("1e+2") == ParsedDecimal("1", "", 2, False)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "afsdjklnasdfnjklasdfjknl",
            "123.456e-e",
            "123 .3",
            "1 23.4",
            "1 2",
            "567.4 e -7",
            " 1",
            "1.2.3",
            "1e",
            "1e-",
            "1e5e2",
            ".",
            "-",
            "e5",
            "--1",
            "1e+-2",
            "١٢",
        ],
    )
    def test_invalid(self, text: str) -> None:
        """Некорректные строки → None"""
        assert parse_decimal(text) is None

    def test_huge_exponent_saturated(self) -> None:
        """Экспонента из очень многих цифр не переполняет разбор"""
        parsed = parse_decimal("1e" + "9" * 5000)
        assert parsed is not None
        assert parsed.exponent > 10**17

    def test_is_zero(self) -> None:
        assert ParsedDecimal("000", "00", 5, False).is_zero()
        assert not ParsedDecimal("0", "01", 0, False).is_zero()


class TestShiftDecimalPoint:
    """Тесты переноса десятичной точки"""

    def test_positive_exponent_moves_fraction(self) -> None:
        """2.345e5 → 234500"""
        shifted = shift_decimal_point(ParsedDecimal("2", "345", 5, False))
        assert shifted == ParsedDecimal("234500", "", 0, False)

    def test_positive_exponent_partial(self) -> None:
        """1.23456e2 → 123.456"""
        shifted = shift_decimal_point(ParsedDecimal("1", "23456", 2, False))
        assert shifted == ParsedDecimal("123", "456", 0, False)

    def test_negative_exponent_pads_leading_zeros(self) -> None:
        """1.234e-2 → 0.01234"""
        shifted = shift_decimal_point(ParsedDecimal("1", "234", -2, False))
        assert shifted == ParsedDecimal("0", "01234", 0, False)

    def test_negative_exponent_within_whole(self) -> None:
        """12345e-2 → 123.45"""
        shifted = shift_decimal_point(ParsedDecimal("12345", "", -2, True))
        assert shifted == ParsedDecimal("123", "45", 0, True)

    def test_trailing_fraction_zeros_trimmed(self) -> None:
        shifted = shift_decimal_point(ParsedDecimal("1", "500", 0, False))
        assert shifted.fraction == "5"


class TestFractionToBinary:
    """Тесты перевода дроби"""

    def test_exact_binary_fraction(self) -> None:
        """0.75 = 0.11b точно"""
        fraction = fraction_to_binary("75", 40)
        assert int(fraction.bits) == 0b11
        assert fraction.bit_count == 2
        assert fraction.exact

    def test_leading_zero_bits(self) -> None:
        """0.0625 = 0.0001b"""
        fraction = fraction_to_binary("0625", 80)
        assert int(fraction.bits) == 1
        assert fraction.bit_count == 4

    def test_non_terminating_is_truncated(self) -> None:
        """0.1 не имеет конечного двоичного разложения"""
        fraction = fraction_to_binary("1", 20)
        assert not fraction.exact
        assert fraction.bit_count == 20
        assert int(fraction.bits) == (1 << 20) // 10
