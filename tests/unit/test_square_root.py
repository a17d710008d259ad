"""
Тесты для квадратного корня (Newton-Raphson)

Проверяет:
1. sqrt(4) ≈ 2, sqrt(x)² ≈ x
2. Отрицательный аргумент → None (не ERROR)
3. Специальные значения: ±0, +inf, ERROR
4. Ограничение роста мантиссы
"""

import logging
import math
from fractions import Fraction

import pytest

from src.core.domain.arithmetic_config import ArithmeticConfig
from src.core.domain.float_state import Sign
from src.core.math.signed_float import SignedFloat
from src.core.math.square_root import square_root


def as_fraction(value: SignedFloat) -> Fraction:
    exact = Fraction(int(value.mantissa)) * Fraction(2) ** (-value.shift)
    return -exact if value.sign is Sign.NEGATIVE else exact


class TestSquareRootValues:
    """Значения корня"""

    def test_sqrt_of_four(self) -> None:
        root = square_root(SignedFloat.from_int(4))
        assert root is not None
        assert root.to_float64() == pytest.approx(2.0, abs=1e-15)
        assert abs(as_fraction(root) - 2) < Fraction(1, 2**60)

    @pytest.mark.parametrize("text", ["2", "0.5", "1234.5678", "1e-20", "9.87654321e40"])
    def test_square_of_root(self, text: str) -> None:
        """sqrt(x)² ≈ x"""
        value = SignedFloat.from_string(text)
        root = value.sqrt()
        assert root is not None
        assert (root * root).to_float64() == pytest.approx(value.to_float64(), rel=1e-14)

    def test_perfect_square_of_large_integer(self) -> None:
        value = SignedFloat.from_int(12345678901234567 ** 2)
        root = square_root(value)
        assert root is not None
        assert root.to_float64() == pytest.approx(12345678901234567.0, rel=1e-15)

    def test_result_inherits_config(self) -> None:
        config = ArithmeticConfig(sqrt_accuracy_increase_ratio=8)
        root = square_root(SignedFloat.from_int(2, config=config))
        assert root is not None
        assert root.config is config


class TestSquareRootSpecialValues:
    """Специальные значения"""

    @pytest.mark.parametrize("value", [SignedFloat.from_int(-4), SignedFloat.infinity(Sign.NEGATIVE)])
    def test_negative_has_no_result(self, value: SignedFloat) -> None:
        """Отрицательный аргумент → None, а не ERROR"""
        assert square_root(value) is None

    @pytest.mark.parametrize("sign", [Sign.POSITIVE, Sign.NEGATIVE])
    def test_signed_zero(self, sign: Sign) -> None:
        root = square_root(SignedFloat.zero(sign))
        assert root is not None
        assert root.is_zero()
        assert root.sign is sign

    def test_positive_infinity(self) -> None:
        root = square_root(SignedFloat.infinity())
        assert root is not None
        assert root.is_infinite()

    def test_error(self) -> None:
        root = square_root(SignedFloat.error())
        assert root is not None
        assert root.is_error()

    def test_argument_not_mutated(self) -> None:
        value = SignedFloat.from_int(9)
        square_root(value)
        assert value == 9


class TestSquareRootTermination:
    """Условия остановки"""

    def test_mantissa_growth_is_bounded(self) -> None:
        """Блоки мантиссы результата не превышают лимит"""
        value = SignedFloat.from_int(2)
        root = square_root(value)
        assert root is not None
        limit = value.mantissa_blocks * value.config.sqrt_accuracy_increase_ratio
        assert root.mantissa_blocks <= limit

    def test_higher_ratio_gives_more_precision(self) -> None:
        low = square_root(SignedFloat.from_int(2, config=ArithmeticConfig(sqrt_accuracy_increase_ratio=2)))
        high = square_root(SignedFloat.from_int(2, config=ArithmeticConfig(sqrt_accuracy_increase_ratio=16)))
        assert low is not None and high is not None
        low_error = abs(as_fraction(low) ** 2 - 2)
        high_error = abs(as_fraction(high) ** 2 - 2)
        assert high_error < low_error

    def test_irrational_root_stops_on_block_limit(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """sqrt(2) не сходится точно: остановка по росту мантиссы"""
        with caplog.at_level(logging.DEBUG, logger="src.core.math.square_root"):
            root = square_root(SignedFloat.from_int(2))
        assert root is not None
        assert root.to_float64() == pytest.approx(2**0.5, rel=1e-15)
        assert "exceeds" in caplog.text


class TestSquareRootAcrossExponents:
    """Одноблочные мантиссы по всему диапазону double"""

    @pytest.mark.parametrize(
        "native",
        [2.0**e for e in (-1074, -1022, -1000, -201, -200, -141, -140, -100, -1, 1, 3, 100, 141, 1000, 1023)]
        + [3.0 * 2.0**e for e in (-1020, -141, -140, 0, 141, 1020)],
    )
    def test_square_of_root(self, native: float) -> None:
        """sqrt(x)² ≈ x и sqrt(x) ≈ math.sqrt(x)"""
        value = SignedFloat.from_float64(native)
        root = value.sqrt()
        assert root is not None
        assert root.to_float64() == pytest.approx(math.sqrt(native), rel=1e-15, abs=0)
        assert (root * root).to_float64() == pytest.approx(native, rel=1e-14, abs=0)

    @pytest.mark.parametrize("exponent", [-537, -250, -70, 0, 70, 500])
    def test_even_power_of_two_is_exact(self, exponent: int) -> None:
        """Корень из 4^k вычисляется точно"""
        root = square_root(SignedFloat.from_float64(2.0 ** (2 * exponent)))
        assert root is not None
        assert as_fraction(root) == Fraction(2) ** exponent

    def test_tiny_input_is_not_returned_unchanged(self) -> None:
        value = SignedFloat.from_float64(2.0**-140)
        root = square_root(value)
        assert root is not None
        assert root != value
        assert root.to_float64() == 2.0**-70

    def test_low_ratio_still_iterates(self) -> None:
        """Даже при ratio=1 результат отличается от x₀"""
        config = ArithmeticConfig(sqrt_accuracy_increase_ratio=1)
        value = SignedFloat.from_int(3, config=config)
        root = square_root(value)
        assert root is not None
        assert root != value
        assert root.to_float64() == pytest.approx(math.sqrt(3.0), rel=2e-2, abs=0)
