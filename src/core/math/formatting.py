"""
Formatting — Десятичное представление SignedFloat

Дробная часть f / 2^s переводится точно: f / 2^s = f · 5^s / 10^s, то есть
цифры дроби — это f · 5^s, дополненное ведущими нулями до s цифр.
Число ведущих нулей = s - (число цифр f · 5^s).

Форматы:
- scientific: "2.89373e3", "5.0e-1", "1.0" (суффикс e только при exp ≠ 0)
- fixed:      "2893.73", "0.5"

precision > 0 усекает цифры после точки (без округления).
"""

from typing import TYPE_CHECKING, Final

from src.core.domain.float_state import Sign
from src.core.math.magnitude import Magnitude

if TYPE_CHECKING:
    from src.core.math.signed_float import SignedFloat

# 5^13: наибольшая степень пятёрки, помещающаяся в блок
_FIVE_POWER_CHUNK: Final[int] = 13

NAN_TEXT: Final[str] = "nan"
INFINITY_TEXT: Final[str] = "inf"
ZERO_TEXT: Final[str] = "0.0"


def format_decimal(
    value: "SignedFloat", precision: int = 0, scientific: bool = True
) -> str:
    """
    Десятичная строка для значения.

    Args:
        value: Значение
        precision: Максимум цифр после точки (0 = все цифры)
        scientific: Научная запись вместо фиксированной

    Returns:
        "nan" для ERROR, "inf"/"-inf" для INFINITE, "0.0" для нуля

    Examples:
        >>> format_decimal(SignedFloat.from_string("2893.5"))
        '2.8935e3'
        >>> format_decimal(SignedFloat.from_string("-0.25"), scientific=False)
        '-0.25'
    """
    if precision < 0:
        raise ValueError(f"precision must be non-negative, got {precision}")

    prefix = "-" if value.sign is Sign.NEGATIVE else ""

    if value.is_error():
        return NAN_TEXT
    if value.is_infinite():
        return prefix + INFINITY_TEXT
    if value.is_zero():
        return ZERO_TEXT

    whole, fraction = decimal_parts(value.mantissa, value.shift)
    if scientific:
        body = _scientific(whole, fraction, precision)
    else:
        body = _fixed(whole, fraction, precision)
    return prefix + body


def decimal_parts(mantissa: Magnitude, shift: int) -> tuple[str, str]:
    """
    Точные цифры mantissa · 2^(-shift): (целая часть, дробь без хвостовых нулей).

    Examples:
        >>> decimal_parts(Magnitude(3), 2)
        ('0', '75')
    """
    if shift <= 0:
        return (mantissa << -shift).to_decimal_string(), ""

    whole, fraction = mantissa.split(shift)
    if fraction.is_zero():
        return whole.to_decimal_string(), ""

    _multiply_power_of_five(fraction, shift)
    leading_zeros = shift - fraction.decimal_digits()
    digits = "0" * leading_zeros + fraction.to_decimal_string()
    return whole.to_decimal_string(), digits.rstrip("0")


def _multiply_power_of_five(magnitude: Magnitude, exponent: int) -> None:
    full_chunks, rest = divmod(exponent, _FIVE_POWER_CHUNK)
    for _ in range(full_chunks):
        magnitude.multiply_small(5**_FIVE_POWER_CHUNK)
    if rest:
        magnitude.multiply_small(5**rest)


def _fixed(whole: str, fraction: str, precision: int) -> str:
    if precision:
        fraction = fraction[:precision].rstrip("0")
    return f"{whole}.{fraction or '0'}"


def _scientific(whole: str, fraction: str, precision: int) -> str:
    if whole != "0":
        exponent = len(whole) - 1
        digits = whole + fraction
    else:
        leading_zeros = len(fraction) - len(fraction.lstrip("0"))
        exponent = -(leading_zeros + 1)
        digits = fraction[leading_zeros:]

    tail = digits[1:]
    if precision:
        tail = tail[:precision]
    tail = tail.rstrip("0") or "0"

    text = f"{digits[0]}.{tail}"
    if exponent:
        text += f"e{exponent}"
    return text
