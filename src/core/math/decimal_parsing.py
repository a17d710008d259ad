"""
Decimal Parsing — Разбор десятичной строки и перевод дроби в двоичную

Этапы (все текстовые, без потери точности):
1. parse_decimal: знак, целая часть, дробная часть, экспонента
   Формат: [+|-]digits[.digits][(e|E)[+|-]digits]
2. shift_decimal_point: перенос десятичной точки на величину экспоненты
   (дополнение нулями), после чего экспонента равна 0
3. fraction_to_binary: перевод дробных цифр в двоичные биты удвоением
   числителя над знаменателем 10^n, с ограниченным бюджетом бит

Некорректный ввод возвращает None: решение о статусе ERROR принимает
вызывающий код.
"""

from typing import Final, NamedTuple, Optional

from src.core.math.magnitude import Magnitude

# Маркеры
_DECIMAL_POINT: Final[str] = "."
_EXPONENT_MARKERS: Final[str] = "eE"
_SIGNS: Final[str] = "+-"

# Экспоненты длиннее этого числа цифр заведомо вне любого разумного лимита
_EXPONENT_DIGITS_MAX: Final[int] = 18
_EXPONENT_SATURATED: Final[int] = 10**_EXPONENT_DIGITS_MAX


class ParsedDecimal(NamedTuple):
    """
    Разобранная десятичная строка.

    value = (-1)^negative · whole.fraction · 10^exponent
    """

    whole: str
    fraction: str
    exponent: int
    negative: bool

    def is_zero(self) -> bool:
        """Все цифры нулевые."""
        return not (self.whole + self.fraction).strip("0")


# =============================================================================
# PARSING
# =============================================================================


def parse_decimal(text: str) -> Optional[ParsedDecimal]:
    """
    Разбор десятичной строки.

    Args:
        text: Строка вида "-123.456e-7"

    Returns:
        ParsedDecimal или None, если строка некорректна (пробелы, лишние
        символы, пустая экспонента, отсутствие цифр)

    Examples:
        >>> parse_decimal("-1.5e3")
        ParsedDecimal(whole='1', fraction='5', exponent=3, negative=True)
        >>> parse_decimal("123.456e-e") is None
        True
    """
    if not text:
        return None

    negative = False
    body = text
    if body[0] in _SIGNS:
        negative = body[0] == "-"
        body = body[1:]

    marker = _find_exponent_marker(body)
    if marker < 0:
        number, exponent_text = body, None
    else:
        number, exponent_text = body[:marker], body[marker + 1:]

    whole, _, fraction = number.partition(_DECIMAL_POINT)
    if not _is_digits_or_empty(whole) or not _is_digits_or_empty(fraction):
        return None
    if not whole and not fraction:
        return None

    exponent = 0
    if exponent_text is not None:
        parsed_exponent = _parse_exponent(exponent_text)
        if parsed_exponent is None:
            return None
        exponent = parsed_exponent

    return ParsedDecimal(whole or "0", fraction, exponent, negative)


def _find_exponent_marker(body: str) -> int:
    for index, char in enumerate(body):
        if char in _EXPONENT_MARKERS:
            return index
    return -1


def _is_digits_or_empty(part: str) -> bool:
    # str.isdigit() принимает и не-ASCII цифры
    return all("0" <= char <= "9" for char in part)


def _parse_exponent(text: str) -> Optional[int]:
    """Экспонента: необязательный знак + непустые цифры."""
    negative = False
    if text and text[0] in _SIGNS:
        negative = text[0] == "-"
        text = text[1:]

    if not text or not _is_digits_or_empty(text):
        return None

    significant = text.lstrip("0")
    if len(significant) > _EXPONENT_DIGITS_MAX:
        value = _EXPONENT_SATURATED
    else:
        value = int(significant or "0")

    return -value if negative else value


# =============================================================================
# EXPONENT NORMALIZATION
# =============================================================================


def shift_decimal_point(parsed: ParsedDecimal) -> ParsedDecimal:
    """
    Перенос десятичной точки на parsed.exponent позиций.

    exponent > 0: цифры дроби переходят в целую часть, недостающие → нули
    exponent < 0: последние цифры целой части переходят в дробь,
                  недостающие → ведущие нули дроби

    Хвостовые нули дроби удаляются. Результат имеет exponent = 0.

    Examples:
        >>> shift_decimal_point(ParsedDecimal("1", "234", -2, False))
        ParsedDecimal(whole='0', fraction='01234', exponent=0, negative=False)
        >>> shift_decimal_point(ParsedDecimal("2", "345", 5, False))
        ParsedDecimal(whole='234500', fraction='', exponent=0, negative=False)
    """
    whole, fraction, exponent = parsed.whole, parsed.fraction, parsed.exponent

    if exponent > 0:
        moved = fraction[:exponent]
        whole = whole + moved + "0" * (exponent - len(moved))
        fraction = fraction[exponent:]
    elif exponent < 0:
        count = -exponent
        if count > len(whole):
            whole = "0" * (count - len(whole)) + whole
        fraction = whole[-count:] + fraction
        whole = whole[:-count]

    return ParsedDecimal(whole or "0", fraction.rstrip("0"), 0, parsed.negative)


# =============================================================================
# FRACTION CONVERSION
# =============================================================================


class BinaryFraction(NamedTuple):
    """
    Двоичная дробь: value ≈ bits / 2^bit_count.

    exact=False — бюджет бит исчерпан до обнуления остатка.
    """

    bits: Magnitude
    bit_count: int
    exact: bool


def fraction_to_binary(digits: str, max_bits: int) -> BinaryFraction:
    """
    Перевод десятичных цифр дроби 0.digits в двоичные биты.

    numerator / 10^len(digits) удваивается на каждом шаге; если результат
    не меньше знаменателя, очередной бит равен 1 и знаменатель вычитается.
    Бесконечные двоичные разложения обрываются на max_bits битах (усечение).

    Args:
        digits: Непустые цифры дроби без хвостовых нулей
        max_bits: Бюджет бит

    Returns:
        BinaryFraction

    Examples:
        >>> fraction = fraction_to_binary("75", 40)
        >>> int(fraction.bits), fraction.bit_count, fraction.exact
        (3, 2, True)
    """
    numerator = Magnitude.from_digits(digits)
    denominator = Magnitude.power_of_ten(len(digits))
    bits = Magnitude()
    bit_count = 0

    while not numerator.is_zero() and bit_count < max_bits:
        numerator.shift_left(1)
        bits.shift_left(1)
        if numerator >= denominator:
            numerator.subtract(denominator)
            bits.set_bit(0, 1)
        bit_count += 1

    return BinaryFraction(bits, bit_count, numerator.is_zero())
