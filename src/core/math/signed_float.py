"""
SignedFloat — Двоичное число с плавающей точкой произвольной точности

value = (-1)^sign · mantissa · 2^(-shift)   (status = NORMAL)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Мантисса выровнена вправо (младший бит = 1), кроме нулевой мантиссы
2. Ноль всегда имеет shift = 0; знак нуля сохраняется
3. INFINITE и ERROR имеют нулевую мантиссу и shift = 0
4. ERROR поглощающий: любая операция с ERROR-операндом → ERROR
5. Ошибки вычисления НЕ бросаются как исключения, а хранятся в status

Точность:
- Сложение, вычитание, умножение — точные
- Деление — не менее config.division_accuracy значащих бит частного
- Разбор строки — не более config.constructor_max_iterations бит
  на каждую десятичную цифру дроби

Мантисса используется только через публичный интерфейс Magnitude
(блоки, выравнивание, длина в битах).
"""

import logging
import struct
from typing import Final, NamedTuple, Optional, Union

from src.core.domain.arithmetic_config import DEFAULT_CONFIG, ArithmeticConfig
from src.core.domain.float_state import FloatSnapshot, FloatStatus, Ordering, Sign
from src.core.math.decimal_parsing import (
    fraction_to_binary,
    parse_decimal,
    shift_decimal_point,
)
from src.core.math.formatting import format_decimal
from src.core.math.magnitude import Magnitude
from src.core.math.square_root import square_root

logger = logging.getLogger(__name__)


# =============================================================================
# IEEE754 LAYOUTS
# =============================================================================


class IeeeFormat(NamedTuple):
    """Битовая раскладка native типа IEEE754."""

    name: str
    total_bits: int
    exponent_bits: int
    fraction_bits: int
    float_code: str
    bits_code: str
    signaling_nan: int

    @property
    def bias(self) -> int:
        return (1 << (self.exponent_bits - 1)) - 1

    @property
    def exponent_mask(self) -> int:
        return (1 << self.exponent_bits) - 1

    @property
    def fraction_mask(self) -> int:
        return (1 << self.fraction_bits) - 1

    @property
    def sign_bit(self) -> int:
        return 1 << (self.total_bits - 1)


SINGLE: Final[IeeeFormat] = IeeeFormat("single", 32, 8, 23, "<f", "<I", 0x7FA00000)
DOUBLE: Final[IeeeFormat] = IeeeFormat(
    "double", 64, 11, 52, "<d", "<Q", 0x7FF4000000000000
)

Operand = Union["SignedFloat", int, float, str, Magnitude]


# =============================================================================
# SIGNED FLOAT
# =============================================================================


class SignedFloat:
    """
    Знаковое двоичное число с плавающей точкой.

    Создание — только через фабрики (from_float64, from_string, ...).
    Методы add/subtract/multiply/divide изменяют объект на месте;
    операторы +, -, *, / возвращают новый объект. Перед каждой бинарной
    операцией второй операнд явно приводится через coerce().

    Examples:
        >>> a = SignedFloat.from_string("1.234e-2")
        >>> b = SignedFloat.from_string("2.345e5")
        >>> round(float(a * b), 2)
        2893.73
    """

    __slots__ = ("_sign", "_mantissa", "_shift", "_status", "_config")

    def __init__(
        self,
        sign: Sign = Sign.POSITIVE,
        mantissa: Optional[Magnitude] = None,
        shift: int = 0,
        status: FloatStatus = FloatStatus.NORMAL,
        config: ArithmeticConfig = DEFAULT_CONFIG,
    ):
        """
        Низкоуровневый конструктор: объект становится владельцем mantissa.

        Для построения из внешней Magnitude используйте from_magnitude().
        """
        self._sign = sign
        self._mantissa = mantissa if mantissa is not None else Magnitude()
        self._shift = shift
        self._status = status
        self._config = config
        self._normalize()

    # -------------------------------------------------------------------------
    # Фабрики
    # -------------------------------------------------------------------------

    @classmethod
    def from_float64(
        cls, value: float, config: ArithmeticConfig = DEFAULT_CONFIG
    ) -> "SignedFloat":
        """
        Точное построение из native double (разбор битовой раскладки).

        NaN → ERROR, ±inf → INFINITE со знаком, субнормальные — точно.
        """
        (bits,) = struct.unpack(DOUBLE.bits_code, struct.pack(DOUBLE.float_code, value))
        return cls._from_ieee(bits, DOUBLE, config)

    @classmethod
    def from_float32(
        cls, value: float, config: ArithmeticConfig = DEFAULT_CONFIG
    ) -> "SignedFloat":
        """
        Построение из native single precision.

        value округляется до single precision; значения вне диапазона single
        дают INFINITE со знаком.
        """
        try:
            packed = struct.pack(SINGLE.float_code, value)
        except OverflowError:
            sign = Sign.NEGATIVE if value < 0 else Sign.POSITIVE
            return cls.infinity(sign, config=config)

        (bits,) = struct.unpack(SINGLE.bits_code, packed)
        return cls._from_ieee(bits, SINGLE, config)

    @classmethod
    def from_int(cls, value: int, config: ArithmeticConfig = DEFAULT_CONFIG) -> "SignedFloat":
        """Точное построение из знакового целого."""
        sign = Sign.NEGATIVE if value < 0 else Sign.POSITIVE
        return cls(sign, Magnitude(abs(value)), 0, config=config)

    @classmethod
    def from_unsigned(
        cls, value: int, config: ArithmeticConfig = DEFAULT_CONFIG
    ) -> "SignedFloat":
        """
        Точное построение из беззнакового целого.

        Raises:
            ValueError: Если value < 0
        """
        if value < 0:
            raise ValueError(f"Unsigned value must be non-negative, got {value}")
        return cls(Sign.POSITIVE, Magnitude(value), 0, config=config)

    @classmethod
    def from_magnitude(
        cls,
        mantissa: Magnitude,
        shift: int = 0,
        sign: Sign = Sign.POSITIVE,
        config: ArithmeticConfig = DEFAULT_CONFIG,
    ) -> "SignedFloat":
        """Построение (-1)^sign · mantissa · 2^(-shift); mantissa копируется."""
        return cls(sign, mantissa.copy(), shift, config=config)

    @classmethod
    def from_string(
        cls, text: str, config: ArithmeticConfig = DEFAULT_CONFIG
    ) -> "SignedFloat":
        """
        Построение из десятичной строки.

        Целая часть переводится точно. Дробная часть переводится удвоением
        не более чем на constructor_max_iterations · len(дробных цифр) бит:
        бесконечные двоичные разложения усекаются.

        Некорректная строка → ERROR (без исключения).

        Args:
            text: Например "-123.456", "1.234e-2", "+5E3"
            config: Лимиты точности

        Returns:
            SignedFloat
        """
        parsed = parse_decimal(text)
        if parsed is None:
            logger.debug("Malformed decimal string %r", text)
            return cls.error(config=config)

        sign = Sign.NEGATIVE if parsed.negative else Sign.POSITIVE

        if abs(parsed.exponent) > config.decimal_exponent_limit:
            if parsed.is_zero():
                return cls.zero(sign, config=config)
            logger.debug(
                "Decimal exponent %d beyond limit %d in %r, saturating",
                parsed.exponent,
                config.decimal_exponent_limit,
                text,
            )
            if parsed.exponent > 0:
                return cls.infinity(sign, config=config)
            return cls.zero(sign, config=config)

        parsed = shift_decimal_point(parsed)
        mantissa = Magnitude.from_digits(parsed.whole)
        if not parsed.fraction:
            return cls(sign, mantissa, 0, config=config)

        budget = config.constructor_max_iterations * len(parsed.fraction)
        fraction = fraction_to_binary(parsed.fraction, budget)
        if not fraction.exact:
            logger.debug(
                "Fraction of %r truncated to %d bits", text, fraction.bit_count
            )

        mantissa.shift_left(fraction.bit_count)
        mantissa.add(fraction.bits)
        return cls(sign, mantissa, fraction.bit_count, config=config)

    @classmethod
    def from_snapshot(
        cls, snapshot: FloatSnapshot, config: ArithmeticConfig = DEFAULT_CONFIG
    ) -> "SignedFloat":
        """Восстановление значения из снапшота."""
        if snapshot.status is FloatStatus.ERROR:
            return cls.error(config=config)
        if snapshot.status is FloatStatus.INFINITE:
            return cls.infinity(snapshot.sign, config=config)
        return cls(
            snapshot.sign,
            Magnitude.from_blocks(snapshot.blocks),
            snapshot.shift,
            config=config,
        )

    @classmethod
    def zero(
        cls, sign: Sign = Sign.POSITIVE, config: ArithmeticConfig = DEFAULT_CONFIG
    ) -> "SignedFloat":
        return cls(sign, Magnitude(), 0, config=config)

    @classmethod
    def infinity(
        cls, sign: Sign = Sign.POSITIVE, config: ArithmeticConfig = DEFAULT_CONFIG
    ) -> "SignedFloat":
        return cls(sign, None, 0, FloatStatus.INFINITE, config)

    @classmethod
    def error(cls, config: ArithmeticConfig = DEFAULT_CONFIG) -> "SignedFloat":
        return cls(Sign.POSITIVE, None, 0, FloatStatus.ERROR, config)

    @classmethod
    def coerce(
        cls, value: Operand, config: ArithmeticConfig = DEFAULT_CONFIG
    ) -> "SignedFloat":
        """
        Явное приведение операнда к SignedFloat.

        int → from_int, float → from_float64, str → from_string,
        Magnitude → from_magnitude; SignedFloat возвращается как есть.

        Raises:
            TypeError: Если тип не поддерживается (в том числе bool)
        """
        if isinstance(value, SignedFloat):
            return value
        if isinstance(value, bool):
            raise TypeError("Cannot coerce bool to SignedFloat")
        if isinstance(value, int):
            return cls.from_int(value, config=config)
        if isinstance(value, float):
            return cls.from_float64(value, config=config)
        if isinstance(value, str):
            return cls.from_string(value, config=config)
        if isinstance(value, Magnitude):
            return cls.from_magnitude(value, config=config)
        raise TypeError(f"Cannot coerce {type(value).__name__} to SignedFloat")

    @classmethod
    def _from_ieee(
        cls, bits: int, layout: IeeeFormat, config: ArithmeticConfig
    ) -> "SignedFloat":
        sign = Sign.NEGATIVE if bits & layout.sign_bit else Sign.POSITIVE
        exponent_field = (bits >> layout.fraction_bits) & layout.exponent_mask
        fraction = bits & layout.fraction_mask

        if exponent_field == layout.exponent_mask:
            if fraction:
                return cls.error(config=config)
            return cls.infinity(sign, config=config)

        if exponent_field == 0:
            # Ноль или субнормальное: без неявной единицы, экспонента 1 - bias
            mantissa = Magnitude(fraction)
            shift = layout.fraction_bits - (1 - layout.bias)
        else:
            mantissa = Magnitude(fraction | (1 << layout.fraction_bits))
            exponent = exponent_field - layout.bias
            shift = mantissa.bit_length() - exponent - 1

        return cls(sign, mantissa, shift, config=config)

    # -------------------------------------------------------------------------
    # Состояние
    # -------------------------------------------------------------------------

    @property
    def sign(self) -> Sign:
        return self._sign

    @property
    def status(self) -> FloatStatus:
        return self._status

    @property
    def shift(self) -> int:
        return self._shift

    @property
    def mantissa(self) -> Magnitude:
        """Копия мантиссы."""
        return self._mantissa.copy()

    @property
    def mantissa_blocks(self) -> int:
        """Число блоков мантиссы."""
        return self._mantissa.block_count

    @property
    def config(self) -> ArithmeticConfig:
        return self._config

    def is_error(self) -> bool:
        return self._status is FloatStatus.ERROR

    def is_infinite(self) -> bool:
        return self._status is FloatStatus.INFINITE

    def is_zero(self) -> bool:
        """Конечный ноль любого знака."""
        return self._status is FloatStatus.NORMAL and self._mantissa.is_zero()

    def is_negative(self) -> bool:
        return self._sign is Sign.NEGATIVE

    def snapshot(self) -> FloatSnapshot:
        """Структурированное представление внутреннего состояния."""
        return FloatSnapshot(
            status=self._status,
            sign=self._sign,
            shift=self._shift,
            blocks=list(self._mantissa.blocks),
        )

    def copy(self) -> "SignedFloat":
        """Независимая копия (мантисса копируется)."""
        return SignedFloat(
            self._sign, self._mantissa.copy(), self._shift, self._status, self._config
        )

    def __copy__(self) -> "SignedFloat":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "SignedFloat":
        return self.copy()

    def clear(self) -> None:
        """Сброс в +0 (NORMAL)."""
        self._set_zero(Sign.POSITIVE)

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def compare(self, other: Operand) -> Ordering:
        """
        Четырёхзначное сравнение.

        - ERROR с любой стороны → UNORDERED
        - +0 и -0 равны
        - Разные знаки → порядок по знаку
        - Один знак → по двоичной экспоненте, затем по мантиссам,
          выровненным к общей длине; для отрицательных порядок обратный
        - INFINITE больше любого конечного значения того же знака

        Raises:
            TypeError: Если other не приводится к SignedFloat
        """
        other = self._coerce(other)

        if self.is_error() or other.is_error():
            return Ordering.UNORDERED

        own_zero, their_zero = self.is_zero(), other.is_zero()
        if own_zero and their_zero:
            return Ordering.EQUAL
        if own_zero:
            return Ordering.LESS if other._sign is Sign.POSITIVE else Ordering.GREATER
        if their_zero:
            return Ordering.GREATER if self._sign is Sign.POSITIVE else Ordering.LESS

        if self._sign is not other._sign:
            return Ordering.LESS if self._sign is Sign.NEGATIVE else Ordering.GREATER

        order = self._compare_absolute(other)
        return order.reversed() if self._sign is Sign.NEGATIVE else order

    def _compare_absolute(self, other: "SignedFloat") -> Ordering:
        """Сравнение модулей ненулевых значений без ERROR."""
        if self.is_infinite() or other.is_infinite():
            if self.is_infinite() and other.is_infinite():
                return Ordering.EQUAL
            return Ordering.GREATER if self.is_infinite() else Ordering.LESS

        own_exponent, their_exponent = self._exponent(), other._exponent()
        if own_exponent != their_exponent:
            return Ordering.LESS if own_exponent < their_exponent else Ordering.GREATER

        own = self._mantissa.copy()
        theirs = other._mantissa.copy()
        width = max(own.bit_length(), theirs.bit_length())
        own.shift_left(width - own.bit_length())
        theirs.shift_left(width - theirs.bit_length())
        return own.compare(theirs)

    def __eq__(self, other: object) -> bool:
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.compare(operand) is Ordering.EQUAL

    __hash__ = None  # type: ignore[assignment]  # mutable

    def __lt__(self, other: object) -> bool:
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.compare(operand) is Ordering.LESS

    def __le__(self, other: object) -> bool:
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.compare(operand) in (Ordering.LESS, Ordering.EQUAL)

    def __gt__(self, other: object) -> bool:
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.compare(operand) is Ordering.GREATER

    def __ge__(self, other: object) -> bool:
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.compare(operand) in (Ordering.GREATER, Ordering.EQUAL)

    # -------------------------------------------------------------------------
    # Арифметика (на месте)
    # -------------------------------------------------------------------------

    def add(self, other: Operand) -> "SignedFloat":
        """
        self += other (точно).

        Правила специальных значений:
            ERROR + x           → ERROR
            ±INF + (∓INF)       → ERROR
            INF + x             → INF
            x + INF             → INF (знак other)

        Двоичные точки выравниваются сдвигом мантиссы с меньшим shift.
        Сумма равных модулей разных знаков → +0.
        """
        other = self._coerce(other)

        if self.is_error() or other.is_error():
            self._set_error()
            return self
        if self.is_infinite():
            if other.is_infinite() and other._sign is not self._sign:
                self._set_error()
            return self
        if other.is_infinite():
            self._set_infinite(other._sign)
            return self

        addend = other._mantissa.copy()
        other_sign = other._sign
        if self._shift < other._shift:
            self._mantissa.shift_left(other._shift - self._shift)
            self._shift = other._shift
        elif other._shift < self._shift:
            addend.shift_left(self._shift - other._shift)

        if self._sign is other_sign:
            self._mantissa.add(addend)
        else:
            order = self._mantissa.compare(addend)
            self._mantissa.subtract(addend)
            if order is Ordering.LESS:
                self._sign = other_sign
            elif order is Ordering.EQUAL:
                self._sign = Sign.POSITIVE

        self._normalize()
        return self

    def subtract(self, other: Operand) -> "SignedFloat":
        """self -= other: сложение с other противоположного знака."""
        negated = self._coerce(other).copy()
        negated._sign = negated._sign.flipped()
        return self.add(negated)

    def multiply(self, other: Operand) -> "SignedFloat":
        """
        self *= other (точно).

        ERROR · x → ERROR; INF · 0 → ERROR; INF · x → INF.
        Знак = XOR знаков.
        """
        other = self._coerce(other)

        if self.is_error() or other.is_error():
            self._set_error()
            return self
        if (self.is_infinite() and other.is_zero()) or (
            other.is_infinite() and self.is_zero()
        ):
            self._set_error()
            return self

        sign = self._sign.combined(other._sign)
        if self.is_infinite() or other.is_infinite():
            self._set_infinite(sign)
            return self

        other_shift = other._shift
        self._mantissa.multiply(other._mantissa)
        self._shift += other_shift
        self._sign = sign
        self._normalize()
        return self

    def divide(self, other: Operand) -> "SignedFloat":
        """
        self /= other.

        ERROR / x, INF / INF, 0 / 0 → ERROR
        x / 0 → INF, INF / x → INF, x / INF → 0 (знак = XOR)

        Если мантисса делителя не равна 1, выполняется деление Magnitude
        с точностью division_accuracy бит, расширенной на недостающую
        длину числителя. Результат приближённый, если деление не
        завершилось точно.
        """
        other = self._coerce(other)

        if self.is_error() or other.is_error():
            self._set_error()
            return self
        if (self.is_infinite() and other.is_infinite()) or (
            self.is_zero() and other.is_zero()
        ):
            self._set_error()
            return self

        sign = self._sign.combined(other._sign)
        if other.is_zero() or self.is_infinite():
            self._set_infinite(sign)
            return self
        if other.is_infinite():
            self._set_zero(sign)
            return self
        if self.is_zero():
            self._sign = sign
            return self

        divisor = other._mantissa
        self._shift -= other._shift
        if divisor != 1:
            deficit = divisor.bit_length() - self._mantissa.bit_length()
            accuracy = self._config.division_accuracy + max(0, deficit)
            self._shift += self._mantissa.divide(divisor, accuracy)

        self._sign = sign
        self._normalize()
        return self

    def truncate(self, significant_bits: int) -> "SignedFloat":
        """
        Усечение мантиссы до significant_bits старших бит (к нулю).

        Raises:
            ValueError: Если significant_bits < 1
        """
        if significant_bits < 1:
            raise ValueError(f"significant_bits must be positive, got {significant_bits}")

        excess = self._mantissa.bit_length() - significant_bits
        if self._status is FloatStatus.NORMAL and excess > 0:
            self._mantissa.shift_right(excess)
            self._shift -= excess
            self._normalize()
        return self

    def sqrt(self) -> Optional["SignedFloat"]:
        """Квадратный корень; None для отрицательных значений."""
        return square_root(self)

    # -------------------------------------------------------------------------
    # Конверсия
    # -------------------------------------------------------------------------

    def to_float64(self) -> float:
        """
        Конверсия в native double (усечение до 53 значащих бит).

        ERROR → signaling NaN, переполнение → ±inf, ниже субнормальных → ±0.
        """
        return self._to_ieee(DOUBLE)

    def to_float32(self) -> float:
        """Конверсия в native single precision (как to_float64, 24 значащих бита)."""
        return self._to_ieee(SINGLE)

    def to_string(self, precision: int = 0, scientific: bool = True) -> str:
        """Десятичное представление (см. format_decimal)."""
        return format_decimal(self, precision=precision, scientific=scientific)

    def __float__(self) -> float:
        return self.to_float64()

    def __str__(self) -> str:
        return format_decimal(self)

    def __repr__(self) -> str:
        return f"SignedFloat('{format_decimal(self)}')"

    def _to_ieee(self, layout: IeeeFormat) -> float:
        sign_bits = layout.sign_bit if self._sign is Sign.NEGATIVE else 0
        infinity_bits = sign_bits | (layout.exponent_mask << layout.fraction_bits)

        if self.is_error():
            bits = layout.signaling_nan
        elif self.is_infinite():
            bits = infinity_bits
        elif self.is_zero():
            bits = sign_bits
        else:
            exponent = self._exponent()
            if exponent > layout.bias:
                bits = infinity_bits
            elif exponent >= 1 - layout.bias:
                window = self._top_bits(layout.fraction_bits + 1)
                biased = exponent + layout.bias
                bits = (
                    sign_bits
                    | (biased << layout.fraction_bits)
                    | (window & layout.fraction_mask)
                )
            else:
                # Субнормальное: field = value · 2^(bias - 1 + fraction_bits)
                field = self._mantissa.copy()
                offset = layout.bias - 1 + layout.fraction_bits - self._shift
                if offset >= 0:
                    field.shift_left(offset)
                else:
                    field.shift_right(-offset)
                bits = sign_bits | int(field)

        (value,) = struct.unpack(layout.float_code, struct.pack(layout.bits_code, bits))
        return value

    def _top_bits(self, width: int) -> int:
        """Старшие width бит мантиссы (усечение младших)."""
        window = self._mantissa.copy()
        window.left_align()
        excess = window.bit_length() - width
        if excess >= 0:
            window.shift_right(excess)
        else:
            window.shift_left(-excess)
        return int(window)

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "SignedFloat":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.copy().add(operand)

    def __radd__(self, other: object) -> "SignedFloat":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return operand.copy().add(self)

    def __sub__(self, other: object) -> "SignedFloat":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.copy().subtract(operand)

    def __rsub__(self, other: object) -> "SignedFloat":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return operand.copy().subtract(self)

    def __mul__(self, other: object) -> "SignedFloat":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.copy().multiply(operand)

    def __rmul__(self, other: object) -> "SignedFloat":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return operand.copy().multiply(self)

    def __truediv__(self, other: object) -> "SignedFloat":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.copy().divide(operand)

    def __rtruediv__(self, other: object) -> "SignedFloat":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return operand.copy().divide(self)

    def __iadd__(self, other: object) -> "SignedFloat":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.add(operand)

    def __isub__(self, other: object) -> "SignedFloat":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.subtract(operand)

    def __imul__(self, other: object) -> "SignedFloat":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.multiply(operand)

    def __itruediv__(self, other: object) -> "SignedFloat":
        operand = self._operand(other)
        if operand is None:
            return NotImplemented
        return self.divide(operand)

    def __neg__(self) -> "SignedFloat":
        result = self.copy()
        if not result.is_error():
            result._sign = result._sign.flipped()
        return result

    def __pos__(self) -> "SignedFloat":
        return self.copy()

    def __abs__(self) -> "SignedFloat":
        result = self.copy()
        if not result.is_error():
            result._sign = Sign.POSITIVE
        return result

    # -------------------------------------------------------------------------
    # Внутреннее
    # -------------------------------------------------------------------------

    def _coerce(self, value: Operand) -> "SignedFloat":
        # Операнд наследует конфигурацию левого операнда
        return SignedFloat.coerce(value, config=self._config)

    def _operand(self, value: object) -> Optional["SignedFloat"]:
        """Приведение операнда оператора (None если тип не поддерживается)."""
        try:
            return self._coerce(value)  # type: ignore[arg-type]
        except TypeError:
            return None

    def _exponent(self) -> int:
        """Двоичная экспонента ненулевого конечного значения."""
        return self._mantissa.bit_length() - self._shift - 1

    def _normalize(self) -> None:
        """Выравнивание мантиссы вправо; нулевые и специальные значения → shift 0."""
        if self._status is not FloatStatus.NORMAL:
            self._mantissa.clear()
            self._shift = 0
            if self._status is FloatStatus.ERROR:
                self._sign = Sign.POSITIVE
            return

        if self._mantissa.is_zero():
            self._shift = 0
            return

        self._shift -= self._mantissa.right_align()

    def _set_error(self) -> None:
        self._status = FloatStatus.ERROR
        self._normalize()

    def _set_infinite(self, sign: Sign) -> None:
        self._status = FloatStatus.INFINITE
        self._sign = sign
        self._normalize()

    def _set_zero(self, sign: Sign) -> None:
        self._status = FloatStatus.NORMAL
        self._sign = sign
        self._mantissa.clear()
        self._normalize()
