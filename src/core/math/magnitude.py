"""
Magnitude — Беззнаковое целое произвольной длины

Фундаментальный примитив для SignedFloat:
- Значение = Σ block[i] · 2^(32·i), блоки упорядочены от младшего к старшему
- Поразрядное сложение с переносом, вычитание через дополнение до двух
- Умножение сдвигами и сложениями (O(n²) по длине в битах)
- Деление с настраиваемым числом дополнительных бит точности
- Выравнивание (left/right align), длина в битах и десятичных цифрах

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Старших нулевых блоков нет, кроме единственного блока значения 0
   (каждая мутирующая операция завершается через _reduce)
2. Экземпляры не разделяют хранилище: copy() всегда глубокая
3. Обращение к несуществующему блоку → BlockIndexError

Никакой семантики знака или плавающей точки здесь нет.
"""

from typing import Final, Union

from src.core.domain.float_state import Ordering

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Ширина блока в битах
BLOCK_BITS: Final[int] = 32

# Маска одного блока
BLOCK_MASK: Final[int] = 0xFFFFFFFF

# Сколько десятичных цифр гарантированно помещается в один блок
DECIMAL_CHUNK_DIGITS: Final[int] = 9
DECIMAL_CHUNK_BASE: Final[int] = 10**DECIMAL_CHUNK_DIGITS

# ceil(log10(2) · 2^32): fixed-point множитель для оценки log10 по длине в битах
_LOG10_2_FIXED: Final[int] = 1292913987
_LOG10_2_FIXED_BITS: Final[int] = 32

# Таблица De Bruijn для подсчёта младших нулевых бит блока за O(1)
# SEE: https://graphics.stanford.edu/~seander/bithacks.html#ZerosOnRightMultLookup
_DEBRUIJN_MULTIPLIER: Final[int] = 0x077CB531
_DEBRUIJN_POSITIONS: Final[tuple[int, ...]] = (
    0, 1, 28, 2, 29, 14, 24, 3, 30, 22, 20, 15, 25, 17, 4, 8,
    31, 27, 13, 23, 21, 19, 16, 7, 26, 12, 18, 6, 11, 5, 10, 9,
)

_DIGITS: Final[frozenset[str]] = frozenset("0123456789")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class BlockIndexError(IndexError):
    """
    Обращение к несуществующему блоку Magnitude.

    Ошибка программирования: вызывающий код вышел за пределы block_count.
    """


# =============================================================================
# MAGNITUDE
# =============================================================================


class Magnitude:
    """
    Неотрицательное целое произвольной длины из 32-битных блоков.

    Мутирующие операции (add, subtract, multiply, divide, shift_*, *_align)
    изменяют объект на месте и возвращают self (или служебное значение).
    Операторы +, -, *, <<, >> возвращают новый объект.

    Examples:
        >>> m = Magnitude.from_digits("999999999999999999999999999999")
        >>> m.block_count
        4
        >>> (m + Magnitude(1)).to_decimal_string()
        '1000000000000000000000000000000'
    """

    __slots__ = ("_blocks",)

    def __init__(self, value: int = 0):
        """
        Args:
            value: Неотрицательное целое (обычно беззнаковое 64-битное)

        Raises:
            TypeError: Если value не int
            ValueError: Если value < 0
        """
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"Magnitude requires an int, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"Magnitude value must be non-negative, got {value}")

        self._blocks: list[int] = []
        while value:
            self._blocks.append(value & BLOCK_MASK)
            value >>= BLOCK_BITS
        if not self._blocks:
            self._blocks.append(0)

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_digits(cls, digits: str) -> "Magnitude":
        """
        Построение из строки десятичных цифр.

        Строка обрабатывается кусками по DECIMAL_CHUNK_DIGITS цифр:
        result = result · 10^len(chunk) + chunk (умножение и сложение поблочно).

        Args:
            digits: Непустая строка из символов 0-9

        Returns:
            Точное значение

        Raises:
            ValueError: Если строка пуста или содержит не-цифры
        """
        if not digits or not _DIGITS.issuperset(digits):
            raise ValueError(f"Expected a non-empty decimal digit string, got {digits!r}")

        result = cls()
        head = len(digits) % DECIMAL_CHUNK_DIGITS or DECIMAL_CHUNK_DIGITS
        result.add_small(int(digits[:head]))

        for start in range(head, len(digits), DECIMAL_CHUNK_DIGITS):
            result.multiply_small(DECIMAL_CHUNK_BASE)
            result.add_small(int(digits[start:start + DECIMAL_CHUNK_DIGITS]))

        return result

    @classmethod
    def from_blocks(cls, blocks: "list[int] | tuple[int, ...]") -> "Magnitude":
        """
        Построение из последовательности блоков (младший первым).

        Raises:
            ValueError: Если блок вне диапазона [0, 2^32) или список пуст
        """
        if not blocks:
            raise ValueError("Magnitude requires at least one block")
        for block in blocks:
            if not 0 <= block <= BLOCK_MASK:
                raise ValueError(f"Block value out of range: {block}")

        result = cls()
        result._blocks = list(blocks)
        result._reduce()
        return result

    @classmethod
    def power_of_ten(cls, exponent: int) -> "Magnitude":
        """Точное значение 10^exponent."""
        if exponent < 0:
            raise ValueError(f"exponent must be non-negative, got {exponent}")

        result = cls(1)
        full_chunks, rest = divmod(exponent, DECIMAL_CHUNK_DIGITS)
        for _ in range(full_chunks):
            result.multiply_small(DECIMAL_CHUNK_BASE)
        if rest:
            result.multiply_small(10**rest)
        return result

    def copy(self) -> "Magnitude":
        """Глубокая копия."""
        result = Magnitude()
        result._blocks = list(self._blocks)
        return result

    def __copy__(self) -> "Magnitude":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "Magnitude":
        return self.copy()

    # -------------------------------------------------------------------------
    # Доступ к блокам (capability interface для SignedFloat)
    # -------------------------------------------------------------------------

    @property
    def block_count(self) -> int:
        """Число блоков (для нуля — 1)."""
        return len(self._blocks)

    @property
    def blocks(self) -> tuple[int, ...]:
        """Блоки от младшего к старшему (read-only)."""
        return tuple(self._blocks)

    @property
    def top_block(self) -> int:
        """Старший блок."""
        return self._blocks[-1]

    def block(self, index: int) -> int:
        """
        Блок по индексу.

        Raises:
            BlockIndexError: Если index вне [0, block_count)
        """
        if not 0 <= index < len(self._blocks):
            raise BlockIndexError(
                f"Block index {index} out of range for {len(self._blocks)} block(s)"
            )
        return self._blocks[index]

    def is_zero(self) -> bool:
        return len(self._blocks) == 1 and self._blocks[0] == 0

    def clear(self) -> None:
        """Сброс значения в 0."""
        self._blocks = [0]

    def get_bit(self, index: int) -> int:
        """
        Значение бита (0 или 1).

        Raises:
            BlockIndexError: Если бит лежит за пределами существующих блоков
        """
        block_index, offset = divmod(index, BLOCK_BITS)
        return (self.block(block_index) >> offset) & 1

    def set_bit(self, index: int, value: int) -> None:
        """
        Установка бита в 1 или 0. При необходимости добавляются старшие блоки.
        """
        if index < 0:
            raise ValueError(f"Bit index must be non-negative, got {index}")

        block_index, offset = divmod(index, BLOCK_BITS)
        blocks = self._blocks

        if value:
            if block_index >= len(blocks):
                blocks.extend([0] * (block_index - len(blocks) + 1))
            blocks[block_index] |= 1 << offset
        elif block_index < len(blocks):
            blocks[block_index] &= ~(1 << offset) & BLOCK_MASK
            self._reduce()

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def compare(self, other: "Magnitude") -> Ordering:
        """
        Сравнение величин.

        Сначала по числу блоков (старшие нулевые блоки всегда удалены),
        затем поблочно от старшего к младшему.

        Returns:
            Ordering.LESS, Ordering.EQUAL или Ordering.GREATER
        """
        own = self._blocks
        theirs = other._blocks

        if len(own) != len(theirs):
            return Ordering.LESS if len(own) < len(theirs) else Ordering.GREATER

        for i in range(len(own) - 1, -1, -1):
            if own[i] != theirs[i]:
                return Ordering.LESS if own[i] < theirs[i] else Ordering.GREATER

        return Ordering.EQUAL

    def __eq__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self._blocks == operand._blocks

    __hash__ = None  # type: ignore[assignment]  # mutable

    def __lt__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.compare(operand) is Ordering.LESS

    def __le__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.compare(operand) is not Ordering.GREATER

    def __gt__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.compare(operand) is Ordering.GREATER

    def __ge__(self, other: object) -> bool:
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.compare(operand) is not Ordering.LESS

    def __bool__(self) -> bool:
        return not self.is_zero()

    # -------------------------------------------------------------------------
    # Сложение и вычитание
    # -------------------------------------------------------------------------

    def add(self, other: "Magnitude") -> "Magnitude":
        """
        self += other (поблочное сложение с переносом).

        Сложение с равным значением (x += x) выполняется как сдвиг влево на 1.
        """
        if other is self or self == other:
            return self.shift_left(1)

        blocks = self._blocks
        addend = other._blocks
        if len(blocks) < len(addend):
            blocks.extend([0] * (len(addend) - len(blocks)))

        carry = 0
        for i, block in enumerate(addend):
            total = blocks[i] + block + carry
            blocks[i] = total & BLOCK_MASK
            carry = total >> BLOCK_BITS

        self._propagate_carry(len(addend), carry)
        return self

    def add_small(self, value: int) -> "Magnitude":
        """self += value, где value помещается в один блок."""
        _check_block_value(value)
        self._propagate_carry(0, value)
        return self

    def subtract(self, other: "Magnitude") -> "Magnitude":
        """
        self = |self - other|.

        Меньшее значение инвертируется в пределах длины большего (в битах),
        к сумме добавляется 1 (дополнение до двух), затем сбрасывается бит
        переноса. Результат не зависит от порядка операндов.
        """
        order = self.compare(other)
        if order is Ordering.EQUAL:
            self.clear()
            return self
        if other.is_zero():
            return self
        if self.is_zero():
            self._blocks = list(other._blocks)
            return self

        if order is Ordering.LESS:
            complement = self.copy()
            self._blocks = list(other._blocks)
        else:
            complement = other.copy()

        bits = self.bit_length()
        complement.invert(bits)

        self.add(complement)
        self.add_small(1)

        # 2^bits + (larger - smaller): убираем бит переноса
        if self.bit_length() > bits:
            self.set_bit(bits, 0)

        self._reduce()
        return self

    def subtract_small(self, value: int) -> "Magnitude":
        """self = |self - value|, где value помещается в один блок."""
        _check_block_value(value)
        return self.subtract(Magnitude(value))

    def invert(self, bits: int) -> None:
        """
        Инвертирование младших bits бит (служебная операция для subtract).

        Если bits превышает текущую длину, добавляются блоки.
        """
        if bits < 0:
            raise ValueError(f"bits must be non-negative, got {bits}")

        whole, rest = divmod(bits, BLOCK_BITS)
        needed = whole + (1 if rest else 0)
        blocks = self._blocks
        if len(blocks) < needed:
            blocks.extend([0] * (needed - len(blocks)))

        for i in range(whole):
            blocks[i] ^= BLOCK_MASK
        if rest:
            blocks[whole] ^= (1 << rest) - 1

        self._reduce()

    # -------------------------------------------------------------------------
    # Умножение и деление
    # -------------------------------------------------------------------------

    def multiply(self, other: "Magnitude") -> "Magnitude":
        """
        self *= other.

        Сдвиг-и-сложение по установленным битам множителя:
        O(bit_length(other)) поблочных сложений.
        """
        multiplier = other.copy() if other is self else other
        addend = self.copy()
        self.clear()

        pending_shift = 0
        for i in range(multiplier.bit_length()):
            if multiplier.get_bit(i):
                addend.shift_left(pending_shift)
                self.add(addend)
                pending_shift = 1
            else:
                pending_shift += 1

        return self

    def multiply_small(self, value: int) -> "Magnitude":
        """self *= value, где value помещается в один блок (поблочный MAC)."""
        _check_block_value(value)

        blocks = self._blocks
        carry = 0
        for i, block in enumerate(blocks):
            product = block * value + carry
            blocks[i] = product & BLOCK_MASK
            carry = product >> BLOCK_BITS
        if carry:
            blocks.append(carry)

        self._reduce()
        return self

    def divide(self, denominator: "Magnitude", accuracy: int) -> int:
        """
        self = self · 2^scale / denominator (усечённое частное).

        Алгоритм:
            1. Делимое сдвигается влево на accuracy бит
            2. Пока делимое ≥ denominator: находится наибольшая позиция i,
               при которой denominator << i ≤ делимого (по разнице длин
               в битах с коррекцией на один шаг), бит i частного
               устанавливается, denominator << i вычитается
            3. Если остаток ненулевой, остаток и частное сдвигаются на 1 бит
               и шаг 2 повторяется; не более accuracy дополнительных раундов

        Args:
            denominator: Делитель (ненулевой)
            accuracy: Дополнительные биты точности

        Returns:
            scale — итоговый масштаб: self содержит частное · 2^scale.
            Результат точен, если остаток обнулился до исчерпания раундов.

        Raises:
            ZeroDivisionError: Если denominator равен нулю
        """
        if denominator.is_zero():
            raise ZeroDivisionError("Magnitude division by zero")
        if accuracy < 0:
            raise ValueError(f"accuracy must be non-negative, got {accuracy}")
        if denominator is self:
            denominator = denominator.copy()

        quotient = Magnitude()
        scale = accuracy
        extra_rounds = 0
        denominator_bits = denominator.bit_length()

        self.shift_left(accuracy)

        while True:
            while self >= denominator:
                position = self.bit_length() - denominator_bits
                step = denominator << position
                if step > self:
                    position -= 1
                    step.shift_right(1)

                quotient.set_bit(position, 1)
                self.subtract(step)

            if self.is_zero() or extra_rounds >= accuracy:
                break

            self.shift_left(1)
            quotient.shift_left(1)
            scale += 1
            extra_rounds += 1

        self._blocks = quotient._blocks
        return scale

    def _divmod_small(self, divisor: int) -> int:
        """self //= divisor на месте, возвращает остаток (divisor в пределах блока)."""
        if divisor == 0:
            raise ZeroDivisionError("Magnitude division by zero")
        _check_block_value(divisor)

        blocks = self._blocks
        remainder = 0
        for i in range(len(blocks) - 1, -1, -1):
            current = (remainder << BLOCK_BITS) | blocks[i]
            blocks[i], remainder = divmod(current, divisor)

        self._reduce()
        return remainder

    # -------------------------------------------------------------------------
    # Сдвиги и выравнивание
    # -------------------------------------------------------------------------

    def shift_left(self, bits: int) -> "Magnitude":
        """
        self <<= bits.

        Целые блоки вставляются в начало, остаток сдвига переносится
        между соседними блоками.
        """
        if bits < 0:
            raise ValueError(f"Shift must be non-negative, got {bits}")
        if bits == 0 or self.is_zero():
            return self

        whole, rest = divmod(bits, BLOCK_BITS)
        blocks = self._blocks

        if rest:
            carry = 0
            for i, block in enumerate(blocks):
                shifted = (block << rest) | carry
                blocks[i] = shifted & BLOCK_MASK
                carry = shifted >> BLOCK_BITS
            if carry:
                blocks.append(carry)

        if whole:
            blocks[0:0] = [0] * whole

        return self

    def shift_right(self, bits: int) -> "Magnitude":
        """
        self >>= bits.

        Целые блоки удаляются из начала, остаток сдвига переносится
        между соседними блоками.
        """
        if bits < 0:
            raise ValueError(f"Shift must be non-negative, got {bits}")

        whole, rest = divmod(bits, BLOCK_BITS)
        blocks = self._blocks

        if whole >= len(blocks):
            self.clear()
            return self
        if whole:
            del blocks[:whole]

        if rest:
            last = len(blocks) - 1
            for i in range(last):
                carried = (blocks[i + 1] << (BLOCK_BITS - rest)) & BLOCK_MASK
                blocks[i] = (blocks[i] >> rest) | carried
            blocks[last] >>= rest

        self._reduce()
        return self

    def left_align(self) -> int:
        """
        Сдвиг влево до заполнения старшего бита старшего блока.

        Используется для извлечения окна фиксированной ширины (конверсия
        в native float/double).

        Returns:
            Величина сдвига (0 для нуля)
        """
        if self.is_zero():
            return 0

        shift = BLOCK_BITS - self._blocks[-1].bit_length()
        self.shift_left(shift)
        return shift

    def right_align(self) -> int:
        """
        Сдвиг вправо до установленного бита 0.

        Нулевые блоки пропускаются целиком, затем младшие нули первого
        ненулевого блока считаются через таблицу De Bruijn.

        Returns:
            Общее число удалённых бит (0 для нуля)
        """
        if self.is_zero():
            return 0

        empty_blocks = 0
        while self._blocks[empty_blocks] == 0:
            empty_blocks += 1
        if empty_blocks:
            del self._blocks[:empty_blocks]

        lowest = self._blocks[0]
        isolated = ((lowest & -lowest) * _DEBRUIJN_MULTIPLIER) & BLOCK_MASK
        trailing = _DEBRUIJN_POSITIONS[isolated >> 27]
        self.shift_right(trailing)

        return trailing + empty_blocks * BLOCK_BITS

    def split(self, bits: int) -> tuple["Magnitude", "Magnitude"]:
        """
        Разделение по границе bits: (self >> bits, младшие bits бит).

        Returns:
            (whole, fraction) — новые объекты, self не изменяется
        """
        whole = self >> bits

        fraction = self.copy()
        block_index, offset = divmod(bits, BLOCK_BITS)
        blocks = fraction._blocks
        del blocks[block_index + (1 if offset else 0):]
        if offset and len(blocks) > block_index:
            blocks[block_index] &= (1 << offset) - 1
        if not blocks:
            blocks.append(0)
        fraction._reduce()

        return whole, fraction

    # -------------------------------------------------------------------------
    # Логарифмы и десятичное представление
    # -------------------------------------------------------------------------

    def bit_length(self) -> int:
        """Позиция старшего установленного бита + 1 ("log2"); 0 для нуля."""
        return (len(self._blocks) - 1) * BLOCK_BITS + self._blocks[-1].bit_length()

    def decimal_digits(self) -> int:
        """
        Число десятичных цифр ("log10" + 1); 1 для нуля.

        Оценка через длину в битах и fixed-point множитель log10(2),
        затем коррекция по ближайшей степени десяти.
        """
        if self.is_zero():
            return 1

        estimate = (self.bit_length() * _LOG10_2_FIXED) >> _LOG10_2_FIXED_BITS
        bound = Magnitude.power_of_ten(estimate)
        while estimate > 0 and self < bound:
            estimate -= 1
            bound._divmod_small(10)

        return estimate + 1

    def to_decimal_string(self) -> str:
        """Точное десятичное представление."""
        if self.is_zero():
            return "0"

        work = self.copy()
        chunks: list[int] = []
        while not work.is_zero():
            chunks.append(work._divmod_small(DECIMAL_CHUNK_BASE))

        head = str(chunks[-1])
        return head + "".join(f"{chunk:09d}" for chunk in reversed(chunks[:-1]))

    def __int__(self) -> int:
        value = 0
        for block in reversed(self._blocks):
            value = (value << BLOCK_BITS) | block
        return value

    def __str__(self) -> str:
        return self.to_decimal_string()

    def __repr__(self) -> str:
        return f"Magnitude({self.to_decimal_string()})"

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __iadd__(self, other: object) -> "Magnitude":
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.add(operand)

    def __isub__(self, other: object) -> "Magnitude":
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.subtract(operand)

    def __imul__(self, other: object) -> "Magnitude":
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.multiply(operand)

    def __ilshift__(self, bits: int) -> "Magnitude":
        return self.shift_left(bits)

    def __irshift__(self, bits: int) -> "Magnitude":
        return self.shift_right(bits)

    def __add__(self, other: object) -> "Magnitude":
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.copy().add(operand)

    def __sub__(self, other: object) -> "Magnitude":
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.copy().subtract(operand)

    def __mul__(self, other: object) -> "Magnitude":
        operand = _operand(other)
        if operand is None:
            return NotImplemented
        return self.copy().multiply(operand)

    def __lshift__(self, bits: int) -> "Magnitude":
        return self.copy().shift_left(bits)

    def __rshift__(self, bits: int) -> "Magnitude":
        return self.copy().shift_right(bits)

    # -------------------------------------------------------------------------
    # Внутреннее
    # -------------------------------------------------------------------------

    def _reduce(self) -> None:
        """Удаление старших нулевых блоков (кроме последнего)."""
        blocks = self._blocks
        while len(blocks) > 1 and blocks[-1] == 0:
            blocks.pop()

    def _propagate_carry(self, start: int, carry: int) -> None:
        """Прибавление carry начиная с блока start."""
        blocks = self._blocks
        i = start
        while carry:
            if i == len(blocks):
                blocks.append(carry)
                return
            total = blocks[i] + carry
            blocks[i] = total & BLOCK_MASK
            carry = total >> BLOCK_BITS
            i += 1


# =============================================================================
# HELPERS
# =============================================================================


def _check_block_value(value: int) -> None:
    if not 0 <= value <= BLOCK_MASK:
        raise ValueError(f"Value must fit in a single block, got {value}")


def _operand(value: object) -> Union[Magnitude, None]:
    """Приведение операнда оператора к Magnitude (None если тип не поддержан)."""
    if isinstance(value, Magnitude):
        return value
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return Magnitude(value)
    return None
