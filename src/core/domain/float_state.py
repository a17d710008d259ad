"""
FloatState — Состояние и снапшот значения SignedFloat

Enum-типы знака, статуса и упорядочивания, а также immutable Pydantic модель
снапшота, используемая для диагностики и отображения внутреннего состояния.
Полная совместимость с JSON Schema (contracts/schema/float_snapshot.json).
"""

from enum import Enum
from typing import Annotated, Final

from pydantic import BaseModel, Field

# Максимальное значение одного блока Magnitude (32 бита)
BLOCK_MAX_VALUE: Final[int] = 0xFFFFFFFF


# =============================================================================
# ENUMS
# =============================================================================


class Sign(str, Enum):
    """Знак значения"""

    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"

    def flipped(self) -> "Sign":
        """Противоположный знак."""
        if self is Sign.POSITIVE:
            return Sign.NEGATIVE
        return Sign.POSITIVE

    def combined(self, other: "Sign") -> "Sign":
        """Знак произведения/частного: XOR знаков операндов."""
        if self is other:
            return Sign.POSITIVE
        return Sign.NEGATIVE


class FloatStatus(str, Enum):
    """
    Статус значения.

    NORMAL   — валидное конечное значение
    INFINITE — бесконечность (со знаком)
    ERROR    — ошибка разбора или NaN-результат вычисления (поглощающий)
    """

    NORMAL = "NORMAL"
    INFINITE = "INFINITE"
    ERROR = "ERROR"


class Ordering(str, Enum):
    """
    Результат сравнения.

    UNORDERED возможен только для значений со статусом ERROR.
    """

    LESS = "LESS"
    EQUAL = "EQUAL"
    GREATER = "GREATER"
    UNORDERED = "UNORDERED"

    def reversed(self) -> "Ordering":
        """Результат сравнения с переставленными операндами."""
        if self is Ordering.LESS:
            return Ordering.GREATER
        if self is Ordering.GREATER:
            return Ordering.LESS
        return self


# =============================================================================
# SNAPSHOT
# =============================================================================


Block = Annotated[int, Field(ge=0, le=BLOCK_MAX_VALUE)]


class FloatSnapshot(BaseModel):
    """
    Снапшот внутреннего состояния SignedFloat.

    value = (-1)^sign * sum(blocks[i] * 2^(32*i)) * 2^(-shift)   (при NORMAL)

    blocks упорядочены от младшего к старшему.
    """

    status: FloatStatus = Field(..., description="Статус значения")
    sign: Sign = Field(..., description="Знак")
    shift: int = Field(..., description="Смещение двоичной точки")
    blocks: list[Block] = Field(
        ..., min_length=1, description="Блоки мантиссы (младший первым)"
    )

    model_config = {"frozen": True}
