"""
Square Root — Квадратный корень методом Ньютона

Аргумент сначала масштабируется на 4^k (изменением shift, точно) так,
чтобы f ∈ [1, 4); корень результата умножается обратно на 2^k.

x₀ = f
xₙ₊₁ = xₙ - (xₙ² - f) / (2·xₙ)

Поправка усекается до config.division_accuracy значащих бит, поэтому
мантисса растёт ограниченно на каждой итерации.

Остановка (что наступит раньше):
1. |xₙ₊₁ - xₙ| как native double < config.sqrt_accuracy → xₙ
2. Число блоков мантиссы xₙ₊₁ превысило
   блоки(f) · config.sqrt_accuracy_increase_ratio → xₙ
   (проверяется начиная со второй итерации)

Фиксированного лимита итераций нет.
"""

import logging
from typing import TYPE_CHECKING, Optional

from src.core.domain.float_state import Sign

if TYPE_CHECKING:
    from src.core.math.signed_float import SignedFloat

logger = logging.getLogger(__name__)


def square_root(value: "SignedFloat") -> Optional["SignedFloat"]:
    """
    Квадратный корень.

    Args:
        value: Подкоренное значение

    Returns:
        - None для отрицательных ненулевых значений (включая -inf):
          результат не определён, это не ERROR
        - Копия value для ERROR, ±0 и +inf
        - Иначе приближение корня

    Examples:
        >>> root = square_root(SignedFloat.from_int(4))
        >>> float(root)
        2.0
    """
    if value.is_error() or value.is_zero():
        return value.copy()
    if value.sign is Sign.NEGATIVE:
        return None
    if value.is_infinite():
        return value.copy()

    cls = type(value)
    config = value.config

    # value = scaled · 4^half, scaled ∈ [1, 4)
    half = (value.mantissa.bit_length() - value.shift - 1) // 2
    scaled = cls(Sign.POSITIVE, value.mantissa, value.shift + 2 * half, config=config)

    root = _newton(scaled)
    return cls(Sign.POSITIVE, root.mantissa, root.shift - half, config=config)


def _newton(value: "SignedFloat") -> "SignedFloat":
    config = value.config
    block_limit = value.mantissa_blocks * config.sqrt_accuracy_increase_ratio

    current = value.copy()
    iterations = 0
    while True:
        iterations += 1

        correction = current * current - value
        correction.divide(current * 2)
        correction.truncate(config.division_accuracy)
        following = current - correction

        if abs(float(following - current)) < config.sqrt_accuracy:
            logger.debug("sqrt converged after %d iterations", iterations)
            return current

        if iterations > 1 and following.mantissa_blocks > block_limit:
            logger.debug(
                "sqrt stopped after %d iterations: mantissa exceeds %d blocks",
                iterations,
                block_limit,
            )
            return current

        current = following
