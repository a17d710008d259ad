"""
ArithmeticConfig — Конфигурация точности и ресурсных ограничений

Единственный источник лимитов итераций и точности для SignedFloat:
- CONSTRUCTOR_MAX_ITERATIONS: бюджет бит дробной части при разборе строки
- DIVISION_ACCURACY: дополнительные биты точности при делении
- SQRT_ACCURACY_INCREASE_RATIO: допустимый рост мантиссы в sqrt
- SQRT_ACCURACY: порог сходимости sqrt (через native double)
- DECIMAL_EXPONENT_LIMIT: максимальный модуль десятичной экспоненты

Immutable Pydantic модель. Значение конфигурации передаётся в каждый
конструктор SignedFloat явно; глобальное состояние не изменяется.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Final, Mapping

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# =============================================================================
# DEFAULTS
# =============================================================================

# Максимум бит дробной части на одну десятичную цифру дробной части.
# "0.1" → не более 20 бит, "0.01234" → не более 100 бит
CONSTRUCTOR_MAX_ITERATIONS: Final[int] = 20

# Дополнительные биты точности частного при неточном делении
DIVISION_ACCURACY: Final[int] = 50

# Во сколько раз число блоков мантиссы может вырасти в ходе sqrt
SQRT_ACCURACY_INCREASE_RATIO: Final[int] = 4

# Наименьший положительный нормализованный double
SQRT_ACCURACY: Final[float] = sys.float_info.min

# Модуль десятичной экспоненты, выше которого значение насыщается
# до бесконечности (или до нуля при отрицательной экспоненте)
DECIMAL_EXPONENT_LIMIT: Final[int] = 100_000


# =============================================================================
# MODEL
# =============================================================================


class ArithmeticConfig(BaseModel):
    """
    Лимиты точности и ресурсов для арифметики SignedFloat.

    Все поля строго положительные. Модель frozen: изменить лимиты можно
    только созданием нового экземпляра (model_copy(update=...)).
    """

    constructor_max_iterations: int = Field(
        CONSTRUCTOR_MAX_ITERATIONS,
        gt=0,
        description="Бит дробной части на десятичную цифру при разборе строки",
    )
    division_accuracy: int = Field(
        DIVISION_ACCURACY,
        gt=0,
        description="Дополнительные биты точности частного",
    )
    sqrt_accuracy_increase_ratio: int = Field(
        SQRT_ACCURACY_INCREASE_RATIO,
        gt=0,
        description="Допустимый рост числа блоков мантиссы в sqrt",
    )
    sqrt_accuracy: float = Field(
        SQRT_ACCURACY,
        gt=0,
        description="Порог сходимости sqrt (разность итераций как double)",
    )
    decimal_exponent_limit: int = Field(
        DECIMAL_EXPONENT_LIMIT,
        gt=0,
        description="Максимальный модуль десятичной экспоненты при разборе",
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ArithmeticConfig":
        """
        Создание конфигурации из словаря с проверкой JSON Schema контракта.

        Args:
            data: Словарь с полями конфигурации (отсутствующие → default)

        Returns:
            Проверенный экземпляр ArithmeticConfig

        Raises:
            jsonschema.ValidationError: Если данные нарушают контракт
            pydantic.ValidationError: Если значения не проходят валидацию модели
        """
        # Локальный импорт: contracts зависит от domain, не наоборот
        from src.core.contracts.validators import validate_arithmetic_config

        payload = dict(data)
        validate_arithmetic_config(payload)
        return cls.model_validate(payload)


# Конфигурация по умолчанию
DEFAULT_CONFIG: Final[ArithmeticConfig] = ArithmeticConfig()


def load_arithmetic_config(path: str | Path) -> ArithmeticConfig:
    """
    Загрузка конфигурации из JSON файла.

    Args:
        path: Путь к JSON файлу

    Returns:
        Проверенный экземпляр ArithmeticConfig

    Raises:
        FileNotFoundError: Если файл не найден
        json.JSONDecodeError: Если файл не является валидным JSON
        jsonschema.ValidationError: Если данные нарушают контракт
    """
    config_path = Path(path)
    with open(config_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    config = ArithmeticConfig.from_mapping(data)
    logger.debug("Loaded arithmetic config from %s: %s", config_path, config)
    return config
