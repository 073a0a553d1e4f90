"""
Numerical Safeguards — безопасные примитивы для денежных сумм

Модуль обеспечивает численную устойчивость расчётов по таблице неттинга:
- Проверка NaN/Inf для сумм требований
- Epsilon-сравнение векторов нетто-позиций
- Компенсированное суммирование для вектора нетто-позиций
- Валидация параметров конфигурации

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf никогда не попадают в граф требований
2. Float сравнения всегда учитывают машинную точность
3. Переполнение float даёт inf, а не исключение
"""

import math
from collections.abc import Iterable
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для денежных сумм (одна единица валюты требования)
EPS_AMOUNT: Final[float] = 1e-9

# Относительная толерантность для сравнения float
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное
    """
    return math.isfinite(value)


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def vectors_close(
    a: list[float],
    b: list[float],
    abs_tol: float = EPS_AMOUNT,
) -> bool:
    """
    Поэлементное сравнение двух векторов (например, нетто-позиций).

    Векторы разной длины никогда не равны.
    """
    if len(a) != len(b):
        return False
    return all(math.isclose(x, y, rel_tol=EPS_FLOAT_COMPARE_REL, abs_tol=abs_tol) for x, y in zip(a, b))


# =============================================================================
# СУММИРОВАНИЕ
# =============================================================================


def stable_sum(values: Iterable[float]) -> float:
    """
    Компенсированная сумма (math.fsum).

    Сумма нетто-позиций должна быть равна нулю; наивное суммирование
    накапливает ошибку округления на больших таблицах.

    math.fsum бросает OverflowError / ValueError, если сумма выходит за
    пределы float или слагаемые содержат inf; в этом случае результат
    совпадает с обычной float-суммой (inf или nan).

    Examples:
        >>> stable_sum([1e16, 1.0, -1e16])
        1.0
        >>> stable_sum([1e308, 1e308])
        inf
    """
    values = list(values)
    try:
        return math.fsum(values)
    except (OverflowError, ValueError):
        return sum(values, 0.0)


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_positive(value: float, name: str, eps: float = 0.0) -> None:
    """
    Валидация, что значение положительное.

    Raises:
        ValueError: Если value <= eps или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= eps:
        raise ValueError(f"{name} must be positive (> {eps}), got {value}")
