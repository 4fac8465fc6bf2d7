"""
Numerical Safeguards — Tolerance Policy & Error Taxonomy

Модуль задаёт единую политику численной толерантности для всех векторов и матриц:
- Epsilon для проверок на ноль, вырожденность и приближённое равенство
- Округление до single precision (IEEE-754 binary32)
- Guard-функции, которые поднимают типизированные исключения
- Ключи epsilon-сетки для согласованного хеширования

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все типы используют один и тот же EPSILON, иначе равенство и обратная матрица
   становятся несогласованными между типами
2. NaN/Inf никогда не попадают в компоненты (отклоняются при округлении)
3. Деление на ~0, нормализация ~0 вектора и обращение вырожденной матрицы
   всегда приводят к исключению, а не к fallback значению
4. Все операции детерминированы и воспроизводимы
"""

import math
import numbers
import operator
from typing import Final

import numpy as np

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Порог, ниже которого модуль float считается нулём.
# Используется для деления на скаляр, нормализации, проверки вырожденности
# и сравнения компонент на равенство
EPSILON: Final[float] = 1e-7

# Максимальное конечное значение binary32
FLOAT32_MAX: Final[float] = float(np.finfo(np.float32).max)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class LinearAlgebraError(Exception):
    """Базовое исключение библиотеки."""


class InvalidArgumentError(LinearAlgebraError, ValueError):
    """
    Операнд отсутствует, имеет неверный тип или неверную форму.

    Примеры: None вместо вектора, Vector2 вместо Vector3,
    массив 2x2 при создании Matrix3, NaN в компоненте.
    """


class IndexOutOfBoundsError(LinearAlgebraError, IndexError):
    """Индекс строки или столбца вне диапазона [0, N)."""


class DivisionByZeroError(LinearAlgebraError, ZeroDivisionError):
    """Деление на скаляр, модуль которого меньше epsilon."""


class DegenerateVectorError(LinearAlgebraError, ArithmeticError):
    """Нормализация вектора, длина которого меньше epsilon."""


class SingularMatrixError(LinearAlgebraError, ArithmeticError):
    """
    Обращение вырожденной матрицы (|det| < epsilon).

    Результат не создаётся: ни NaN, ни Inf не возвращаются.
    """


# =============================================================================
# SINGLE PRECISION
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


def to_float32(value: float) -> float:
    """
    Округление значения до single precision.

    Все компоненты векторов и матриц хранятся как binary32, но
    возвращаются как обычный Python float.

    Args:
        value: Исходное значение (int или float)

    Returns:
        Ближайшее binary32 значение

    Raises:
        InvalidArgumentError: Если значение не число, NaN/Inf
            или выходит за диапазон binary32

    Examples:
        >>> to_float32(1.0)
        1.0
        >>> to_float32(0.1)
        0.10000000149011612
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgumentError(f"value must be a real number, got {type(value).__name__}")

    # Переполнение binary32 даёт Inf и отклоняется ниже
    try:
        with np.errstate(over="ignore"):
            rounded = float(np.float32(value))
    except OverflowError as exc:
        raise InvalidArgumentError(f"value {value} is out of single-precision range") from exc

    if not is_valid_float(rounded):
        raise InvalidArgumentError(
            f"value must be a finite single-precision float, got {value}"
        )

    return rounded


# =============================================================================
# EPSILON-СРАВНЕНИЯ
# =============================================================================


def is_non_zero(value: float, eps: float = EPSILON) -> bool:
    """
    Проверка, что значение отлично от нуля с учётом толерантности.

    Args:
        value: Проверяемое значение
        eps: Абсолютная толерантность (default: EPSILON)

    Returns:
        True если abs(value) >= eps
    """
    return abs(value) >= eps


def approximately_equal(a: float, b: float, eps: float = EPSILON) -> bool:
    """
    Приближённое равенство двух float.

    Используется покомпонентно для равенства векторов и матриц.

    Args:
        a: Первое значение
        b: Второе значение
        eps: Абсолютная толерантность (default: EPSILON)

    Returns:
        True если abs(a - b) < eps

    Examples:
        >>> approximately_equal(1.0, 1.0 + 1e-8)
        True
        >>> approximately_equal(1.0, 1.001)
        False
    """
    return abs(a - b) < eps


def epsilon_grid_key(value: float, eps: float = EPSILON) -> int:
    """
    Номер ячейки epsilon-сетки, в которую попадает значение.

    Используется для хеширования: значения, округлённые к одной ячейке,
    дают одинаковый хеш. Половина шага округляется вверх: floor(value / eps + 0.5).

    ВАЖНО: два значения, равные с точностью до eps, могут лежать по разные
    стороны границы ячейки и получить разные ключи. Хеш согласован с
    приближённым равенством только в пределах одной ячейки.

    Args:
        value: Значение для квантования
        eps: Шаг сетки (default: EPSILON)

    Returns:
        Целое число шагов eps

    Raises:
        ValueError: Если eps <= 0

    Examples:
        >>> epsilon_grid_key(1.0, 0.5)
        2
        >>> epsilon_grid_key(-0.25, 0.5)
        0
        >>> epsilon_grid_key(-0.3, 0.5)
        -1
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")

    return math.floor(value / eps + 0.5)


# =============================================================================
# GUARDS
# =============================================================================


def require_non_zero(value: float, eps: float = EPSILON) -> None:
    """
    Guard для деления на скаляр.

    Args:
        value: Делитель
        eps: Минимальный допустимый модуль (default: EPSILON)

    Raises:
        DivisionByZeroError: Если abs(value) < eps
    """
    if not is_non_zero(value, eps):
        raise DivisionByZeroError(f"Division by zero: |{value}| < {eps}")


def require_non_zero_length(length: float, eps: float = EPSILON) -> None:
    """
    Guard перед нормализацией вектора.

    Args:
        length: Длина вектора
        eps: Минимальная допустимая длина (default: EPSILON)

    Raises:
        DegenerateVectorError: Если length < eps
    """
    if length < eps:
        raise DegenerateVectorError(
            f"Cannot normalize zero-length vector (length {length} < {eps})"
        )


def require_non_singular(determinant: float, eps: float = EPSILON) -> None:
    """
    Guard перед обращением матрицы.

    Args:
        determinant: Определитель матрицы
        eps: Минимальный допустимый модуль определителя (default: EPSILON)

    Raises:
        SingularMatrixError: Если abs(determinant) < eps
    """
    if abs(determinant) < eps:
        raise SingularMatrixError(
            f"Matrix is singular (determinant {determinant}), cannot compute inverse"
        )


def require_operand(value: object, expected_type: type | tuple[type, ...], name: str) -> None:
    """
    Guard для операнда бинарной операции.

    Args:
        value: Операнд
        expected_type: Ожидаемый тип (или кортеж типов)
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        InvalidArgumentError: Если value равен None или имеет другой тип
    """
    if value is None:
        raise InvalidArgumentError(f"{name} cannot be None")

    if not isinstance(value, expected_type):
        if isinstance(expected_type, tuple):
            expected = " or ".join(t.__name__ for t in expected_type)
        else:
            expected = expected_type.__name__
        raise InvalidArgumentError(
            f"{name} must be {expected}, got {type(value).__name__}"
        )


def require_index(index: int, size: int, name: str) -> int:
    """
    Guard для индекса строки/столбца.

    Args:
        index: Проверяемый индекс
        size: Размер измерения (N)
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Индекс как int

    Raises:
        InvalidArgumentError: Если index не целое число
        IndexOutOfBoundsError: Если index вне [0, size)
    """
    try:
        position = operator.index(index)
    except TypeError as exc:
        raise InvalidArgumentError(
            f"{name} must be an integer, got {type(index).__name__}"
        ) from exc

    if not 0 <= position < size:
        raise IndexOutOfBoundsError(f"{name} {position} out of bounds [0, {size})")

    return position
