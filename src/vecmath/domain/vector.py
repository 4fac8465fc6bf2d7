"""
Vector — Векторы фиксированной размерности

Immutable Pydantic модели Vector2, Vector3, Vector4.
Все компоненты хранятся в single precision (binary32).

Каждая операция возвращает новый экземпляр, операнды никогда не изменяются.
Равенство приближённое: компоненты сравниваются с толерантностью EPSILON,
хеш строится по ключам epsilon-сетки.
"""

import math
import numbers
from typing import TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from src.vecmath.math.numerical_safeguards import (
    EPSILON,
    InvalidArgumentError,
    approximately_equal,
    epsilon_grid_key,
    require_non_zero,
    require_non_zero_length,
    require_operand,
    to_float32,
)

_V = TypeVar("_V", bound="VectorBase")


# =============================================================================
# BASE MODEL
# =============================================================================


class VectorBase(BaseModel):
    """
    Общая арифметика векторов любой размерности.

    Размерность определяется набором полей конкретного класса.
    Бинарные операции принимают только вектор того же класса.
    """

    model_config = {"frozen": True}

    @field_validator("*", mode="before")
    @classmethod
    def round_to_single_precision(cls, v: object) -> float:
        """
        Округление компоненты до binary32.

        Выполняется до coercion pydantic: строки, bool, NaN и Inf отклоняются.
        """
        return to_float32(v)

    def _init_components(self, **components: float) -> None:
        try:
            BaseModel.__init__(self, **components)
        except ValidationError as exc:
            raise InvalidArgumentError(
                f"Invalid {type(self).__name__} components: {exc}"
            ) from exc

    def _components(self) -> tuple[float, ...]:
        return tuple(getattr(self, name) for name in type(self).model_fields)

    # -------------------------------------------------------------------------
    # Конструирование
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls: type[_V]) -> _V:
        """Нулевой вектор."""
        return cls()

    def copy(self: _V) -> _V:
        """Копия вектора."""
        return type(self)(*self._components())

    def to_array(self) -> list[float]:
        """Компоненты вектора в виде списка [x, y, ...]."""
        return list(self._components())

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self: _V, other: _V) -> _V:
        """Сложение векторов: self + other."""
        require_operand(other, type(self), "other")
        return type(self)(
            *(a + b for a, b in zip(self._components(), other._components()))
        )

    def subtract(self: _V, other: _V) -> _V:
        """Вычитание векторов: self - other."""
        require_operand(other, type(self), "other")
        return type(self)(
            *(a - b for a, b in zip(self._components(), other._components()))
        )

    def multiply(self: _V, scalar: float) -> _V:
        """Умножение на скаляр."""
        require_operand(scalar, numbers.Real, "scalar")
        return type(self)(*(c * scalar for c in self._components()))

    def divide(self: _V, scalar: float) -> _V:
        """
        Деление на скаляр.

        Raises:
            DivisionByZeroError: Если |scalar| < EPSILON
        """
        require_operand(scalar, numbers.Real, "scalar")
        require_non_zero(scalar)
        return type(self)(*(c / scalar for c in self._components()))

    def dot(self: _V, other: _V) -> float:
        """Скалярное произведение: self · other."""
        require_operand(other, type(self), "other")
        return sum(a * b for a, b in zip(self._components(), other._components()))

    def length_squared(self) -> float:
        """Квадрат евклидовой нормы (double precision)."""
        return sum(c * c for c in self._components())

    def length(self) -> float:
        """Евклидова норма (double precision, без переполнения)."""
        return math.hypot(*self._components())

    def normalize(self: _V) -> _V:
        """
        Нормализация вектора.

        Направление сохраняется, длина становится равной 1
        (с точностью до ошибки округления).

        Returns:
            Новый единичный вектор

        Raises:
            DegenerateVectorError: Если длина < EPSILON
        """
        length = self.length()
        require_non_zero_length(length)
        return type(self)(*(c / length for c in self._components()))

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def is_close(self, other: object, eps: float = EPSILON) -> bool:
        """
        Покомпонентное сравнение с заданной толерантностью.

        Args:
            other: Другой вектор
            eps: Абсолютная толерантность (default: EPSILON)

        Returns:
            True если other того же класса и все компоненты отличаются меньше чем на eps
        """
        if type(other) is not type(self):
            return False
        return all(
            approximately_equal(a, b, eps)
            for a, b in zip(self._components(), other._components())
        )

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.is_close(other)

    def __hash__(self) -> int:
        return hash(tuple(epsilon_grid_key(c) for c in self._components()))

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __add__(self: _V, other: object) -> _V:
        if type(other) is not type(self):
            return NotImplemented
        return self.add(other)

    def __sub__(self: _V, other: object) -> _V:
        if type(other) is not type(self):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self: _V, scalar: object) -> _V:
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return self.multiply(scalar)

    __rmul__ = __mul__

    def __truediv__(self: _V, scalar: object) -> _V:
        if not isinstance(scalar, numbers.Real):
            return NotImplemented
        return self.divide(scalar)

    def __neg__(self: _V) -> _V:
        return self.multiply(-1.0)

    def __str__(self) -> str:
        rendered = ", ".join(f"{c:.3f}" for c in self._components())
        return f"{type(self).__name__}({rendered})"


# =============================================================================
# CONCRETE VECTORS
# =============================================================================


class Vector2(VectorBase):
    """Двумерный вектор (x, y)."""

    x: float = Field(0.0, description="Координата X")
    y: float = Field(0.0, description="Координата Y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self._init_components(x=x, y=y)


class Vector3(VectorBase):
    """Трёхмерный вектор (x, y, z)."""

    x: float = Field(0.0, description="Координата X")
    y: float = Field(0.0, description="Координата Y")
    z: float = Field(0.0, description="Координата Z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self._init_components(x=x, y=y, z=z)

    def cross(self, other: "Vector3") -> "Vector3":
        """
        Векторное произведение (правая тройка).

        Антикоммутативно: a.cross(b) == -(b.cross(a)).
        Результат ортогонален обоим операндам.
        """
        require_operand(other, Vector3, "other")
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )


class Vector4(VectorBase):
    """Четырёхмерный вектор (x, y, z, w), в том числе однородные координаты."""

    x: float = Field(0.0, description="Координата X")
    y: float = Field(0.0, description="Координата Y")
    z: float = Field(0.0, description="Координата Z")
    w: float = Field(0.0, description="Однородная координата W")

    def __init__(
        self, x: float = 0.0, y: float = 0.0, z: float = 0.0, w: float = 0.0
    ) -> None:
        self._init_components(x=x, y=y, z=z, w=w)

    @classmethod
    def from_vector3(cls, v: Vector3, w: float) -> "Vector4":
        """
        Vector4 из Vector3 и явной координаты w.

        Args:
            v: Трёхмерный вектор (x, y, z)
            w: Однородная координата (1.0 для точки, 0.0 для направления)
        """
        require_operand(v, Vector3, "v")
        return cls(v.x, v.y, v.z, w)
