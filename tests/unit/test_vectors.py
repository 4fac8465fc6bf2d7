"""
Тесты для векторов: Vector2, Vector3, Vector4

Проверяет:
1. Создание, фабрики и single precision хранение
2. Арифметику (add, subtract, multiply, divide, dot, cross)
3. Длину и нормализацию
4. Приближённое равенство и хеширование по epsilon-сетке
5. Immutability (frozen=True)
6. Ошибки: None/чужой тип операнда, деление на ~0, нормализация ~0 вектора
"""

import math

import pytest
from pydantic import ValidationError

from src.vecmath.domain import Vector2, Vector3, Vector4
from src.vecmath.math import (
    DegenerateVectorError,
    DivisionByZeroError,
    InvalidArgumentError,
)


# =============================================================================
# СОЗДАНИЕ
# =============================================================================


class TestConstruction:
    """Тесты создания векторов"""

    def test_default_is_zero(self) -> None:
        """Конструктор без аргументов создаёт нулевой вектор"""
        assert Vector2().to_array() == [0.0, 0.0]
        assert Vector3().to_array() == [0.0, 0.0, 0.0]
        assert Vector4().to_array() == [0.0, 0.0, 0.0, 0.0]

    def test_zero_factory(self) -> None:
        assert Vector3.zero() == Vector3(0, 0, 0)

    def test_positional_and_keyword(self) -> None:
        """Компоненты задаются позиционно или по имени"""
        assert Vector3(1, 2, 3) == Vector3(x=1, y=2, z=3)
        v = Vector4(1.0, 2.0, 3.0, 4.0)
        assert (v.x, v.y, v.z, v.w) == (1.0, 2.0, 3.0, 4.0)

    def test_components_are_float(self) -> None:
        v = Vector2(3, 4)
        assert isinstance(v.x, float)
        assert isinstance(v.y, float)

    def test_single_precision_storage(self) -> None:
        """Компоненты округляются до binary32"""
        assert Vector2(0.1, 0.0).x == 0.10000000149011612

    def test_copy(self) -> None:
        v = Vector3(1, 2, 3)
        copy = v.copy()
        assert copy == v
        assert copy is not v

    def test_from_vector3(self) -> None:
        """Vector4 из Vector3 и w (однородные координаты)"""
        v4 = Vector4.from_vector3(Vector3(10, 20, 30), 1.0)
        assert v4 == Vector4(10, 20, 30, 1)

    def test_from_vector3_none_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="cannot be None"):
            Vector4.from_vector3(None, 1.0)

    def test_from_vector3_wrong_type_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Vector4.from_vector3(Vector2(1, 2), 1.0)

    def test_nan_component_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Vector2(float("nan"), 0.0)

    def test_inf_component_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Vector3(0.0, float("inf"), 0.0)

    def test_non_numeric_component_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Vector2("abc", 1.0)

        with pytest.raises(ValueError):
            Vector2(None, 1.0)

    @pytest.mark.parametrize(
        "components",
        [("3", "4"), (b"3", 4), ("1.5", 0.0)],
    )
    def test_numeric_strings_rejected(self, components) -> None:
        """Строки не приводятся к float, даже если содержат число"""
        with pytest.raises(InvalidArgumentError):
            Vector2(*components)

    def test_bool_components_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Vector3(True, False, True)

        with pytest.raises(InvalidArgumentError):
            Vector4(1, 2, 3, False)

    def test_to_array_is_copy(self) -> None:
        v = Vector2(1, 2)
        values = v.to_array()
        values[0] = 100.0
        assert v.x == 1.0


class TestImmutability:
    """Тесты immutability (frozen=True)"""

    def test_assignment_forbidden(self) -> None:
        v = Vector3(1, 2, 3)
        with pytest.raises(ValidationError, match="frozen"):
            v.x = 5.0

    def test_operations_do_not_mutate_operands(self) -> None:
        a = Vector3(1, 2, 3)
        b = Vector3(4, 5, 6)
        a.add(b)
        a.subtract(b)
        a.cross(b)
        a.multiply(2.0)
        a.normalize()
        assert a.to_array() == [1.0, 2.0, 3.0]
        assert b.to_array() == [4.0, 5.0, 6.0]


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestArithmetic:
    """Тесты арифметических операций"""

    def test_add(self) -> None:
        assert Vector2(3, 4).add(Vector2(1, 2)) == Vector2(4, 6)
        assert Vector4(1, 2, 3, 4).add(Vector4(5, 6, 7, 8)) == Vector4(6, 8, 10, 12)

    def test_subtract(self) -> None:
        assert Vector2(3, 4).subtract(Vector2(1, 2)) == Vector2(2, 2)
        assert Vector3(1, 1, 1).subtract(Vector3(1, 2, 3)) == Vector3(0, -1, -2)

    def test_multiply(self) -> None:
        assert Vector2(3, 4).multiply(2.0) == Vector2(6, 8)
        assert Vector3(1, -2, 3).multiply(-1) == Vector3(-1, 2, -3)

    def test_divide(self) -> None:
        assert Vector4(2, 4, 6, 8).divide(2.0) == Vector4(1, 2, 3, 4)

    def test_divide_by_zero_raises(self) -> None:
        with pytest.raises(DivisionByZeroError):
            Vector2(1, 2).divide(0.0)

    def test_divide_by_tiny_scalar_raises(self) -> None:
        """|scalar| < EPSILON трактуется как ноль"""
        with pytest.raises(DivisionByZeroError):
            Vector3(1, 2, 3).divide(1e-8)

        with pytest.raises(ZeroDivisionError):
            Vector4(1, 2, 3, 4).divide(-5e-8)

    def test_dot(self) -> None:
        assert Vector2(3, 4).dot(Vector2(1, 2)) == 11.0
        assert Vector3(1, 0, 0).dot(Vector3(0, 1, 0)) == 0.0
        assert Vector4(1, 2, 3, 4).dot(Vector4(5, 6, 7, 8)) == 70.0

    def test_cross_unit_axes(self) -> None:
        """x × y = z (правая тройка)"""
        assert Vector3(1, 0, 0).cross(Vector3(0, 1, 0)) == Vector3(0, 0, 1)
        assert Vector3(0, 1, 0).cross(Vector3(0, 0, 1)) == Vector3(1, 0, 0)
        assert Vector3(0, 0, 1).cross(Vector3(1, 0, 0)) == Vector3(0, 1, 0)

    def test_cross_formula(self) -> None:
        a = Vector3(1, 2, 3)
        b = Vector3(4, 5, 6)
        # (2*6-3*5, 3*4-1*6, 1*5-2*4)
        assert a.cross(b) == Vector3(-3, 6, -3)

    def test_cross_parallel_is_zero(self) -> None:
        a = Vector3(1, 2, 3)
        assert a.cross(a.multiply(2)) == Vector3.zero()


class TestOperandValidation:
    """Бинарные операции отклоняют None и векторы другой размерности"""

    @pytest.mark.parametrize("method", ["add", "subtract", "dot"])
    def test_none_operand_raises(self, method: str) -> None:
        with pytest.raises(InvalidArgumentError, match="cannot be None"):
            getattr(Vector2(1, 2), method)(None)

    @pytest.mark.parametrize("method", ["add", "subtract", "dot"])
    def test_mismatched_arity_raises(self, method: str) -> None:
        with pytest.raises(InvalidArgumentError, match="must be Vector3"):
            getattr(Vector3(1, 2, 3), method)(Vector4(1, 2, 3, 4))

    def test_cross_none_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Vector3(1, 2, 3).cross(None)

    def test_scalar_none_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Vector2(1, 2).multiply(None)

        with pytest.raises(InvalidArgumentError):
            Vector2(1, 2).divide(None)


# =============================================================================
# ДЛИНА И НОРМАЛИЗАЦИЯ
# =============================================================================


class TestLengthAndNormalize:
    """Тесты длины и нормализации"""

    def test_length_3_4_5(self) -> None:
        assert Vector2(3, 4).length() == 5.0

    def test_length_squared(self) -> None:
        assert Vector2(3, 4).length_squared() == 25.0
        assert Vector4(1, 2, 3, 4).length_squared() == 30.0

    def test_normalize_3_4(self) -> None:
        assert Vector2(3, 4).normalize() == Vector2(0.6, 0.8)

    def test_normalize_preserves_direction(self) -> None:
        v = Vector3(0, 0, -7)
        assert v.normalize() == Vector3(0, 0, -1)

    @pytest.mark.parametrize(
        "vector",
        [
            Vector2(3, 4),
            Vector2(-0.5, 1e-3),
            Vector3(1, 2, 3),
            Vector3(-100, 250, 0.25),
            Vector4(1, 1, 1, 1),
            Vector4(0.001, -2, 5, 9),
        ],
    )
    def test_normalized_length_is_one(self, vector) -> None:
        assert vector.normalize().length() == pytest.approx(1.0, abs=1e-6)

    @pytest.mark.parametrize("vector", [Vector2(), Vector3(), Vector4()])
    def test_normalize_zero_raises(self, vector) -> None:
        with pytest.raises(DegenerateVectorError):
            vector.normalize()

    def test_large_magnitude_length(self) -> None:
        """Длина считается в double и не ограничена диапазоном binary32"""
        v = Vector2(3e38, 3e38)
        assert v.length() == pytest.approx(4.242640687e38, rel=1e-6)
        assert v.length_squared() == pytest.approx(1.8e77, rel=1e-6)

    def test_large_magnitude_dot(self) -> None:
        assert Vector3(1e30, 0, 0).dot(Vector3(1e30, 0, 0)) == pytest.approx(1e60, rel=1e-6)

    def test_normalize_large_magnitude(self) -> None:
        unit = Vector2(3e38, 3e38).normalize()
        assert unit.x == pytest.approx(math.sqrt(0.5), abs=1e-6)
        assert unit.y == pytest.approx(math.sqrt(0.5), abs=1e-6)
        assert unit.length() == pytest.approx(1.0, abs=1e-6)

    def test_normalize_tiny_raises(self) -> None:
        with pytest.raises(DegenerateVectorError):
            Vector3(1e-8, 0, 0).normalize()

        with pytest.raises(ArithmeticError):
            Vector2(0, -5e-8).normalize()


# =============================================================================
# РАВЕНСТВО И ХЕШИРОВАНИЕ
# =============================================================================


class TestEqualityAndHash:
    """Тесты приближённого равенства"""

    def test_equal_within_epsilon(self) -> None:
        assert Vector2(1.0, 2.0) == Vector2(1.0 + 5e-8, 2.0)

    def test_not_equal_outside_epsilon(self) -> None:
        assert Vector2(1.0, 2.0) != Vector2(1.0, 2.001)

    def test_different_arity_not_equal(self) -> None:
        assert Vector2(0, 0) != Vector3(0, 0, 0)
        assert Vector3(1, 2, 3) != (1.0, 2.0, 3.0)

    def test_is_close_custom_eps(self) -> None:
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(1.001, 2.0, 3.0)
        assert not a.is_close(b)
        assert a.is_close(b, eps=1e-2)

    def test_is_close_other_type(self) -> None:
        assert not Vector2(1, 2).is_close(None)
        assert not Vector2(1, 2).is_close(Vector3(1, 2, 0))

    def test_equal_vectors_hash_identically(self) -> None:
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(1.0 + 1e-9, 2.0, 3.0)
        assert a == b
        assert hash(a) == hash(b)

    def test_usable_as_set_and_dict_key(self) -> None:
        points = {Vector2(1, 2), Vector2(1, 2), Vector2(2, 1)}
        assert len(points) == 2

        labels = {Vector4(0, 0, 0, 1): "origin"}
        assert labels[Vector4(0, 0, 0, 1)] == "origin"

    def test_negative_zero_hashes_like_zero(self) -> None:
        assert hash(Vector2(-0.0, 0.0)) == hash(Vector2(0.0, 0.0))


# =============================================================================
# ОПЕРАТОРЫ И ФОРМАТИРОВАНИЕ
# =============================================================================


class TestOperators:
    """Python-операторы как алиасы именованных операций"""

    def test_add_sub(self) -> None:
        assert Vector2(1, 2) + Vector2(3, 4) == Vector2(4, 6)
        assert Vector2(1, 2) - Vector2(3, 4) == Vector2(-2, -2)

    def test_scalar_mul_div(self) -> None:
        v = Vector3(1, 2, 3)
        assert v * 2 == Vector3(2, 4, 6)
        assert 2 * v == Vector3(2, 4, 6)
        assert v / 2 == Vector3(0.5, 1, 1.5)

    def test_neg(self) -> None:
        assert -Vector4(1, -2, 3, -4) == Vector4(-1, 2, -3, 4)

    def test_mismatched_operands_type_error(self) -> None:
        with pytest.raises(TypeError):
            Vector2(1, 2) + Vector3(1, 2, 3)

        with pytest.raises(TypeError):
            Vector2(1, 2) * Vector2(1, 2)

    def test_division_operator_by_zero(self) -> None:
        with pytest.raises(DivisionByZeroError):
            Vector2(1, 2) / 0


class TestStr:
    """Тесты текстового представления"""

    def test_vector2(self) -> None:
        assert str(Vector2(3, 4)) == "Vector2(3.000, 4.000)"

    def test_vector3(self) -> None:
        assert str(Vector3(1, 2, 3)) == "Vector3(1.000, 2.000, 3.000)"

    def test_vector4(self) -> None:
        assert str(Vector4(0.5, -1, 2.25, 1)) == "Vector4(0.500, -1.000, 2.250, 1.000)"
