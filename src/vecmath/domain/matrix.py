"""
Matrix — Квадратные матрицы 3x3 и 4x4

Immutable Pydantic модели Matrix3 и Matrix4, row-major, single precision.

Алгоритмы:
- Определитель 3x3: прямая формула a(ei−fh) − b(di−fg) + c(dh−eg)
- Определитель 4x4: разложение Лапласа по первой строке,
  миноры считаются через Matrix3
- Обратная матрица: A⁻¹ = adj(A) / det(A), где adj(A) это транспонированная
  матрица алгебраических дополнений

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Матрица всегда ровно NxN (иначе InvalidArgumentError при создании)
2. Знак дополнения (−1)^(i+j) и транспонирование применяются вместе,
   ровно по одному разу
3. Вырожденная матрица (|det| < EPSILON) → SingularMatrixError,
   NaN/Inf никогда не возвращаются
4. Pivoting не применяется: алгоритм рассчитан на хорошо обусловленные
   матрицы малого размера
"""

import logging
from abc import abstractmethod
from collections.abc import Sequence
from typing import ClassVar, TypeVar

from pydantic import BaseModel, ValidationError, field_validator

from src.vecmath.domain.vector import Vector3, Vector4, VectorBase
from src.vecmath.math.numerical_safeguards import (
    EPSILON,
    InvalidArgumentError,
    approximately_equal,
    epsilon_grid_key,
    require_index,
    require_non_singular,
    require_operand,
    to_float32,
)

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound="MatrixBase")

Row3 = tuple[float, float, float]
Row4 = tuple[float, float, float, float]


# =============================================================================
# BASE MODEL
# =============================================================================


class MatrixBase(BaseModel):
    """
    Общая алгебра квадратных матриц NxN.

    Конкретный класс задаёт SIZE, VECTOR_TYPE, тип поля rows
    и формулы minor/determinant.
    """

    SIZE: ClassVar[int]
    VECTOR_TYPE: ClassVar[type[VectorBase]]

    rows: tuple[tuple[float, ...], ...]

    model_config = {"frozen": True}

    @field_validator("rows", mode="before")
    @classmethod
    def round_to_single_precision(cls, v: Sequence[Sequence[object]]) -> tuple[tuple[float, ...], ...]:
        """
        Округление всех элементов до binary32.

        Выполняется до coercion pydantic: строки, bool, NaN и Inf отклоняются.
        """
        return tuple(tuple(to_float32(cell) for cell in row) for row in v)

    def __init__(self, rows: Sequence[Sequence[float]] | None = None) -> None:
        """
        Создание матрицы.

        Args:
            rows: Строки матрицы (NxN, row-major). None → единичная матрица

        Raises:
            InvalidArgumentError: Если форма не NxN или элементы не конечные числа
        """
        if rows is None:
            rows = self._identity_rows()

        size = self.SIZE
        try:
            if isinstance(rows, (str, bytes)):
                raise TypeError("rows must not be a string")
            grid = []
            for row in rows:
                # Строка символов не является строкой матрицы
                if isinstance(row, (str, bytes)):
                    raise TypeError("row must not be a string")
                grid.append(list(row))
        except TypeError as exc:
            raise InvalidArgumentError(f"Matrix must be {size}x{size}") from exc

        if len(grid) != size or any(len(row) != size for row in grid):
            raise InvalidArgumentError(f"Matrix must be {size}x{size}")

        try:
            super().__init__(rows=grid)
        except ValidationError as exc:
            raise InvalidArgumentError(
                f"Invalid {type(self).__name__} elements: {exc}"
            ) from exc

    # -------------------------------------------------------------------------
    # Фабрики
    # -------------------------------------------------------------------------

    @classmethod
    def _identity_rows(cls) -> list[list[float]]:
        return [[1.0 if i == j else 0.0 for j in range(cls.SIZE)] for i in range(cls.SIZE)]

    @classmethod
    def identity(cls: type[_M]) -> _M:
        """Единичная матрица."""
        return cls(cls._identity_rows())

    @classmethod
    def zero(cls: type[_M]) -> _M:
        """Нулевая матрица."""
        return cls([[0.0] * cls.SIZE for _ in range(cls.SIZE)])

    def copy(self: _M) -> _M:
        """Копия матрицы."""
        return type(self)(self.rows)

    def to_array(self) -> list[list[float]]:
        """Копия матрицы в виде вложенного списка."""
        return [list(row) for row in self.rows]

    # -------------------------------------------------------------------------
    # Доступ к элементам
    # -------------------------------------------------------------------------

    def get(self, row: int, col: int) -> float:
        """
        Элемент матрицы.

        Raises:
            IndexOutOfBoundsError: Если row или col вне [0, N)
        """
        row = require_index(row, self.SIZE, "row")
        col = require_index(col, self.SIZE, "col")
        return self.rows[row][col]

    def set(self: _M, row: int, col: int, value: float) -> _M:
        """
        Новая матрица с заменённым элементом [row][col].

        Исходная матрица не изменяется.

        Raises:
            IndexOutOfBoundsError: Если row или col вне [0, N)
        """
        row = require_index(row, self.SIZE, "row")
        col = require_index(col, self.SIZE, "col")
        cells = self.to_array()
        cells[row][col] = value
        return type(self)(cells)

    def row(self, index: int) -> VectorBase:
        """Строка матрицы как вектор."""
        index = require_index(index, self.SIZE, "row")
        return self.VECTOR_TYPE(*self.rows[index])

    def column(self, index: int) -> VectorBase:
        """Столбец матрицы как вектор."""
        index = require_index(index, self.SIZE, "col")
        return self.VECTOR_TYPE(*(row[index] for row in self.rows))

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self: _M, other: _M) -> _M:
        """Сложение матриц: self + other."""
        require_operand(other, type(self), "other")
        return type(self)(
            [
                [a + b for a, b in zip(row_a, row_b)]
                for row_a, row_b in zip(self.rows, other.rows)
            ]
        )

    def subtract(self: _M, other: _M) -> _M:
        """Вычитание матриц: self - other."""
        require_operand(other, type(self), "other")
        return type(self)(
            [
                [a - b for a, b in zip(row_a, row_b)]
                for row_a, row_b in zip(self.rows, other.rows)
            ]
        )

    def multiply(self, other: "MatrixBase | VectorBase") -> "MatrixBase | VectorBase":
        """
        Умножение на матрицу или вектор-столбец.

        - Matrix x Matrix: стандартное произведение строка-на-столбец, O(n³)
        - Matrix x Vector: матрица как линейное отображение, вектор того же размера

        Args:
            other: Матрица того же класса или вектор размерности N

        Returns:
            Новая матрица или новый вектор

        Raises:
            InvalidArgumentError: Если other None или неподходящего типа/размерности
        """
        if isinstance(other, self.VECTOR_TYPE):
            return self._multiply_vector(other)

        require_operand(other, (type(self), self.VECTOR_TYPE), "other")

        n = self.SIZE
        return type(self)(
            [
                [sum(self.rows[i][k] * other.rows[k][j] for k in range(n)) for j in range(n)]
                for i in range(n)
            ]
        )

    def _multiply_vector(self, vector: VectorBase) -> VectorBase:
        components = vector.to_array()
        return self.VECTOR_TYPE(
            *(sum(a * b for a, b in zip(row, components)) for row in self.rows)
        )

    def transpose(self: _M) -> _M:
        """Транспонирование (диагональ не меняется)."""
        return type(self)([list(column) for column in zip(*self.rows)])

    # -------------------------------------------------------------------------
    # Определитель и обратная матрица
    # -------------------------------------------------------------------------

    def _submatrix_cells(self, row: int, col: int) -> list[list[float]]:
        """
        Элементы без строки row и столбца col.

        Относительный порядок оставшихся строк и столбцов сохраняется.
        """
        return [
            [value for j, value in enumerate(cells) if j != col]
            for i, cells in enumerate(self.rows)
            if i != row
        ]

    @abstractmethod
    def minor(self, row: int, col: int) -> float:
        """Определитель подматрицы без строки row и столбца col."""

    @abstractmethod
    def determinant(self) -> float:
        """Определитель матрицы."""

    def cofactor(self, row: int, col: int) -> float:
        """
        Алгебраическое дополнение: (−1)^(row+col) * minor(row, col).

        Raises:
            IndexOutOfBoundsError: Если row или col вне [0, N)
        """
        row = require_index(row, self.SIZE, "row")
        col = require_index(col, self.SIZE, "col")
        sign = 1.0 if (row + col) % 2 == 0 else -1.0
        return sign * self.minor(row, col)

    def inverse(self: _M) -> _M:
        """
        Обратная матрица методом присоединённой матрицы.

        A⁻¹[j][i] = cofactor(i, j) / det(A)

        Returns:
            Новая обратная матрица

        Raises:
            SingularMatrixError: Если |det| < EPSILON
        """
        det = self.determinant()
        require_non_singular(det)

        n = self.SIZE
        adjugate = [[0.0] * n for _ in range(n)]
        for i in range(n):
            for j in range(n):
                # Транспонирование: дополнение (i, j) идёт в позицию (j, i)
                adjugate[j][i] = self.cofactor(i, j) / det

        logger.debug("Inverted %s with determinant %s", type(self).__name__, det)
        return type(self)(adjugate)

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def is_close(self, other: object, eps: float = EPSILON) -> bool:
        """
        Поэлементное сравнение с заданной толерантностью.

        Args:
            other: Другая матрица
            eps: Абсолютная толерантность (default: EPSILON)

        Returns:
            True если other того же класса и все элементы отличаются меньше чем на eps
        """
        if type(other) is not type(self):
            return False
        return all(
            approximately_equal(a, b, eps)
            for row_a, row_b in zip(self.rows, other.rows)
            for a, b in zip(row_a, row_b)
        )

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.is_close(other)

    def __hash__(self) -> int:
        return hash(tuple(epsilon_grid_key(cell) for row in self.rows for cell in row))

    # -------------------------------------------------------------------------
    # Операторы
    # -------------------------------------------------------------------------

    def __add__(self: _M, other: object) -> _M:
        if type(other) is not type(self):
            return NotImplemented
        return self.add(other)

    def __sub__(self: _M, other: object) -> _M:
        if type(other) is not type(self):
            return NotImplemented
        return self.subtract(other)

    def __matmul__(self, other: object) -> "MatrixBase | VectorBase":
        if type(other) is not type(self) and not isinstance(other, self.VECTOR_TYPE):
            return NotImplemented
        return self.multiply(other)

    def __str__(self) -> str:
        lines = [f"{type(self).__name__}:"]
        for row in self.rows:
            lines.append("[" + ", ".join(f"{cell:.3f}" for cell in row) + "]")
        return "\n".join(lines)


# =============================================================================
# MATRIX 3x3
# =============================================================================


class Matrix3(MatrixBase):
    """Матрица 3x3. Умножается на Vector3."""

    SIZE: ClassVar[int] = 3
    VECTOR_TYPE: ClassVar[type[VectorBase]] = Vector3

    rows: tuple[Row3, Row3, Row3]

    def minor(self, row: int, col: int) -> float:
        """Определитель 2x2 подматрицы без строки row и столбца col."""
        row = require_index(row, self.SIZE, "row")
        col = require_index(col, self.SIZE, "col")
        (a, b), (c, d) = self._submatrix_cells(row, col)
        return a * d - b * c

    def determinant(self) -> float:
        """
        Определитель по прямой формуле.

        Для [[a,b,c],[d,e,f],[g,h,i]]: a(ei−fh) − b(di−fg) + c(dh−eg)
        """
        (a, b, c), (d, e, f), (g, h, i) = self.rows
        return a * (e * i - f * h) - b * (d * i - f * g) + c * (d * h - e * g)


# =============================================================================
# MATRIX 4x4
# =============================================================================


class Matrix4(MatrixBase):
    """Матрица 4x4. Умножается на Vector4 (однородные координаты)."""

    SIZE: ClassVar[int] = 4
    VECTOR_TYPE: ClassVar[type[VectorBase]] = Vector4

    rows: tuple[Row4, Row4, Row4, Row4]

    def minor_matrix(self, row: int, col: int) -> Matrix3:
        """
        Подматрица 3x3 без строки row и столбца col.

        Raises:
            IndexOutOfBoundsError: Если row или col вне [0, 4)
        """
        row = require_index(row, self.SIZE, "row")
        col = require_index(col, self.SIZE, "col")
        return Matrix3(self._submatrix_cells(row, col))

    def minor(self, row: int, col: int) -> float:
        """Определитель подматрицы 3x3 без строки row и столбца col."""
        return self.minor_matrix(row, col).determinant()

    def determinant(self) -> float:
        """
        Определитель разложением Лапласа по первой строке.

        det = Σⱼ (−1)^j · a[0][j] · minor(0, j)
        """
        det = 0.0
        for j in range(self.SIZE):
            sign = 1.0 if j % 2 == 0 else -1.0
            det += sign * self.rows[0][j] * self.minor(0, j)
        return det
