"""
vecmath — fixed-size vectors and matrices.

Vector2/Vector3/Vector4 и Matrix3/Matrix4 с единой политикой
численной толерантности (EPSILON = 1e-7) и single precision хранением.
"""

import logging

from src.vecmath.domain import Matrix3, Matrix4, Vector2, Vector3, Vector4
from src.vecmath.math import (
    EPSILON,
    DegenerateVectorError,
    DivisionByZeroError,
    IndexOutOfBoundsError,
    InvalidArgumentError,
    LinearAlgebraError,
    SingularMatrixError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "EPSILON",
    # Exceptions
    "LinearAlgebraError",
    "InvalidArgumentError",
    "IndexOutOfBoundsError",
    "DivisionByZeroError",
    "DegenerateVectorError",
    "SingularMatrixError",
    # Vectors
    "Vector2",
    "Vector3",
    "Vector4",
    # Matrices
    "Matrix3",
    "Matrix4",
]
