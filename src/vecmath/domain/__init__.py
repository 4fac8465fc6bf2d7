"""
Domain models: векторы и матрицы фиксированного размера.
"""

from src.vecmath.domain.matrix import Matrix3, Matrix4, MatrixBase
from src.vecmath.domain.vector import Vector2, Vector3, Vector4, VectorBase

__all__ = [
    # Vectors
    "VectorBase",
    "Vector2",
    "Vector3",
    "Vector4",
    # Matrices
    "MatrixBase",
    "Matrix3",
    "Matrix4",
]
