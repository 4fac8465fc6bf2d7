"""
Math modules для vecmath

Политика численной толерантности и иерархия исключений.
"""

from src.vecmath.math.numerical_safeguards import (
    # Epsilon constants
    EPSILON,
    FLOAT32_MAX,
    # Exceptions
    DegenerateVectorError,
    DivisionByZeroError,
    IndexOutOfBoundsError,
    InvalidArgumentError,
    LinearAlgebraError,
    SingularMatrixError,
    # Single precision
    is_valid_float,
    to_float32,
    # Epsilon comparisons
    approximately_equal,
    epsilon_grid_key,
    is_non_zero,
    # Guards
    require_index,
    require_non_singular,
    require_non_zero,
    require_non_zero_length,
    require_operand,
)

__all__ = [
    # Epsilon constants
    "EPSILON",
    "FLOAT32_MAX",
    # Exceptions
    "LinearAlgebraError",
    "InvalidArgumentError",
    "IndexOutOfBoundsError",
    "DivisionByZeroError",
    "DegenerateVectorError",
    "SingularMatrixError",
    # Single precision
    "is_valid_float",
    "to_float32",
    # Epsilon comparisons
    "approximately_equal",
    "epsilon_grid_key",
    "is_non_zero",
    # Guards
    "require_index",
    "require_non_singular",
    "require_non_zero",
    "require_non_zero_length",
    "require_operand",
]
