"""
Argument validation for pydense kernels.

Every kernel runs these checks first, before touching any buffer. They
follow the "fail fast, fail loud" principle: each function validates ONE
thing and raises with the parameter name as the first token of the message
and in the exception's ``parameter`` attribute.

Design principles:
    - Pure checks, no side effects and no coercion of outputs
    - Zero dimensions are valid (they mean "no-op"), never an error
    - Parameter names included in all error messages
"""

from enum import Enum
from typing import Any, Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydense.core.exceptions import ValidationError, DimensionError
from pydense.core.types import is_member


def check_option(
    value: Any,
    enum_cls: type[Enum],
    name: str,
    allowed: Iterable[Enum] | None = None,
) -> None:
    """
    Verify an enumerated option is inside its closed value set.

    Args:
        value: Enum member or raw option character
        enum_cls: The option enum (Layout, Op, Uplo, Diag, Side)
        name: Parameter name for error messages
        allowed: Optional subset of members legal for this kernel

    Raises:
        ValidationError: If value is not a member, or not in allowed
    """
    if not is_member(value, enum_cls):
        raise ValidationError(
            f"{name}: invalid {enum_cls.__name__} value {value!r}",
            parameter=name,
        )
    if allowed is not None:
        allowed = tuple(allowed)
        if not any(value == member for member in allowed):
            legal = ", ".join(member.name for member in allowed)
            raise ValidationError(
                f"{name}: {enum_cls(value).name} is not allowed here (expected one of {legal})",
                parameter=name,
            )


def check_dimension(value: int, name: str) -> None:
    """
    Verify a dimension argument is non-negative.

    Args:
        value: Dimension (m, n or k)
        name: Parameter name for error messages

    Raises:
        DimensionError: If value is negative
    """
    if value < 0:
        raise DimensionError(
            f"{name}: dimension must be non-negative, got {value}",
            parameter=name,
        )


def check_increment(value: int, name: str, *, positive: bool = False) -> None:
    """
    Verify a vector stride.

    Args:
        value: Stride between consecutive logical elements
        name: Parameter name for error messages
        positive: If True, negative strides are rejected as well

    Raises:
        ValidationError: If value is zero, or negative when positive=True
    """
    if value == 0:
        raise ValidationError(f"{name}: stride must be non-zero", parameter=name)
    if positive and value < 0:
        raise ValidationError(
            f"{name}: stride must be positive, got {value}",
            parameter=name,
        )


def check_leading_dimension(value: int, minimum: int, name: str) -> None:
    """
    Verify a leading dimension covers the minor extent of the matrix.

    Args:
        value: Leading dimension
        minimum: Minor extent implied by layout and dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If value < max(1, minimum)
    """
    if value < max(1, minimum):
        raise DimensionError(
            f"{name}: leading dimension {value} is smaller than {max(1, minimum)}",
            parameter=name,
        )


def check_buffer(
    buffer: ArrayLike,
    name: str,
    *,
    writable: bool = False,
) -> NDArray[Any]:
    """
    Validate a flat storage buffer and return it as a numpy array.

    Inputs may be any array-like; outputs must already be writeable
    ndarrays, since results are written in place.

    Args:
        buffer: Storage for a vector or matrix
        name: Parameter name for error messages
        writable: Require an in-place writeable ndarray

    Returns:
        1-D numpy array sharing memory with buffer when it is an ndarray

    Raises:
        ValidationError: If buffer is non-numeric, not 1-D, or not writeable
    """
    if writable:
        if not isinstance(buffer, np.ndarray):
            raise ValidationError(
                f"{name}: output buffer must be a numpy.ndarray, got {type(buffer).__name__}",
                parameter=name,
            )
        if not buffer.flags.writeable:
            raise ValidationError(f"{name}: output buffer is read-only", parameter=name)
        result = buffer
    else:
        try:
            result = np.asarray(buffer)
        except (ValueError, TypeError) as e:
            raise ValidationError(f"{name}: cannot convert to array: {e}", parameter=name) from e

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data",
            parameter=name,
        )
    if result.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D buffer, got {result.ndim}D with shape {result.shape}",
            parameter=name,
        )
    return result


def check_buffer_length(buffer: NDArray[Any], required: int, name: str) -> None:
    """
    Verify a buffer holds at least the number of elements a view needs.

    Args:
        buffer: 1-D storage
        required: Elements spanned by the view
        name: Parameter name for error messages

    Raises:
        DimensionError: If the buffer is shorter than required
    """
    if buffer.shape[0] < required:
        raise DimensionError(
            f"{name}: buffer holds {buffer.shape[0]} elements, view needs {required}",
            parameter=name,
        )


def check_real(buffer: NDArray[Any], name: str) -> None:
    """
    Verify a buffer holds real scalars, for real-only kernels.

    Raises:
        ValidationError: If the dtype is complex
    """
    if np.issubdtype(buffer.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: real data required, got {buffer.dtype}",
            parameter=name,
        )


def check_length(actual: int, expected: int, name: str) -> None:
    """
    Verify a view has the length an operation implies.

    Raises:
        DimensionError: If the lengths differ
    """
    if actual != expected:
        raise DimensionError(
            f"{name}: expected length {expected}, got {actual}",
            parameter=name,
        )
