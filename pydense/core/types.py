"""
Enumerated options and scalar traits.

Options are str-mixin enums whose values are the classic BLAS option
characters, so a kernel accepts either the member or the raw character:

    >>> Op.ConjTrans == 'C'
    True
    >>> Diag('U') is Diag.Unit
    True

Membership is NOT enforced at construction time by the kernels. A caller
may pass any value (for example ``0``) and it is the validation layer that
rejects it, naming the parameter. This keeps "construct an out-of-range
option" possible for tests while production validation stays explicit.

The trait functions map a scalar type to its real and complex counterparts
and are used to pick real-only or complex-only code paths.
"""

from enum import Enum
from typing import Any

import numpy as np


# Sentinel returned by iamax when there is no element to index
INVALID_INDEX: int = -1


class Layout(str, Enum):
    """Storage order of a matrix held in a flat buffer."""
    ColMajor = 'C'
    RowMajor = 'R'


class Op(str, Enum):
    """Operation applied to a matrix operand."""
    NoTrans = 'N'
    Trans = 'T'
    ConjTrans = 'C'


class Uplo(str, Enum):
    """Which triangle of a structured matrix is stored and referenced."""
    Upper = 'U'
    Lower = 'L'


class Diag(str, Enum):
    """Whether a triangular matrix has an implicit unit diagonal."""
    NonUnit = 'N'
    Unit = 'U'


class Side(str, Enum):
    """Side on which a structured factor multiplies the other operand."""
    Left = 'L'
    Right = 'R'


def is_member(value: Any, enum_cls: type[Enum]) -> bool:
    """
    Check whether a value denotes a member of an option enum.

    Args:
        value: Enum member or raw option character
        enum_cls: One of Layout, Op, Uplo, Diag, Side

    Returns:
        True if value equals one of the members
    """
    if not isinstance(value, str):
        return False
    return any(value == member for member in enum_cls)


# =====================================================================
# Scalar traits
# =====================================================================

_REAL_OF = {
    np.dtype(np.complex64): np.dtype(np.float32),
    np.dtype(np.complex128): np.dtype(np.float64),
    np.dtype(np.clongdouble): np.dtype(np.longdouble),
}

_COMPLEX_OF = {real: cplx for cplx, real in _REAL_OF.items()}


def _as_dtype(t: Any) -> np.dtype:
    if isinstance(t, np.ndarray):
        return t.dtype
    if isinstance(t, np.generic):
        return t.dtype
    return np.dtype(t)


def is_complex(t: Any) -> bool:
    """True if the scalar type (dtype, type, array or scalar) is complex."""
    return np.issubdtype(_as_dtype(t), np.complexfloating)


def real_type(t: Any) -> np.dtype:
    """
    Real type associated with a scalar type.

    Real types map to themselves; complex types map to the real type of
    their components (complex128 -> float64, clongdouble -> longdouble).
    Integer types are promoted to float64.
    """
    dt = _as_dtype(t)
    if is_complex(dt):
        return _REAL_OF[dt]
    if not np.issubdtype(dt, np.floating):
        return np.dtype(np.float64)
    return dt


def complex_type(t: Any) -> np.dtype:
    """Complex counterpart of a scalar type (float32 -> complex64, ...)."""
    dt = _as_dtype(t)
    if is_complex(dt):
        return dt
    return _COMPLEX_OF[real_type(dt)]


def scalar_type(*operands: Any) -> np.dtype:
    """
    Scalar type of an operation over the given operands.

    Arrays contribute their dtype; Python and numpy scalars take part
    through numpy's promotion rules, so a complex alpha on real buffers
    yields a complex result type.
    """
    return np.result_type(*[
        op.dtype if hasattr(op, 'dtype') else op for op in operands
    ])
