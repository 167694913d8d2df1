"""
Vendor kernels on top of scipy.linalg.blas.

scipy exposes the Fortran BLAS it was built against (OpenBLAS, MKL,
Accelerate, ...). The wrappers here receive logical numpy views that
already passed validation and the quick-return rules, call the matching
typed routine, and copy the result back into the caller's storage.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import blas as scipy_blas

from pydense.core.types import Op


SUPPORTED_DTYPES = frozenset(
    np.dtype(t) for t in (np.float32, np.float64, np.complex64, np.complex128)
)

ROUTINES = frozenset({'gemv', 'gemm'})

_TRANS_CODE = {Op.NoTrans: 0, Op.Trans: 1, Op.ConjTrans: 2}


def supports(routine: str, *operands: Any) -> bool:
    """
    True if the routine exists here and all operands share a BLAS dtype.

    Non-array operands (computed vector views) are not supported.
    """
    if routine not in ROUTINES:
        return False
    if not all(isinstance(op, np.ndarray) for op in operands):
        return False
    dtypes = {op.dtype for op in operands}
    return len(dtypes) == 1 and dtypes.pop() in SUPPORTED_DTYPES


def _trans_code(trans: Op) -> int:
    return _TRANS_CODE[Op(trans)]


def gemv(
    trans: Op,
    alpha: Any,
    a: NDArray[Any],
    x: NDArray[Any],
    beta: Any,
    y: NDArray[Any],
) -> None:
    """y := alpha * op(a) @ x + beta * y through ?gemv."""
    if beta == 0:
        y[...] = 0
    f = scipy_blas.get_blas_funcs('gemv', (a, x, y))
    result = f(alpha, a, x, beta=beta, y=y, trans=_trans_code(trans))
    y[...] = result


def gemm(
    trans_a: Op,
    trans_b: Op,
    alpha: Any,
    a: NDArray[Any],
    b: NDArray[Any],
    beta: Any,
    c: NDArray[Any],
) -> None:
    """c := alpha * op(a) @ op(b) + beta * c through ?gemm."""
    if beta == 0:
        c[...] = 0
    f = scipy_blas.get_blas_funcs('gemm', (a, b, c))
    result = f(alpha, a, b, beta=beta, c=c,
               trans_a=_trans_code(trans_a), trans_b=_trans_code(trans_b))
    c[...] = result
