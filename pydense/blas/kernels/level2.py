"""
Level 2 kernels over vector and matrix views.

These are the algorithm bodies behind pydense.blas.level2. They take views
(Matrix, Vector, VectorStartingWithOne, or plain numpy arrays) instead of
flat buffers, so higher-level routines can call them on sub-blocks of their
own storage. Layout is already folded into the views: every kernel works on
logical row/column indices.

Operands that are only read may be any StridedVector; operands that are
written must expose their storage through ``.array`` (Vector, Matrix).

Conformance of view shapes is checked when checks are enabled; enumerated
options are checked here too, so these kernels are safe to call directly.
"""

from typing import Any

import numpy as np

from pydense.core.config import checks_enabled
from pydense.core.types import Diag, Op, Uplo
from pydense.core.validation import check_length, check_option
from pydense.core.views import as_matrix, as_vector, check_writable, size
from pydense.blas.backends import select_backend
from pydense.blas.kernels._structure import (
    apply_op,
    effective_triangle,
    hermitian_full,
    multiply,
    scale_in_place,
    substitute,
    symmetric_full,
    update_triangle,
)


def _check_square(A, name: str) -> int:
    m, n = A.shape
    if checks_enabled():
        check_length(n, m, name)
    return m


# =====================================================================
# General matrix-vector product and rank-1 updates
# =====================================================================

def gemv(trans: Op, alpha: Any, A: Any, x: Any, beta: Any, y: Any) -> None:
    """
    General matrix-vector product.

        y := alpha * op(A) @ x + beta * y

    Args:
        trans: Op.NoTrans, Op.Trans or Op.ConjTrans
        alpha: Scalar multiplying op(A) @ x
        A: m x n matrix view
        x: Vector of length n (NoTrans) or m (otherwise); read only
        beta: Scalar multiplying y; when 0, y is not read
        y: Vector of length m (NoTrans) or n (otherwise); written

    If m == 0 or n == 0, y is left untouched.
    """
    A, x, y = as_matrix(A), as_vector(x), as_vector(y)
    m, n = A.shape
    if checks_enabled():
        check_option(trans, Op, 'trans')
        lenx, leny = (n, m) if trans == Op.NoTrans else (m, n)
        check_length(size(x), lenx, 'x')
        check_length(size(y), leny, 'y')
        check_writable(y, 'y')

    if m == 0 or n == 0 or (alpha == 0 and beta == 1):
        return

    yv = y.array
    xv = np.asarray(x)
    vendor = select_backend('gemv', A.array, xv, yv)
    if vendor is not None and alpha != 0:
        vendor.gemv(trans, alpha, A.array, xv, beta, yv)
        return

    scale_in_place(yv, beta)
    if alpha == 0:
        return
    yv += alpha * (apply_op(A.array, trans) @ xv)


def ger(alpha: Any, x: Any, y: Any, A: Any) -> None:
    """
    Rank-1 update with conjugation of y.

        A := alpha * x @ y^H + A

    A is not touched if m == 0, n == 0 or alpha == 0.
    """
    A, x, y = as_matrix(A), as_vector(x), as_vector(y)
    m, n = A.shape
    if checks_enabled():
        check_length(size(x), m, 'x')
        check_length(size(y), n, 'y')

    if m == 0 or n == 0 or alpha == 0:
        return
    A.array[...] += alpha * np.outer(np.asarray(x), np.conj(np.asarray(y)))


def geru(alpha: Any, x: Any, y: Any, A: Any) -> None:
    """
    Rank-1 update without conjugation.

        A := alpha * x @ y^T + A
    """
    A, x, y = as_matrix(A), as_vector(x), as_vector(y)
    m, n = A.shape
    if checks_enabled():
        check_length(size(x), m, 'x')
        check_length(size(y), n, 'y')

    if m == 0 or n == 0 or alpha == 0:
        return
    A.array[...] += alpha * np.outer(np.asarray(x), np.asarray(y))


# =====================================================================
# Symmetric / Hermitian matrix-vector products
# =====================================================================

def _structured_mv(full, uplo, alpha, A, x, beta, y) -> None:
    A, x, y = as_matrix(A), as_vector(x), as_vector(y)
    n = _check_square(A, 'A')
    if checks_enabled():
        check_option(uplo, Uplo, 'uplo')
        check_length(size(x), n, 'x')
        check_length(size(y), n, 'y')
        check_writable(y, 'y')

    if n == 0 or (alpha == 0 and beta == 1):
        return

    yv = y.array
    scale_in_place(yv, beta)
    if alpha == 0:
        return
    yv += alpha * (full(A.array, uplo) @ np.asarray(x))


def hemv(uplo: Uplo, alpha: Any, A: Any, x: Any, beta: Any, y: Any) -> None:
    """
    Hermitian matrix-vector product.

        y := alpha * A @ x + beta * y

    Only the uplo triangle of A is read, and only the real part of its
    diagonal. When beta == 0, y is not read.
    """
    _structured_mv(hermitian_full, uplo, alpha, A, x, beta, y)


def symv(uplo: Uplo, alpha: Any, A: Any, x: Any, beta: Any, y: Any) -> None:
    """
    Symmetric matrix-vector product.

        y := alpha * A @ x + beta * y

    Only the uplo triangle of A is read. When beta == 0, y is not read.
    """
    _structured_mv(symmetric_full, uplo, alpha, A, x, beta, y)


# =====================================================================
# Symmetric / Hermitian rank-1 and rank-2 updates
# =====================================================================

def _structured_update(uplo, alpha, A, operands, make_update, hermitian) -> None:
    A = as_matrix(A)
    n = _check_square(A, 'A')
    vectors = [as_vector(v) for _, v in operands]
    if checks_enabled():
        check_option(uplo, Uplo, 'uplo')
        for (name, _), v in zip(operands, vectors):
            check_length(size(v), n, name)

    if n == 0 or alpha == 0:
        return
    update = make_update(*[np.asarray(v) for v in vectors])
    update_triangle(A.array, uplo, 1, update, hermitian=hermitian)


def her(uplo: Uplo, alpha: Any, x: Any, A: Any) -> None:
    """
    Hermitian rank-1 update.

        A := alpha * x @ x^H + A

    alpha is real. The updated diagonal has exactly zero imaginary part.
    alpha == 0 leaves A untouched.
    """
    _structured_update(
        uplo, alpha, A, [('x', x)],
        lambda xv: alpha * np.outer(xv, xv.conj()),
        hermitian=True,
    )


def her2(uplo: Uplo, alpha: Any, x: Any, y: Any, A: Any) -> None:
    """
    Hermitian rank-2 update.

        A := alpha * x @ y^H + conj(alpha) * y @ x^H + A

    The updated diagonal has exactly zero imaginary part. alpha == 0 leaves
    A untouched.
    """
    _structured_update(
        uplo, alpha, A, [('x', x), ('y', y)],
        lambda xv, yv: alpha * np.outer(xv, yv.conj()) + np.conj(alpha) * np.outer(yv, xv.conj()),
        hermitian=True,
    )


def syr(uplo: Uplo, alpha: Any, x: Any, A: Any) -> None:
    """
    Symmetric rank-1 update.

        A := alpha * x @ x^T + A
    """
    _structured_update(
        uplo, alpha, A, [('x', x)],
        lambda xv: alpha * np.outer(xv, xv),
        hermitian=False,
    )


def syr2(uplo: Uplo, alpha: Any, x: Any, y: Any, A: Any) -> None:
    """
    Symmetric rank-2 update.

        A := alpha * x @ y^T + alpha * y @ x^T + A
    """
    _structured_update(
        uplo, alpha, A, [('x', x), ('y', y)],
        lambda xv, yv: alpha * (np.outer(xv, yv) + np.outer(yv, xv)),
        hermitian=False,
    )


# =====================================================================
# Triangular multiply and solve
# =====================================================================

def _check_triangular(uplo, trans, diag, A, x) -> int:
    n = _check_square(A, 'A')
    if checks_enabled():
        check_option(uplo, Uplo, 'uplo')
        check_option(trans, Op, 'trans')
        check_option(diag, Diag, 'diag')
        check_length(size(x), n, 'x')
        check_writable(x, 'x')
    return n


def trmv(uplo: Uplo, trans: Op, diag: Diag, A: Any, x: Any) -> None:
    """
    Triangular matrix-vector product in place.

        x := op(A) @ x

    With diag == Diag.Unit the diagonal of A is never read.
    """
    A, x = as_matrix(A), as_vector(x)
    n = _check_triangular(uplo, trans, diag, A, x)
    if n == 0:
        return
    t, lower = effective_triangle(A.array, uplo, trans)
    multiply(t, lower, diag == Diag.Unit, x.array[:, np.newaxis])


def trsv(uplo: Uplo, trans: Op, diag: Diag, A: Any, x: Any) -> None:
    """
    Triangular solve in place.

        x := op(A)^-1 @ x

    With diag == Diag.Unit the diagonal of A is never read. A zero on a
    non-unit diagonal produces inf/NaN, not an exception.
    """
    A, x = as_matrix(A), as_vector(x)
    n = _check_triangular(uplo, trans, diag, A, x)
    if n == 0:
        return
    t, lower = effective_triangle(A.array, uplo, trans)
    substitute(t, lower, diag == Diag.Unit, x.array[:, np.newaxis])
