"""
Level 3 kernels over matrix views.

View-level counterparts of pydense.blas.level3. Operands are Matrix views
or 2-D numpy arrays; outputs are updated in place through their ``.array``.

Corner cases shared by every routine here:
    - an empty output (m == 0 or n == 0) is left untouched
    - alpha == 0 (or k == 0) with beta == 1 leaves C untouched
    - alpha == 0 (or k == 0) otherwise reduces to C := beta * C and never
      reads A or B
    - beta == 0 overwrites C without reading it
"""

from typing import Any

import numpy as np

from pydense.core.config import checks_enabled
from pydense.core.types import Diag, Op, Side, Uplo
from pydense.core.validation import check_length, check_option
from pydense.core.views import as_matrix
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


def _op_shape(shape: tuple[int, int], trans: Op) -> tuple[int, int]:
    rows, cols = shape
    return (rows, cols) if trans == Op.NoTrans else (cols, rows)


# =====================================================================
# General matrix-matrix product
# =====================================================================

def gemm(trans_a: Op, trans_b: Op, alpha: Any, A: Any, B: Any, beta: Any, C: Any) -> None:
    """
    General matrix-matrix product.

        C := alpha * op(A) @ op(B) + beta * C

    Args:
        trans_a: Operation applied to A
        trans_b: Operation applied to B
        alpha: Scalar multiplying the product
        A: Matrix with op(A) of shape m x k
        B: Matrix with op(B) of shape k x n
        beta: Scalar multiplying C; when 0, C is not read
        C: m x n output
    """
    A, B, C = as_matrix(A), as_matrix(B), as_matrix(C)
    m, n = C.shape
    if checks_enabled():
        check_option(trans_a, Op, 'transA')
        check_option(trans_b, Op, 'transB')
    am, k = _op_shape(A.shape, trans_a)
    bk, bn = _op_shape(B.shape, trans_b)
    if checks_enabled():
        check_length(am, m, 'A')
        check_length(bk, k, 'B')
        check_length(bn, n, 'B')

    if m == 0 or n == 0:
        return
    if (alpha == 0 or k == 0) and beta == 1:
        return

    cv = C.array
    if alpha == 0 or k == 0:
        scale_in_place(cv, beta)
        return

    vendor = select_backend('gemm', A.array, B.array, cv)
    if vendor is not None:
        vendor.gemm(trans_a, trans_b, alpha, A.array, B.array, beta, cv)
        return

    scale_in_place(cv, beta)
    cv += alpha * (apply_op(A.array, trans_a) @ apply_op(B.array, trans_b))


# =====================================================================
# Symmetric / Hermitian matrix-matrix products
# =====================================================================

def _structured_mm(full, side, uplo, alpha, A, B, beta, C) -> None:
    A, B, C = as_matrix(A), as_matrix(B), as_matrix(C)
    m, n = C.shape
    if checks_enabled():
        check_option(side, Side, 'side')
        check_option(uplo, Uplo, 'uplo')
        order = m if side == Side.Left else n
        check_length(A.shape[0], order, 'A')
        check_length(A.shape[1], order, 'A')
        check_length(B.shape[0], m, 'B')
        check_length(B.shape[1], n, 'B')

    if m == 0 or n == 0 or (alpha == 0 and beta == 1):
        return

    cv = C.array
    scale_in_place(cv, beta)
    if alpha == 0:
        return
    a = full(A.array, uplo)
    if side == Side.Left:
        cv += alpha * (a @ B.array)
    else:
        cv += alpha * (B.array @ a)


def symm(side: Side, uplo: Uplo, alpha: Any, A: Any, B: Any, beta: Any, C: Any) -> None:
    """
    Symmetric matrix-matrix product.

        C := alpha * A @ B + beta * C   (side == Side.Left)
        C := alpha * B @ A + beta * C   (side == Side.Right)

    Only the uplo triangle of the symmetric A is read.
    """
    _structured_mm(symmetric_full, side, uplo, alpha, A, B, beta, C)


def hemm(side: Side, uplo: Uplo, alpha: Any, A: Any, B: Any, beta: Any, C: Any) -> None:
    """
    Hermitian matrix-matrix product.

        C := alpha * A @ B + beta * C   (side == Side.Left)
        C := alpha * B @ A + beta * C   (side == Side.Right)

    Only the uplo triangle of A is read, and only the real part of its
    diagonal.
    """
    _structured_mm(hermitian_full, side, uplo, alpha, A, B, beta, C)


# =====================================================================
# Symmetric / Hermitian rank-k and rank-2k updates
# =====================================================================

def _rank_update(uplo, trans, legal, alpha, beta, C, operands, make_update, hermitian) -> None:
    C = as_matrix(C)
    n, nc = C.shape
    mats = [as_matrix(a) for _, a in operands]
    if checks_enabled():
        check_option(uplo, Uplo, 'uplo')
        check_option(trans, Op, 'trans', allowed=legal)
        check_length(nc, n, 'C')
    shapes = [_op_shape(a.shape, trans) for a in mats]
    k = shapes[0][1]
    if checks_enabled():
        for (name, _), (rows, cols) in zip(operands, shapes):
            check_length(rows, n, name)
            check_length(cols, k, name)

    if n == 0:
        return
    if (alpha == 0 or k == 0) and beta == 1:
        return

    if alpha == 0 or k == 0:
        update_triangle(C.array, uplo, beta, None, hermitian=hermitian)
        return
    ops = [apply_op(a.array, trans) for a in mats]
    update_triangle(C.array, uplo, beta, make_update(*ops), hermitian=hermitian)


def syrk(uplo: Uplo, trans: Op, alpha: Any, A: Any, beta: Any, C: Any) -> None:
    """
    Symmetric rank-k update on the uplo triangle of C.

        C := alpha * op(A) @ op(A)^T + beta * C

    trans is NoTrans (A is n x k) or Trans (A is k x n).
    """
    _rank_update(
        uplo, trans, (Op.NoTrans, Op.Trans), alpha, beta, C, [('A', A)],
        lambda a: alpha * (a @ a.T),
        hermitian=False,
    )


def herk(uplo: Uplo, trans: Op, alpha: Any, A: Any, beta: Any, C: Any) -> None:
    """
    Hermitian rank-k update on the uplo triangle of C.

        C := alpha * op(A) @ op(A)^H + beta * C

    alpha and beta are real. trans is NoTrans (A is n x k) or ConjTrans
    (A is k x n). The diagonal of C comes out with zero imaginary part.
    """
    _rank_update(
        uplo, trans, (Op.NoTrans, Op.ConjTrans), alpha, beta, C, [('A', A)],
        lambda a: alpha * (a @ a.conj().T),
        hermitian=True,
    )


def syr2k(uplo: Uplo, trans: Op, alpha: Any, A: Any, B: Any, beta: Any, C: Any) -> None:
    """
    Symmetric rank-2k update on the uplo triangle of C.

        C := alpha * op(A) @ op(B)^T + alpha * op(B) @ op(A)^T + beta * C
    """
    _rank_update(
        uplo, trans, (Op.NoTrans, Op.Trans), alpha, beta, C, [('A', A), ('B', B)],
        lambda a, b: alpha * (a @ b.T) + alpha * (b @ a.T),
        hermitian=False,
    )


def her2k(uplo: Uplo, trans: Op, alpha: Any, A: Any, B: Any, beta: Any, C: Any) -> None:
    """
    Hermitian rank-2k update on the uplo triangle of C.

        C := alpha * op(A) @ op(B)^H + conj(alpha) * op(B) @ op(A)^H + beta * C

    beta is real. The diagonal of C comes out with zero imaginary part.
    """
    _rank_update(
        uplo, trans, (Op.NoTrans, Op.ConjTrans), alpha, beta, C, [('A', A), ('B', B)],
        lambda a, b: alpha * (a @ b.conj().T) + np.conj(alpha) * (b @ a.conj().T),
        hermitian=True,
    )


# =====================================================================
# Triangular multiply and solve
# =====================================================================

def _triangular_setup(side, uplo, trans, diag, A, B):
    A, B = as_matrix(A), as_matrix(B)
    m, n = B.shape
    if checks_enabled():
        check_option(side, Side, 'side')
        check_option(uplo, Uplo, 'uplo')
        check_option(trans, Op, 'trans')
        check_option(diag, Diag, 'diag')
        order = m if side == Side.Left else n
        check_length(A.shape[0], order, 'A')
        check_length(A.shape[1], order, 'A')
    return A, B, m, n


def trmm(side: Side, uplo: Uplo, trans: Op, diag: Diag, alpha: Any, A: Any, B: Any) -> None:
    """
    Triangular matrix-matrix product in place.

        B := alpha * op(A) @ B   (side == Side.Left)
        B := alpha * B @ op(A)   (side == Side.Right)

    alpha == 0 sets B to zero without reading A or B.
    """
    A, B, m, n = _triangular_setup(side, uplo, trans, diag, A, B)
    if m == 0 or n == 0:
        return

    bv = B.array
    if alpha == 0:
        bv[...] = 0
        return
    if alpha != 1:
        bv *= alpha
    t, lower = effective_triangle(A.array, uplo, trans)
    unit = diag == Diag.Unit
    if side == Side.Left:
        multiply(t, lower, unit, bv)
    else:
        # B op(A) = (op(A)^T B^T)^T
        multiply(t.T, not lower, unit, bv.T)


def trsm(side: Side, uplo: Uplo, trans: Op, diag: Diag, alpha: Any, A: Any, B: Any) -> None:
    """
    Triangular solve with multiple right-hand sides, in place.

        B := alpha * op(A)^-1 @ B   (side == Side.Left)
        B := alpha * B @ op(A)^-1   (side == Side.Right)

    alpha == 0 sets B to zero without reading A or B. A zero on a non-unit
    diagonal produces inf/NaN, not an exception.
    """
    A, B, m, n = _triangular_setup(side, uplo, trans, diag, A, B)
    if m == 0 or n == 0:
        return

    bv = B.array
    if alpha == 0:
        bv[...] = 0
        return
    if alpha != 1:
        bv *= alpha
    t, lower = effective_triangle(A.array, uplo, trans)
    unit = diag == Diag.Unit
    if side == Side.Left:
        substitute(t, lower, unit, bv)
    else:
        # X op(A) = B  <=>  op(A)^T X^T = B^T
        substitute(t.T, not lower, unit, bv.T)
