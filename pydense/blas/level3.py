"""
Level 3 BLAS: matrix-matrix operations.

Buffer-style entry points in the classic CBLAS parameter order, delegating
to pydense.blas.kernels.level3 after validation. Every leading dimension is
checked against the stored shape of its operand, which depends on the
layout and, for A and B, on the transpose options:

    gemm, column-major, transA = NoTrans:  A is m x k, so lda >= m
    gemm, row-major,    transA = NoTrans:  A is m x k, so lda >= k
"""

from typing import Any

from numpy.typing import ArrayLike, NDArray

from pydense.core.config import checks_enabled
from pydense.core.types import Diag, Layout, Op, Side, Uplo
from pydense.core.validation import check_dimension, check_option
from pydense.blas._arguments import check_ld, matrix_operand
from pydense.blas.kernels import level3 as kernels


def _stored(rows: int, cols: int, trans: Op) -> tuple[int, int]:
    """Stored shape of an operand whose op() is rows x cols."""
    return (rows, cols) if trans == Op.NoTrans else (cols, rows)


def gemm(
    layout: Layout,
    transA: Op,
    transB: Op,
    m: int,
    n: int,
    k: int,
    alpha: Any,
    A: ArrayLike,
    lda: int,
    B: ArrayLike,
    ldb: int,
    beta: Any,
    C: NDArray[Any],
    ldc: int,
) -> None:
    """
    General matrix-matrix product C := alpha * op(A) @ op(B) + beta * C.

    Args:
        layout: Storage order shared by A, B and C
        transA: Op applied to A
        transB: Op applied to B
        m: Rows of op(A) and C
        n: Columns of op(B) and C
        k: Columns of op(A), rows of op(B)
        alpha: Scalar multiplying the product
        A: Buffer holding A
        lda: Leading dimension of A
        B: Buffer holding B
        ldb: Leading dimension of B
        beta: Scalar multiplying C; when 0, C is not read
        C: Writeable buffer holding the m x n matrix C
        ldc: Leading dimension of C

    k == 0 reduces to C := beta * C without reading A or B.
    """
    a_shape = _stored(m, k, transA)
    b_shape = _stored(k, n, transB)
    if checks_enabled():
        check_option(layout, Layout, 'layout')
        check_option(transA, Op, 'transA')
        check_option(transB, Op, 'transB')
        check_dimension(m, 'm')
        check_dimension(n, 'n')
        check_dimension(k, 'k')
        check_ld(lda, *a_shape, layout, 'lda')
        check_ld(ldb, *b_shape, layout, 'ldb')
        check_ld(ldc, m, n, layout, 'ldc')

    a = matrix_operand(A, *a_shape, lda, layout, 'A')
    b = matrix_operand(B, *b_shape, ldb, layout, 'B')
    c = matrix_operand(C, m, n, ldc, layout, 'C', writable=True)
    kernels.gemm(transA, transB, alpha, a, b, beta, c)


def _structured_mm(kernel, layout, side, uplo, m, n, alpha, A, lda, B, ldb, beta, C, ldc) -> None:
    if checks_enabled():
        check_option(layout, Layout, 'layout')
        check_option(side, Side, 'side')
        check_option(uplo, Uplo, 'uplo')
        check_dimension(m, 'm')
        check_dimension(n, 'n')
    order = m if side == Side.Left else n
    if checks_enabled():
        check_ld(lda, order, order, layout, 'lda')
        check_ld(ldb, m, n, layout, 'ldb')
        check_ld(ldc, m, n, layout, 'ldc')

    a = matrix_operand(A, order, order, lda, layout, 'A')
    b = matrix_operand(B, m, n, ldb, layout, 'B')
    c = matrix_operand(C, m, n, ldc, layout, 'C', writable=True)
    kernel(side, uplo, alpha, a, b, beta, c)


def symm(
    layout: Layout,
    side: Side,
    uplo: Uplo,
    m: int,
    n: int,
    alpha: Any,
    A: ArrayLike,
    lda: int,
    B: ArrayLike,
    ldb: int,
    beta: Any,
    C: NDArray[Any],
    ldc: int,
) -> None:
    """
    Symmetric matrix-matrix product.

    C := alpha * A @ B + beta * C for Side.Left (A is m x m), or
    C := alpha * B @ A + beta * C for Side.Right (A is n x n).
    """
    _structured_mm(kernels.symm, layout, side, uplo, m, n, alpha, A, lda, B, ldb, beta, C, ldc)


def hemm(
    layout: Layout,
    side: Side,
    uplo: Uplo,
    m: int,
    n: int,
    alpha: Any,
    A: ArrayLike,
    lda: int,
    B: ArrayLike,
    ldb: int,
    beta: Any,
    C: NDArray[Any],
    ldc: int,
) -> None:
    """
    Hermitian matrix-matrix product.

    C := alpha * A @ B + beta * C for Side.Left (A is m x m), or
    C := alpha * B @ A + beta * C for Side.Right (A is n x n). The imaginary
    part of the diagonal of A is never read.
    """
    _structured_mm(kernels.hemm, layout, side, uplo, m, n, alpha, A, lda, B, ldb, beta, C, ldc)


def _rank_k(kernel, legal, layout, uplo, trans, n, k, alpha, operands, beta, C, ldc) -> None:
    if checks_enabled():
        check_option(layout, Layout, 'layout')
        check_option(uplo, Uplo, 'uplo')
        check_option(trans, Op, 'trans', allowed=legal)
        check_dimension(n, 'n')
        check_dimension(k, 'k')
    shape = _stored(n, k, trans)
    if checks_enabled():
        for name, _, ld in operands:
            check_ld(ld, *shape, layout, f'ld{name.lower()}')
        check_ld(ldc, n, n, layout, 'ldc')

    views = [matrix_operand(buf, *shape, ld, layout, name) for name, buf, ld in operands]
    c = matrix_operand(C, n, n, ldc, layout, 'C', writable=True)
    kernel(uplo, trans, alpha, *views, beta, c)


_SYMMETRIC_TRANS = (Op.NoTrans, Op.Trans)
_HERMITIAN_TRANS = (Op.NoTrans, Op.ConjTrans)


def syrk(
    layout: Layout,
    uplo: Uplo,
    trans: Op,
    n: int,
    k: int,
    alpha: Any,
    A: ArrayLike,
    lda: int,
    beta: Any,
    C: NDArray[Any],
    ldc: int,
) -> None:
    """
    Symmetric rank-k update C := alpha * op(A) @ op(A)^T + beta * C.

    trans must be NoTrans (A is n x k) or Trans (A is k x n). Only the uplo
    triangle of C is referenced.
    """
    _rank_k(kernels.syrk, _SYMMETRIC_TRANS, layout, uplo, trans, n, k, alpha,
            [('A', A, lda)], beta, C, ldc)


def herk(
    layout: Layout,
    uplo: Uplo,
    trans: Op,
    n: int,
    k: int,
    alpha: Any,
    A: ArrayLike,
    lda: int,
    beta: Any,
    C: NDArray[Any],
    ldc: int,
) -> None:
    """
    Hermitian rank-k update C := alpha * op(A) @ op(A)^H + beta * C.

    alpha and beta are real. trans must be NoTrans (A is n x k) or
    ConjTrans (A is k x n). The diagonal of C comes out with zero imaginary
    part.
    """
    _rank_k(kernels.herk, _HERMITIAN_TRANS, layout, uplo, trans, n, k, alpha,
            [('A', A, lda)], beta, C, ldc)


def syr2k(
    layout: Layout,
    uplo: Uplo,
    trans: Op,
    n: int,
    k: int,
    alpha: Any,
    A: ArrayLike,
    lda: int,
    B: ArrayLike,
    ldb: int,
    beta: Any,
    C: NDArray[Any],
    ldc: int,
) -> None:
    """Symmetric rank-2k update C := alpha * (op(A) @ op(B)^T + op(B) @ op(A)^T) + beta * C."""
    _rank_k(kernels.syr2k, _SYMMETRIC_TRANS, layout, uplo, trans, n, k, alpha,
            [('A', A, lda), ('B', B, ldb)], beta, C, ldc)


def her2k(
    layout: Layout,
    uplo: Uplo,
    trans: Op,
    n: int,
    k: int,
    alpha: Any,
    A: ArrayLike,
    lda: int,
    B: ArrayLike,
    ldb: int,
    beta: Any,
    C: NDArray[Any],
    ldc: int,
) -> None:
    """
    Hermitian rank-2k update
    C := alpha * op(A) @ op(B)^H + conj(alpha) * op(B) @ op(A)^H + beta * C.

    beta is real. The diagonal of C comes out with zero imaginary part.
    """
    _rank_k(kernels.her2k, _HERMITIAN_TRANS, layout, uplo, trans, n, k, alpha,
            [('A', A, lda), ('B', B, ldb)], beta, C, ldc)


def _triangular(kernel, layout, side, uplo, trans, diag, m, n, alpha, A, lda, B, ldb) -> None:
    if checks_enabled():
        check_option(layout, Layout, 'layout')
        check_option(side, Side, 'side')
        check_option(uplo, Uplo, 'uplo')
        check_option(trans, Op, 'trans')
        check_option(diag, Diag, 'diag')
        check_dimension(m, 'm')
        check_dimension(n, 'n')
    order = m if side == Side.Left else n
    if checks_enabled():
        check_ld(lda, order, order, layout, 'lda')
        check_ld(ldb, m, n, layout, 'ldb')

    a = matrix_operand(A, order, order, lda, layout, 'A')
    b = matrix_operand(B, m, n, ldb, layout, 'B', writable=True)
    kernel(side, uplo, trans, diag, alpha, a, b)


def trmm(
    layout: Layout,
    side: Side,
    uplo: Uplo,
    trans: Op,
    diag: Diag,
    m: int,
    n: int,
    alpha: Any,
    A: ArrayLike,
    lda: int,
    B: NDArray[Any],
    ldb: int,
) -> None:
    """
    Triangular matrix-matrix product.

    B := alpha * op(A) @ B for Side.Left (A is m x m), or
    B := alpha * B @ op(A) for Side.Right (A is n x n).
    """
    _triangular(kernels.trmm, layout, side, uplo, trans, diag, m, n, alpha, A, lda, B, ldb)


def trsm(
    layout: Layout,
    side: Side,
    uplo: Uplo,
    trans: Op,
    diag: Diag,
    m: int,
    n: int,
    alpha: Any,
    A: ArrayLike,
    lda: int,
    B: NDArray[Any],
    ldb: int,
) -> None:
    """
    Triangular solve with multiple right-hand sides.

    B := alpha * op(A)^-1 @ B for Side.Left (A is m x m), or
    B := alpha * B @ op(A)^-1 for Side.Right (A is n x n).
    """
    _triangular(kernels.trsm, layout, side, uplo, trans, diag, m, n, alpha, A, lda, B, ldb)
