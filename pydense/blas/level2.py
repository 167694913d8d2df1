"""
Level 2 BLAS: matrix-vector operations.

Buffer-style entry points in the classic CBLAS parameter order. Each
routine validates its arguments, wraps the buffers into views under the
requested layout and hands them to pydense.blas.kernels.level2.

    >>> A = np.array([1.0, 2.0, 3.0, 4.0])     # 2 x 2, column-major
    >>> gemv(Layout.ColMajor, Op.NoTrans, 2, 2, 1.0, A, 2, x, 1, 0.0, y, 1)

Leading dimensions are checked against the minor extent of the stored
matrix under the given layout: the row count for column-major storage and
the column count for row-major storage.
"""

from typing import Any

from numpy.typing import ArrayLike, NDArray

from pydense.core.config import checks_enabled
from pydense.core.types import Diag, Layout, Op, Uplo
from pydense.core.validation import check_dimension, check_increment, check_option
from pydense.blas._arguments import check_ld, matrix_operand, vector_operand
from pydense.blas.kernels import level2 as kernels


def gemv(
    layout: Layout,
    trans: Op,
    m: int,
    n: int,
    alpha: Any,
    A: ArrayLike,
    lda: int,
    x: ArrayLike,
    incx: int,
    beta: Any,
    y: NDArray[Any],
    incy: int,
) -> None:
    """
    General matrix-vector product y := alpha * op(A) @ x + beta * y.

    Args:
        layout: Storage order of A
        trans: Op applied to A
        m: Rows of A
        n: Columns of A
        alpha: Scalar multiplying op(A) @ x
        A: Buffer holding the m x n matrix A
        lda: Leading dimension of A
        x: Buffer holding x (length n for NoTrans, m otherwise)
        incx: Non-zero stride of x
        beta: Scalar multiplying y; when 0, y is not read
        y: Writeable buffer holding y (length m for NoTrans, n otherwise)
        incy: Non-zero stride of y

    Raises:
        ValidationError: Naming the first invalid parameter
    """
    if checks_enabled():
        check_option(layout, Layout, 'layout')
        check_option(trans, Op, 'trans')
        check_dimension(m, 'm')
        check_dimension(n, 'n')
        check_ld(lda, m, n, layout, 'lda')
        check_increment(incx, 'incx')
        check_increment(incy, 'incy')

    lenx, leny = (n, m) if trans == Op.NoTrans else (m, n)
    a = matrix_operand(A, m, n, lda, layout, 'A')
    xv = vector_operand(x, lenx, incx, 'x')
    yv = vector_operand(y, leny, incy, 'y', writable=True)
    kernels.gemv(trans, alpha, a, xv, beta, yv)


def _rank1(kernel, layout, m, n, alpha, x, incx, y, incy, A, lda) -> None:
    if checks_enabled():
        check_option(layout, Layout, 'layout')
        check_dimension(m, 'm')
        check_dimension(n, 'n')
        check_increment(incx, 'incx')
        check_increment(incy, 'incy')
        check_ld(lda, m, n, layout, 'lda')

    xv = vector_operand(x, m, incx, 'x')
    yv = vector_operand(y, n, incy, 'y')
    a = matrix_operand(A, m, n, lda, layout, 'A', writable=True)
    kernel(alpha, xv, yv, a)


def ger(
    layout: Layout,
    m: int,
    n: int,
    alpha: Any,
    x: ArrayLike,
    incx: int,
    y: ArrayLike,
    incy: int,
    A: NDArray[Any],
    lda: int,
) -> None:
    """Rank-1 update A := alpha * x @ y^H + A."""
    _rank1(kernels.ger, layout, m, n, alpha, x, incx, y, incy, A, lda)


def geru(
    layout: Layout,
    m: int,
    n: int,
    alpha: Any,
    x: ArrayLike,
    incx: int,
    y: ArrayLike,
    incy: int,
    A: NDArray[Any],
    lda: int,
) -> None:
    """Rank-1 update A := alpha * x @ y^T + A."""
    _rank1(kernels.geru, layout, m, n, alpha, x, incx, y, incy, A, lda)


def _structured_mv(kernel, layout, uplo, n, alpha, A, lda, x, incx, beta, y, incy) -> None:
    if checks_enabled():
        check_option(layout, Layout, 'layout')
        check_option(uplo, Uplo, 'uplo')
        check_dimension(n, 'n')
        check_ld(lda, n, n, layout, 'lda')
        check_increment(incx, 'incx')
        check_increment(incy, 'incy')

    a = matrix_operand(A, n, n, lda, layout, 'A')
    xv = vector_operand(x, n, incx, 'x')
    yv = vector_operand(y, n, incy, 'y', writable=True)
    kernel(uplo, alpha, a, xv, beta, yv)


def hemv(
    layout: Layout,
    uplo: Uplo,
    n: int,
    alpha: Any,
    A: ArrayLike,
    lda: int,
    x: ArrayLike,
    incx: int,
    beta: Any,
    y: NDArray[Any],
    incy: int,
) -> None:
    """
    Hermitian matrix-vector product y := alpha * A @ x + beta * y.

    Only the uplo triangle of A is read and the imaginary part of its
    diagonal is ignored.
    """
    _structured_mv(kernels.hemv, layout, uplo, n, alpha, A, lda, x, incx, beta, y, incy)


def symv(
    layout: Layout,
    uplo: Uplo,
    n: int,
    alpha: Any,
    A: ArrayLike,
    lda: int,
    x: ArrayLike,
    incx: int,
    beta: Any,
    y: NDArray[Any],
    incy: int,
) -> None:
    """Symmetric matrix-vector product y := alpha * A @ x + beta * y."""
    _structured_mv(kernels.symv, layout, uplo, n, alpha, A, lda, x, incx, beta, y, incy)


def _structured_update(kernel, layout, uplo, n, alpha, vectors, A, lda) -> None:
    if checks_enabled():
        check_option(layout, Layout, 'layout')
        check_option(uplo, Uplo, 'uplo')
        check_dimension(n, 'n')
        for name, _, inc in vectors:
            check_increment(inc, f'inc{name}')
        check_ld(lda, n, n, layout, 'lda')

    views = [vector_operand(buf, n, inc, name) for name, buf, inc in vectors]
    a = matrix_operand(A, n, n, lda, layout, 'A', writable=True)
    kernel(uplo, alpha, *views, a)


def her(
    layout: Layout,
    uplo: Uplo,
    n: int,
    alpha: Any,
    x: ArrayLike,
    incx: int,
    A: NDArray[Any],
    lda: int,
) -> None:
    """
    Hermitian rank-1 update A := alpha * x @ x^H + A, alpha real.

    The updated diagonal of A has zero imaginary part.
    """
    _structured_update(kernels.her, layout, uplo, n, alpha, [('x', x, incx)], A, lda)


def her2(
    layout: Layout,
    uplo: Uplo,
    n: int,
    alpha: Any,
    x: ArrayLike,
    incx: int,
    y: ArrayLike,
    incy: int,
    A: NDArray[Any],
    lda: int,
) -> None:
    """
    Hermitian rank-2 update A := alpha * x @ y^H + conj(alpha) * y @ x^H + A.

    The updated diagonal of A has zero imaginary part.
    """
    _structured_update(kernels.her2, layout, uplo, n, alpha,
                       [('x', x, incx), ('y', y, incy)], A, lda)


def syr(
    layout: Layout,
    uplo: Uplo,
    n: int,
    alpha: Any,
    x: ArrayLike,
    incx: int,
    A: NDArray[Any],
    lda: int,
) -> None:
    """Symmetric rank-1 update A := alpha * x @ x^T + A."""
    _structured_update(kernels.syr, layout, uplo, n, alpha, [('x', x, incx)], A, lda)


def syr2(
    layout: Layout,
    uplo: Uplo,
    n: int,
    alpha: Any,
    x: ArrayLike,
    incx: int,
    y: ArrayLike,
    incy: int,
    A: NDArray[Any],
    lda: int,
) -> None:
    """Symmetric rank-2 update A := alpha * x @ y^T + alpha * y @ x^T + A."""
    _structured_update(kernels.syr2, layout, uplo, n, alpha,
                       [('x', x, incx), ('y', y, incy)], A, lda)


def _triangular(kernel, layout, uplo, trans, diag, n, A, lda, x, incx) -> None:
    if checks_enabled():
        check_option(layout, Layout, 'layout')
        check_option(uplo, Uplo, 'uplo')
        check_option(trans, Op, 'trans')
        check_option(diag, Diag, 'diag')
        check_dimension(n, 'n')
        check_ld(lda, n, n, layout, 'lda')
        check_increment(incx, 'incx')

    a = matrix_operand(A, n, n, lda, layout, 'A')
    xv = vector_operand(x, n, incx, 'x', writable=True)
    kernel(uplo, trans, diag, a, xv)


def trmv(
    layout: Layout,
    uplo: Uplo,
    trans: Op,
    diag: Diag,
    n: int,
    A: ArrayLike,
    lda: int,
    x: NDArray[Any],
    incx: int,
) -> None:
    """
    Triangular matrix-vector product x := op(A) @ x.

    With Diag.Unit the diagonal of A is never read.
    """
    _triangular(kernels.trmv, layout, uplo, trans, diag, n, A, lda, x, incx)


def trsv(
    layout: Layout,
    uplo: Uplo,
    trans: Op,
    diag: Diag,
    n: int,
    A: ArrayLike,
    lda: int,
    x: NDArray[Any],
    incx: int,
) -> None:
    """
    Triangular solve x := op(A)^-1 @ x.

    With Diag.Unit the diagonal of A is never read. No singularity test is
    performed: a zero on the diagonal yields inf/NaN in x.
    """
    _triangular(kernels.trsv, layout, uplo, trans, diag, n, A, lda, x, incx)
