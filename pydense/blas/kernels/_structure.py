"""
Helpers for structured (triangular, symmetric, Hermitian) operands.

Every helper here builds what it returns from the referenced triangle
only. np.triu/np.tril select with np.where, so whatever is stored in the
other half (including NaN) never reaches the arithmetic.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pydense.core.types import Op, Uplo


def apply_op(a: NDArray[Any], trans: Op) -> NDArray[Any]:
    """op(A): A, A.T (view) or A.conj().T."""
    if trans == Op.NoTrans:
        return a
    if trans == Op.Trans:
        return a.T
    return a.conj().T


def effective_triangle(a: NDArray[Any], uplo: Uplo, trans: Op) -> tuple[NDArray[Any], bool]:
    """
    op(A) for a triangular A, with the triangle it occupies.

    Returns:
        Tuple (op(A), lower) where lower tells whether op(A) is lower
        triangular
    """
    lower = (uplo == Uplo.Lower) != (trans != Op.NoTrans)
    return apply_op(a, trans), lower


def multiply(t: NDArray[Any], lower: bool, unit: bool, b: NDArray[Any]) -> None:
    """
    Compute B := T B in place for a triangular T, column-oriented.

    Args:
        t: Square matrix; only its lower or upper triangle is read, and
            its diagonal only when unit is False
        lower: T is lower triangular
        unit: T has an implicit unit diagonal
        b: 2-D right-hand operand, overwritten with the product

    Zero entries of B contribute nothing, so an inf or NaN in B reaches
    only the rows of the product that depend on it.
    """
    n = t.shape[0]
    order = range(n - 1, -1, -1) if lower else range(n)
    with np.errstate(invalid='ignore', over='ignore'):
        for j in order:
            nz = b[j] != 0
            if not nz.any():
                continue
            bj = b[j, nz]
            if lower and j + 1 < n:
                b[j + 1:, nz] += np.outer(t[j + 1:, j], bj)
            elif not lower and j > 0:
                b[:j, nz] += np.outer(t[:j, j], bj)
            if not unit:
                b[j, nz] = bj * t[j, j]


def symmetric_full(a: NDArray[Any], uplo: Uplo) -> NDArray[Any]:
    """Dense symmetric matrix built from the referenced triangle."""
    strict = np.triu(a, 1) if uplo == Uplo.Upper else np.tril(a, -1)
    full = strict + strict.T
    np.fill_diagonal(full, np.diagonal(a))
    return full


def hermitian_full(a: NDArray[Any], uplo: Uplo) -> NDArray[Any]:
    """
    Dense Hermitian matrix built from the referenced triangle.

    The imaginary part of the stored diagonal is never read.
    """
    strict = np.triu(a, 1) if uplo == Uplo.Upper else np.tril(a, -1)
    full = strict + strict.conj().T
    np.fill_diagonal(full, np.diagonal(a).real)
    return full


def triangle_indices(n: int, uplo: Uplo, k: int = 0) -> tuple[NDArray[np.intp], NDArray[np.intp]]:
    """Row/column indices of the referenced triangle, offset k from the diagonal."""
    if uplo == Uplo.Upper:
        return np.triu_indices(n, k)
    return np.tril_indices(n, -k)


def scale_in_place(c: NDArray[Any], beta: Any) -> None:
    """
    c := beta * c.

    beta == 0 overwrites c with zeros without reading it; beta == 1 leaves
    c untouched.
    """
    if beta == 0:
        c[...] = 0
    elif beta != 1:
        c *= beta


def update_triangle(
    c: NDArray[Any],
    uplo: Uplo,
    beta: Any,
    update: NDArray[Any] | None,
    hermitian: bool,
) -> None:
    """
    C := beta * C + update on the referenced triangle of C only.

    Args:
        c: Square output, written only on the uplo triangle
        uplo: Triangle of C that is referenced
        beta: Scaling of the prior contents; 0 means C is not read
        update: Contribution to add, or None for pure scaling
        hermitian: Force the diagonal to be real, reading only the real
            part of the stored diagonal
    """
    n = c.shape[0]
    rows, cols = triangle_indices(n, uplo, k=1 if hermitian else 0)

    if beta == 0:
        c[rows, cols] = 0 if update is None else update[rows, cols]
    elif beta == 1:
        if update is not None:
            c[rows, cols] += update[rows, cols]
    else:
        c[rows, cols] = beta * c[rows, cols]
        if update is not None:
            c[rows, cols] += update[rows, cols]

    if hermitian:
        if beta == 0:
            diag = np.zeros(n, dtype=c.real.dtype)
        else:
            diag = np.diagonal(c).real.copy()
            if beta != 1:
                diag = beta * diag
        if update is not None:
            diag = diag + np.diagonal(update).real
        np.fill_diagonal(c, diag)


def substitute(t: NDArray[Any], lower: bool, unit: bool, b: NDArray[Any]) -> None:
    """
    Solve T X = B in place for a triangular T, column-oriented.

    Args:
        t: Square matrix; only its lower or upper triangle is read, and
            its diagonal only when unit is False
        lower: T is lower triangular
        unit: T has an implicit unit diagonal
        b: 2-D right-hand sides, overwritten with X

    Division by an exact zero on the diagonal yields IEEE inf/NaN, never an
    exception.
    """
    n = t.shape[0]
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        if lower:
            for j in range(n):
                if not unit:
                    b[j] /= t[j, j]
                if j + 1 < n:
                    b[j + 1:] -= np.outer(t[j + 1:, j], b[j])
        else:
            for j in range(n - 1, -1, -1):
                if not unit:
                    b[j] /= t[j, j]
                if j > 0:
                    b[:j] -= np.outer(t[:j, j], b[j])
