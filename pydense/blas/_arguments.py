"""
Operand construction for the buffer-style BLAS surface.

The public kernels receive flat buffers plus dimensions, strides and leading
dimensions. Scalar arguments (options, dimensions, strides, leading
dimensions) are validated first, in parameter order; buffers are validated
and wrapped into views afterwards, so the error a caller sees names the
first bad parameter of the call.
"""

import numpy as np
from numpy.typing import ArrayLike

from pydense.core.config import checks_enabled
from pydense.core.types import Layout
from pydense.core.validation import (
    check_buffer,
    check_buffer_length,
    check_leading_dimension,
)
from pydense.core.views import (
    AccessPolicy,
    Matrix,
    Vector,
    matrix_extent,
    vector_extent,
)


def minor_extent(rows: int, cols: int, layout: Layout) -> int:
    """Extent along the contiguous dimension of a stored rows x cols matrix."""
    return cols if layout == Layout.RowMajor else rows


def check_ld(ld: int, rows: int, cols: int, layout: Layout, name: str) -> None:
    """Leading dimension check for a stored rows x cols matrix under layout."""
    check_leading_dimension(ld, minor_extent(rows, cols, layout), name)


def vector_operand(
    buffer: ArrayLike,
    n: int,
    inc: int,
    name: str,
    *,
    writable: bool = False,
) -> Vector:
    """
    Wrap a strided vector buffer, checking it holds n elements with stride inc.

    The stride itself must already have been validated.
    """
    if not checks_enabled():
        return Vector.from_buffer(np.asarray(buffer), n, inc)
    data = check_buffer(buffer, name, writable=writable)
    check_buffer_length(data, vector_extent(n, inc), name)
    return Vector.from_buffer(data, n, inc)


def matrix_operand(
    buffer: ArrayLike,
    rows: int,
    cols: int,
    ld: int,
    layout: Layout,
    name: str,
    *,
    writable: bool = False,
    write_policy: AccessPolicy = AccessPolicy.Dense,
) -> Matrix:
    """
    Wrap a matrix buffer, checking it spans a rows x cols matrix with
    leading dimension ld.

    The leading dimension itself must already have been validated.
    """
    if not checks_enabled():
        return Matrix.from_buffer(np.asarray(buffer), rows, cols, ld, layout,
                                  write_policy=write_policy)
    data = check_buffer(buffer, name, writable=writable)
    check_buffer_length(data, matrix_extent(rows, cols, ld, layout), name)
    return Matrix.from_buffer(data, rows, cols, ld, layout, write_policy=write_policy)
