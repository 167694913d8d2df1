"""
Level 1 BLAS: vector-vector operations.

Every routine takes flat 1-D buffers with a logical length n and a stride
per vector, in the classic BLAS parameter order:

    >>> x = np.array([1.0, -2.0, 3.0])
    >>> asum(3, x, 1)
    6.0
    >>> axpy(3, 2.0, x, 1, y, 1)   # y := 2 x + y, in place

Conventions:
    - n <= 0 is a no-op; reductions return the additive identity and
      iamax returns INVALID_INDEX.
    - A zero stride is an error naming the stride. asum, iamax, nrm2 and
      scal also reject negative strides; every other routine accepts them,
      element 0 then being the last one in storage.
    - Outputs are written in place and must be writeable numpy arrays.
    - rotm and rotmg are defined for real data only.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pydense.core.config import checks_enabled
from pydense.core.exceptions import ValidationError
from pydense.core.precision import accumulate_squares, blue_constants, combine_squares
from pydense.core.types import INVALID_INDEX, is_complex, real_type, scalar_type
from pydense.core.validation import (
    check_buffer,
    check_buffer_length,
    check_increment,
    check_real,
)
from pydense.blas._arguments import vector_operand


# =====================================================================
# Reductions
# =====================================================================

def asum(n: int, x: ArrayLike, incx: int) -> np.floating:
    """
    Sum of magnitudes.

    Real data sums |x_i|; complex data sums |Re x_i| + |Im x_i|.

    Args:
        n: Number of elements
        x: Buffer holding x
        incx: Positive stride of x

    Returns:
        Scalar of the real type of x; zero when n <= 0
    """
    if checks_enabled():
        check_increment(incx, 'incx', positive=True)
    xv = vector_operand(x, n, incx, 'x').array
    rt = real_type(xv.dtype)
    if n <= 0:
        return rt.type(0)
    if is_complex(xv.dtype):
        return rt.type(np.sum(np.abs(xv.real) + np.abs(xv.imag), dtype=rt))
    return rt.type(np.sum(np.abs(xv), dtype=rt))


def dot(n: int, x: ArrayLike, incx: int, y: ArrayLike, incy: int) -> np.number:
    """
    Conjugated inner product sum(conj(x_i) * y_i).

    Returns:
        Scalar of the promoted type of x and y; zero when n <= 0
    """
    if checks_enabled():
        check_increment(incx, 'incx')
        check_increment(incy, 'incy')
    xv = vector_operand(x, n, incx, 'x').array
    yv = vector_operand(y, n, incy, 'y').array
    t = scalar_type(xv, yv)
    if n <= 0:
        return t.type(0)
    return t.type(np.vdot(xv, yv))


def dotu(n: int, x: ArrayLike, incx: int, y: ArrayLike, incy: int) -> np.number:
    """
    Unconjugated inner product sum(x_i * y_i).

    Returns:
        Scalar of the promoted type of x and y; zero when n <= 0
    """
    if checks_enabled():
        check_increment(incx, 'incx')
        check_increment(incy, 'incy')
    xv = vector_operand(x, n, incx, 'x').array
    yv = vector_operand(y, n, incy, 'y').array
    t = scalar_type(xv, yv)
    if n <= 0:
        return t.type(0)
    return t.type(np.dot(xv, yv))


def iamax(n: int, x: ArrayLike, incx: int) -> int:
    """
    Index of the element of largest magnitude.

    Magnitude is |x_i| for real data and |Re x_i| + |Im x_i| for complex
    data. Ties resolve to the first occurrence; if x holds a NaN, the index
    of the first NaN is returned.

    Returns:
        0-based index, or INVALID_INDEX when n <= 0
    """
    if checks_enabled():
        check_increment(incx, 'incx', positive=True)
    xv = vector_operand(x, n, incx, 'x').array
    if n <= 0:
        return INVALID_INDEX
    if is_complex(xv.dtype):
        magnitude = np.abs(xv.real) + np.abs(xv.imag)
    else:
        magnitude = np.abs(xv)
    # argmax returns the first NaN when there is one
    return int(np.argmax(magnitude))


def nrm2(n: int, x: ArrayLike, incx: int) -> np.floating:
    """
    Euclidean norm, computed with Blue's scaling so that neither overflow
    nor harmful underflow can occur in intermediate squares.

    Returns:
        Scalar of the real type of x; zero when n <= 0
    """
    if checks_enabled():
        check_increment(incx, 'incx', positive=True)
    xv = vector_operand(x, n, incx, 'x').array
    rt = real_type(xv.dtype)
    if n <= 0:
        return rt.type(0)
    scale, sumsq = combine_squares(accumulate_squares(xv, xv.dtype), xv.dtype)
    return rt.type(scale * np.sqrt(sumsq))


# =====================================================================
# Updates
# =====================================================================

def axpy(n: int, alpha: Any, x: ArrayLike, incx: int, y: NDArray[Any], incy: int) -> None:
    """
    y := alpha * x + y.

    alpha == 0 leaves y unread and unwritten.
    """
    if checks_enabled():
        check_increment(incx, 'incx')
        check_increment(incy, 'incy')
    xv = vector_operand(x, n, incx, 'x')
    yv = vector_operand(y, n, incy, 'y', writable=True)
    if n <= 0 or alpha == 0:
        return
    yv.array[...] += alpha * xv.array


def copy(n: int, x: ArrayLike, incx: int, y: NDArray[Any], incy: int) -> None:
    """y := x."""
    if checks_enabled():
        check_increment(incx, 'incx')
        check_increment(incy, 'incy')
    xv = vector_operand(x, n, incx, 'x')
    yv = vector_operand(y, n, incy, 'y', writable=True)
    if n <= 0:
        return
    yv.array[...] = xv.array


def scal(n: int, alpha: Any, x: NDArray[Any], incx: int) -> None:
    """x := alpha * x."""
    if checks_enabled():
        check_increment(incx, 'incx', positive=True)
    xv = vector_operand(x, n, incx, 'x', writable=True)
    if n <= 0:
        return
    xv.array[...] *= alpha


def swap(n: int, x: NDArray[Any], incx: int, y: NDArray[Any], incy: int) -> None:
    """Exchange the elements of x and y."""
    if checks_enabled():
        check_increment(incx, 'incx')
        check_increment(incy, 'incy')
    xv = vector_operand(x, n, incx, 'x', writable=True).array
    yv = vector_operand(y, n, incy, 'y', writable=True).array
    if n <= 0:
        return
    saved = xv.copy()
    xv[...] = yv
    yv[...] = saved


# =====================================================================
# Plane rotations
# =====================================================================

def rot(
    n: int,
    x: NDArray[Any],
    incx: int,
    y: NDArray[Any],
    incy: int,
    c: Any,
    s: Any,
) -> None:
    """
    Apply a plane rotation to the pairs (x_i, y_i).

        x_i :=  c * x_i + s * y_i
        y_i := -conj(s) * x_i + c * y_i

    c is real; s is real or complex. (c, s) == (1, 0) is a no-op.
    """
    if checks_enabled():
        check_increment(incx, 'incx')
        check_increment(incy, 'incy')
    xv = vector_operand(x, n, incx, 'x', writable=True).array
    yv = vector_operand(y, n, incy, 'y', writable=True).array
    if n <= 0 or (c == 1 and s == 0):
        return
    rotated = c * xv + s * yv
    yv[...] = c * yv - np.conj(s) * xv
    xv[...] = rotated


def rotg(a: Any, b: Any) -> tuple[Any, Any, Any]:
    """
    Construct a plane rotation that zeroes b.

    Finds (c, s, r) such that

        [  c        s ] [ a ]   [ r ]
        [ -conj(s)  c ] [ b ] = [ 0 ]

    with c real. Real inputs use the scaled algorithm and give r the sign
    of whichever of a, b is larger in magnitude. Complex inputs give r the
    phase of a. b == 0 yields (1, 0, a).

    Returns:
        Tuple (c, s, r); c is of the real type, s and r of the input type
    """
    t = scalar_type(a, b)
    if not np.issubdtype(t, np.inexact):
        t = np.dtype(np.float64)
    a, b = t.type(a), t.type(b)
    if is_complex(t):
        return _rotg_complex(a, b)
    return _rotg_real(a, b)


def _rotg_real(a, b):
    rt = a.dtype.type
    zero, one = rt(0), rt(1)
    anorm, bnorm = abs(a), abs(b)
    if bnorm == 0:
        return one, zero, a
    if anorm == 0:
        return zero, one, b

    consts = blue_constants(a.dtype)
    scl = min(consts.safmax, max(consts.safmin, anorm, bnorm))
    roe = a if anorm > bnorm else b
    r = np.copysign(one, roe) * (scl * np.sqrt((a / scl) ** 2 + (b / scl) ** 2))
    return rt(a / r), rt(b / r), rt(r)


def _rotg_complex(a, b):
    rt = real_type(a.dtype).type
    anorm = abs(a)
    if anorm == 0:
        return rt(0), a.dtype.type(1), b
    scale = anorm + abs(b)
    norm = scale * np.sqrt(abs(a / scale) ** 2 + abs(b / scale) ** 2)
    phase = a / anorm
    c = rt(anorm / norm)
    s = a.dtype.type(phase * np.conj(b) / norm)
    r = a.dtype.type(phase * norm)
    return c, s, r


def rotm(
    n: int,
    x: NDArray[Any],
    incx: int,
    y: NDArray[Any],
    incy: int,
    param: ArrayLike,
) -> None:
    """
    Apply a modified plane rotation H to the pairs (x_i, y_i).

        [ x_i ]     [ h11 h12 ] [ x_i ]
        [ y_i ] :=  [ h21 h22 ] [ y_i ]

    param = (flag, h11, h21, h12, h22); the flag selects which entries are
    read:

        flag == -2   H is the identity, nothing is done
        flag <  0    all four entries are read
        flag == 0    h11 = h22 = 1, the off-diagonal is read
        flag >  0    h12 = 1, h21 = -1, the diagonal is read

    Real data only.
    """
    if checks_enabled():
        check_increment(incx, 'incx')
        check_increment(incy, 'incy')
    xv = vector_operand(x, n, incx, 'x', writable=True).array
    yv = vector_operand(y, n, incy, 'y', writable=True).array
    p = check_buffer(param, 'param') if checks_enabled() else np.asarray(param)
    if checks_enabled():
        check_real(xv, 'x')
        check_real(yv, 'y')
        check_real(p, 'param')
        check_buffer_length(p, 5, 'param')

    flag = p[0]
    if n <= 0 or flag == -2:
        return
    if flag < 0:
        h11, h21, h12, h22 = p[1], p[2], p[3], p[4]
        new_x = h11 * xv + h12 * yv
        yv[...] = h21 * xv + h22 * yv
    elif flag == 0:
        h21, h12 = p[2], p[3]
        new_x = xv + h12 * yv
        yv[...] = h21 * xv + yv
    else:
        h11, h22 = p[1], p[4]
        new_x = h11 * xv + yv
        yv[...] = -xv + h22 * yv
    xv[...] = new_x


# Rescaling factor of rotmg
_GAM = 4096.0


def rotmg(d1: Any, d2: Any, x1: Any, y1: Any) -> tuple[Any, Any, Any, NDArray[Any]]:
    """
    Construct a modified plane rotation.

    Finds H such that the second component of H [sqrt(d1) x1, sqrt(d2) y1]^T
    is zero, keeping the scale factors d1, d2 within [1/4096**2, 4096**2].

    Args:
        d1, d2: Scale factors; d1 must be non-negative
        x1, y1: Components of the input vector

    Returns:
        Tuple (d1, d2, x1, param) with the updated scale factors, the
        rotated first component, and param in the layout read by rotm

    Raises:
        ValidationError: If an argument is complex or d1 is negative
    """
    if checks_enabled():
        for name, value in (('d1', d1), ('d2', d2), ('x1', x1), ('y1', y1)):
            if np.iscomplexobj(value):
                raise ValidationError(f"{name}: real value required, got {value!r}", parameter=name)
        if d1 < 0:
            raise ValidationError(f"d1: scale factor must be non-negative, got {d1!r}",
                                  parameter='d1')

    t = real_type(scalar_type(d1, d2, x1, y1))
    rt = t.type
    d1, d2, x1, y1 = rt(d1), rt(d2), rt(x1), rt(y1)
    zero, one = rt(0), rt(1)
    gam = rt(_GAM)
    gamsq = gam * gam
    rgamsq = one / gamsq

    h11 = h12 = h21 = h22 = zero
    param = np.zeros(5, dtype=t)

    p2 = d2 * y1
    if p2 == 0:
        param[0] = -2
        return d1, d2, x1, param

    p1 = d1 * x1
    q2 = p2 * y1
    q1 = p1 * x1

    if abs(q1) > abs(q2):
        h21 = -y1 / x1
        h12 = p2 / p1
        u = one - h12 * h21
        if u > 0:
            flag = zero
            d1, d2, x1 = d1 / u, d2 / u, x1 * u
        else:
            # Only reachable through rounding
            flag = -one
            h11 = h12 = h21 = h22 = zero
            d1 = d2 = x1 = zero
    elif q2 < 0:
        flag = -one
        h11 = h12 = h21 = h22 = zero
        d1 = d2 = x1 = zero
    else:
        flag = one
        h11 = p1 / p2
        h22 = x1 / y1
        u = one + h11 * h22
        d1, d2 = d2 / u, d1 / u
        x1 = y1 * u

    if d1 != 0:
        while d1 <= rgamsq or d1 >= gamsq:
            if flag == 0:
                h11 = h22 = one
            elif flag > 0:
                h21, h12 = -one, one
            flag = -one
            if d1 <= rgamsq:
                d1 *= gamsq
                x1 /= gam
                h11 /= gam
                h12 /= gam
            else:
                d1 /= gamsq
                x1 *= gam
                h11 *= gam
                h12 *= gam

    if d2 != 0:
        while abs(d2) <= rgamsq or abs(d2) >= gamsq:
            if flag == 0:
                h11 = h22 = one
            elif flag > 0:
                h21, h12 = -one, one
            flag = -one
            if abs(d2) <= rgamsq:
                d2 *= gamsq
                h21 /= gam
                h22 /= gam
            else:
                d2 /= gamsq
                h21 *= gam
                h22 *= gam

    param[0] = flag
    if flag < 0:
        param[1:] = (h11, h21, h12, h22)
    elif flag == 0:
        param[2], param[3] = h21, h12
    else:
        param[1], param[4] = h11, h22
    return d1, d2, x1, param
