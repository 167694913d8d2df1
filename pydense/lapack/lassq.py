"""
Scaled sum of squares.

lassq updates a (scale, sumsq) pair representing scale**2 * sumsq so that
it also accounts for the squares of the elements of a vector:

    scale_out**2 * sumsq_out = x_1**2 + ... + x_n**2 + scale**2 * sumsq

The sum is accumulated with Blue's algorithm (see pydense.core.precision),
which is the same accumulator nrm2 uses, so long vectors of tiny or huge
values neither underflow nor overflow.
"""

from dataclasses import replace
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from pydense.core.config import checks_enabled
from pydense.core.precision import accumulate_squares, blue_constants, combine_squares
from pydense.core.types import real_type
from pydense.core.validation import check_dimension, check_increment
from pydense.blas._arguments import vector_operand


def lassq(n: int, x: ArrayLike, incx: int, scale: Any, sumsq: Any) -> tuple[Any, Any]:
    """
    Update a scaled sum of squares with the elements of x.

    Complex elements contribute their real and imaginary parts as separate
    terms.

    Args:
        n: Number of elements of x
        x: Buffer holding x
        incx: Non-zero stride of x
        scale: Input scaling factor, >= 0
        sumsq: Input scaled sum, >= 0

    Returns:
        Tuple (scale, sumsq) of the real type of x. NaN in scale or sumsq
        is returned unchanged. Otherwise sumsq == 0 resets scale to 1 and
        scale == 0 resets the pair to (1, 0), which is all that happens
        when n == 0.

    Raises:
        DimensionError: If n is negative
        ValidationError: If incx is zero
    """
    if checks_enabled():
        check_dimension(n, 'n')
        check_increment(incx, 'incx')
    xv = vector_operand(x, n, incx, 'x').array
    rt = real_type(xv.dtype).type
    scale, sumsq = rt(scale), rt(sumsq)

    if np.isnan(scale) or np.isnan(sumsq):
        return scale, sumsq
    if sumsq == 0:
        scale = rt(1)
    if scale == 0:
        scale, sumsq = rt(1), rt(0)
    if n <= 0:
        return scale, sumsq

    consts = blue_constants(xv.dtype)
    sums = accumulate_squares(xv, xv.dtype)

    # Fold the incoming pair into the matching accumulator
    if sumsq > 0:
        ax = scale * np.sqrt(sumsq)
        if ax > consts.tbig:
            if scale > 1:
                scale = scale * consts.sbig
                sums = replace(sums, abig=sums.abig + scale * (scale * sumsq), notbig=False)
            else:
                sums = replace(sums, abig=sums.abig + scale * (scale * (consts.sbig * (consts.sbig * sumsq))),
                               notbig=False)
        elif ax < consts.tsml:
            if sums.notbig:
                if scale < 1:
                    scale = scale * consts.ssml
                    sums = replace(sums, asml=sums.asml + scale * (scale * sumsq))
                else:
                    sums = replace(sums, asml=sums.asml + scale * (scale * (consts.ssml * (consts.ssml * sumsq))))
        else:
            sums = replace(sums, amed=sums.amed + scale * (scale * sumsq))

    return combine_squares(sums, xv.dtype)
