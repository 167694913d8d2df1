"""
Numerical precision constants and scaled sums of squares.

Provides machine constants per floating type and Blue's algorithm for
accumulating a sum of squares without overflow or harmful underflow. The
accumulator is shared by blas.nrm2 and lapack.lassq.

Blue's constants for a type with radix b, digits t, and exponent range
[emin, emax] (Fortran conventions):
    tsml = b**ceil((emin - 1) / 2)      values below are "small"
    tbig = b**floor((emax - t + 1) / 2) values above are "big"
    ssml = b**(-floor((emin - t) / 2))  scaling for small values
    sbig = b**(-ceil((emax + t - 1) / 2)) scaling for big values
"""

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pydense.core.types import real_type


def machine_epsilon(dtype: Any = np.float64) -> float:
    """
    Get machine epsilon for a given type.

    Complex types report the epsilon of their real component.
    """
    return float(np.finfo(real_type(dtype)).eps)


@dataclass(frozen=True)
class BlueConstants:
    """Thresholds and scaling factors of Blue's algorithm for one real type."""
    tsml: np.floating
    tbig: np.floating
    ssml: np.floating
    sbig: np.floating
    safmin: np.floating
    safmax: np.floating


@lru_cache(maxsize=None)
def blue_constants(dtype: Any) -> BlueConstants:
    """
    Blue's scaling constants for the real type associated with dtype.

    Args:
        dtype: Any real or complex floating type

    Returns:
        BlueConstants with every field of the real type
    """
    rt = real_type(dtype)
    info = np.finfo(rt)
    t = info.nmant + 1
    # numpy's minexp is one below the Fortran MINEXPONENT
    emin = info.minexp + 1
    emax = info.maxexp
    two = rt.type(2)
    return BlueConstants(
        tsml=two ** math.ceil((emin - 1) * 0.5),
        tbig=two ** math.floor((emax - t + 1) * 0.5),
        ssml=two ** (-math.floor((emin - t) * 0.5)),
        sbig=two ** (-math.ceil((emax + t - 1) * 0.5)),
        safmin=rt.type(info.tiny),
        safmax=rt.type(1) / rt.type(info.tiny),
    )


@dataclass(frozen=True)
class ScaledSums:
    """
    Partial sums of squares split by magnitude class.

    Attributes:
        asml: Sum of (x * ssml)**2 over small values (only if no big value)
        amed: Sum of x**2 over mid-range values
        abig: Sum of (x * sbig)**2 over big values
        notbig: True if no value exceeded tbig
    """
    asml: np.floating
    amed: np.floating
    abig: np.floating
    notbig: bool


def accumulate_squares(values: NDArray[Any], dtype: Any) -> ScaledSums:
    """
    Split a sum of squares into Blue's three accumulators.

    Complex values contribute their real and imaginary parts as separate
    terms. NaN values land in the mid-range accumulator and propagate.

    Args:
        values: 1-D array of real or complex values
        dtype: Scalar type whose constants to use

    Returns:
        ScaledSums for the values
    """
    c = blue_constants(dtype)
    if np.iscomplexobj(values):
        ax = np.abs(np.concatenate([values.real, values.imag]))
    else:
        ax = np.abs(values)
    ax = ax.astype(real_type(dtype), copy=False)

    big = ax > c.tbig
    small = ax < c.tsml
    med = ~(big | small)
    notbig = not bool(big.any())

    zero = real_type(dtype).type(0)
    abig = np.sum((ax[big] * c.sbig) ** 2, dtype=ax.dtype) if not notbig else zero
    asml = np.sum((ax[small] * c.ssml) ** 2, dtype=ax.dtype) if notbig else zero
    amed = np.sum(ax[med] ** 2, dtype=ax.dtype)
    return ScaledSums(asml=asml, amed=amed, abig=abig, notbig=notbig)


def combine_squares(sums: ScaledSums, dtype: Any) -> tuple[np.floating, np.floating]:
    """
    Combine Blue's accumulators into a (scale, sumsq) pair.

    The represented sum of squares is scale**2 * sumsq.

    Args:
        sums: Accumulators from accumulate_squares (possibly merged)
        dtype: Scalar type whose constants to use

    Returns:
        Tuple (scale, sumsq)
    """
    c = blue_constants(dtype)
    rt = real_type(dtype).type
    one = rt(1)
    asml, amed, abig = sums.asml, sums.amed, sums.abig

    if abig > 0:
        # Combine abig and amed if abig > 0
        if amed > 0 or np.isnan(amed):
            abig = abig + (amed * c.sbig) * c.sbig
        return one / c.sbig, rt(abig)
    if asml > 0:
        # Combine amed and asml if asml > 0
        if amed > 0 or np.isnan(amed):
            amed = np.sqrt(amed)
            asml = np.sqrt(asml) / c.ssml
            ymin, ymax = (amed, asml) if asml > amed else (asml, amed)
            return one, rt(ymax ** 2 * (one + (ymin / ymax) ** 2))
        return one / c.ssml, rt(asml)
    return one, rt(amed)
