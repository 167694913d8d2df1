"""
Tolerance tiers for numerical validation.

Defines precision expectations for results compared against a dense numpy
reference:
- FP64 / complex128: a few hundred ulps of machine precision
- FP32 / complex64: relaxed for single-precision arithmetic
- Extended precision: same as FP64 (the numpy reference is computed in FP64)

Used by the test suite and by callers checking kernel output.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np

from pydense.core.types import real_type


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerances for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Double precision: agrees with numpy's own FP64 products
FP64 = ToleranceTier(
    rtol=1e-12,
    atol=1e-13,
    name='fp64',
    description='Double precision, matches the numpy reference',
)

# Double precision, long reductions or triangular solves
FP64_ACCUMULATED = ToleranceTier(
    rtol=1e-9,
    atol=1e-11,
    name='fp64_accumulated',
    description='Double precision after substitution or long accumulation',
)

# Single precision
FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='fp32',
    description='Single precision, rounding of float32 arithmetic',
)

# Single precision, long reductions or triangular solves
FP32_ACCUMULATED = ToleranceTier(
    rtol=1e-2,
    atol=1e-3,
    name='fp32_accumulated',
    description='Single precision after substitution or long accumulation',
)

# Extended precision is checked against an FP64 reference
EXTENDED = FP64


def select_tolerance(dtype: Any, accumulated: bool = False) -> ToleranceTier:
    """Select the tolerance tier for results of the given scalar type."""
    rt = real_type(dtype)
    if rt.itemsize <= 4:
        return FP32_ACCUMULATED if accumulated else FP32
    if rt == np.dtype(np.float64):
        return FP64_ACCUMULATED if accumulated else FP64
    return FP64_ACCUMULATED if accumulated else EXTENDED
