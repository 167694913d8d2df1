"""
Backend selection for kernels with a vendor implementation.

The reference kernels in pydense.blas.kernels are always available. A
vendor backend may replace the arithmetic of a kernel once validation and
every corner-case quick return have run, so it never changes which inputs
are rejected or which buffers are left unread.

Choices (see pydense.core.config):
    'reference': always the reference kernels
    'scipy':     scipy.linalg.blas when it supports the operands, with a
                 warning when it does not
    'auto':      scipy.linalg.blas when it supports the operands, silently
                 falling back otherwise
"""

import warnings
from types import ModuleType
from typing import Any

from pydense.core.config import get_config


def select_backend(routine: str, *operands: Any) -> ModuleType | None:
    """
    Pick the vendor module for a routine call, if any.

    Args:
        routine: Kernel name ('gemv', 'gemm')
        *operands: numpy arrays taking part in the call

    Returns:
        A module exposing the routine, or None for the reference kernel
    """
    choice = get_config().backend
    if choice == 'reference':
        return None

    from pydense.blas.backends import scipy_blas

    if scipy_blas.supports(routine, *operands):
        return scipy_blas
    if choice == 'scipy':
        dtypes = ", ".join(sorted({str(getattr(op, 'dtype', type(op).__name__)) for op in operands}))
        warnings.warn(
            f"scipy BLAS cannot run {routine} on {dtypes}, using the reference kernel",
            RuntimeWarning,
            stacklevel=3,
        )
    return None


__all__ = ["select_backend"]
