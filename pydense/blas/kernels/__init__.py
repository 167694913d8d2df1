"""
View-level Level 2 and Level 3 kernels.

These operate on Matrix/Vector views (or plain numpy arrays) rather than on
flat buffers, and are what higher-level routines call on blocks of their
own storage. The buffer-style API in pydense.blas validates its arguments
and delegates here.
"""

from pydense.blas.kernels.level2 import (
    gemv,
    ger,
    geru,
    hemv,
    her,
    her2,
    symv,
    syr,
    syr2,
    trmv,
    trsv,
)
from pydense.blas.kernels.level3 import (
    gemm,
    hemm,
    her2k,
    herk,
    symm,
    syr2k,
    syrk,
    trmm,
    trsm,
)

__all__ = [
    # Level 2
    "gemv",
    "ger",
    "geru",
    "hemv",
    "her",
    "her2",
    "symv",
    "syr",
    "syr2",
    "trmv",
    "trsv",
    # Level 3
    "gemm",
    "hemm",
    "her2k",
    "herk",
    "symm",
    "syr2k",
    "syrk",
    "trmm",
    "trsm",
]
