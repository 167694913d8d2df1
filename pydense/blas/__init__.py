"""
BLAS-compatible kernels over flat numpy buffers.

Level 1 (vector-vector), Level 2 (matrix-vector) and Level 3
(matrix-matrix) routines with the classic parameter lists:

    >>> from pydense.blas import gemm
    >>> from pydense import Layout, Op
    >>> gemm(Layout.ColMajor, Op.NoTrans, Op.NoTrans, m, n, k,
    ...      1.0, A, lda, B, ldb, 0.0, C, ldc)

View-level kernels for use on blocks of existing arrays live in
pydense.blas.kernels.
"""

from pydense.blas.level1 import (
    asum,
    axpy,
    copy,
    dot,
    dotu,
    iamax,
    nrm2,
    rot,
    rotg,
    rotm,
    rotmg,
    scal,
    swap,
)
from pydense.blas.level2 import (
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
from pydense.blas.level3 import (
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
    # Level 1
    "asum",
    "axpy",
    "copy",
    "dot",
    "dotu",
    "iamax",
    "nrm2",
    "rot",
    "rotg",
    "rotm",
    "rotmg",
    "scal",
    "swap",
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
