"""
pydense: generic dense linear-algebra kernels for Python.

BLAS-compatible Level 1, 2 and 3 kernels over numpy storage, with the
reference corner-case semantics (no-op on empty dimensions, operands left
unread under zero scaling factors, exactly real Hermitian diagonals) and
an argument-validation contract that names the offending parameter.

Submodules:
    blas: Level 1/2/3 kernels over flat buffers; view kernels in blas.kernels
    lapack: Auxiliary routines (larf, lassq)
    core: Options, views, validation, configuration
"""

__version__ = "0.1.0"

from pydense.core import (
    INVALID_INDEX,
    Layout,
    Op,
    Uplo,
    Diag,
    Side,
    AccessPolicy,
    Vector,
    Matrix,
    VectorStartingWithOne,
    PyDenseError,
    ValidationError,
    DimensionError,
    AccessDeniedError,
    configure,
    config_context,
)
from pydense import blas
from pydense import lapack

__all__ = [
    "__version__",
    "blas",
    "lapack",
    "INVALID_INDEX",
    "Layout",
    "Op",
    "Uplo",
    "Diag",
    "Side",
    "AccessPolicy",
    "Vector",
    "Matrix",
    "VectorStartingWithOne",
    "PyDenseError",
    "ValidationError",
    "DimensionError",
    "AccessDeniedError",
    "configure",
    "config_context",
]
