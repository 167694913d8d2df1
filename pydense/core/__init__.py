"""
Core infrastructure for pydense.

Shared abstractions used by the BLAS kernels and the LAPACK auxiliaries.

Key components:
    types: Option enums (Layout, Op, Uplo, Diag, Side) and scalar traits
    views: Vector/Matrix views, access policies, the leading-one adapter
    protocols: StridedVector, WritableVector, StridedMatrix protocols
    exceptions: Exception hierarchy
    validation: Argument checks
    config: Checked/unchecked mode and backend selection
    precision: Machine constants and Blue's scaled sums of squares
    tolerances: Comparison tolerance tiers
"""

from pydense.core.exceptions import (
    PyDenseError,
    ValidationError,
    DimensionError,
    AccessDeniedError,
)
from pydense.core.types import (
    INVALID_INDEX,
    Layout,
    Op,
    Uplo,
    Diag,
    Side,
    is_complex,
    real_type,
    complex_type,
    scalar_type,
)
from pydense.core.views import (
    AccessPolicy,
    Vector,
    Matrix,
    VectorStartingWithOne,
    access_denied,
    size,
    subvector,
)
from pydense.core.protocols import StridedVector, WritableVector, StridedMatrix
from pydense.core.config import KernelConfig, configure, config_context, get_config

__all__ = [
    # Exceptions
    "PyDenseError",
    "ValidationError",
    "DimensionError",
    "AccessDeniedError",
    # Options and traits
    "INVALID_INDEX",
    "Layout",
    "Op",
    "Uplo",
    "Diag",
    "Side",
    "is_complex",
    "real_type",
    "complex_type",
    "scalar_type",
    # Views
    "AccessPolicy",
    "Vector",
    "Matrix",
    "VectorStartingWithOne",
    "access_denied",
    "size",
    "subvector",
    # Protocols
    "StridedVector",
    "WritableVector",
    "StridedMatrix",
    # Configuration
    "KernelConfig",
    "configure",
    "config_context",
    "get_config",
]
