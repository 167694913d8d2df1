"""
LAPACK auxiliary routines built on the pydense BLAS kernels.

    larf:  apply an elementary reflector H = I - tau v v^H
    lassq: update a scaled sum of squares
"""

from pydense.lapack.larf import larf
from pydense.lapack.lassq import lassq

__all__ = ["larf", "lassq"]
