"""
Application of an elementary reflector.

An elementary reflector is H = I - tau * v @ v^H, with v[0] == 1 by
convention. Factorization routines store v below the diagonal of the
matrix they reduce, reusing the slot of v[0] for something else, so the
routine here reads v through VectorStartingWithOne and never looks at the
stored v[0].
"""

from typing import Any

from pydense.core.config import checks_enabled
from pydense.core.exceptions import AccessDeniedError
from pydense.core.types import Op, Side
from pydense.core.validation import check_length, check_option
from pydense.core.views import (
    AccessPolicy,
    VectorStartingWithOne,
    access_denied,
    as_matrix,
    as_vector,
    check_writable,
    size,
)
from pydense.blas.kernels import gemv, ger


def larf(side: Side, v: Any, tau: Any, C: Any, work: Any) -> None:
    """
    Apply H = I - tau * v @ v^H to an m x n matrix C in place.

        side == Side.Left:   C := H @ C
        side == Side.Right:  C := C @ H

    tau == 0 leaves C unchanged (H is the identity).

    Args:
        side: Side.Left or Side.Right
        v: Reflector vector, length m (Left) or n (Right); its first
            element is read as one whatever is stored there
        tau: Reflector scalar
        C: Matrix view (or 2-D numpy array) updated in place; its write
            policy must grant dense access
        work: Writeable workspace vector, length n (Left) or m (Right)

    Raises:
        ValidationError: If side is not Left or Right, or a length does
            not conform
        AccessDeniedError: If C may not be written in full
    """
    C = as_matrix(C)
    v, work = as_vector(v), as_vector(work)
    m, n = C.shape
    if checks_enabled():
        check_option(side, Side, 'side')
        if access_denied(AccessPolicy.Dense, C.write_policy):
            raise AccessDeniedError(
                f"C: write policy {C.write_policy.name} does not grant dense access",
                parameter='C',
                requested=AccessPolicy.Dense,
                policy=C.write_policy,
            )
        lenv, lenw = (m, n) if side == Side.Left else (n, m)
        check_length(size(v), lenv, 'v')
        check_length(size(work), lenw, 'work')
        check_writable(work, 'work')

    if tau == 0 or m == 0 or n == 0:
        return

    v1 = VectorStartingWithOne(v)
    if side == Side.Left:
        # work := C^H v, then C := C - tau v work^H
        gemv(Op.ConjTrans, 1, C, v1, 0, work)
        ger(-tau, v1, work, C)
    else:
        # work := C v, then C := C - tau work v^H
        gemv(Op.NoTrans, 1, C, v1, 0, work)
        ger(-tau, work, v1, C)
