"""
Structural interfaces for kernel operands.

Kernels are written against these protocols rather than against concrete
array types. We use Protocol (structural typing) rather than ABC (nominal
typing) so that any container with the right shape of interface can be
passed, including computed views that own no storage.

Design Principles:
    - Minimal contracts: size, element access, and sub-range slicing
    - Writable operands additionally expose a numpy view of their storage
"""

from typing import Any, Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray


@runtime_checkable
class StridedVector(Protocol):
    """
    Minimal protocol for a read-only logical vector.

    Implementations may be backed by strided storage (Vector) or computed
    on the fly (VectorStartingWithOne).
    """

    def __len__(self) -> int:
        """Number of logical elements."""
        ...

    def __getitem__(self, i: int) -> Any:
        """Logical element i, 0 <= i < len(self)."""
        ...

    def subvector(self, start: int, stop: int) -> 'StridedVector':
        """
        View of the logical elements [start, stop).

        The result must not copy data out of the parent; writes through a
        writable subvector are visible in the parent.
        """
        ...


@runtime_checkable
class WritableVector(StridedVector, Protocol):
    """A vector whose storage can be updated in place through a numpy view."""

    @property
    def array(self) -> NDArray[Any]:
        """1-D numpy view of the logical elements (no copy)."""
        ...


@runtime_checkable
class StridedMatrix(Protocol):
    """
    Minimal protocol for a logical m x n matrix.

    The write policy tells callers which region of the matrix they may
    write; kernels that update a full matrix check it before writing.
    """

    @property
    def shape(self) -> tuple[int, int]:
        """Logical (rows, columns)."""
        ...

    @property
    def array(self) -> NDArray[Any]:
        """2-D numpy view of the logical elements (no copy)."""
        ...

    @property
    def dtype(self) -> np.dtype:
        """Scalar type of the elements."""
        ...

    @property
    def write_policy(self) -> Any:
        """AccessPolicy granted for writes."""
        ...
