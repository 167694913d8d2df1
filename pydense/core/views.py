"""
Vector and matrix views over caller-owned storage.

Views own no data. They are built per call from a flat buffer plus
dimensions and strides (the BLAS calling convention) or from an existing
numpy array, and they expose the logical elements through numpy views so
kernels can update storage in place.

Storage conventions:
    - A vector of length n with stride inc > 0 stores element i at
      buffer[i * inc]. With inc < 0 traversal is reversed: element i is at
      buffer[(n - 1 - i) * |inc|].
    - A column-major m x n matrix with leading dimension ld stores (i, j)
      at buffer[i + j * ld]; row-major stores it at buffer[i * ld + j].

VectorStartingWithOne is a read-only adapter that substitutes one for the
first element of another vector, so an elementary reflector can be passed
to Level 2 kernels without overwriting the stored vector.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import numpy as np
from numpy.lib.stride_tricks import as_strided
from numpy.typing import NDArray

from pydense.core.exceptions import AccessDeniedError
from pydense.core.protocols import StridedMatrix, StridedVector, WritableVector
from pydense.core.types import Layout


# =====================================================================
# Access policies
# =====================================================================

# Bands of a matrix relative to the diagonal
_ABOVE_SUPER = 'above_super'
_SUPER = 'super'
_DIAG = 'diag'
_SUB = 'sub'
_BELOW_SUB = 'below_sub'


class AccessPolicy(Enum):
    """Region of a matrix that may be accessed."""
    Dense = frozenset({_ABOVE_SUPER, _SUPER, _DIAG, _SUB, _BELOW_SUB})
    UpperHessenberg = frozenset({_ABOVE_SUPER, _SUPER, _DIAG, _SUB})
    LowerHessenberg = frozenset({_SUPER, _DIAG, _SUB, _BELOW_SUB})
    UpperTriangle = frozenset({_ABOVE_SUPER, _SUPER, _DIAG})
    LowerTriangle = frozenset({_DIAG, _SUB, _BELOW_SUB})
    StrictUpper = frozenset({_ABOVE_SUPER, _SUPER})
    StrictLower = frozenset({_SUB, _BELOW_SUB})
    NoAccess = frozenset()

    def grants(self, requested: AccessPolicy) -> bool:
        """True if every entry of the requested region lies in this one."""
        return requested.value <= self.value


def access_denied(requested: AccessPolicy, policy: AccessPolicy) -> bool:
    """
    Check whether a policy withholds a requested region.

    Args:
        requested: Region an operation needs
        policy: Region the operand grants

    Returns:
        True if the access must be refused
    """
    return not policy.grants(requested)


# =====================================================================
# numpy views over flat buffers
# =====================================================================

def vector_extent(n: int, inc: int) -> int:
    """Number of buffer elements spanned by a vector of length n."""
    if n <= 0:
        return 0
    return 1 + (n - 1) * abs(inc)


def matrix_extent(m: int, n: int, ld: int, layout: Layout) -> int:
    """Number of buffer elements spanned by an m x n matrix."""
    if m <= 0 or n <= 0:
        return 0
    if layout == Layout.RowMajor:
        return (m - 1) * ld + n
    return (n - 1) * ld + m


def strided_view(buffer: NDArray[Any], n: int, inc: int) -> NDArray[Any]:
    """
    1-D numpy view of the logical elements of a strided vector.

    Args:
        buffer: 1-D storage, at least vector_extent(n, inc) long
        n: Logical length (n <= 0 gives an empty view)
        inc: Non-zero stride

    Returns:
        View sharing memory with buffer, element i is logical element i
    """
    if n <= 0:
        return buffer[:0]
    if inc > 0:
        return buffer[:(n - 1) * inc + 1:inc]
    return buffer[(n - 1) * -inc::inc]


def matrix_view(
    buffer: NDArray[Any],
    m: int,
    n: int,
    ld: int,
    layout: Layout,
) -> NDArray[Any]:
    """
    2-D numpy view of an m x n matrix stored in a flat buffer.

    Args:
        buffer: 1-D storage, at least matrix_extent(m, n, ld, layout) long
        m: Rows
        n: Columns
        ld: Leading dimension
        layout: Layout.ColMajor or Layout.RowMajor

    Returns:
        View sharing memory with buffer, writeable iff buffer is
    """
    m, n = max(m, 0), max(n, 0)
    step = buffer.strides[0]
    if layout == Layout.RowMajor:
        strides = (ld * step, step)
    else:
        strides = (step, ld * step)
    return as_strided(buffer, shape=(m, n), strides=strides,
                      writeable=buffer.flags.writeable)


# =====================================================================
# Views
# =====================================================================

class Vector:
    """
    Logical vector backed by numpy storage.

    Construction:
        Vector(array)                    # any 1-D numpy array, no copy
        Vector.from_buffer(buf, n, inc)  # BLAS-style strided storage
    """
    __slots__ = ('_data',)

    def __init__(self, data: NDArray[Any]):
        if not isinstance(data, np.ndarray) or data.ndim != 1:
            raise TypeError("Vector requires a 1-D numpy array")
        self._data = data

    @classmethod
    def from_buffer(cls, buffer: NDArray[Any], n: int, inc: int = 1) -> Vector:
        """View n elements of buffer with stride inc."""
        return cls(strided_view(buffer, n, inc))

    @property
    def array(self) -> NDArray[Any]:
        """Writable 1-D numpy view of the logical elements."""
        return self._data

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def __len__(self) -> int:
        return self._data.shape[0]

    def __getitem__(self, i: int) -> Any:
        return self._data[i]

    def __setitem__(self, i: int, value: Any) -> None:
        self._data[i] = value

    def subvector(self, start: int, stop: int) -> Vector:
        return Vector(self._data[start:stop])

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> NDArray[Any]:
        if copy:
            return np.array(self._data, dtype=dtype, copy=True)
        if dtype is None:
            return self._data
        return self._data.astype(dtype, copy=False)

    def __repr__(self) -> str:
        return f"Vector({self._data!r})"


class Matrix:
    """
    Logical m x n matrix backed by numpy storage.

    Construction:
        Matrix(array)                                  # any 2-D numpy array
        Matrix.from_buffer(buf, m, n, ld, layout)      # BLAS-style storage

    The write policy defaults to Dense for writeable storage and NoAccess
    for read-only storage. A narrower policy can be passed to restrict
    which kernels may write the matrix.
    """
    __slots__ = ('_data', '_layout', '_policy')

    def __init__(
        self,
        data: NDArray[Any],
        *,
        layout: Layout | None = None,
        write_policy: AccessPolicy = AccessPolicy.Dense,
    ):
        if not isinstance(data, np.ndarray) or data.ndim != 2:
            raise TypeError("Matrix requires a 2-D numpy array")
        self._data = data
        self._layout = layout
        self._policy = write_policy

    @classmethod
    def from_buffer(
        cls,
        buffer: NDArray[Any],
        m: int,
        n: int,
        ld: int,
        layout: Layout = Layout.ColMajor,
        *,
        write_policy: AccessPolicy = AccessPolicy.Dense,
    ) -> Matrix:
        """View an m x n matrix of buffer with leading dimension ld."""
        return cls(matrix_view(buffer, m, n, ld, layout),
                   layout=layout, write_policy=write_policy)

    @property
    def array(self) -> NDArray[Any]:
        """Writable 2-D numpy view of the logical elements."""
        return self._data

    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def layout(self) -> Layout:
        """Storage order, inferred from the strides when not given."""
        if self._layout is not None:
            return self._layout
        s0, s1 = (abs(s) for s in self._data.strides)
        return Layout.RowMajor if s1 <= s0 else Layout.ColMajor

    @property
    def ld(self) -> int:
        """Leading dimension in elements."""
        s0, s1 = (abs(s) for s in self._data.strides)
        major = s0 if self.layout == Layout.RowMajor else s1
        return max(1, major // self._data.itemsize)

    @property
    def write_policy(self) -> AccessPolicy:
        if not self._data.flags.writeable:
            return AccessPolicy.NoAccess
        return self._policy

    def __getitem__(self, ij: tuple[int, int]) -> Any:
        return self._data[ij]

    def __setitem__(self, ij: tuple[int, int], value: Any) -> None:
        self._data[ij] = value

    def submatrix(self, rows: slice, cols: slice) -> Matrix:
        """View of a rectangular block, keeping layout and write policy."""
        return Matrix(self._data[rows, cols],
                      layout=self._layout, write_policy=self._policy)

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> NDArray[Any]:
        if copy:
            return np.array(self._data, dtype=dtype, copy=True)
        if dtype is None:
            return self._data
        return self._data.astype(dtype, copy=False)

    def __repr__(self) -> str:
        return f"Matrix(shape={self.shape}, layout={self.layout.name}, policy={self.write_policy.name})"


class VectorStartingWithOne:
    """
    Read-only view of a vector whose first element reads as one.

    Element 0 is the multiplicative identity of the wrapped vector's scalar
    type, whatever is stored there; every other index is forwarded. Slicing
    keeps the substitution only while the slice still starts at the
    original element 0.
    """
    __slots__ = ('_v',)

    def __init__(self, v: Any):
        self._v = v

    @property
    def dtype(self) -> np.dtype:
        dtype = getattr(self._v, 'dtype', None)
        return np.dtype(dtype) if dtype is not None else np.asarray(self._v).dtype

    def __len__(self) -> int:
        return size(self._v)

    def __getitem__(self, i: int) -> Any:
        if i == 0 or i == -len(self):
            return self.dtype.type(1)
        return self._v[i]

    def subvector(self, start: int, stop: int) -> Any:
        if start == 0:
            return VectorStartingWithOne(subvector(self._v, start, stop))
        return subvector(self._v, start, stop)

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> NDArray[Any]:
        # Computed element: a fresh array is the only way to expose it
        out = np.array(self._v, dtype=dtype if dtype is not None else self.dtype, copy=True)
        if out.shape[0] > 0:
            out[0] = 1
        return out

    def __repr__(self) -> str:
        return f"VectorStartingWithOne({self._v!r})"


# =====================================================================
# Generic helpers
# =====================================================================

def size(x: Any) -> int:
    """Number of logical elements of a vector-like operand."""
    return len(x)


def subvector(x: Any, start: int, stop: int) -> Any:
    """
    View of the logical elements [start, stop) of a vector-like operand.

    Dispatches to the operand's own subvector() when it has one; plain
    numpy arrays and Python sequences are sliced directly.
    """
    if hasattr(x, 'subvector'):
        return x.subvector(start, stop)
    return x[start:stop]


def as_vector(x: Any) -> Any:
    """
    Wrap a vector operand for the view-level kernels.

    Objects satisfying StridedVector are returned unchanged; numpy arrays
    are wrapped in a Vector without copying.
    """
    if isinstance(x, np.ndarray):
        return Vector(x)
    if isinstance(x, StridedVector):
        return x
    return Vector(np.asarray(x))


def as_matrix(a: Any) -> StridedMatrix:
    """
    Wrap a 2-D numpy array in a Matrix.

    Objects satisfying StridedMatrix (Matrix views included) pass through.
    """
    if isinstance(a, StridedMatrix):
        return a
    return Matrix(np.asarray(a))


def check_writable(x: Any, name: str) -> None:
    """
    Verify an output vector exposes writeable storage.

    Computed views such as VectorStartingWithOne own no storage and cannot
    receive results.

    Raises:
        AccessDeniedError: If x is not a WritableVector over writeable data
    """
    if isinstance(x, WritableVector) and x.array.flags.writeable:
        return
    raise AccessDeniedError(
        f"{name}: {type(x).__name__} is read-only",
        parameter=name,
        requested=AccessPolicy.Dense,
        policy=AccessPolicy.NoAccess,
    )
