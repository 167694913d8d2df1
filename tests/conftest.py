"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pydense.core.config import config_context
from pydense.core.types import Layout, Uplo, is_complex


DTYPES = [np.float32, np.float64, np.complex64, np.complex128]


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture(params=DTYPES, ids=lambda t: np.dtype(t).name)
def dtype(request):
    """Every BLAS scalar type: float32, float64, complex64, complex128."""
    return np.dtype(request.param)


@pytest.fixture(params=[np.complex64, np.complex128], ids=lambda t: np.dtype(t).name)
def complex_dtype(request):
    """Complex scalar types only."""
    return np.dtype(request.param)


@pytest.fixture(autouse=True)
def checked():
    """Run every test with argument validation on and the reference backend."""
    with config_context(checks=True, backend='reference') as config:
        yield config


@pytest.fixture
def random_array(rng):
    """Factory for random arrays of a given shape and dtype."""
    def make(shape, dtype):
        dtype = np.dtype(dtype)
        values = rng.standard_normal(shape)
        if is_complex(dtype):
            values = values + 1j * rng.standard_normal(shape)
        return values.astype(dtype)
    return make


@pytest.fixture
def pack_vector():
    """
    Factory storing a logical vector into a strided buffer.

    Gaps between elements are filled with NaN so that reading them would
    show up in the result.
    """
    def pack(v, inc=1):
        n = v.shape[0]
        buf = np.full(1 + (n - 1) * abs(inc) if n else 0, np.nan, dtype=v.dtype)
        if n:
            order = v if inc > 0 else v[::-1]
            buf[::abs(inc)] = order
        return buf
    return pack


@pytest.fixture
def unpack_vector():
    """Factory reading the logical vector back out of a strided buffer."""
    def unpack(buf, n, inc=1):
        elements = buf[::abs(inc)][:n]
        return elements if inc > 0 else elements[::-1]
    return unpack


@pytest.fixture
def pack_matrix():
    """
    Factory storing an m x n matrix into a flat buffer.

    Returns (buffer, ld). Padding between columns (column-major) or rows
    (row-major) is filled with NaN.
    """
    def pack(a, layout=Layout.ColMajor, pad=0):
        m, n = a.shape
        if layout == Layout.ColMajor:
            ld = max(1, m) + pad
            buf = np.full(ld * n, np.nan, dtype=a.dtype)
            buf.reshape(n, ld)[:, :m] = a.T
        else:
            ld = max(1, n) + pad
            buf = np.full(ld * m, np.nan, dtype=a.dtype)
            buf.reshape(m, ld)[:, :n] = a
        return buf, ld
    return pack


@pytest.fixture
def unpack_matrix():
    """Factory reading an m x n matrix back out of a flat buffer."""
    def unpack(buf, m, n, ld, layout=Layout.ColMajor):
        if layout == Layout.ColMajor:
            return buf.reshape(n, ld)[:, :m].T.copy()
        return buf.reshape(m, ld)[:, :n].copy()
    return unpack


@pytest.fixture
def poison_triangle():
    """
    Factory copying a square matrix with its unreferenced triangle set to NaN.

    Args (of the returned factory):
        a: Square matrix
        uplo: Triangle that stays intact
        diagonal: Also poison the whole diagonal (unit-diagonal kernels)
        imag_diagonal: Also poison the imaginary part of the diagonal
            (Hermitian kernels); ignored for real data
    """
    def poison(a, uplo, diagonal=False, imag_diagonal=False):
        out = a.copy()
        n = a.shape[0]
        if uplo == Uplo.Upper:
            rows, cols = np.tril_indices(n, -1)
        else:
            rows, cols = np.triu_indices(n, 1)
        out[rows, cols] = np.nan
        idx = np.arange(n)
        if diagonal:
            out[idx, idx] = np.nan
        elif imag_diagonal and is_complex(out.dtype):
            out.imag[idx, idx] = np.nan
        return out
    return poison
