"""
Tests for Level 1 BLAS.

Validates:
    - Reductions (asum, dot, dotu, iamax, nrm2) against numpy
    - Updates (axpy, copy, scal, swap) with positive and negative strides
    - Plane rotations: rot, rotg, rotm, rotmg
    - Argument validation naming the offending parameter
"""

import numpy as np
import pytest

from pydense.blas import (
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
from pydense.core.exceptions import DimensionError, ValidationError
from pydense.core.tolerances import select_tolerance
from pydense.core.types import INVALID_INDEX, is_complex, real_type


def _alpha(dtype):
    return 1.5 - 0.5j if is_complex(dtype) else 1.5


STRIDES = [(1, 1), (2, 3), (-1, 2), (3, -2)]


# ═══════════════════════════════════════════════════════════════════════
# Reductions
# ═══════════════════════════════════════════════════════════════════════


class TestAsum:

    def test_real(self):
        assert asum(3, np.array([1.0, -2.0, 3.0]), 1) == 6.0

    def test_complex_sums_component_magnitudes(self):
        x = np.array([1 + 2j, -3 - 4j], dtype=np.complex64)
        result = asum(2, x, 1)
        assert result == 10.0
        assert result.dtype == np.float32

    def test_strided_skips_gaps(self, pack_vector):
        buf = pack_vector(np.array([1.0, -1.0, 2.0]), 3)
        assert asum(3, buf, 3) == 4.0

    def test_accepts_lists(self):
        assert asum(2, [1.0, -4.0], 1) == 5.0


class TestDot:

    def test_real(self, pack_vector):
        x = np.array([1.0, 2.0, 3.0])
        y = np.array([4.0, 5.0, 6.0])
        assert dot(3, pack_vector(x, 2), 2, pack_vector(y, -1), -1) == 32.0

    def test_conjugates_x(self):
        x = np.array([1j, 2.0])
        y = np.array([1j, 1.0])
        assert dot(2, x, 1, y, 1) == pytest.approx(3.0)
        assert dotu(2, x, 1, y, 1) == pytest.approx(1.0)

    def test_matches_numpy(self, dtype, random_array):
        x = random_array(7, dtype)
        y = random_array(7, dtype)
        tol = select_tolerance(dtype)
        np.testing.assert_allclose(dot(7, x, 1, y, 1), np.vdot(x, y), rtol=tol.rtol, atol=tol.atol)
        np.testing.assert_allclose(dotu(7, x, 1, y, 1), np.dot(x, y), rtol=tol.rtol, atol=tol.atol)

    def test_result_type_promotes(self):
        x = np.ones(2, dtype=np.float32)
        y = np.ones(2, dtype=np.complex128)
        assert dot(2, x, 1, y, 1).dtype == np.complex128


class TestIamax:

    def test_first_of_ties(self):
        assert iamax(4, np.array([1.0, -5.0, 5.0, 2.0]), 1) == 1

    def test_complex_uses_component_magnitudes(self):
        x = np.array([1 + 1j, -2 + 0j, 0.5 - 1.6j])
        assert iamax(3, x, 1) == 2

    def test_nan_wins(self):
        assert iamax(3, np.array([1.0, np.nan, 5.0]), 1) == 1

    def test_strided(self, pack_vector):
        buf = pack_vector(np.array([1.0, 3.0, -2.0]), 2)
        assert iamax(3, buf, 2) == 1

    def test_empty(self):
        assert iamax(0, np.zeros(3), 1) == INVALID_INDEX


class TestNrm2:

    def test_pythagoras(self):
        assert nrm2(2, np.array([3.0, 4.0]), 1) == pytest.approx(5.0)

    def test_complex(self):
        result = nrm2(2, np.array([3 + 4j, 0j], dtype=np.complex64), 1)
        assert result == pytest.approx(5.0)
        assert result.dtype == np.float32

    def test_no_overflow(self):
        assert nrm2(2, np.array([3e300, 4e300]), 1) == pytest.approx(5e300)

    def test_no_underflow(self):
        assert nrm2(2, np.array([3e-300, 4e-300]), 1) == pytest.approx(5e-300)

    def test_matches_numpy(self, dtype, random_array, pack_vector):
        x = random_array(9, dtype)
        tol = select_tolerance(dtype)
        np.testing.assert_allclose(nrm2(9, pack_vector(x, 2), 2), np.linalg.norm(x),
                                   rtol=tol.rtol, atol=tol.atol)


# ═══════════════════════════════════════════════════════════════════════
# Updates
# ═══════════════════════════════════════════════════════════════════════


class TestAxpy:

    @pytest.mark.parametrize("incx,incy", STRIDES)
    def test_matches_numpy(self, dtype, random_array, pack_vector, unpack_vector, incx, incy):
        n = 5
        x, y = random_array(n, dtype), random_array(n, dtype)
        alpha = _alpha(dtype)
        xb, yb = pack_vector(x, incx), pack_vector(y, incy)

        axpy(n, alpha, xb, incx, yb, incy)

        tol = select_tolerance(dtype)
        np.testing.assert_allclose(unpack_vector(yb, n, incy), alpha * x + y,
                                   rtol=tol.rtol, atol=tol.atol)

    def test_gaps_untouched(self, pack_vector):
        yb = pack_vector(np.zeros(3), 2)
        axpy(3, 1.0, np.ones(3), 1, yb, 2)
        np.testing.assert_array_equal(yb[::2], [1.0, 1.0, 1.0])
        assert np.isnan(yb[1::2]).all()

    def test_output_must_be_ndarray(self):
        with pytest.raises(ValidationError) as exc_info:
            axpy(2, 1.0, np.ones(2), 1, [0.0, 0.0], 1)
        assert exc_info.value.parameter == 'y'

    def test_output_must_be_writeable(self):
        y = np.zeros(2)
        y.flags.writeable = False
        with pytest.raises(ValidationError, match="y"):
            axpy(2, 1.0, np.ones(2), 1, y, 1)

    def test_short_buffer(self):
        with pytest.raises(DimensionError) as exc_info:
            axpy(3, 1.0, np.ones(4), 2, np.zeros(3), 1)
        assert exc_info.value.parameter == 'x'


class TestCopySwapScal:

    @pytest.mark.parametrize("incx,incy", STRIDES)
    def test_copy(self, dtype, random_array, pack_vector, unpack_vector, incx, incy):
        x = random_array(4, dtype)
        yb = pack_vector(np.zeros(4, dtype=dtype), incy)
        copy(4, pack_vector(x, incx), incx, yb, incy)
        np.testing.assert_array_equal(unpack_vector(yb, 4, incy), x)

    @pytest.mark.parametrize("incx,incy", STRIDES)
    def test_swap(self, dtype, random_array, pack_vector, unpack_vector, incx, incy):
        x, y = random_array(4, dtype), random_array(4, dtype)
        xb, yb = pack_vector(x, incx), pack_vector(y, incy)
        swap(4, xb, incx, yb, incy)
        np.testing.assert_array_equal(unpack_vector(xb, 4, incx), y)
        np.testing.assert_array_equal(unpack_vector(yb, 4, incy), x)

    def test_scal(self, dtype, random_array, pack_vector, unpack_vector):
        x = random_array(5, dtype)
        alpha = _alpha(dtype)
        xb = pack_vector(x, 3)
        scal(5, alpha, xb, 3)
        tol = select_tolerance(dtype)
        np.testing.assert_allclose(unpack_vector(xb, 5, 3), alpha * x, rtol=tol.rtol, atol=tol.atol)

    def test_scal_rejects_negative_stride(self):
        with pytest.raises(ValidationError) as exc_info:
            scal(2, 2.0, np.ones(4), -2)
        assert exc_info.value.parameter == 'incx'


# ═══════════════════════════════════════════════════════════════════════
# Plane rotations
# ═══════════════════════════════════════════════════════════════════════


class TestRot:

    def test_real(self):
        x, y = np.array([1.0, 0.0]), np.array([2.0, 1.0])
        rot(2, x, 1, y, 1, 0.6, 0.8)
        np.testing.assert_allclose(x, [2.2, 0.8])
        np.testing.assert_allclose(y, [0.4, 0.6])

    def test_complex_sine(self, complex_dtype, random_array):
        x, y = random_array(3, complex_dtype), random_array(3, complex_dtype)
        c, s = 0.6, 0.48 + 0.64j
        expected_x = c * x + s * y
        expected_y = c * y - np.conj(s) * x
        xb, yb = x.copy(), y.copy()
        rot(3, xb, 1, yb, 1, c, s)
        tol = select_tolerance(complex_dtype)
        np.testing.assert_allclose(xb, expected_x, rtol=tol.rtol, atol=tol.atol)
        np.testing.assert_allclose(yb, expected_y, rtol=tol.rtol, atol=tol.atol)

    def test_negative_strides(self, pack_vector, unpack_vector):
        x, y = np.array([1.0, 2.0, 3.0]), np.array([4.0, 5.0, 6.0])
        xb, yb = pack_vector(x, -1), pack_vector(y, 2)
        rot(3, xb, -1, yb, 2, 0.0, 1.0)
        np.testing.assert_array_equal(unpack_vector(xb, 3, -1), y)
        np.testing.assert_array_equal(unpack_vector(yb, 3, 2), -x)


class TestRotg:

    @pytest.mark.parametrize("a,b,expected", [
        (3.0, 4.0, (0.6, 0.8, 5.0)),
        (4.0, 3.0, (0.8, 0.6, 5.0)),
        (-3.0, 4.0, (-0.6, 0.8, 5.0)),
        (3.0, -4.0, (-0.6, 0.8, -5.0)),
        (-4.0, 3.0, (0.8, -0.6, -5.0)),
    ])
    def test_real(self, a, b, expected):
        c, s, r = rotg(a, b)
        np.testing.assert_allclose((c, s, r), expected, rtol=1e-15)

    def test_b_zero(self):
        assert rotg(2.0, 0.0) == (1.0, 0.0, 2.0)

    def test_a_zero(self):
        assert rotg(0.0, -2.0) == (0.0, 1.0, -2.0)

    def test_zeroes_second_component(self):
        a, b = 1e200, 3e199
        c, s, r = rotg(a, b)
        assert np.isfinite(r)
        assert -s * a + c * b == pytest.approx(0.0, abs=1e186)
        assert c * a + s * b == pytest.approx(r)

    def test_integers_promoted(self):
        c, s, r = rotg(3, 4)
        assert isinstance(r, np.float64)
        assert r == 5.0

    def test_float32(self):
        c, s, r = rotg(np.float32(3), np.float32(4))
        assert r.dtype == np.float32
        assert c.dtype == np.float32

    def test_complex(self, complex_dtype):
        a = complex_dtype.type(3 + 4j)
        b = complex_dtype.type(1 - 2j)
        c, s, r = rotg(a, b)
        assert c.dtype == real_type(complex_dtype)
        tol = select_tolerance(complex_dtype)
        np.testing.assert_allclose(c * a + s * b, r, rtol=tol.rtol, atol=tol.atol)
        np.testing.assert_allclose(-np.conj(s) * a + c * b, 0, atol=10 * tol.atol)
        # r keeps the phase of a
        np.testing.assert_allclose(r / abs(r), a / abs(a), rtol=tol.rtol)

    def test_complex_a_zero(self):
        c, s, r = rotg(0j, 2 + 1j)
        assert c == 0.0
        assert s == 1.0
        assert r == 2 + 1j


class TestRotm:

    def test_full_matrix(self):
        x, y = np.array([1.0]), np.array([1.0])
        rotm(1, x, 1, y, 1, np.array([-1.0, 2.0, 3.0, 4.0, 5.0]))
        assert x[0] == 6.0
        assert y[0] == 8.0

    def test_unit_diagonal(self):
        x, y = np.array([1.0]), np.array([1.0])
        rotm(1, x, 1, y, 1, np.array([0.0, np.nan, 3.0, 4.0, np.nan]))
        assert x[0] == 5.0
        assert y[0] == 4.0

    def test_unit_off_diagonal(self):
        x, y = np.array([1.0]), np.array([1.0])
        rotm(1, x, 1, y, 1, np.array([1.0, 2.0, np.nan, np.nan, 5.0]))
        assert x[0] == 3.0
        assert y[0] == 4.0

    def test_identity_flag(self):
        x, y = np.array([1.0, 2.0]), np.array([3.0, 4.0])
        rotm(2, x, 1, y, 1, np.array([-2.0, np.nan, np.nan, np.nan, np.nan]))
        np.testing.assert_array_equal(x, [1.0, 2.0])
        np.testing.assert_array_equal(y, [3.0, 4.0])

    def test_rejects_complex(self):
        x = np.ones(2, dtype=np.complex128)
        with pytest.raises(ValidationError) as exc_info:
            rotm(2, x, 1, np.ones(2), 1, np.zeros(5))
        assert exc_info.value.parameter == 'x'

    def test_short_param(self):
        with pytest.raises(DimensionError) as exc_info:
            rotm(2, np.ones(2), 1, np.ones(2), 1, np.zeros(4))
        assert exc_info.value.parameter == 'param'


class TestRotmg:

    def test_diagonal_form(self):
        d1, d2, x1, param = rotmg(1.0, 1.0, 3.0, 4.0)
        assert param[0] == 1.0
        assert param[1] == pytest.approx(0.75)
        assert param[4] == pytest.approx(0.75)
        assert (d1, d2, x1) == pytest.approx((0.64, 0.64, 6.25))

    def test_off_diagonal_form(self):
        d1, d2, x1, param = rotmg(1.0, 1.0, 4.0, 3.0)
        assert param[0] == 0.0
        assert param[2] == pytest.approx(-0.75)
        assert param[3] == pytest.approx(0.75)
        assert (d1, d2, x1) == pytest.approx((0.64, 0.64, 6.25))

    def test_zero_y_is_identity(self):
        d1, d2, x1, param = rotmg(2.0, 3.0, 5.0, 0.0)
        assert param[0] == -2.0
        assert (d1, d2, x1) == (2.0, 3.0, 5.0)

    def test_negative_weight_zeroes_everything(self):
        d1, d2, x1, param = rotmg(1.0, -1.0, 1.0, 2.0)
        assert param[0] == -1.0
        np.testing.assert_array_equal(param[1:], 0.0)
        assert (d1, d2, x1) == (0.0, 0.0, 0.0)

    @pytest.mark.parametrize("d1,d2,x1,y1", [
        (1.0, 1.0, 3.0, 4.0),
        (1.0, 1.0, 4.0, 3.0),
        (2.0, 3.0, -1.5, 0.5),
        (1e-10, 1.0, 1.0, 1.0),
        (1e9, 1e-9, 1.0, 1.0),
    ])
    def test_zeroes_second_component(self, d1, d2, x1, y1):
        d1_out, d2_out, x1_out, param = rotmg(d1, d2, x1, y1)
        x, y = np.array([x1]), np.array([y1])
        rotm(1, x, 1, y, 1, param)
        assert y[0] == pytest.approx(0.0, abs=1e-12 * abs(x1_out))
        assert x[0] == pytest.approx(x1_out)
        assert d1_out * x1_out ** 2 == pytest.approx(d1 * x1 ** 2 + d2 * y1 ** 2)
        gamsq = 4096.0 ** 2
        for d in (d1_out, d2_out):
            assert 1 / gamsq < abs(d) < gamsq

    def test_rejects_negative_d1(self):
        with pytest.raises(ValidationError) as exc_info:
            rotmg(-1.0, 1.0, 1.0, 1.0)
        assert exc_info.value.parameter == 'd1'

    def test_rejects_complex(self):
        with pytest.raises(ValidationError) as exc_info:
            rotmg(1.0, 1.0, 1.0, 1j)
        assert exc_info.value.parameter == 'y1'

    def test_float32(self):
        d1, d2, x1, param = rotmg(np.float32(1), np.float32(1), np.float32(3), np.float32(4))
        assert param.dtype == np.float32
        assert d1.dtype == np.float32
