"""Tests for the pointwise tensor algebra."""

import numpy as np

from dynsgs.src.maths import (dot, outer, ddot, trace, symm, dev,
                              strain_magnitude, rectify)


def random_tensor(seed=0, shape=(4, 4, 4)):
    return np.random.default_rng(seed).standard_normal((3, 3, *shape))


class TestTensorAlgebra:

    def test_dot_and_outer(self):
        rng = np.random.default_rng(1)
        a = rng.standard_normal((3, 2, 2, 2))
        b = rng.standard_normal((3, 2, 2, 2))

        assert np.allclose(dot(a, b), np.sum(a * b, axis=0))
        assert np.allclose(trace(outer(a, b)), dot(a, b))

    def test_ddot_matches_sum(self):
        A = random_tensor(2)
        B = random_tensor(3)
        assert np.allclose(ddot(A, B), np.sum(A * B, axis=(0, 1)))

    def test_symm_is_symmetric(self):
        S = symm(random_tensor())
        assert np.allclose(S, np.swapaxes(S, 0, 1))

    def test_dev_is_traceless_and_copies(self):
        A = random_tensor()
        A0 = A.copy()
        D = dev(A)

        assert np.allclose(trace(D), 0.0)
        assert np.array_equal(A, A0)
        assert np.allclose(D[0, 1], A[0, 1])

    def test_strain_magnitude_simple_shear(self):
        S = np.zeros((3, 3, 1, 1, 1))
        S[0, 1] = S[1, 0] = 0.5 * 3.0
        assert np.allclose(strain_magnitude(S), 3.0)


class TestRectify:

    def test_negative_values_become_zero(self):
        x = np.array([-2.0, -1e-300, 0.0, 1e-300, 3.5])
        assert np.array_equal(rectify(x), [0.0, 0.0, 0.0, 1e-300, 3.5])

    def test_never_negative(self):
        x = np.random.default_rng(4).standard_normal(1000)
        y = rectify(x)

        assert np.all(y >= 0.0)
        assert np.array_equal(y[x >= 0], x[x >= 0])
