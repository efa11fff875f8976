"""Tests for the configurable LES test filter."""

from argparse import Namespace

import numpy as np
import pytest

from dynsgs import LESFilter


class TestLESFilter:

    def test_identity_until_read(self, host):
        filt = host.new_filter()
        a = np.random.default_rng(0).standard_normal(host.r.shape)

        assert filt.filter_type is None
        assert np.array_equal(filt(a), a)

    @pytest.mark.parametrize('kind', LESFilter.kernels)
    def test_read_every_kernel(self, host, kind):
        filt = host.new_filter()

        assert filt.read(Namespace(filter_type=kind, filter_ratio=2.0))
        assert filt.filter_type == kind
        assert np.isclose(filt.width, 2.0 * host.delta)

        # a uniform field passes through every normalised kernel
        assert np.allclose(filt(host.new_scalar(3.0)), 3.0)

    @pytest.mark.parametrize('config', [
        Namespace(filter_type='box', filter_ratio=2.0),
        Namespace(filter_type='gaussian', filter_ratio=0.0),
        Namespace(filter_type='gaussian', filter_ratio=float('nan')),
        Namespace(filter_ratio=2.0),
        ])
    def test_invalid_read_keeps_kernel(self, host, config):
        filt = host.new_filter()
        filt.read(Namespace(filter_type='tophat', filter_ratio=3.0))
        Ktest = filt.Ktest

        assert filt.read(config) is False
        assert filt.filter_type == 'tophat'
        assert filt.ratio == 3.0
        assert filt.Ktest is Ktest

    def test_filters_tensor_components(self, tgv_host):
        filt = tgv_host.new_filter()
        filt.read(Namespace(filter_type='gaussian', filter_ratio=2.0))

        U = tgv_host.U
        Uf = filt(U)
        factor = np.exp(-filt.width**2 * 3 / 24)

        assert np.allclose(Uf, factor * U)
