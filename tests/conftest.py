"""Shared fixtures: a small serial periodic box and a dynamic Smagorinsky
closure configured from an empty command line.

"""
import numpy as np
import pytest

from dynsgs import PeriodicBoxHost, DynamicSmagorinsky

N = 16


def make_host(*args):
    config = PeriodicBoxHost.get_config(args=['--N', str(N), *args])
    return PeriodicBoxHost(config, planner_effort='FFTW_ESTIMATE')


def taylor_green(host, U0=1.0):
    x, y, z = host.local_mesh()
    U = np.zeros([3, *host.r.shape])
    U[0] = U0 * np.sin(x) * np.cos(y) * np.cos(z)
    U[1] = -U0 * np.cos(x) * np.sin(y) * np.cos(z)

    return U


@pytest.fixture
def host():
    return make_host()


@pytest.fixture
def tgv_host():
    host = make_host()
    host.set_velocity(taylor_green(host))
    return host


@pytest.fixture
def model_config():
    return DynamicSmagorinsky.get_config(args=[])


@pytest.fixture
def model(tgv_host, model_config):
    return DynamicSmagorinsky(tgv_host, model_config)
