# © 2025. Triad National Security, LLC. All rights reserved.

# This program was produced under U.S. Government contract 89233218CNA000001 for
# Los Alamos National Laboratory (LANL), which is operated by Triad National
# Security, LLC for the U.S. Department of Energy/National Nuclear Security
# Administration. All rights in the program are reserved by Triad National
# Security, LLC, and the U.S. Department of Energy/National Nuclear Security
# Administration. The Government is granted for itself and others acting on its
# behalf a nonexclusive, paid-up, irrevocable worldwide license in this material
# to reproduce, prepare. derivative works, distribute copies to the public,
# perform publicly and display publicly, and to permit others to do so.

"""Configurable LES test filters for the periodic Fourier host.

"""
from mpi4py import MPI  # must always be imported first

from math import pi
import numpy as np

from ..utils import MPI_Debugging, is_number

__all__ = []


class LESFilter(MPI_Debugging):
    """Spatial low-pass test filter of width ``filter_ratio * Delta``.

    The kernel is a spectral multiplier built by the host's
    `FourierAnalysis` methods, so every application is a pair of FFTs and
    needs no halo exchange beyond what the FFT transposes already do.
    Until `read()` succeeds the filter is the identity.

    Parameters
    ----------
    fa : `FourierAnalysis`
        Host that provides the kernels and the grid filter width `delta`.

    """
    kernels = ('gaussian', 'tophat', 'compact', 'hypergaussian')

    def __init__(self, fa):
        self.comm = fa.comm
        self._fa = fa

        self.filter_type = None
        self.ratio = 1.0
        self.Ktest = 1.0

        return

    def __call__(self, x):
        return self._fa.filter(x, self.Ktest)

    @property
    def width(self):
        return self.ratio * self._fa.delta

    def validate(self, config):
        filter_type = getattr(config, 'filter_type', None)
        ratio = getattr(config, 'filter_ratio', None)

        if not isinstance(filter_type, str) or filter_type not in self.kernels:
            self.print(f'LESFilter: unknown filter_type {filter_type!r}')
            return False

        if not is_number(ratio) or not np.isfinite(ratio) or ratio <= 0.0:
            self.print(f'LESFilter: invalid filter_ratio {ratio!r}')
            return False

        return True

    def read(self, config):
        """Rebuild the kernel from `config.filter_type` and
        `config.filter_ratio`. Returns False, leaving the current kernel in
        place, if either entry is missing or invalid.

        """
        if not self.validate(config):
            return False

        fa = self._fa
        width = config.filter_ratio * fa.delta
        kc = pi / width

        if config.filter_type == 'gaussian':
            Ktest = fa.analytic_gaussian_filter(width)

        elif config.filter_type == 'tophat':
            Ktest = fa.analytic_tophat_filter(width)

        elif config.filter_type == 'compact':
            Ktest = fa.analytic_compact_filter(kc)

        else:  # 'hypergaussian'
            Ktest = fa.hypergaussian_filter(kc)

        self.filter_type = config.filter_type
        self.ratio = config.filter_ratio
        self.Ktest = Ktest

        return True
