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

"""Host-side capabilities consumed by the LES closures.

A closure only ever talks to a `TurbulenceHost`: it asks it for the
resolved kinematics, the discrete operators, the test filter, the
transport-equation facility, and the boundary/source-term hooks. Any flow
solver can integrate a closure by implementing this interface.
`PeriodicBoxHost` is the pseudo-spectral triply-periodic implementation.

"""
from mpi4py import MPI  # must always be imported first

from abc import ABC, abstractmethod
import numpy as np

from ..fourier_analysis import FourierAnalysis
from ..utils import new_parser, parse_config
from .filters import LESFilter
from .sources import SourceTerms
from .transport import ScalarTransportEquation

__all__ = []

COMM_WORLD = MPI.COMM_WORLD


class TurbulenceHost(ABC):
    """Capability interface of a flow solver hosting an LES closure."""

    @property
    @abstractmethod
    def U(self):
        """Resolved velocity, shape ``[3, *local_shape]``."""

    @property
    @abstractmethod
    def rho(self):
        """Resolved density, scalar field."""

    @property
    @abstractmethod
    def nu(self):
        """Molecular kinematic viscosity, scalar or scalar field."""

    @property
    @abstractmethod
    def delta(self):
        """LES grid filter width, scalar or scalar field."""

    @property
    @abstractmethod
    def sources(self):
        """`SourceTerms` container of the run-time source hooks."""

    @property
    @abstractmethod
    def num_points(self):
        """Global number of cells."""

    @abstractmethod
    def mass_flux(self):
        """Mass flux ``rho U`` used by the advection term."""

    @abstractmethod
    def grad(self, u):
        """Gradient tensor ``[i, j] = d u_j / d x_i`` of a vector field."""

    @abstractmethod
    def div(self, u):
        """Divergence of a vector field."""

    @abstractmethod
    def average(self, x):
        """Cell-face local average of a scalar, vector, or tensor field."""

    @abstractmethod
    def new_scalar(self, value=0.0):
        """New MPI-local scalar field filled with `value`."""

    @abstractmethod
    def new_filter(self):
        """New (unconfigured) test filter with a ``read(config)`` method."""

    @abstractmethod
    def transport_equation(self, psi, rho, dt, name):
        """New scalar transport equation for the field `psi`."""

    @abstractmethod
    def correct_boundary_conditions(self, field):
        """Update the boundary values of a derived field."""


class PeriodicBoxHost(FourierAnalysis, TurbulenceHost):
    """Triply-periodic, uniform-mesh host on [0, 2pi)^3.

    Velocity and density are plain MPI-local physical-space arrays that the
    driving solver updates through `set_velocity` and `set_density`
    before each call to the closure's ``correct()``.

    """
    parser = new_parser()

    parser.add_argument(
        '--N', type=int, default=32,
        help='Physical-space mesh dimensions.')

    parser.add_argument(
        '--nu', type=float, default=1.0e-3,
        help="kinematic viscosity")

    parser.add_argument(
        '--delta_type', type=str, default='cubeRootVol',
        choices=['cubeRootVol', 'constant'],
        help="LES grid filter width model")

    parser.add_argument(
        '--deltaCoeff', type=float, default=1.0,
        help="cubeRootVol filter width coefficient")

    parser.add_argument(
        '--delta', type=float, default=1.0,
        help="filter width if DELTA_TYPE is constant")

    def __init__(self, config=None, comm=COMM_WORLD, **fft_kw):
        if config is None:
            config = self.get_config(comm=comm)
        self.config = config

        super().__init__([config.N]*3, comm=comm, **fft_kw)

        self._nu = config.nu
        self._delta = self.compute_delta(config)

        self._U = np.zeros([3, *self.r.shape], dtype=self.r.dtype)
        self._rho = self.new_scalar(1.0)
        self._Kavg = self.face_average_kernel()
        self._sources = SourceTerms()

        return

    @classmethod
    def get_config(cls, args=None, comm=COMM_WORLD):
        return parse_config(cls.parser, args, comm)

    def compute_delta(self, config):
        if config.delta_type == 'cubeRootVol':
            delta = config.deltaCoeff * self.cell_volume**(1/3)

        else:  # 'constant'
            delta = config.delta

        self.all_assert(delta > 0.0, 'ERROR: filter width must be positive')

        return delta

    ###########################################################################
    @property
    def U(self):
        return self._U

    @property
    def rho(self):
        return self._rho

    @property
    def nu(self):
        return self._nu

    @property
    def delta(self):
        return self._delta

    @property
    def sources(self):
        return self._sources

    def set_velocity(self, U):
        self._U[:] = U

    def set_density(self, rho):
        self.all_assert(np.all(np.asarray(rho) > 0.0),
                        'ERROR: density must be positive')
        self._rho[:] = rho

    def mass_flux(self):
        return self.rho * self.U

    def average(self, x):
        return self.filter(x, self._Kavg)

    def new_filter(self):
        return LESFilter(self)

    def transport_equation(self, psi, rho, dt, name='psi'):
        return ScalarTransportEquation(self, psi, rho, dt, name)

    def correct_boundary_conditions(self, field):
        # periodic in every direction, there is nothing to update
        return field
