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

"""Dynamic Smagorinsky closure with a transported subgrid kinetic energy.

The eddy viscosity follows Lilly's (1992) least-squares form of the
Germano procedure with face-averaged contractions, and the subgrid kinetic
energy k obeys a one-equation transport model whose dissipation
coefficient is also computed dynamically.

"""
from mpi4py import MPI  # must always be imported first

from copy import deepcopy
import numpy as np

from ..file_io import h5FileIO
from ..maths import ddot, dev, symm, strain_magnitude
from ..statistics import allsum, allmin, allmax
from .eddy_viscosity import LESEddyViscosity

__all__ = []


class DynamicSmagorinsky(LESEddyViscosity):
    """Dynamic Smagorinsky SGS closure with a k-equation.

    Each `correct(dt)` first recomputes `nuT` from the current velocity
    (`update_sgs_fields`) and then advances `k` by one implicit step. `k` is
    the only state carried between calls; it is bounded below by `kMin`
    after construction and after every solve.

    Parameters
    ----------
    host : `TurbulenceHost`
        Flow solver providing the kinematics, operators, and hooks.
    config : `argparse.Namespace`, optional
        Model configuration, parsed from the command line if omitted.
    k : array_like, optional
        Initial k. Defaults to the field stored in `config.init_file`, or
        else the uniform value `config.k_init`.

    """
    type_name = 'dyn_smag'

    # import the dynamic coefficient functions as bound methods
    from .dynamic_coefficients import subgrid_energy, cD, cI, Ce

    coeff_names = LESEddyViscosity.coeff_names + ('filter_type',
                                                  'filter_ratio')

    parser = deepcopy(LESEddyViscosity.parser)

    parser.add_argument(
        '--filter_type', type=str.lower, default='gaussian',
        choices=['gaussian', 'tophat', 'compact', 'hypergaussian'],
        help="test filter type")

    parser.add_argument(
        '--filter_ratio', type=float, default=2.0,
        help="test filter width / grid filter width")

    def __init__(self, host, config=None, k=None):
        self.filter = host.new_filter()
        super().__init__(host, config)
        config = self.config

        self.k = host.new_scalar(config.k_init)
        if k is not None:
            self.k[:] = k

        elif getattr(config, 'init_file', None):
            self.read_k(config.init_file)

        self.bound(self.k, self.kMin, 'k')
        self.print_coeffs()

        return

    def validate(self, config):
        return super().validate(config) and self.filter.validate(config)

    def read(self, config):
        """Re-read the model coefficients and the test filter from `config`.

        Returns
        -------
        bool
            False if the configuration is missing or invalid.

        """
        if super().read(config):
            return self.filter.read(config)

        return False

    def update_sgs_fields(self, Sij):
        """Set ``nuT = max(cD Delta^2 |S|, -nu)`` for the strain `Sij`.

        The lower bound keeps ``nuT + nu`` non-negative. It is applied to
        the stored `nuT`, not just in `nu_eff()`, so that every consumer of
        `nuT` sees the same bounded field.

        """
        host = self.host

        self.nuT[:] = self.cD(Sij) * self.delta**2 * strain_magnitude(Sij)
        self.bound(self.nuT, -self.nu, 'nuT')

        host.correct_boundary_conditions(self.nuT)
        host.sources.correct(self.nuT, 'nuT')

        self.correct_nut()

        return

    def correct(self, dt):
        """Update `nuT` from the current velocity, then solve the k-equation

            ddt(rho, k) + div(rho U k) - div(rho DkEff grad(k))
                == rho G - (2/3) rho div(U) k - Ce rho sqrt(k) / Delta k

        over the time step `dt`.

        Returns
        -------
        `SolverPerformance`
            performance of the k-equation solve.

        """
        super().correct(dt)

        host = self.host
        rho = host.rho
        k = self.k

        gradU = host.grad(host.U)
        Sij = symm(gradU)
        self.update_sgs_fields(Sij)

        D = dev(Sij)
        G = 2.0 * self.nuT * ddot(gradU, D)
        divU = host.div(host.U)
        KK = np.maximum(self.subgrid_energy(), self.KK_min)

        kEqn = host.transport_equation(k, rho, dt, 'k')
        kEqn.add_advection(host.mass_flux())
        kEqn.add_diffusion(rho * self.Dk_eff())
        kEqn.add_source(rho * G)
        kEqn.add_signed_sink((2/3) * rho * divU)
        kEqn.add_sink(self.Ce(D, KK) * rho * np.sqrt(k) / self.delta)
        host.sources.add_sup(kEqn, 'k')

        kEqn.relax(self.relax_k)
        host.sources.constrain(kEqn, 'k')
        performance = kEqn.solve(self.solver_tol, self.solver_maxiter)
        host.sources.correct(k, 'k')
        self.bound(k, self.kMin, 'k')

        return performance

    def summary(self):
        """MPI-reduced global statistics of the model fields."""
        n = self.host.num_points
        nu_eff = np.broadcast_to(self.nu_eff(), self.k.shape)

        return dict(k_mean=allsum(self.k, self.comm) / n,
                    k_min=allmin(self.k, self.comm),
                    k_max=allmax(self.k, self.comm),
                    nuT_mean=allsum(self.nuT, self.comm) / n,
                    nuEff_min=allmin(nu_eff, self.comm))

    def write(self, filename):
        """Write `k` and `nuT` to the HDF5 file `filename`."""
        with h5FileIO(filename, 'w', self.comm) as fh:
            fh.write('k', self.k, self.host.fft)
            fh.write('nuT', self.nuT, self.host.fft,
                     kwargs=dict(model=self.type_name))

        return

    def read_k(self, filename):
        with h5FileIO(filename, 'r', self.comm) as fh:
            self.all_assert('k' in fh, f'ERROR: no k field in {filename}')
            fh.read('k', self.k, self.host.fft)

        return
