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

"""Common base of the LES eddy-viscosity closures.

"""
from mpi4py import MPI  # must always be imported first

from numbers import Integral
import numpy as np

from ..statistics import allcount
from ..utils import MPI_Debugging, new_parser, parse_config, enf, is_number

__all__ = []

COMM_WORLD = MPI.COMM_WORLD


class LESEddyViscosity(MPI_Debugging):
    """Owns the eddy viscosity `nuT` and the run-time coefficients shared by
    every LES closure, and exposes the effective viscosity and k-diffusivity
    to the host.

    Subclasses compute `nuT` in `correct()`. `correct_nut()` is an
    extension hook called after every `nuT` update.

    """
    type_name = 'les_eddy_viscosity'

    coeff_names = ('kMin', 'KK_min', 'sigk_inv', 'relax_k', 'solver_tol',
                   'solver_maxiter', 'report_bounds')

    real_names = ('kMin', 'KK_min', 'sigk_inv', 'relax_k', 'solver_tol')

    parser = new_parser()

    parser.add_argument(
        '--kMin', type=float, default=1.0e-15,
        help='lower bound of the subgrid kinetic energy')

    parser.add_argument(
        '--KK_min', type=float, default=1.0e-15,
        help='lower bound of the test-filter kinetic energy in the '
             'dissipation coefficient')

    parser.add_argument(
        '--sigk_inv', type=float, default=1.0,
        help='inverse turbulent Prandtl number of k')

    parser.add_argument(
        '--relax_k', type=float, default=1.0,
        help='k-equation under-relaxation factor')

    parser.add_argument(
        '--solver_tol', type=float, default=1.0e-10,
        help='relative residual tolerance of the k-equation solve')

    parser.add_argument(
        '--solver_maxiter', type=int, default=500,
        help='iteration cap of the k-equation solve')

    parser.add_argument(
        '--report_bounds', action='store_true', default=False,
        help="Print the number of cells clipped by the nuT and k bounds")

    parser.add_argument(
        '--no-report_bounds', dest='report_bounds', action='store_false',
        help="Clip nuT and k silently")

    parser.add_argument(
        '--k_init', type=float, default=1.0e-15,
        help='uniform initial k when no INIT_FILE is given')

    parser.add_argument(
        '--init_file', type=str,
        help='HDF5 file holding the initial k field')

    def __init__(self, host, config=None):
        self.comm = host.comm
        self.host = host

        if config is None:
            config = self.get_config(comm=self.comm)

        self.nuT = host.new_scalar(0.0)
        self.delta = host.delta

        self.all_assert(self.read(config),
                        f'ERROR: invalid {self.type_name} configuration')

        return

    @classmethod
    def get_config(cls, args=None, comm=COMM_WORLD):
        return parse_config(cls.parser, args, comm)

    ###########################################################################
    @property
    def nu(self):
        return self.host.nu

    def nu_eff(self):
        return self.nuT + self.nu

    def Dk_eff(self):
        """Effective diffusivity of k."""
        return self.sigk_inv * self.nuT + self.nu

    def correct_nut(self):
        return

    def correct(self, dt):
        """Refresh the grid filter width, which may change with the mesh."""
        self.delta = self.host.delta

        return

    def validate(self, config):
        missing = [key for key in self.coeff_names if not hasattr(config, key)]
        if missing:
            self.print(f'{self.type_name}: missing coefficients {missing}')
            return False

        illtyped = [key for key in self.real_names
                    if not is_number(getattr(config, key))]
        if not is_number(config.solver_maxiter, Integral):
            illtyped.append('solver_maxiter')
        if not isinstance(config.report_bounds, (bool, np.bool_)):
            illtyped.append('report_bounds')

        if illtyped:
            self.print(f'{self.type_name}: ill-typed coefficients {illtyped}')
            return False

        checks = {'kMin': config.kMin >= 0.0,
                  'KK_min': config.KK_min > 0.0,
                  'sigk_inv': config.sigk_inv >= 0.0,
                  'relax_k': 0.0 < config.relax_k <= 1.0,
                  'solver_tol': config.solver_tol > 0.0,
                  'solver_maxiter': config.solver_maxiter >= 1}

        invalid = [key for key, ok in checks.items() if not ok]
        if invalid:
            self.print(f'{self.type_name}: invalid coefficients {invalid}')
            return False

        return True

    def read(self, config):
        """Re-read the model coefficients from `config`.

        Returns
        -------
        bool
            False if any coefficient is missing or invalid, in which case
            nothing is changed.

        """
        if not self.validate(config):
            return False

        self.config = config
        self.kMin = config.kMin
        self.KK_min = config.KK_min
        self.sigk_inv = config.sigk_inv
        self.relax_k = config.relax_k
        self.solver_tol = config.solver_tol
        self.solver_maxiter = config.solver_maxiter
        self.report_bounds = config.report_bounds

        return True

    def bound(self, field, lower, name):
        """Clip `field` from below by `lower` in place."""
        if self.report_bounds:
            n = allcount(field < lower, self.comm)
            if n > 0:
                self.print(f'bounding {name}: {n} cells below '
                           f'{enf(np.min(lower))}')

        np.maximum(field, lower, out=field)

        return field

    def print_coeffs(self):
        lines = [f'# {self.type_name} coefficients',
                 '# -------------------------']
        for key in self.coeff_names:
            lines.append(f"{key:15s} = {getattr(self.config, key)}")
        lines.append('# -------------------------\n')
        self.print('\n'.join(lines), True)

        return
