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

"""Semi-implicit scalar transport equation on the periodic Fourier host.

"""
from mpi4py import MPI  # must always be imported first

from collections import namedtuple
from math import sqrt
import numpy as np

from ..statistics import allmax, allsum, alldot
from ..utils import MPI_Debugging, enf

__all__ = []

SolverPerformance = namedtuple(
    'SolverPerformance',
    ['name', 'initial_residual', 'final_residual', 'iterations', 'converged'])


class ScalarTransportEquation(MPI_Debugging):
    """One backward-Euler step of

        ddt(rho, psi) + div(F psi) - div(gamma grad(psi)) == Su - Sp psi

    assembled as the nonsymmetric system

        (rho/dt + Sp) psi + div(F psi) - gamma0 lap(psi) = b

    where ``gamma0 = max(gamma)`` is the implicit reference diffusivity.
    The remainder ``div((gamma - gamma0) grad(psi_old))`` and all explicit
    sources are lagged into ``b``. Advection is implicit, so every Fourier
    mode of a uniform flux is damped by the step.

    The system is solved matrix-free with BiCGStab, right-preconditioned by
    the exact spectral inverse of the operator with mean coefficients,
    ``mean(rho/dt + Sp) + mean(F).grad - gamma0 lap``.

    Parameters
    ----------
    fa : `FourierAnalysis`
        Provides the spectral operators and the MPI communicator.
    psi : array_like
        Solution field, overwritten in place by `solve()`.
    rho : array_like or float
        Density multiplying the time derivative.
    dt : float
        Time step.
    name : str, optional
        Field name used for solver messages.

    """

    def __init__(self, fa, psi, rho, dt, name='psi'):
        self.comm = fa.comm
        self._fa = fa
        self.name = name

        self.psi = psi
        self.psi0 = np.array(psi, copy=True)

        self.diag = np.empty_like(self.psi0)
        self.diag[:] = rho / dt
        self.source = self.diag * self.psi0
        self.gamma0 = 0.0
        self.flux = None

        return

    def add_source(self, Su):
        """Explicit source ``+ Su``."""
        self.source += Su

        return self

    def add_sink(self, coeff):
        """Fully implicit sink ``- coeff * psi``, `coeff` must be >= 0."""
        self.diag += coeff

        return self

    def add_signed_sink(self, coeff):
        """Sink ``- coeff * psi`` for a coefficient of either sign.

        Where `coeff` is positive the term is an implicit sink that adds to
        the diagonal; where it is negative it is a source, lagged
        explicitly as ``|coeff| * psi_old`` so that the diagonal can never
        lose dominance.

        """
        self.diag += np.maximum(coeff, 0.0)
        self.source += np.maximum(-coeff, 0.0) * self.psi0

        return self

    def add_advection(self, flux):
        """Implicit conservative advection ``div(flux * psi)``."""
        if self.flux is None:
            self.flux = np.array(flux, copy=True)
        else:
            self.flux += flux

        return self

    def add_diffusion(self, gamma):
        """Diffusion ``div(gamma grad(psi))``, with the constant part
        ``max(gamma)`` implicit and the rest explicit.

        """
        fa = self._fa
        self.gamma0 = max(allmax(gamma, self.comm), 0.0)

        if np.ndim(gamma) > 0:
            flux = fa.scalar_grad(self.psi0)
            flux *= gamma - self.gamma0
            self.source += fa.div(flux)

        return self

    def relax(self, alpha):
        """Implicit under-relaxation of the diagonal by the factor `alpha`.

        """
        if alpha < 1.0:
            D = self.diag.copy()
            self.diag /= alpha
            self.source += ((1.0 - alpha) / alpha) * D * self.psi0

        return self

    def apply(self, x):
        Ax = self.diag * x
        if self.gamma0 > 0.0:
            Ax -= self.gamma0 * self._fa.laplacian(x)

        if self.flux is not None:
            Ax += self._fa.div(self.flux * x)

        return Ax

    def preconditioner(self):
        """Exact spectral inverse of the operator with every coefficient
        replaced by its global mean.

        """
        fa = self._fa
        comm = self.comm
        n = fa.num_points

        symbol = allsum(self.diag, comm) / n + self.gamma0 * fa.Ksq
        if self.flux is not None:
            for i in range(3):
                Fbar = allsum(self.flux[i], comm) / n
                symbol = symbol + 1j * fa.K[i] * Fbar

        return 1.0 / symbol

    def solve(self, tol=1e-10, maxiter=500):
        """Solve the assembled system with the right-preconditioned
        BiCGStab method and overwrite `psi` with the result.

        Returns
        -------
        `SolverPerformance`
            residuals are L2 norms relative to the right-hand side.

        """
        comm = self.comm
        b = self.source

        if self.gamma0 == 0.0 and self.flux is None:  # diagonal operator
            self.psi[:] = b / self.diag
            return SolverPerformance(self.name, 0.0, 0.0, 0, True)

        fa = self._fa
        Minv = self.preconditioner()

        def norm(v):
            return sqrt(alldot(v, v, comm))

        x = np.array(self.psi0, copy=True)
        r = b - self.apply(x)

        bnorm = norm(b) or 1.0
        res0 = res = norm(r) / bnorm
        niter = 0

        if res > tol:
            r0 = r.copy()
            p = r.copy()
            v = np.zeros_like(r)
            rho = alpha = omega = 1.0

            while niter < maxiter:
                rho_new = alldot(r0, r, comm)
                if rho_new == 0.0:
                    break

                if niter > 0:
                    beta = (rho_new / rho) * (alpha / omega)
                    p = r + beta * (p - omega * v)
                rho = rho_new

                phat = fa.filter(p, Minv)
                v = self.apply(phat)
                r0v = alldot(r0, v, comm)
                if r0v == 0.0:
                    break

                alpha = rho / r0v
                x += alpha * phat
                r -= alpha * v
                niter += 1

                res = norm(r) / bnorm
                if res <= tol:
                    break

                shat = fa.filter(r, Minv)
                t = self.apply(shat)
                tt = alldot(t, t, comm)
                if tt == 0.0:
                    break

                omega = alldot(t, r, comm) / tt
                x += omega * shat
                r -= omega * t

                res = norm(r) / bnorm
                if res <= tol or omega == 0.0:
                    break

        converged = res <= tol
        if not converged:
            self.print(f'Warning: {self.name} solve not converged after '
                       f'{niter} iterations, residual = {enf(res)}')

        self.psi[:] = x

        return SolverPerformance(self.name, res0, res, niter, converged)
