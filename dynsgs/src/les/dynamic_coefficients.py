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

"""Germano-identity dynamic coefficients of the dynamic Smagorinsky model.

These functions are imported into `DynamicSmagorinsky` as bound methods.
They read `self.host`, `self.filter`, and `self.delta`, and never modify
their inputs or the model state, so calling any of them twice with the
same state returns the same field.

"""
import numpy as np

from ..maths import dot, outer, ddot, dev, strain_magnitude, rectify

__all__ = []

SMALL = 1.0e-15
VSMALL = 1.0e-300

LM_MIN = 0.0     # no backscatter through cD
MM_MIN = SMALL


def subgrid_energy(self):
    """Kinetic energy of the scales between the grid and test filters,
    ``KK = 0.5 (filter(|U|^2) - |filter(U)|^2)``.

    """
    U = self.host.U
    Uf = self.filter(U)

    return 0.5 * (self.filter(dot(U, U)) - dot(Uf, Uf))


def cD(self, Sij):
    """Compute the eddy-viscosity coefficient with the Germano-Lilly
    least-squares procedure, using Favre (density-weighted) test filtering.

    The contractions ``dev(L):M`` and ``M:M`` are locally averaged over the
    cell faces before taking the ratio; the pointwise ratio is unstable.
    The averaged numerator is clipped from below by zero and the averaged
    denominator by `MM_MIN`, so the result is non-negative and finite.

    Parameters
    ----------
    Sij : array_like
        Symmetric grid-scale strain-rate tensor, shape ``[3, 3, *shape]``.

    Returns
    -------
    `numpy.ndarray`
        cD scalar field.

    """
    host = self.host
    filt = self.filter
    rho = host.rho
    U = host.U
    delta = self.delta
    test_delta = filt.ratio * delta

    rho_f = filt(rho)
    Dfilter = filt(rho * Sij) / rho_f
    magSfilter = strain_magnitude(Dfilter)
    magS = strain_magnitude(Sij)

    # generalised Leonard stress crossing the test filter
    rhoU = rho * U
    rhoU_f = filt(rhoU)
    Lij = filt(outer(rhoU, rhoU) / rho) - outer(rhoU_f, rhoU_f) / rho_f

    Bij = -2 * test_delta**2 * rho_f * magSfilter * dev(Dfilter)
    Aij = -2 * delta**2 * rho * magS * dev(Sij)
    Mij = Bij - filt(Aij)

    LijMij = ddot(dev(Lij), Mij)
    MklMkl = ddot(Mij, Mij)

    numerator = np.maximum(host.average(LijMij), LM_MIN)
    denominator = np.maximum(host.average(MklMkl), MM_MIN)

    return numerator / denominator


def cI(self, Tij):
    """Compute the kinetic-energy-ratio coefficient for the symmetric tensor
    field `Tij` by the same averaged least-squares ratio as `cD`.

    """
    filt = self.filter
    ratio2 = filt.ratio**2

    KK = self.subgrid_energy()

    Tf = filt(Tij)
    mm = self.delta**2 * (ratio2 * ddot(Tf, Tf) - filt(ddot(Tij, Tij)))

    mmmm = np.maximum(self.host.average(mm**2), VSMALL)

    return self.host.average(KK * mm) / mmmm


def Ce(self, D, KK):
    """Compute the dissipation coefficient from the resolved dissipation
    crossing the test filter, normalised by ``KK**1.5 / (test width)``.

    Negative estimates (backscatter) are rectified to zero.

    Parameters
    ----------
    D : array_like
        Deviatoric grid-scale strain-rate tensor.
    KK : array_like
        Positive test-filter kinetic energy.

    """
    filt = self.filter
    Df = filt(D)

    resolved = filt(self.nu_eff() * (filt(ddot(D, D)) - ddot(Df, Df)))
    turnover = filt(KK**1.5 / (filt.ratio * self.delta))

    return rectify(resolved / np.maximum(turnover, VSMALL))
