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

from mpi4py import MPI

from math import pi
import numpy as np
from shenfun import FunctionSpace, TensorProductSpace, Function

from .statistics import allsum
from .utils import MPI_Debugging

COMM_WORLD = MPI.COMM_WORLD


def fft3d(N, padding=1, comm=COMM_WORLD, planner_effort='FFTW_MEASURE'):
    fft0 = FunctionSpace(N[0], padding_factor=padding, dtype='c16')
    fft1 = FunctionSpace(N[1], padding_factor=padding, dtype='c16')
    fft2 = FunctionSpace(N[2], padding_factor=padding, dtype='f8')
    fft_params = dict(planner_effort=planner_effort,
                      slab=False,
                      collapse_fourier=False,
                      )
    return TensorProductSpace(comm, (fft0, fft1, fft2), **fft_params)


class FourierAnalysis(MPI_Debugging):
    """Physical-space differential and filtering operators on the periodic
    domain [0, 2pi)^3, evaluated pseudo-spectrally with `shenfun`.

    Every operator takes and returns MPI-local physical-space arrays, with
    vectors stored as ``[3, *local_nx]`` and tensors as
    ``[3, 3, *local_nx]``. Inputs are never modified.

    """

    def __init__(self, N, padding=1, comm=COMM_WORLD, **fft_kw):
        self.comm = comm
        self.soft_assert(len(N) == 3, 'FourierAnalysis requires 3D meshes')

        self._fft = fft3d(N, padding, comm=comm, **fft_kw)

        K = self._K = self.fft.local_wavenumbers()
        Ksq = self._Ksq = K[0]**2 + K[1]**2 + K[2]**2

        K = np.asarray(np.broadcast_arrays(*K))
        self._iK = 1j * K

        self._work_hat = Function(self.fft)
        self._accum_hat = Function(self.fft)
        self._Klap = -Ksq

        return

    ###########################################################################
    @property
    def fft(self):
        return self._fft

    @property
    def nx(self):
        return self.fft.global_shape(False)

    @property
    def local_nx(self):
        return self.fft.shape(False)  # same as self.r.shape

    @property
    def num_points(self):
        return np.prod(self.nx)

    @property
    def dx(self):
        """Uniform mesh spacing in each direction."""
        return 2 * pi / np.asarray(self.nx, dtype='f8')

    @property
    def cell_volume(self):
        return np.prod(self.dx)

    @property
    def K(self):
        return self._K

    @property
    def iK(self):
        return self._iK

    @property
    def Ksq(self):
        """Get the dense array of wavenumber magnitude squared.

        .. math:: \\kappa = |\\mathbf{\\kappa}|^2.

        """
        return self._Ksq

    @property
    def r(self):
        """Real-valued (MPI-local) buffer array for `FFT`.

        .. warning:: FFT buffers are overwritten by some `shenfun` backends
        and are therefore potentially unsafe for use as data arrays.

        """
        return self.fft.forward.input_array

    def local_mesh(self):
        """Broadcastable MPI-local cell-centre coordinates."""
        return self.fft.local_mesh(True)

    def new_scalar(self, value=0.0):
        out = np.empty_like(self.r)
        out[:] = value
        return out

    def grad(self, u, out=None):
        """Gradient of a vector field, ``out[i, j] = d u_j / d x_i``.

        """
        iK = self.iK

        if out is None:
            out = np.empty([3, 3, *self.r.shape], dtype=self.r.dtype)

        for j in range(3):
            u_hat = self.fft.forward(u[j], self._work_hat)
            for i in range(3):
                out[i, j] = self.fft.backward(iK[i] * u_hat)

        return out

    def scalar_grad(self, a, out=None):
        iK = self.iK

        if out is None:
            out = np.empty([3, *self.r.shape], dtype=self.r.dtype)

        a_hat = self.fft.forward(a, self._work_hat)
        for i in range(3):
            out[i] = self.fft.backward(iK[i] * a_hat)

        return out

    def div(self, u, out=None):
        iK = self.iK

        if out is None:
            out = np.empty_like(self.r)

        self._accum_hat[:] = 0.0
        for i in range(3):
            u_hat = self.fft.forward(u[i], self._work_hat)
            self._accum_hat += iK[i] * u_hat

        out[:] = self.fft.backward(self._accum_hat)

        return out

    def laplacian(self, a, out=None):
        if out is None:
            out = np.empty_like(self.r)

        a_hat = self.fft.forward(a, self._work_hat)
        a_hat *= self._Klap
        out[:] = self.fft.backward(a_hat)

        return out

    def filter(self, x, kernel):
        """Convolve every component of the scalar, vector, or tensor field
        `x` with the spectral-space `kernel`.

        A scalar `kernel` is taken to be the identity filter, and a scalar
        `x` is a uniform field that every normalised kernel leaves alone.

        """
        if np.ndim(x) < 3:
            return x

        x = np.asarray(x)
        out = np.empty(x.shape, dtype=self.r.dtype)

        if np.isscalar(kernel):
            out[:] = x
            return out

        for idx in np.ndindex(*x.shape[:-3]):
            x_hat = self.fft.forward(x[idx], self._work_hat)
            x_hat *= kernel
            out[idx] = self.fft.backward(x_hat)

        return out

    def face_average_kernel(self):
        """Provides the spectral multiplier of the cell-face local average:
        every cell value is replaced by the mean of its six face values,
        each face value being the linear interpolant of the two cells that
        share it, i.e. ``0.5 a_P + (1/12) sum_nb a_N``.

        """
        dx = self.dx
        K = self.K
        return 0.5 + (np.cos(K[0] * dx[0])
                      + np.cos(K[1] * dx[1])
                      + np.cos(K[2] * dx[2])) / 6

    def analytic_compact_filter(self, kc):
        """Provides an infinitely differentiable smooth filter with strictly
        positive and compact support in both physical and spectral space.

        From Eyink and Aluie (2009), https://doi.org/10.1063/1.3266883

        """
        with np.errstate(divide='ignore', over='ignore', invalid='ignore'):
            kp = 4 * self.Ksq / kc**2
            Ghat = np.exp(-kp / np.abs(1 - kp))
            Ghat[kp >= 1] = 0.0  # must index in case value is inf

        G = self.fft.backward(Ghat)**2
        G *= self.num_points / allsum(G)  # FFT needs the num_points norm
        Ghat = np.array(self.fft.forward(G).real)
        Ghat[self.Ksq >= kc**2] = 0.0

        return Ghat

    def hypergaussian_filter(self, kc, C=8):
        """Provides 8th-order Hyper-Gaussian filter kernel computed pointwise
        directly from the spectral domain analytical formula.

        """
        return np.exp(-C * (self.Ksq / kc**2)**4)

    def analytic_gaussian_filter(self, delta, C=6):
        """Provides Gaussian filter kernel computed pointwise directly from the
        spectral domain analytical formula.

        """
        C = 1 / (4 * C)
        return np.exp(-C * delta**2 * self.Ksq)

    def analytic_tophat_filter(self, delta):
        """Provides tophat filter kernel computed pointwise directly from the
        spectral domain tensor product of three sinc functions.

        """
        Ghat = 1.0
        for d in range(3):
            kdelta = np.where(self.K[d] == 0.0, 1e-20, delta * self.K[d])
            Ghat = Ghat * 2 * np.sin(0.5 * kdelta) / kdelta

        return Ghat  # broadcasts to dense array
