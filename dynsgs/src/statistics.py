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

"""MPI-distributed statistics methods.

These methods do not require information about domain decomposition or
dimensionality.

"""
from math import fsum
import numpy as np
from mpi4py import MPI

__all__ = []

WCOMM = MPI.COMM_WORLD


def allsum(data, comm=WCOMM):
    return comm.allreduce(fsum(np.asarray(data).flat), op=MPI.SUM)


def allmin(data, comm=WCOMM):
    data = np.asarray(data)
    fill = np.ma.minimum_fill_value(data)
    return comm.allreduce(np.amin(data, initial=fill), op=MPI.MIN)


def allmax(data, comm=WCOMM):
    data = np.asarray(data)
    fill = np.ma.maximum_fill_value(data)
    return comm.allreduce(np.amax(data, initial=fill), op=MPI.MAX)


def allcount(mask, comm=WCOMM):
    """Global number of True entries in an MPI-distributed boolean mask."""
    return comm.allreduce(int(np.count_nonzero(mask)), op=MPI.SUM)


def alldot(a, b, comm=WCOMM):
    """Global Euclidean inner product of two MPI-distributed arrays.

    Uses `np.vdot` rather than `fsum` since this sits inside the iterative
    linear solves.

    """
    return comm.allreduce(float(np.vdot(a, b).real), op=MPI.SUM)


def moments(data, w=None, comm=WCOMM, root=0):
    """Compute the first two raw moments, minimum, and maximum of an
    MPI-distributed array. Moments are only correct on `root`.

    Parameters
    ----------
    data : array_like
        (MPI-distributed) array of numerical values.
    w : array_like, optional
        Weights array for computing a weighted moment. Must have same
        size as `data`, with `w.flat[i]` being the weight for `data.flat[i]`.
    comm : MPI.Comm, default=MPI.COMM_WORLD
        MPI intracommunicator over which data is distributed.

    Returns
    -------
    m1, m2, gmin, gmax : 4-tuple of scalars
        The MPI-reduced 1st and 2nd moments, minimum, and maximum of `data`.

    """
    data = np.asarray(data)  # returns view of data as plain ndarray
    gmin = allmin(data, comm)
    gmax = allmax(data, comm)

    if w is None:   # unweighted moments
        w = np.array([1.0])
        wbar = 1.0

    else:
        wbar = None

    buffer = np.empty(4)
    buffer[0] = data.size
    buffer[1] = fsum(np.broadcast_to(w, data.shape).flat)
    buffer[2] = fsum((w * data).flat)
    buffer[3] = fsum((w * data**2).flat)

    if comm.rank == root:
        comm.Reduce(MPI.IN_PLACE, buffer, op=MPI.SUM, root=root)
    else:
        comm.Reduce(buffer, None, op=MPI.SUM, root=root)

    buffer[1:] /= buffer[0]          # divide by global data element count
    buffer[2:] /= wbar or buffer[1]  # divide moments by mean weight

    return (*buffer[2:], gmin, gmax)
