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

"""Parallel HDF5 snapshot I/O for MPI-distributed physical-space fields.

"""
from mpi4py import MPI

from contextlib import nullcontext
import time
import h5py

from .utils import MPI_Debugging

__all__ = []

comm = MPI.COMM_WORLD


class h5FileIO(h5py.File, MPI_Debugging):
    """Class for reading/writing a single snapshot of 3D data to HDF5.

    Files are opened with the parallel ``mpio`` driver and accessed
    collectively when `comm` has more than one task, and with the default
    driver otherwise, so that serial runs do not need an MPI-enabled HDF5.

    """
    def __init__(self, filename, mode='r', comm=comm, **h5_kw):
        if comm.size > 1:
            h5_kw.update(driver='mpio', comm=comm)

        super().__init__(filename, mode, **h5_kw)
        self.comm = comm

        return

    def _collective(self, dset):
        if self.comm.size > 1:
            return dset.collective

        return nullcontext()

    @staticmethod
    def _local_slice(U, T):
        if hasattr(U, 'local_slice'):
            return U.local_slice()[-3:], U.global_shape[-3:]

        Tshape = T.shape(False)[-3:]
        fwd_out = not Tshape == U.shape[-3:]
        return T.local_slice(fwd_out)[-3:], T.global_shape(fwd_out)[-3:]

    def read(self, name, U, T=None):
        """
        Read ``U``'s local slice from the HDF5 file. `U` must either be a
        :class:`shenfun.Array` or a :class:`shenfun.TensorProductSpace` must
        be provided.

        Parameters
        ----------
        name: str
            Base string for tensor field `U`. For example, if `U` is rank 1,
            then scalar fields will be read in from datasets "name0", "name1",
            etc.
        U: :class:`numpy.ndarray`-like or :class:`shenfun.Array`-like
            The data field to be read from the named dataset.
        T: :class:`shenfun.TensorProductSpace`, optional
            The `shenfun` basis space that defines `U`'s global shape and
            local slice of the global array.

        """
        wt0 = time.perf_counter()

        rank = len(U.shape) - 3
        local_slice, global_shape = self._local_slice(U, T)

        if rank == 0:
            dset = self[name]
            self.soft_assert(tuple(dset.shape) == tuple(global_shape),
                            f'ERROR: {name} has shape {dset.shape}')
            with self._collective(dset):
                U[:] = dset[local_slice]

        else:
            for i in range(U.shape[0]):
                dset = self[f"{name}{i}"]
                with self._collective(dset):
                    U[i] = dset[local_slice]

        wt1 = time.perf_counter()
        self.print(f" +++ Read {name} from disk in {wt1-wt0} seconds")

        return

    def write(self, name, U, T=None, kwargs={}):
        """Write ``U`` to HDF5 file.

        Parameters
        ----------
        name: str
            Base string for tensor field `U`. For example, if `U` is rank 1,
            then scalar fields will be stored as datasets "name0", "name1",
            etc.
        U: :class:`numpy.ndarray`-like or :class:`shenfun.Array`-like
            The data field to be stored as the named dataset.
        T: :class:`shenfun.TensorProductSpace`, optional
            The `shenfun` basis space that defines `U`'s global shape and
            local slice of the global array.
        kwargs: dict, optional
            File attributes to store alongside the data.

        """
        wt0 = time.perf_counter()

        rank = len(U.shape) - 3
        local_slice, global_shape = self._local_slice(U, T)

        if rank == 0:
            dset = self.require_dataset(
                name, shape=global_shape, dtype=U.dtype)
            with self._collective(dset):
                dset[local_slice] = U

        else:
            for i in range(U.shape[0]):
                dset = self.require_dataset(
                    f"{name}{i}", shape=global_shape, dtype=U.dtype)
                with self._collective(dset):
                    dset[local_slice] = U[i]

        for k, v in kwargs.items():
            if v is not None:
                self.attrs[k] = v

        wt1 = time.perf_counter()
        self.print(f" +++ Wrote {name} to disk in {wt1-wt0} seconds")

        return
