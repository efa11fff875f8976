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

"""Dynamic Smagorinsky k-equation driven by a Taylor-Green velocity field
that is frozen in time.

Run as, e.g., ``mpirun -n 4 python frozen_tgv.py --N 64 @model.cfg``, where
``model.cfg`` holds ``key = value`` lines for any host or model option.

"""
from mpi4py import MPI  # must always be imported first

import argparse
import time

import numpy as np

import dynsgs

comm = MPI.COMM_WORLD

parser = argparse.ArgumentParser(add_help=False)
parser.add_argument('--nsteps', type=int, default=20)
parser.add_argument('--dt', type=float, default=1e-2)
parser.add_argument('--U0', type=float, default=1.0)
parser.add_argument('--output', type=str, default=None)


def taylor_green(host, U0):
    x, y, z = host.local_mesh()
    U = np.empty([3, *host.r.shape])
    U[0] = U0 * np.sin(x) * np.cos(y) * np.cos(z)
    U[1] = -U0 * np.cos(x) * np.sin(y) * np.cos(z)
    U[2] = 0.0

    return U


def main():
    run = dynsgs.parse_config(parser, comm=comm)
    host = dynsgs.PeriodicBoxHost(comm=comm)
    host.set_velocity(taylor_green(host, run.U0))

    model = dynsgs.new_les_model('dyn_smag', host)

    fmt = dynsgs.enf
    host.print('# step,       t,     <k>,   min k,   max k,   <nuT>, '
               'iters, residual')

    wt0 = time.perf_counter()
    for istep in range(run.nsteps):
        perf = model.correct(run.dt)
        stats = model.summary()
        host.print(f"{istep:4d}, {fmt((istep + 1) * run.dt)}, "
                   f"{fmt(stats['k_mean'])}, {fmt(stats['k_min'])}, "
                   f"{fmt(stats['k_max'])}, {fmt(stats['nuT_mean'])}, "
                   f"{perf.iterations:5d}, {fmt(perf.final_residual)}",
                   flush=True)

    m1, m2, kmin, kmax = dynsgs.moments(model.k, comm=comm)
    host.print(f"# k moments: {fmt(m1)}, {fmt(m2)}, {fmt(kmin)}, "
               f"{fmt(kmax)}")
    host.print(f"# wall time: {fmt(time.perf_counter() - wt0)} s")

    if run.output:
        model.write(run.output)

    return


if __name__ == "__main__":
    main()
