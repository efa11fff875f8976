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

"""Dynamic Smagorinsky subgrid-scale closure with a transported subgrid
kinetic energy, for MPI-distributed pseudo-spectral LES.

"""
__all__ = []

from .src.utils import (
    MPI_Debugging,
    FileArgParser,
    new_parser,
    parse_config,
    enf
    )

from .src.statistics import (
    allsum,
    allmin,
    allmax,
    allcount,
    moments
    )

from .src.maths import (
    dot,
    ddot,
    symm,
    dev,
    strain_magnitude,
    rectify
    )

from .src.file_io import h5FileIO

from .src.fourier_analysis import FourierAnalysis, fft3d

from .src.les import (
    TurbulenceHost,
    PeriodicBoxHost,
    LESEddyViscosity,
    DynamicSmagorinsky,
    LESFilter,
    FieldSource,
    SemiImplicitSource,
    LimitField,
    SourceTerms,
    ScalarTransportEquation,
    SolverPerformance,
    LES_MODELS,
    new_les_model
    )
