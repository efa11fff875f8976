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

"""Run-time selectable LES closures and the host interface they consume.

"""
from .host import TurbulenceHost, PeriodicBoxHost
from .eddy_viscosity import LESEddyViscosity
from .dynamic_smagorinsky import DynamicSmagorinsky
from .filters import LESFilter
from .sources import FieldSource, SemiImplicitSource, LimitField, SourceTerms
from .transport import ScalarTransportEquation, SolverPerformance

__all__ = []

LES_MODELS = {
    DynamicSmagorinsky.type_name: DynamicSmagorinsky,
    }


def new_les_model(name, host, config=None, **kwargs):
    """Construct the LES closure registered under `name` for `host`.

    """
    host.soft_assert(name in LES_MODELS,
                     f'ERROR: unknown LES model {name!r}, valid models are '
                     f'{sorted(LES_MODELS)}')

    return LES_MODELS[name](host, config, **kwargs)
