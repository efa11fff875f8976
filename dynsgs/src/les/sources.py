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

"""Run-time selectable source terms and constraints for the LES fields,
modelled on the three entry points of OpenFOAM's ``fvOptions``: an explicit
or implicit source added to a transport equation (`add_sup`), a
modification of the assembled equation before it is solved (`constrain`),
and a correction of the solved field (`correct`).

"""
import numpy as np

__all__ = []


class FieldSource:
    """Base class for a source term that applies to a set of named fields.
    Every hook is a no-op unless overridden.

    """
    def __init__(self, field_names):
        if isinstance(field_names, str):
            field_names = [field_names]
        self.field_names = set(field_names)

    def applies_to(self, name):
        return name in self.field_names

    def add_sup(self, eqn, name):
        return

    def constrain(self, eqn, name):
        return

    def correct(self, field, name):
        return


class SemiImplicitSource(FieldSource):
    """Adds ``Su + Sp * psi`` to the right-hand side of a transport
    equation. A negative `Sp` is a sink and is treated implicitly, a
    positive `Sp` is lagged as an explicit source.

    """
    def __init__(self, field_names, Su=0.0, Sp=0.0):
        super().__init__(field_names)
        self.Su = Su
        self.Sp = Sp

    def add_sup(self, eqn, name):
        eqn.add_source(self.Su)
        eqn.add_signed_sink(-np.asarray(self.Sp, dtype='f8'))


class LimitField(FieldSource):
    """Clips a solved field into ``[lower, upper]``."""

    def __init__(self, field_names, lower=-np.inf, upper=np.inf):
        super().__init__(field_names)
        self.lower = lower
        self.upper = upper

    def correct(self, field, name):
        np.clip(field, self.lower, self.upper, out=field)


class SourceTerms(list):
    """Container dispatching the hooks to every `FieldSource` that applies
    to the named field.

    """
    def add_sup(self, eqn, name):
        for source in self:
            if source.applies_to(name):
                source.add_sup(eqn, name)

    def constrain(self, eqn, name):
        for source in self:
            if source.applies_to(name):
                source.constrain(eqn, name)

    def correct(self, field, name):
        for source in self:
            if source.applies_to(name):
                source.correct(field, name)

        return field
