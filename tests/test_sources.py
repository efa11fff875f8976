"""Tests for the run-time source-term hooks."""

import numpy as np

from dynsgs import FieldSource, SemiImplicitSource, LimitField, SourceTerms


class RecordingSource(FieldSource):

    def __init__(self, field_names):
        super().__init__(field_names)
        self.calls = []

    def add_sup(self, eqn, name):
        self.calls.append(('add_sup', name))

    def constrain(self, eqn, name):
        self.calls.append(('constrain', name))

    def correct(self, field, name):
        self.calls.append(('correct', name))


class TestSourceTerms:

    def test_dispatches_only_to_matching_fields(self, host):
        on_k = RecordingSource('k')
        on_nut = RecordingSource(['nuT'])
        sources = SourceTerms([on_k, on_nut])

        psi = host.new_scalar(1.0)
        eqn = host.transport_equation(psi, 1.0, 1.0, 'k')
        sources.add_sup(eqn, 'k')
        sources.constrain(eqn, 'k')
        sources.correct(psi, 'k')

        assert on_k.calls == [('add_sup', 'k'), ('constrain', 'k'),
                              ('correct', 'k')]
        assert on_nut.calls == []

    def test_base_source_is_inert(self, host):
        psi = host.new_scalar(1.0)
        eqn = host.transport_equation(psi, 1.0, 1.0, 'k')
        source = FieldSource('k')
        source.add_sup(eqn, 'k')
        source.constrain(eqn, 'k')
        source.correct(psi, 'k')

        assert np.allclose(eqn.diag, 1.0)
        assert np.allclose(eqn.source, 1.0)


class TestSemiImplicitSource:

    def test_explicit_and_implicit_parts(self, host):
        psi = host.new_scalar(2.0)
        eqn = host.transport_equation(psi, 1.0, 1.0, 'k')
        SemiImplicitSource('k', Su=0.5, Sp=-3.0).add_sup(eqn, 'k')

        assert np.allclose(eqn.diag, 4.0)
        assert np.allclose(eqn.source, 2.5)

    def test_positive_rate_is_lagged(self, host):
        psi = host.new_scalar(2.0)
        eqn = host.transport_equation(psi, 1.0, 1.0, 'k')
        SemiImplicitSource('k', Sp=1.0).add_sup(eqn, 'k')

        assert np.allclose(eqn.diag, 1.0)
        assert np.allclose(eqn.source, 4.0)


class TestLimitField:

    def test_clips_in_place(self, host):
        field = np.linspace(-1.0, 2.0, host.r.size).reshape(host.r.shape)
        LimitField('k', lower=0.0, upper=1.0).correct(field, 'k')

        assert field.min() == 0.0
        assert field.max() == 1.0
