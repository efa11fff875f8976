"""Tests for the semi-implicit scalar transport equation."""

import numpy as np

from dynsgs import ScalarTransportEquation, SolverPerformance


class TestDiagonalSystem:

    def test_implicit_sink(self, host):
        psi = host.new_scalar(2.0)
        eqn = host.transport_equation(psi, 1.0, 0.5, 'psi')
        eqn.add_sink(2.0)
        perf = eqn.solve()

        # (2 + 2) psi = 2 * 2
        assert np.allclose(psi, 1.0)
        assert perf == SolverPerformance('psi', 0.0, 0.0, 0, True)

    def test_negative_sink_is_lagged_source(self, host):
        psi = host.new_scalar(2.0)
        eqn = host.transport_equation(psi, 1.0, 0.5)
        eqn.add_signed_sink(-1.0)

        assert np.allclose(eqn.diag, 2.0)
        eqn.solve()
        assert np.allclose(psi, 3.0)

    def test_signed_sink_splits_pointwise(self, host):
        x = host.local_mesh()[0]
        coeff = np.broadcast_to(np.sin(x), host.r.shape)

        psi = host.new_scalar(1.0)
        eqn = host.transport_equation(psi, 1.0, 1.0)
        eqn.add_signed_sink(coeff)

        assert np.all(eqn.diag >= 1.0)
        assert np.allclose(eqn.diag, 1.0 + np.maximum(coeff, 0.0))
        assert np.allclose(eqn.source, 1.0 + np.maximum(-coeff, 0.0))

    def test_relaxation_keeps_fixed_point(self, host):
        psi = host.new_scalar(2.0)
        eqn = host.transport_equation(psi, 1.0, 0.5)
        eqn.relax(0.5)

        assert np.allclose(eqn.diag, 4.0)
        eqn.solve()
        assert np.allclose(psi, 2.0)

    def test_uniform_advection_is_inert(self, host):
        psi = host.new_scalar(1.5)
        flux = np.ones([3, *host.r.shape])
        eqn = host.transport_equation(psi, 1.0, 0.1)
        eqn.add_advection(flux)
        eqn.solve()

        assert np.allclose(psi, 1.5)


class TestDiffusionSolve:

    def test_constant_diffusivity_matches_spectral_solution(self, host):
        x, y, z = host.local_mesh()
        psi = np.broadcast_to(np.sin(x) + np.cos(2 * y) + 0 * z,
                              host.r.shape).copy()
        psi0 = psi.copy()

        dt, gamma = 0.1, 0.5
        eqn = host.transport_equation(psi, 1.0, dt, 'T')
        eqn.add_diffusion(gamma * np.ones(host.r.shape))
        perf = eqn.solve(tol=1e-12)

        d = 1 / dt
        expected = (d / (d + gamma) * np.sin(x)
                    + d / (d + 4 * gamma) * np.cos(2 * y) + 0 * z)

        assert perf.converged
        assert perf.iterations <= 2
        assert np.allclose(psi, expected, atol=1e-10)
        assert np.allclose(eqn.psi0, psi0)

    def test_variable_coefficients_converge(self, host):
        x, y, z = host.local_mesh()
        psi = np.broadcast_to(1.0 + 0.5 * np.sin(x) * np.cos(z) + 0 * y,
                              host.r.shape).copy()

        eqn = ScalarTransportEquation(host, psi, 1.0, 0.05, 'k')
        eqn.add_sink(1.0 + 0.5 * np.cos(y) + 0 * x * z)
        eqn.add_diffusion(0.2 + 0.1 * np.sin(z) + 0 * x * y)
        perf = eqn.solve(tol=1e-10, maxiter=200)

        assert perf.converged
        assert perf.initial_residual > perf.final_residual
        r = eqn.source - eqn.apply(psi)
        assert np.linalg.norm(r) <= 1e-8 * np.linalg.norm(eqn.source)

    def test_iteration_cap_reports_not_converged(self, host, capsys):
        x, y, z = host.local_mesh()
        psi = np.broadcast_to(np.sin(x) * np.cos(y) * np.sin(z),
                              host.r.shape).copy()

        eqn = host.transport_equation(psi, 1.0, 1.0, 'k')
        eqn.add_sink(10.0 * (1.0 + 0.9 * np.sin(x + y + z)))
        eqn.add_diffusion(1.0)
        perf = eqn.solve(tol=1e-30, maxiter=1)

        assert perf.converged is False
        assert perf.iterations == 1
        assert 'not converged' in capsys.readouterr().out


class TestImplicitAdvection:

    def test_uniform_flux_damps_and_shifts_mode(self, host):
        x, y, z = host.local_mesh()
        psi = np.broadcast_to(np.sin(x) + 0 * y * z, host.r.shape).copy()

        U, dt = 2.0, 0.5
        flux = np.zeros([3, *host.r.shape])
        flux[0] = U

        eqn = host.transport_equation(psi, 1.0, dt, 'psi')
        eqn.add_advection(flux)
        perf = eqn.solve(tol=1e-12)

        # (1/dt + i U) psi_hat = psi0_hat / dt for the k = 1 mode
        d = 1 / dt
        gain = d / np.hypot(d, U)
        phase = np.arctan2(U, d)

        assert perf.converged
        assert perf.iterations <= 2
        assert np.allclose(psi, gain * np.sin(x - phase) + 0 * y * z,
                           atol=1e-10)

    def test_advection_never_amplifies(self, host):
        x, y, z = host.local_mesh()
        psi = np.broadcast_to(1.0 + 0.5 * np.sin(7 * x + 3 * y) + 0 * z,
                              host.r.shape).copy()
        flux = np.zeros([3, *host.r.shape])
        flux[0] = 1.0
        flux[1] = -0.5

        for _ in range(50):
            psi_max = psi.max()
            eqn = host.transport_equation(psi, 1.0, 0.1, 'psi')
            eqn.add_advection(flux)
            eqn.solve()

            assert psi.max() <= psi_max * (1 + 1e-12)

        assert np.isclose(psi.mean(), 1.0)

    def test_variable_flux_converges(self, host):
        x, y, z = host.local_mesh()
        psi = np.broadcast_to(1.0 + 0.5 * np.cos(x) * np.sin(z) + 0 * y,
                              host.r.shape).copy()
        flux = np.zeros([3, *host.r.shape])
        flux[0] = np.sin(x) + 0 * y * z
        flux[2] = 0.5 * np.cos(y) + 0 * x * z

        eqn = host.transport_equation(psi, 1.0, 0.05, 'k')
        eqn.add_advection(flux)
        eqn.add_diffusion(0.1 + 0.05 * np.cos(z) + 0 * x * y)
        perf = eqn.solve(tol=1e-10, maxiter=200)

        assert perf.converged
        r = eqn.source - eqn.apply(psi)
        assert np.linalg.norm(r) <= 1e-8 * np.linalg.norm(eqn.source)
