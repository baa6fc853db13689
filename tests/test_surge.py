"""Unit and integration tests for the staggered-grid surge model."""

import pytest
import jax.numpy as jnp
import numpy as np

from jax_surge.errors import ConfigurationError
from jax_surge.forcing import ConstantForcing, PeriodicForcing
from jax_surge.integrate import solve_ivp, RK4
from jax_surge.solvers import (
    GridParameters, StaggeredGridState, SurgeWave1D, create_staggered_grid,
    depth_profile, initial_state_bump, surge_rhs_1d, total_volume,
)


class TestDepthProfile:

    def test_shape_and_plateaus(self):
        _, x_u, _ = create_staggered_grid(10e3, 200)
        D = depth_profile(x_u, 5.0, 20.0, (2e3, 8e3), (200.0, 200.0))

        assert D.shape == x_u.shape
        assert jnp.isclose(D[0], 5.0, atol=1e-6)
        assert jnp.isclose(D[100], 20.0, atol=1e-6)  # x = 5 km
        assert jnp.isclose(D[-1], 5.0, atol=1e-6)

    @pytest.mark.parametrize("D_min, D_max, edges, widths", [
        (5.0, 20.0, (2e3, 8e3), (500.0, 500.0)),
        (5.0, 20.0, (8e3, 2e3), (500.0, 3000.0)),
        (30.0, 10.0, (4e3, 6e3), (1e3, 100.0)),
        (1.0, 1.0, (0.0, 0.0), (1.0, 1.0)),
    ])
    def test_values_within_bounds(self, D_min, D_max, edges, widths):
        _, x_u, _ = create_staggered_grid(10e3, 64)
        D = depth_profile(x_u, D_min, D_max, edges, widths)

        assert D.shape == x_u.shape
        assert jnp.all(D >= min(D_min, D_max))
        assert jnp.all(D <= max(D_min, D_max))

    def test_reversed_edges_are_clamped(self):
        _, x_u, _ = create_staggered_grid(10e3, 200)
        # Between the edges the raw superposition is D_min - (D_max - D_min) < 0
        D = depth_profile(x_u, 5.0, 20.0, (8e3, 2e3), (200.0, 200.0))

        assert D[100] == 5.0  # x = 5 km
        assert jnp.all(D == 5.0)


class TestGridParameters:

    def test_scalar_depth_is_broadcast(self, flat_params):
        assert flat_params.D.shape == (101,)
        assert flat_params.dx == 10.0
        assert jnp.all(flat_params.D == 10.0)

    def test_non_positive_depth(self):
        D = jnp.full((11,), 5.0).at[3].set(0.0)
        with pytest.raises(ConfigurationError):
            GridParameters.create(L=100.0, nx=10, D=D)

    def test_depth_length_mismatch(self):
        with pytest.raises(ConfigurationError):
            GridParameters.create(L=100.0, nx=10, D=jnp.ones((10,)))

    def test_zero_nodes(self):
        with pytest.raises(ConfigurationError):
            GridParameters.create(L=100.0, nx=0, D=1.0)

    def test_non_positive_length(self):
        with pytest.raises(ConfigurationError):
            GridParameters.create(L=0.0, nx=10, D=1.0)

    def test_invalid_physical_constant(self):
        with pytest.raises(ConfigurationError):
            GridParameters.create(L=100.0, nx=10, D=1.0, C=0.0)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            GridParameters.create(L=100.0, nx=10, D=-1.0)


class TestInitialState:

    def test_bump_shapes_and_peak(self, flat_params):
        state = initial_state_bump(flat_params, h0=1.0, width=0.05, center=0.5)

        assert state.h.shape == (100,)
        assert state.u.shape == (101,)
        # Centre lies between two height nodes
        assert abs(float(jnp.max(state.h)) - 1.0) < 0.01
        assert jnp.argmax(state.h) in (49, 50)
        assert jnp.all(state.u == 0.0)

    def test_velocity_bump(self, flat_params):
        state = initial_state_bump(flat_params, h0=0.5, width=0.1, center=0.3, u0=2.0)

        # u node 30 sits exactly at x = 300 m
        assert jnp.isclose(state.u[30], 2.0)
        assert jnp.isclose(jnp.max(state.u), 2.0)

    @pytest.mark.parametrize("h0, width", [(0.0, 0.05), (1.0, 0.0), (1e-12, 0.05), (1.0, 1e-11)])
    def test_flat_start(self, flat_params, h0, width):
        state = initial_state_bump(flat_params, h0=h0, width=width, u0=1.0)

        assert state.h.shape == (100,)
        assert state.u.shape == (101,)
        assert jnp.all(state.h == 0.0)
        assert jnp.all(state.u == 0.0)


class TestSurgeDerivative:

    def test_flat_state_is_steady(self, shelf_params):
        rhs = SurgeWave1D(shelf_params)
        state = StaggeredGridState.zeros(shelf_params.nx)

        for t in (0.0, 100.0, 1e5):
            dstate = rhs.evaluate_derivative(state, t)
            assert jnp.all(dstate.h == 0.0)
            assert jnp.all(dstate.u == 0.0)

    def test_derivative_shapes(self, shelf_params, smooth_state):
        dstate = SurgeWave1D(shelf_params)(0.0, smooth_state)

        assert dstate.h.shape == smooth_state.h.shape
        assert dstate.u.shape == smooth_state.u.shape
        assert dstate.u[0] == 0.0
        assert dstate.u[-1] == 0.0

    def test_mass_balance_matches_boundary_flux(self, shelf_params, smooth_state):
        q_in, q_out = 5.0, 3.0
        rhs = SurgeWave1D(
            shelf_params, q_left=ConstantForcing(q_in), q_right=ConstantForcing(q_out)
        )
        dstate = rhs.evaluate_derivative(smooth_state, 0.0)

        # ∫ dh/dt dx · W = q_left - q_right
        net = float(jnp.sum(dstate.h) * shelf_params.dx * shelf_params.W)
        assert np.isclose(net, q_in - q_out, rtol=1e-9, atol=1e-12)

    def test_closed_basin_conserves_mass(self, shelf_params, smooth_state):
        dstate = SurgeWave1D(shelf_params).evaluate_derivative(smooth_state, 0.0)
        assert abs(float(jnp.sum(dstate.h))) < 1e-12

    def test_wind_stress_accelerates_still_water(self, flat_params):
        tau = 0.8
        rhs = SurgeWave1D(flat_params, tau=ConstantForcing(tau))
        dstate = rhs.evaluate_derivative(StaggeredGridState.zeros(flat_params.nx), 0.0)

        expected = tau / (flat_params.rho * 10.0)
        assert jnp.allclose(dstate.u[1:-1], expected)
        assert dstate.u[0] == 0.0 and dstate.u[-1] == 0.0

    @pytest.mark.parametrize("u_value", [1.5, -1.5])
    def test_friction_opposes_flow(self, flat_params, u_value):
        state = StaggeredGridState(
            h=jnp.zeros(flat_params.nx), u=jnp.full((flat_params.nx + 1,), u_value)
        )
        dstate = SurgeWave1D(flat_params).evaluate_derivative(state, 0.0)

        p = flat_params
        expected = -p.g * u_value * abs(u_value) / (p.C**2 * p.rho * 10.0)
        assert jnp.allclose(dstate.u[1:-1], expected)
        assert jnp.all(jnp.sign(dstate.u[1:-1]) == -np.sign(u_value))

    def test_pressure_gradient(self, flat_params):
        slope = 1e-4
        h = slope * flat_params.grid_h
        state = StaggeredGridState(h=h, u=jnp.zeros(flat_params.nx + 1))
        dstate = SurgeWave1D(flat_params).evaluate_derivative(state, 0.0)

        assert jnp.allclose(dstate.u[1:-1], -flat_params.g * slope, rtol=1e-9)

    def test_boundary_velocity_from_flux(self, flat_params):
        q = 4.0
        state = StaggeredGridState.zeros(flat_params.nx)
        dstate = surge_rhs_1d(state, flat_params, 0.0, q, q)

        # Uniform throughflow: u = q / (D W) at both ends
        u_b = q / (10.0 * flat_params.W)
        assert jnp.isclose(dstate.h[0], -(0.0 - 10.0 * u_b) / flat_params.dx)
        assert jnp.isclose(dstate.h[-1], -(10.0 * u_b - 0.0) / flat_params.dx)
        assert jnp.allclose(dstate.h[1:-1], 0.0)

    def test_forcing_is_evaluated_at_requested_time(self, flat_params):
        tau = PeriodicForcing(amplitude=1.0, period=400.0)
        rhs = SurgeWave1D(flat_params, tau=tau)
        state = StaggeredGridState.zeros(flat_params.nx)

        assert jnp.allclose(rhs(0.0, state).u, 0.0)
        assert jnp.allclose(rhs(100.0, state).u[1:-1], 1.0 / (flat_params.rho * 10.0))

    def test_state_shape_mismatch(self, flat_params):
        rhs = SurgeWave1D(flat_params)
        bad = StaggeredGridState(h=jnp.zeros(100), u=jnp.zeros(100))
        with pytest.raises(ConfigurationError):
            rhs.evaluate_derivative(bad, 0.0)

    def test_dry_bed_is_not_guarded(self):
        params = GridParameters.create(L=10.0, nx=5, D=1.0)
        state = StaggeredGridState(h=jnp.full((5,), -1.0), u=jnp.zeros(6))
        dstate = SurgeWave1D(params, tau=ConstantForcing(1.0)).evaluate_derivative(state, 0.0)

        assert not jnp.all(jnp.isfinite(dstate.u))


class TestStateArithmetic:

    def test_linear_combination(self):
        a = StaggeredGridState(h=jnp.ones(3), u=jnp.ones(4))
        b = StaggeredGridState(h=jnp.full(3, 2.0), u=jnp.full(4, 3.0))

        c = a + 0.5 * b - b / 2.0
        assert jnp.allclose(c.h, 1.0)
        assert jnp.allclose(c.u, 1.0)

        d = -(b * 2.0)
        assert jnp.allclose(d.u, -6.0)
        assert c.nx == 3

    def test_scalar_array_multiplier(self):
        a = StaggeredGridState(h=jnp.ones(3), u=jnp.ones(4))
        scaled = jnp.asarray(0.25) * a

        assert isinstance(scaled, StaggeredGridState)
        assert jnp.allclose(scaled.u, 0.25)


class TestSurgeIntegration:

    def test_gaussian_bump_conserves_volume(self, flat_params):
        """One RK4 step of a closed, unforced basin keeps the total volume."""
        rhs = SurgeWave1D(flat_params)
        y0 = initial_state_bump(flat_params, h0=1.0, width=0.05)
        v0 = total_volume(y0, flat_params.dx)

        t, y1 = solve_ivp(rhs, (0.0, 0.1), y0, RK4(), step_size=0.1)

        assert t == 0.1
        assert not jnp.allclose(y1.u, 0.0)
        assert abs(total_volume(y1, flat_params.dx) - v0) < 1e-9 * abs(v0)

    def test_long_run_is_stable(self, flat_params):
        rhs = SurgeWave1D(flat_params)
        y0 = initial_state_bump(flat_params, h0=0.5, width=0.05)
        v0 = total_volume(y0, flat_params.dx)

        # CFL ~ 0.5
        _, y = solve_ivp(rhs, (0.0, 100.0), y0, RK4(), step_size=0.5)

        assert jnp.all(jnp.isfinite(y.h))
        assert float(jnp.max(jnp.abs(y.h))) < 1.0
        assert abs(total_volume(y, flat_params.dx) - v0) < 1e-8 * abs(v0)

    def test_inflow_raises_water_level(self, shelf_params):
        q = 10.0
        rhs = SurgeWave1D(shelf_params, q_left=ConstantForcing(q))
        y0 = StaggeredGridState.zeros(shelf_params.nx)
        t_end = 600.0

        _, y = solve_ivp(rhs, (0.0, t_end), y0, RK4(), step_size=5.0)

        added = total_volume(y, shelf_params.dx) * shelf_params.W
        assert np.isclose(added, q * t_end, rtol=1e-9)
