"""Shared pytest fixtures for the jax_surge test suite."""

import pytest
import jax
jax.config.update("jax_enable_x64", True)
import jax.numpy as jnp

from jax_surge.solvers import GridParameters, create_staggered_grid, depth_profile


@pytest.fixture
def flat_params():
    """nx=100 height nodes over 1 km with a flat 10 m bed."""
    return GridParameters.create(L=1000.0, nx=100, D=10.0, g=9.81)


@pytest.fixture
def shelf_params():
    """Coarser grid over a two-step (tanh) bed, with a 2 m wide channel."""
    L, nx = 10e3, 50
    _, x_u, _ = create_staggered_grid(L, nx)
    D = depth_profile(x_u, 5.0, 20.0, (2e3, 8e3), (500.0, 500.0))
    return GridParameters.create(L=L, nx=nx, D=D, W=2.0, rho=1000.0, C=60.0)


@pytest.fixture
def smooth_state(shelf_params):
    """Smooth non-trivial height and velocity fields on the shelf grid."""
    from jax_surge.solvers import StaggeredGridState
    L = shelf_params.L
    h = 0.3 * jnp.sin(2 * jnp.pi * shelf_params.grid_h / L) + 0.1
    u = 0.2 * jnp.cos(jnp.pi * shelf_params.grid_u / L)
    return StaggeredGridState(h=h, u=u)
