"""Unit tests for the finite difference operators."""

import jax.numpy as jnp
import jax_surge.solvers as solvers


class TestFiniteDifferences:
    """Test collocated finite difference operators."""

    def test_dirichlet_first_derivative(self):
        """Test first derivative with Dirichlet BC."""
        L = 1.0
        nx = 6
        dx = L / (nx + 1)

        # Interior grid points
        x = jnp.linspace(dx, L - dx, nx)

        # Linear function: du/dx = 1 everywhere
        u = x.copy()

        du_dx = solvers.d__dx_c_dirichlet(u, dx, u_left=0.0, u_right=L)

        expected = jnp.ones_like(u)

        assert du_dx.shape == u.shape
        assert jnp.allclose(du_dx, expected, atol=dx**2)

    def test_dirichlet_second_derivative(self):
        """Test second derivative with Dirichlet BCs."""
        L = 1.0
        nx = 6
        dx = L / (nx + 1)

        x = jnp.linspace(dx, L - dx, nx)

        # Quadratic function: d2u/dx2 = 2 everywhere
        u = x**2

        d2u_dx2 = solvers.d2__dx2_c_dirichlet(u, dx, u_left=0.0, u_right=L**2)

        expected = jnp.full_like(u, 2.0)

        assert d2u_dx2.shape == u.shape
        assert jnp.allclose(d2u_dx2, expected, atol=dx**2)

    def test_periodic_first_derivative(self):
        """Test first derivative with periodic BC."""
        L = 1.0
        nx = 16
        dx = L / nx

        x = jnp.linspace(0, L, nx, endpoint=False)
        u = jnp.sin(2 * jnp.pi * x / L)

        du_dx = solvers.d__dx_c_periodic(u, dx)
        expected = (2 * jnp.pi / L) * jnp.cos(2 * jnp.pi * x / L)

        # Theoretical error bound: (dx²/6) * |f'''|_max
        theoretical_tol = (dx**2 / 6) * (2 * jnp.pi / L)**3

        assert du_dx.shape == u.shape
        assert jnp.allclose(du_dx, expected, atol=theoretical_tol)

    def test_periodic_second_derivative(self):
        """Test second derivative with periodic BC."""
        L = 1.0
        nx = 16
        dx = L / nx

        x = jnp.linspace(0, L, nx, endpoint=False)
        u = jnp.sin(2 * jnp.pi * x / L)

        d2u_dx2 = solvers.d2__dx2_c_periodic(u, dx)
        expected = -(2 * jnp.pi / L)**2 * jnp.sin(2 * jnp.pi * x / L)

        theoretical_tol = (dx**2 / 12) * (2 * jnp.pi / L)**4

        assert d2u_dx2.shape == u.shape
        assert jnp.allclose(d2u_dx2, expected, atol=theoretical_tol)


class TestStaggeredOperators:
    """Test operators mapping between cell centres and cell edges."""

    def test_average_copies_boundary_cells(self):
        h = jnp.array([1.0, 3.0, 7.0])
        h_avg = solvers.avg_h_to_u(h)

        assert h_avg.shape == (4,)
        assert jnp.allclose(h_avg, jnp.array([1.0, 2.0, 5.0, 7.0]))

    def test_height_gradient_on_edges(self):
        L, nx = 2.0, 8
        x_h, x_u, dx = solvers.create_staggered_grid(L, nx)

        # Linear h: exact gradient 3 at interior edges, zero at the two ends
        dh_dx = solvers.d__dx_h_to_u(3.0 * x_h + 1.0, dx)

        assert dh_dx.shape == x_u.shape
        assert jnp.allclose(dh_dx[1:-1], 3.0)
        assert dh_dx[0] == 0.0
        assert dh_dx[-1] == 0.0

    def test_flux_divergence_on_centres(self):
        L, nx = 2.0, 8
        x_h, x_u, dx = solvers.create_staggered_grid(L, nx)

        # Quadratic flux: forward difference is exact at the cell centres
        df_dx = solvers.d__dx_u_to_h(x_u**2, dx)

        assert df_dx.shape == x_h.shape
        assert jnp.allclose(df_dx, 2.0 * x_h)

    def test_single_cell(self):
        h = jnp.array([0.5])

        assert jnp.allclose(solvers.avg_h_to_u(h), jnp.array([0.5, 0.5]))
        assert jnp.allclose(solvers.d__dx_h_to_u(h, 1.0), jnp.zeros(2))


class TestGrids:

    def test_staggered_grid_layout(self):
        x_h, x_u, dx = solvers.create_staggered_grid(1000.0, 100)

        assert dx == 10.0
        assert x_h.shape == (100,)
        assert x_u.shape == (101,)
        assert jnp.isclose(x_h[0], 5.0)
        assert jnp.isclose(x_h[-1], 995.0)
        assert x_u[0] == 0.0
        assert jnp.isclose(x_u[-1], 1000.0)

    def test_uniform_grid_spacing(self):
        x, dx = solvers.create_uniform_grid(1.0, 9, solvers.BCType.DIRICHLET, return_spacing=True)
        assert jnp.isclose(dx, 0.1)
        assert jnp.isclose(x[0], 0.1)

        x, dx = solvers.create_uniform_grid(1.0, 10, solvers.BCType.PERIODIC, return_spacing=True)
        assert jnp.isclose(dx, 0.1)
        assert x[0] == 0.0
