"""
Finite difference operators on collocated and staggered 1D grids.

Collocated operators act on a single array and return an array of the same
length. Staggered operators map between height nodes (cell centres, length
`nx`) and velocity nodes (cell edges, length `nx + 1`).
"""

import jax.numpy as jnp


def d__dx_c_periodic(u: jnp.ndarray, dx: float) -> jnp.ndarray:
    """
    Approximate the first derivative using central differences with periodic boundary conditions.

    Accuracy: Second-order
    """
    u_plus = jnp.roll(u, -1)  # u[i+1]
    u_minus = jnp.roll(u, 1)  # u[i-1]
    return (u_plus - u_minus) / (2.0 * dx)


def d2__dx2_c_periodic(u: jnp.ndarray, dx: float) -> jnp.ndarray:
    """
    Approximate the second derivative using central differences with periodic boundary conditions.

    Accuracy: Second-order
    """
    u_plus = jnp.roll(u, -1)
    u_minus = jnp.roll(u, 1)
    return (u_plus - 2.0 * u + u_minus) / (dx**2)


def d__dx_c_dirichlet(u: jnp.ndarray, dx: float, u_left: float, u_right: float) -> jnp.ndarray:
    """
    Approximate the first derivative using central differences with Dirichlet boundary conditions.

    `u` holds interior points only; `u_left` and `u_right` are the boundary values.

    Accuracy: Second-order
    """
    u_ext = jnp.concatenate([jnp.atleast_1d(jnp.asarray(u_left, dtype=u.dtype)),
                             u,
                             jnp.atleast_1d(jnp.asarray(u_right, dtype=u.dtype))])
    return (u_ext[2:] - u_ext[:-2]) / (2.0 * dx)


def d2__dx2_c_dirichlet(u: jnp.ndarray, dx: float, u_left: float, u_right: float) -> jnp.ndarray:
    """
    Approximate the second derivative using central differences with Dirichlet boundary conditions.

    Accuracy: Second-order
    """
    u_ext = jnp.concatenate([jnp.atleast_1d(jnp.asarray(u_left, dtype=u.dtype)),
                             u,
                             jnp.atleast_1d(jnp.asarray(u_right, dtype=u.dtype))])
    return (u_ext[2:] - 2.0 * u_ext[1:-1] + u_ext[:-2]) / (dx**2)


# Staggered-grid operators


def avg_h_to_u(h: jnp.ndarray) -> jnp.ndarray:
    """
    Average cell-centre values onto cell edges.

    Interior edges take the mean of the two neighbouring cells; the two
    boundary edges copy the adjacent cell value (no extrapolation).

    Returns:
        Array of length len(h) + 1
    """
    interior = 0.5 * (h[1:] + h[:-1])
    return jnp.concatenate([h[:1], interior, h[-1:]])


def d__dx_h_to_u(h: jnp.ndarray, dx: float) -> jnp.ndarray:
    """
    Derivative of cell-centre values evaluated at cell edges.

    Interior edges use the centred difference (h[i] - h[i-1]) / dx, the two
    boundary edges are set to zero.

    Returns:
        Array of length len(h) + 1
    """
    interior = (h[1:] - h[:-1]) / dx
    zero = jnp.zeros((1,), dtype=interior.dtype)
    return jnp.concatenate([zero, interior, zero])


def d__dx_u_to_h(f: jnp.ndarray, dx: float) -> jnp.ndarray:
    """
    Derivative of cell-edge values evaluated at cell centres.

    Returns:
        Array of length len(f) - 1
    """
    return (f[1:] - f[:-1]) / dx
