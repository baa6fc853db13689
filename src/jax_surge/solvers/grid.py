import jax.numpy as jnp
from enum import IntEnum

from ..errors import ConfigurationError


class BCType(IntEnum):
    """
    Boundary condition types.
    
    Currently supported boundary conditions:
        PERIODIC
        DIRICHLET
    """
    PERIODIC = 0
    DIRICHLET = 1


def create_uniform_grid(L, nx: int, bc_type: BCType, return_spacing=False):
    """
    Create a uniform (collocated) grid based on the boundary condition type.
    
    Args:
        L: Domain length
        nx: Number of grid points
        bc_type: BCType object

    Returns: 
        x: Grid
        dx: Grid spacing (only if `return_spacing` is True)
    """
    if bc_type not in (BCType.DIRICHLET, BCType.PERIODIC):
        raise ValueError(f"Unsupported boundary condition type: {bc_type}")

    if bc_type == BCType.DIRICHLET:
        # Grid contains only interior points of [0, L]
        dx = L / (nx + 1)
        x = jnp.linspace(dx, L - dx, nx, endpoint=True)
    else:
        # Grid covers [0, L) with nx points
        dx = L / nx
        x = jnp.linspace(0, L, nx, endpoint=False)
    
    if return_spacing:
        return x, dx
    else:
        return x


def create_staggered_grid(L, nx: int):
    """
    Create the staggered grid used by the surge model.

    Heights live at cell centres and velocities at cell edges:
        x_h: dx/2, 3dx/2, ..., L - dx/2   (nx points)
        x_u: 0, dx, 2dx, ..., L           (nx + 1 points)

    Args:
        L: Domain length
        nx: Number of height nodes

    Returns:
        x_h: Height grid
        x_u: Velocity grid
        dx: Grid spacing
    """
    if nx < 1:
        raise ConfigurationError(f"Need at least one height node, got nx={nx}")
    if not L > 0:
        raise ConfigurationError(f"Domain length must be positive, got L={L}")

    dx = L / nx
    x_h = jnp.linspace(0.5 * dx, L - 0.5 * dx, nx)
    x_u = jnp.linspace(0.0, L, nx + 1)
    return x_h, x_u, dx
