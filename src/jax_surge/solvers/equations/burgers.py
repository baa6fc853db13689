from dataclasses import dataclass
from typing import Callable, Optional

import jax
import jax.numpy as jnp

from ..grid import BCType
from ..derivatives import (
    d__dx_c_periodic, d2__dx2_c_periodic,
    d__dx_c_dirichlet, d2__dx2_c_dirichlet,
)


def burgers_rhs_1d(
    u: jnp.ndarray,
    nu: float,
    dx: float,
    bc_type: BCType,
    bc_left: float = 0.0,
    bc_right: float = 0.0,
) -> jnp.ndarray:
    """
    Burgers equation in 1D: ∂u/∂t = -u∂u/∂x + ν∂²u/∂x²

    Args:
        u: Solution on the grid from `create_uniform_grid` (interior points
            only for Dirichlet BCs)
        nu: Viscosity
        dx: Spatial grid spacing
        bc_type: Boundary condition type
        bc_left, bc_right: Boundary values (Dirichlet only)
    """
    if bc_type == BCType.PERIODIC:
        du_dx = d__dx_c_periodic(u, dx)
        d2u_dx2 = d2__dx2_c_periodic(u, dx)
    elif bc_type == BCType.DIRICHLET:
        du_dx = d__dx_c_dirichlet(u, dx, bc_left, bc_right)
        d2u_dx2 = d2__dx2_c_dirichlet(u, dx, bc_left, bc_right)
    else:
        raise ValueError(f"Unsupported boundary condition type: {bc_type}")

    # Nonlinear advection and viscous diffusion
    return -u * du_dx + nu * d2u_dx2


_burgers_rhs_jit = jax.jit(burgers_rhs_1d, static_argnames=["bc_type"])


@dataclass(frozen=True)
class Burgers1D:
    """
    Right-hand side of the (optionally forced) viscous Burgers equation.

    Attributes:
        nu: Viscosity
        dx: Grid spacing
        bc_type: Boundary condition type
        bc_left, bc_right: Dirichlet boundary values
        forcing: Optional spatially uniform source term f(t)
    """
    nu: float
    dx: float
    bc_type: BCType = BCType.PERIODIC
    bc_left: float = 0.0
    bc_right: float = 0.0
    forcing: Optional[Callable[[float], float]] = None

    def __post_init__(self):
        if not self.dx > 0:
            raise ValueError(f"Grid spacing must be positive, got dx={self.dx}")

    def evaluate_derivative(self, u: jnp.ndarray, t) -> jnp.ndarray:
        dudt = _burgers_rhs_jit(u, self.nu, self.dx, BCType(self.bc_type), self.bc_left, self.bc_right)
        if self.forcing is not None:
            dudt = dudt + self.forcing(float(t))
        return dudt

    def __call__(self, t, u: jnp.ndarray, *args) -> jnp.ndarray:
        return self.evaluate_derivative(u, t)
