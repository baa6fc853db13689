"""
1D storm-surge wave equation on a staggered grid.

    ∂h/∂t + ∂(Hu)/∂x = 0
    ∂u/∂t + g ∂h/∂x = τ/(ρH) - g u|u| / (C²ρH)

where h is the water height above the reference level, u the velocity,
D the depth below the reference and H = D + h the total water depth.
The domain is closed apart from prescribed volumetric flow rates at the
left and right boundaries.
"""

from dataclasses import dataclass, field
from typing import Callable

import jax
import jax.numpy as jnp
from flax import struct

from ...errors import ConfigurationError
from ...forcing import ZeroForcing
from ..derivatives import avg_h_to_u, d__dx_h_to_u, d__dx_u_to_h
from ..grid import create_staggered_grid
from ..state import StaggeredGridState


@struct.dataclass
class GridParameters:
    """
    Physical and grid parameters of the surge model.

    Attributes:
        D: Depth at velocity nodes, shape (nx + 1,)
        g: Gravitational acceleration
        L: Domain length
        W: Channel width (only used at the boundaries)
        dx: Spatial step
        nx: Number of height nodes
        rho: Fluid density
        C: Chézy friction coefficient

    Use `GridParameters.create` rather than the constructor; it computes
    `dx` and validates the inputs.
    """
    D: jax.Array
    g: float = struct.field(pytree_node=False)
    L: float = struct.field(pytree_node=False)
    W: float = struct.field(pytree_node=False)
    dx: float = struct.field(pytree_node=False)
    nx: int = struct.field(pytree_node=False)
    rho: float = struct.field(pytree_node=False)
    C: float = struct.field(pytree_node=False)

    @classmethod
    def create(
        cls,
        L: float,
        nx: int,
        D,
        g: float = 9.81,
        W: float = 1.0,
        rho: float = 1025.0,
        C: float = 50.0,
    ) -> "GridParameters":
        """
        Build validated grid parameters.

        Args:
            L: Domain length
            nx: Number of height nodes
            D: Depth, either a scalar or an array on the velocity grid
            g, W, rho, C: see class docstring
        """
        _, _, dx = create_staggered_grid(L, nx)
        D = jnp.asarray(D, dtype=float)
        if D.ndim == 0:
            D = jnp.full((nx + 1,), D)
        params = cls(D=D, g=float(g), L=float(L), W=float(W), dx=float(dx),
                     nx=int(nx), rho=float(rho), C=float(C))
        params.validate()
        return params

    def validate(self):
        """Raise `ConfigurationError` if the parameters are inconsistent."""
        if self.nx < 1:
            raise ConfigurationError(f"Need at least one height node, got nx={self.nx}")
        if not self.dx > 0:
            raise ConfigurationError(f"Spatial step must be positive, got dx={self.dx}")
        if self.D.shape != (self.nx + 1,):
            raise ConfigurationError(
                f"Depth must be given at the {self.nx + 1} velocity nodes, "
                f"got shape {self.D.shape}"
            )
        if not bool(jnp.all(jnp.isfinite(self.D))) or not bool(jnp.all(self.D > 0)):
            raise ConfigurationError("Depth must be finite and strictly positive everywhere")
        for name in ("g", "W", "rho", "C"):
            if not getattr(self, name) > 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")

    @property
    def grid_h(self) -> jax.Array:
        return jnp.linspace(0.5 * self.dx, self.L - 0.5 * self.dx, self.nx)

    @property
    def grid_u(self) -> jax.Array:
        return jnp.linspace(0.0, self.L, self.nx + 1)


@jax.jit
def surge_rhs_1d(
    state: StaggeredGridState,
    params: GridParameters,
    tau: float,
    q_left: float,
    q_right: float,
) -> StaggeredGridState:
    """
    Time derivative of the surge model for given forcing values.

    Args:
        state: Current height and velocity
        params: Grid parameters
        tau: Wind stress
        q_left: Inflow at the left boundary [m^3/s]
        q_right: Outflow at the right boundary [m^3/s]

    Returns:
        Time derivative with the same shape as `state`. Boundary velocities
        are prescribed by the fluxes, so their derivative is zero.

    Dry cells (H <= 0) are not guarded against and produce inf/NaN.
    """
    g, dx, rho, C, W = params.g, params.dx, params.rho, params.C, params.W

    H = avg_h_to_u(state.h) + params.D

    # Boundary fluxes: flow rate divided by cross-sectional area
    u = state.u.at[0].set(q_left / (H[0] * W))
    u = u.at[-1].set(q_right / (H[-1] * W))

    dHu_dx = d__dx_u_to_h(H * u, dx)
    dh_dx = d__dx_h_to_u(state.h, dx)

    # u|u| keeps the friction opposed to the flow direction
    du_dt = -g * dh_dx + tau / (rho * H) - (g * u * jnp.abs(u)) / (C * C * rho * H)
    du_dt = du_dt.at[0].set(0.0).at[-1].set(0.0)

    return StaggeredGridState(h=-dHu_dx, u=du_dt)


@dataclass(frozen=True)
class SurgeWave1D:
    """
    Right-hand side of the surge model for use with an ODE integrator.

    Attributes:
        params: Grid parameters
        tau: Wind stress τ(t)
        q_left: Inflow at the left boundary q_left(t)
        q_right: Outflow at the right boundary q_right(t)

    Forcing callbacks are evaluated eagerly once per call, so stateful
    forcing generators advance their internal clock every time the
    derivative is evaluated. Calls must therefore come from a single
    integrator, in non-decreasing time.
    """
    params: GridParameters
    tau: Callable[[float], float] = field(default_factory=ZeroForcing)
    q_left: Callable[[float], float] = field(default_factory=ZeroForcing)
    q_right: Callable[[float], float] = field(default_factory=ZeroForcing)

    def __post_init__(self):
        self.params.validate()

    def evaluate_derivative(self, state: StaggeredGridState, t) -> StaggeredGridState:
        nx = self.params.nx
        if state.h.shape != (nx,) or state.u.shape != (nx + 1,):
            raise ConfigurationError(
                f"State shapes h{state.h.shape}, u{state.u.shape} do not match "
                f"grid with nx={nx} (expected h({nx},), u({nx + 1},))"
            )
        t = float(t)
        return surge_rhs_1d(
            state, self.params, float(self.tau(t)), float(self.q_left(t)), float(self.q_right(t))
        )

    def __call__(self, t, state: StaggeredGridState, *args) -> StaggeredGridState:
        """Integrator-facing signature `fun(t, y, *args)`; extra args are ignored."""
        return self.evaluate_derivative(state, t)


def initial_state_bump(
    params: GridParameters,
    h0: float = 1.0,
    width: float = 0.05,
    center: float = 0.5,
    u0: float = 0.0,
) -> StaggeredGridState:
    """
    Gaussian bump in height (and optionally velocity).

    Args:
        params: Grid parameters
        h0: Peak height
        width: Standard deviation as a fraction of the domain length
        center: Centre of the bump as a fraction of the domain length
        u0: Peak velocity

    Returns:
        Initial state; all zeros if `h0` or `width` vanishes.
    """
    if abs(width) < 1e-10 or abs(h0) < 1e-10:
        return StaggeredGridState.zeros(params.nx, dtype=params.D.dtype)

    x_center = params.L * center
    sd = params.L * width
    h = h0 * jnp.exp(-((params.grid_h - x_center) ** 2) / (2.0 * sd**2))
    u = u0 * jnp.exp(-((params.grid_u - x_center) ** 2) / (2.0 * sd**2))
    return StaggeredGridState(h=h, u=u)


def total_volume(state: StaggeredGridState, dx: float) -> float:
    """Volume per unit width, Σ h dx."""
    return float(jnp.sum(state.h) * dx)
