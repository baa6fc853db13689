"""
PDE right-hand sides

Finite-difference discretisations of 1D wave-type equations, written as
derivative functions for explicit time integrators.
"""

from .grid import BCType, create_uniform_grid, create_staggered_grid
from .derivatives import (
    d__dx_c_periodic, d2__dx2_c_periodic,
    d__dx_c_dirichlet, d2__dx2_c_dirichlet,
    avg_h_to_u, d__dx_h_to_u, d__dx_u_to_h,
)
from .depth import depth_profile
from .state import StaggeredGridState
from .equations import (
    GridParameters, SurgeWave1D, surge_rhs_1d, initial_state_bump, total_volume,
    Burgers1D, burgers_rhs_1d,
)

__all__ = [
    # Grid utilities
    "BCType",
    "create_uniform_grid",
    "create_staggered_grid",
    "depth_profile",

    # Finite difference operators
    "d__dx_c_periodic",
    "d2__dx2_c_periodic",
    "d__dx_c_dirichlet",
    "d2__dx2_c_dirichlet",
    "avg_h_to_u",
    "d__dx_h_to_u",
    "d__dx_u_to_h",

    # Surge model
    "StaggeredGridState",
    "GridParameters",
    "SurgeWave1D",
    "surge_rhs_1d",
    "initial_state_bump",
    "total_volume",

    # Burgers
    "Burgers1D",
    "burgers_rhs_1d",
]
