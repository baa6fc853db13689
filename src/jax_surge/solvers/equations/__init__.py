"""
Built-in PDEs

Right-hand sides in the form expected by the time integrators,
`fun(t, y) -> dy/dt`:
- SurgeWave1D: storm-surge wave equation on a staggered grid
- Burgers1D: viscous Burgers' equation on a uniform grid
"""

from .surge import GridParameters, SurgeWave1D, surge_rhs_1d, initial_state_bump, total_volume
from .burgers import Burgers1D, burgers_rhs_1d

__all__ = [
    "GridParameters",
    "SurgeWave1D",
    "surge_rhs_1d",
    "initial_state_bump",
    "total_volume",
    "Burgers1D",
    "burgers_rhs_1d",
]
