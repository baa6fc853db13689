"""
JAX storm-surge solvers

Finite-difference solvers for the 1D storm-surge wave equation (and a
companion Burgers' equation), with wind-forcing generators and the
normalization utilities used to train bias-correction models on the
simulation output.

Main components:
- solvers: staggered-grid surge model, depth profiles, Burgers' equation
- forcing: deterministic and stochastic wind-stress generators
- data_utils: z-score normalization of feature tables
- integrate: explicit time-stepping schemes
"""

from .errors import ConfigurationError, DataQualityError

from .solvers import (
    StaggeredGridState,
    GridParameters,
    SurgeWave1D,
    Burgers1D,
    depth_profile,
    initial_state_bump,
)

from .forcing import ForcingKind, make_forcing

from .data_utils import NormalizationStatistics, fit_and_apply, apply, invert

# Time integration
from .integrate import solve_ivp, solve_with_history, RK4, ForwardEuler

__all__ = [
    # Errors
    "ConfigurationError",
    "DataQualityError",

    # Surge model
    "StaggeredGridState",
    "GridParameters",
    "SurgeWave1D",
    "Burgers1D",
    "depth_profile",
    "initial_state_bump",

    # Forcing
    "ForcingKind",
    "make_forcing",

    # Normalization
    "NormalizationStatistics",
    "fit_and_apply",
    "apply",
    "invert",

    # ODE integration methods
    "solve_ivp",
    "solve_with_history",
    "RK4",
    "ForwardEuler",
]
