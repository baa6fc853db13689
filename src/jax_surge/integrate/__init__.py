"""
Explicit time integration for initial value problems.
"""

# Solver interfaces
from .solve import solve_with_history, solve_ivp

# Time-stepping schemes
from .timesteppers import StepperProtocol, ForwardEuler, RK4

__all__ = [
    # Solver interfaces
    'solve_ivp',
    'solve_with_history',

    # Time-stepping methods
    'StepperProtocol',
    'ForwardEuler',
    'RK4',
]
