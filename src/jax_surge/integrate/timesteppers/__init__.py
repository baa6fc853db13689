"""Time-stepping schemes for initial value problems."""

from .protocol import StepperProtocol
from .explicit import ForwardEuler, RK4

__all__ = [
    'StepperProtocol',
    'ForwardEuler',
    'RK4',
]
