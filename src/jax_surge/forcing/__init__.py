"""
Wind-stress and boundary-flux generators

Scalar functions of time used as forcing in the surge model. Deterministic
generators are pure; stochastic generators keep an internal clock and reset
when evaluated at an earlier time.
"""

from .protocol import ForcingProtocol
from .deterministic import ZeroForcing, ConstantForcing, PeriodicForcing, MultiFrequencyForcing
from .stochastic import (
    AbstractSteppedForcing,
    OrnsteinUhlenbeckForcing,
    AutoregressiveForcing,
    PiecewiseRandomForcing,
)
from .registry import ForcingKind, make_forcing, sample_forcing

__all__ = [
    "ForcingProtocol",

    # Deterministic
    "ZeroForcing",
    "ConstantForcing",
    "PeriodicForcing",
    "MultiFrequencyForcing",

    # Stochastic
    "AbstractSteppedForcing",
    "OrnsteinUhlenbeckForcing",
    "AutoregressiveForcing",
    "PiecewiseRandomForcing",

    # Construction
    "ForcingKind",
    "make_forcing",
    "sample_forcing",
]
