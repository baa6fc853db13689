"""Construction of forcing generators by kind."""

from enum import Enum
from typing import Iterable, Union

import jax.numpy as jnp

from .deterministic import ZeroForcing, ConstantForcing, PeriodicForcing, MultiFrequencyForcing
from .stochastic import OrnsteinUhlenbeckForcing, AutoregressiveForcing, PiecewiseRandomForcing
from .protocol import ForcingProtocol


class ForcingKind(str, Enum):
    """Available forcing generators."""
    ZERO = "zero"
    CONSTANT = "constant"
    PERIODIC = "periodic"
    MULTI_FREQUENCY = "multifreq"
    PIECEWISE = "piecewise"
    AUTOREGRESSIVE = "ar"
    ORNSTEIN_UHLENBECK = "ou"


FORCING_CLASSES = {
    ForcingKind.ZERO: ZeroForcing,
    ForcingKind.CONSTANT: ConstantForcing,
    ForcingKind.PERIODIC: PeriodicForcing,
    ForcingKind.MULTI_FREQUENCY: MultiFrequencyForcing,
    ForcingKind.PIECEWISE: PiecewiseRandomForcing,
    ForcingKind.AUTOREGRESSIVE: AutoregressiveForcing,
    ForcingKind.ORNSTEIN_UHLENBECK: OrnsteinUhlenbeckForcing,
}


def make_forcing(kind: Union[ForcingKind, str], **params) -> ForcingProtocol:
    """
    Create a forcing generator.

    Args:
        kind: ForcingKind or its string value, e.g. "ou"
        **params: Constructor arguments of the chosen generator

    Example usage:
    ```python
    tau = make_forcing("ou", amplitude=0.5, theta=1e-4, sigma=1e-3, seed=1)
    tau(3600.0)
    ```
    """
    kind = ForcingKind(kind)
    return FORCING_CLASSES[kind](**params)


def sample_forcing(forcing: ForcingProtocol, times: Iterable[float]) -> jnp.ndarray:
    """Evaluate `forcing` at each of `times`, in order."""
    return jnp.array([forcing(float(t)) for t in times])
