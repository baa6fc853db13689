"""Forcing generators that are pure functions of time."""

import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ..errors import ConfigurationError


@dataclass(frozen=True)
class ZeroForcing:
    """No forcing: τ(t) = 0."""

    def evaluate(self, t: float) -> float:
        return 0.0

    def __call__(self, t: float) -> float:
        return self.evaluate(t)


@dataclass(frozen=True)
class ConstantForcing:
    """Constant forcing: τ(t) = amplitude."""
    amplitude: float = 1.0

    def evaluate(self, t: float) -> float:
        return float(self.amplitude)

    def __call__(self, t: float) -> float:
        return self.evaluate(t)


@dataclass(frozen=True)
class PeriodicForcing:
    """
    Squared sine wave: τ(t) = (amplitude · sin(2πt / period))².

    The square keeps the stress non-negative and gives it period `period / 2`.
    """
    amplitude: float = 1.0
    period: float = 8 * 3600.0

    def __post_init__(self):
        if not self.period > 0:
            raise ConfigurationError(f"period must be positive, got {self.period}")

    def evaluate(self, t: float) -> float:
        return (self.amplitude * math.sin(2.0 * math.pi * t / self.period)) ** 2

    def __call__(self, t: float) -> float:
        return self.evaluate(t)


@dataclass(frozen=True)
class MultiFrequencyForcing:
    """
    Weighted sum of squared sinusoids:

        τ(t) = Σᵢ wᵢ (amplitude · sin(2πt/Tᵢ + φᵢ))²

    Attributes:
        amplitude: Base amplitude shared by all components
        periods: Periods Tᵢ [s]
        weights: Relative weights, renormalised to sum to one
        phases: Phase offsets φᵢ. If omitted they are drawn uniformly from
            [0, 2π) when `seed` is given, and are zero otherwise.
        seed: Seed for the phase draw
    """
    amplitude: float = 1.0
    periods: Sequence[float] = (6 * 3600.0, 8 * 3600.0, 12 * 3600.0)
    weights: Sequence[float] = (0.4, 0.4, 0.2)
    phases: Optional[Sequence[float]] = None
    seed: Optional[int] = None

    def __post_init__(self):
        periods = tuple(float(p) for p in self.periods)
        weights = tuple(float(w) for w in self.weights)
        if len(weights) != len(periods):
            raise ConfigurationError(
                f"Got {len(periods)} periods but {len(weights)} weights"
            )
        if any(not p > 0 for p in periods):
            raise ConfigurationError("All periods must be positive")
        total = sum(weights)
        if not total > 0:
            raise ConfigurationError(f"Weights must have a positive sum, got {total}")

        if self.phases is not None:
            phases = tuple(float(p) for p in self.phases)
            if len(phases) != len(periods):
                raise ConfigurationError(
                    f"Got {len(periods)} periods but {len(phases)} phases"
                )
        elif self.seed is not None:
            rng = np.random.default_rng(self.seed)
            phases = tuple(float(p) for p in 2.0 * math.pi * rng.random(len(periods)))
        else:
            phases = (0.0,) * len(periods)

        # Frozen dataclass: normalise in place via object.__setattr__
        object.__setattr__(self, "periods", periods)
        object.__setattr__(self, "weights", tuple(w / total for w in weights))
        object.__setattr__(self, "phases", phases)

    def evaluate(self, t: float) -> float:
        tau = 0.0
        for period, weight, phase in zip(self.periods, self.weights, self.phases):
            tau += weight * (self.amplitude * math.sin(2.0 * math.pi * t / period + phase)) ** 2
        return tau

    def __call__(self, t: float) -> float:
        return self.evaluate(t)
