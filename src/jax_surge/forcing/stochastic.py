"""
Stochastic forcing generators with internal, time-ordered state.

Each generator owns a `numpy.random.Generator` seeded at construction and a
time cursor. Evaluating at a time ahead of the cursor advances the process;
evaluating at a time behind the cursor resets the process, including the
random stream, to its initial condition and replays it from there. Replaying
the same sequence of evaluation times therefore always gives the same values.
"""

import logging
import math
from abc import ABC, abstractmethod
from collections import deque
from typing import Optional, Sequence

import numpy as np

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


class AbstractSteppedForcing(ABC):
    """
    Base class for forcing generators that evolve an internal process.

    Subclasses implement `_reset_process` and `_advance`.

    Attributes:
        seed: Seed of the random stream (None draws fresh entropy once)
        cursor: Time up to which the process has been advanced
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)
        self._initial_rng_state = self._rng.bit_generator.state
        self.cursor = 0.0
        self._reset_process()

    def reset(self):
        """Return to the initial condition, rewinding the random stream."""
        self._rng.bit_generator.state = self._initial_rng_state
        self._reset_process()

    @property
    @abstractmethod
    def value(self) -> float:
        """Most recently computed forcing value."""

    @abstractmethod
    def _reset_process(self):
        """Restore value, history and cursor to their initial condition."""

    @abstractmethod
    def _advance(self, t: float):
        """Advance the process until the cursor reaches or passes t."""

    def evaluate(self, t: float) -> float:
        """
        Forcing value at time t.

        Times earlier than the cursor restart the process from its initial
        condition before advancing to t.
        """
        t = float(t)
        if t < self.cursor:
            logger.debug(
                "%s evaluated at t=%g behind cursor %g; resetting",
                type(self).__name__, t, self.cursor,
            )
            self.reset()
        self._advance(t)
        return self.value

    def __call__(self, t: float) -> float:
        return self.evaluate(t)


class OrnsteinUhlenbeckForcing(AbstractSteppedForcing):
    """
    Mean-reverting Ornstein-Uhlenbeck wind stress.

        dτ = θ(μ - τ) dt + σ dW

    discretised with Euler-Maruyama in fixed steps of `dt` and clamped to be
    non-negative.

    Args:
        amplitude: Long-term mean μ, also the initial value
        theta: Mean reversion rate θ
        sigma: Volatility σ
        dt: Internal time step [s]
        seed: Seed of the random stream
    """

    def __init__(
        self,
        amplitude: float = 1.0,
        theta: float = 0.5,
        sigma: float = 0.3,
        dt: float = 60.0,
        seed: Optional[int] = None,
    ):
        if not dt > 0:
            raise ConfigurationError(f"dt must be positive, got {dt}")
        self.amplitude = float(amplitude)
        self.theta = float(theta)
        self.sigma = float(sigma)
        self.dt = float(dt)
        super().__init__(seed)

    @property
    def value(self) -> float:
        return self._value

    def _reset_process(self):
        self._value = self.amplitude
        self._n_steps = 0
        self.cursor = 0.0

    def _advance(self, t: float):
        while self.cursor < t:
            drift = self.theta * (self.amplitude - self._value) * self.dt
            diffusion = self.sigma * math.sqrt(self.dt) * self._rng.standard_normal()
            self._value = max(0.0, self._value + drift + diffusion)
            self._n_steps += 1
            self.cursor = self._n_steps * self.dt


class AutoregressiveForcing(AbstractSteppedForcing):
    """
    Autoregressive AR(p) wind stress.

        τₙ = Σᵢ φᵢ τₙ₋ᵢ + σ · amplitude · εₙ,    εₙ ~ N(0, 1)

    advanced in fixed steps of `dt` and clamped to be non-negative. The
    history window starts filled with `amplitude` and the first step is
    taken at t = 0.

    Args:
        amplitude: Mean level, used to fill the initial history
        coeffs: AR coefficients (φ₁, ..., φₚ); φ₁ multiplies the latest value
        sigma: Noise standard deviation as a fraction of `amplitude`
        dt: Internal time step [s]
        seed: Seed of the random stream
    """

    def __init__(
        self,
        amplitude: float = 1.0,
        coeffs: Sequence[float] = (0.7, 0.2),
        sigma: float = 0.2,
        dt: float = 60.0,
        seed: Optional[int] = None,
    ):
        if not dt > 0:
            raise ConfigurationError(f"dt must be positive, got {dt}")
        if len(coeffs) == 0:
            raise ConfigurationError("Need at least one AR coefficient")
        self.amplitude = float(amplitude)
        self.coeffs = tuple(float(c) for c in coeffs)
        self.sigma = float(sigma)
        self.dt = float(dt)
        super().__init__(seed)

    @property
    def order(self) -> int:
        return len(self.coeffs)

    @property
    def history(self) -> tuple:
        """Last `order` values, oldest first."""
        return tuple(self._history)

    @property
    def value(self) -> float:
        return self._history[-1]

    def _reset_process(self):
        self._history = deque([self.amplitude] * self.order, maxlen=self.order)
        self._n_steps = 0
        self.cursor = -self.dt

    def _advance(self, t: float):
        while self.cursor < t:
            recent_first = reversed(self._history)
            tau_new = sum(c * tau for c, tau in zip(self.coeffs, recent_first))
            tau_new += self.sigma * self.amplitude * self._rng.standard_normal()
            self._history.append(max(0.0, tau_new))
            self._n_steps += 1
            self.cursor = (self._n_steps - 1) * self.dt


class PiecewiseRandomForcing(AbstractSteppedForcing):
    """
    Wind stress that holds a value for a random duration, then jumps.

    Hold durations are uniform in [0.5, 1.5] × `mean_duration`; new values
    are amplitude + noise_level · amplitude · N(0, 1), clamped to be
    non-negative. The cursor is the latest evaluation time.

    Args:
        amplitude: Base wind stress level
        mean_duration: Average hold duration [s]
        noise_level: Relative noise level (0.3 = ±30%)
        seed: Seed of the random stream
    """

    def __init__(
        self,
        amplitude: float = 1.0,
        mean_duration: float = 3600.0,
        noise_level: float = 0.3,
        seed: Optional[int] = None,
    ):
        if not mean_duration > 0:
            raise ConfigurationError(f"mean_duration must be positive, got {mean_duration}")
        self.amplitude = float(amplitude)
        self.mean_duration = float(mean_duration)
        self.noise_level = float(noise_level)
        super().__init__(seed)

    @property
    def value(self) -> float:
        return self._value

    @property
    def next_change(self) -> float:
        return self._next_change

    def _reset_process(self):
        self._value = self.amplitude
        self._next_change = 0.0
        self.cursor = 0.0

    def _advance(self, t: float):
        if t >= self._next_change:
            duration = self.mean_duration * (0.5 + self._rng.random())
            self._next_change = t + duration
            variation = self.noise_level * self.amplitude * self._rng.standard_normal()
            self._value = max(0.0, self.amplitude + variation)
        self.cursor = t
