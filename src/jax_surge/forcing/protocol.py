"""Protocol for scalar forcing functions of time."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ForcingProtocol(Protocol):
    """
    Protocol for forcing generators.

    Any object with `evaluate(t)` and `__call__(t)` returning a float can be
    used as wind stress or boundary flux in the surge model.
    """

    def evaluate(self, t: float) -> float:
        """
        Forcing value at time t.

        Args:
            t: Simulation time [s]

        Returns:
            Scalar forcing value.
        """
        ...

    def __call__(self, t: float) -> float:
        ...
