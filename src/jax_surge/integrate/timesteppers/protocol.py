"""Protocols for time-stepping schemes."""

from typing import Protocol, runtime_checkable, Callable, Any


@runtime_checkable
class StepperProtocol(Protocol):
    """
    Protocol for time-stepping schemes.

    Defines the interface for advancing an ODE one time step.
    Any class implementing a step() method with this signature can be used
    as a time-stepping method in solve_ivp.
    """

    def step(
        self,
        fun: Callable,
        t: float,
        y: Any,
        h: float,
        args: tuple = ()
    ) -> Any:
        """
        Take a single time step.

        Args:
            fun: Right-hand side function.
            t: Current time.
            y: Current solution (an array or a StaggeredGridState).
            h: Time step size.
            args: Additional arguments to pass to fun.

        Returns:
            Solution at t + h.
        """
        ...
