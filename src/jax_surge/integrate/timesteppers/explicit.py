"""Explicit time-stepping schemes."""

from typing import Callable, Any

from flax import nnx


class ForwardEuler(nnx.Module):
    """
    Forward Euler method.

    Discretisation:
        $$ \\frac{\\partial y}{\\partial t} \\rightarrow
        \\frac{(y_{n+1} - y_n)}{h} = f(t_n, y_n) $$

    Implements: StepperProtocol
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
        Perform a single Forward Euler step, y_{n+1} = y_n + h f(t_n, y_n, *args).

        The state only needs to support `+` and multiplication by a scalar.
        """
        return y + h * fun(t, y, *args)


class RK4(nnx.Module):
    """
    Classical fourth-order Runge-Kutta method.

    Implements: StepperProtocol
    """

    def step(
        self,
        fun: Callable,
        t: float,
        y: Any,
        h: float,
        args: tuple = ()
    ) -> Any:
        k1 = fun(t, y, *args)
        k2 = fun(t + 0.5 * h, y + 0.5 * h * k1, *args)
        k3 = fun(t + 0.5 * h, y + 0.5 * h * k2, *args)
        k4 = fun(t + h, y + h * k3, *args)
        return y + (h / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)
