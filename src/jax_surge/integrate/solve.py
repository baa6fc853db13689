import time
from typing import Any, Callable, List, Optional, Tuple

import jax
from jax import Array
import jax.numpy as jnp

from .timesteppers import StepperProtocol


def solve_ivp(
    fun: Callable,
    t_span: Tuple[float, float],
    y0: Any,
    method: StepperProtocol,
    step_size: float,
    args: tuple = ()
) -> Tuple[float, Any]:
    """
    Integrate dy/dt = fun(t, y, *args) over the time interval t_span.

    The loop runs in Python rather than `jax.lax.while_loop` so that `fun`
    may evaluate stateful forcing generators. `y0` can be an array or any
    pytree-like state supporting `+` and scalar `*`, e.g. StaggeredGridState.

    Args:
        fun: Callable right-hand side of system dy/dt = fun(t, y, *args)
        t_span: (t_start, t_end) time interval
        y0: Initial condition
        method: Time-stepping method instance (e.g., RK4(), ForwardEuler())
        step_size: Time step size
        args: Additional arguments to pass to fun

    Returns:
        t_final: Final time
        y_final: Solution at t_end

    Example usage:
    ```python
    from jax_surge.integrate import solve_ivp, RK4
    from jax_surge.solvers import GridParameters, SurgeWave1D, initial_state_bump

    params = GridParameters.create(L=1000.0, nx=100, D=10.0)
    rhs = SurgeWave1D(params)
    y0 = initial_state_bump(params, h0=1.0, width=0.05)

    t, y = solve_ivp(rhs, (0.0, 60.0), y0, RK4(), step_size=1.0)
    ```
    """
    t_start, t_end = float(t_span[0]), float(t_span[1])
    if not step_size > 0:
        raise ValueError(f"step_size must be positive, got {step_size}")

    t, y = t_start, y0
    n_steps = 0
    while t_end - t > 1e-12 * step_size:
        # Adjust final step to hit t_end exactly
        h = min(step_size, t_end - t)
        y = method.step(fun, t, y, h, args)
        n_steps += 1
        t = t_start + n_steps * step_size if h == step_size else t_end

    return max(t, t_end), y


def solve_with_history(
    fun: Callable,
    t_span: Tuple[float, float],
    y0: Any,
    method: StepperProtocol,
    step_size: float,
    t_eval: Optional[Array] = None,
    args: tuple = (),
    verbose: bool = False
) -> Tuple[Array, Any]:
    """
    Integrate dy/dt = fun(t, y, *args), storing the solution at times `t_eval`.

    The integration is done in chunks by calling `solve_ivp` between
    consecutive evaluation times.

    Args:
        fun: Right-hand side function with signature (t, y, *args) -> dydt
        t_span: (t_start, t_end) time interval
        y0: Initial condition
        method: Time-stepping method instance
        step_size: Time step size for integration.
        t_eval: Times at which to store the computed solution.
            If None, returns only the initial and final states.
            Must be sorted and lie within t_span.
        args: Additional arguments to pass to fun
        verbose: Print progress information

    Returns:
        t: Array of time points, shape (n_points,)
        y: Solutions at times t, stacked along a new leading axis
           (leaf-wise for pytree states)
    """
    t_start, t_end = t_span

    if t_eval is None:
        t_eval = jnp.array([t_start, t_end])
    else:
        t_eval = jnp.asarray(t_eval)
        if jnp.any(t_eval < t_start) or jnp.any(t_eval > t_end):
            raise ValueError("All values in t_eval must be within t_span")
        if jnp.any(jnp.diff(t_eval) < 0):
            raise ValueError("t_eval must be sorted in increasing order")

        # Ensure t_start is included
        if t_eval[0] != t_start:
            t_eval = jnp.concatenate([jnp.array([t_start]), t_eval])

    n_steps_total = int(jnp.ceil((t_end - t_start) / step_size))

    if verbose:
        method_name = type(method).__name__
        print(f"Solving with {method_name}")
        print(
            f"Time: [{t_start}, {t_end}], dt={step_size}, "
            f"~{n_steps_total} total steps"
        )
        print(f"Evaluating at {len(t_eval)} time points")

    y_save: List[Any] = [y0]
    t_save = [float(t_start)]
    y = y0

    start_wallclock = time.time()

    for i in range(len(t_eval) - 1):
        t_i = float(t_eval[i])
        t_ip1 = float(t_eval[i + 1])
        t, y = solve_ivp(fun, (t_i, t_ip1), y, method, step_size, args)
        t_save.append(t)
        y_save.append(y)

    t_arr = jnp.array(t_save)
    y_arr = jax.tree_util.tree_map(lambda *leaves: jnp.stack(leaves, axis=0), *y_save)

    elapsed_wallclock = time.time() - start_wallclock

    if verbose:
        print(
            f"Completed in {elapsed_wallclock:.3f}s "
            f"({n_steps_total / max(elapsed_wallclock, 1e-12):.1f} steps/s)"
        )

    return t_arr, y_arr
