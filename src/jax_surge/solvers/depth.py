import jax.numpy as jnp
from typing import Tuple


def depth_profile(
    grid_u: jnp.ndarray,
    D_min: float,
    D_max: float,
    D_edges: Tuple[float, float],
    D_widths: Tuple[float, float],
) -> jnp.ndarray:
    """
    Depth profile with two tanh transitions.

    The depth rises from `D_min` to `D_max` around `D_edges[0]` and falls
    back to `D_min` around `D_edges[1]`:

        D(x) = D_min + (D_max - D_min) * (1 + tanh((x - e1) / w1)) / 2
                     + (D_min - D_max) * (1 + tanh((x - e2) / w2)) / 2

    Args:
        grid_u: Velocity-node coordinates
        D_min: Minimum depth
        D_max: Maximum depth
        D_edges: Centres (e1, e2) of the two transitions
        D_widths: Widths (w1, w2) of the two transitions; must be nonzero

    Returns:
        Depth at every coordinate in `grid_u`, clamped to
        [min(D_min, D_max), max(D_min, D_max)]. The clamp only acts when the
        transitions are reversed (e1 > e2) or overlap.
    """
    x = jnp.asarray(grid_u)
    (e1, e2), (w1, w2) = D_edges, D_widths
    rise = 0.5 * (1.0 + jnp.tanh((x - e1) / w1))
    fall = 0.5 * (1.0 + jnp.tanh((x - e2) / w2))
    D = D_min + (D_max - D_min) * rise + (D_min - D_max) * fall
    # Reversed or unequal transitions can leave [D_min, D_max]
    return jnp.clip(D, min(D_min, D_max), max(D_min, D_max))
