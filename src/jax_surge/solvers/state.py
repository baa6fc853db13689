"""State container for the staggered-grid surge model."""

import jax
import jax.numpy as jnp
from flax import struct


@struct.dataclass
class StaggeredGridState:
    """
    Water-height perturbation and velocity on a staggered grid.

    Attributes:
        h: Height perturbation at cell centres, shape (nx,)
        u: Velocity at cell edges, shape (nx + 1,)

    The class is a JAX pytree and supports `+`, `-` and multiplication or
    division by scalars, so time-stepping schemes written for plain arrays
    (e.g. `y + h * k1`) work unchanged.
    """
    h: jax.Array
    u: jax.Array

    @classmethod
    def zeros(cls, nx: int, dtype=None) -> "StaggeredGridState":
        return cls(h=jnp.zeros((nx,), dtype=dtype), u=jnp.zeros((nx + 1,), dtype=dtype))

    @property
    def nx(self) -> int:
        return self.h.shape[0]

    def _map(self, fn, other=None):
        if other is None:
            return jax.tree_util.tree_map(fn, self)
        if isinstance(other, StaggeredGridState):
            return jax.tree_util.tree_map(fn, self, other)
        return jax.tree_util.tree_map(lambda a: fn(a, other), self)

    def __add__(self, other):
        return self._map(lambda a, b: a + b, other)

    __radd__ = __add__

    def __sub__(self, other):
        return self._map(lambda a, b: a - b, other)

    def __rsub__(self, other):
        return self._map(lambda a, b: b - a, other)

    def __mul__(self, other):
        if isinstance(other, StaggeredGridState):
            return NotImplemented
        return self._map(lambda a, b: a * b, other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, StaggeredGridState):
            return NotImplemented
        return self._map(lambda a, b: a / b, other)

    def __neg__(self):
        return self._map(lambda a: -a)
