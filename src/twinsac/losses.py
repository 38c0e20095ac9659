"""Regression losses for critic training.

Each loss comes with its gradient w.r.t. the predictions, which is what
a critic's ``backward`` consumes as the output gradient.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp


def _mse(predictions: jax.Array, targets: jax.Array) -> jax.Array:
    return jnp.mean((predictions - targets) ** 2)


mean_squared_error = jax.jit(_mse)

# d/dp mean((p - t)^2) = 2 (p - t) / N
mean_squared_error_grad = jax.jit(jax.grad(_mse))
