"""Tests for twinsac.losses."""

import jax.numpy as jnp

from twinsac.losses import mean_squared_error, mean_squared_error_grad


class TestMeanSquaredError:
    def test_value(self):
        assert jnp.allclose(mean_squared_error(jnp.array([1.0, 3.0]), jnp.array([0.0, 1.0])), 2.5)

    def test_grad(self):
        pred = jnp.array([[1.0], [3.0]])
        target = jnp.array([[0.0], [1.0]])
        # 2 (p - t) / N
        assert jnp.allclose(mean_squared_error_grad(pred, target), jnp.array([[1.0], [2.0]]))

    def test_grad_zero_at_target(self):
        x = jnp.array([[0.5], [-0.5]])
        assert jnp.allclose(mean_squared_error_grad(x, x), 0.0)
