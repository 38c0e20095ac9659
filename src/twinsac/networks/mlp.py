"""Feed-forward networks implemented with Equinox.

Policy: state -> action, optionally tanh-squashed and scaled to the
action bounds.
Critic: (action ⧺ state) -> scalar value, returned as shape ``(1,)``.

Both are plain ``MLP`` modules; the critic takes the already
concatenated input, so the caller owns the action/state boundary.
"""

from __future__ import annotations

import equinox as eqx
import jax
import jax.numpy as jnp


class MLP(eqx.Module):
    """ReLU multilayer perceptron over a single 1-D input."""

    layers: list
    squash: bool = eqx.field(static=True)
    output_scale: float = eqx.field(static=True)

    def __init__(
        self,
        in_dim: int,
        out_dim: int,
        hidden_sizes: tuple[int, ...] = (256, 256),
        *,
        squash: bool = False,
        output_scale: float = 1.0,
        key: jax.Array,
    ) -> None:
        dims = [in_dim, *hidden_sizes, out_dim]
        keys = jax.random.split(key, len(dims) - 1)
        self.layers = [
            eqx.nn.Linear(d_in, d_out, key=k)
            for d_in, d_out, k in zip(dims[:-1], dims[1:], keys, strict=True)
        ]
        self.squash = squash
        self.output_scale = output_scale

    def __call__(self, x: jax.Array) -> jax.Array:
        for layer in self.layers[:-1]:
            x = jax.nn.relu(layer(x))
        x = self.layers[-1](x)
        if self.squash:
            x = self.output_scale * jnp.tanh(x)
        return x


def policy_factory(
    obs_dim: int,
    action_dim: int,
    hidden_sizes: tuple[int, ...] = (256, 256),
    *,
    action_scale: float = 1.0,
):
    """Return ``key -> MLP`` building a tanh-squashed policy network."""

    def _build(key: jax.Array) -> MLP:
        return MLP(
            obs_dim, action_dim, hidden_sizes,
            squash=True, output_scale=action_scale, key=key,
        )

    return _build


def critic_factory(
    obs_dim: int,
    action_dim: int,
    hidden_sizes: tuple[int, ...] = (256, 256),
):
    """Return ``key -> MLP`` building a critic over ``action ⧺ state``."""

    def _build(key: jax.Array) -> MLP:
        return MLP(action_dim + obs_dim, 1, hidden_sizes, key=key)

    return _build
