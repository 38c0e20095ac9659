"""Stateful wrapper exposing an Equinox model as a function approximator.

The wrapped model is stored as a dense 1-D parameter block (the
ravelled array leaves, via ``jax.flatten_util.ravel_pytree``) plus the
static remainder of the module. The block is an immutable ``jax.Array``;
"mutating" a network means assigning a new block to ``parameters``,
which is what the updater and the soft-update rule do.

Usage::

    net = Network(critic_factory(obs_dim=3, action_dim=1), key=key)
    q = net.predict(x)                    # inference, x: (B, 4) or (4,)
    q = net.forward(x)                    # records parameters for backward
    grads = net.backward(x, dq)           # Gradients(params=..., inputs=...)
    net.parameters = net.parameters - 1e-3 * grads.params
"""

from __future__ import annotations

import copy
from collections.abc import Callable

import chex
import equinox as eqx
import jax
import jax.numpy as jnp
from jax.flatten_util import ravel_pytree

from twinsac.seeding import split_key
from twinsac.types import Gradients, Params


def _apply(model: eqx.Module, inputs: jax.Array) -> jax.Array:
    """Apply *model* to a single 1-D input or a ``(B, in_dim)`` batch."""
    if inputs.ndim == 1:
        return model(inputs)
    return jax.vmap(model)(inputs)


_jit_apply = eqx.filter_jit(_apply)


@eqx.filter_jit
def _vjp(
    model: eqx.Module,
    inputs: jax.Array,
    output_grad: jax.Array,
) -> tuple[jax.Array, jax.Array]:
    """Pull *output_grad* back to ravelled parameter and input gradients."""
    params, static = eqx.partition(model, eqx.is_array)

    def f(p, x):
        return _apply(eqx.combine(p, static), x)

    _, vjp_fn = jax.vjp(f, params, inputs)
    param_grad, input_grad = vjp_fn(output_grad)
    return ravel_pytree(param_grad)[0], input_grad


class Network:
    """Function approximator over an Equinox module.

    Args:
        factory: ``key -> eqx.Module``; called on every parameter reset.
        key: PRNG key owned by this network (consumed by resets and clones).
    """

    def __init__(
        self,
        factory: Callable[[jax.Array], eqx.Module],
        *,
        key: jax.Array,
    ) -> None:
        self._factory = factory
        self._rng = key
        self._recorded: Params | None = None
        self.reset_parameters()

    # ------------------------------------------------------------------
    # Parameter block
    # ------------------------------------------------------------------

    @property
    def parameters(self) -> Params:
        return self._parameters

    @parameters.setter
    def parameters(self, value: Params) -> None:
        value = jnp.asarray(value, dtype=self._parameters.dtype)
        chex.assert_shape(value, self._parameters.shape)
        self._parameters = value

    def reset_parameters(self) -> None:
        """Draw fresh parameters from the factory with a new key."""
        self._rng, key = split_key(self._rng)
        params, self._static = eqx.partition(self._factory(key), eqx.is_array)
        self._parameters, self._unravel = ravel_pytree(params)
        self._recorded = None

    def clone(self) -> Network:
        """Structurally identical copy with its own parameter storage.

        The clone starts with the same parameter values but owns a
        different PRNG key, so ``clone().reset_parameters()`` yields an
        independently initialised network.
        """
        self._rng, key = split_key(self._rng)
        twin = copy.copy(self)
        twin._rng = key
        twin._parameters = jnp.array(self._parameters, copy=True)
        twin._recorded = None
        return twin

    @property
    def model(self) -> eqx.Module:
        """The Equinox module for the current parameter block."""
        return self._combine(self._parameters)

    def _combine(self, params: Params) -> eqx.Module:
        return eqx.combine(self._unravel(params), self._static)

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    def predict(self, inputs: chex.Array) -> jax.Array:
        """Inference only; nothing is recorded."""
        return _jit_apply(self.model, jnp.asarray(inputs, dtype=jnp.float32))

    def forward(self, inputs: chex.Array) -> jax.Array:
        """Differentiable pass; ``backward`` will differentiate at the
        parameters used here even if the block is replaced in between."""
        self._recorded = self._parameters
        return self.predict(inputs)

    def backward(self, inputs: chex.Array, output_grad: chex.Array) -> Gradients:
        """Vector-Jacobian product of the output w.r.t. parameters and inputs.

        For a batched input the parameter gradient is the sum over the
        batch; the input gradient keeps one row per sample.
        """
        params = self._recorded if self._recorded is not None else self._parameters
        inputs = jnp.asarray(inputs, dtype=jnp.float32)
        output_grad = jnp.asarray(output_grad, dtype=jnp.float32)
        param_grad, input_grad = _vjp(self._combine(params), inputs, output_grad)
        return Gradients(params=param_grad, inputs=input_grad)

    def __repr__(self) -> str:
        return f"Network(n_params={self._parameters.size})"
