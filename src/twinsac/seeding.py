"""JAX PRNG key management utilities.

All randomness in twinsac flows through explicit keys held by the
object that consumes them (agent, environment, network): there is no
global RNG state.

Usage::

    from twinsac.seeding import make_rng, split_keys

    rng = make_rng(42)
    rng, agent_key, env_key = split_keys(rng, n=2)
"""

from __future__ import annotations

import jax


def make_rng(seed: int) -> jax.Array:
    """Create a JAX PRNG key from an integer seed."""
    return jax.random.PRNGKey(seed)


def split_key(rng: jax.Array) -> tuple[jax.Array, jax.Array]:
    """Split *rng* into ``(new_rng, subkey)``.

    Typical pattern for stateful owners of a key::

        self._rng, key = split_key(self._rng)
    """
    return tuple(jax.random.split(rng))  # type: ignore[return-value]


def split_keys(rng: jax.Array, n: int) -> tuple[jax.Array, ...]:
    """Split *rng* into ``n + 1`` keys: ``(new_rng, key_1, ..., key_n)``."""
    return tuple(jax.random.split(rng, n + 1))  # type: ignore[return-value]


def fold_in(rng: jax.Array, data: int) -> jax.Array:
    """Deterministically derive a new key by folding *data* into *rng*."""
    return jax.random.fold_in(rng, data)
