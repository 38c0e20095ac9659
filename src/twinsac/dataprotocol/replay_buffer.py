"""Uniform replay store for off-policy training.

Numpy arrays for storage and mutation, ``jax.Array`` output on
``sample()``. The store lives outside any compiled code: the agent
pushes one transition per environment step from its Python loop and
pulls a fixed-size minibatch per learning update.

States are encoded at ``store`` time, so the store keeps no reference to
the caller's state objects.
"""

from __future__ import annotations

import jax.numpy as jnp
import numpy as np

from twinsac.types import Action, Batch, State, Transition


class RandomReplay:
    """Fixed-size circular buffer with uniform random sampling.

    Args:
        capacity: Maximum number of transitions kept; the oldest are
            overwritten first.
        batch_size: Number of transitions returned by ``sample()``.
        obs_dim: Width of ``state.encode()``.
        action_dim: Width of an action vector.
        seed: Seed for the sampling generator.
    """

    def __init__(
        self,
        capacity: int,
        batch_size: int,
        obs_dim: int,
        action_dim: int,
        *,
        seed: int = 0,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self.capacity = capacity
        self.batch_size = batch_size
        self._size = 0
        self._ptr = 0
        self._np_rng = np.random.default_rng(seed)

        self._states = np.zeros((capacity, obs_dim), dtype=np.float32)
        self._actions = np.zeros((capacity, action_dim), dtype=np.float32)
        self._rewards = np.zeros(capacity, dtype=np.float32)
        self._next_states = np.zeros((capacity, obs_dim), dtype=np.float32)
        self._terminals = np.zeros(capacity, dtype=np.float32)
        self._discounts = np.zeros(capacity, dtype=np.float32)

    def store(
        self,
        state: State,
        action: Action,
        reward: float,
        next_state: State,
        terminal: bool,
        discount: float,
    ) -> None:
        """Store a single transition."""
        idx = self._ptr
        self._states[idx] = np.asarray(state.encode())
        self._actions[idx] = np.asarray(action)
        self._rewards[idx] = reward
        self._next_states[idx] = np.asarray(next_state.encode())
        self._terminals[idx] = float(terminal)
        self._discounts[idx] = discount
        self._ptr = (self._ptr + 1) % self.capacity
        self._size = min(self._size + 1, self.capacity)

    def store_transition(self, t: Transition) -> None:
        """Convenience wrapper taking a ``Transition`` tuple."""
        self.store(t.state, t.action, t.reward, t.next_state, t.terminal, t.discount)

    def sample(self) -> Batch:
        """Uniformly sample ``batch_size`` transitions (with replacement)."""
        if self._size == 0:
            raise ValueError("cannot sample from an empty replay store")
        indices = self._np_rng.integers(0, self._size, size=self.batch_size)
        return Batch(
            states=jnp.asarray(self._states[indices]),
            actions=jnp.asarray(self._actions[indices]),
            rewards=jnp.asarray(self._rewards[indices]),
            next_states=jnp.asarray(self._next_states[indices]),
            terminals=jnp.asarray(self._terminals[indices]),
        )

    def __len__(self) -> int:
        return self._size
