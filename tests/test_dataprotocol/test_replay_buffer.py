"""Tests for the uniform replay store."""

from __future__ import annotations

from typing import NamedTuple

import jax
import jax.numpy as jnp
import pytest

from twinsac.dataprotocol import RandomReplay
from twinsac.types import Batch, Transition, TransitionStore

OBS_DIM = 3
ACTION_DIM = 2


class VecState(NamedTuple):
    values: tuple[float, ...]

    def encode(self) -> jax.Array:
        return jnp.asarray(self.values, dtype=jnp.float32)


def _state(x: float) -> VecState:
    return VecState((x, x + 1.0, x + 2.0))


@pytest.fixture
def buf():
    return RandomReplay(capacity=10, batch_size=4, obs_dim=OBS_DIM, action_dim=ACTION_DIM)


class TestRandomReplay:
    def test_satisfies_protocol(self, buf):
        assert isinstance(buf, TransitionStore)

    def test_empty(self, buf):
        assert len(buf) == 0

    def test_store_increments_size(self, buf):
        buf.store(_state(0.0), jnp.zeros(ACTION_DIM), 1.0, _state(1.0), False, 0.99)
        assert len(buf) == 1

    def test_sample_shapes(self, buf):
        for i in range(5):
            buf.store(_state(i), jnp.ones(ACTION_DIM), float(i), _state(i + 1), False, 0.99)
        batch = buf.sample()
        assert isinstance(batch, Batch)
        assert batch.states.shape == (4, OBS_DIM)
        assert batch.actions.shape == (4, ACTION_DIM)
        assert batch.rewards.shape == (4,)
        assert batch.next_states.shape == (4, OBS_DIM)
        assert batch.terminals.shape == (4,)
        assert isinstance(batch.states, jax.Array)

    def test_stores_encoded_values(self, buf):
        action = jnp.array([0.25, -0.5])
        buf.store(_state(2.0), action, -3.0, _state(5.0), True, 0.9)
        batch = buf.sample()
        # single transition: every sampled row is that transition
        assert jnp.allclose(batch.states, jnp.array([2.0, 3.0, 4.0]))
        assert jnp.allclose(batch.next_states, jnp.array([5.0, 6.0, 7.0]))
        assert jnp.allclose(batch.actions, action)
        assert jnp.allclose(batch.rewards, -3.0)
        assert jnp.allclose(batch.terminals, 1.0)

    def test_store_transition(self, buf):
        buf.store_transition(
            Transition(_state(0.0), jnp.zeros(ACTION_DIM), 1.0, _state(1.0), False, 0.99)
        )
        assert len(buf) == 1

    def test_circular_overwrite(self):
        buf = RandomReplay(capacity=3, batch_size=16, obs_dim=OBS_DIM, action_dim=ACTION_DIM)
        for i in range(5):
            buf.store(_state(float(i)), jnp.zeros(ACTION_DIM), float(i), _state(0.0), False, 0.99)
        assert len(buf) == 3
        rewards = set(buf.sample().rewards.tolist())
        assert rewards <= {2.0, 3.0, 4.0}

    def test_sample_empty_raises(self, buf):
        with pytest.raises(ValueError, match="empty"):
            buf.sample()

    def test_deterministic_with_seed(self):
        def fill(b):
            for i in range(8):
                b.store(_state(i), jnp.zeros(ACTION_DIM), float(i), _state(0.0), False, 0.99)

        a = RandomReplay(10, 4, OBS_DIM, ACTION_DIM, seed=3)
        b = RandomReplay(10, 4, OBS_DIM, ACTION_DIM, seed=3)
        fill(a)
        fill(b)
        assert jnp.array_equal(a.sample().rewards, b.sample().rewards)

    @pytest.mark.parametrize("kwargs", [{"capacity": 0}, {"batch_size": 0}])
    def test_invalid_sizes_raise(self, kwargs):
        args = {"capacity": 10, "batch_size": 4, **kwargs}
        with pytest.raises(ValueError):
            RandomReplay(obs_dim=OBS_DIM, action_dim=ACTION_DIM, **args)
