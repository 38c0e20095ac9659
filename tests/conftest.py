"""Root test configuration.

Pins JAX to the CPU backend *before* JAX is imported anywhere, and
provides a tiny deterministic environment plus an agent factory shared by
the algorithm and runner tests.
"""

import os

os.environ.setdefault("JAX_PLATFORMS", "cpu")

from typing import NamedTuple  # noqa: E402

import jax  # noqa: E402
import jax.numpy as jnp  # noqa: E402
import pytest  # noqa: E402

from twinsac.algorithms.sac import SAC, TrainingConfig  # noqa: E402
from twinsac.dataprotocol import RandomReplay  # noqa: E402
from twinsac.env.base import Environment  # noqa: E402
from twinsac.env.spaces import Box  # noqa: E402
from twinsac.networks import Network, critic_factory, policy_factory  # noqa: E402

OBS_DIM = 2
ACTION_DIM = 2
BATCH_SIZE = 8
HIDDEN = (16, 16)


class LineState(NamedTuple):
    position: float
    time: int

    def encode(self) -> jax.Array:
        return jnp.array([self.position, self.time / 10.0], dtype=jnp.float32)


class LineEnv(Environment):
    """Point on a line moved by the summed action.

    Terminal after ``horizon`` steps; ``horizon=0`` never terminates.
    """

    def __init__(self, horizon: int = 10) -> None:
        self.horizon = horizon

    def initial_sample(self) -> LineState:
        return LineState(position=0.0, time=0)

    def is_terminal(self, state: LineState) -> bool:
        return self.horizon > 0 and state.time >= self.horizon

    def sample(self, state: LineState, action: jax.Array) -> tuple[float, LineState]:
        step = float(jnp.sum(action))
        next_state = LineState(position=state.position + step, time=state.time + 1)
        return -abs(next_state.position), next_state

    def observation_space(self) -> Box:
        return Box(low=-100.0, high=100.0, shape=(OBS_DIM,))

    def action_space(self) -> Box:
        return Box(low=-1.0, high=1.0, shape=(ACTION_DIM,))


@pytest.fixture
def make_agent():
    """Factory building a small SAC agent on ``LineEnv``."""

    def _make(
        config: TrainingConfig | None = None,
        *,
        horizon: int = 10,
        replay=None,
        action_dim: int = ACTION_DIM,
        seed: int = 0,
    ) -> SAC:
        if config is None:
            config = TrainingConfig(hidden_sizes=HIDDEN, exploration_steps=0)
        k_policy, k_critic, k_agent = jax.random.split(jax.random.PRNGKey(seed), 3)
        policy = Network(
            policy_factory(OBS_DIM, ACTION_DIM, config.hidden_sizes), key=k_policy
        )
        critic = Network(
            critic_factory(OBS_DIM, ACTION_DIM, config.hidden_sizes), key=k_critic
        )
        if replay is None:
            replay = RandomReplay(100, BATCH_SIZE, OBS_DIM, ACTION_DIM, seed=seed)
        return SAC(
            config, critic, policy, replay, LineEnv(horizon),
            action_dim=action_dim, rng=k_agent,
        )

    return _make
