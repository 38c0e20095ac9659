"""Twin-critic SAC agent.

The agent owns its collaborators (environment, replay store, policy,
two learning critics, two target critics, one updater per trained
network) and drives them from a plain Python loop. The numerics are
small jitted pure functions (``bootstrap_targets``, ``polyak_average``,
``exploration_noise``) plus the networks' own jitted passes.

Implements:
  - Deterministic policy with clipped uniform exploration noise
  - Clipped double-Q targets from twin target critics
  - Policy gradient routed through the lower of the two critics
  - Soft target updates (Polyak averaging) on a step interval

Usage::

    config = TrainingConfig(exploration_steps=1_000)
    agent = SAC.create(env, config, rng=jax.random.PRNGKey(0))
    for _ in range(100):
        episode_return = agent.episode()

    agent.deterministic = True   # evaluation: no noise, no learning
    score = agent.episode()
"""

from __future__ import annotations

import logging
from functools import partial

import chex
import jax
import jax.numpy as jnp
import optax

from twinsac.algorithms.sac.config import TrainingConfig
from twinsac.algorithms.sac.types import CriticInput, SACMetrics
from twinsac.dataprotocol.replay_buffer import RandomReplay
from twinsac.env.base import Environment
from twinsac.losses import mean_squared_error, mean_squared_error_grad
from twinsac.networks.approximator import Network
from twinsac.networks.mlp import critic_factory, policy_factory
from twinsac.seeding import split_key, split_keys
from twinsac.types import Batch, FunctionApproximator, State, TransitionStore
from twinsac.updater import Updater

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


@jax.jit
def bootstrap_targets(
    rewards: jax.Array,
    terminals: jax.Array,
    discount: float,
    target_q1: jax.Array,
    target_q2: jax.Array,
) -> jax.Array:
    """Clipped double-Q target: ``r + gamma * (1 - done) * min(Q1', Q2')``."""
    return rewards + discount * (1.0 - terminals) * jnp.minimum(target_q1, target_q2)


@jax.jit
def polyak_average(target: jax.Array, online: jax.Array, rho: float) -> jax.Array:
    """``(1 - rho) * target + rho * online``."""
    return (1.0 - rho) * target + rho * online


@partial(jax.jit, static_argnames=("shape",))
def exploration_noise(
    key: chex.PRNGKey,
    shape: tuple[int, ...],
    scale: float,
    clip: float,
) -> jax.Array:
    """Uniform noise ``U(0, 1) * scale``, clipped to ``[-clip, clip]``."""
    noise = jax.random.uniform(key, shape=shape) * scale
    return jnp.clip(noise, -clip, clip)


# ---------------------------------------------------------------------------
# Agent
# ---------------------------------------------------------------------------


class SAC:
    """Soft actor-critic orchestrator with twin critics.

    Args:
        config: Training hyperparameters (read-only).
        learning_q1: First learning critic. The second critic is a clone
            of it with freshly reset parameters; the targets are clones
            of the learning critics.
        policy: Policy network, ``state -> action``.
        replay: Transition store.
        environment: Environment the agent acts in.
        action_dim: Width of an action vector.
        rng: PRNG key for exploration noise.
        critic_optimizer: Optax transformation for the critics'
            updaters; defaults to ``config.make_critic_optimizer()``.
        policy_optimizer: Same for the policy updater.
    """

    def __init__(
        self,
        config: TrainingConfig,
        learning_q1: FunctionApproximator,
        policy: FunctionApproximator,
        replay: TransitionStore,
        environment: Environment,
        *,
        action_dim: int,
        rng: chex.PRNGKey,
        critic_optimizer: optax.GradientTransformation | None = None,
        policy_optimizer: optax.GradientTransformation | None = None,
    ) -> None:
        self.config = config
        self.policy = policy
        self.replay = replay
        self.environment = environment
        self.action_dim = action_dim
        self._rng = rng

        self.learning_q1 = learning_q1
        self.learning_q2 = learning_q1.clone()
        self.learning_q2.reset_parameters()

        if critic_optimizer is None:
            critic_optimizer = config.make_critic_optimizer()
        if policy_optimizer is None:
            policy_optimizer = config.make_policy_optimizer()
        self.q1_updater = Updater(critic_optimizer, self.learning_q1.parameters)
        self.q2_updater = Updater(critic_optimizer, self.learning_q2.parameters)
        self.policy_updater = Updater(policy_optimizer, self.policy.parameters)

        self.target_q1 = self.learning_q1.clone()
        self.target_q2 = self.learning_q2.clone()

        self.state: State | None = None
        self.action: jax.Array | None = None
        self.total_steps = 0
        self.num_updates = 0
        self.deterministic = False
        self.last_metrics: SACMetrics | None = None
        self.last_episode_length = 0

    @classmethod
    def create(
        cls,
        environment: Environment,
        config: TrainingConfig,
        *,
        rng: chex.PRNGKey,
        buffer_size: int = 100_000,
        batch_size: int = 256,
    ) -> SAC:
        """Build MLP networks and a uniform replay store sized from the
        environment's spaces.

        The policy output is tanh-squashed to the action bound.
        """
        obs_dim = environment.observation_space().dim
        action_space = environment.action_space()
        action_dim = action_space.dim
        action_scale = float(jnp.max(jnp.abs(action_space.high)))

        rng, k_policy, k_critic, k_replay = split_keys(rng, n=3)
        policy = Network(
            policy_factory(obs_dim, action_dim, config.hidden_sizes, action_scale=action_scale),
            key=k_policy,
        )
        critic = Network(critic_factory(obs_dim, action_dim, config.hidden_sizes), key=k_critic)
        replay = RandomReplay(
            buffer_size,
            batch_size,
            obs_dim,
            action_dim,
            seed=int(jax.random.randint(k_replay, (), 0, 2**31 - 1)),
        )
        logger.debug(
            "Built SAC for %s: obs_dim=%d action_dim=%d hidden=%s",
            environment.name, obs_dim, action_dim, config.hidden_sizes,
        )
        return cls(
            config, critic, policy, replay, environment,
            action_dim=action_dim, rng=rng,
        )

    # ------------------------------------------------------------------
    # Acting
    # ------------------------------------------------------------------

    def episode(self) -> float:
        """Run one episode to completion; return the undiscounted return."""
        self.state = self.environment.initial_sample()
        steps = 0
        total_return = 0.0

        while not self.environment.is_terminal(self.state):
            if self.config.step_limit and steps >= self.config.step_limit:
                break
            self.select_action()

            reward, next_state = self.environment.sample(self.state, self.action)
            total_return += float(reward)
            steps += 1
            self.total_steps += 1

            self.replay.store(
                self.state,
                self.action,
                reward,
                next_state,
                self.environment.is_terminal(next_state),
                self.config.discount,
            )
            self.state = next_state

            if self.deterministic or self.total_steps < self.config.exploration_steps:
                continue
            self.update()

        self.last_episode_length = steps
        logger.debug(
            "Episode finished: return=%.3f steps=%d total_steps=%d",
            total_return, steps, self.total_steps,
        )
        return total_return

    def select_action(self) -> jax.Array:
        """Set ``self.action`` from the policy at ``self.state``."""
        action = self.policy.predict(self.state.encode())
        chex.assert_shape(action, (self.action_dim,))
        if not self.deterministic:
            self._rng, key = split_key(self._rng)
            action = action + exploration_noise(
                key, action.shape, self.config.noise_scale, self.config.noise_clip
            )
        self.action = action
        return action

    # ------------------------------------------------------------------
    # Learning
    # ------------------------------------------------------------------

    def update(self) -> None:
        """One learning step: critic regression, then policy gradient.

        Soft-updates the targets when ``total_steps`` is a multiple of
        ``target_network_sync_interval``.
        """
        batch = self.replay.sample()
        critic1_loss, critic2_loss, q_mean = self._update_critics(batch)
        actor_objective = self._update_policy(batch.states)
        self.num_updates += 1

        if self.total_steps % self.config.target_network_sync_interval == 0:
            self.soft_update(self.config.tau)

        self.last_metrics = SACMetrics(
            critic1_loss=critic1_loss,
            critic2_loss=critic2_loss,
            actor_objective=actor_objective,
            q_mean=q_mean,
        )

    def _update_critics(self, batch: Batch) -> tuple[jax.Array, jax.Array, jax.Array]:
        n = batch.rewards.shape[0]

        # Target policy evaluation: no exploration noise.
        next_actions = self.policy.predict(batch.next_states)
        target_input = CriticInput(next_actions, batch.next_states).joined()
        target_q1 = self.target_q1.predict(target_input)
        target_q2 = self.target_q2.predict(target_input)
        chex.assert_shape([target_q1, target_q2], (n, 1))
        targets = bootstrap_targets(
            batch.rewards,
            batch.terminals,
            self.config.discount,
            target_q1[:, 0],
            target_q2[:, 0],
        )[:, None]

        learning_input = CriticInput(batch.actions, batch.states).joined()
        q1 = self.learning_q1.forward(learning_input)
        q2 = self.learning_q2.forward(learning_input)

        gradient_q1 = self.learning_q1.backward(
            learning_input, mean_squared_error_grad(q1, targets)
        ).params
        self.learning_q1.parameters = self.q1_updater.update(
            self.learning_q1.parameters, self.config.step_size, gradient_q1
        )
        gradient_q2 = self.learning_q2.backward(
            learning_input, mean_squared_error_grad(q2, targets)
        ).params
        self.learning_q2.parameters = self.q2_updater.update(
            self.learning_q2.parameters, self.config.step_size, gradient_q2
        )

        q_mean = 0.5 * (jnp.mean(q1) + jnp.mean(q2))
        return mean_squared_error(q1, targets), mean_squared_error(q2, targets), q_mean

    def _update_policy(self, states: jax.Array) -> jax.Array:
        pi = self.policy.predict(states)
        critic_input = CriticInput(pi, states)
        x = critic_input.joined()

        q1 = self.learning_q1.forward(x)
        q2 = self.learning_q2.forward(x)
        # Per sample, back the gradient with the more conservative critic.
        # Rows owned by the other critic get a zero output gradient, so
        # their input gradient is zero there.
        use_q1 = q1 < q2
        input_grad = (
            self.learning_q1.backward(x, jnp.where(use_q1, -q1, 0.0)).inputs
            + self.learning_q2.backward(x, jnp.where(use_q1, 0.0, -q2)).inputs
        )
        action_grad = critic_input.split(input_grad).action

        # Summed (not averaged) over the batch by the vector-Jacobian product.
        self.policy.forward(states)
        policy_gradient = self.policy.backward(states, action_grad).params
        self.policy.parameters = self.policy_updater.update(
            self.policy.parameters, self.config.step_size, policy_gradient
        )
        return jnp.mean(jnp.minimum(q1, q2))

    def soft_update(self, rho: float | None = None) -> None:
        """Move each target critic toward its learning critic by *rho*.

        Defaults to ``config.tau``.
        """
        rho = self.config.tau if rho is None else rho
        self.target_q1.parameters = polyak_average(
            self.target_q1.parameters, self.learning_q1.parameters, rho
        )
        self.target_q2.parameters = polyak_average(
            self.target_q2.parameters, self.learning_q2.parameters, rho
        )
