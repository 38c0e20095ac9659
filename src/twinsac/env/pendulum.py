"""Pendulum swing-up environment.

Matches the Gymnasium Pendulum-v1 dynamics and reward function. The
episode ends after ``max_steps`` steps; there is no other terminal state.
"""

from __future__ import annotations

import equinox as eqx
import jax
import jax.numpy as jnp

from twinsac.env.base import Environment
from twinsac.env.spaces import Box
from twinsac.seeding import split_key


class PendulumState(eqx.Module):
    theta: jax.Array  # angle (radians)
    theta_dot: jax.Array  # angular velocity
    time: int = 0  # steps taken in this episode

    def encode(self) -> jax.Array:
        """``[cos(theta), sin(theta), theta_dot]``."""
        return jnp.array(
            [jnp.cos(self.theta), jnp.sin(self.theta), self.theta_dot],
            dtype=jnp.float32,
        )


class PendulumParams(eqx.Module):
    max_speed: float = eqx.field(static=True, default=8.0)
    max_torque: float = eqx.field(static=True, default=2.0)
    dt: float = eqx.field(static=True, default=0.05)
    g: float = eqx.field(static=True, default=10.0)
    m: float = eqx.field(static=True, default=1.0)
    l: float = eqx.field(static=True, default=1.0)
    max_steps: int = eqx.field(static=True, default=200)


@eqx.filter_jit
def _dynamics(
    params: PendulumParams,
    theta: jax.Array,
    theta_dot: jax.Array,
    action: jax.Array,
) -> tuple[jax.Array, jax.Array, jax.Array]:
    """Euler step; returns ``(reward, new_theta, new_theta_dot)``."""
    u = jnp.clip(jnp.reshape(action, (-1,))[0], -params.max_torque, params.max_torque)

    norm_theta = ((theta + jnp.pi) % (2 * jnp.pi)) - jnp.pi
    reward = -(norm_theta ** 2 + 0.1 * theta_dot ** 2 + 0.001 * u ** 2)

    new_theta_dot = (
        theta_dot
        + (3.0 * params.g / (2.0 * params.l) * jnp.sin(theta)
           + 3.0 / (params.m * params.l ** 2) * u)
        * params.dt
    )
    new_theta_dot = jnp.clip(new_theta_dot, -params.max_speed, params.max_speed)
    new_theta = theta + new_theta_dot * params.dt
    return reward, new_theta, new_theta_dot


class Pendulum(Environment):
    """Classic pendulum swing-up task.

    Observation: ``[cos(theta), sin(theta), theta_dot]``
    Action: torque in ``[-max_torque, max_torque]`` (clipped by the env)
    Reward: ``-(theta^2 + 0.1 * theta_dot^2 + 0.001 * torque^2)``
    """

    def __init__(
        self,
        params: PendulumParams | None = None,
        *,
        key: jax.Array,
    ) -> None:
        self.params = params if params is not None else PendulumParams()
        self._rng = key

    def initial_sample(self) -> PendulumState:
        self._rng, key = split_key(self._rng)
        k1, k2 = jax.random.split(key)
        return PendulumState(
            theta=jax.random.uniform(k1, shape=(), minval=-jnp.pi, maxval=jnp.pi),
            theta_dot=jax.random.uniform(k2, shape=(), minval=-1.0, maxval=1.0),
            time=0,
        )

    def is_terminal(self, state: PendulumState) -> bool:
        return self.params.max_steps > 0 and state.time >= self.params.max_steps

    def sample(
        self,
        state: PendulumState,
        action: jax.Array,
    ) -> tuple[float, PendulumState]:
        reward, theta, theta_dot = _dynamics(
            self.params, state.theta, state.theta_dot, jnp.asarray(action, dtype=jnp.float32)
        )
        next_state = PendulumState(theta=theta, theta_dot=theta_dot, time=state.time + 1)
        return float(reward), next_state

    def observation_space(self) -> Box:
        high = jnp.array([1.0, 1.0, self.params.max_speed], dtype=jnp.float32)
        return Box(low=-high, high=high)

    def action_space(self) -> Box:
        return Box(
            low=-self.params.max_torque,
            high=self.params.max_torque,
            shape=(1,),
        )
