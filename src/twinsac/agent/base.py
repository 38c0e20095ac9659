"""Agent interface consumed by the training runner.

Agents are stateful orchestrators: they own their environment, replay
store and networks, and keep the lifetime step counter themselves.
``Agent`` is a structural protocol, so the runner and evaluator work with
any object exposing the same surface; no inheritance is required.

Example usage::

    from twinsac.algorithms.sac import SAC, TrainingConfig

    agent = SAC.create(env, TrainingConfig(), rng=rng)
    episode_return = agent.episode()
    assert isinstance(agent, Agent)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import jax


@runtime_checkable
class Agent(Protocol):
    """Structural typing protocol for an episodic learning agent.

    Attributes:
        deterministic: When True the agent acts without exploration
            noise and performs no learning updates.
        total_steps: Environment steps taken over the agent's lifetime.
    """

    deterministic: bool
    total_steps: int

    def episode(self) -> float:
        """Run one episode and return its undiscounted return."""
        ...

    def select_action(self) -> jax.Array:
        """Choose the action for the agent's current state."""
        ...

    def update(self) -> None:
        """Perform one learning update from stored experience."""
        ...
