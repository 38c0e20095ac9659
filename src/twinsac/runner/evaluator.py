"""Deterministic evaluation of an agent.

Runs whole episodes with exploration and learning switched off, then
restores the agent's previous mode::

    metrics = evaluate(agent, n_episodes=10)
    # metrics.mean_return, metrics.std_return, metrics.mean_length
"""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

from twinsac.agent.base import Agent


class EvalMetrics(NamedTuple):
    """Aggregated evaluation results."""

    mean_return: float
    std_return: float
    mean_length: float


def evaluate(agent: Agent, *, n_episodes: int) -> EvalMetrics:
    """Run *n_episodes* deterministic episodes.

    Evaluation steps still go through the agent's episode loop, so they
    are stored as experience and advance ``agent.total_steps``.
    """
    if n_episodes < 1:
        raise ValueError(f"n_episodes must be >= 1, got {n_episodes}")

    previous = agent.deterministic
    agent.deterministic = True
    returns: list[float] = []
    lengths: list[int] = []
    try:
        for _ in range(n_episodes):
            start = agent.total_steps
            returns.append(agent.episode())
            lengths.append(agent.total_steps - start)
    finally:
        agent.deterministic = previous

    return EvalMetrics(
        mean_return=float(np.mean(returns)),
        std_return=float(np.std(returns)),
        mean_length=float(np.mean(lengths)),
    )
