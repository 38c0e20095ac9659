"""Episode-driven SAC training loop.

The agent runs its own per-step loop (acting, storing, learning); this
runner sequences whole episodes, interleaves deterministic evaluation
and handles logging.

Usage::

    from twinsac.algorithms.sac import SAC, TrainingConfig
    from twinsac.env import make
    from twinsac.runner import RunnerConfig, train_sac

    runner_config = RunnerConfig(num_episodes=100)
    env = make("Pendulum-v1", key=jax.random.PRNGKey(1))
    agent = SAC.create(
        env, TrainingConfig(),
        rng=jax.random.PRNGKey(runner_config.seed),
        buffer_size=runner_config.buffer_size,
        batch_size=runner_config.batch_size,
    )
    result = train_sac(agent, runner_config)
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any, NamedTuple

import numpy as np

from twinsac.algorithms.sac.agent import SAC
from twinsac.metrics import LogBackend, MetricsLogger, TensorBoardBackend, log_progress
from twinsac.run_dir import RunDir
from twinsac.runner.config import RunnerConfig
from twinsac.runner.evaluator import evaluate

logger = logging.getLogger(__name__)


class SACTrainResult(NamedTuple):
    """Return value from ``train_sac``."""

    episode_returns: list[float]
    eval_log: list[dict[str, float]]


def train_sac(
    agent: SAC,
    runner_config: RunnerConfig,
    *,
    callback: Callable[[int, SAC, dict[str, Any]], None] | None = None,
    run_dir: RunDir | None = None,
) -> SACTrainResult:
    """Train *agent* for ``runner_config.num_episodes`` episodes.

    Args:
        agent: A constructed SAC agent (see ``SAC.create``).
        runner_config: Outer-loop settings.
        callback: Optional ``callback(episode, agent, record)`` called
            after every training episode.
        run_dir: Optional :class:`~twinsac.run_dir.RunDir`; when given,
            episode and evaluation records are appended to
            ``<run_dir>/logs/metrics.jsonl`` (and mirrored to TensorBoard
            when ``runner_config.tensorboard`` is set), and end-of-run
            totals are written to ``<run_dir>/artifacts/summary.json``.

    Returns:
        ``SACTrainResult`` with per-episode returns and evaluation records.
    """
    metrics_logger = None
    if run_dir is not None:
        backends: list[LogBackend] = []
        if runner_config.tensorboard:
            backends.append(TensorBoardBackend(run_dir.logs))
        metrics_logger = MetricsLogger(run_dir.log_path(), backends=backends)

    episode_returns: list[float] = []
    eval_log: list[dict[str, float]] = []

    try:
        for episode in range(1, runner_config.num_episodes + 1):
            episode_return = agent.episode()
            episode_returns.append(episode_return)

            record: dict[str, Any] = {
                "episode": episode,
                "total_steps": agent.total_steps,
                "episode_return": episode_return,
                "episode_length": agent.last_episode_length,
            }
            if agent.last_metrics is not None:
                record.update(
                    {k: float(v) for k, v in agent.last_metrics._asdict().items()}
                )
            if metrics_logger is not None:
                metrics_logger.write(record)
            if callback is not None:
                callback(episode, agent, record)
            if episode % runner_config.log_interval == 0:
                log_progress(episode, runner_config.num_episodes, record)

            if runner_config.eval_every and episode % runner_config.eval_every == 0:
                eval_metrics = evaluate(agent, n_episodes=runner_config.eval_episodes)
                eval_record = {
                    "episode": episode,
                    "total_steps": agent.total_steps,
                    "eval_mean_return": eval_metrics.mean_return,
                    "eval_std_return": eval_metrics.std_return,
                    "eval_mean_length": eval_metrics.mean_length,
                }
                eval_log.append(eval_record)
                if metrics_logger is not None:
                    metrics_logger.write(eval_record)
                logger.info(
                    "[Eval @ episode %d] mean_return=%.2f std=%.2f",
                    episode, eval_metrics.mean_return, eval_metrics.std_return,
                )
    finally:
        if metrics_logger is not None:
            metrics_logger.close()

    if run_dir is not None:
        _write_summary(run_dir, agent, episode_returns, eval_log)
    return SACTrainResult(episode_returns=episode_returns, eval_log=eval_log)


def _write_summary(
    run_dir: RunDir,
    agent: SAC,
    episode_returns: list[float],
    eval_log: list[dict[str, float]],
) -> None:
    """Write end-of-run totals to ``artifacts/summary.json``."""
    last = episode_returns[-10:]
    summary = {
        "episodes": len(episode_returns),
        "total_steps": agent.total_steps,
        "num_updates": agent.num_updates,
        "mean_return_last_10": float(np.mean(last)) if last else None,
        "final_eval_mean_return": eval_log[-1]["eval_mean_return"] if eval_log else None,
    }
    path = run_dir.artifact_path("summary.json")
    path.write_text(json.dumps(summary, indent=2) + "\n")
    logger.info("Wrote run summary to %s", path)
