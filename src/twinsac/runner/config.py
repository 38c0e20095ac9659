"""Runner configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RunnerConfig:
    """Outer-loop settings for ``train_sac``.

    Algorithm settings live in ``TrainingConfig``. ``tensorboard`` only
    takes effect when ``train_sac`` is given a ``RunDir``.
    """

    # Training budget
    num_episodes: int = 200

    # Evaluation (deterministic episodes); 0 disables
    eval_every: int = 20
    eval_episodes: int = 5

    # Logging; tensorboard mirrors metrics.jsonl into the run dir (needs tensorboardX)
    log_interval: int = 10
    tensorboard: bool = False

    # Replay store
    buffer_size: int = 100_000
    batch_size: int = 256

    # Seeding
    seed: int = 0
