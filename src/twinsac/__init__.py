"""twinsac: twin-critic soft actor-critic with JAX."""

from twinsac.agent.base import Agent
from twinsac.algorithms.sac import SAC, TrainingConfig
from twinsac.env import make
from twinsac.metrics import MetricsLogger, setup_logging
from twinsac.run_dir import RunDir
from twinsac.seeding import fold_in, make_rng, split_key, split_keys
from twinsac.types import Batch, Gradients, Transition

__all__ = [
    "Agent",
    "Batch",
    "Gradients",
    "MetricsLogger",
    "RunDir",
    "SAC",
    "TrainingConfig",
    "Transition",
    "fold_in",
    "make",
    "make_rng",
    "setup_logging",
    "split_key",
    "split_keys",
]
