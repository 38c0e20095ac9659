from twinsac.algorithms.sac.agent import (
    SAC,
    bootstrap_targets,
    exploration_noise,
    polyak_average,
)
from twinsac.algorithms.sac.config import TrainingConfig
from twinsac.algorithms.sac.types import CriticInput, SACMetrics

__all__ = [
    "SAC",
    "CriticInput",
    "SACMetrics",
    "TrainingConfig",
    "bootstrap_targets",
    "exploration_noise",
    "polyak_average",
]
