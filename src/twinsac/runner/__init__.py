"""Training runner for the SAC agent.

A Python outer loop sequences whole episodes; each episode runs the
agent's own act/store/learn loop, whose numerics are jit-compiled.
Evaluation runs the same loop in deterministic mode.
"""

from twinsac.runner.config import RunnerConfig
from twinsac.runner.evaluator import EvalMetrics, evaluate
from twinsac.runner.train_sac import SACTrainResult, train_sac

__all__ = [
    # Config
    "RunnerConfig",
    # Evaluator
    "EvalMetrics",
    "evaluate",
    # SAC
    "SACTrainResult",
    "train_sac",
]
