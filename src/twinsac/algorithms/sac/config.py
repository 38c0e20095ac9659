"""SAC training hyperparameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import optax


@dataclass(frozen=True)
class TrainingConfig:
    """All per-run training settings in one place.

    Frozen: the agent reads it, nothing writes it.
    """

    # Bellman backup
    discount: float = 0.99

    # Optimization
    step_size: float = 3e-4
    optimizer: Literal["adam", "sgd"] = "adam"
    max_grad_norm: float = 10.0  # 0 disables clipping

    # Episode / learning schedule
    step_limit: int = 0  # 0 = unlimited
    exploration_steps: int = 1_000
    target_network_sync_interval: int = 1

    # Target network (Polyak averaging)
    tau: float = 0.005

    # Exploration noise: U(0, 1) * noise_scale, clipped to +-noise_clip
    noise_scale: float = 0.1
    noise_clip: float = 0.25

    # Network
    hidden_sizes: tuple[int, ...] = (256, 256)

    def __post_init__(self) -> None:
        if not (0.0 < self.discount <= 1.0):
            raise ValueError(f"discount must be in (0, 1], got {self.discount}")
        if self.step_size <= 0.0:
            raise ValueError(f"step_size must be > 0, got {self.step_size}")
        if self.step_limit < 0:
            raise ValueError(f"step_limit must be >= 0, got {self.step_limit}")
        if self.exploration_steps < 0:
            raise ValueError(f"exploration_steps must be >= 0, got {self.exploration_steps}")
        if self.target_network_sync_interval < 1:
            raise ValueError(
                "target_network_sync_interval must be >= 1, "
                f"got {self.target_network_sync_interval}"
            )
        if not (0.0 < self.tau <= 1.0):
            raise ValueError(f"tau must be in (0, 1], got {self.tau}")
        if self.noise_clip < 0.0:
            raise ValueError(f"noise_clip must be >= 0, got {self.noise_clip}")
        if self.max_grad_norm < 0.0:
            raise ValueError(f"max_grad_norm must be >= 0, got {self.max_grad_norm}")
        if self.optimizer not in ("adam", "sgd"):
            raise ValueError(f"Unknown optimizer {self.optimizer!r}. Choose from 'adam', 'sgd'.")

    def _make_optimizer(self) -> optax.GradientTransformation:
        # No learning-rate scaling here: the updater applies step_size.
        direction = optax.scale_by_adam() if self.optimizer == "adam" else optax.identity()
        if self.max_grad_norm > 0.0:
            return optax.chain(optax.clip_by_global_norm(self.max_grad_norm), direction)
        return direction

    def make_critic_optimizer(self) -> optax.GradientTransformation:
        """Build the transformation used by each critic's updater."""
        return self._make_optimizer()

    def make_policy_optimizer(self) -> optax.GradientTransformation:
        """Build the transformation used by the policy updater."""
        return self._make_optimizer()
