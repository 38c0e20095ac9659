"""SAC-specific value types."""

from __future__ import annotations

from typing import NamedTuple

import chex
import jax
import jax.numpy as jnp


class CriticInput(NamedTuple):
    """Critic input laid out as ``action ⧺ state`` along the last axis.

    Carries the action/state boundary so that a gradient over the
    concatenated input can be sliced back into its two blocks.

    Fields:
        action: ``(A,)`` or ``(B, A)``.
        state:  ``(S,)`` or ``(B, S)``.
    """

    action: jax.Array
    state: jax.Array

    @property
    def action_dim(self) -> int:
        return self.action.shape[-1]

    @property
    def width(self) -> int:
        return self.action.shape[-1] + self.state.shape[-1]

    def joined(self) -> jax.Array:
        """Concatenate into the array the critic consumes."""
        chex.assert_equal_rank([self.action, self.state])
        chex.assert_equal_shape_prefix([self.action, self.state], self.action.ndim - 1)
        return jnp.concatenate([self.action, self.state], axis=-1)

    def split(self, combined: jax.Array) -> CriticInput:
        """Slice an array laid out like ``joined()`` back into its blocks."""
        chex.assert_shape(combined, (*self.state.shape[:-1], self.width))
        return CriticInput(
            action=combined[..., : self.action_dim],
            state=combined[..., self.action_dim :],
        )


class SACMetrics(NamedTuple):
    """Diagnostics recorded by the most recent learning update."""

    critic1_loss: chex.Array
    critic2_loss: chex.Array
    actor_objective: chex.Array  # batch mean of min(Q1, Q2) at the policy's actions
    q_mean: chex.Array
