"""Core type definitions for twinsac.

Experience containers are NamedTuples so they compose with ``jax.tree``
utilities. The collaborator contracts the SAC orchestrator depends on
(states, function approximators, transition stores, parameter updaters)
are structural ``Protocol`` types: any object with the right methods
satisfies them, no inheritance required.
"""

from __future__ import annotations

from typing import Any, NamedTuple, Protocol, TypeAlias, runtime_checkable

import chex
import jax

# ---------------------------------------------------------------------------
# Scalar / array type aliases
# ---------------------------------------------------------------------------
Action: TypeAlias = chex.Array
Reward: TypeAlias = float
Params: TypeAlias = chex.Array  # ravelled (1-D) parameter block
OptState: TypeAlias = Any  # optax optimizer state pytree


@runtime_checkable
class State(Protocol):
    """Opaque environment state that can be encoded as a feature vector."""

    def encode(self) -> jax.Array:
        """Return a fixed-width 1-D feature vector for this state."""
        ...


# ---------------------------------------------------------------------------
# Transition containers
# ---------------------------------------------------------------------------
class Transition(NamedTuple):
    """A single (s, a, r, s', terminal, discount) experience tuple.

    ``state`` and ``next_state`` are the environment's own state objects;
    the store decides how (and whether) to encode them.
    """

    state: State
    action: Action
    reward: Reward
    next_state: State
    terminal: bool
    discount: float


class Batch(NamedTuple):
    """A sampled minibatch with a leading batch dimension on every field.

    Fields:
        states:      (B, obs_dim)
        actions:     (B, action_dim)
        rewards:     (B,)
        next_states: (B, obs_dim)
        terminals:   (B,)  float 0/1 flags
    """

    states: chex.Array
    actions: chex.Array
    rewards: chex.Array
    next_states: chex.Array
    terminals: chex.Array


class Gradients(NamedTuple):
    """Result of a backward pass: parameter and input gradients."""

    params: Params
    inputs: chex.Array


# ---------------------------------------------------------------------------
# Collaborator contracts
# ---------------------------------------------------------------------------
@runtime_checkable
class FunctionApproximator(Protocol):
    """Differentiable function approximator with a dense parameter block.

    Inputs are either a single 1-D feature vector or a ``(B, in_dim)``
    batch; outputs follow the same leading shape.
    """

    parameters: Params

    def reset_parameters(self) -> None: ...

    def clone(self) -> FunctionApproximator: ...

    def predict(self, inputs: chex.Array) -> chex.Array: ...

    def forward(self, inputs: chex.Array) -> chex.Array: ...

    def backward(self, inputs: chex.Array, output_grad: chex.Array) -> Gradients: ...


@runtime_checkable
class TransitionStore(Protocol):
    """Experience storage with store-side batch sampling."""

    def store(
        self,
        state: State,
        action: Action,
        reward: Reward,
        next_state: State,
        terminal: bool,
        discount: float,
    ) -> None: ...

    def sample(self) -> Batch: ...

    def __len__(self) -> int: ...


@runtime_checkable
class ParameterUpdater(Protocol):
    """Stateful update rule bound to one parameter block."""

    def update(self, parameters: Params, step_size: float, gradient: Params) -> Params: ...
