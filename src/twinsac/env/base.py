"""Environment interface consumed by the SAC orchestrator.

The environment is a stateful Python object (it may own a PRNG key for
stochastic resets), while the states it hands out are immutable values
that know how to encode themselves::

    env = Pendulum(key=jax.random.PRNGKey(0))
    state = env.initial_sample()
    while not env.is_terminal(state):
        reward, state = env.sample(state, action)

``sample`` never mutates the state passed in, so the caller can keep the
pre-step state for its transition record.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import jax

from twinsac.env.spaces import Box
from twinsac.types import State


class Environment(ABC):
    """Abstract base for continuous-action environments.

    Subclasses implement:
    - ``initial_sample() -> State``
    - ``is_terminal(state) -> bool``
    - ``sample(state, action) -> (reward, next_state)``
    - ``observation_space() -> Box`` and ``action_space() -> Box``
    """

    @abstractmethod
    def initial_sample(self) -> State:
        """Return a fresh initial state."""
        ...

    @abstractmethod
    def is_terminal(self, state: State) -> bool:
        ...

    @abstractmethod
    def sample(self, state: State, action: jax.Array) -> tuple[float, State]:
        """Advance one timestep from *state* with *action*.

        Returns:
            ``(reward, next_state)``.
        """
        ...

    @abstractmethod
    def observation_space(self) -> Box:
        """Space of ``state.encode()`` vectors."""
        ...

    @abstractmethod
    def action_space(self) -> Box:
        ...

    @property
    def name(self) -> str:
        return self.__class__.__name__
