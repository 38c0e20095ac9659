"""Environment module.

Quick start::

    import jax
    from twinsac.env import make

    env = make("Pendulum-v1", key=jax.random.PRNGKey(0))
    state = env.initial_sample()
    reward, next_state = env.sample(state, jnp.array([0.5]))
"""

from twinsac.env.base import Environment
from twinsac.env.pendulum import Pendulum, PendulumParams, PendulumState
from twinsac.env.spaces import Box

# ---- Registry ----

_REGISTRY: dict[str, type[Environment]] = {
    "Pendulum-v1": Pendulum,
}


def register(name: str, cls: type[Environment]) -> None:
    """Register a custom environment class under *name*."""
    _REGISTRY[name] = cls


def make(name: str, **kwargs: object) -> Environment:
    """Create an environment by registered name.

    Keyword arguments (e.g. ``key=``) are forwarded to the constructor.
    """
    if name not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY))
        raise KeyError(f"Unknown environment {name!r}. Available: {available}")
    return _REGISTRY[name](**kwargs)


__all__ = [
    "Box",
    "Environment",
    "Pendulum",
    "PendulumParams",
    "PendulumState",
    "make",
    "register",
]
