"""Parameter updater: an optax transformation bound to one parameter block.

The transformation supplies the update *direction* (Adam moments,
gradient clipping, ...); the step size is applied at call time so the
orchestrator's configured step size is the single source of truth::

    updater = Updater(optax.scale_by_adam(), net.parameters)
    net.parameters = updater.update(net.parameters, 3e-4, grads.params)

Each trained network gets its own ``Updater``: the optimizer state
(moments, step count) is never shared between networks.
"""

from __future__ import annotations

import chex
import equinox as eqx
import jax
import jax.numpy as jnp
import optax

from twinsac.types import OptState, Params


@eqx.filter_jit
def _step(
    transform: optax.GradientTransformation,
    opt_state: OptState,
    params: Params,
    gradient: Params,
    step_size: jax.Array,
) -> tuple[Params, OptState]:
    direction, opt_state = transform.update(gradient, opt_state, params)
    return optax.apply_updates(params, -step_size * direction), opt_state


class Updater:
    """Stateful gradient-descent rule for a single parameter block.

    Args:
        transform: Optax transformation producing the descent direction.
            It must not scale by a learning rate itself.
        parameters: The block this updater is bound to; fixes the shape
            and initialises the optimizer state.
    """

    def __init__(self, transform: optax.GradientTransformation, parameters: Params) -> None:
        self._transform = transform
        self._shape = parameters.shape
        self._state = transform.init(parameters)
        self.num_updates = 0

    def update(self, parameters: Params, step_size: float, gradient: Params) -> Params:
        """Return ``parameters`` moved one step against ``gradient``."""
        chex.assert_shape(parameters, self._shape)
        chex.assert_shape(gradient, self._shape)
        new_params, self._state = _step(
            self._transform,
            self._state,
            parameters,
            gradient,
            jnp.asarray(step_size, dtype=jnp.float32),
        )
        self.num_updates += 1
        return new_params

    @property
    def state(self) -> OptState:
        return self._state
