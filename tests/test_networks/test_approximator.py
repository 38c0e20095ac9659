"""Tests for the Equinox-backed function approximator."""

from __future__ import annotations

import jax
import jax.numpy as jnp
import pytest

from twinsac.networks import MLP, Network, critic_factory, policy_factory
from twinsac.types import FunctionApproximator, Gradients

IN_DIM = 5
OUT_DIM = 1


@pytest.fixture
def net():
    return Network(critic_factory(obs_dim=3, action_dim=2, hidden_sizes=(8, 8)),
                   key=jax.random.PRNGKey(0))


@pytest.fixture
def batch():
    return jax.random.normal(jax.random.PRNGKey(1), (6, IN_DIM))


class TestMLP:
    def test_output_shape(self):
        mlp = MLP(4, 2, (8,), key=jax.random.PRNGKey(0))
        assert mlp(jnp.zeros(4)).shape == (2,)

    def test_squash_bounds_output(self):
        mlp = MLP(4, 2, (8,), squash=True, output_scale=2.0, key=jax.random.PRNGKey(0))
        out = mlp(100.0 * jnp.ones(4))
        assert bool(jnp.all(jnp.abs(out) <= 2.0))

    def test_policy_factory_builds_squashed_mlp(self):
        policy = policy_factory(3, 1, (8,), action_scale=2.0)(jax.random.PRNGKey(0))
        assert policy.squash
        assert policy.output_scale == 2.0

    def test_critic_factory_input_width(self):
        critic = critic_factory(3, 2, (8,))(jax.random.PRNGKey(0))
        assert critic(jnp.zeros(5)).shape == (1,)


class TestNetwork:
    def test_satisfies_protocol(self, net):
        assert isinstance(net, FunctionApproximator)

    def test_parameters_are_flat(self, net):
        # (5*8 + 8) + (8*8 + 8) + (8*1 + 1)
        assert net.parameters.shape == (48 + 72 + 9,)

    def test_predict_single_and_batch(self, net, batch):
        assert net.predict(batch[0]).shape == (OUT_DIM,)
        out = net.predict(batch)
        assert out.shape == (6, OUT_DIM)
        assert jnp.allclose(out[0], net.predict(batch[0]), atol=1e-6)

    def test_forward_matches_predict(self, net, batch):
        assert jnp.array_equal(net.forward(batch), net.predict(batch))

    def test_set_parameters_changes_output(self, net, batch):
        before = net.predict(batch)
        net.parameters = jnp.zeros_like(net.parameters)
        assert jnp.allclose(net.predict(batch), 0.0)
        assert not jnp.allclose(before, 0.0)

    def test_set_parameters_wrong_shape_is_fatal(self, net):
        with pytest.raises(AssertionError):
            net.parameters = jnp.zeros(3)

    def test_reset_parameters_draws_new_values(self, net):
        before = net.parameters
        net.reset_parameters()
        assert net.parameters.shape == before.shape
        assert not jnp.allclose(net.parameters, before)


class TestClone:
    def test_clone_copies_values(self, net):
        twin = net.clone()
        assert jnp.array_equal(twin.parameters, net.parameters)

    def test_clone_is_independent(self, net):
        twin = net.clone()
        original = net.parameters
        twin.parameters = jnp.zeros_like(twin.parameters)
        assert jnp.array_equal(net.parameters, original)

    def test_clone_then_reset_differs_from_source(self, net):
        twin = net.clone()
        twin.reset_parameters()
        assert not jnp.allclose(twin.parameters, net.parameters)

    def test_two_clones_reset_differently(self, net):
        a, b = net.clone(), net.clone()
        a.reset_parameters()
        b.reset_parameters()
        assert not jnp.allclose(a.parameters, b.parameters)


class TestBackward:
    def test_returns_gradients(self, net, batch):
        net.forward(batch)
        grads = net.backward(batch, jnp.ones((6, OUT_DIM)))
        assert isinstance(grads, Gradients)
        assert grads.params.shape == net.parameters.shape
        assert grads.inputs.shape == batch.shape

    def test_param_gradient_is_batch_sum(self, net, batch):
        net.forward(batch)
        total = net.backward(batch, jnp.ones((6, OUT_DIM))).params
        per_sample = sum(
            net.backward(batch[i], jnp.ones(OUT_DIM)).params for i in range(6)
        )
        assert jnp.allclose(total, per_sample, atol=1e-5)

    def test_matches_jax_grad(self, net, batch):
        x = batch[0]
        net.forward(x)
        grads = net.backward(x, jnp.ones(OUT_DIM))
        expected = jax.grad(lambda inp: net.model(inp)[0])(x)
        assert jnp.allclose(grads.inputs, expected, atol=1e-5)

    def test_zero_output_grad_gives_zero_gradients(self, net, batch):
        net.forward(batch)
        grads = net.backward(batch, jnp.zeros((6, OUT_DIM)))
        assert jnp.allclose(grads.params, 0.0)
        assert jnp.allclose(grads.inputs, 0.0)

    def test_differentiates_at_recorded_parameters(self, net, batch):
        net.forward(batch)
        expected = net.backward(batch, jnp.ones((6, OUT_DIM)))
        net.forward(batch)
        net.parameters = net.parameters + 1.0
        after_swap = net.backward(batch, jnp.ones((6, OUT_DIM)))
        assert jnp.allclose(after_swap.params, expected.params)
        assert jnp.allclose(after_swap.inputs, expected.inputs)

    def test_without_forward_uses_current_parameters(self, net, batch):
        fresh = net.clone()
        net.forward(batch)
        expected = net.backward(batch, jnp.ones((6, OUT_DIM)))
        got = fresh.backward(batch, jnp.ones((6, OUT_DIM)))
        assert jnp.allclose(got.params, expected.params)
