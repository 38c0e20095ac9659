"""Tests for twinsac.seeding."""

from __future__ import annotations

import jax.numpy as jnp

from twinsac.seeding import fold_in, make_rng, split_key, split_keys


class TestMakeRng:
    def test_deterministic(self) -> None:
        assert jnp.array_equal(make_rng(42), make_rng(42))

    def test_different_seeds_differ(self) -> None:
        assert not jnp.array_equal(make_rng(0), make_rng(1))


class TestSplitKey:
    def test_returns_two_distinct_keys(self) -> None:
        a, b = split_key(make_rng(0))
        assert not jnp.array_equal(a, b)

    def test_deterministic(self) -> None:
        rng = make_rng(0)
        assert all(jnp.array_equal(x, y) for x, y in zip(split_key(rng), split_key(rng)))


class TestSplitKeys:
    def test_returns_n_plus_1_keys(self) -> None:
        keys = split_keys(make_rng(0), n=3)
        assert len(keys) == 4  # rng + 3 subkeys

    def test_all_keys_different(self) -> None:
        keys = split_keys(make_rng(0), n=5)
        for i in range(len(keys)):
            for j in range(i + 1, len(keys)):
                assert not jnp.array_equal(keys[i], keys[j])

    def test_unpacking_pattern(self) -> None:
        rng, agent_key, env_key = split_keys(make_rng(0), n=2)
        assert not jnp.array_equal(agent_key, env_key)


class TestFoldIn:
    def test_deterministic(self) -> None:
        rng = make_rng(0)
        assert jnp.array_equal(fold_in(rng, 7), fold_in(rng, 7))

    def test_different_data_differ(self) -> None:
        rng = make_rng(0)
        assert not jnp.array_equal(fold_in(rng, 0), fold_in(rng, 1))
