"""Train twin-critic SAC on Pendulum without the runner.

Shows the agent's own loop: ``episode()`` acts, stores and learns; flipping
``deterministic`` turns off exploration noise and learning for evaluation.

Usage::

    python examples/train_sac_pendulum.py
"""

from __future__ import annotations

import numpy as np

from twinsac.algorithms.sac import SAC, TrainingConfig
from twinsac.env import make
from twinsac.seeding import make_rng, split_keys


def main() -> None:
    seed = 42
    num_episodes = 100
    eval_every = 10

    config = TrainingConfig(
        discount=0.99,
        step_size=3e-4,
        exploration_steps=1_000,
        target_network_sync_interval=1,
        tau=0.005,
        hidden_sizes=(256, 256),
    )

    rng = make_rng(seed)
    rng, env_key, agent_key = split_keys(rng, n=2)
    env = make("Pendulum-v1", key=env_key)
    agent = SAC.create(env, config, rng=agent_key, buffer_size=50_000, batch_size=256)

    for episode in range(1, num_episodes + 1):
        agent.episode()

        if episode % eval_every == 0:
            agent.deterministic = True
            returns = [agent.episode() for _ in range(3)]
            agent.deterministic = False
            q_mean = float(agent.last_metrics.q_mean) if agent.last_metrics else float("nan")
            print(
                f"Episode {episode:4d} | "
                f"steps={agent.total_steps:6d} | "
                f"q_mean={q_mean:.2f} | "
                f"eval_return={np.mean(returns):.1f}"
            )

    print("Training complete.")


if __name__ == "__main__":
    main()
