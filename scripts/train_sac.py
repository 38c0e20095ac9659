#!/usr/bin/env python3
"""Train the twin-critic SAC agent via CLI.

Usage::

    python scripts/train_sac.py --help
    python scripts/train_sac.py --env-id Pendulum-v1
    python scripts/train_sac.py --sac.step-size 1e-3 --sac.exploration-steps 5000
    python scripts/train_sac.py --runner.num-episodes 500 --runner.seed 123
    python scripts/train_sac.py --runner.tensorboard   # needs twinsac[tensorboard]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import tyro

from twinsac.algorithms.sac import SAC, TrainingConfig
from twinsac.env import make
from twinsac.metrics import setup_logging
from twinsac.run_dir import RunDir
from twinsac.runner import RunnerConfig, train_sac
from twinsac.seeding import make_rng, split_keys


@dataclass(frozen=True)
class TrainSACArgs:
    """SAC training configuration."""

    # Environment
    env_id: str = "Pendulum-v1"

    # Algorithm hyperparameters
    sac: TrainingConfig = TrainingConfig()

    # Runner / outer-loop settings
    runner: RunnerConfig = RunnerConfig()

    # Output
    experiment_name: str = "sac"
    base_dir: str = "runs"
    verbose: bool = False


def main(args: TrainSACArgs) -> None:
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    run = RunDir(f"{args.experiment_name}_{args.env_id}", base_dir=args.base_dir)
    run.save_config({"env_id": args.env_id, "sac": args.sac, "runner": args.runner})

    rng = make_rng(args.runner.seed)
    rng, env_key, agent_key = split_keys(rng, n=2)
    env = make(args.env_id, key=env_key)
    agent = SAC.create(
        env,
        args.sac,
        rng=agent_key,
        buffer_size=args.runner.buffer_size,
        batch_size=args.runner.batch_size,
    )

    result = train_sac(agent, args.runner, run_dir=run)

    n_episodes = len(result.episode_returns)
    last_returns = result.episode_returns[-10:]
    mean_return = sum(last_returns) / len(last_returns) if last_returns else 0.0
    print(
        f"Training complete | "
        f"episodes={n_episodes} | "
        f"total_steps={agent.total_steps} | "
        f"mean_return(last 10)={mean_return:.1f} | "
        f"run_dir={run.root}"
    )


if __name__ == "__main__":
    main(tyro.cli(TrainSACArgs))
