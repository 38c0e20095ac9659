"""Tests for twinsac.run_dir."""

from __future__ import annotations

import os
from pathlib import Path

from twinsac.algorithms.sac import TrainingConfig
from twinsac.run_dir import RunDir
from twinsac.runner import RunnerConfig


class TestRunDir:
    def test_creates_standard_subdirs(self, tmp_path: Path) -> None:
        run = RunDir("exp", base_dir=tmp_path)
        assert run.logs.is_dir()
        assert run.artifacts.is_dir()

    def test_dirname_contains_experiment_name(self, tmp_path: Path) -> None:
        run = RunDir("my_experiment", base_dir=tmp_path)
        assert run.root.name.startswith("my_experiment_")

    def test_explicit_run_id(self, tmp_path: Path) -> None:
        run = RunDir(base_dir=tmp_path, run_id="fixed_name")
        assert run.root == tmp_path / "fixed_name"

    def test_paths(self, tmp_path: Path) -> None:
        run = RunDir(base_dir=tmp_path, run_id="r1")
        assert run.log_path() == run.logs / "metrics.jsonl"
        assert run.log_path("eval.jsonl") == run.logs / "eval.jsonl"
        assert run.artifact_path("summary.json") == run.artifacts / "summary.json"

    def test_fspath(self, tmp_path: Path) -> None:
        run = RunDir(base_dir=tmp_path, run_id="r1")
        assert os.fspath(run) == str(tmp_path / "r1")

    def test_config_roundtrip(self, tmp_path: Path) -> None:
        run = RunDir(base_dir=tmp_path, run_id="r1")
        sac = TrainingConfig(hidden_sizes=(64, 64), tau=0.01)
        path = run.save_config({"env_id": "Pendulum-v1", "sac": sac, "runner": RunnerConfig()})
        assert path == run.root / "config.json"

        loaded = run.load_config()
        assert loaded["env_id"] == "Pendulum-v1"
        assert loaded["sac"]["tau"] == 0.01
        assert loaded["sac"]["hidden_sizes"] == [64, 64]
        assert loaded["runner"]["num_episodes"] == RunnerConfig().num_episodes
