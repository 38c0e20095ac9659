"""Output directory management for training runs.

``RunDir`` creates and exposes the directory layout of one run::

    runs/
    └── sac_pendulum_20260215_143022/
        ├── config.json
        ├── logs/
        │   ├── metrics.jsonl
        │   └── events.out.*        (TensorBoard, optional)
        └── artifacts/
            └── summary.json

Usage::

    run = RunDir("sac_pendulum", base_dir="runs")
    run.save_config({"sac": sac_config, "runner": runner_config})
    run.log_path()                       # logs/metrics.jsonl
"""

from __future__ import annotations

import dataclasses
import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any


def _timestamp() -> str:
    return datetime.now(tz=UTC).strftime("%Y%m%d_%H%M%S")


class RunDir:
    """Handle for a single experiment's output directory.

    Parameters
    ----------
    experiment_name:
        Human-readable name, combined with a UTC timestamp to form the
        directory name.
    base_dir:
        Parent directory for all runs.
    run_id:
        Explicit directory name, bypassing the timestamp.
    """

    def __init__(
        self,
        experiment_name: str = "default",
        base_dir: str | Path = "runs",
        *,
        run_id: str | None = None,
    ) -> None:
        self._base_dir = Path(base_dir)
        dirname = run_id if run_id is not None else f"{experiment_name}_{_timestamp()}"
        self._root = self._base_dir / dirname

        for subdir in ("logs", "artifacts"):
            (self._root / subdir).mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def logs(self) -> Path:
        """Directory for metric logs (JSONL, TensorBoard)."""
        return self._root / "logs"

    @property
    def artifacts(self) -> Path:
        return self._root / "artifacts"

    def log_path(self, filename: str = "metrics.jsonl") -> Path:
        return self.logs / filename

    def artifact_path(self, filename: str) -> Path:
        return self.artifacts / filename

    def save_config(self, config: Any, filename: str = "config.json") -> Path:
        """Serialize *config* (dataclass, dict or nesting of both) to JSON."""
        path = self._root / filename
        path.write_text(json.dumps(_config_to_dict(config), indent=2, default=str) + "\n")
        return path

    def load_config(self, filename: str = "config.json") -> dict[str, Any]:
        return json.loads((self._root / filename).read_text())

    def __repr__(self) -> str:
        return f"RunDir({self._root})"

    def __fspath__(self) -> str:
        return str(self._root)


def _config_to_dict(obj: Any) -> Any:
    """Recursively convert a config object to plain JSON-able values."""
    if isinstance(obj, dict):
        return {k: _config_to_dict(v) for k, v in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: _config_to_dict(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, (list, tuple)):
        return [_config_to_dict(v) for v in obj]
    return obj
