"""Structured logging: compact console output plus JSONL metrics files.

Console messages go through the stdlib ``logging`` hierarchy rooted at
the ``"twinsac"`` logger. Training records are appended as one JSON
object per line to ``logs/metrics.jsonl`` inside a
:class:`~twinsac.run_dir.RunDir`; each line is self-describing, so
fields can vary between entries (episode records, evaluation records).

Usage::

    from twinsac.metrics import MetricsLogger, setup_logging

    setup_logging()
    with MetricsLogger(run.log_path()) as metrics:
        metrics.write({"episode": 1, "episode_return": -1234.5})

    # Also mirror scalars to TensorBoard (``pip install "twinsac[tensorboard]"``);
    # train_sac does this when ``RunnerConfig.tensorboard`` is set:
    metrics = MetricsLogger(path, backends=[TensorBoardBackend(run.logs)])
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import IO, Any, Protocol

import jax.numpy as jnp
import numpy as np


class LogBackend(Protocol):
    """Protocol for optional logging sinks attached to a MetricsLogger."""

    def log(self, record: dict[str, Any], step: int | None = None) -> None: ...
    def close(self) -> None: ...


class TensorBoardBackend:
    """Mirror numeric fields of each record as TensorBoard scalars.

    Step counters (``episode``, ``total_steps``, ``wall_time``) are used
    as axes rather than plotted. Evaluation fields (``eval_*``) are
    grouped under ``eval/``, everything else under ``train/``.

    Parameters
    ----------
    log_dir:
        Directory for the ``events.out.tfevents.*`` files, usually
        ``RunDir.logs``.
    """

    _AXES = frozenset({"episode", "total_steps", "wall_time"})

    def __init__(self, log_dir: str | Path) -> None:
        try:
            from tensorboardX import SummaryWriter
        except ImportError:
            raise ImportError(
                "RunnerConfig(tensorboard=True) needs tensorboardX. "
                "Install it with: pip install 'twinsac[tensorboard]'"
            ) from None
        self._writer = SummaryWriter(str(log_dir))

    def log(self, record: dict[str, Any], step: int | None = None) -> None:
        for key, value in record.items():
            if key in self._AXES or isinstance(value, bool):
                continue
            if not isinstance(value, (int, float)):
                continue
            group = "eval" if key.startswith("eval_") else "train"
            self._writer.add_scalar(f"{group}/{key}", value, global_step=step)
        self._writer.flush()

    def close(self) -> None:
        self._writer.close()


# ---------------------------------------------------------------------------
# Console logging
# ---------------------------------------------------------------------------

_LEVEL_ABBREV = {
    logging.DEBUG: "D",
    logging.INFO: "I",
    logging.WARNING: "W",
    logging.ERROR: "E",
    logging.CRITICAL: "C",
}


class _TrainFormatter(logging.Formatter):
    """Abbreviated level + millisecond timestamp.

    Example output::

        I 2026-02-15 14:30:22.123 [twinsac.runner.train_sac] episode 10/200 (5.0%)
    """

    def format(self, record: logging.LogRecord) -> str:
        lvl = _LEVEL_ABBREV.get(record.levelno, "?")
        ts = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        return f"{lvl} {ts}.{int(record.msecs):03d} [{record.name}] {record.getMessage()}"


def setup_logging(level: int = logging.INFO) -> None:
    """Configure the ``twinsac`` logger with compact formatting.

    Safe to call multiple times: existing handlers are replaced.
    """
    logger = logging.getLogger("twinsac")
    logger.setLevel(level)

    for h in logger.handlers[:]:
        logger.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(_TrainFormatter())
    logger.addHandler(handler)
    logger.propagate = False


def log_progress(
    episode: int,
    total_episodes: int,
    metrics: dict[str, Any] | None = None,
    logger_name: str = "twinsac",
) -> None:
    """Log a one-line progress message.

    Example output::

        I 2026-02-15 14:30:22.123 [twinsac] episode 50/200 (25.0%) | episode_return=-812.3 total_steps=10000
    """
    pct = 100.0 * episode / total_episodes if total_episodes > 0 else 0.0
    parts = [f"episode {episode}/{total_episodes} ({pct:.1f}%)"]
    if metrics:
        kv = " ".join(
            f"{k}={_to_python(v):.4g}" if isinstance(_to_python(v), float) else f"{k}={_to_python(v)}"
            for k, v in metrics.items()
            if k not in ("episode", "wall_time")
        )
        if kv:
            parts.append(kv)
    logging.getLogger(logger_name).info(" | ".join(parts))


# ---------------------------------------------------------------------------
# JSONL metrics
# ---------------------------------------------------------------------------


class MetricsLogger:
    """Append-only JSONL logger with optional backend fan-out.

    Parameters
    ----------
    path:
        Path to the JSONL file. Parent directories are created.
    backends:
        Optional :class:`LogBackend` instances; every ``write()`` is
        forwarded to each of them.
    """

    def __init__(
        self,
        path: str | Path,
        backends: list[LogBackend] | None = None,
    ) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file: IO[str] = open(self._path, "a")  # noqa: SIM115
        self._start_time = time.monotonic()
        self._backends: list[LogBackend] = backends or []

    def write(self, record: dict[str, Any]) -> None:
        """Write *record* as one JSON line.

        Adds ``wall_time`` (seconds since logger creation) unless the
        record already carries one. JAX/numpy scalars become Python
        numbers.
        """
        row = {k: _to_python(v) for k, v in record.items()}
        if "wall_time" not in row:
            row["wall_time"] = round(time.monotonic() - self._start_time, 3)
        self._file.write(json.dumps(row, default=str) + "\n")
        self._file.flush()

        step = row.get("total_steps")
        for backend in self._backends:
            backend.log(row, step=step)

    def close(self) -> None:
        self._file.close()
        for backend in self._backends:
            backend.close()

    @property
    def path(self) -> Path:
        return self._path

    def __enter__(self) -> MetricsLogger:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"MetricsLogger({self._path})"


def read_metrics(path: str | Path) -> list[dict[str, Any]]:
    """Read all records from a JSONL metrics file."""
    p = Path(path)
    if not p.exists():
        return []
    return [json.loads(line) for line in p.read_text().splitlines() if line.strip()]


def _to_python(val: Any) -> Any:
    """Convert JAX/numpy scalars to plain Python types for JSON."""
    if isinstance(val, (jnp.ndarray, np.ndarray)):
        return val.item()
    if isinstance(val, (np.integer, np.floating)):
        return val.item()
    return val
