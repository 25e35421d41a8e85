"""
kmeans/config.py

Environment-driven clustering settings.

Values are read from the process environment, with `.env` and
`.env.local` files at the project root loaded once beforehand.
Existing environment variables always win over file values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_ENV_FILENAMES = (".env", ".env.local")
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    """Split one `KEY=VALUE` line; comments, blanks and malformed lines give None."""
    line = raw_line.strip()
    if line.startswith("#"):
        return None
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    return key, value.strip().strip("\"'")


def load_env_files(project_root: Path | None = None) -> None:
    """
    Merge `.env` then `.env.local` from ``project_root`` into ``os.environ``.

    Only keys missing from the environment are set.
    """

    root = project_root or Path(__file__).resolve().parents[1]
    env_files = (root / name for name in _ENV_FILENAMES)
    for env_path in (path for path in env_files if path.is_file()):
        pairs = map(_parse_env_line, env_path.read_text(encoding="utf-8").splitlines())
        for key, value in filter(None, pairs):
            os.environ.setdefault(key, value)


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    load_env_files()


def _read_env(name: str) -> str | None:
    """Stripped value of ``name``; unset or blank reads as None."""
    _load_env_once()
    value = (os.getenv(name) or "").strip()
    return value or None


def _get_bool_env(name: str, default: bool) -> bool:
    value = _read_env(name)
    return default if value is None else value.lower() in _TRUTHY


def _get_optional_int_env(name: str) -> int | None:
    """Integer value of ``name``, or None when unset or malformed."""
    value = _read_env(name)
    try:
        return None if value is None else int(value)
    except ValueError:
        return None


def _get_int_env(name: str, default: int) -> int:
    parsed = _get_optional_int_env(name)
    return default if parsed is None else parsed


@dataclass(frozen=True)
class ClusteringSettings:
    """
    Runtime defaults for k-means runs.
    """

    max_iterations: int = 300
    n_runs: int = 10
    max_workers: int = 1
    random_seed: int | None = None
    log_progress: bool = False


@lru_cache(maxsize=1)
def get_clustering_settings() -> ClusteringSettings:
    """
    Return cached clustering settings from environment variables.

    Call ``get_clustering_settings.cache_clear()`` after changing the
    environment to pick up new values.
    """

    return ClusteringSettings(
        max_iterations=max(1, _get_int_env("KMEANS_MAX_ITERATIONS", 300)),
        n_runs=max(1, _get_int_env("KMEANS_N_RUNS", 10)),
        max_workers=max(1, _get_int_env("KMEANS_MAX_WORKERS", 1)),
        random_seed=_get_optional_int_env("KMEANS_RANDOM_SEED"),
        log_progress=_get_bool_env("KMEANS_LOG_PROGRESS", False),
    )
