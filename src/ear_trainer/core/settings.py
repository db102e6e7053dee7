"""Environment-driven settings for ear_trainer commands."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

__all__ = [
    "DEBUG_ENV",
    "DEFAULT_ROOT",
    "ROOT_ENV",
    "Settings",
    "load_settings",
]

ROOT_ENV = "EAR_TRAINER_HOME"
DEBUG_ENV = "EAR_TRAINER_DEBUG"
DEFAULT_ROOT = Path.home() / "ear-trainer"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    root: Path
    verbose: bool = False


def load_settings(
    env: Mapping[str, str] | None = None,
    *,
    root: Path | None = None,
    verbose: bool | None = None,
) -> Settings:
    """Resolve settings from ``env`` with explicit arguments taking priority."""

    env_map = _coerce_env(env)
    resolved_root = _resolve_root(env_map, override=root)
    if verbose is None:
        verbose = _is_truthy(env_map.get(DEBUG_ENV))
    return Settings(root=resolved_root, verbose=bool(verbose))


def _coerce_env(env: Mapping[str, str] | None) -> Mapping[str, str]:
    if env is None:
        return os.environ
    return env


def _resolve_root(env: Mapping[str, str], *, override: Path | None) -> Path:
    if override is not None:
        target = Path(override)
    else:
        custom = (env.get(ROOT_ENV) or "").strip()
        target = Path(custom) if custom else DEFAULT_ROOT
    try:
        return target.expanduser().resolve()
    except FileNotFoundError:
        return target.expanduser().absolute()


def _is_truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY
