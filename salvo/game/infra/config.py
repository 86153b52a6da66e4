"""Application configuration and env loading."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from salvo.game.core.fleet import DEFAULT_SEARCH_ATTEMPTS
from salvo.game.core.models import MAX_COLS, MAX_ROWS
from salvo.game.infra.app_data import resolve_config_dir


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = _resolve_env_path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files with optional local overrides.

    Precedence is left-to-right because later loads may overwrite previous values.
    Default order:
    1) <app data>/config/.env.salvo
    2) <app data>/config/.env.salvo.local
    3) .env.salvo
    4) .env.salvo.local
    """
    to_load = (
        tuple(paths)
        if paths is not None
        else (
            str(resolve_config_dir() / ".env.salvo"),
            str(resolve_config_dir() / ".env.salvo.local"),
            ".env.salvo",
            ".env.salvo.local",
        )
    )
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


def _resolve_env_path(path: str) -> Path:
    """Resolve env path from cwd, frozen exe dir, then project root."""
    candidate = Path(path)
    if candidate.exists():
        return candidate

    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            frozen_dir_candidate = Path(executable).resolve().parent / path
            if frozen_dir_candidate.exists():
                return frozen_dir_candidate

    project_root = Path(__file__).resolve().parents[3]
    return project_root / path


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


@dataclass(frozen=True, slots=True)
class MatchSettings:
    """Match setup resolved from environment."""

    rows: int = MAX_ROWS
    cols: int = MAX_COLS
    first: str = "good"
    second: str = "mediocre"
    trials: int = 1
    seed: int | None = None
    placement_attempts: int = DEFAULT_SEARCH_ATTEMPTS


def load_match_settings() -> MatchSettings:
    """Load match settings from SALVO_* env vars, falling back to defaults."""
    defaults = MatchSettings()
    return MatchSettings(
        rows=_int("SALVO_ROWS", defaults.rows),
        cols=_int("SALVO_COLS", defaults.cols),
        first=_str("SALVO_FIRST_PLAYER", defaults.first),
        second=_str("SALVO_SECOND_PLAYER", defaults.second),
        trials=max(1, _int("SALVO_TRIALS", defaults.trials)),
        seed=_optional_int("SALVO_SEED"),
        placement_attempts=max(1, _int("SALVO_PLACEMENT_ATTEMPTS", defaults.placement_attempts)),
    )
