"""Unified salvo app-data paths."""

from __future__ import annotations

import os
import sys
from pathlib import Path


def resolve_app_data_root() -> Path:
    """Resolve app-data root directory for salvo runtime state."""
    configured = os.getenv("SALVO_APP_DATA_DIR", "").strip()
    if configured:
        candidate = Path(configured)
        if candidate.is_absolute():
            return candidate
        return resolve_project_root() / candidate
    return resolve_project_root() / "appdata"


def resolve_project_root() -> Path:
    """Resolve the runtime project root directory."""
    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            return Path(executable).resolve().parent
    return Path(__file__).resolve().parents[3]


def resolve_logs_dir() -> Path:
    """Resolve logs directory, honoring SALVO_LOG_DIR."""
    configured = os.getenv("SALVO_LOG_DIR", "").strip()
    if configured:
        candidate = Path(configured)
        return candidate if candidate.is_absolute() else resolve_app_data_root() / candidate
    return resolve_app_data_root() / "logs"


def resolve_config_dir() -> Path:
    """Resolve directory holding optional env files."""
    return resolve_app_data_root() / "config"
