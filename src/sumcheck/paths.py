"""Canonical locations for sumcheck's per-user files.

Layout:
  ~/.sumcheck/              home_dir()             — per-user settings
  ~/.sumcheck/config.yaml   default_config_path()  — YAML defaults
"""

from __future__ import annotations

import os
from pathlib import Path

DOT_DIR = ".sumcheck"
CONFIG_ENV = "SUMCHECK_CONFIG"


def home_dir() -> Path:
    """Return ~/.sumcheck/."""
    return Path.home() / DOT_DIR


def default_config_path() -> Path:
    """Return the config path: $SUMCHECK_CONFIG if set, else ~/.sumcheck/config.yaml."""
    env = os.environ.get(CONFIG_ENV, "")
    if env:
        return Path(env).expanduser()
    return home_dir() / "config.yaml"
