"""sumcheck configuration — loads and validates config.yaml.

The config file supplies defaults for options that would otherwise have to
be repeated on every invocation. Command-line flags always win.

If no config exists, defaults are used; create_default() writes a
commented starter file.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from sumcheck.digest import DEFAULT_ALGORITHM, get_provider, normalize_name
from sumcheck.errors import ConfigError, UnknownAlgorithm
from sumcheck.paths import default_config_path


@dataclass
class SumcheckConfig:
    """Parsed config.yaml."""

    algorithm: str = DEFAULT_ALGORITHM
    binary: bool = False
    quiet: bool = False
    path: Path | None = None  # file the values came from, None for defaults


_DEFAULT_CONFIG = """\
# sumcheck configuration
# Values here are defaults; command-line flags override them.

# Digest algorithm used for dumping and checking.
# Run `sumcheck --list-algorithms` to see what is available.
algorithm: sha256

# Read input files in binary mode when dumping (same as -b).
# Only changes digests on platforms with CRLF text files.
binary: false

# Do not print a SUCCESS line for every verified file (same as -q).
quiet: false
"""


def create_default(path: Path | None = None) -> Path:
    """Write a starter config.yaml if it doesn't exist. Returns the path."""
    p = path or default_config_path()
    if not p.exists():
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(_DEFAULT_CONFIG, encoding="utf-8")
    return p


def _as_bool(data: dict, key: str, default: bool) -> bool:
    value = data.get(key, default)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(
            f"'{key}' must be true or false, got {value!r}",
            hint="Use an unquoted YAML boolean.",
        )
    return value


def load_config(path: Path | None = None) -> SumcheckConfig:
    """Load and validate config.yaml. Returns defaults if the file is missing."""
    p = path or default_config_path()
    if not p.exists():
        return SumcheckConfig()

    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {p}: {e.strerror or e}") from e

    try:
        data = yaml.safe_load(raw) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {p}, got {type(data).__name__}")

    algorithm = str(data.get("algorithm") or DEFAULT_ALGORITHM)
    # Validate eagerly so a typo is reported before any file is hashed
    try:
        get_provider(algorithm)
    except UnknownAlgorithm as e:
        raise ConfigError(f"{p}: unknown algorithm '{algorithm}'", hint=e.hint) from e

    return SumcheckConfig(
        algorithm=normalize_name(algorithm),
        binary=_as_bool(data, "binary", False),
        quiet=_as_bool(data, "quiet", False),
        path=p,
    )
