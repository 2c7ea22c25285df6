"""Invocation parameters for a single formula update."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_ORG = "interlynk-io"


class ConfigError(ValueError):
    """Raised when invocation parameters are rejected before any I/O."""


@dataclass(frozen=True)
class UpdateConfig:
    repo: str
    version: str
    formula: Path
    dry_run: bool = False
    org: str = DEFAULT_ORG
    jobs: int = 1


def validate_config(config: UpdateConfig) -> UpdateConfig:
    if not config.repo:
        raise ConfigError("repository name must not be empty")
    if not config.org:
        raise ConfigError("organization must not be empty")
    if not config.version.startswith("v"):
        raise ConfigError("version must start with 'v' (e.g., v1.0.5)")
    if not Path(config.formula).is_file():
        raise ConfigError(f"formula file does not exist: {config.formula}")
    if config.jobs < 1:
        raise ConfigError("jobs must be >= 1")
    return config
