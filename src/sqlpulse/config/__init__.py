"""Configuration management: TOML loading and option models.

Usage:
    >>> from sqlpulse.config import load_config, DiffOptions, DumpOptions
"""

from sqlpulse.config.loader import ConfigurationError, load_config, resolve_snapshot
from sqlpulse.config.models import DiffOptions, DumpOptions, SnapshotProfile, SqlPulseConfig

__all__ = [
    "load_config",
    "resolve_snapshot",
    "ConfigurationError",
    "DiffOptions",
    "DumpOptions",
    "SnapshotProfile",
    "SqlPulseConfig",
]
