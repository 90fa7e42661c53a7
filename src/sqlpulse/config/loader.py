"""Load sqlpulse.toml into SqlPulseConfig."""

import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError

from sqlpulse.config.models import DiffOptions, SnapshotProfile, SqlPulseConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "sqlpulse.toml"

# [diff] keys that hold name lists, mapped to DiffOptions fields
_FILTER_KEYS = {"schemas": "schema_filter", "tables": "table_filter"}


class ConfigurationError(ValueError):
    """Raised when configuration is missing or invalid."""

    pass


def load_config(config_path: Path | None = None) -> SqlPulseConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to sqlpulse.toml. If None, ``./sqlpulse.toml`` is
            used when present, otherwise an empty default config is returned.

    Returns:
        SqlPulseConfig with profiles and default diff options.

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist.
        ConfigurationError: If the file is not valid TOML or has bad values.
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_NAME
        if not config_path.exists():
            logger.debug("No %s in working directory, using defaults", DEFAULT_CONFIG_NAME)
            return SqlPulseConfig()

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {config_path.name}: {e}") from e

    base_dir = config_path.parent

    for section in ("profiles", "diff"):
        if not isinstance(data.get(section, {}), dict):
            raise ConfigurationError(
                f"Invalid configuration in {config_path.name}: [{section}] must be a table"
            )

    try:
        # Parse profiles, resolving snapshot paths against the config file
        profiles = {}
        for name, profile_data in data.get("profiles", {}).items():
            profile = SnapshotProfile(**profile_data)
            if not profile.snapshot.is_absolute():
                profile = profile.model_copy(update={"snapshot": base_dir / profile.snapshot})
            profiles[name] = profile

        # Parse diff settings; filter lists are validated as tuple[str, ...]
        diff_settings = dict(data.get("diff", {}))
        for key, field in _FILTER_KEYS.items():
            if key in diff_settings:
                diff_settings[field] = diff_settings.pop(key)
        diff = DiffOptions(**diff_settings)
    except (TypeError, ValidationError) as e:
        raise ConfigurationError(f"Invalid configuration in {config_path.name}: {e}") from e

    logger.debug("Loaded %d profile(s) from %s", len(profiles), config_path)
    return SqlPulseConfig(profiles=profiles, diff=diff)


def resolve_snapshot(config: SqlPulseConfig, name_or_path: str | None, side: str) -> Path:
    """Resolve a ``--source``/``--target`` value to a snapshot file path.

    An existing file path wins; otherwise the value is looked up as a
    profile name.

    Raises:
        ConfigurationError: If the value is missing or matches neither.
    """
    if not name_or_path:
        raise ConfigurationError(f"No {side} specified")

    candidate = Path(name_or_path)
    if candidate.is_file():
        return candidate

    if name_or_path in config.profiles:
        return config.profiles[name_or_path].snapshot

    available = ", ".join(config.profiles) or "none"
    raise ConfigurationError(
        f"Unknown {side} '{name_or_path}': not a snapshot file or profile. "
        f"Available profiles: {available}"
    )
