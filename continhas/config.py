"""Configuration file management for continhas."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from continhas.domain.models import AppProfile, get_profile
from continhas.store.schema import get_exports_dir

DEFAULT_CONFIG: dict[str, Any] = {
    "profile": "continhas",
    "export_dir": "",
    "log_level": "warning",
}


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "continhas" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(dict(DEFAULT_CONFIG), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def load_config_or_default(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration merged over the defaults.

    A missing config file yields the defaults, so commands work before
    ``continhas init``.
    """
    config = dict(DEFAULT_CONFIG)
    try:
        config.update(load_config(config_path))
    except FileNotFoundError:
        pass
    return config


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def set_option(key: str, value: str, config_path: Path | None = None) -> None:
    """Set one configuration option, validating known keys.

    Args:
        key: Option name.
        value: New value.
        config_path: Path to config file. If None, uses default location.

    Raises:
        KeyError: If the option is unknown.
        ValueError: If the value is invalid for the option.
    """
    if key not in DEFAULT_CONFIG:
        raise KeyError(f"Unknown option '{key}' (expected one of: {', '.join(DEFAULT_CONFIG)})")

    if key == "profile":
        value = get_profile(value).name

    config = load_config_or_default(config_path)
    config[key] = value
    save_config(config, config_path)


def resolve_profile(config: dict[str, Any]) -> AppProfile:
    """Return the configured app profile.

    Raises:
        ValueError: If the configured profile is unknown.
    """
    return get_profile(str(config.get("profile", DEFAULT_CONFIG["profile"])))


def resolve_export_dir(config: dict[str, Any]) -> Path:
    """Return the configured export directory, or the default one."""
    export_dir = config.get("export_dir")
    if export_dir:
        return Path(str(export_dir)).expanduser()
    return get_exports_dir()
