"""Path management for teardownctl.

Defaults:
- Config: /etc/teardownctl/config.toml (or $TEARDOWNCTL_CONFIG)
- Runtime data directory: /var/lib/k0s
- Runtime run directory: /run/k0s
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "teardownctl"

# Environment variable overriding the config file location
CONFIG_ENV_VAR = "TEARDOWNCTL_CONFIG"

DEFAULT_DATA_DIR = Path("/var/lib/k0s")
DEFAULT_RUN_DIR = Path("/run/k0s")
DEFAULT_MOUNTS_FILE = Path("/proc/mounts")


def get_config_dir() -> Path:
    """Get the system configuration directory path.

    Returns:
        Path to /etc/teardownctl/.
    """
    return Path("/etc") / APP_NAME


def get_config_path() -> Path:
    """Get the config file path, respecting the environment override.

    Returns:
        Path from $TEARDOWNCTL_CONFIG, or /etc/teardownctl/config.toml.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return get_config_dir() / "config.toml"


def ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
