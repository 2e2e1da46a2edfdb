"""Path and file name conventions for naudit.

This module holds the npm file name markers used across discovery,
cleanup and audit bundling, plus the XDG-compliant configuration
location and the audit output layout:

- Config: ~/.config/naudit/
- Audit root: <root>/.audit/
- Audit bundle: <root>/.audit/<drop>-AUDIT/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "naudit"

# npm package layout
MANIFEST_FILE_NAME = "package.json"
LOCK_FILE_NAME = "package-lock.json"
LOCK_FILE_MARKER = "package-lock"
DEPENDENCY_CACHE_DIR_NAME = "node_modules"
VCS_DIR_NAMES: frozenset[str] = frozenset({".git", ".hg", ".svn"})

# Audit output layout
AUDIT_ROOT_DIR_NAME = ".audit"
AUDIT_NAME_SUFFIX = "-AUDIT"
AUDIT_REPORT_FILE_NAME = "_audit.txt"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/naudit/ (or XDG_CONFIG_HOME/naudit/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/naudit/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_audit_name(drop_name: str) -> str:
    """Build the audit bundle name for a drop (e.g. ``7.2.0-AUDIT``)."""
    return f"{drop_name}{AUDIT_NAME_SUFFIX}"


def get_audit_root_dir(root: Path) -> Path:
    """Get the directory holding all audit bundles and archives.

    Returns:
        Path to <root>/.audit/.
    """
    return root / AUDIT_ROOT_DIR_NAME


def get_audit_dir(root: Path, drop_name: str) -> Path:
    """Get the loose audit bundle directory for a drop.

    Returns:
        Path to <root>/.audit/<drop>-AUDIT/.
    """
    return get_audit_root_dir(root) / get_audit_name(drop_name)


def get_lock_copy_name(label: str) -> str:
    """Flatten a package label into the name of its copied lock file.

    Slashes in nested labels are replaced by hyphens so every copy lands
    directly inside the audit bundle.

    Args:
        label: Package label (``_root_`` or a relative posix path).

    Returns:
        File name such as ``packages-web-package-lock.json``.
    """
    return f"{label.replace('/', '-')}-{LOCK_FILE_NAME}"
