"""User configuration for naudit.

Configuration is stored in ~/.config/naudit/config.toml. Every field is
optional; a missing file yields the defaults.

Example:
    npm_command = "npm"
    audit_level = "high"
    install_failure_policy = "abort"
    keep_tar = false
"""

import tomllib
from enum import Enum
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from naudit.core.paths import get_config_path

# Minimum severity accepted by ``npm audit --audit-level``
AuditLevel = Literal["low", "moderate", "high", "critical"]


class InstallFailurePolicy(str, Enum):
    """What the pipeline does after ``npm install`` fails for a package.

    Attributes:
        ABORT: Stop the run; no further installs, audits or archive.
        SKIP_AUDIT: Keep going but do not audit the failed package.
        CONTINUE: Keep going and audit the failed package anyway.
    """

    ABORT = "abort"
    SKIP_AUDIT = "skip-audit"
    CONTINUE = "continue"


class NauditConfig(BaseModel):
    """Settings for a naudit run.

    Attributes:
        npm_command: Package manager executable to invoke.
        audit_level: Minimum severity passed to ``npm audit``.
        install_failure_policy: Reaction to a failed install.
        keep_tar: Keep the uncompressed archive next to the .tar.gz.
    """

    model_config = ConfigDict(extra="forbid")

    npm_command: Annotated[
        str,
        Field(min_length=1, description="Package manager executable"),
    ] = "npm"
    audit_level: Annotated[
        AuditLevel,
        Field(description="Minimum audit severity"),
    ] = "moderate"
    install_failure_policy: Annotated[
        InstallFailurePolicy,
        Field(description="Reaction to a failed npm install"),
    ] = InstallFailurePolicy.SKIP_AUDIT
    keep_tar: Annotated[
        bool,
        Field(description="Keep the uncompressed .tar after compressing"),
    ] = True


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> NauditConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated NauditConfig; defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return NauditConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return NauditConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e
