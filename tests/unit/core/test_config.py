"""Unit tests for configuration loading."""

from pathlib import Path

import pytest
from naudit.core.config import (
    ConfigError,
    ConfigParseError,
    InstallFailurePolicy,
    NauditConfig,
    load_config,
)


class TestNauditConfig:
    """Tests for the NauditConfig model."""

    def test_defaults(self) -> None:
        """Defaults reproduce npm audit at moderate level."""
        config = NauditConfig()

        assert config.npm_command == "npm"
        assert config.audit_level == "moderate"
        assert config.install_failure_policy == InstallFailurePolicy.SKIP_AUDIT
        assert config.keep_tar is True

    def test_policy_from_string(self) -> None:
        """Policies are parsed from their string values."""
        config = NauditConfig.model_validate({"install_failure_policy": "abort"})

        assert config.install_failure_policy == InstallFailurePolicy.ABORT

    def test_rejects_unknown_level(self) -> None:
        """Audit levels outside npm's set are rejected."""
        with pytest.raises(ValueError):
            NauditConfig.model_validate({"audit_level": "info"})

    def test_rejects_extra_keys(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValueError):
            NauditConfig.model_validate({"colour": True})


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """A missing config file is not an error."""
        assert load_config(tmp_path / "config.toml") == NauditConfig()

    def test_loads_values(self, tmp_path: Path) -> None:
        """Values in the TOML file override defaults."""
        path = tmp_path / "config.toml"
        path.write_text(
            'audit_level = "high"\ninstall_failure_policy = "continue"\nkeep_tar = false\n'
        )

        config = load_config(path)

        assert config.audit_level == "high"
        assert config.install_failure_policy == InstallFailurePolicy.CONTINUE
        assert config.keep_tar is False

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("audit_level = ")

        with pytest.raises(ConfigParseError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text('install_failure_policy = "retry"\n')

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)

    def test_default_path_uses_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without an explicit path, XDG_CONFIG_HOME/naudit/config.toml is read."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        (tmp_path / "naudit").mkdir()
        (tmp_path / "naudit" / "config.toml").write_text('npm_command = "pnpm"\n')

        assert load_config().npm_command == "pnpm"
