"""Tests for PlanSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from vaultplans.config.settings import PlanSettings
from vaultplans.domain.lifecycle import PlanFolders


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "VAULTPLANS_CONFIG",
        "VAULTPLANS_API__URL",
        "VAULTPLANS_API__KEY",
        "VAULTPLANS_SWEEP__DAYS_OLD",
        "VAULTPLANS_QUIET",
    ):
        monkeypatch.delenv(var, raising=False)


class TestPlanSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = PlanSettings.from_cli(start=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.api.url == "http://localhost:27123"
        assert settings.api.key is None
        assert settings.api.verify_ssl is True
        assert settings.plans.root == "Technical Plans"
        assert settings.sweep.days_old == 30
        assert settings.mcp.transport == "stdio"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = PlanSettings.from_cli(start=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]

    def test_default_folders(self, tmp_path: Path) -> None:
        settings = PlanSettings.from_cli(start=tmp_path)
        assert settings.plans.folders() == PlanFolders()


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "vaultplans.toml"
        toml.write_text(
            '[api]\nurl = "https://127.0.0.1:27124"\nverify_ssl = false\n'
            '[plans]\nroot = "Eng/Plans/"\n'
        )
        settings = PlanSettings.from_cli(start=tmp_path)
        assert settings.config_path == toml.resolve()
        assert settings.api.url == "https://127.0.0.1:27124"
        assert settings.api.verify_ssl is False
        assert settings.plans.folders().inbox == "Eng/Plans/Inbox"
        assert settings.sweep.days_old == 30  # default preserved

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        toml = tmp_path / "custom.toml"
        toml.write_text("[sweep]\ndays_old = 7\n")
        settings = PlanSettings.from_cli(config_path=str(toml), start=tmp_path / "x")
        assert settings.sweep.days_old == 7

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "vaultplans.toml").write_text("[api\nurl = ")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            PlanSettings.from_cli(start=tmp_path)

    def test_negative_days_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "vaultplans.toml").write_text("[sweep]\ndays_old = -1\n")
        with pytest.raises(ValueError):
            PlanSettings.from_cli(start=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "vaultplans.toml").write_text("[sweep]\ndays_old = 7\n")
        monkeypatch.setenv("VAULTPLANS_SWEEP__DAYS_OLD", "14")
        settings = PlanSettings.from_cli(start=tmp_path)
        assert settings.sweep.days_old == 14

    def test_cli_flags_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VAULTPLANS_QUIET", "false")
        settings = PlanSettings.from_cli(start=tmp_path, quiet=True)
        assert settings.quiet is True

    def test_api_overrides(self, tmp_path: Path) -> None:
        (tmp_path / "vaultplans.toml").write_text('[api]\nurl = "http://a"\nkey = "toml"\n')
        settings = PlanSettings.from_cli(start=tmp_path, api_url="http://b", api_key="cli")
        assert settings.api.url == "http://b"
        assert settings.api.key == "cli"

    def test_unset_api_overrides_keep_toml(self, tmp_path: Path) -> None:
        (tmp_path / "vaultplans.toml").write_text('[api]\nkey = "toml"\n')
        settings = PlanSettings.from_cli(start=tmp_path, api_url=None, api_key=None)
        assert settings.api.key == "toml"
