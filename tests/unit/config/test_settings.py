"""Unit tests for config settings, loaders and SettingsFactory."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar
from unittest.mock import patch

import pytest

from recordkit.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    Settings,
    SettingsFactory,
)
from recordkit.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)


# ---------------------------------------------------------------------------
# Concrete settings classes used across tests
# ---------------------------------------------------------------------------


@dataclass
class AppSettings(Settings):
    _prefix: ClassVar[str] = "APP"

    host: str = "localhost"
    port: int = 8080
    ratio: float = 0.5
    debug: bool = False
    tables: list[str] = field(default_factory=list)


@dataclass
class RequiredSettings(Settings):
    _prefix: ClassVar[str] = "REQ"

    api_key: str


@dataclass
class PositivePort(Settings):
    _prefix: ClassVar[str] = "PP"

    port: int = 1

    def _validate(self) -> None:
        if self.port <= 0:
            raise ValueError("port must be positive")


# ---------------------------------------------------------------------------
# EnvSettingsLoader
# ---------------------------------------------------------------------------


class TestEnvSettingsLoader:
    def test_loads_string(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_HOST", "example.com")
        assert EnvSettingsLoader().load(AppSettings).host == "example.com"

    def test_loads_int_and_float(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_PORT", "9000")
        monkeypatch.setenv("APP_RATIO", "0.25")
        settings = EnvSettingsLoader().load(AppSettings)
        assert settings.port == 9000
        assert settings.ratio == 0.25

    def test_loads_bool(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for truthy in ("true", "1", "yes", "on"):
            monkeypatch.setenv("APP_DEBUG", truthy)
            assert EnvSettingsLoader().load(AppSettings).debug is True
        monkeypatch.setenv("APP_DEBUG", "off")
        assert EnvSettingsLoader().load(AppSettings).debug is False

    def test_loads_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_TABLES", "users, orders,,")
        assert EnvSettingsLoader().load(AppSettings).tables == ["users", "orders"]

    def test_defaults_preserved_when_env_absent(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in ("APP_HOST", "APP_PORT", "APP_RATIO", "APP_DEBUG", "APP_TABLES"):
            monkeypatch.delenv(key, raising=False)
        assert EnvSettingsLoader().load(AppSettings) == AppSettings()

    def test_missing_required_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("REQ_API_KEY", raising=False)
        with pytest.raises(MissingRequiredSettingError) as info:
            EnvSettingsLoader().load(RequiredSettings)
        assert info.value.setting_name == "REQ_API_KEY"

    def test_construction_failure_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PP_PORT", "-1")
        with pytest.raises(ConfigError, match="positive"):
            EnvSettingsLoader().load(PositivePort)

    def test_bad_int_names_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_PORT", "eighty")
        with pytest.raises(InvalidSettingValueError) as info:
            EnvSettingsLoader().load(AppSettings)
        assert info.value.setting_name == "APP_PORT"
        assert info.value.value == "eighty"

    def test_bad_float(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader({"APP_RATIO": "half"}).load(AppSettings)

    def test_bad_bool_is_not_false(self) -> None:
        with pytest.raises(InvalidSettingValueError) as info:
            EnvSettingsLoader({"APP_DEBUG": "maybe"}).load(AppSettings)
        assert info.value.setting_name == "APP_DEBUG"

    def test_reads_explicit_mapping(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_HOST", "from-process")
        settings = EnvSettingsLoader({"APP_PORT": "81"}).load(AppSettings)
        assert settings.port == 81
        assert settings.host == "localhost"

    def test_env_key(self) -> None:
        assert AppSettings.env_key("port") == "APP_PORT"
        assert Settings.env_key("port") == "PORT"


# ---------------------------------------------------------------------------
# DotenvSettingsLoader
# ---------------------------------------------------------------------------


class TestDotenvSettingsLoader:
    def test_reads_env_file(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("APP_HOST=from-dotenv\nAPP_PORT=7000\n")
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("APP_HOST", None)
            os.environ.pop("APP_PORT", None)
            settings = DotenvSettingsLoader(str(env_file)).load(AppSettings)
        assert settings.host == "from-dotenv"
        assert settings.port == 7000

    def test_existing_env_wins_without_override(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("APP_HOST=from-dotenv\n")
        with patch.dict(os.environ, {"APP_HOST": "from-env"}):
            settings = DotenvSettingsLoader(str(env_file)).load(AppSettings)
        assert settings.host == "from-env"

    def test_override(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("APP_HOST=from-dotenv\n")
        with patch.dict(os.environ, {"APP_HOST": "from-env"}):
            settings = DotenvSettingsLoader(str(env_file), override=True).load(AppSettings)
        assert settings.host == "from-dotenv"

    def test_does_not_touch_process_environment(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("APP_HOST=from-dotenv\n")
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("APP_HOST", None)
            DotenvSettingsLoader(str(env_file)).load(AppSettings)
            assert "APP_HOST" not in os.environ

    def test_missing_file_falls_back_to_environment(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"APP_PORT": "6000"}):
            settings = DotenvSettingsLoader(str(tmp_path / "absent.env")).load(AppSettings)
        assert settings.port == 6000


# ---------------------------------------------------------------------------
# SettingsFactory
# ---------------------------------------------------------------------------


class TestSettingsFactory:
    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_HOST", "env-host")
        settings = SettingsFactory.create(
            AppSettings, loaders=[EnvSettingsLoader()], overrides={"host": "override"}
        )
        assert settings.host == "override"

    def test_loader_values_used(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_PORT", "1234")
        assert SettingsFactory.create(AppSettings, loaders=[EnvSettingsLoader()]).port == 1234

    def test_failing_loader_skipped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("REQ_API_KEY", raising=False)
        settings = SettingsFactory.create(
            RequiredSettings, loaders=[EnvSettingsLoader()], overrides={"api_key": "k"}
        )
        assert settings.api_key == "k"

    def test_missing_required_after_merge(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("REQ_API_KEY", raising=False)
        with pytest.raises(MissingRequiredSettingError):
            SettingsFactory.create(RequiredSettings, loaders=[EnvSettingsLoader()])

    def test_construction_failure(self) -> None:
        with pytest.raises(ConfigError):
            SettingsFactory.create(PositivePort, overrides={"port": 0})
