from pathlib import Path

import pytest
import yaml

from pulseboard.shared.core.configuration import (
    ENV_OVERRIDES,
    ConfigManager,
    SystemConfig,
    ValidationLevel,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_OVERRIDES:
        monkeypatch.delenv(key, raising=False)


def write_yaml(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data), encoding="utf-8")


def test_defaults_without_files(tmp_path: Path) -> None:
    config = ConfigManager(tmp_path / "missing").get_config()
    assert config == SystemConfig()
    assert config.timing.metrics_load_delay == 1.0
    assert config.timing.login_delay == 1.0
    assert config.storage.backend == "file"
    assert config.storage.settings_key == "dashboard-settings"
    assert config.preferences.hydration == ValidationLevel.LENIENT
    assert config.directory.clear_current_user_on_failed_login is False


def test_user_file_overrides_defaults_file(tmp_path: Path) -> None:
    write_yaml(tmp_path / "defaults.yaml", {"timing": {"login_delay": 2.0, "metrics_load_delay": 3.0}})
    write_yaml(tmp_path / "user.yaml", {"timing": {"login_delay": 0.5}})

    config = ConfigManager(tmp_path).get_config()
    assert config.timing.login_delay == 0.5
    assert config.timing.metrics_load_delay == 3.0


def test_environment_overrides_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    write_yaml(tmp_path / "user.yaml", {"storage": {"backend": "duckdb"}})
    monkeypatch.setenv("PULSEBOARD_STORAGE_BACKEND", "memory")
    monkeypatch.setenv("PULSEBOARD_LOGIN_DELAY", "0.25")
    monkeypatch.setenv("PULSEBOARD_CLEAR_USER_ON_FAILED_LOGIN", "true")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = ConfigManager(tmp_path).get_config()
    assert config.storage.backend == "memory"
    assert config.timing.login_delay == 0.25
    assert config.directory.clear_current_user_on_failed_login is True
    assert config.logging.level == "DEBUG"


def test_invalid_config_strict_raises(tmp_path: Path) -> None:
    write_yaml(tmp_path / "user.yaml", {"timing": {"login_delay": -1}})
    with pytest.raises(ValueError, match="Configuration validation failed"):
        ConfigManager(tmp_path).get_config(ValidationLevel.STRICT)


def test_invalid_config_lenient_uses_defaults(tmp_path: Path) -> None:
    write_yaml(tmp_path / "user.yaml", {"storage": {"backend": "s3"}})
    config = ConfigManager(tmp_path).get_config(ValidationLevel.LENIENT)
    assert config == SystemConfig()


def test_unknown_keys_are_rejected(tmp_path: Path) -> None:
    write_yaml(tmp_path / "user.yaml", {"timing": {"typo_delay": 1}})
    with pytest.raises(ValueError):
        ConfigManager(tmp_path).get_config()


def test_unreadable_yaml_is_ignored(tmp_path: Path) -> None:
    (tmp_path / "user.yaml").write_text("timing: [unclosed", encoding="utf-8")
    assert ConfigManager(tmp_path).get_config() == SystemConfig()


def test_save_user_config(tmp_path: Path) -> None:
    manager = ConfigManager(tmp_path / "conf")
    assert manager.get_config().storage.backend == "file"

    manager.save_user_config({"storage": {"backend": "duckdb", "path": "data/kv.duckdb"}})
    manager.save_user_config({"timing": {"login_delay": 0.1}})

    config = manager.get_config()
    assert config.storage.backend == "duckdb"
    assert config.storage.path == "data/kv.duckdb"
    assert config.timing.login_delay == 0.1
