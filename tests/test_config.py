"""Unit tests for configuration loading."""

import pytest

from mal_list.config import load_settings
from mal_list.constants import DEFAULT_BASE_URL
from mal_list.exceptions import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("MAL_USERNAME", "MAL_PASSWORD", "MAL_LIST_CONFIG"):
        monkeypatch.delenv(name, raising=False)


def test_missing_file_uses_defaults(tmp_path):
    settings = load_settings(tmp_path / "absent.yaml")
    assert settings.mal.username is None
    assert settings.mal.base_url == DEFAULT_BASE_URL
    assert settings.http.max_retries == 3
    assert settings.log_level == "INFO"


def test_load_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "mal:\n  username: alice\n  password: pw\n  base_url: https://mal.test\n"
        "http:\n  timeout: 10\n  max_retries: 0\nlog_level: debug\n"
    )
    settings = load_settings(path)
    assert settings.mal.username == "alice"
    assert settings.mal.password == "pw"
    assert settings.mal.base_url == "https://mal.test"
    assert settings.http.timeout == 10
    assert settings.http.max_retries == 0
    assert settings.log_level == "DEBUG"


def test_environment_overrides_credentials(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("mal:\n  username: alice\n")
    monkeypatch.setenv("MAL_USERNAME", "bob")
    monkeypatch.setenv("MAL_PASSWORD", "hunter2")
    settings = load_settings(path)
    assert settings.mal.username == "bob"
    assert settings.mal.password == "hunter2"


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "other.yaml"
    path.write_text("mal:\n  username: carol\n")
    monkeypatch.setenv("MAL_LIST_CONFIG", str(path))
    assert load_settings().mal.username == "carol"


def test_invalid_values_raise_config_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("log_level: LOUD\n")
    with pytest.raises(ConfigError):
        load_settings(path)


def test_malformed_yaml_raises_config_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("mal: [unclosed\n")
    with pytest.raises(ConfigError):
        load_settings(path)


def test_non_mapping_raises_config_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError):
        load_settings(path)
