"""Tests for configuration management."""

from pathlib import Path

import pytest
import yaml

from people_connect.config import DEFAULT_GEMINI_MODEL, Config


@pytest.fixture
def home(tmp_path, monkeypatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    return home


def test_set_get_unset(home, tmp_path) -> None:
    config = Config(config_dir=tmp_path / "local")
    config.set("store.path", "/data/people.json")

    assert Config(config_dir=tmp_path / "local").get("store.path") == "/data/people.json"

    config.unset("store.path")
    assert config.get("store.path") is None


def test_local_falls_back_to_global(home, tmp_path) -> None:
    global_dir = home / ".people-connect"
    global_dir.mkdir()
    (global_dir / "config.yaml").write_text(yaml.safe_dump({"gemini.model": "gemini-global", "store.path": "g"}))

    config = Config(config_dir=tmp_path / "local")
    config.set("store.path", "local.json")

    assert config.get("gemini.model") == "gemini-global"
    assert config.get("store.path") == "local.json"
    assert config.list() == {"gemini.model": "gemini-global", "store.path": "local.json"}


def test_defaults(home, tmp_path) -> None:
    config = Config(config_dir=tmp_path / "local")

    assert config.store_path == home / ".people-connect" / "people.json"
    assert config.gemini_model == DEFAULT_GEMINI_MODEL
    assert config.gemini_api_key is None
    assert config.gemini_timeout == 30.0


def test_api_key_from_environment(home, tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    config = Config(config_dir=tmp_path / "local")
    assert config.gemini_api_key == "env-key"

    config.set("gemini.api_key", "file-key")
    assert config.gemini_api_key == "file-key"


def test_store_path_expands_user(home, tmp_path) -> None:
    config = Config(config_dir=tmp_path / "local")
    config.set("store.path", "~/contacts.json")
    assert config.store_path == home / "contacts.json"


def test_invalid_local_config(home, tmp_path) -> None:
    local = tmp_path / "local"
    local.mkdir()
    (local / "config.yaml").write_text("key: [unclosed")

    with pytest.raises(ValueError, match="Failed to load config"):
        Config(config_dir=local)


def test_global_scope_ignores_local(home, tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    Config(config_dir=tmp_path / ".people-connect").set("gemini.model", "local-model")

    global_config = Config(use_global=True)
    global_config.set("gemini.model", "global-model")

    assert global_config.get("gemini.model") == "global-model"
    assert global_config.list() == {"gemini.model": "global-model"}
    assert Config().get("gemini.model") == "local-model"
    assert Config().get("missing", "fallback") == "fallback"
