from __future__ import annotations

import json
from pathlib import Path

import pytest

import settings
from core.config import AppEntry, ToolConfig


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(settings.CONFIG_ENV, raising=False)
    monkeypatch.delenv(settings.DIST_ENV, raising=False)


def _write_config(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_missing_default_config_is_empty(tmp_path: Path) -> None:
    assert settings.load_config(str(tmp_path)) == ToolConfig()


def test_missing_explicit_config_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(settings.ConfigError):
        settings.load_config(str(tmp_path), "nope.json")


def test_invalid_json_is_an_error(tmp_path: Path) -> None:
    (tmp_path / settings.DEFAULT_CONFIG_NAME).write_text("{apps: [", encoding="utf-8")

    with pytest.raises(settings.ConfigError):
        settings.load_config(str(tmp_path))


def test_non_object_root_is_an_error(tmp_path: Path) -> None:
    _write_config(tmp_path / settings.DEFAULT_CONFIG_NAME, ["web"])

    with pytest.raises(settings.ConfigError):
        settings.load_config(str(tmp_path))


def test_default_config_is_parsed(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path / settings.DEFAULT_CONFIG_NAME,
        {
            "apps": [{"name": "web", "distPath": "apps/web/dist"}, {"name": "admin"}, {"distPath": "x"}],
            "search": {"enabled": True, "max_depth": 2},
            "classifier": {"rules": [{"kind": "vue", "pattern": "pinia"}]},
            "logging": {"enabled": True, "level": "debug", "file": {"enabled": True}},
        },
    )

    config = settings.load_config(str(tmp_path))

    assert config.path == str(path)
    assert config.apps == [AppEntry("web", "apps/web/dist"), AppEntry("admin", "dist")]
    assert config.search.enabled is True
    assert config.search.max_depth == 2
    assert config.search.max_entries == 5000
    assert config.classifier_rules == [{"kind": "vue", "pattern": "pinia"}]
    assert config.logging.level == "DEBUG"
    assert config.logging.file.enabled is True
    assert config.logging.file.path == "logs/decode-sourcemap.log"


def test_explicit_path_beats_default(tmp_path: Path) -> None:
    _write_config(tmp_path / settings.DEFAULT_CONFIG_NAME, {"apps": [{"name": "default"}]})
    _write_config(tmp_path / "other.json", {"apps": [{"name": "other"}]})

    config = settings.load_config(str(tmp_path), "other.json")

    assert [app.name for app in config.apps] == ["other"]


def test_environment_points_at_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_config(tmp_path / "env.json", {"apps": [{"name": "from-env"}]})
    monkeypatch.setenv(settings.CONFIG_ENV, "env.json")

    config = settings.load_config(str(tmp_path))

    assert [app.name for app in config.apps] == ["from-env"]


def test_wrong_section_types_are_errors(tmp_path: Path) -> None:
    _write_config(tmp_path / settings.DEFAULT_CONFIG_NAME, {"search": {"max_depth": "deep"}})

    with pytest.raises(settings.ConfigError):
        settings.load_config(str(tmp_path))


def test_env_dist(monkeypatch: pytest.MonkeyPatch) -> None:
    assert settings.env_dist() is None
    monkeypatch.setenv(settings.DIST_ENV, "/srv/dist")
    assert settings.env_dist() == "/srv/dist"
