"""Configuration loading for decode-sourcemap.

All user-editable settings (apps, search fallback, classifier rules, logging)
live in a single JSON file, ``sourcemap.config.json``. Environment variables
(optionally from a .env file) can point at a different config file or pin the
dist directory.
"""

from __future__ import annotations

import json
import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from core.config import AppEntry, FileLoggingConfig, LoggingConfig, SearchConfig, ToolConfig

DEFAULT_CONFIG_NAME = "sourcemap.config.json"
CONFIG_ENV = "DECODE_SOURCEMAP_CONFIG"
DIST_ENV = "DECODE_SOURCEMAP_DIST"


class ConfigError(Exception):
    """Raised when a config file exists but cannot be used."""


def load_environment() -> None:
    """Load a .env file from the working directory, if present."""

    load_dotenv(find_dotenv(usecwd=True))


def env_dist() -> Optional[str]:
    """Return the dist directory pinned through the environment, if any."""

    return os.getenv(DIST_ENV) or None


def _config_path(cwd: str, explicit_path: Optional[str]) -> Optional[str]:
    if explicit_path:
        path = os.path.abspath(os.path.join(cwd, explicit_path))
        if not os.path.isfile(path):
            raise ConfigError(f"Config file not found: {path}")
        return path

    from_env = os.getenv(CONFIG_ENV)
    if from_env:
        path = os.path.abspath(os.path.join(cwd, from_env))
        if not os.path.isfile(path):
            raise ConfigError(f"Config file from {CONFIG_ENV} not found: {path}")
        return path

    default = os.path.join(cwd, DEFAULT_CONFIG_NAME)
    if os.path.isfile(default):
        return default
    return None


def _load_json_config(path: str) -> dict:
    """Load the config file and make sure its root is an object."""

    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc.msg} (line {exc.lineno})") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc.strerror or exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be an object: {path}")
    return data


def _normalize_apps(raw_apps: object) -> list[AppEntry]:
    """Normalize app entries, skipping ones without a name."""

    if not isinstance(raw_apps, list):
        return []
    apps: list[AppEntry] = []
    for entry in raw_apps:
        if not isinstance(entry, dict):
            continue
        name = entry.get("name")
        if not name:
            continue
        # distPath defaults to "dist" like most bundler setups.
        apps.append(AppEntry(name=str(name), dist_path=str(entry.get("distPath") or "dist")))
    return apps


def _normalize_search(raw: dict) -> SearchConfig:
    return SearchConfig(
        enabled=bool(raw.get("enabled", False)),
        root=raw.get("root"),
        max_depth=int(raw.get("max_depth", 4)),
        max_entries=int(raw.get("max_entries", 5000)),
    )


def _normalize_logging(raw: dict) -> LoggingConfig:
    file_cfg = raw.get("file", {}) or {}
    return LoggingConfig(
        enabled=bool(raw.get("enabled", False)),
        level=str(raw.get("level", "INFO")).upper(),
        console=bool(raw.get("console", True)),
        file=FileLoggingConfig(
            enabled=bool(file_cfg.get("enabled", False)),
            path=str(file_cfg.get("path", "logs/decode-sourcemap.log")),
            max_bytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
            backup_count=int(file_cfg.get("backup_count", 5)),
        ),
    )


def parse_config(data: dict, path: Optional[str] = None) -> ToolConfig:
    """Build a ToolConfig from the raw JSON object."""

    try:
        classifier = data.get("classifier", {}) or {}
        rules = classifier.get("rules", []) or []
        if not isinstance(rules, list):
            raise ConfigError("classifier.rules must be a list")
        return ToolConfig(
            path=path,
            apps=_normalize_apps(data.get("apps")),
            search=_normalize_search(data.get("search", {}) or {}),
            classifier_rules=rules,
            logging=_normalize_logging(data.get("logging", {}) or {}),
        )
    except (AttributeError, TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid config {path or ''}: {exc}".strip()) from exc


def load_config(cwd: str, explicit_path: Optional[str] = None) -> ToolConfig:
    """Load the tool config.

    Priority:
    1. Explicit path (``--config``), resolved against cwd
    2. Path from the DECODE_SOURCEMAP_CONFIG environment variable
    3. ``sourcemap.config.json`` in cwd

    A missing default file yields an empty ToolConfig; a missing explicit file
    or an unreadable/invalid one raises ConfigError.
    """

    path = _config_path(cwd, explicit_path)
    if path is None:
        return ToolConfig()
    return parse_config(_load_json_config(path), path=path)
