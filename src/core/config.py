"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class SearchConfig:
    """Bounded tree-walk fallback used when conventional layouts miss."""

    enabled: bool = False
    root: Optional[str] = None
    max_depth: int = 4
    max_entries: int = 5000


@dataclass(frozen=True)
class FileLoggingConfig:
    """Rotating log file settings."""

    enabled: bool = False
    path: str = "logs/decode-sourcemap.log"
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 5


@dataclass(frozen=True)
class LoggingConfig:
    """Logging settings consumed by the CLI."""

    enabled: bool = False
    level: str = "INFO"
    console: bool = True
    file: FileLoggingConfig = field(default_factory=FileLoggingConfig)


@dataclass(frozen=True)
class AppEntry:
    """One build target that can be decoded (for example one app in a monorepo)."""

    name: str
    dist_path: str = "dist"


@dataclass(frozen=True)
class ToolConfig:
    """Everything read from sourcemap.config.json."""

    path: Optional[str] = None
    apps: List[AppEntry] = field(default_factory=list)
    search: SearchConfig = field(default_factory=SearchConfig)
    classifier_rules: List[dict] = field(default_factory=list)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
