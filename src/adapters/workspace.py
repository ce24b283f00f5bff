"""Selection of the build output directory to decode against.

Priority:
1. Explicit dist path (``--dist`` or DECODE_SOURCEMAP_DIST)
2. Apps listed in sourcemap.config.json
3. Discovery of ``apps/*`` under the nearest pnpm workspace root
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from typing import Callable, List, Optional, Sequence

from rich.prompt import Prompt

from core.config import AppEntry, ToolConfig

LOGGER = logging.getLogger(__name__)

WORKSPACE_MARKER = "pnpm-workspace.yaml"
APPS_DIR = "apps"
DEFAULT_DIST = "dist"

Chooser = Callable[[str, Sequence[str]], str]


class TargetSelectionError(Exception):
    """Raised when no dist directory can be selected."""


@dataclass(frozen=True)
class Target:
    """Selected app and its absolute dist directory."""

    app_name: str
    dist_dir: str


def prompt_choice(message: str, choices: Sequence[str]) -> str:
    """Ask the user to pick one of ``choices`` on the terminal."""

    return Prompt.ask(message, choices=list(choices), default=choices[0])


def find_workspace_root(start: str) -> str:
    """Walk up from ``start`` to the directory holding pnpm-workspace.yaml.

    Falls back to ``start`` when no marker is found.
    """

    current = os.path.abspath(start)
    while True:
        if os.path.isfile(os.path.join(current, WORKSPACE_MARKER)):
            return current
        parent = os.path.dirname(current)
        if parent == current:
            return os.path.abspath(start)
        current = parent


def list_app_dirs(apps_dir: str) -> List[str]:
    """Return the sorted names of directories directly under ``apps_dir``."""

    return sorted(
        name for name in os.listdir(apps_dir) if os.path.isdir(os.path.join(apps_dir, name))
    )


def select_from_config(
    apps: Sequence[AppEntry],
    app_name: Optional[str],
    cwd: str,
    chooser: Chooser = prompt_choice,
) -> Target:
    """Pick an app from the config.

    Rules:
    - If ``app_name`` is given, select the matching app
    - If only one app exists, auto-select it
    - Otherwise ask the user
    """

    if not apps:
        raise TargetSelectionError("No apps defined in config")

    selected: Optional[AppEntry] = None
    if app_name:
        selected = next((app for app in apps if app.name == app_name), None)
        if selected is None:
            available = ", ".join(app.name for app in apps)
            raise TargetSelectionError(f"App '{app_name}' not found. Available: {available}")
    elif len(apps) == 1:
        selected = apps[0]
    else:
        chosen = chooser("Select target app", [app.name for app in apps])
        selected = next(app for app in apps if app.name == chosen)

    return Target(
        app_name=selected.name,
        dist_dir=os.path.abspath(os.path.join(cwd, selected.dist_path)),
    )


def discover_target(cwd: str, app_name: Optional[str] = None, chooser: Chooser = prompt_choice) -> Target:
    """Select an app from ``apps/*`` of the enclosing pnpm workspace."""

    root = find_workspace_root(cwd)
    apps_dir = os.path.join(root, APPS_DIR)
    if not os.path.isdir(apps_dir):
        raise TargetSelectionError(f"apps directory not found at: {apps_dir}")

    apps = list_app_dirs(apps_dir)
    if not apps:
        raise TargetSelectionError(f"No app folders found under {apps_dir}")

    if app_name:
        if app_name not in apps:
            raise TargetSelectionError(
                f"App '{app_name}' not found. Available: {', '.join(apps)}"
            )
        selected = app_name
    elif len(apps) == 1:
        selected = apps[0]
    else:
        selected = chooser("Select target app", apps)

    LOGGER.info("Discovered app %s under %s", selected, apps_dir)
    return Target(app_name=selected, dist_dir=os.path.join(apps_dir, selected, DEFAULT_DIST))


def resolve_target(
    cwd: str,
    config: ToolConfig,
    dist: Optional[str] = None,
    app_name: Optional[str] = None,
    chooser: Chooser = prompt_choice,
) -> Target:
    """Resolve the dist directory following the selection priority."""

    if dist:
        return Target(app_name=app_name or "app", dist_dir=os.path.abspath(os.path.join(cwd, dist)))

    if config.apps:
        return select_from_config(config.apps, app_name, cwd, chooser)

    return discover_target(cwd, app_name, chooser)
