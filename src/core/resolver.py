"""Resolution of referenced bundle files inside a build output directory.

Logs rarely report the exact on-disk path of a bundle. The resolver tries the
layouts bundlers commonly emit, and can optionally fall back to a bounded
search of the directory tree.
"""

from __future__ import annotations

from collections import deque
import logging
import os
from typing import List, Optional

from core.config import SearchConfig

LOGGER = logging.getLogger(__name__)

ASSETS_DIR = "assets"
_SKIP_DIRS = {"node_modules"}


def artifact_candidates(dist_dir: str, referenced_file: str) -> List[str]:
    """Return candidate paths for a referenced file, in lookup order."""

    basename = os.path.basename(referenced_file)
    return [
        os.path.join(dist_dir, referenced_file),
        os.path.join(dist_dir, basename),
        os.path.join(dist_dir, ASSETS_DIR, basename),
    ]


def resolve_artifact(
    dist_dir: str,
    referenced_file: str,
    search: Optional[SearchConfig] = None,
) -> Optional[str]:
    """Return the first existing candidate for ``referenced_file`` or None."""

    for candidate in artifact_candidates(dist_dir, referenced_file):
        if os.path.isfile(candidate):
            return candidate

    if search is not None and search.enabled:
        return search_artifact(
            search.root or dist_dir,
            os.path.basename(referenced_file),
            max_depth=search.max_depth,
            max_entries=search.max_entries,
        )
    return None


def search_artifact(
    root: str,
    basename: str,
    max_depth: int = 4,
    max_entries: int = 5000,
) -> Optional[str]:
    """Breadth-first search of ``root`` for a file named ``basename``.

    Hidden directories and node_modules are skipped. The walk stops after
    ``max_depth`` levels below root or once ``max_entries`` directory entries
    have been inspected, whichever comes first.
    """

    if not os.path.isdir(root):
        return None

    queue = deque([(root, 0)])
    inspected = 0
    while queue:
        directory, depth = queue.popleft()
        try:
            entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
        except OSError:
            LOGGER.debug("Skipping unreadable directory %s", directory)
            continue

        for entry in entries:
            inspected += 1
            if inspected > max_entries:
                LOGGER.warning(
                    "Artifact search for %s stopped after %s entries", basename, max_entries
                )
                return None
            if entry.is_file() and entry.name == basename:
                return entry.path
            if (
                entry.is_dir(follow_symlinks=False)
                and depth < max_depth
                and not entry.name.startswith(".")
                and entry.name not in _SKIP_DIRS
            ):
                queue.append((entry.path, depth + 1))
    return None
