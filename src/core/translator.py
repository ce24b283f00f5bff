"""Translation of generated bundle positions through sourcemaps.

Decoding the sourcemap format itself is delegated to the ``sourcemap``
library; this module finds the map next to an artifact, asks the library for
the mapping and normalizes the answer into an OriginalPosition.

Generated positions use the browser stack-trace convention: 1-based lines and
the column exactly as printed. Original lines are returned 1-based, columns
0-based.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import os
from typing import Optional

import sourcemap

from core.models import UNMAPPED, DecodeStatus, OriginalPosition, TargetLocation

LOGGER = logging.getLogger(__name__)

# Guard line some servers put before the JSON; the whole first line is dropped.
XSSI_PREFIX = ")]}"


@dataclass(frozen=True)
class Translation:
    """Original position plus the status explaining how it was obtained."""

    position: OriginalPosition
    status: DecodeStatus
    detail: Optional[str] = None


def resolve_map_path(artifact_path: str) -> Optional[str]:
    """Return the sourcemap path for an artifact, or None if there is none."""

    candidates = [artifact_path + ".map"]
    # Some bundlers emit app.map next to app.js.
    if artifact_path.endswith(".js"):
        candidates.append(artifact_path[: -len(".js")] + ".map")

    for candidate in candidates:
        if os.path.isfile(candidate):
            return candidate
    return None


def load_index(map_path: str):
    """Read and decode a sourcemap file into a lookup index.

    Raises OSError, ValueError (including the library's decode errors),
    KeyError, TypeError or AttributeError when the file cannot be read or is
    not a valid map.
    """

    with open(map_path, "r", encoding="utf-8") as handle:
        text = handle.read()
    if text.startswith(XSSI_PREFIX):
        text = text.partition("\n")[2]
    raw = json.loads(text)
    if not isinstance(raw, dict):
        raise ValueError("sourcemap root must be an object")
    if "sections" in raw:
        raise ValueError("indexed sourcemaps (sections) are not supported")
    if not isinstance(raw.get("mappings"), str):
        raise ValueError("sourcemap mappings must be a string")
    if not isinstance(raw.get("sources"), list):
        raise ValueError("sourcemap sources must be a list")
    if not isinstance(raw.get("names", []), list):
        raise ValueError("sourcemap names must be a list")
    # "names" is optional in the format but required by the decoder.
    raw.setdefault("names", [])
    return sourcemap.loads(json.dumps(raw))


def lookup(artifact_path: str, target: TargetLocation) -> Translation:
    """Map ``target`` through the sourcemap of ``artifact_path``.

    Never raises: every failure is reported through the returned status.
    """

    map_path = resolve_map_path(artifact_path)
    if map_path is None:
        LOGGER.debug("No sourcemap next to %s", artifact_path)
        return Translation(UNMAPPED, DecodeStatus.MAP_NOT_FOUND)

    try:
        index = load_index(map_path)
    except (OSError, ValueError, KeyError, TypeError, IndexError, AttributeError) as exc:
        LOGGER.warning("Malformed sourcemap %s: %s", map_path, exc)
        return Translation(
            UNMAPPED,
            DecodeStatus.MALFORMED_MAP,
            detail=f"{type(exc).__name__}: {exc}",
        )

    generated_line = target.line - 1
    if generated_line < 0 or target.column < 0:
        return Translation(UNMAPPED, DecodeStatus.NO_MAPPING)

    try:
        token = index.lookup(generated_line, target.column)
    except (IndexError, KeyError):
        LOGGER.debug("No mapping for %s:%s:%s", target.file, target.line, target.column)
        return Translation(UNMAPPED, DecodeStatus.NO_MAPPING)

    # Segments without a source carry no original position at all.
    if token.src is None:
        return Translation(UNMAPPED, DecodeStatus.NO_MAPPING)

    position = OriginalPosition(
        source=token.src,
        line=token.src_line + 1,
        column=token.src_col,
        name=token.name or None,
    )
    return Translation(position, DecodeStatus.DECODED)


def translate(artifact_path: str, target: TargetLocation) -> OriginalPosition:
    """Return the original position for ``target``; all-None when unmapped."""

    return lookup(artifact_path, target).position
