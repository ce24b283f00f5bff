"""Extraction of minified bundle locations from pasted log text."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, List

from core.models import TargetLocation

# Bundle file name followed by :line:column, e.g. "app.3f2a1c.js:142:18".
LOCATION_PATTERN = re.compile(r"([\w.-]+\.js):(\d+):(\d+)", re.ASCII)


def iter_locations(lines: Iterable[str]) -> Iterator[TargetLocation]:
    """Yield one TargetLocation per line that references a bundle position.

    Only the first match on each line is used; lines without a match are
    skipped.
    """

    for line in lines:
        match = LOCATION_PATTERN.search(line)
        if not match:
            continue
        yield TargetLocation(
            file=match.group(1),
            line=int(match.group(2)),
            column=int(match.group(3)),
        )


def extract_locations(lines: Iterable[str]) -> List[TargetLocation]:
    """Return all bundle locations found in the given lines, in input order."""

    return list(iter_locations(lines))
