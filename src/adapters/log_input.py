"""Log input adapters.

Every source returns the same shape: trimmed, non-empty lines in their
original order.
"""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO


def normalize_lines(text: Optional[str]) -> List[str]:
    """Split pasted text into trimmed, non-empty lines."""

    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


class FileLogSource:
    """Reads a log from a file on disk."""

    def __init__(self, path: str) -> None:
        self._path = path

    def read_lines(self) -> List[str]:
        with open(self._path, "r", encoding="utf-8", errors="replace") as handle:
            return normalize_lines(handle.read())


class StreamLogSource:
    """Reads a log from a text stream (stdin by default)."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    def read_lines(self) -> List[str]:
        stream = self._stream or sys.stdin
        return normalize_lines(stream.read())


class EditorLogSource:
    """Opens the Textual paste editor and reads what the user submits."""

    def read_lines(self) -> List[str]:
        from frontend.log_editor import LogEditorApp

        return normalize_lines(LogEditorApp().run())

