"""Shared result formatting helpers.

Keeping formatting here prevents drift between the console printer and the
HTML report. Nothing in here changes positions or classification, it only
decides how they are shown.
"""

from __future__ import annotations

import re
from typing import Optional

from core.models import DecodedResult, DecodeStatus, ErrorKind

NOT_AVAILABLE = "N/A"

_LEADING_PARENTS = re.compile(r"^(\.\./)+")

KIND_LABELS: dict[ErrorKind, str] = {
    ErrorKind.APP: "APP",
    ErrorKind.NUXT: "NUXT",
    ErrorKind.VUE: "VUE",
    ErrorKind.NEXT: "NEXT",
    ErrorKind.REACT_DOM: "REACT-DOM",
    ErrorKind.REACT: "REACT",
    ErrorKind.LIBRARY: "LIB",
    ErrorKind.UNKNOWN: "???",
}

STATUS_MESSAGES: dict[DecodeStatus, str] = {
    DecodeStatus.DECODED: "decoded",
    DecodeStatus.ARTIFACT_NOT_FOUND: "bundle file not found",
    DecodeStatus.MAP_NOT_FOUND: "no sourcemap shipped",
    DecodeStatus.NO_MAPPING: "no mapping for this position",
    DecodeStatus.MALFORMED_MAP: "sourcemap is corrupt",
}


def shorten_path(path: Optional[str]) -> str:
    """Return a compact display form of an original source path."""

    if not path:
        return NOT_AVAILABLE

    node_idx = path.find("node_modules")
    if node_idx != -1:
        return path[node_idx:]

    src_idx = path.find("src/")
    if src_idx != -1:
        return path[src_idx:]

    return _LEADING_PARENTS.sub("", path)


def kind_label(kind: ErrorKind) -> str:
    return KIND_LABELS.get(kind, KIND_LABELS[ErrorKind.UNKNOWN])


def _value(value: Optional[int]) -> str:
    return NOT_AVAILABLE if value is None else str(value)


def bundle_location(result: DecodedResult) -> str:
    """Return ``file:line:column`` of the generated position."""

    return f"{result.file}:{result.line}:{result.column}"


def source_location(result: DecodedResult, shorten: bool = True) -> str:
    """Return ``source:line:column`` of the original position, N/A when unknown."""

    original = result.original
    source = shorten_path(original.source) if shorten else (original.source or NOT_AVAILABLE)
    return f"{source}:{_value(original.line)}:{_value(original.column)}"


def editor_link(result: DecodedResult) -> Optional[str]:
    """Return a clickable ``path:line:column`` when the position is fully known."""

    original = result.original
    if original.source is None or original.line is None or original.column is None:
        return None
    return f"{shorten_path(original.source)}:{original.line}:{original.column}"


def status_message(result: DecodedResult) -> str:
    """Return a human-readable description of the decode status."""

    message = STATUS_MESSAGES[result.status]
    if result.detail:
        return f"{message} ({result.detail})"
    return message
