"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling between decoding and presentation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ErrorKind(str, Enum):
    """Origin category of a decoded source position."""

    APP = "app"
    NUXT = "nuxt"
    VUE = "vue"
    NEXT = "next"
    REACT_DOM = "react-dom"
    REACT = "react"
    LIBRARY = "library"
    UNKNOWN = "unknown"


class DecodeStatus(str, Enum):
    """Outcome of decoding a single target."""

    DECODED = "decoded"
    ARTIFACT_NOT_FOUND = "artifact_not_found"
    MAP_NOT_FOUND = "map_not_found"
    NO_MAPPING = "no_mapping"
    MALFORMED_MAP = "malformed_map"


@dataclass(frozen=True)
class TargetLocation:
    """A position inside a generated artifact, as referenced by a log line."""

    file: str
    line: int
    column: int


@dataclass(frozen=True)
class OriginalPosition:
    """A position in original source. All fields are None when unmapped."""

    source: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    name: Optional[str] = None


UNMAPPED = OriginalPosition()


@dataclass(frozen=True)
class DecodedResult:
    """One decoded target: generated position, original position and origin."""

    file: str
    line: int
    column: int
    original: OriginalPosition
    kind: ErrorKind
    status: DecodeStatus = DecodeStatus.DECODED
    detail: Optional[str] = None

    @classmethod
    def unresolved(
        cls,
        target: TargetLocation,
        status: DecodeStatus,
        detail: Optional[str] = None,
    ) -> "DecodedResult":
        """Fallback result for a target that could not be mapped."""

        return cls(
            file=target.file,
            line=target.line,
            column=target.column,
            original=UNMAPPED,
            kind=ErrorKind.UNKNOWN,
            status=status,
            detail=detail,
        )


@dataclass(frozen=True)
class BatchReport:
    """Targets extracted from a log together with their decoded results."""

    targets: List[TargetLocation] = field(default_factory=list)
    results: List[DecodedResult] = field(default_factory=list)

    @property
    def nothing_to_do(self) -> bool:
        return not self.targets
