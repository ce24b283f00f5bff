"""Ports (interfaces) used around the core pipeline.

Ports define the minimal contracts for log input and result presentation so
that the core can be reused with different frontends.
"""

from __future__ import annotations

from typing import List, Protocol, Sequence

from core.models import DecodedResult


class LogSourcePort(Protocol):
    """Supplies the raw lines of a pasted log."""

    def read_lines(self) -> List[str]:
        ...


class PresenterPort(Protocol):
    """Presents decoded results without altering them."""

    def present(self, results: Sequence[DecodedResult]) -> None:
        ...
