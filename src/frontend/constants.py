"""Shared constants for the Textual UI."""

from __future__ import annotations

ACCENT = "#facc15"
