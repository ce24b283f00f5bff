"""Core decoding pipeline.

This module is presentation-agnostic. For every target it runs, strictly in
input order:
1) Resolve the bundle file inside the dist directory
2) Translate the position through the bundle's sourcemap
3) Classify the original source path

A failure for one target never affects another: it degrades to an unmapped
result with kind "unknown" and a status describing what went wrong.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from core.classifier import DEFAULT_RUNTIME_RULES, RuntimeRule, classify
from core.config import SearchConfig
from core.extractor import extract_locations
from core.models import BatchReport, DecodedResult, DecodeStatus, TargetLocation
from core.resolver import resolve_artifact
from core.translator import lookup

LOGGER = logging.getLogger(__name__)


class SourcemapDecoder:
    """Decodes bundle locations found in logs against one dist directory."""

    def __init__(
        self,
        dist_dir: str,
        rules: Sequence[RuntimeRule] = DEFAULT_RUNTIME_RULES,
        search: Optional[SearchConfig] = None,
    ) -> None:
        self._dist_dir = dist_dir
        self._rules = list(rules)
        self._search = search

    def decode_one(self, target: TargetLocation) -> DecodedResult:
        """Decode a single target."""

        artifact_path = resolve_artifact(self._dist_dir, target.file, self._search)
        if artifact_path is None:
            LOGGER.info("Bundle not found for %s in %s", target.file, self._dist_dir)
            return DecodedResult.unresolved(target, DecodeStatus.ARTIFACT_NOT_FOUND)

        translation = lookup(artifact_path, target)
        if translation.status is not DecodeStatus.DECODED:
            return DecodedResult.unresolved(target, translation.status, translation.detail)

        original = translation.position
        return DecodedResult(
            file=target.file,
            line=target.line,
            column=target.column,
            original=original,
            kind=classify(original.source, self._rules),
            status=translation.status,
        )

    def decode_all(self, targets: Iterable[TargetLocation]) -> List[DecodedResult]:
        """Decode targets sequentially, returning one result per target."""

        results = [self.decode_one(target) for target in targets]
        decoded = sum(1 for result in results if result.status is DecodeStatus.DECODED)
        LOGGER.info("Decoded %s of %s locations", decoded, len(results))
        return results

    def decode_log(self, lines: Iterable[str]) -> BatchReport:
        """Extract bundle locations from log lines and decode them."""

        targets = extract_locations(lines)
        if not targets:
            return BatchReport()
        return BatchReport(targets=targets, results=self.decode_all(targets))


def decode_all(
    dist_dir: str,
    targets: Iterable[TargetLocation],
    rules: Sequence[RuntimeRule] = DEFAULT_RUNTIME_RULES,
    search: Optional[SearchConfig] = None,
) -> List[DecodedResult]:
    """Decode ``targets`` against ``dist_dir`` with a one-off decoder."""

    return SourcemapDecoder(dist_dir, rules=rules, search=search).decode_all(targets)
