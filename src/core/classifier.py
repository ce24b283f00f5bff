"""Origin classification rules (core domain).

Priority:
1. Framework runtime (first matching rule wins)
2. Other third-party libraries (anything under node_modules/)
3. App source (everything else)

Rule order matters: Nuxt is checked before Vue and Next before React because
their packages pull the underlying runtime in, and react-dom must come before
react since a renderer can sit nested under the core package.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Iterable, List, Optional, Sequence

from core.models import ErrorKind

LIBRARY_MARKER = "node_modules/"

# Kinds that are not framework runtimes and cannot be targeted by a rule.
_RESERVED_KINDS = {ErrorKind.APP, ErrorKind.LIBRARY, ErrorKind.UNKNOWN}


@dataclass(frozen=True)
class RuntimeRule:
    """Compiled rule mapping a path pattern to a framework runtime."""

    kind: ErrorKind
    pattern: re.Pattern


def _rule(kind: ErrorKind, pattern: str) -> RuntimeRule:
    return RuntimeRule(kind=kind, pattern=re.compile(pattern))


DEFAULT_RUNTIME_RULES: List[RuntimeRule] = [
    _rule(ErrorKind.NUXT, r"node_modules/nuxt/"),
    _rule(ErrorKind.NUXT, r"node_modules/@nuxt/"),
    _rule(ErrorKind.VUE, r"node_modules/@vue/"),
    _rule(ErrorKind.VUE, r"node_modules/vue/"),
    _rule(ErrorKind.NEXT, r"node_modules/next/"),
    _rule(ErrorKind.REACT_DOM, r"node_modules/react-dom/"),
    _rule(ErrorKind.REACT, r"node_modules/react/"),
]


def build_rules(rules_config: Iterable[dict]) -> List[RuntimeRule]:
    """Compile user-configured runtime rules.

    Each entry needs a ``kind`` naming an existing runtime ErrorKind and a
    regex ``pattern``. Disabled entries are skipped. Raises ValueError for
    unknown kinds, non-runtime kinds or invalid patterns.
    """

    compiled: List[RuntimeRule] = []
    for entry in rules_config:
        if not entry.get("enabled", True):
            continue
        raw_kind = entry.get("kind")
        pattern = entry.get("pattern")
        if not raw_kind or not pattern:
            raise ValueError(f"Classifier rule needs 'kind' and 'pattern': {entry!r}")
        try:
            kind = ErrorKind(raw_kind)
        except ValueError:
            raise ValueError(f"Unknown error kind in classifier rule: {raw_kind}") from None
        if kind in _RESERVED_KINDS:
            raise ValueError(f"Classifier rules cannot target '{kind.value}'")
        try:
            compiled.append(RuntimeRule(kind=kind, pattern=re.compile(pattern)))
        except re.error as exc:
            raise ValueError(f"Invalid classifier pattern {pattern!r}: {exc}") from exc
    return compiled


def with_defaults(extra_rules: Sequence[RuntimeRule]) -> List[RuntimeRule]:
    """Return user rules followed by the built-in runtime rules."""

    return [*extra_rules, *DEFAULT_RUNTIME_RULES]


def classify(
    source_path: Optional[str],
    rules: Sequence[RuntimeRule] = DEFAULT_RUNTIME_RULES,
) -> ErrorKind:
    """Classify an original source path by origin."""

    if not source_path:
        return ErrorKind.UNKNOWN

    normalized = source_path.replace("\\", "/")

    for rule in rules:
        if rule.pattern.search(normalized):
            return rule.kind

    if LIBRARY_MARKER in normalized:
        return ErrorKind.LIBRARY

    return ErrorKind.APP
