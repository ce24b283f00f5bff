from __future__ import annotations

import pytest

from core.classifier import DEFAULT_RUNTIME_RULES, build_rules, classify, with_defaults
from core.models import ErrorKind


def test_missing_source_is_unknown() -> None:
    assert classify(None) is ErrorKind.UNKNOWN
    assert classify("") is ErrorKind.UNKNOWN


@pytest.mark.parametrize(
    "path, expected",
    [
        ("webpack:///node_modules/nuxt/dist/app/entry.js", ErrorKind.NUXT),
        ("../node_modules/@nuxt/vite-builder/dist/client.mjs", ErrorKind.NUXT),
        ("../node_modules/@vue/runtime-core/dist/runtime-core.esm-bundler.js", ErrorKind.VUE),
        ("../node_modules/vue/dist/vue.runtime.esm-bundler.js", ErrorKind.VUE),
        ("../node_modules/next/dist/client/index.js", ErrorKind.NEXT),
        ("../node_modules/react-dom/cjs/react-dom.production.min.js", ErrorKind.REACT_DOM),
        ("../node_modules/react/cjs/react.production.min.js", ErrorKind.REACT),
        ("../node_modules/lodash/lodash.js", ErrorKind.LIBRARY),
        ("../../src/components/Header.vue", ErrorKind.APP),
        ("webpack://my-app/./pages/index.tsx", ErrorKind.APP),
    ],
)
def test_default_classification(path: str, expected: ErrorKind) -> None:
    assert classify(path) is expected


def test_renderer_wins_over_core_package() -> None:
    path = "node_modules/react/node_modules/react-dom/cjs/react-dom.development.js"

    assert classify(path) is ErrorKind.REACT_DOM


def test_meta_framework_wins_over_underlying_runtime() -> None:
    path = "node_modules/nuxt/node_modules/vue/dist/vue.cjs.js"

    assert classify(path) is ErrorKind.NUXT


def test_windows_separators_are_normalized() -> None:
    assert classify("C:\\work\\node_modules\\vue\\index.js") is ErrorKind.VUE
    assert classify("C:\\work\\src\\main.ts") is ErrorKind.APP


def test_react_named_app_folder_is_not_a_runtime() -> None:
    assert classify("src/react/hooks.ts") is ErrorKind.APP


def test_custom_rules_run_before_defaults() -> None:
    rules = with_defaults(build_rules([{"kind": "vue", "pattern": r"node_modules/pinia/"}]))

    assert classify("node_modules/pinia/dist/pinia.mjs", rules) is ErrorKind.VUE
    assert classify("node_modules/pinia/dist/pinia.mjs") is ErrorKind.LIBRARY
    assert rules[len(rules) - len(DEFAULT_RUNTIME_RULES):] == DEFAULT_RUNTIME_RULES


def test_disabled_rules_are_skipped() -> None:
    assert build_rules([{"kind": "vue", "pattern": "x", "enabled": False}]) == []


@pytest.mark.parametrize(
    "entry",
    [
        {"kind": "svelte", "pattern": "node_modules/svelte/"},
        {"kind": "library", "pattern": "vendor/"},
        {"kind": "vue"},
        {"kind": "vue", "pattern": "("},
    ],
)
def test_invalid_rules_are_rejected(entry: dict) -> None:
    with pytest.raises(ValueError):
        build_rules([entry])
