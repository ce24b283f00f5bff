from __future__ import annotations

import os
from pathlib import Path

from core.config import SearchConfig
from core.resolver import artifact_candidates, resolve_artifact, search_artifact


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("//", encoding="utf-8")
    return path


def test_candidates_follow_lookup_order(tmp_path: Path) -> None:
    dist = str(tmp_path)

    assert artifact_candidates(dist, "chunks/app.js") == [
        os.path.join(dist, "chunks/app.js"),
        os.path.join(dist, "app.js"),
        os.path.join(dist, "assets", "app.js"),
    ]


def test_verbatim_path_wins(tmp_path: Path) -> None:
    verbatim = _touch(tmp_path / "chunks" / "app.js")
    _touch(tmp_path / "app.js")

    assert resolve_artifact(str(tmp_path), "chunks/app.js") == str(verbatim)


def test_basename_used_when_subpath_missing(tmp_path: Path) -> None:
    flat = _touch(tmp_path / "app.js")

    assert resolve_artifact(str(tmp_path), "chunks/app.js") == str(flat)


def test_assets_folder_is_last_candidate(tmp_path: Path) -> None:
    nested = _touch(tmp_path / "assets" / "app.js")

    assert resolve_artifact(str(tmp_path), "chunks/app.js") == str(nested)


def test_missing_artifact_returns_none(tmp_path: Path) -> None:
    assert resolve_artifact(str(tmp_path), "app.js") is None


def test_search_is_opt_in(tmp_path: Path) -> None:
    _touch(tmp_path / "static" / "js" / "app.js")

    assert resolve_artifact(str(tmp_path), "app.js") is None
    assert resolve_artifact(str(tmp_path), "app.js", SearchConfig(enabled=False)) is None


def test_search_finds_nested_bundle(tmp_path: Path) -> None:
    nested = _touch(tmp_path / "static" / "js" / "app.js")

    found = resolve_artifact(str(tmp_path), "app.js", SearchConfig(enabled=True))

    assert found == str(nested)


def test_search_respects_depth_guard(tmp_path: Path) -> None:
    _touch(tmp_path / "a" / "b" / "c" / "app.js")

    assert search_artifact(str(tmp_path), "app.js", max_depth=2) is None
    assert search_artifact(str(tmp_path), "app.js", max_depth=3) is not None


def test_search_respects_entry_guard(tmp_path: Path) -> None:
    for index in range(10):
        _touch(tmp_path / f"file{index}.txt")
    _touch(tmp_path / "zz" / "app.js")

    assert search_artifact(str(tmp_path), "app.js", max_entries=5) is None


def test_search_skips_node_modules_and_hidden_dirs(tmp_path: Path) -> None:
    _touch(tmp_path / "node_modules" / "pkg" / "app.js")
    _touch(tmp_path / ".cache" / "app.js")

    assert search_artifact(str(tmp_path), "app.js") is None


def test_search_uses_custom_root(tmp_path: Path) -> None:
    dist = tmp_path / "dist"
    dist.mkdir()
    elsewhere = _touch(tmp_path / "build" / "app.js")

    found = resolve_artifact(str(dist), "app.js", SearchConfig(enabled=True, root=str(tmp_path)))

    assert found == str(elsewhere)
