from __future__ import annotations

import asyncio
import io
from pathlib import Path

from textual.widgets import TextArea

from adapters.log_input import FileLogSource, StreamLogSource, normalize_lines
from frontend.log_editor import LogEditorApp


def test_normalize_lines_trims_and_drops_blanks() -> None:
    text = "  TypeError: boom  \n\n\tat a (app.js:1:2)\r\n   \n"

    assert normalize_lines(text) == ["TypeError: boom", "at a (app.js:1:2)"]
    assert normalize_lines(None) == []
    assert normalize_lines("") == []


def test_file_source(tmp_path: Path) -> None:
    path = tmp_path / "log.txt"
    path.write_text("first\n\n second \n", encoding="utf-8")

    assert FileLogSource(str(path)).read_lines() == ["first", "second"]


def test_stream_source() -> None:
    assert StreamLogSource(io.StringIO("a\n  b\n")).read_lines() == ["a", "b"]


def test_editor_returns_pasted_text() -> None:
    async def _run() -> str | None:
        app = LogEditorApp()
        async with app.run_test() as pilot:
            app.query_one("#log-input", TextArea).load_text("at render (index.abc.js:5:10)")
            await pilot.pause()
            app.action_submit()
        return app.return_value

    assert asyncio.run(_run()) == "at render (index.abc.js:5:10)"


def test_editor_cancel_returns_empty_text() -> None:
    async def _run() -> str | None:
        app = LogEditorApp()
        async with app.run_test() as pilot:
            await pilot.pause()
            app.action_cancel()
        return app.return_value

    assert asyncio.run(_run()) == ""
