"""Rich console presenter for decoded results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from adapters.result_formatting import (
    NOT_AVAILABLE,
    bundle_location,
    editor_link,
    kind_label,
    shorten_path,
    source_location,
    status_message,
)
from core.models import DecodedResult, DecodeStatus, ErrorKind

KIND_STYLES: dict[ErrorKind, str] = {
    ErrorKind.APP: "black on green",
    ErrorKind.NUXT: "black on bright_green",
    ErrorKind.VUE: "black on yellow",
    ErrorKind.NEXT: "black on white",
    ErrorKind.REACT_DOM: "black on bright_magenta",
    ErrorKind.REACT: "black on magenta",
    ErrorKind.LIBRARY: "black on blue",
    ErrorKind.UNKNOWN: "black on bright_black",
}


@dataclass(frozen=True)
class PrinterOptions:
    """Display switches for the console printer.

    ``color`` toggles ANSI styling, ``raw`` prints one tab-separated line per
    result instead of panels.
    """

    color: bool = True
    raw: bool = False


class ConsolePrinter:
    """Presenter that writes decoded results to a rich Console."""

    def __init__(self, options: PrinterOptions, console: Optional[Console] = None) -> None:
        self._options = options
        self._console = console or Console(
            no_color=not options.color,
            highlight=False,
        )

    def present(self, results: Sequence[DecodedResult]) -> None:
        for index, result in enumerate(results, start=1):
            if self._options.raw:
                self._console.file.write(format_raw_line(result, index) + "\n")
            else:
                self._console.print(self._panel(result, index))

    def _badge(self, kind: ErrorKind) -> Text:
        style = KIND_STYLES[kind] if self._options.color else ""
        return Text(f" {kind_label(kind)} ", style=style)

    def _panel(self, result: DecodedResult, index: int) -> Panel:
        original = result.original
        title = Text.assemble(
            self._badge(result.kind),
            " ",
            (f"#{index} {result.file} ({result.line}:{result.column})", "bold"),
        )

        body = Text()
        body.append("Source File:\n")
        body.append(f"  {shorten_path(original.source)}\n", style="green")
        body.append("\nLocation:\n")
        line = NOT_AVAILABLE if original.line is None else str(original.line)
        column = NOT_AVAILABLE if original.column is None else str(original.column)
        body.append("  line      ")
        body.append(f"{line}\n", style="cyan")
        body.append("  column    ")
        body.append(f"{column}\n", style="cyan")
        if original.name:
            body.append("  name      ")
            body.append(f"{original.name}\n", style="cyan")

        parts = [body]
        link = editor_link(result)
        if link:
            parts.append(Text.assemble("\nOpen in editor:\n", (f"  {link}", "underline")))
        if result.status is not DecodeStatus.DECODED:
            style = "bold red" if result.status is DecodeStatus.MALFORMED_MAP else "dim"
            parts.append(Text(f"\nStatus: {status_message(result)}", style=style))

        return Panel(Group(*parts), title=title, title_align="left", border_style="yellow")


def format_raw_line(result: DecodedResult, index: int) -> str:
    """Return the tab-separated raw-mode line for a result."""

    return "\t".join(
        [
            str(index),
            result.kind.value,
            bundle_location(result),
            source_location(result, shorten=False),
            result.status.value,
        ]
    )
