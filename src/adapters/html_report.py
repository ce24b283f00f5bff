"""Standalone HTML report of decoded results."""

from __future__ import annotations

import html
import os
from typing import Optional, Sequence

from adapters.result_formatting import bundle_location, source_location, status_message
from core.models import DecodedResult, DecodeStatus

_STYLE = """
    body { font-family: system-ui, -apple-system, BlinkMacSystemFont, sans-serif; padding: 24px; background: #020617; color: #e5e7eb; }
    h1 { font-size: 24px; margin-bottom: 16px; }
    table { width: 100%; border-collapse: collapse; font-size: 13px; }
    thead { background: #111827; }
    th, td { padding: 8px 10px; border-bottom: 1px solid #1f2937; vertical-align: top; text-align: left; }
    tr:nth-child(even) { background: #030712; }
    code { font-family: ui-monospace, Menlo, Monaco, Consolas, "Liberation Mono", "Courier New", monospace; }
    .kind { font-weight: 600; }
    .status-malformed_map { color: #f87171; }
    .status-decoded { color: #4ade80; }
"""


def _row(result: DecodedResult, index: int) -> str:
    status_class = html.escape(f"status-{result.status.value}")
    cells = [
        str(index),
        f"<code>{html.escape(bundle_location(result))}</code>",
        f"<code>{html.escape(source_location(result, shorten=False))}</code>",
        f'<span class="kind">{html.escape(result.kind.value)}</span>',
        f'<span class="{status_class}">{html.escape(status_message(result))}</span>',
    ]
    return "      <tr>" + "".join(f"<td>{cell}</td>" for cell in cells) + "</tr>"


def render_html_report(results: Sequence[DecodedResult], title: str = "Sourcemap Error Report") -> str:
    """Return the full HTML document for the given results."""

    rows = "\n".join(_row(result, index) for index, result in enumerate(results, start=1))
    malformed = sum(1 for result in results if result.status is DecodeStatus.MALFORMED_MAP)
    summary = f"{len(results)} location(s)"
    if malformed:
        summary += f", {malformed} with a corrupt sourcemap"
    safe_title = html.escape(title)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>{safe_title}</title>
  <style>{_STYLE}  </style>
</head>
<body>
  <h1>{safe_title}</h1>
  <p>{html.escape(summary)}</p>
  <table>
    <thead>
      <tr>
        <th>#</th>
        <th>Bundle Location</th>
        <th>Source Location</th>
        <th>Kind</th>
        <th>Status</th>
      </tr>
    </thead>
    <tbody>
{rows}
    </tbody>
  </table>
</body>
</html>
"""


def write_html_report(
    results: Sequence[DecodedResult],
    output_path: str,
    cwd: Optional[str] = None,
) -> str:
    """Write the HTML report and return its absolute path.

    Relative output paths are resolved against ``cwd`` (default: the process
    working directory). Parent directories are created as needed.
    """

    path = os.path.abspath(os.path.join(cwd or os.getcwd(), output_path))
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(render_html_report(results))
    return path


class HtmlReportPresenter:
    """Presenter that writes results to an HTML file."""

    def __init__(self, output_path: str, cwd: Optional[str] = None) -> None:
        self._output_path = output_path
        self._cwd = cwd
        self.written_path: Optional[str] = None

    def present(self, results: Sequence[DecodedResult]) -> None:
        self.written_path = write_html_report(results, self._output_path, self._cwd)
