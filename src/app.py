"""Application entry point for decode-sourcemap.

Flow:
1. Parse CLI options and load config
2. Resolve the target dist directory
3. Collect pasted logs
4. Extract minified locations and decode them
5. Print results and optionally write an HTML report
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from art import tprint
from rich.console import Console

import settings
from adapters.console_printer import ConsolePrinter, PrinterOptions
from adapters.html_report import HtmlReportPresenter
from adapters.log_input import EditorLogSource, FileLogSource, StreamLogSource
from adapters.workspace import TargetSelectionError, resolve_target
from core.classifier import build_rules, with_defaults
from core.config import LoggingConfig, SearchConfig, ToolConfig
from core.decoder import SourcemapDecoder
from core.ports import LogSourcePort, PresenterPort

NAME = "SOURCEMAP"
FONT = "tarty-1"

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOTHING_TO_DO = 3

LOGGER = logging.getLogger(__name__)


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _configure_logging(config: LoggingConfig, verbose: bool, base_dir: str) -> None:
    if not config.enabled and not verbose:
        return

    level_name = "DEBUG" if verbose else config.level
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.console or verbose:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if config.enabled and config.file.enabled:
        path = config.file.path
        if not os.path.isabs(path):
            path = os.path.join(base_dir, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        file_handler = RotatingFileHandler(
            path,
            maxBytes=config.file.max_bytes,
            backupCount=config.file.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    root = logging.getLogger()
    root.setLevel(level)
    for handler in handlers:
        root.addHandler(handler)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="decode-sourcemap",
        description="Decode minified stack-trace locations back to original source.",
    )
    parser.add_argument("--dist", help="Build output directory (highest priority)")
    parser.add_argument("--config", help=f"Path to {settings.DEFAULT_CONFIG_NAME}")
    parser.add_argument("--app", help="App name to select from the config or workspace")
    parser.add_argument("--html", metavar="PATH", help="Also write an HTML report to PATH")

    log_group = parser.add_mutually_exclusive_group()
    log_group.add_argument("--log-file", metavar="PATH", help="Read logs from a file")
    log_group.add_argument("--stdin", action="store_true", help="Read logs from stdin")

    parser.add_argument(
        "--search",
        action="store_true",
        help="Search the dist tree for bundles the usual layouts miss",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--raw", action="store_true", help="Print one tab-separated line per result")
    parser.add_argument("--no-banner", action="store_true", help="Skip the startup banner")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _log_source(args: argparse.Namespace) -> LogSourcePort:
    if args.log_file:
        return FileLogSource(args.log_file)
    if args.stdin or not sys.stdin.isatty():
        return StreamLogSource()
    return EditorLogSource()


def _search_config(config: ToolConfig, enabled: bool) -> SearchConfig:
    search = config.search
    if enabled and not search.enabled:
        return SearchConfig(
            enabled=True,
            root=search.root,
            max_depth=search.max_depth,
            max_entries=search.max_entries,
        )
    return search


def _run(args: argparse.Namespace, cwd: str, console: Console) -> int:
    config = settings.load_config(cwd, args.config)
    _configure_logging(config.logging, args.verbose, cwd)
    rules = with_defaults(build_rules(config.classifier_rules))

    target = resolve_target(cwd, config, dist=args.dist or settings.env_dist(), app_name=args.app)
    if not args.raw:
        console.print(f"App:  {target.app_name}", markup=False, soft_wrap=True)
        console.print(f"Dist: {target.dist_dir}", markup=False, soft_wrap=True)
        console.print()
    if not os.path.isdir(target.dist_dir):
        LOGGER.warning("Dist directory does not exist: %s", target.dist_dir)

    lines = _log_source(args).read_lines()
    if not lines:
        console.print("No logs provided. Nothing to do.")
        return EXIT_NOTHING_TO_DO

    decoder = SourcemapDecoder(
        target.dist_dir,
        rules=rules,
        search=_search_config(config, args.search),
    )
    report = decoder.decode_log(lines)
    if report.nothing_to_do:
        console.print("No valid error locations found in logs. Nothing to do.")
        return EXIT_NOTHING_TO_DO

    presenters: List[PresenterPort] = [
        ConsolePrinter(PrinterOptions(color=not args.no_color, raw=args.raw), console=console)
    ]
    html_presenter: Optional[HtmlReportPresenter] = None
    if args.html:
        html_presenter = HtmlReportPresenter(args.html, cwd=cwd)
        presenters.append(html_presenter)

    for presenter in presenters:
        presenter.present(report.results)

    if html_presenter is not None and html_presenter.written_path:
        console.print(f"\nHTML report generated at: {html_presenter.written_path}", markup=False, soft_wrap=True)
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    settings.load_environment()

    console = Console(no_color=args.no_color, highlight=False)
    error_console = Console(stderr=True, no_color=args.no_color, highlight=False)
    if not args.no_banner and not args.raw:
        _print_banner()

    try:
        return _run(args, os.getcwd(), console)
    except (settings.ConfigError, TargetSelectionError, ValueError, OSError) as exc:
        error_console.print(f"Error: {exc}", markup=False, soft_wrap=True)
        return EXIT_ERROR
    except Exception:
        LOGGER.exception("Unexpected error in decode-sourcemap")
        error_console.print("Unexpected error, see log output above.", markup=False)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
