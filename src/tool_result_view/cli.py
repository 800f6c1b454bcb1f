"""CLI entry point for tool-result-view.

Renders one tool result (plain text, or a raw JSON payload with --json)
the way it would appear inside a bounded terminal viewport.
"""

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.theme import Theme

from tool_result_view.core.layout import LayoutConfig
from tool_result_view.core.payload import payload_from_raw
from tool_result_view.core.result_cache import ResultDisplay
import tool_result_view.io.logging_setup
import tool_result_view.io.settings
import tool_result_view.tui.rendering

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tool-result-view",
        description="Preview a tool result rendered into a bounded terminal viewport",
    )
    parser.add_argument(
        "file",
        nargs="?",
        type=argparse.FileType("r", encoding="utf-8"),
        default=sys.stdin,
        help="Result file to render (default: stdin)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Treat input as a raw JSON payload (string, fileDiff/todos object, or token lines)",
    )
    parser.add_argument("--width", type=int, default=None, help="Terminal width (default: current terminal)")
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Rows available for the result (default: unbounded)",
    )
    parser.add_argument(
        "--alt-buffer",
        action="store_true",
        default=False,
        help="Host is in alternate-buffer mode (no line truncation here)",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        default=False,
        help="Render text results as plain linkified text instead of markdown",
    )
    parser.add_argument(
        "--no-markdown",
        action="store_true",
        default=False,
        help="Show markdown source verbatim",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log debug diagnostics to stderr",
    )
    parser.add_argument(
        "--save-layout",
        action="store_true",
        default=False,
        help="Persist the effective layout constants to the settings file",
    )
    return parser


def _read_payload(source, as_json: bool):
    raw = source.read()
    if as_json:
        return payload_from_raw(json.loads(raw))
    return payload_from_raw(raw)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # [LAW:single-enforcer] Runtime logger configuration is centralized in io.logging_setup.
    log_runtime = tool_result_view.io.logging_setup.configure(logging.DEBUG if args.verbose else None)
    logger.debug(
        "logging configured level=%s file=%s",
        log_runtime.level_name,
        log_runtime.file_path,
    )

    config: LayoutConfig = tool_result_view.io.settings.load_layout_config()
    if args.save_layout:
        tool_result_view.io.settings.save_layout_config(config)
        logger.info("layout saved: %s", tool_result_view.io.settings.get_config_path())

    try:
        payload = _read_payload(args.file, args.json)
    except (TypeError, ValueError) as exc:
        logger.error("unsupported result payload: %s", exc)
        return 1

    console = Console(width=args.width) if args.width else Console()
    tc = tool_result_view.tui.rendering.get_theme_colors()
    console.push_theme(Theme(tc.markdown_theme_dict))

    display = ResultDisplay(config)
    instruction = display.instruction(
        payload,
        console.width,
        args.height,
        render_output_as_markdown=not args.plain,
        render_markdown=not args.no_markdown,
        is_alternate_buffer=args.alt_buffer,
    )
    renderable = tool_result_view.tui.rendering.render_instruction(instruction)
    if renderable is not None:
        console.print(renderable)
    return 0
