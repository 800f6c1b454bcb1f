"""Rich rendering for RenderInstruction values.

Converts the decisions made by core/dispatch.py into Rich renderables:

- RenderMarkdown     -> rich Markdown (or raw Text when markdown is off)
- RenderPlainText    -> wrapped Text with linkified URL segments
- RenderDiff         -> colored diff lines, trailing rows when height-bounded
- RenderStyledLines  -> one cropped row per styled line, URLs linkified
- RenderNothing      -> None

# [LAW:single-enforcer] Truncation/windowing decisions live in core/; renderers
# here never re-check budgets except the diff renderer, which owns its own height.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from rich.color import Color as RichColor, ColorParseError
from rich.console import ConsoleRenderable, Group
from rich.constrain import Constrain
from rich.markdown import Markdown
from rich.style import Style
from rich.text import Text
from textual.color import Color
from textual.theme import BUILTIN_THEMES

from tool_result_view.core.dispatch import (
    RenderDiff,
    RenderInstruction,
    RenderMarkdown,
    RenderNothing,
    RenderPlainText,
    RenderStyledLines,
)
from tool_result_view.core.linkify import segment
from tool_result_view.core.styled import StyledLine, StyledRun

DEFAULT_THEME_NAME = "textual-dark"


# ─── Theme Colors ────────────────────────────────────────────────────────────
# [LAW:one-source-of-truth] All theme-derived colors live in ThemeColors.
# set_theme() is the sole entry point for rebuilding.


@dataclass(frozen=True)
class ThemeColors:
    """All colors the renderers need, derived from a Textual Theme."""

    foreground: str  # primary text
    link: str  # URL segments
    secondary: str
    success: str  # diff additions
    error: str  # diff removals

    # Markdown theme dict (for Rich console.push_theme)
    markdown_theme_dict: dict


def _normalize_color(color: str | None, fallback: str) -> str:
    """Normalize a theme color to #RRGGBB hex.

    Textual's ANSI themes use names like "ansi_green" that Rich can't parse
    in style strings. "ansi_default" is the unknowable terminal default and
    maps to the fallback.
    """
    if color is None or color == "ansi_default":
        return fallback
    if color.startswith("#") and len(color) == 7:
        return color
    try:
        r, g, b = Color.parse(color).rgb
    except Exception:
        return fallback
    return "#{:02X}{:02X}{:02X}".format(r, g, b)


def build_theme_colors(textual_theme) -> ThemeColors:
    """Map a Textual Theme to ThemeColors."""
    dark = textual_theme.dark

    primary = _normalize_color(textual_theme.primary, "#0178D4")
    secondary = _normalize_color(textual_theme.secondary, primary)
    error = _normalize_color(textual_theme.error, "#ba3c5b")
    success = _normalize_color(textual_theme.success, "#4EBF71")
    foreground = _normalize_color(textual_theme.foreground, "#e0e0e0" if dark else "#1e1e1e")
    surface = _normalize_color(textual_theme.surface, "#2b2b2b" if dark else "#d0d0d0")

    markdown_theme_dict = {
        "markdown.text": foreground,
        "markdown.paragraph": foreground,
        "markdown.strong": f"bold {foreground}",
        "markdown.em": f"italic {foreground}",
        "markdown.code": f"{foreground} on {surface}",
        "markdown.h1": f"bold underline {primary}",
        "markdown.h2": f"bold {primary}",
        "markdown.h3": f"bold {secondary}",
        "markdown.link": f"underline {primary}",
        "markdown.link_url": f"dim underline {primary}",
        "markdown.block_quote": f"italic {foreground}",
    }

    return ThemeColors(
        foreground=foreground,
        link=primary,
        secondary=secondary,
        success=success,
        error=error,
        markdown_theme_dict=markdown_theme_dict,
    )


# Module-level theme state — built lazily from DEFAULT_THEME_NAME.
_theme_colors: ThemeColors | None = None


def get_theme_colors() -> ThemeColors:
    """Get the current ThemeColors, building the default theme on first use."""
    if _theme_colors is None:
        set_theme(BUILTIN_THEMES[DEFAULT_THEME_NAME])
    assert _theme_colors is not None
    return _theme_colors


def set_theme(textual_theme) -> None:
    """Rebuild theme-derived module state from a Textual Theme."""
    global _theme_colors
    _theme_colors = build_theme_colors(textual_theme)


# ─── Collaborator renderers ──────────────────────────────────────────────────


def render_markdown_text(text: str, width: int, render_markdown: bool = True) -> ConsoleRenderable:
    """Markdown result; with render_markdown off the source is shown verbatim."""
    body: ConsoleRenderable = Markdown(text) if render_markdown else Text(text)
    return Constrain(body, width)


def linkify_text(text: str, color: str | None = None) -> Text:
    """Text with URL segments underlined, link-colored and hyperlinked."""
    tc = get_theme_colors()
    plain_style = Style(color=color) if color else ""
    t = Text()
    for seg in segment(text):
        if seg.is_url:
            t.append(seg.content, style=Style(color=tc.link, underline=True, link=seg.content))
        else:
            t.append(seg.content, style=plain_style)
    return t


def render_linkified_text(text: str, width: int, color: str | None = None) -> ConsoleRenderable:
    return Constrain(linkify_text(text, color), width)


def diff_lines(content: str) -> list[tuple[str, str]]:
    """Classify unified-diff lines as (kind, text); file header lines are skipped."""
    result = []
    for line in content.splitlines():
        if line.startswith(("--- ", "+++ ", "diff ", "index ")):
            continue
        if line.startswith("@@"):
            result.append(("hunk", line))
        elif line.startswith("+"):
            result.append(("add", line[1:]))
        elif line.startswith("-"):
            result.append(("remove", line[1:]))
        elif line.startswith("\\"):
            result.append(("hunk", line))
        else:
            result.append(("context", line[1:] if line.startswith(" ") else line))
    return result


def _render_diff(lines: list[tuple[str, str]]) -> Text:
    """Render diff lines with color-coded additions/deletions."""
    tc = get_theme_colors()
    # [LAW:dataflow-not-control-flow] Diff kind dispatch
    specs = {
        "hunk": ("", "dim"),
        "add": ("+ ", tc.success),
        "remove": ("- ", tc.error),
        "context": ("  ", ""),
    }
    t = Text()
    for i, (kind, text) in enumerate(lines):
        if i > 0:
            t.append("\n")
        prefix, style = specs.get(kind, ("", ""))
        t.append(prefix + text, style=style)
    return t


def render_diff(
    content: str,
    filename: str,
    available_height: int | None,
    width: int,
) -> ConsoleRenderable:
    """File diff with a filename header; height-bounded diffs keep their tail."""
    tc = get_theme_colors()
    lines = diff_lines(content)
    header = Text(filename or "(diff)", style=f"bold {tc.secondary}")

    if not lines:
        body = Text("No changes detected.", style="dim")
        return Constrain(Group(header, body), width)

    parts: list[ConsoleRenderable] = [header]
    if available_height is not None and len(lines) > available_height:
        keep = max(1, available_height - 1)
        hidden = len(lines) - keep
        parts.append(Text("... first {} line{} hidden ...".format(hidden, "" if hidden == 1 else "s"), style="dim"))
        lines = lines[-keep:]
    parts.append(_render_diff(lines))
    return Constrain(Group(*parts), width)


def _safe_color(value: str | None) -> str | None:
    """Token colors come from arbitrary producers; unparseable ones are dropped."""
    if not value:
        return None
    try:
        RichColor.parse(value)
    except ColorParseError:
        return None
    return value


def _run_style(run: StyledRun, url: str | None) -> Style:
    """Style for one piece of a run; url is set when the piece is a URL."""
    tc = get_theme_colors()
    fg = _safe_color(run.fg)
    bg = _safe_color(run.bg)
    if url is not None and not run.inverse:
        color = tc.link
    else:
        color = bg if run.inverse else fg
    return Style(
        color=color,
        bgcolor=fg if run.inverse else bg,
        dim=run.dim,
        bold=run.bold,
        italic=run.italic,
        underline=url is not None or run.underline,
        link=url,
    )


def styled_line_text(line: StyledLine) -> Text:
    """One styled row as Text; URL pieces inside runs become links."""
    t = Text()
    for run in line:
        for seg in segment(run.text):
            t.append(seg.content, style=_run_style(run, seg.content if seg.is_url else None))
    return t


def combine_rendered_texts(texts: list[Text]) -> Text:
    """Join rendered Text objects into a single Text with newline separators."""
    if not texts:
        return Text()
    if len(texts) == 1:
        return texts[0]
    combined = Text()
    for i, t in enumerate(texts):
        if i > 0:
            combined.append("\n")
        combined.append(t)
    return combined


def render_styled_lines(lines: tuple[StyledLine, ...], width: int) -> ConsoleRenderable:
    """Styled rows, each cropped to width with an ellipsis instead of wrapping."""
    body = combine_rendered_texts([styled_line_text(line) for line in lines])
    body.no_wrap = True
    body.overflow = "ellipsis"
    return Constrain(body, width)


# ─── Instruction dispatch ────────────────────────────────────────────────────


def _render_markdown_instruction(instruction: RenderMarkdown) -> ConsoleRenderable:
    return render_markdown_text(instruction.text, instruction.render_width, instruction.render_markdown)


def _render_plain_instruction(instruction: RenderPlainText) -> ConsoleRenderable:
    return render_linkified_text(instruction.text, instruction.render_width, get_theme_colors().foreground)


def _render_diff_instruction(instruction: RenderDiff) -> ConsoleRenderable:
    return render_diff(
        instruction.content,
        instruction.filename,
        instruction.available_height,
        instruction.render_width,
    )


def _render_styled_instruction(instruction: RenderStyledLines) -> ConsoleRenderable:
    return render_styled_lines(instruction.lines, instruction.render_width)


# [LAW:dataflow-not-control-flow] Instruction type -> renderer table
INSTRUCTION_RENDERERS: dict[type, Callable] = {
    RenderMarkdown: _render_markdown_instruction,
    RenderPlainText: _render_plain_instruction,
    RenderDiff: _render_diff_instruction,
    RenderStyledLines: _render_styled_instruction,
}


def render_instruction(instruction: RenderInstruction) -> ConsoleRenderable | None:
    """Build the renderable for instruction; None for RenderNothing."""
    if isinstance(instruction, RenderNothing):
        return None
    renderer = INSTRUCTION_RENDERERS.get(type(instruction))
    if renderer is None:
        raise TypeError("unsupported render instruction: {}".format(type(instruction).__name__))
    return renderer(instruction)
