"""Route a result payload to the renderer that owns it.

dispatch() is pure: it decides which collaborator renders the payload and
precomputes that collaborator's inputs (truncated text, windowed rows,
width, height). It never builds renderables itself; tui/rendering.py turns
a RenderInstruction into Rich output.

Decision order (first match wins):
1. nothing to show (None, empty text)  -> RenderNothing
2. FileDiff                            -> RenderDiff (diff renderer truncates)
3. TodoMarker                          -> RenderNothing (todo tray owns it)
4. StyledDocument                      -> RenderStyledLines (trailing window)
5. PlainText                           -> RenderMarkdown | RenderPlainText

// [LAW:dataflow-not-control-flow] The render decision is a value (RenderInstruction).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tool_result_view.core.layout import DEFAULT_LAYOUT, LayoutBudget
from tool_result_view.core.payload import FileDiff, PlainText, ResultPayload, TodoMarker
from tool_result_view.core.styled import StyledDocument, StyledLine, window
from tool_result_view.core.truncation import truncate_with_stats

logger = logging.getLogger(__name__)


# ─── Render instructions ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class RenderNothing:
    pass


@dataclass(frozen=True)
class RenderMarkdown:
    text: str
    render_width: int
    render_markdown: bool  # host preference; False shows the raw source


@dataclass(frozen=True)
class RenderPlainText:
    """Plain text, wrapped, with URL segments linkified."""

    text: str
    render_width: int


@dataclass(frozen=True)
class RenderDiff:
    content: str
    filename: str
    available_height: int | None
    render_width: int


@dataclass(frozen=True)
class RenderStyledLines:
    lines: tuple[StyledLine, ...]
    render_width: int


RenderInstruction = RenderNothing | RenderMarkdown | RenderPlainText | RenderDiff | RenderStyledLines


# ─── Dispatch ────────────────────────────────────────────────────────────────


def markdown_allowed(
    render_output_as_markdown: bool,
    budget: LayoutBudget,
    is_alternate_buffer: bool,
) -> bool:
    """Whether a plain-text result may go to the markdown renderer.

    The markdown renderer does not honor height budgets, so a bounded
    budget outside alternate-buffer mode forces plain text.
    """
    return render_output_as_markdown and not (budget.bounded and not is_alternate_buffer)


def dispatch(
    payload: ResultPayload | None,
    budget: LayoutBudget,
    render_output_as_markdown: bool = True,
    is_alternate_buffer: bool = False,
    *,
    render_markdown: bool = True,
    max_characters: int = DEFAULT_LAYOUT.max_characters,
    default_window_rows: int = DEFAULT_LAYOUT.default_window_rows,
) -> RenderInstruction:
    """Decide how to render payload within budget.

    Args:
        payload: Typed payload from payload_from_raw(), or None.
        budget: Content budget (already net of chrome, see content_budget()).
        render_output_as_markdown: Caller's request to render text as markdown.
        is_alternate_buffer: Host is doing full-screen redraws.
        render_markdown: Host markdown preference, forwarded to the markdown renderer.
        max_characters: Character cap applied before line truncation.
        default_window_rows: Styled-document rows when no height budget is given.

    Raises:
        TypeError: payload is not one of the ResultPayload variants.
    """
    if payload is None:
        return RenderNothing()

    if isinstance(payload, FileDiff):
        logger.debug("dispatch: diff %s", payload.filename)
        return RenderDiff(
            content=payload.content,
            filename=payload.filename,
            available_height=budget.available_height,
            render_width=budget.render_width,
        )

    if isinstance(payload, TodoMarker):
        return RenderNothing()

    if isinstance(payload, StyledDocument):
        lines = window(payload, budget.available_height, default_window_rows)
        logger.debug("dispatch: styled document, %d of %d rows", len(lines), len(payload))
        return RenderStyledLines(lines=lines, render_width=budget.render_width)

    if isinstance(payload, PlainText):
        if not payload.text:
            return RenderNothing()
        as_markdown = markdown_allowed(render_output_as_markdown, budget, is_alternate_buffer)
        result = truncate_with_stats(payload.text, max_characters, budget, is_alternate_buffer)
        if result.truncated:
            logger.debug(
                "dispatch: text truncated, %d chars and %d lines dropped",
                result.characters_dropped,
                result.lines_dropped,
            )
        text = result.text
        if as_markdown:
            return RenderMarkdown(
                text=text,
                render_width=budget.render_width,
                render_markdown=render_markdown,
            )
        return RenderPlainText(text=text, render_width=budget.render_width)

    raise TypeError("unsupported result payload: {}".format(type(payload).__name__))
