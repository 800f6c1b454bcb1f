"""Character-cap and wrap-aware height truncation for plain-text results.

Two passes, both dropping from the head so the newest output stays visible:

1. Character cap — guards the line-oriented pass against pathological sizes.
2. Line truncation — walks lines from the end, counting estimated visual
   rows (naive character wrapping at render width), and keeps the suffix
   that fits the height budget.

Line truncation is skipped in alternate-buffer mode: full-redraw hosts
apply their own scroll-region truncation.

// [LAW:dataflow-not-control-flow] All functions here are pure: text in, text out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tool_result_view.core.layout import LayoutBudget

logger = logging.getLogger(__name__)

ELLIPSIS = "..."

# Large enough that anything past it would be cut by height anyway.
MAXIMUM_RESULT_DISPLAY_CHARACTERS = 20000


@dataclass(frozen=True)
class TruncationResult:
    text: str
    characters_dropped: int = 0
    lines_dropped: int = 0

    @property
    def truncated(self) -> bool:
        return self.characters_dropped > 0 or self.lines_dropped > 0


def estimate_rows(line_length: int, render_width: int) -> int:
    """Rows a logical line occupies when wrapped at render_width.

    ceil(max(1, line_length) / render_width): an empty line is one row.
    """
    if render_width <= 0:
        raise ValueError("render_width must be positive, got {}".format(render_width))
    return -(-max(1, line_length) // render_width)


def cap_characters(text: str, hard_cap: int = MAXIMUM_RESULT_DISPLAY_CHARACTERS) -> str:
    """Keep the last hard_cap characters, prefixed with an ellipsis."""
    if len(text) > hard_cap:
        return ELLIPSIS + text[-hard_cap:] if hard_cap > 0 else ELLIPSIS
    return text


def _drop_leading_lines(text: str, available_height: int, render_width: int) -> tuple[str, int]:
    """(display text, lines dropped) for the line-truncation pass."""
    lines = text.split("\n")
    current_height = 0
    start_index = len(lines)
    for i in range(len(lines) - 1, -1, -1):
        line_rows = estimate_rows(len(lines[i]), render_width)
        if current_height + line_rows > available_height:
            break
        current_height += line_rows
        start_index = i
    if start_index == 0:
        return text, 0
    logger.debug(
        "height truncation dropped %d of %d lines (height=%d, width=%d)",
        start_index,
        len(lines),
        available_height,
        render_width,
    )
    return ELLIPSIS + "\n" + "\n".join(lines[start_index:]), start_index


def truncate_lines(text: str, available_height: int, render_width: int) -> str:
    """Drop leading lines until the estimated row count fits available_height.

    When anything is dropped a standalone "..." line is prepended; when
    everything fits the text comes back unchanged.
    """
    return _drop_leading_lines(text, available_height, render_width)[0]


def truncate_with_stats(
    text: str,
    hard_cap: int,
    budget: LayoutBudget,
    is_alternate_buffer: bool = False,
) -> TruncationResult:
    """Run both truncation passes and report what was dropped."""
    capped = cap_characters(text, hard_cap)
    characters_dropped = len(text) - len(capped) + len(ELLIPSIS) if len(text) > hard_cap else 0

    if budget.available_height is None or is_alternate_buffer:
        return TruncationResult(capped, characters_dropped=characters_dropped)

    shown, lines_dropped = _drop_leading_lines(capped, budget.available_height, budget.render_width)
    return TruncationResult(shown, characters_dropped=characters_dropped, lines_dropped=lines_dropped)


def truncate(
    text: str,
    hard_cap: int,
    budget: LayoutBudget,
    is_alternate_buffer: bool = False,
) -> str:
    """Text to display for a plain-text result under the given budget."""
    return truncate_with_stats(text, hard_cap, budget, is_alternate_buffer).text
