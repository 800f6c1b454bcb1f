"""Layout budget for one rendered result.

The host supplies terminal width and, optionally, the rows left for the
result. content_budget() turns those into the width/height the content
itself may use, after reserving rows and columns for the surrounding
chrome (tool name, status line, padding, border).

// [LAW:one-source-of-truth] LayoutConfig holds every presentation constant.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutConfig:
    """Presentation constants for the chrome around a result."""

    static_reserved_rows: int = 1
    context_reserved_rows: int = 5  # tool name, status, padding
    minimum_floor: int = 2
    horizontal_padding: int = 4  # padding + border, both sides
    max_characters: int = 20000
    default_window_rows: int = 24


DEFAULT_LAYOUT = LayoutConfig()


@dataclass(frozen=True)
class LayoutBudget:
    """Width and optional height available to the content.

    available_height None means unbounded: nothing is cut by height.
    """

    render_width: int
    available_height: int | None = None

    def __post_init__(self) -> None:
        if self.render_width <= 0:
            raise ValueError("render_width must be positive, got {}".format(self.render_width))
        if self.available_height is not None and self.available_height <= 0:
            raise ValueError(
                "available_height must be positive or None, got {}".format(self.available_height)
            )

    @property
    def bounded(self) -> bool:
        return self.available_height is not None


def effective_height(
    available_terminal_height: int | None,
    config: LayoutConfig = DEFAULT_LAYOUT,
) -> int | None:
    """Rows left for content, never below minimum_floor + 1.

    A missing or non-positive host height means no height budget.
    """
    if not available_terminal_height or available_terminal_height <= 0:
        return None
    return max(
        available_terminal_height - config.static_reserved_rows - config.context_reserved_rows,
        config.minimum_floor + 1,
    )


def content_budget(
    terminal_width: int,
    available_terminal_height: int | None = None,
    config: LayoutConfig = DEFAULT_LAYOUT,
) -> LayoutBudget:
    """Derive the content budget from the host's terminal budget."""
    return LayoutBudget(
        render_width=max(1, terminal_width - config.horizontal_padding),
        available_height=effective_height(available_terminal_height, config),
    )
