"""Styled line buffers and trailing-window selection.

A StyledDocument is previously rendered terminal output (e.g. captured
subprocess output) already parsed into runs of uniformly styled text.
window() picks the rows to show: the trailing N, never reordered and never
clipped by width (the terminal clips or wraps wide rows itself).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

DEFAULT_WINDOW_ROWS = 24


@dataclass(frozen=True)
class StyledRun:
    """A span of text sharing one set of visual attributes."""

    text: str
    fg: str | None = None
    bg: str | None = None
    bold: bool = False
    italic: bool = False
    underline: bool = False
    dim: bool = False
    inverse: bool = False


# Left-to-right render order. Empty tuple renders as a blank row.
StyledLine = tuple[StyledRun, ...]


@dataclass(frozen=True)
class StyledDocument:
    lines: tuple[StyledLine, ...] = ()

    def __len__(self) -> int:
        return len(self.lines)


def window(
    document: StyledDocument,
    available_height: int | None = None,
    default_rows: int = DEFAULT_WINDOW_ROWS,
) -> tuple[StyledLine, ...]:
    """Return the trailing rows of document that fit available_height.

    A missing or non-positive height falls back to default_rows. No
    reservation arithmetic happens here; callers pass the content height.
    """
    rows = available_height if available_height and available_height > 0 else default_rows
    if rows <= 0:
        return ()
    return document.lines[-rows:]


# ─── Raw token buffers ───────────────────────────────────────────────────────


def _color(value: object) -> str | None:
    # Producers send "" for "terminal default".
    return str(value) if value else None


def styled_run_from_raw(token: Mapping[str, object]) -> StyledRun:
    return StyledRun(
        text=str(token.get("text", "")),
        fg=_color(token.get("fg")),
        bg=_color(token.get("bg")),
        bold=bool(token.get("bold", False)),
        italic=bool(token.get("italic", False)),
        underline=bool(token.get("underline", False)),
        dim=bool(token.get("dim", False)),
        inverse=bool(token.get("inverse", False)),
    )


def styled_document_from_raw(raw: Iterable[Iterable[Mapping[str, object]]]) -> StyledDocument:
    """Build a StyledDocument from a list of lines of token dicts.

    Raises TypeError when a line or token has the wrong shape.
    """
    lines: list[StyledLine] = []
    for line in raw:
        if isinstance(line, (str, bytes, Mapping)):
            raise TypeError("styled line must be a sequence of tokens, got {}".format(type(line).__name__))
        runs: list[StyledRun] = []
        for token in line:
            if not isinstance(token, Mapping):
                raise TypeError("styled token must be a mapping, got {}".format(type(token).__name__))
            runs.append(styled_run_from_raw(token))
        lines.append(tuple(runs))
    return StyledDocument(tuple(lines))
