"""Segment text into URL / non-URL runs for link styling.

Renderers underline and color URL segments and leave every other segment
with the caller's styling. Joining all segment contents in order gives
back the original text exactly.
"""

from __future__ import annotations

from dataclasses import dataclass

from tool_result_view.core.urls import extract_spans


@dataclass(frozen=True)
class Segment:
    content: str
    is_url: bool


def segment(text: str) -> tuple[Segment, ...]:
    """Segment text into alternating URL and non-URL pieces.

    Empty pieces are never emitted, so adjacent URLs produce two URL
    segments back to back and empty text produces no segments.
    """
    return tuple(
        Segment(span.text_of(text), span.is_url) for span in extract_spans(text)
    )
