"""Result payload variants and the boundary classifier.

A tool result arrives untyped: a string, a diff dict, a todo dict, or a
styled token buffer. payload_from_raw() decides the variant once, where the
payload originates; everything downstream matches on the typed union.

// [LAW:single-enforcer] payload_from_raw() is the only place that inspects raw shapes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from tool_result_view.core.styled import StyledDocument, styled_document_from_raw


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class FileDiff:
    content: str
    filename: str


@dataclass(frozen=True)
class TodoMarker:
    """Todo results are rendered by a separate tray, never inline."""


ResultPayload = PlainText | FileDiff | TodoMarker | StyledDocument

PAYLOAD_TYPES = (PlainText, FileDiff, TodoMarker, StyledDocument)


def payload_from_raw(raw: object) -> ResultPayload | None:
    """Classify an untyped result into a ResultPayload.

    None, "" and {} mean "nothing to show" and return None. Diff is
    checked before todos; lists are styled token buffers. Any other shape
    is a producer bug and raises TypeError.
    """
    if isinstance(raw, PAYLOAD_TYPES):
        return raw
    if raw is None:
        return None
    if isinstance(raw, str):
        return PlainText(raw) if raw else None
    if isinstance(raw, Mapping):
        if not raw:
            return None
        if "fileDiff" in raw:
            return FileDiff(
                content=str(raw["fileDiff"] or ""),
                filename=str(raw.get("fileName") or ""),
            )
        if "todos" in raw:
            return TodoMarker()
        raise TypeError("unsupported result payload keys: {}".format(sorted(map(str, raw))))
    if isinstance(raw, (list, tuple)):
        return styled_document_from_raw(raw)
    raise TypeError("unsupported result payload type: {}".format(type(raw).__name__))
