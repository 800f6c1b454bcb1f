"""URL recognition for terminal text.

Matches absolute http(s) URLs built from RFC 3986 characters, but requires
the last character to come from a narrower terminator set so sentence
punctuation (.,;:!?), quotes and a closing parenthesis stay outside the
URL. <, > and control bytes (ESC included) are never part of a URL.

// [LAW:one-source-of-truth] URL_RE is THE URL pattern; linkify and the
// styled-line renderer both read it from here.
// [LAW:dataflow-not-control-flow] extract_spans() is a pure function: text in, spans out.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


# ─── Regex patterns ──────────────────────────────────────────────────────────

# Body: unreserved + gen-delims + sub-delims + percent.
_URL_BODY = r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]"
# Last char: body minus . , ; : ! ? ' and )
_URL_TERMINATOR = r"[A-Za-z0-9\-_~/#\[\]@$&(*+=%]"

# re.ASCII keeps IGNORECASE from folding non-ASCII letters (e.g. KELVIN SIGN) into a-z.
URL_RE = re.compile(
    r"https?://" + _URL_BODY + r"+" + _URL_TERMINATOR,
    re.IGNORECASE | re.ASCII,
)


# ─── Data model ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class UrlSpan:
    start: int
    end: int  # exclusive
    is_url: bool

    def text_of(self, text: str) -> str:
        return text[self.start : self.end]


# ─── Extraction ──────────────────────────────────────────────────────────────


def extract_spans(text: str) -> tuple[UrlSpan, ...]:
    """Split text into contiguous URL / non-URL spans in document order.

    Spans cover the whole input with no gaps and no empty spans. Text with
    no URL yields a single non-URL span; empty text yields no spans.
    """
    if not text:
        return ()

    spans: list[UrlSpan] = []
    pos = 0
    for match in URL_RE.finditer(text):
        start, end = match.span()
        if start > pos:
            spans.append(UrlSpan(pos, start, False))
        spans.append(UrlSpan(start, end, True))
        pos = end
    if pos < len(text):
        spans.append(UrlSpan(pos, len(text), False))
    return tuple(spans)


def is_url(text: str) -> bool:
    """True when the whole string is exactly one URL."""
    return URL_RE.fullmatch(text) is not None
