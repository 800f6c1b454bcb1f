"""Memoized boundary around dispatch().

A result is re-rendered on every host repaint, but its render instruction
only changes when the payload, the height budget, the buffer mode or the
content width changes. ResultDisplay keys a small LRU cache on exactly
those inputs (plus the two markdown flags) and reuses the instruction
otherwise. Recomputing always yields an equal instruction, so the cache is
a performance measure only.
"""

from __future__ import annotations

import logging

from textual.cache import LRUCache

from tool_result_view.core.dispatch import RenderInstruction, dispatch
from tool_result_view.core.layout import DEFAULT_LAYOUT, LayoutConfig, content_budget
from tool_result_view.core.payload import ResultPayload

logger = logging.getLogger(__name__)

_CacheKey = tuple[object, ...]


class ResultDisplay:
    """Render-instruction source for tool results, memoized per input tuple."""

    def __init__(self, config: LayoutConfig = DEFAULT_LAYOUT, maxsize: int = 64) -> None:
        self.config = config
        self._cache: LRUCache[_CacheKey, RenderInstruction] = LRUCache(maxsize)
        self.hits = 0
        self.misses = 0

    def instruction(
        self,
        payload: ResultPayload | None,
        terminal_width: int,
        available_terminal_height: int | None = None,
        *,
        render_output_as_markdown: bool = True,
        render_markdown: bool = True,
        is_alternate_buffer: bool = False,
    ) -> RenderInstruction:
        budget = content_budget(terminal_width, available_terminal_height, self.config)
        key: _CacheKey = (
            payload,
            budget.available_height,
            is_alternate_buffer,
            budget.render_width,
            render_output_as_markdown,
            render_markdown,
        )
        if key in self._cache:
            self.hits += 1
            return self._cache[key]

        self.misses += 1
        result = dispatch(
            payload,
            budget,
            render_output_as_markdown,
            is_alternate_buffer,
            render_markdown=render_markdown,
            max_characters=self.config.max_characters,
            default_window_rows=self.config.default_window_rows,
        )
        self._cache[key] = result
        logger.debug("result cache miss (%d cached)", len(self._cache))
        return result

    def clear(self) -> None:
        self._cache.clear()
