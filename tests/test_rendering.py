"""Tests for tool_result_view.tui.rendering — Rich collaborators and theme colors."""

import dataclasses
import re

import pytest
from rich.console import Console
from textual.theme import BUILTIN_THEMES

from tool_result_view.core.dispatch import (
    RenderDiff,
    RenderMarkdown,
    RenderNothing,
    RenderPlainText,
    RenderStyledLines,
)
from tool_result_view.core.styled import StyledRun
from tool_result_view.tui.rendering import (
    ThemeColors,
    build_theme_colors,
    diff_lines,
    get_theme_colors,
    linkify_text,
    render_instruction,
    styled_line_text,
)

_HEX_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def render_plain(renderable, width: int = 80) -> str:
    console = Console(record=True, width=width, color_system=None)
    console.print(renderable)
    return console.export_text()


def url_spans(text):
    return [span for span in text.spans if span.style.link]


def hex_of(style) -> str:
    return style.color.triplet.hex.lower()


class TestThemeColors:
    @pytest.mark.parametrize("theme_name", list(BUILTIN_THEMES.keys()))
    def test_all_builtins_produce_hex_colors(self, theme_name):
        tc = build_theme_colors(BUILTIN_THEMES[theme_name])
        for value in (tc.foreground, tc.link, tc.secondary, tc.success, tc.error):
            assert _HEX_RE.match(value), value

    def test_fields_are_the_colors_renderers_read(self):
        names = {f.name for f in dataclasses.fields(ThemeColors)}
        assert names == {"foreground", "link", "secondary", "success", "error", "markdown_theme_dict"}

    def test_markdown_theme_uses_link_color(self):
        tc = get_theme_colors()
        assert tc.link in tc.markdown_theme_dict["markdown.link"]


class TestLinkifiedText:
    def test_plain_text_unchanged(self):
        assert linkify_text("Hello World").plain == "Hello World"

    def test_url_segment_is_linked_and_underlined(self):
        text = linkify_text("Go to https://google.com.", color="#e0e0e0")
        assert text.plain == "Go to https://google.com."
        (span,) = url_spans(text)
        assert text.plain[span.start : span.end] == "https://google.com"
        assert span.style.link == "https://google.com"
        assert span.style.underline
        assert hex_of(span.style) == get_theme_colors().link.lower()

    def test_multiple_urls(self):
        text = linkify_text("Link 1: https://a.com, Link 2: https://b.com")
        assert [s.style.link for s in url_spans(text)] == ["https://a.com", "https://b.com"]

    def test_plain_instruction_wraps_to_width(self):
        output = render_plain(render_instruction(RenderPlainText("word " * 20, 20)), width=80)
        assert max(len(line.rstrip()) for line in output.splitlines()) <= 20


class TestStyledLines:
    def test_run_attributes_pass_through(self):
        run = StyledRun("bold", fg="#ff0000", bold=True, italic=True, dim=True)
        text = styled_line_text((run,))
        style = text.spans[0].style
        assert style.bold and style.italic and style.dim
        assert hex_of(style) == "#ff0000"
        assert not style.underline

    def test_url_inside_run_gets_link_style(self):
        run = StyledRun("see https://example.com now", fg="#ff0000")
        text = styled_line_text((run,))
        (span,) = url_spans(text)
        assert span.style.link == "https://example.com"
        assert span.style.underline
        assert hex_of(span.style) == get_theme_colors().link.lower()

    def test_inverse_swaps_colors(self):
        run = StyledRun("inv", fg="#ff0000", bg="#0000ff", inverse=True)
        style = styled_line_text((run,)).spans[0].style
        assert hex_of(style) == "#0000ff"
        assert style.bgcolor.triplet.hex.lower() == "#ff0000"

    def test_inverse_url_keeps_swapped_color(self):
        run = StyledRun("https://x.io/a", fg="#ff0000", bg="#0000ff", inverse=True)
        style = styled_line_text((run,)).spans[0].style
        assert hex_of(style) == "#0000ff"
        assert style.underline and style.link == "https://x.io/a"

    def test_unparseable_colors_are_dropped(self):
        run = StyledRun("x", fg="not-a-color")
        assert styled_line_text((run,)).spans[0].style.color is None

    def test_rows_are_cropped_not_wrapped(self):
        lines = ((StyledRun("x" * 100),), (), (StyledRun("short"),))
        output = render_plain(render_instruction(RenderStyledLines(lines, 20)))
        rows = output.splitlines()
        assert len(rows) == 3
        assert rows[0].rstrip().endswith("…")
        assert len(rows[0].rstrip()) == 20
        assert rows[1].strip() == ""
        assert rows[2].strip() == "short"


class TestMarkdown:
    def test_markdown_is_rendered(self):
        output = render_plain(render_instruction(RenderMarkdown("# Title\n\nbody", 40, True)))
        assert "Title" in output
        assert "# Title" not in output

    def test_markdown_off_shows_source(self):
        output = render_plain(render_instruction(RenderMarkdown("# Title", 40, False)))
        assert "# Title" in output


class TestDiff:
    def test_diff_lines_skip_file_headers(self):
        content = "--- a/x\n+++ b/x\n@@ -1 +1 @@\n-old\n+new\n ctx"
        assert diff_lines(content) == [
            ("hunk", "@@ -1 +1 @@"),
            ("remove", "old"),
            ("add", "new"),
            ("context", "ctx"),
        ]

    def test_diff_render_has_filename_and_changes(self):
        content = "@@ -1 +1 @@\n-old\n+new"
        output = render_plain(render_instruction(RenderDiff(content, "test.ts", None, 76)))
        assert "test.ts" in output
        assert "- old" in output
        assert "+ new" in output

    def test_height_bounded_diff_keeps_tail(self):
        content = "\n".join("+line{}".format(i) for i in range(10))
        output = render_plain(render_instruction(RenderDiff(content, "f.py", 4, 76)))
        assert "... first 7 lines hidden ..." in output
        assert "+ line9" in output
        assert "+ line0" not in output

    def test_empty_diff(self):
        output = render_plain(render_instruction(RenderDiff("", "f.py", None, 76)))
        assert "No changes detected." in output


def test_nothing_renders_none():
    assert render_instruction(RenderNothing()) is None


def test_unknown_instruction_is_rejected():
    with pytest.raises(TypeError):
        render_instruction("text")
