#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_styles.py
"""Unit tests for paragraph and run formatting resolution.

Tests cover:
- Depth computation, overall and list-only
- Paragraph attribute accumulation (nearest node wins)
- Image detection on the ancestor chain
- Run formatting accumulation and sibling isolation
- Font size and color class conversion

"""

import pytest

from editor2docx.html.tree import find_body, parse_html
from editor2docx.model import Alignment, HeadingLevel, ListDecoration, ParagraphAttributes, RunFormat
from editor2docx.styles import (
    ImageReference,
    color_from_class,
    compute_depth,
    font_size_from_class,
    font_size_to_half_points,
    resolve_paragraph_attributes,
    resolve_run_attributes,
)


def body_of(html):
    return find_body(parse_html(f"<html><body>{html}</body></html>"))


def first(node, name):
    return node.find_first(lambda item: item.name == name)


@pytest.mark.unit
class TestComputeDepth:
    """Tests for compute_depth."""

    def test_body_child_has_depth_zero(self):
        body = body_of("<p>x</p>")
        assert compute_depth(body.children[0]) == 0

    def test_nested_depth(self):
        body = body_of("<div><section><p>x</p></section></div>")
        assert compute_depth(first(body, "p")) == 2

    def test_list_only_without_lists(self):
        body = body_of("<div><p>x</p></div>")
        assert compute_depth(first(body, "p"), list_only=True) is None

    def test_list_only_skips_items(self):
        body = body_of('<ul class="bullet"><li>A<ul class="bullet"><li>B</li></ul></li></ul>')
        outer = body.children[0]
        inner = outer.children[0].children[1]

        assert compute_depth(outer, list_only=True) is None
        assert compute_depth(inner, list_only=True) == 1
        assert compute_depth(inner) == 2

    def test_list_only_counts_ordered_lists(self):
        body = body_of("<ol><li><ul><li><ol><li>x</li></ol></li></ul></li></ol>")
        innermost = [node for node in body.iter_subtree() if node.name == "ol"][-1]
        assert compute_depth(innermost, list_only=True) == 2


@pytest.mark.unit
class TestResolveParagraphAttributes:
    """Tests for resolve_paragraph_attributes."""

    def test_plain_paragraph(self):
        body = body_of("<p>x</p>")
        assert resolve_paragraph_attributes(body.children[0]) == ParagraphAttributes()

    def test_heading(self):
        body = body_of("<h2>Title</h2>")
        attributes = resolve_paragraph_attributes(body.children[0])
        assert attributes.heading == HeadingLevel.HEADING_2

    def test_h0_is_not_a_heading_level(self):
        body = body_of("<h0>x</h0>")
        assert resolve_paragraph_attributes(body.children[0]).heading is None

    def test_code_style(self):
        body = body_of("<code>print()</code>")
        assert resolve_paragraph_attributes(body.children[0]).style == "code"

    def test_alignment_from_ancestor(self):
        body = body_of("<center><p>x</p></center>")
        attributes = resolve_paragraph_attributes(first(body, "p"))
        assert attributes.alignment == Alignment.CENTER

    def test_nearest_alignment_wins(self):
        body = body_of("<right><center><p>x</p></center></right>")
        attributes = resolve_paragraph_attributes(first(body, "p"))
        assert attributes.alignment == Alignment.CENTER

    def test_heading_and_alignment_combine(self):
        body = body_of("<justify><h3>x</h3></justify>")
        attributes = resolve_paragraph_attributes(first(body, "h3"))
        assert attributes.heading == HeadingLevel.HEADING_3
        assert attributes.alignment == Alignment.JUSTIFY

    def test_existing_attributes_are_kept(self):
        body = body_of("<h1>x</h1>")
        given = ParagraphAttributes(heading=HeadingLevel.HEADING_4)
        attributes = resolve_paragraph_attributes(body.children[0], given)
        assert attributes.heading == HeadingLevel.HEADING_4
        assert given == ParagraphAttributes(heading=HeadingLevel.HEADING_4)

    def test_bullet_decoration(self):
        body = body_of('<ul class="bullet"><li>x</li></ul>')
        attributes = resolve_paragraph_attributes(first(body, "li"))
        assert attributes.decoration == ListDecoration("bullet", level=0)

    def test_numbering_decoration(self):
        body = body_of("<ol><li>x</li></ol>")
        attributes = resolve_paragraph_attributes(first(body, "li"))
        assert attributes.decoration == ListDecoration("numbering", level=0, reference="numberLi")

    def test_indent_decoration(self):
        body = body_of('<ul class="indent"><li>x</li></ul>')
        attributes = resolve_paragraph_attributes(first(body, "li"))
        assert attributes.decoration == ListDecoration("indent", level=0)

    def test_nearest_decoration_wins(self):
        body = body_of('<ol><li>a<ul class="bullet"><li>b</li></ul></li></ol>')
        inner_li = [node for node in body.iter_subtree() if node.name == "li"][1]
        attributes = resolve_paragraph_attributes(inner_li)
        assert attributes.decoration == ListDecoration("bullet", level=1)

    def test_indented_sublist_does_not_decorate_its_item(self):
        body = body_of('<ul class="bullet"><li>a<ul class="indent"><li>b</li></ul></li></ul>')
        attributes = resolve_paragraph_attributes(first(body, "li"))
        assert attributes.decoration == ListDecoration("bullet", level=0)

    def test_indent_found_below_plain_container(self):
        body = body_of('<div><ul><li class="indent">x</li></ul></div>')
        attributes = resolve_paragraph_attributes(first(body, "li"))
        assert attributes.decoration == ListDecoration("indent", level=0)

    def test_image_on_chain(self):
        body = body_of('<p><img src="a.png"></p>')
        result = resolve_paragraph_attributes(first(body, "img"))
        assert isinstance(result, ImageReference)
        assert result.source == "a.png"

    def test_image_without_src(self):
        body = body_of("<p><img></p>")
        result = resolve_paragraph_attributes(first(body, "img"))
        assert isinstance(result, ImageReference)
        assert result.source is None

    def test_body_returns_empty_attributes(self):
        body = body_of("<p>x</p>")
        assert resolve_paragraph_attributes(body) == ParagraphAttributes()


@pytest.mark.unit
class TestClassConversions:
    """Tests for font size and color class helpers."""

    @pytest.mark.parametrize(
        "px, half_points",
        [(16, 24), (12, 18), (10, 15), (11, 17), (13, 20), (1, 2), (0, 0)],
    )
    def test_font_size_to_half_points(self, px, half_points):
        assert font_size_to_half_points(px) == half_points

    def test_font_size_from_class(self):
        assert font_size_from_class("font-size:16") == 24
        assert font_size_from_class("bold font-size:20 x") == 30

    def test_font_size_without_digits(self):
        assert font_size_from_class("font-size:") is None
        assert font_size_from_class("font-size:large") is None

    def test_huge_font_size_is_clamped(self):
        assert font_size_from_class("font-size:" + "9" * 400) == 3276

    @pytest.mark.parametrize(
        "class_name, expected",
        [
            ("color:black", "000000"),
            ("color:red", "FF0000"),
            ("color:green", "008000"),
            ("color:blue", "0000FF"),
            ("color:yellow", "FFFF00"),
            ("color:orange", "FFA500"),
        ],
    )
    def test_named_colors(self, class_name, expected):
        assert color_from_class(class_name) == expected

    def test_unknown_color(self):
        assert color_from_class("color:purple") is None
        assert color_from_class("plain") is None


@pytest.mark.unit
class TestResolveRunAttributes:
    """Tests for resolve_run_attributes."""

    def collect(self, html):
        body = body_of(html)
        runs = []
        resolve_run_attributes(body.children[0], runs)
        return runs

    def test_plain_text(self):
        runs = self.collect("plain")
        assert len(runs) == 1
        assert runs[0].text == "plain"
        assert runs[0].format == RunFormat()

    def test_bold_italic_accumulate(self):
        runs = self.collect("<strong><em>x</em></strong>")
        assert runs[0].format.bold
        assert runs[0].format.italic

    def test_underline_and_strike(self):
        runs = self.collect("<u><s>x</s></u>")
        assert runs[0].format.underline
        assert runs[0].format.strike

    def test_color_and_size(self):
        runs = self.collect('<span class="color:red"><span class="font-size:16">x</span></span>')
        assert runs[0].format.color == "FF0000"
        assert runs[0].format.size == 24

    def test_color_and_size_on_same_element(self):
        runs = self.collect('<span class="color:blue font-size:12">x</span>')
        assert runs[0].format == RunFormat(color="0000FF", size=18)

    def test_nearer_color_overrides(self):
        runs = self.collect('<span class="color:red">a<span class="color:blue">b</span></span>')
        assert [(run.text, run.format.color) for run in runs] == [("a", "FF0000"), ("b", "0000FF")]

    def test_unknown_color_keeps_inherited(self):
        runs = self.collect('<span class="color:red"><span class="color:purple">x</span></span>')
        assert runs[0].format.color == "FF0000"

    def test_siblings_do_not_leak(self):
        runs = self.collect("<p><strong>bold</strong> plain <em>italic</em></p>")
        assert [run.text for run in runs] == ["bold", " plain ", "italic"]
        assert runs[0].format == RunFormat(bold=True)
        assert runs[1].format == RunFormat()
        assert runs[2].format == RunFormat(italic=True)

    def test_inherited_format(self):
        body = body_of("<em>x</em>")
        runs = []
        resolve_run_attributes(body.children[0], runs, RunFormat(bold=True))
        assert runs[0].format == RunFormat(bold=True, italic=True)

    def test_list_children_are_skipped(self):
        runs = self.collect("<li>outer<ul><li>inner</li></ul></li>")
        assert [run.text for run in runs] == ["outer"]

    def test_returns_own_format(self):
        body = body_of("<strong>x</strong>")
        assert resolve_run_attributes(body.children[0], []) == RunFormat(bold=True)
