"""
Unit tests for the SVG to <g> fragment transform.
"""
from pathlib import Path

import pytest
from lxml import etree

from svg import get_icon_id, get_viewbox, parse_svg, svg_to_fragment
from utils import IconSourceError


def svg_bytes(body, attrs='viewBox="0 0 16 16"'):
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        f'<svg xmlns="http://www.w3.org/2000/svg" {attrs}>\n{body}\n</svg>\n'
    ).encode("utf-8")


class TestSvgToFragment:

    def test_simple_icon(self):
        content = svg_bytes('<path fill="#444444" d="M0 0h16v16h-16z"/>')

        fragment = svg_to_fragment(Path("assets/svg/check-circle.svg"), content)

        assert fragment == '<g id="check-circle"><path d="M0 0h16v16h-16z"/></g>'

    def test_strips_fill_from_direct_children_only(self):
        content = svg_bytes(
            '<path fill="#444" d="M0 0h1v1z"/>'
            '<circle fill="red" cx="8" cy="8" r="2"/>'
            '<g fill="blue"><path fill="green" d="M1 1h1v1z"/></g>'
        )

        fragment = svg_to_fragment(Path("x.svg"), content)
        root = etree.fromstring(fragment)

        for child in root:
            assert "fill" not in child.attrib
        assert root[2][0].get("fill") == "green"

    def test_children_without_fill_are_untouched(self):
        content = svg_bytes('<rect x="1" y="2" width="3" height="4"/>')

        fragment = svg_to_fragment(Path("box.svg"), content)

        assert fragment == '<g id="box"><rect x="1" y="2" width="3" height="4"/></g>'

    def test_no_namespace_declarations(self):
        content = svg_bytes('<path fill="#444" d="M0 0h1v1z"/><path d="M2 2h1v1z"/>')

        fragment = svg_to_fragment(Path("eye.svg"), content)

        assert "xmlns" not in fragment
        assert fragment.count("<path") == 2

    def test_comments_and_whitespace_are_dropped(self):
        content = svg_bytes('<!-- layer 1 -->\n  <path d="M0 0h1v1z"/>\n\n')

        fragment = svg_to_fragment(Path("eye.svg"), content)

        assert fragment == '<g id="eye"><path d="M0 0h1v1z"/></g>'

    def test_nested_svg_element(self):
        content = b'<doc><svg viewBox="0 0 16 16"><path fill="#000" d="M0 0z"/></svg></doc>'

        fragment = svg_to_fragment(Path("nested.svg"), content)

        assert fragment == '<g id="nested"><path d="M0 0z"/></g>'

    def test_malformed_xml(self):
        with pytest.raises(etree.ParseError):
            svg_to_fragment(Path("broken.svg"), b"<svg><path></svg>")

    def test_missing_svg_element(self):
        with pytest.raises(IconSourceError):
            svg_to_fragment(Path("html.svg"), b"<html><body/></html>")


class TestHelpers:

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("assets/svg/eye-disabled.svg", "eye-disabled"),
            ("quote-right.svg", "quote-right"),
            ("/abs/dir/play-circle-o.svg", "play-circle-o"),
        ],
    )
    def test_get_icon_id(self, path, expected):
        assert get_icon_id(Path(path)) == expected

    def test_viewbox(self):
        svg = parse_svg(svg_bytes("", 'viewBox="0 -2 16 20"'))
        assert get_viewbox(svg) == (0.0, -2.0, 16.0, 20.0)

    def test_viewbox_falls_back_to_size(self):
        svg = parse_svg(svg_bytes("", 'width="24px" height="32"'))
        assert get_viewbox(svg) == (0.0, 0.0, 24.0, 32.0)

    def test_viewbox_without_size(self):
        svg = parse_svg(svg_bytes("", 'version="1.1"'))
        with pytest.raises(IconSourceError):
            get_viewbox(svg)
