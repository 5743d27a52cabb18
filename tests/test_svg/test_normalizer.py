"""Tests for the SVG → vector-drawable normalizer."""

from __future__ import annotations

import logging

import pytest

from svg2code.drawable.parser import parse_icon
from svg2code.drawable.path_parser import parse_path_data
from svg2code.engine.context import Icon
from svg2code.errors import MalformedVectorError, UnresolvedReferenceError
from svg2code.svg.normalizer import normalize_svg, svg_to_drawable
from svg2code.vector.model import (
    ArcTo,
    Close,
    Color,
    FillType,
    GraphicUnit,
    Group,
    LinearGradient,
    LineTo,
    MoveTo,
    RadialGradient,
    StrokeCap,
    StrokeJoin,
)
from tests.conftest import CIRCLE_SVG, FILLED_RECT_SVG, GRADIENT_SVG, HOME_SVG, TRANSFORMED_SVG


def _svg(body: str, attrs: str = 'viewBox="0 0 24 24"') -> str:
    return f'<svg xmlns="http://www.w3.org/2000/svg" {attrs}>{body}</svg>'


def _vector(svg_text: str):
    xml = svg_to_drawable(svg_text, "test.svg")
    return parse_icon(Icon(name="Test", original_file_name="test.xml", raw_xml=xml))


def test_circle_becomes_stroked_arc_path():
    vector = _vector(CIRCLE_SVG)
    assert vector.width == GraphicUnit(24.0, "dp")
    assert (vector.viewport_width, vector.viewport_height) == (24.0, 24.0)
    (path,) = vector.nodes
    assert path.fill is None
    assert path.stroke_color_hex == "FF000000"
    assert path.stroke_line_width == GraphicUnit(2.0)
    assert path.stroke_line_cap is StrokeCap.ROUND
    assert path.stroke_line_join is StrokeJoin.ROUND
    assert path.nodes == (
        MoveTo(2, 12),
        ArcTo(10, 10, 0, True, False, 20, 0, relative=True),
        ArcTo(10, 10, 0, True, False, -20, 0, relative=True),
        Close(relative=True),
    )


def test_paths_keep_document_order():
    vector = _vector(HOME_SVG)
    assert vector.path_count == 2
    assert vector.nodes[0].nodes[0] == MoveTo(15, 21)


def test_size_defaults_to_viewbox():
    vector = _vector(FILLED_RECT_SVG)
    assert vector.width == GraphicUnit(100.0, "dp")
    rect, circle = vector.nodes
    assert rect.fill == Color("FF4ECDC4")
    assert rect.nodes == tuple(parse_path_data("M10,10h80v80h-80z"))
    assert circle.fill == Color("FFFF6B6B")
    assert circle.nodes[0] == MoveTo(30, 50)


def test_viewbox_offset_becomes_translation():
    vector = _vector(_svg('<path d="M0 0h1v1z"/>', 'viewBox="-2 -3 28 28"'))
    (group,) = vector.nodes
    assert isinstance(group, Group)
    assert (group.transform.translation_x, group.transform.translation_y) == (2, 3)


def test_transform_group_and_skew_baking():
    vector = _vector(TRANSFORMED_SVG)
    group, line = vector.nodes
    assert isinstance(group, Group)
    assert group.transform.rotation == 90
    assert (group.transform.translation_x, group.transform.translation_y) == (12, 12)
    (triangle,) = group.children
    assert triangle.fill == Color("FF00FF00")
    assert triangle.fill_alpha == 0.5

    # skewX(45) maps (0, 10) to (10, 10)
    assert line.nodes == (MoveTo(0, 0), LineTo(10, 10))
    assert line.stroke_color_hex == "FF000000"
    assert line.stroke_line_width == GraphicUnit(1.0)


def test_unsupported_elements_skipped(caplog):
    with caplog.at_level(logging.WARNING, logger="svg2code.svg.normalizer"):
        vector = _vector(TRANSFORMED_SVG)
    assert vector.path_count == 2
    assert "unsupported <text>" in caplog.text


def test_inherited_style_and_inline_overrides():
    svg = _svg(
        '<g fill="red" fill-rule="evenodd">'
        '<path d="M0 0h1v1z" style="fill-opacity: 0.5"/>'
        '<path d="M2 2h1v1z" style="fill: #00f"/>'
        '<path d="M4 4h1v1z" display="none"/>'
        "</g>"
    )
    first, second = _vector(svg).nodes[0:2]
    assert first.fill == Color("FFFF0000")
    assert first.fill_alpha == 0.5
    assert first.fill_type is FillType.EVEN_ODD
    assert second.fill == Color("FF0000FF")


def test_polygon_and_rounded_rect():
    svg = _svg('<polygon points="0,0 10,0 10,10"/><rect width="10" height="10" rx="2"/>')
    polygon, rect = _vector(svg).nodes
    assert polygon.nodes == (MoveTo(0, 0), LineTo(10, 0), LineTo(10, 10), Close(relative=True))
    assert sum(isinstance(n, ArcTo) for n in rect.nodes) == 4


def test_linear_gradient_href_and_bounding_box():
    (path,) = _vector(GRADIENT_SVG).nodes
    fill = path.fill
    assert isinstance(fill, LinearGradient)
    assert (fill.start_x, fill.start_y, fill.end_x, fill.end_y) == (2, 2, 22, 22)
    # stop-opacity 0.5 becomes the stop's alpha channel
    assert fill.color_stops == ((0.0, "FFFF0000"), (1.0, "800000FF"))


def test_radial_gradient_user_space():
    svg = _svg(
        '<radialGradient id="r" cx="12" cy="12" r="10" gradientUnits="userSpaceOnUse">'
        '<stop offset="0" stop-color="white"/><stop offset="1" stop-color="black"/>'
        "</radialGradient>"
        '<circle cx="12" cy="12" r="10" fill="url(#r)"/>'
    )
    fill = _vector(svg).nodes[0].fill
    assert isinstance(fill, RadialGradient)
    assert (fill.center_x, fill.center_y, fill.radius) == (12, 12, 10)


def test_single_stop_gradient_is_solid():
    svg = _svg(
        '<linearGradient id="g"><stop offset="0.3" stop-color="#123456"/></linearGradient>'
        '<path d="M0 0h1v1z" fill="url(#g)"/>'
    )
    assert _vector(svg).nodes[0].fill == Color("FF123456")


def test_stop_offsets_clamped_and_monotonic():
    svg = _svg(
        '<linearGradient id="g">'
        '<stop offset="0.6" stop-color="red"/><stop offset="0.2" stop-color="blue"/>'
        '<stop offset="150%" stop-color="lime"/>'
        "</linearGradient>"
        '<path d="M0 0h10v10z" fill="url(#g)"/>'
    )
    stops = _vector(svg).nodes[0].fill.color_stops
    assert [offset for offset, _ in stops] == [0.6, 0.6, 1.0]


def test_missing_gradient_reference():
    svg = _svg('<path d="M0 0h1v1z" fill="url(#nope)"/>')
    with pytest.raises(UnresolvedReferenceError, match="nope"):
        svg_to_drawable(svg)


def test_missing_gradient_uses_fallback_color():
    svg = _svg('<path d="M0 0h1v1z" fill="url(#nope) red"/>')
    assert _vector(svg).nodes[0].fill == Color("FFFF0000")


def test_gradient_stroke_degrades_to_first_stop(caplog):
    svg = _svg(
        '<linearGradient id="g"><stop offset="0" stop-color="blue"/><stop offset="1" stop-color="red"/></linearGradient>'
        '<path d="M0 0L10 10" fill="none" stroke="url(#g)"/>'
    )
    with caplog.at_level(logging.WARNING, logger="svg2code.svg.normalizer"):
        path = _vector(svg).nodes[0]
    assert path.stroke_color_hex == "FF0000FF"
    assert "gradient strokes" in caplog.text


@pytest.mark.parametrize(
    "text",
    [
        "",
        "<svg",
        '<vector xmlns:android="http://schemas.android.com/apk/res/android"/>',
        '<svg xmlns="http://www.w3.org/2000/svg"/>',
        _svg("", 'viewBox="0 0 0 24"'),
        _svg('<path d="M0 0h1v1z" fill="chartreuse-ish"/>'),
    ],
)
def test_malformed_svg(text):
    with pytest.raises(MalformedVectorError):
        svg_to_drawable(text)


def test_normalize_svg_writes_file(tmp_path):
    src = tmp_path / "home.svg"
    src.write_text(HOME_SVG)
    out = normalize_svg(src, tmp_path / "tmp" / "Icons" / "home.xml")
    assert out == tmp_path / "tmp" / "Icons" / "home.xml"
    text = out.read_text()
    assert text.startswith("<vector")
    assert 'xmlns:android="http://schemas.android.com/apk/res/android"' in text
    assert 'android:viewportWidth="24"' in text


def test_transparent_paint_is_no_paint():
    svg = _svg('<path d="M0 0h1v1z" fill="transparent" stroke="Transparent"/>')
    (path,) = _vector(svg).nodes
    assert path.fill is None
    assert path.stroke_color_hex is None


def test_extended_color_keywords():
    svg = _svg('<path d="M0 0h1v1z" fill="steelblue" stroke="darkblue"/>')
    (path,) = _vector(svg).nodes
    assert path.fill == Color("FF4682B4")
    assert path.stroke_color_hex == "FF00008B"


@pytest.mark.parametrize(
    "text",
    [
        _svg("", 'viewBox="0 0 NaN 24"'),
        _svg("", 'width="inf" height="24" viewBox="0 0 24 24"'),
        _svg('<circle cx="12" cy="12" r="1e400"/>'),
        _svg('<path d="M0 0h1v1z" fill-opacity="nan"/>'),
        _svg('<polygon points="0,0 10,0 nan,10"/>'),
    ],
)
def test_non_finite_numbers_are_malformed(text):
    with pytest.raises(MalformedVectorError):
        svg_to_drawable(text)


def test_normalize_svg_rejects_binary(tmp_path):
    src = tmp_path / "image.svg"
    src.write_bytes(b"\x89PNG\r\n\x1a\n\x00\xff")
    with pytest.raises(MalformedVectorError, match="not UTF-8"):
        normalize_svg(src, tmp_path / "out.xml")
