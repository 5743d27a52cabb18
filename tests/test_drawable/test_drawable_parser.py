"""Tests for the vector-drawable XML parser."""

from __future__ import annotations

import pytest

from svg2code.drawable.parser import parse_color_resources, parse_icon
from svg2code.engine.context import Icon
from svg2code.errors import MalformedVectorError, UnresolvedReferenceError
from svg2code.vector.model import (
    Color,
    FillType,
    GraphicUnit,
    Group,
    LinearGradient,
    MoveTo,
    Path,
    RadialGradient,
    StrokeCap,
    StrokeJoin,
)
from tests.conftest import (
    ADD_XML,
    BROKEN_XML,
    COLOR_REF_XML,
    COLORS_RESOURCES_XML,
    GRADIENT_XML,
    GROUPED_XML,
    RADIAL_XML,
    STROKED_XML,
)


def _icon(xml: str, name: str = "Test") -> Icon:
    return Icon(name=name, original_file_name=f"{name.lower()}.xml", raw_xml=xml)


def test_parse_add(add_icon):
    vector = parse_icon(add_icon)
    assert vector.width == GraphicUnit(24.0, "dp")
    assert vector.viewport_width == 24.0
    assert vector.path_count == 1
    path = vector.nodes[0]
    assert isinstance(path, Path)
    assert path.fill == Color("FF000000")
    assert path.nodes[0] == MoveTo(19, 13)
    assert len(path.nodes) == 14


def test_stroke_attributes():
    path = parse_icon(_icon(STROKED_XML)).nodes[0]
    assert path.name == "check"
    assert path.fill is None
    assert path.stroke_color_hex == "FF1E88E5"
    assert path.stroke_line_width == GraphicUnit(2.0)
    assert path.stroke_line_cap is StrokeCap.ROUND
    assert path.stroke_line_join is StrokeJoin.ROUND
    assert path.stroke_alpha == 0.5
    assert path.fill_type is FillType.EVEN_ODD


def test_groups_and_skipped_clip_path():
    vector = parse_icon(_icon(GROUPED_XML))
    assert vector.width == GraphicUnit(48.0, "dp")
    assert [type(n) for n in vector.nodes] == [Group, Path]
    group = vector.nodes[0]
    assert group.name == "rotated"
    assert group.transform.rotation == 45
    assert group.transform.pivot_x == 12
    assert not group.transform.is_identity
    inner = group.children[1]
    assert isinstance(inner, Group)
    assert inner.transform.translation_x == 2
    assert group.children[0].fill == Color("FFFF0000")
    assert vector.path_count == 3


def test_paint_order_preserved():
    vector = parse_icon(_icon(GROUPED_XML))
    fills = [p.fill.hex for p in vector.iter_paths()]
    assert fills == ["FFFF0000", "FF00FF00", "FF0000FF"]


def test_linear_gradient_stop_order():
    fill = parse_icon(_icon(GRADIENT_XML)).nodes[0].fill
    assert isinstance(fill, LinearGradient)
    assert fill.color_stops == ((0.0, "FFFF0000"), (1.0, "FF0000FF"))
    assert (fill.end_x, fill.end_y) == (24.0, 24.0)


def test_radial_gradient_from_color_attributes():
    fill = parse_icon(_icon(RADIAL_XML)).nodes[0].fill
    assert isinstance(fill, RadialGradient)
    assert fill.radius == 12.0
    assert fill.color_stops == ((0.0, "FFFFFFFF"), (0.5, "FF808080"), (1.0, "FF000000"))


def test_viewport_falls_back_to_size():
    xml = '''<vector xmlns:android="http://schemas.android.com/apk/res/android"
        android:width="32dp" android:height="16dp"/>'''
    vector = parse_icon(_icon(xml))
    assert (vector.viewport_width, vector.viewport_height) == (32.0, 16.0)
    assert vector.nodes == ()


@pytest.mark.parametrize(
    "xml",
    [
        "",
        BROKEN_XML,
        "not xml at all",
        '<svg xmlns="http://www.w3.org/2000/svg"/>',
        '<vector xmlns:android="http://schemas.android.com/apk/res/android"/>',
        '<vector xmlns:android="http://schemas.android.com/apk/res/android" '
        'android:viewportWidth="0" android:viewportHeight="24"/>',
    ],
)
def test_malformed_documents(xml):
    with pytest.raises(MalformedVectorError):
        parse_icon(_icon(xml))


def test_unknown_enum_value():
    xml = ADD_XML.replace('android:fillColor="#FF000000"', 'android:strokeLineCap="pointy"')
    with pytest.raises(MalformedVectorError, match="strokeLineCap"):
        parse_icon(_icon(xml))


def test_bad_color():
    xml = ADD_XML.replace("#FF000000", "#XYZ")
    with pytest.raises(MalformedVectorError):
        parse_icon(_icon(xml))


def test_path_without_data():
    xml = ADD_XML.replace('android:pathData="M19,13h-6v6h-2v-6H5v-2h6V5h2v6h6v2z"', "")
    with pytest.raises(MalformedVectorError, match="pathData"):
        parse_icon(_icon(xml))


def test_sweep_gradient_unsupported():
    xml = GRADIENT_XML.replace('android:type="linear"', 'android:type="sweep"')
    with pytest.raises(MalformedVectorError, match="sweep"):
        parse_icon(_icon(xml))


def test_gradient_stroke_unsupported():
    xml = GRADIENT_XML.replace('name="android:fillColor"', 'name="android:strokeColor"')
    with pytest.raises(MalformedVectorError, match="gradient strokes"):
        parse_icon(_icon(xml))


def test_unresolved_color_reference():
    with pytest.raises(UnresolvedReferenceError, match="@color/brand"):
        parse_icon(_icon(COLOR_REF_XML))


def test_resolved_color_reference_chain():
    colors = parse_color_resources(COLORS_RESOURCES_XML)
    assert colors == {"@color/brand": "#FF6200EE", "@color/alias": "@color/brand"}
    xml = COLOR_REF_XML.replace("@color/brand", "@color/alias")
    path = parse_icon(_icon(xml), colors).nodes[0]
    assert path.fill == Color("FF6200EE")


def test_color_resources_rejects_other_roots():
    with pytest.raises(MalformedVectorError):
        parse_color_resources("<vector/>")


@pytest.mark.parametrize("value", ["NaN", "Infinity", "-inf", "1_0", "1e400"])
def test_non_finite_viewport(value):
    xml = ADD_XML.replace('android:viewportWidth="24"', f'android:viewportWidth="{value}"')
    with pytest.raises(MalformedVectorError, match="viewportWidth"):
        parse_icon(_icon(xml))


def test_non_finite_dimension():
    xml = ADD_XML.replace('android:width="24dp"', 'android:width="1e400dp"')
    with pytest.raises(MalformedVectorError, match="width"):
        parse_icon(_icon(xml))
