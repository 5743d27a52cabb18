"""Vector-drawable parser — facade over ElementTree + the path-data grammar.

Converts one Icon's vector-drawable XML → Vector IR.
"""

from __future__ import annotations

import logging
import math
import re
import xml.etree.ElementTree as ET
from collections.abc import Mapping

from svg2code.drawable.path_parser import parse_path_data
from svg2code.engine.context import Icon
from svg2code.errors import MalformedVectorError, UnresolvedReferenceError
from svg2code.utils.colors import normalize_hex
from svg2code.vector.model import (
    Color,
    Fill,
    FillType,
    GraphicUnit,
    Group,
    GroupTransform,
    LinearGradient,
    Path,
    RadialGradient,
    StrokeCap,
    StrokeJoin,
    Vector,
    VectorNode,
)

logger = logging.getLogger(__name__)

ANDROID_NS = "http://schemas.android.com/apk/res/android"
AAPT_NS = "http://schemas.android.com/aapt"

_NUMBER_RE = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?\s*$")
_DIMENSION_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-zA-Z]*)\s*$")

# Reference chains longer than this are treated as cycles
_MAX_REFERENCE_HOPS = 8

_STROKE_CAPS = {cap.value: cap for cap in StrokeCap}
_STROKE_JOINS = {join.value: join for join in StrokeJoin}
_FILL_TYPES = {ft.value.lower(): ft for ft in FillType}


def _local(tag: str) -> str:
    """Strip the namespace from an ElementTree tag."""
    return tag.split("}")[-1] if "}" in tag else tag


def _android(name: str) -> str:
    return f"{{{ANDROID_NS}}}{name}"


class IconParser:
    """Parses one Icon into a Vector. Raises MalformedVectorError or
    UnresolvedReferenceError; never returns a partial result."""

    def __init__(self, icon: Icon, color_resources: Mapping[str, str] | None = None) -> None:
        self.icon = icon
        self.color_resources = dict(color_resources or {})

    def parse(self) -> Vector:
        if not self.icon.raw_xml.strip():
            raise MalformedVectorError(f"{self.icon.original_file_name}: empty document")
        try:
            root = ET.fromstring(self.icon.raw_xml)
        except ET.ParseError as e:
            raise MalformedVectorError(f"{self.icon.original_file_name}: {e}") from e

        if _local(root.tag) != "vector":
            raise MalformedVectorError(
                f"{self.icon.original_file_name}: root element is <{_local(root.tag)}>, expected <vector>"
            )

        width = self._dimension(root, "width")
        height = self._dimension(root, "height")
        viewport_width = self._float(root, "viewportWidth")
        viewport_height = self._float(root, "viewportHeight")

        if viewport_width is None:
            viewport_width = width.value if width else None
        if viewport_height is None:
            viewport_height = height.value if height else None
        if viewport_width is None or viewport_height is None:
            raise MalformedVectorError(f"{self.icon.original_file_name}: missing viewport dimensions")
        if viewport_width <= 0 or viewport_height <= 0:
            raise MalformedVectorError(
                f"{self.icon.original_file_name}: viewport must be positive, "
                f"got {viewport_width}×{viewport_height}"
            )

        vector = Vector(
            width=width or GraphicUnit(viewport_width),
            height=height or GraphicUnit(viewport_height),
            viewport_width=viewport_width,
            viewport_height=viewport_height,
            nodes=self._children(root),
            name=root.get(_android("name")),
        )
        logger.debug(
            "Parsed %s: %d paths, viewport %.1f×%.1f",
            self.icon.original_file_name,
            vector.path_count,
            viewport_width,
            viewport_height,
        )
        return vector

    # ── Elements ──────────────────────────────────────────────────────────

    def _children(self, element: ET.Element) -> tuple[VectorNode, ...]:
        nodes: list[VectorNode] = []
        for child in element:
            tag = _local(child.tag)
            if tag == "group":
                nodes.append(self._group(child))
            elif tag == "path":
                nodes.append(self._path(child))
            elif tag == "clip-path":
                logger.debug("%s: skipping unsupported <clip-path>", self.icon.original_file_name)
            else:
                logger.debug("%s: skipping unknown element <%s>", self.icon.original_file_name, tag)
        return tuple(nodes)

    def _group(self, element: ET.Element) -> Group:
        identity = GroupTransform()
        transform = GroupTransform(
            rotation=self._float(element, "rotation", identity.rotation),
            pivot_x=self._float(element, "pivotX", identity.pivot_x),
            pivot_y=self._float(element, "pivotY", identity.pivot_y),
            scale_x=self._float(element, "scaleX", identity.scale_x),
            scale_y=self._float(element, "scaleY", identity.scale_y),
            translation_x=self._float(element, "translateX", identity.translation_x),
            translation_y=self._float(element, "translateY", identity.translation_y),
        )
        return Group(
            name=element.get(_android("name")),
            transform=transform,
            children=self._children(element),
        )

    def _path(self, element: ET.Element) -> Path:
        path_data = element.get(_android("pathData"))
        if path_data is None:
            raise MalformedVectorError(f"{self.icon.original_file_name}: <path> without android:pathData")
        try:
            nodes = tuple(parse_path_data(path_data))
        except MalformedVectorError as e:
            raise MalformedVectorError(f"{self.icon.original_file_name}: {e}") from e

        inline = self._inline_attrs(element)
        if "strokeColor" in inline:
            raise MalformedVectorError(f"{self.icon.original_file_name}: gradient strokes are not supported")

        fill: Fill | None
        if "fillColor" in inline:
            fill = self._gradient(inline["fillColor"])
        else:
            fill_hex = self._color(element, "fillColor")
            fill = Color(fill_hex) if fill_hex else None

        stroke_width = self._dimension(element, "strokeWidth")
        return Path(
            nodes=nodes,
            fill=fill,
            fill_alpha=self._float(element, "fillAlpha", 1.0),
            stroke_color_hex=self._color(element, "strokeColor"),
            stroke_alpha=self._float(element, "strokeAlpha", 1.0),
            stroke_line_width=stroke_width,
            stroke_line_cap=self._enum(element, "strokeLineCap", _STROKE_CAPS, StrokeCap.BUTT),
            stroke_line_join=self._enum(element, "strokeLineJoin", _STROKE_JOINS, StrokeJoin.MITER),
            stroke_line_miter=self._float(element, "strokeMiterLimit", 4.0),
            fill_type=self._enum(element, "fillType", _FILL_TYPES, FillType.NON_ZERO),
            name=element.get(_android("name")),
        )

    def _inline_attrs(self, element: ET.Element) -> dict[str, ET.Element]:
        """Collect ``<aapt:attr name="android:X"><gradient/></aapt:attr>`` children by X."""
        found: dict[str, ET.Element] = {}
        for child in element:
            if _local(child.tag) != "attr":
                continue
            name = child.get("name", "")
            attr = name.split(":", 1)[-1]
            gradient = next((g for g in child if _local(g.tag) == "gradient"), None)
            if gradient is None:
                raise MalformedVectorError(
                    f"{self.icon.original_file_name}: <aapt:attr name={name!r}> has no <gradient>"
                )
            found[attr] = gradient
        return found

    def _gradient(self, element: ET.Element) -> Fill:
        kind = (element.get(_android("type")) or "linear").lower()
        stops = self._gradient_stops(element)

        if kind == "linear":
            return LinearGradient(
                color_stops=stops,
                start_x=self._float(element, "startX", 0.0),
                start_y=self._float(element, "startY", 0.0),
                end_x=self._float(element, "endX", 0.0),
                end_y=self._float(element, "endY", 0.0),
            )
        if kind == "radial":
            return RadialGradient(
                color_stops=stops,
                center_x=self._float(element, "centerX", 0.0),
                center_y=self._float(element, "centerY", 0.0),
                radius=self._float(element, "gradientRadius", 0.0),
            )
        raise MalformedVectorError(f"{self.icon.original_file_name}: unsupported gradient type {kind!r}")

    def _gradient_stops(self, element: ET.Element) -> tuple[tuple[float, str], ...]:
        stops: list[tuple[float, str]] = []
        items = [item for item in element if _local(item.tag) == "item"]
        if items:
            for item in items:
                offset = self._float(item, "offset")
                color = self._color(item, "color")
                if offset is None or color is None:
                    raise MalformedVectorError(
                        f"{self.icon.original_file_name}: gradient <item> needs android:offset and android:color"
                    )
                stops.append((offset, color))
        else:
            for attr, offset in (("startColor", 0.0), ("centerColor", 0.5), ("endColor", 1.0)):
                color = self._color(element, attr)
                if color is not None:
                    stops.append((offset, color))

        if len(stops) < 2:
            raise MalformedVectorError(f"{self.icon.original_file_name}: gradient needs at least 2 color stops")
        for offset, _ in stops:
            if not 0.0 <= offset <= 1.0:
                raise MalformedVectorError(
                    f"{self.icon.original_file_name}: gradient stop offset {offset} outside [0, 1]"
                )
        return tuple(stops)

    # ── Attributes ────────────────────────────────────────────────────────

    def _float(self, element: ET.Element, name: str, default: float | None = None) -> float | None:
        raw = element.get(_android(name))
        if raw is None:
            return default
        # float() alone would accept "NaN", "Infinity" and "1_0"
        value = float(raw) if _NUMBER_RE.match(raw) else math.nan
        if not math.isfinite(value):
            raise MalformedVectorError(f"{self.icon.original_file_name}: android:{name}={raw!r} is not a number")
        return value

    def _dimension(self, element: ET.Element, name: str) -> GraphicUnit | None:
        raw = element.get(_android(name))
        if raw is None:
            return None
        match = _DIMENSION_RE.match(raw)
        if not match:
            raise MalformedVectorError(
                f"{self.icon.original_file_name}: android:{name}={raw!r} is not a dimension"
            )
        value = float(match.group(1))
        if not math.isfinite(value):
            raise MalformedVectorError(f"{self.icon.original_file_name}: android:{name}={raw!r} is out of range")
        return GraphicUnit(value, match.group(2) or None)

    def _enum(self, element: ET.Element, name: str, choices: dict, default):
        raw = element.get(_android(name))
        if raw is None:
            return default
        try:
            return choices[raw.strip().lower()]
        except KeyError:
            raise MalformedVectorError(
                f"{self.icon.original_file_name}: android:{name}={raw!r} is not one of {sorted(choices)}"
            ) from None

    def _color(self, element: ET.Element, name: str) -> str | None:
        raw = element.get(_android(name))
        if raw is None:
            return None
        value = self._resolve_reference(raw.strip())
        try:
            return normalize_hex(value)
        except MalformedVectorError as e:
            raise MalformedVectorError(f"{self.icon.original_file_name}: android:{name}: {e}") from e

    def _resolve_reference(self, value: str) -> str:
        hops = 0
        while value.startswith(("@", "?")):
            if value not in self.color_resources or hops >= _MAX_REFERENCE_HOPS:
                raise UnresolvedReferenceError(f"{self.icon.original_file_name}: cannot resolve {value!r}")
            value = self.color_resources[value].strip()
            hops += 1
        return value


def parse_icon(icon: Icon, color_resources: Mapping[str, str] | None = None) -> Vector:
    """Parse an Icon's vector-drawable XML into a Vector."""
    return IconParser(icon, color_resources).parse()


def parse_color_resources(xml_text: str) -> dict[str, str]:
    """Read an Android ``<resources>`` file into ``{"@color/name": value}``."""
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise MalformedVectorError(f"color resources: {e}") from e
    if _local(root.tag) != "resources":
        raise MalformedVectorError(f"color resources: root element is <{_local(root.tag)}>, expected <resources>")

    colors: dict[str, str] = {}
    for element in root:
        if _local(element.tag) == "color" and element.get("name"):
            colors[f"@color/{element.get('name')}"] = (element.text or "").strip()
    return colors
