"""SVG → vector-drawable XML normalizer.

Covers the static subset icons use: paths and basic shapes, nested groups,
transforms, presentation attributes and inline ``style``, and linear/radial
gradients (including ``href`` inheritance). Clip paths, masks, filters,
text, images and ``<use>`` are skipped with a warning.

Group transforms map onto ``<group>`` attributes. A transform with shear
cannot, so it is baked into the path data instead.
"""

from __future__ import annotations

import logging
import math
import re
import xml.etree.ElementTree as ET
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from svgpathtools import parse_path

from svg2code.drawable.parser import AAPT_NS, ANDROID_NS
from svg2code.drawable.path_parser import parse_path_data
from svg2code.errors import MalformedVectorError, UnresolvedReferenceError
from svg2code.utils import geometry
from svg2code.utils.colors import parse_svg_color
from svg2code.vector.model import Close, CurveTo, GroupTransform, LineTo, MoveTo, QuadTo
from svg2code.vector.replay import replay

logger = logging.getLogger(__name__)

ET.register_namespace("android", ANDROID_NS)
ET.register_namespace("aapt", AAPT_NS)

XLINK_NS = "http://www.w3.org/1999/xlink"

_LENGTH_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*(px|pt|dp|mm|cm|in|em|%)?\s*$")
_NO_PAINT = frozenset({"none", "transparent"})
_URL_RE = re.compile(r"^url\(\s*['\"]?#([^'\")]+)['\"]?\s*\)\s*(.*)$")

SHAPE_TAGS = {"path", "rect", "circle", "ellipse", "line", "polyline", "polygon"}
SILENT_TAGS = {"defs", "title", "desc", "metadata", "style", "linearGradient", "radialGradient", "stop"}
UNSUPPORTED_TAGS = {"clipPath", "mask", "filter", "text", "image", "use", "pattern", "symbol", "switch", "svg"}

# Presentation properties inherited by children
INHERITED_PROPS = (
    "fill",
    "fill-opacity",
    "fill-rule",
    "stroke",
    "stroke-width",
    "stroke-opacity",
    "stroke-linecap",
    "stroke-linejoin",
    "stroke-miterlimit",
)

_CAP_VALUES = {"butt", "round", "square"}
_JOIN_VALUES = {"miter", "round", "bevel"}


def _local(tag: str) -> str:
    return tag.split("}")[-1] if "}" in tag else tag


def _android(name: str) -> str:
    return f"{{{ANDROID_NS}}}{name}"


def _fmt(value: float) -> str:
    """Shortest round-tripping text for a float, without a trailing ``.0``."""
    text = repr(round(float(value), 6))
    if text.endswith(".0"):
        text = text[:-2]
    return "0" if text == "-0" else text


class SvgNormalizer:
    """Converts one SVG document into vector-drawable XML text."""

    def __init__(self, svg_text: str, source_name: str = "<svg>") -> None:
        self.svg_text = svg_text
        self.source_name = source_name
        self._gradients: dict[str, ET.Element] = {}

    def convert(self) -> str:
        if not self.svg_text.strip():
            raise MalformedVectorError(f"{self.source_name}: empty document")
        try:
            root = ET.fromstring(self.svg_text)
        except ET.ParseError as e:
            raise MalformedVectorError(f"{self.source_name}: {e}") from e
        if _local(root.tag) != "svg":
            raise MalformedVectorError(f"{self.source_name}: root element is <{_local(root.tag)}>, expected <svg>")

        for element in root.iter():
            if _local(element.tag) in ("linearGradient", "radialGradient") and element.get("id"):
                self._gradients[element.get("id")] = element

        min_x, min_y, vw, vh = self._viewport(root)
        width = self._length(root.get("width")) or vw
        height = self._length(root.get("height")) or vh

        vector = ET.Element("vector")
        vector.set(_android("width"), f"{_fmt(width)}dp")
        vector.set(_android("height"), f"{_fmt(height)}dp")
        vector.set(_android("viewportWidth"), _fmt(vw))
        vector.set(_android("viewportHeight"), _fmt(vh))

        container = vector
        if min_x or min_y:
            container = ET.SubElement(vector, "group")
            container.set(_android("translateX"), _fmt(-min_x))
            container.set(_android("translateY"), _fmt(-min_y))

        self._children(root, container, self._style(root, {}), 1.0, None)

        ET.indent(vector, space="    ")
        return ET.tostring(vector, encoding="unicode") + "\n"

    # ── Document structure ────────────────────────────────────────────────

    def _viewport(self, root: ET.Element) -> tuple[float, float, float, float]:
        view_box = root.get("viewBox")
        if view_box:
            try:
                parts = [float(p) for p in re.split(r"[\s,]+", view_box.strip())]
            except ValueError:
                raise MalformedVectorError(f"{self.source_name}: invalid viewBox {view_box!r}") from None
            if len(parts) != 4 or not all(map(math.isfinite, parts)) or parts[2] <= 0 or parts[3] <= 0:
                raise MalformedVectorError(f"{self.source_name}: invalid viewBox {view_box!r}")
            return parts[0], parts[1], parts[2], parts[3]

        width = self._length(root.get("width"))
        height = self._length(root.get("height"))
        if not width or not height:
            raise MalformedVectorError(f"{self.source_name}: missing viewBox and width/height")
        return 0.0, 0.0, width, height

    def _length(self, raw: str | None) -> float | None:
        if raw is None:
            return None
        match = _LENGTH_RE.match(raw)
        if not match:
            raise MalformedVectorError(f"{self.source_name}: invalid length {raw!r}")
        if match.group(2) == "%":
            return None
        value = float(match.group(1))
        if not math.isfinite(value):
            raise MalformedVectorError(f"{self.source_name}: length {raw!r} is out of range")
        return value

    def _children(
        self,
        element: ET.Element,
        out: ET.Element,
        style: dict[str, str],
        opacity: float,
        bake: NDArray[np.float64] | None,
    ) -> None:
        for child in element:
            if not isinstance(child.tag, str):
                continue
            tag = _local(child.tag)
            if tag in SILENT_TAGS:
                continue
            if tag in UNSUPPORTED_TAGS:
                logger.warning("%s: skipping unsupported <%s>", self.source_name, tag)
                continue
            if tag != "g" and tag not in SHAPE_TAGS:
                logger.debug("%s: skipping unknown element <%s>", self.source_name, tag)
                continue

            child_style = self._style(child, style)
            if child_style.get("display") == "none" or child_style.get("visibility") == "hidden":
                continue
            child_opacity = opacity * self._number(child_style.get("opacity", "1"))

            target, child_bake = self._apply_transform(child, out, bake)
            if tag == "g":
                self._children(child, target, child_style, child_opacity, child_bake)
            else:
                self._shape(child, tag, target, child_style, child_opacity, child_bake)

    def _apply_transform(
        self,
        element: ET.Element,
        out: ET.Element,
        bake: NDArray[np.float64] | None,
    ) -> tuple[ET.Element, NDArray[np.float64] | None]:
        """Return (container for the element, matrix to bake into its paths)."""
        matrix = geometry.parse_svg_transform(element.get("transform"))
        if np.allclose(matrix, geometry.identity()):
            return out, bake
        if bake is not None or geometry.has_skew(matrix):
            return out, (bake if bake is not None else geometry.identity()) @ matrix

        group = ET.SubElement(out, "group")
        transform = geometry.decompose(matrix)
        defaults = GroupTransform()
        for attr, field_name in (
            ("rotation", "rotation"),
            ("scaleX", "scale_x"),
            ("scaleY", "scale_y"),
            ("translateX", "translation_x"),
            ("translateY", "translation_y"),
        ):
            value = getattr(transform, field_name)
            if value != getattr(defaults, field_name):
                group.set(_android(attr), _fmt(value))
        return group, None

    # ── Styling ───────────────────────────────────────────────────────────

    def _style(self, element: ET.Element, inherited: dict[str, str]) -> dict[str, str]:
        style = {k: v for k, v in inherited.items() if k in INHERITED_PROPS}
        for prop in (*INHERITED_PROPS, "opacity", "display", "visibility"):
            if element.get(prop) is not None:
                style[prop] = element.get(prop).strip()
        for declaration in (element.get("style") or "").split(";"):
            if ":" in declaration:
                key, value = declaration.split(":", 1)
                style[key.strip()] = value.strip()
        if style.get("fill") == "inherit":
            style["fill"] = inherited.get("fill", "black")
        return style

    def _number(self, raw: str) -> float:
        text = raw.strip()
        percent = text.endswith("%")
        match = _LENGTH_RE.match(text)
        if not match or match.group(2) not in (None, "%"):
            raise MalformedVectorError(f"{self.source_name}: {raw!r} is not a number")
        value = float(match.group(1))
        if not math.isfinite(value):
            raise MalformedVectorError(f"{self.source_name}: {raw!r} is out of range")
        return value / 100 if percent else value

    # ── Shapes ────────────────────────────────────────────────────────────

    def _shape(
        self,
        element: ET.Element,
        tag: str,
        out: ET.Element,
        style: dict[str, str],
        opacity: float,
        bake: NDArray[np.float64] | None,
    ) -> None:
        path_data = self._shape_path_data(element, tag)
        if not path_data:
            return
        if bake is not None:
            path_data = self._bake(path_data, bake)

        path = ET.SubElement(out, "path")
        if element.get("id"):
            path.set(_android("name"), element.get("id"))
        path.set(_android("pathData"), path_data)

        fill = style.get("fill", "black")
        if fill.strip().lower() not in _NO_PAINT:
            fill_alpha = opacity * self._number(style.get("fill-opacity", "1"))
            url = _URL_RE.match(fill)
            if url:
                self._gradient_fill(path, path_data, url.group(1), url.group(2).strip(), fill_alpha)
            else:
                path.set(_android("fillColor"), "#" + parse_svg_color(fill))
                if fill_alpha != 1.0:
                    path.set(_android("fillAlpha"), _fmt(fill_alpha))
            if style.get("fill-rule") == "evenodd":
                path.set(_android("fillType"), "evenOdd")

        stroke = style.get("stroke", "none")
        if stroke.strip().lower() not in _NO_PAINT:
            self._stroke(path, stroke, style, opacity)

    def _stroke(self, path: ET.Element, stroke: str, style: dict[str, str], opacity: float) -> None:
        url = _URL_RE.match(stroke)
        if url:
            gradient = self._gradients.get(url.group(1))
            stops = self._stops(gradient) if gradient is not None else []
            if not stops:
                if not url.group(2).strip():
                    raise UnresolvedReferenceError(f"{self.source_name}: cannot resolve stroke url(#{url.group(1)})")
                color = parse_svg_color(url.group(2).strip())
            else:
                logger.warning("%s: gradient strokes are not supported, using the first stop color", self.source_name)
                color = stops[0][1]
        else:
            color = parse_svg_color(stroke)

        path.set(_android("strokeColor"), "#" + color)
        path.set(_android("strokeWidth"), _fmt(self._length(style.get("stroke-width", "1")) or 0.0))
        stroke_alpha = opacity * self._number(style.get("stroke-opacity", "1"))
        if stroke_alpha != 1.0:
            path.set(_android("strokeAlpha"), _fmt(stroke_alpha))
        cap = style.get("stroke-linecap")
        if cap in _CAP_VALUES and cap != "butt":
            path.set(_android("strokeLineCap"), cap)
        join = style.get("stroke-linejoin")
        if join in _JOIN_VALUES and join != "miter":
            path.set(_android("strokeLineJoin"), join)
        if "stroke-miterlimit" in style:
            path.set(_android("strokeMiterLimit"), _fmt(self._number(style["stroke-miterlimit"])))

    def _shape_path_data(self, element: ET.Element, tag: str) -> str:
        def num(name: str, default: float = 0.0) -> float:
            raw = element.get(name)
            return default if raw is None else (self._length(raw) or 0.0)

        if tag == "path":
            return (element.get("d") or "").strip()

        if tag == "rect":
            x, y, w, h = num("x"), num("y"), num("width"), num("height")
            if w <= 0 or h <= 0:
                return ""
            rx_raw, ry_raw = element.get("rx"), element.get("ry")
            rx = num("rx") if rx_raw is not None else (num("ry") if ry_raw is not None else 0.0)
            ry = num("ry") if ry_raw is not None else rx
            rx, ry = min(rx, w / 2), min(ry, h / 2)
            if rx <= 0 or ry <= 0:
                return f"M{_fmt(x)},{_fmt(y)}h{_fmt(w)}v{_fmt(h)}h{_fmt(-w)}z"
            return (
                f"M{_fmt(x + rx)},{_fmt(y)}"
                f"h{_fmt(w - 2 * rx)}"
                f"a{_fmt(rx)},{_fmt(ry)} 0 0,1 {_fmt(rx)},{_fmt(ry)}"
                f"v{_fmt(h - 2 * ry)}"
                f"a{_fmt(rx)},{_fmt(ry)} 0 0,1 {_fmt(-rx)},{_fmt(ry)}"
                f"h{_fmt(-(w - 2 * rx))}"
                f"a{_fmt(rx)},{_fmt(ry)} 0 0,1 {_fmt(-rx)},{_fmt(-ry)}"
                f"v{_fmt(-(h - 2 * ry))}"
                f"a{_fmt(rx)},{_fmt(ry)} 0 0,1 {_fmt(rx)},{_fmt(-ry)}z"
            )

        if tag in ("circle", "ellipse"):
            cx, cy = num("cx"), num("cy")
            if tag == "circle":
                rx = ry = num("r")
            else:
                rx, ry = num("rx"), num("ry")
            if rx <= 0 or ry <= 0:
                return ""
            return (
                f"M{_fmt(cx - rx)},{_fmt(cy)}"
                f"a{_fmt(rx)},{_fmt(ry)} 0 1,0 {_fmt(2 * rx)},0"
                f"a{_fmt(rx)},{_fmt(ry)} 0 1,0 {_fmt(-2 * rx)},0z"
            )

        if tag == "line":
            return f"M{_fmt(num('x1'))},{_fmt(num('y1'))}L{_fmt(num('x2'))},{_fmt(num('y2'))}"

        if tag in ("polyline", "polygon"):
            tokens = [t for t in re.split(r"[\s,]+", (element.get("points") or "").strip()) if t]
            try:
                coords = [float(t) for t in tokens]
            except ValueError:
                raise MalformedVectorError(f"{self.source_name}: invalid <{tag}> points") from None
            if not all(map(math.isfinite, coords)):
                raise MalformedVectorError(f"{self.source_name}: invalid <{tag}> points")
            if len(coords) < 4:
                return ""
            pairs = [f"{_fmt(coords[i])},{_fmt(coords[i + 1])}" for i in range(0, len(coords) - 1, 2)]
            data = "M" + pairs[0] + "L" + " ".join(pairs[1:])
            return data + "z" if tag == "polygon" else data

        return ""

    def _bake(self, path_data: str, matrix: NDArray[np.float64]) -> str:
        """Apply ``matrix`` to path data, returning absolute commands."""
        parts: list[str] = []
        for node in replay(parse_path_data(path_data)):
            if isinstance(node, MoveTo):
                parts.append("M" + self._point(matrix, node.x, node.y))
            elif isinstance(node, LineTo):
                parts.append("L" + self._point(matrix, node.x, node.y))
            elif isinstance(node, CurveTo):
                parts.append(
                    "C"
                    + " ".join(
                        self._point(matrix, x, y)
                        for x, y in ((node.x1, node.y1), (node.x2, node.y2), (node.x3, node.y3))
                    )
                )
            elif isinstance(node, QuadTo):
                parts.append(
                    "Q" + " ".join(self._point(matrix, x, y) for x, y in ((node.x1, node.y1), (node.x2, node.y2)))
                )
            elif isinstance(node, Close):
                parts.append("Z")
        return "".join(parts)

    @staticmethod
    def _point(matrix: NDArray[np.float64], x: float, y: float) -> str:
        p = geometry.apply(matrix, complex(x, y))
        return f"{_fmt(p.real)},{_fmt(p.imag)}"

    # ── Gradients ─────────────────────────────────────────────────────────

    def _gradient_fill(self, path: ET.Element, path_data: str, ref: str, fallback: str, alpha: float) -> None:
        gradient = self._gradients.get(ref)
        if gradient is None:
            if not fallback:
                raise UnresolvedReferenceError(f"{self.source_name}: cannot resolve fill url(#{ref})")
            path.set(_android("fillColor"), "#" + parse_svg_color(fallback, alpha))
            return

        stops = self._stops(gradient)
        if not stops:
            return
        if len(stops) == 1:
            path.set(_android("fillColor"), "#" + stops[0][1])
            if alpha != 1.0:
                path.set(_android("fillAlpha"), _fmt(alpha))
            return
        if alpha != 1.0:
            path.set(_android("fillAlpha"), _fmt(alpha))

        attr = ET.SubElement(path, f"{{{AAPT_NS}}}attr", {"name": "android:fillColor"})
        out = ET.SubElement(attr, "gradient")
        to_user = self._gradient_space(gradient, path_data)
        kind = _local(gradient.tag)

        if kind == "linearGradient":
            x1 = self._gradient_attr(gradient, "x1", "0%")
            y1 = self._gradient_attr(gradient, "y1", "0%")
            x2 = self._gradient_attr(gradient, "x2", "100%")
            y2 = self._gradient_attr(gradient, "y2", "0%")
            start = to_user(x1, y1)
            end = to_user(x2, y2)
            out.set(_android("type"), "linear")
            out.set(_android("startX"), _fmt(start.real))
            out.set(_android("startY"), _fmt(start.imag))
            out.set(_android("endX"), _fmt(end.real))
            out.set(_android("endY"), _fmt(end.imag))
        else:
            cx = self._gradient_attr(gradient, "cx", "50%")
            cy = self._gradient_attr(gradient, "cy", "50%")
            r = self._gradient_attr(gradient, "r", "50%")
            center = to_user(cx, cy)
            edge = to_user(self._offset_length(cx, r), cy)
            out.set(_android("type"), "radial")
            out.set(_android("centerX"), _fmt(center.real))
            out.set(_android("centerY"), _fmt(center.imag))
            out.set(_android("gradientRadius"), _fmt(abs(edge - center)))

        for offset, color in stops:
            item = ET.SubElement(out, "item")
            item.set(_android("offset"), _fmt(offset))
            item.set(_android("color"), "#" + color)

    def _gradient_chain(self, gradient: ET.Element):
        """Yield the gradient and the gradients it inherits from via href."""
        seen: set[int] = set()
        current: ET.Element | None = gradient
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            yield current
            href = current.get(f"{{{XLINK_NS}}}href") or current.get("href")
            if not href:
                return
            ref = href.lstrip("#")
            if ref not in self._gradients:
                raise UnresolvedReferenceError(f"{self.source_name}: cannot resolve gradient href {href!r}")
            current = self._gradients[ref]

    def _gradient_attr(self, gradient: ET.Element, name: str, default: str) -> str:
        for element in self._gradient_chain(gradient):
            if element.get(name) is not None:
                return element.get(name)
        return default

    def _stops(self, gradient: ET.Element) -> list[tuple[float, str]]:
        for element in self._gradient_chain(gradient):
            stop_elements = [s for s in element if _local(s.tag) == "stop"]
            if stop_elements:
                break
        else:
            return []

        stops: list[tuple[float, str]] = []
        previous = 0.0
        for stop in stop_elements:
            style = self._style(stop, {})
            for prop in ("stop-color", "stop-opacity"):
                if stop.get(prop) is not None:
                    style.setdefault(prop, stop.get(prop))
            offset = min(max(self._number(stop.get("offset", "0")), 0.0), 1.0)
            # Offsets never decrease
            offset = max(offset, previous)
            previous = offset
            opacity = self._number(style.get("stop-opacity", "1"))
            stops.append((offset, parse_svg_color(style.get("stop-color", "black"), opacity)))
        return stops

    def _gradient_space(self, gradient: ET.Element, path_data: str):
        """Return a function mapping gradient coordinates to path user space."""
        units = self._gradient_attr(gradient, "gradientUnits", "objectBoundingBox")
        matrix = geometry.parse_svg_transform(self._gradient_attr(gradient, "gradientTransform", ""))

        if units == "objectBoundingBox":
            try:
                xmin, xmax, ymin, ymax = parse_path(path_data).bbox()
            except (ValueError, IndexError) as e:
                raise MalformedVectorError(f"{self.source_name}: cannot measure path for gradient: {e}") from e
            box = geometry.translate(xmin, ymin) @ geometry.scale(xmax - xmin, ymax - ymin)
            matrix = box @ matrix

            def to_user(x: str, y: str) -> complex:
                return geometry.apply(matrix, complex(self._number(x), self._number(y)))

            return to_user

        def to_user(x: str, y: str) -> complex:
            return geometry.apply(matrix, complex(self._length(x) or 0.0, self._length(y) or 0.0))

        return to_user

    def _offset_length(self, base: str, delta: str) -> str:
        """``base + delta`` for two lengths that share a unit (used for radii)."""
        if base.endswith("%") and delta.endswith("%"):
            return f"{self._number(base) * 100 + self._number(delta) * 100}%"
        return _fmt(self._number(base) + self._number(delta))


def svg_to_drawable(svg_text: str, source_name: str = "<svg>") -> str:
    """Convert SVG text to vector-drawable XML text."""
    return SvgNormalizer(svg_text, source_name).convert()


def normalize_svg(svg_file: Path, out_file: Path) -> Path:
    """Convert ``svg_file`` into vector-drawable XML at ``out_file``."""
    try:
        svg_text = svg_file.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedVectorError(f"{svg_file.name}: not UTF-8 text") from e
    xml_text = svg_to_drawable(svg_text, svg_file.name)
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(xml_text, encoding="utf-8")
    return out_file
