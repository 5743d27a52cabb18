"""Backend A — Jetpack Compose ``ImageVector`` properties.

Each icon becomes a lazily built, cached extension property on its group
object:

    public val Icons.Add: ImageVector
        get() {
            if (_add != null) {
                return _add!!
            }
            _add = ImageVector.Builder(...).apply {
                path(fill = SolidColor(Color(0xFF000000))) {
                    moveTo(19.0f, 13.0f)
                    ...
                }
            }.build()
            return _add!!
        }

Groups get their own file declaring the group object and an ``AllAssets``
list covering the group and its descendants.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from svg2code.emitters.base import CodeBlock, SourceEmitter, SourceFile
from svg2code.emitters.registry import emitter
from svg2code.engine.context import GeneratedGroup, GroupContext
from svg2code.models.options import OutputBackend
from svg2code.utils.names import KOTLIN_KEYWORDS
from svg2code.vector.model import (
    ArcTo,
    Close,
    Color,
    CurveTo,
    Fill,
    FillType,
    Group,
    GroupTransform,
    HorizontalTo,
    LinearGradient,
    LineTo,
    MoveTo,
    Path,
    PathNode,
    QuadTo,
    RadialGradient,
    ReflectiveCurveTo,
    ReflectiveQuadTo,
    StrokeCap,
    StrokeJoin,
    Vector,
    VectorNode,
    VerticalTo,
)

IMAGE_VECTOR = "androidx.compose.ui.graphics.vector.ImageVector"

_CAP_NAMES = {StrokeCap.BUTT: "Butt", StrokeCap.ROUND: "Round", StrokeCap.SQUARE: "Square"}
_JOIN_NAMES = {StrokeJoin.MITER: "Miter", StrokeJoin.ROUND: "Round", StrokeJoin.BEVEL: "Bevel"}

# PathBuilder method per command letter
_BUILDER_METHODS = {
    "M": "moveTo",
    "L": "lineTo",
    "H": "horizontalLineTo",
    "V": "verticalLineTo",
    "C": "curveTo",
    "S": "reflectiveCurveTo",
    "Q": "quadTo",
    "T": "reflectiveQuadTo",
    "A": "arcTo",
}


def kotlin_float(value: float) -> str:
    """Kotlin ``Float`` literal: ``24.0f``, ``-0.5f``."""
    text = repr(float(value))
    if "e" in text or "E" in text:
        text = f"{float(value):.10f}".rstrip("0")
        if text.endswith("."):
            text += "0"
    if text in ("inf", "-inf", "nan"):
        raise ValueError(f"Cannot emit non-finite value {value!r}")
    return f"{text}f"


def kotlin_dp(value: float) -> str:
    return kotlin_float(value)[:-1] + ".dp"


def kotlin_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
    return f'"{escaped}"'


def kotlin_color(hex_argb: str) -> str:
    return f"Color(0x{hex_argb})"


def kotlin_qualified(name: str) -> str:
    """Dotted name with reserved segments backtick-escaped: ``com.example.`in`.A``."""
    return ".".join(f"`{part}`" if part in KOTLIN_KEYWORDS else part for part in name.split("."))


def package_dir(package: str) -> PurePosixPath:
    return PurePosixPath(*package.split(".")) if package else PurePosixPath(".")


def backing_field(symbol_name: str) -> str:
    return "_" + symbol_name[0].lower() + symbol_name[1:]


class _Imports:
    def __init__(self, package: str) -> None:
        self.package = package
        self._names: set[str] = set()

    def add(self, qualified: str) -> None:
        # Same-package declarations need no import
        if qualified.rsplit(".", 1)[0] != self.package:
            self._names.add(qualified)

    def render(self, block: CodeBlock) -> None:
        for name in sorted(self._names):
            block.add(f"import {kotlin_qualified(name)}")
        if self._names:
            block.add()


def path_node_call(node: PathNode) -> str:
    """One PathBuilder call for a path command, e.g. ``lineToRelative(1.0f, 2.0f)``."""
    if isinstance(node, Close):
        return "close()"

    if isinstance(node, MoveTo) or isinstance(node, LineTo) or isinstance(node, ReflectiveQuadTo):
        args = [node.x, node.y]
    elif isinstance(node, HorizontalTo):
        args = [node.x]
    elif isinstance(node, VerticalTo):
        args = [node.y]
    elif isinstance(node, CurveTo):
        args = [node.x1, node.y1, node.x2, node.y2, node.x3, node.y3]
    elif isinstance(node, ReflectiveCurveTo) or isinstance(node, QuadTo):
        args = [node.x1, node.y1, node.x2, node.y2]
    elif isinstance(node, ArcTo):
        return (
            f"{_method(node)}({kotlin_float(node.horizontal_radius)}, {kotlin_float(node.vertical_radius)}, "
            f"{kotlin_float(node.theta)}, {str(node.large_arc).lower()}, {str(node.sweep).lower()}, "
            f"{kotlin_float(node.x)}, {kotlin_float(node.y)})"
        )
    else:
        raise TypeError(f"Unknown path node: {node!r}")

    return f"{_method(node)}({', '.join(kotlin_float(a) for a in args)})"


def _method(node: PathNode) -> str:
    method = _BUILDER_METHODS[node.command]
    return method + "Relative" if node.relative else method


@emitter(OutputBackend.COMPOSE, description="Jetpack Compose ImageVector properties")
class ComposeEmitter(SourceEmitter):
    extension = "kt"

    def emit(
        self,
        vector: Vector,
        symbol_name: str,
        group_context: GroupContext,
        generate_preview: bool = True,
    ) -> SourceFile:
        package = group_context.icons_package
        imports = _Imports(package)
        body = CodeBlock()

        imports.add(IMAGE_VECTOR)
        imports.add("androidx.compose.ui.unit.dp")
        if group_context.class_name:
            imports.add(f"{group_context.package}.{group_context.class_name}")
        receiver = group_context.class_name or group_context.group_name
        cache = backing_field(symbol_name)

        body.add(f"public val {receiver}.{symbol_name}: ImageVector")
        body.indent()
        body.begin("get() {")
        body.begin(f"if ({cache} != null) {{")
        body.add(f"return {cache}!!")
        body.end()
        body.begin(
            f"{cache} = ImageVector.Builder("
            f"name = \"{symbol_name}\", "
            f"defaultWidth = {kotlin_dp(vector.width.value)}, "
            f"defaultHeight = {kotlin_dp(vector.height.value)}, "
            f"viewportWidth = {kotlin_float(vector.viewport_width)}, "
            f"viewportHeight = {kotlin_float(vector.viewport_height)}"
            f").apply {{"
        )
        for node in vector.nodes:
            self._node(node, body, imports)
        body.end("}.build()")
        body.add(f"return {cache}!!")
        body.end()
        body.dedent()
        body.add()
        body.add(f"private var {cache}: ImageVector? = null")

        if generate_preview:
            imports.add("androidx.compose.foundation.Image")
            imports.add("androidx.compose.foundation.layout.Box")
            imports.add("androidx.compose.foundation.layout.padding")
            imports.add("androidx.compose.runtime.Composable")
            imports.add("androidx.compose.ui.Modifier")
            imports.add("androidx.compose.ui.tooling.preview.Preview")
            body.add()
            body.add("@Preview")
            body.add("@Composable")
            body.begin("private fun Preview() {")
            body.begin("Box(modifier = Modifier.padding(12.dp)) {")
            body.add(f"Image(imageVector = {receiver}.{symbol_name}, contentDescription = \"\")")
            body.end()
            body.end()

        return SourceFile(
            name=symbol_name,
            file_name=f"{symbol_name}.{self.extension}",
            text=self._file(package, imports, body),
            relative_dir=package_dir(package),
        )

    def emit_group(self, group: GeneratedGroup, all_assets_property_name: str) -> SourceFile:
        context = group.context
        imports = _Imports(context.package)
        body = CodeBlock()

        body.add(f"public object {context.class_name}")
        if group.parent is not None:
            imports.add(f"{group.parent.package}.{group.parent.class_name}")
            body.add()
            body.add(f"public val {group.parent.class_name}.{context.group_name}: {context.class_name}")
            body.add(f"    get() = {context.class_name}")

        imports.add(IMAGE_VECTOR)
        parts: list[str] = []
        for child in group.children:
            imports.add(f"{child.package}.{child.name}")
            imports.add(f"{child.package}.{all_assets_property_name}")
            parts.append(f"{context.class_name}.{child.name}.{all_assets_property_name}")
        own_icons = [f"{context.class_name}.{name}" for name in sorted(group.icons.values())]
        for name in sorted(group.icons.values()):
            imports.add(f"{context.icons_package}.{name}")
        if own_icons or not parts:
            parts.append(f"listOf({', '.join(own_icons)})")

        cache = "__" + all_assets_property_name
        body.add()
        body.add(f"private var {cache}: List<ImageVector>? = null")
        body.add()
        body.add(f"public val {context.class_name}.{all_assets_property_name}: List<ImageVector>")
        body.indent()
        body.begin("get() {")
        body.begin(f"if ({cache} != null) {{")
        body.add(f"return {cache}!!")
        body.end()
        body.add(f"{cache} = {' + '.join(parts)}")
        body.add(f"return {cache}!!")
        body.end()
        body.dedent()

        return SourceFile(
            name=context.class_name,
            file_name=f"{context.class_name}.{self.extension}",
            text=self._file(context.package, imports, body),
            relative_dir=package_dir(context.package),
        )

    # ── Vector nodes ──────────────────────────────────────────────────────

    def _node(self, node: VectorNode, body: CodeBlock, imports: _Imports) -> None:
        if isinstance(node, Group):
            self._group(node, body, imports)
        elif isinstance(node, Path):
            self._path(node, body, imports)
        else:
            raise TypeError(f"Unknown vector node: {node!r}")

    def _group(self, group: Group, body: CodeBlock, imports: _Imports) -> None:
        imports.add("androidx.compose.ui.graphics.vector.group")
        args: list[str] = []
        if group.name:
            args.append(f"name = {kotlin_string(group.name)}")
        defaults = GroupTransform()
        for field_name, param in (
            ("rotation", "rotate"),
            ("pivot_x", "pivotX"),
            ("pivot_y", "pivotY"),
            ("scale_x", "scaleX"),
            ("scale_y", "scaleY"),
            ("translation_x", "translationX"),
            ("translation_y", "translationY"),
        ):
            value = getattr(group.transform, field_name)
            if value != getattr(defaults, field_name):
                args.append(f"{param} = {kotlin_float(value)}")

        body.begin(f"group({', '.join(args)}) {{")
        for child in group.children:
            self._node(child, body, imports)
        body.end()

    def _path(self, path: Path, body: CodeBlock, imports: _Imports) -> None:
        imports.add("androidx.compose.ui.graphics.vector.path")
        args: list[str] = []
        if path.name:
            args.append(f"name = {kotlin_string(path.name)}")
        if path.fill is not None:
            args.append(f"fill = {self._fill(path.fill, imports)}")
        if path.fill_alpha != 1.0:
            args.append(f"fillAlpha = {kotlin_float(path.fill_alpha)}")
        if path.stroke_color_hex is not None:
            imports.add("androidx.compose.ui.graphics.SolidColor")
            imports.add("androidx.compose.ui.graphics.Color")
            args.append(f"stroke = SolidColor({kotlin_color(path.stroke_color_hex)})")
        if path.stroke_alpha != 1.0:
            args.append(f"strokeAlpha = {kotlin_float(path.stroke_alpha)}")
        if path.stroke_line_width is not None and path.stroke_line_width.value != 0.0:
            args.append(f"strokeLineWidth = {kotlin_float(path.stroke_line_width.value)}")
        if path.stroke_line_cap is not StrokeCap.BUTT:
            imports.add("androidx.compose.ui.graphics.StrokeCap")
            args.append(f"strokeLineCap = StrokeCap.{_CAP_NAMES[path.stroke_line_cap]}")
        if path.stroke_line_join is not StrokeJoin.MITER:
            imports.add("androidx.compose.ui.graphics.StrokeJoin")
            args.append(f"strokeLineJoin = StrokeJoin.{_JOIN_NAMES[path.stroke_line_join]}")
        if path.stroke_line_miter != 4.0:
            args.append(f"strokeLineMiter = {kotlin_float(path.stroke_line_miter)}")
        if path.fill_type is FillType.EVEN_ODD:
            imports.add("androidx.compose.ui.graphics.PathFillType")
            args.append("pathFillType = PathFillType.EvenOdd")

        body.begin(f"path({', '.join(args)}) {{")
        for node in path.nodes:
            body.add(path_node_call(node))
        body.end()

    def _fill(self, fill: Fill, imports: _Imports) -> str:
        imports.add("androidx.compose.ui.graphics.Color")
        if isinstance(fill, Color):
            imports.add("androidx.compose.ui.graphics.SolidColor")
            return f"SolidColor({kotlin_color(fill.hex)})"

        imports.add("androidx.compose.ui.graphics.Brush")
        imports.add("androidx.compose.ui.geometry.Offset")
        stops = ", ".join(f"{kotlin_float(offset)} to {kotlin_color(hex_argb)}" for offset, hex_argb in fill.color_stops)
        if isinstance(fill, LinearGradient):
            return (
                f"Brush.linearGradient({stops}, "
                f"start = Offset({kotlin_float(fill.start_x)}, {kotlin_float(fill.start_y)}), "
                f"end = Offset({kotlin_float(fill.end_x)}, {kotlin_float(fill.end_y)}))"
            )
        if isinstance(fill, RadialGradient):
            return (
                f"Brush.radialGradient({stops}, "
                f"center = Offset({kotlin_float(fill.center_x)}, {kotlin_float(fill.center_y)}), "
                f"radius = {kotlin_float(fill.radius)})"
            )
        raise TypeError(f"Unknown fill: {fill!r}")

    @staticmethod
    def _file(package: str, imports: _Imports, body: CodeBlock) -> str:
        header = CodeBlock()
        if package:
            header.add(f"package {kotlin_qualified(package)}")
            header.add()
        imports.render(header)
        return header.render() + body.render()
