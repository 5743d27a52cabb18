"""Backend B — SwiftUI ``Shape`` structs (experimental).

SwiftUI's ``Path`` has no relative, shorthand or arc commands, so every
path is replayed to absolute move/line/cubic/quad/close first. Group
transforms are applied to the points directly. Coordinates are emitted as
fractions of the viewport scaled by the target rect.

Styling is partial: the shape carries geometry only. The preview fills it
with the first solid color in the vector.
"""

from __future__ import annotations

import logging
from pathlib import PurePosixPath

import numpy as np
from numpy.typing import NDArray

from svg2code.emitters.base import CodeBlock, SourceEmitter, SourceFile
from svg2code.emitters.registry import emitter
from svg2code.engine.context import GroupContext
from svg2code.models.options import OutputBackend
from svg2code.utils import geometry
from svg2code.utils.colors import argb_components
from svg2code.vector.model import (
    Close,
    Color,
    CurveTo,
    Group,
    LineTo,
    MoveTo,
    Path,
    QuadTo,
    Vector,
    VectorNode,
)
from svg2code.vector.replay import replay

logger = logging.getLogger(__name__)


def swift_number(value: float) -> str:
    text = repr(round(float(value), 6))
    if text.endswith(".0"):
        text = text[:-2]
    return "0" if text == "-0" else text


@emitter(OutputBackend.SWIFTUI, experimental=True, description="SwiftUI Shape structs")
class SwiftUIEmitter(SourceEmitter):
    extension = "swift"

    def emit(
        self,
        vector: Vector,
        symbol_name: str,
        group_context: GroupContext,
        generate_preview: bool = True,
    ) -> SourceFile:
        self._vector = vector
        code = CodeBlock()
        code.add("import SwiftUI")
        code.add()
        code.begin(f"struct {symbol_name}: Shape {{")
        code.begin("func path(in rect: CGRect) -> Path {")
        code.add("var path = Path()")
        code.add("let width = rect.size.width")
        code.add("let height = rect.size.height")
        for node in vector.nodes:
            self._node(node, geometry.identity(), code)
        code.add("return path")
        code.end()
        code.end()

        if generate_preview:
            code.add()
            code.begin(f"struct {symbol_name}_Previews: PreviewProvider {{")
            code.begin("static var previews: some View {")
            code.add(f"{symbol_name}()")
            fill = self._first_solid_color(vector)
            code.indent()
            if fill is not None:
                r, g, b, a = argb_components(fill)
                code.add(
                    f".fill(Color(red: {swift_number(r)}, green: {swift_number(g)}, "
                    f"blue: {swift_number(b)}, opacity: {swift_number(a)}))"
                )
            code.add(
                f".frame(width: {swift_number(vector.width.value)}, height: {swift_number(vector.height.value)})"
            )
            code.dedent()
            code.end()
            code.end()

        return SourceFile(
            name=symbol_name,
            file_name=f"{symbol_name}.{self.extension}",
            text=code.render(),
            relative_dir=PurePosixPath(*group_context.group_path.split(".")),
        )

    def _node(self, node: VectorNode, matrix: NDArray[np.float64], code: CodeBlock) -> None:
        if isinstance(node, Group):
            child_matrix = matrix @ geometry.group_matrix(node.transform)
            for child in node.children:
                self._node(child, child_matrix, code)
        elif isinstance(node, Path):
            if node.fill is not None and not isinstance(node.fill, Color):
                logger.debug("Gradient fill on %s emitted without styling", node.name or "path")
            for command in replay(node.nodes):
                code.add(self._command(command, matrix))
        else:
            raise TypeError(f"Unknown vector node: {node!r}")

    def _command(self, node, matrix: NDArray[np.float64]) -> str:
        if isinstance(node, MoveTo):
            return f"path.move(to: {self._point(matrix, node.x, node.y)})"
        if isinstance(node, LineTo):
            return f"path.addLine(to: {self._point(matrix, node.x, node.y)})"
        if isinstance(node, CurveTo):
            return (
                f"path.addCurve(to: {self._point(matrix, node.x3, node.y3)}, "
                f"control1: {self._point(matrix, node.x1, node.y1)}, "
                f"control2: {self._point(matrix, node.x2, node.y2)})"
            )
        if isinstance(node, QuadTo):
            return (
                f"path.addQuadCurve(to: {self._point(matrix, node.x2, node.y2)}, "
                f"control: {self._point(matrix, node.x1, node.y1)})"
            )
        if isinstance(node, Close):
            return "path.closeSubpath()"
        raise TypeError(f"Unexpected replayed node: {node!r}")

    def _point(self, matrix: NDArray[np.float64], x: float, y: float) -> str:
        p = geometry.apply(matrix, complex(x, y))
        fx = p.real / self._vector.viewport_width
        fy = p.imag / self._vector.viewport_height
        return f"CGPoint(x: {swift_number(fx)} * width, y: {swift_number(fy)} * height)"

    @staticmethod
    def _first_solid_color(vector: Vector) -> str | None:
        for path in vector.iter_paths():
            if isinstance(path.fill, Color):
                return path.fill.hex
        return None
