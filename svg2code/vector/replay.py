"""Path replay — resolve a PathNode sequence into absolute drawing commands.

Relative coordinates, H/V shorthands, reflective curves and arcs are all
resolved against the running current point, the way a renderer would.
The result only contains absolute MoveTo, LineTo, CurveTo, QuadTo and
Close, which every backend can express.

Points are complex numbers (x + yj), the same convention svgpathtools uses.
"""

from __future__ import annotations

import math

from svgpathtools import Arc

from svg2code.vector.model import (
    ArcTo,
    Close,
    CurveTo,
    HorizontalTo,
    LineTo,
    MoveTo,
    PathNode,
    QuadTo,
    ReflectiveCurveTo,
    ReflectiveQuadTo,
    VerticalTo,
)

# Arcs are split so that no cubic spans more than a quarter turn.
_MAX_ARC_SEGMENT_DEGREES = 90.0


def replay(nodes: tuple[PathNode, ...] | list[PathNode]) -> list[PathNode]:
    """Return the absolute move/line/cubic/quad/close equivalent of ``nodes``."""
    out: list[PathNode] = []
    current = 0j
    subpath_start = 0j
    # Second control point of the previous cubic / control of the previous quad
    last_cubic_ctrl: complex | None = None
    last_quad_ctrl: complex | None = None

    for node in nodes:
        origin = current if node.relative else 0j
        cubic_ctrl: complex | None = None
        quad_ctrl: complex | None = None

        if isinstance(node, MoveTo):
            current = origin + complex(node.x, node.y)
            subpath_start = current
            out.append(MoveTo(current.real, current.imag))

        elif isinstance(node, LineTo):
            current = origin + complex(node.x, node.y)
            out.append(LineTo(current.real, current.imag))

        elif isinstance(node, HorizontalTo):
            x = current.real + node.x if node.relative else node.x
            current = complex(x, current.imag)
            out.append(LineTo(current.real, current.imag))

        elif isinstance(node, VerticalTo):
            y = current.imag + node.y if node.relative else node.y
            current = complex(current.real, y)
            out.append(LineTo(current.real, current.imag))

        elif isinstance(node, CurveTo):
            c1 = origin + complex(node.x1, node.y1)
            c2 = origin + complex(node.x2, node.y2)
            end = origin + complex(node.x3, node.y3)
            out.append(_cubic(c1, c2, end))
            cubic_ctrl = c2
            current = end

        elif isinstance(node, ReflectiveCurveTo):
            c1 = _reflect(last_cubic_ctrl, current)
            c2 = origin + complex(node.x1, node.y1)
            end = origin + complex(node.x2, node.y2)
            out.append(_cubic(c1, c2, end))
            cubic_ctrl = c2
            current = end

        elif isinstance(node, QuadTo):
            ctrl = origin + complex(node.x1, node.y1)
            end = origin + complex(node.x2, node.y2)
            out.append(QuadTo(ctrl.real, ctrl.imag, end.real, end.imag))
            quad_ctrl = ctrl
            current = end

        elif isinstance(node, ReflectiveQuadTo):
            ctrl = _reflect(last_quad_ctrl, current)
            end = origin + complex(node.x, node.y)
            out.append(QuadTo(ctrl.real, ctrl.imag, end.real, end.imag))
            quad_ctrl = ctrl
            current = end

        elif isinstance(node, ArcTo):
            end = origin + complex(node.x, node.y)
            out.extend(arc_to_cubics(current, node, end))
            current = end

        elif isinstance(node, Close):
            out.append(Close())
            current = subpath_start

        else:
            raise TypeError(f"Unknown path node: {node!r}")

        last_cubic_ctrl = cubic_ctrl
        last_quad_ctrl = quad_ctrl

    return out


def arc_to_cubics(start: complex, arc: ArcTo, end: complex) -> list[PathNode]:
    """Approximate an endpoint-parameterized arc with cubic Béziers.

    Degenerate arcs follow the SVG rules: identical endpoints draw nothing,
    a zero radius draws a straight line.
    """
    if start == end:
        return []
    rx, ry = abs(arc.horizontal_radius), abs(arc.vertical_radius)
    if rx == 0 or ry == 0:
        return [LineTo(end.real, end.imag)]

    seg = Arc(start, complex(rx, ry), arc.theta, arc.large_arc, arc.sweep, end)
    delta = math.radians(seg.delta)
    n = max(1, math.ceil(abs(seg.delta) / _MAX_ARC_SEGMENT_DEGREES - 1e-9))
    k = 4.0 / 3.0 * math.tan(delta / n / 4.0)

    cubics: list[PathNode] = []
    for i in range(n):
        t0, t1 = i / n, (i + 1) / n
        p0 = seg.point(t0)
        p3 = end if i == n - 1 else seg.point(t1)
        # derivative() is d/dt; divide by dθ/dt to get the tangent per radian
        c1 = p0 + k * seg.derivative(t0) / delta
        c2 = p3 - k * seg.derivative(t1) / delta
        cubics.append(_cubic(c1, c2, p3))
    return cubics


def _reflect(ctrl: complex | None, about: complex) -> complex:
    if ctrl is None:
        return about
    return 2 * about - ctrl


def _cubic(c1: complex, c2: complex, end: complex) -> CurveTo:
    return CurveTo(c1.real, c1.imag, c2.real, c2.imag, end.real, end.imag)
