"""Vector IR — the in-memory form of one parsed vector graphic.

Vector → VectorNode (Group | Path) → PathNode (drawing commands).
Fill is Color | LinearGradient | RadialGradient.

All IR types are frozen dataclasses. Emitters dispatch over the closed
unions with isinstance chains that end in ``raise TypeError``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union


# ── Units and enums ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class GraphicUnit:
    """A nominal size, optionally tagged with its unit (``dp``, ``px`` ...)."""

    value: float
    unit: str | None = None


class StrokeCap(enum.Enum):
    BUTT = "butt"
    ROUND = "round"
    SQUARE = "square"


class StrokeJoin(enum.Enum):
    MITER = "miter"
    ROUND = "round"
    BEVEL = "bevel"


class FillType(enum.Enum):
    NON_ZERO = "nonZero"
    EVEN_ODD = "evenOdd"


# ── Path commands ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float
    relative: bool = False
    command = "M"


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float
    relative: bool = False
    command = "L"


@dataclass(frozen=True)
class HorizontalTo:
    x: float
    relative: bool = False
    command = "H"


@dataclass(frozen=True)
class VerticalTo:
    y: float
    relative: bool = False
    command = "V"


@dataclass(frozen=True)
class CurveTo:
    x1: float
    y1: float
    x2: float
    y2: float
    x3: float
    y3: float
    relative: bool = False
    command = "C"


@dataclass(frozen=True)
class ReflectiveCurveTo:
    x1: float
    y1: float
    x2: float
    y2: float
    relative: bool = False
    command = "S"


@dataclass(frozen=True)
class QuadTo:
    x1: float
    y1: float
    x2: float
    y2: float
    relative: bool = False
    command = "Q"


@dataclass(frozen=True)
class ReflectiveQuadTo:
    x: float
    y: float
    relative: bool = False
    command = "T"


@dataclass(frozen=True)
class ArcTo:
    horizontal_radius: float
    vertical_radius: float
    theta: float
    large_arc: bool
    sweep: bool
    x: float
    y: float
    relative: bool = False
    command = "A"


@dataclass(frozen=True)
class Close:
    relative: bool = False
    command = "Z"


PathNode = Union[
    MoveTo,
    LineTo,
    HorizontalTo,
    VerticalTo,
    CurveTo,
    ReflectiveCurveTo,
    QuadTo,
    ReflectiveQuadTo,
    ArcTo,
    Close,
]


def command_letter(node: PathNode) -> str:
    """Path-data letter for a node: uppercase absolute, lowercase relative."""
    return node.command.lower() if node.relative else node.command


# ── Fills ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Color:
    # AARRGGBB, uppercase
    hex: str


@dataclass(frozen=True)
class LinearGradient:
    color_stops: tuple[tuple[float, str], ...]
    start_x: float
    start_y: float
    end_x: float
    end_y: float


@dataclass(frozen=True)
class RadialGradient:
    color_stops: tuple[tuple[float, str], ...]
    center_x: float
    center_y: float
    radius: float


Fill = Union[Color, LinearGradient, RadialGradient]


# ── Nodes ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class GroupTransform:
    rotation: float = 0.0
    pivot_x: float = 0.0
    pivot_y: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    translation_x: float = 0.0
    translation_y: float = 0.0

    @property
    def is_identity(self) -> bool:
        return self == GroupTransform()


@dataclass(frozen=True)
class Group:
    name: str | None = None
    transform: GroupTransform = field(default_factory=GroupTransform)
    children: tuple["VectorNode", ...] = ()


@dataclass(frozen=True)
class Path:
    nodes: tuple[PathNode, ...] = ()
    fill: Fill | None = None
    fill_alpha: float = 1.0
    stroke_color_hex: str | None = None
    stroke_alpha: float = 1.0
    stroke_line_width: GraphicUnit | None = None
    stroke_line_cap: StrokeCap = StrokeCap.BUTT
    stroke_line_join: StrokeJoin = StrokeJoin.MITER
    stroke_line_miter: float = 4.0
    fill_type: FillType = FillType.NON_ZERO
    name: str | None = None


VectorNode = Union[Group, Path]


@dataclass(frozen=True)
class Vector:
    """Root of the IR. Node order is paint order."""

    width: GraphicUnit
    height: GraphicUnit
    viewport_width: float
    viewport_height: float
    nodes: tuple[VectorNode, ...] = ()
    name: str | None = None

    def iter_paths(self):
        """Yield every Path in paint order, descending into groups."""
        stack = list(reversed(self.nodes))
        while stack:
            node = stack.pop()
            if isinstance(node, Group):
                stack.extend(reversed(node.children))
            else:
                yield node

    @property
    def path_count(self) -> int:
        return sum(1 for _ in self.iter_paths())
