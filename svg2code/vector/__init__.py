"""Vector IR and path replay."""

from svg2code.vector.model import (
    ArcTo,
    Close,
    Color,
    CurveTo,
    Fill,
    FillType,
    GraphicUnit,
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
    command_letter,
)
from svg2code.vector.replay import replay

__all__ = [
    "ArcTo",
    "Close",
    "Color",
    "CurveTo",
    "Fill",
    "FillType",
    "GraphicUnit",
    "Group",
    "GroupTransform",
    "HorizontalTo",
    "LinearGradient",
    "LineTo",
    "MoveTo",
    "Path",
    "PathNode",
    "QuadTo",
    "RadialGradient",
    "ReflectiveCurveTo",
    "ReflectiveQuadTo",
    "StrokeCap",
    "StrokeJoin",
    "Vector",
    "VectorNode",
    "VerticalTo",
    "command_letter",
    "replay",
]
