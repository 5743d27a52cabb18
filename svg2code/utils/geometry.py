"""Leaf-node affine helpers on 3×3 numpy matrices. No engine imports."""

from __future__ import annotations

import math
import re

import numpy as np
from numpy.typing import NDArray

from svg2code.errors import MalformedVectorError
from svg2code.vector.model import GroupTransform

_TRANSFORM_RE = re.compile(r"([a-zA-Z]+)\s*\(([^)]*)\)")
_ARGS_SPLIT_RE = re.compile(r"[\s,]+")

# Shear below this (|cos| of the angle between transformed axes) is ignored
_SKEW_EPSILON = 1e-9


def identity() -> NDArray[np.float64]:
    return np.eye(3)


def translate(tx: float, ty: float = 0.0) -> NDArray[np.float64]:
    return np.array([[1.0, 0.0, tx], [0.0, 1.0, ty], [0.0, 0.0, 1.0]])


def scale(sx: float, sy: float | None = None) -> NDArray[np.float64]:
    sy = sx if sy is None else sy
    return np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])


def rotate(degrees: float, cx: float = 0.0, cy: float = 0.0) -> NDArray[np.float64]:
    rad = math.radians(degrees)
    cos, sin = math.cos(rad), math.sin(rad)
    rot = np.array([[cos, -sin, 0.0], [sin, cos, 0.0], [0.0, 0.0, 1.0]])
    if cx or cy:
        return translate(cx, cy) @ rot @ translate(-cx, -cy)
    return rot


def skew_x(degrees: float) -> NDArray[np.float64]:
    return np.array([[1.0, math.tan(math.radians(degrees)), 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]])


def skew_y(degrees: float) -> NDArray[np.float64]:
    return np.array([[1.0, 0.0, 0.0], [math.tan(math.radians(degrees)), 1.0, 0.0], [0.0, 0.0, 1.0]])


def from_svg_matrix(a: float, b: float, c: float, d: float, e: float, f: float) -> NDArray[np.float64]:
    return np.array([[a, c, e], [b, d, f], [0.0, 0.0, 1.0]])


def parse_svg_transform(text: str | None) -> NDArray[np.float64]:
    """Compose an SVG ``transform`` list (left to right) into one matrix."""
    m = identity()
    if not text or not text.strip():
        return m

    consumed = 0
    for match in _TRANSFORM_RE.finditer(text):
        if text[consumed:match.start()].strip(" \t\r\n,"):
            raise MalformedVectorError(f"Invalid transform {text!r}")
        consumed = match.end()
        name = match.group(1)
        try:
            args = [float(a) for a in _ARGS_SPLIT_RE.split(match.group(2).strip()) if a]
        except ValueError:
            raise MalformedVectorError(f"Invalid transform arguments in {text!r}") from None
        if not all(map(math.isfinite, args)):
            raise MalformedVectorError(f"Invalid transform arguments in {text!r}")
        m = m @ _transform_op(name, args, text)

    if text[consumed:].strip(" \t\r\n,"):
        raise MalformedVectorError(f"Invalid transform {text!r}")
    return m


def _transform_op(name: str, args: list[float], text: str) -> NDArray[np.float64]:
    if name == "translate" and len(args) in (1, 2):
        return translate(*args)
    if name == "scale" and len(args) in (1, 2):
        return scale(*args)
    if name == "rotate" and len(args) in (1, 3):
        return rotate(*args)
    if name == "skewX" and len(args) == 1:
        return skew_x(args[0])
    if name == "skewY" and len(args) == 1:
        return skew_y(args[0])
    if name == "matrix" and len(args) == 6:
        return from_svg_matrix(*args)
    raise MalformedVectorError(f"Unsupported transform {name}({', '.join(map(str, args))}) in {text!r}")


def group_matrix(t: GroupTransform) -> NDArray[np.float64]:
    """Matrix of a vector-drawable group: scale, rotate about the pivot, translate."""
    return (
        translate(t.translation_x + t.pivot_x, t.translation_y + t.pivot_y)
        @ rotate(t.rotation)
        @ scale(t.scale_x, t.scale_y)
        @ translate(-t.pivot_x, -t.pivot_y)
    )


def has_skew(m: NDArray[np.float64]) -> bool:
    """True if the linear part shears (transformed axes not perpendicular)."""
    a, b, c, d = m[0, 0], m[1, 0], m[0, 1], m[1, 1]
    return abs(a * c + b * d) > _SKEW_EPSILON * max(1.0, abs(a * d - b * c))


def decompose(m: NDArray[np.float64]) -> GroupTransform:
    """Split an affine matrix into translate · rotate · scale.

    Shear cannot be expressed by a group and is dropped; callers check
    ``has_skew`` first.
    """
    a, b, c, d = m[0, 0], m[1, 0], m[0, 1], m[1, 1]
    sx = math.hypot(a, b)
    rotation = math.degrees(math.atan2(b, a)) if sx else 0.0
    sy = (a * d - b * c) / sx if sx else math.hypot(c, d)
    return GroupTransform(
        rotation=_clean(rotation),
        scale_x=_clean(sx),
        scale_y=_clean(sy),
        translation_x=_clean(float(m[0, 2])),
        translation_y=_clean(float(m[1, 2])),
    )


def apply(m: NDArray[np.float64], point: complex) -> complex:
    x, y, _ = m @ np.array([point.real, point.imag, 1.0])
    return complex(float(x), float(y))


def _clean(value: float, digits: int = 9) -> float:
    """Round off float noise so identity parts compare equal to defaults."""
    rounded = round(float(value), digits)
    return 0.0 if rounded == 0 else rounded
