"""Tests for affine transform helpers."""

import numpy as np
import pytest

from svg2code.errors import MalformedVectorError
from svg2code.utils import geometry
from svg2code.vector.model import GroupTransform


def test_transform_list_composes_left_to_right():
    m = geometry.parse_svg_transform("translate(10, 0) scale(2)")
    assert geometry.apply(m, complex(1, 1)) == pytest.approx(complex(12, 2))


def test_rotate_about_center():
    m = geometry.parse_svg_transform("rotate(90 12 12)")
    assert geometry.apply(m, complex(12, 0)) == pytest.approx(complex(24, 12))


def test_matrix_form():
    m = geometry.parse_svg_transform("matrix(1 0 0 1 5 6)")
    assert np.allclose(m, geometry.translate(5, 6))


def test_empty_transform_is_identity():
    assert np.allclose(geometry.parse_svg_transform(None), np.eye(3))
    assert np.allclose(geometry.parse_svg_transform("  "), np.eye(3))


@pytest.mark.parametrize(
    "text", ["translate(1 2 3)", "spin(4)", "translate(1) garbage", "scale(a)", "rotate(nan)", "scale(1e400)"]
)
def test_invalid_transforms(text):
    with pytest.raises(MalformedVectorError):
        geometry.parse_svg_transform(text)


def test_skew_detection():
    assert geometry.has_skew(geometry.skew_x(30))
    assert not geometry.has_skew(geometry.rotate(30) @ geometry.scale(2, 3))


def test_decompose_round_trip():
    m = geometry.translate(5, -3) @ geometry.rotate(30) @ geometry.scale(2, 0.5)
    t = geometry.decompose(m)
    assert t.rotation == pytest.approx(30)
    assert (t.scale_x, t.scale_y) == pytest.approx((2, 0.5))
    assert np.allclose(geometry.group_matrix(t), m)


def test_decompose_identity_is_default():
    assert geometry.decompose(np.eye(3)).is_identity


def test_group_matrix_pivot():
    t = GroupTransform(rotation=180, pivot_x=12, pivot_y=12)
    m = geometry.group_matrix(t)
    assert geometry.apply(m, complex(0, 0)) == pytest.approx(complex(24, 24))
