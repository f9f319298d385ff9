import math

import numpy as np
import pytest

from stereomap.frustum import FrustumCulling

IDENTITY = (1.0, 0.0, 0.0, 0.0)
# Quarter turn about the y axis: the camera then looks along +x.
QUARTER_Y = (math.cos(math.pi / 4), 0.0, math.sin(math.pi / 4), 0.0)


def make(position=(0.0, 0.0, 0.0), orientation=IDENTITY, hfov=90.0, vfov=60.0, near=1.0, far=10.0):
    return FrustumCulling(position, orientation, hfov, vfov, near, far)


def test_point_ahead_is_inside():
    assert make().contains((0.0, 0.0, 5.0))


def test_point_behind_is_outside():
    assert not make().contains((0.0, 0.0, -5.0))


def test_point_closer_than_near_plane_is_outside():
    assert not make().contains((0.0, 0.0, 0.5))


def test_point_beyond_far_plane_is_outside():
    assert not make().contains((0.0, 0.0, 11.0))


def test_point_far_to_the_side_is_outside():
    frustum = make()
    assert not frustum.contains((50.0, 0.0, 5.0))
    assert not frustum.contains((-50.0, 0.0, 5.0))
    assert not frustum.contains((0.0, 50.0, 5.0))
    assert not frustum.contains((0.0, -50.0, 5.0))


def test_narrow_field_of_view_excludes_offset_point():
    wide = make(hfov=120.0)
    narrow = make(hfov=10.0)
    point = (3.0, 0.0, 5.0)
    assert wide.contains(point)
    assert not narrow.contains(point)


def test_frustum_follows_camera_translation():
    frustum = make(position=(100.0, -20.0, 3.0))
    assert frustum.contains((100.0, -20.0, 8.0))
    assert not frustum.contains((0.0, 0.0, 5.0))


def test_frustum_follows_camera_rotation():
    frustum = make(orientation=QUARTER_Y)
    assert frustum.contains((5.0, 0.0, 0.0))
    assert not frustum.contains((0.0, 0.0, 5.0))


def test_unnormalized_quaternion_gives_same_result():
    scaled = make(orientation=tuple(3 * c for c in QUARTER_Y))
    assert scaled.contains((5.0, 0.0, 0.0))
    assert not scaled.contains((-5.0, 0.0, 0.0))


def test_far_plane_corners_lie_on_far_plane():
    corners = make(far=10.0).far_plane_corners()
    for corner in corners:
        assert corner[2] == pytest.approx(10.0)


def test_far_plane_corners_centered_on_view_axis():
    position = np.array([1.0, 2.0, 3.0])
    corners = make(position=position, far=10.0).far_plane_corners()
    center = sum(corners) / 4
    np.testing.assert_allclose(center, position + np.array([0.0, 0.0, 10.0]), atol=1e-9)


def test_far_plane_corner_layout():
    corners = make().far_plane_corners()
    # The camera's y axis points down, so "top" has the smaller y.
    assert corners.top_left[1] < corners.bottom_left[1]
    assert corners.top_right[1] < corners.bottom_right[1]
    assert corners.bottom_left[0] < corners.bottom_right[0]
    assert corners.top_left[0] < corners.top_right[0]


def test_far_plane_width_matches_field_of_view():
    corners = make(hfov=90.0, far=10.0).far_plane_corners()
    width = corners.bottom_right[0] - corners.bottom_left[0]
    assert width == pytest.approx(20.0, rel=1e-6)


def test_far_plane_corners_are_copies():
    frustum = make()
    corners = frustum.far_plane_corners()
    corners.top_left[:] = 0.0
    assert frustum.far_plane_corners().top_left[2] == pytest.approx(10.0)


def test_points_just_inside_corners_are_contained():
    frustum = make()
    position = np.zeros(3)
    for corner in frustum.far_plane_corners():
        assert frustum.contains(position + 0.9 * (corner - position))


def test_invalid_position_raises():
    with pytest.raises(ValueError):
        FrustumCulling((0.0, 0.0), IDENTITY, 90.0, 60.0, 1.0, 10.0)


def test_invalid_orientation_raises():
    with pytest.raises(ValueError):
        FrustumCulling((0.0, 0.0, 0.0), (0.0, 0.0, 0.0, 0.0), 90.0, 60.0, 1.0, 10.0)
    with pytest.raises(ValueError):
        FrustumCulling((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), 90.0, 60.0, 1.0, 10.0)


def test_invalid_point_raises():
    with pytest.raises(ValueError):
        make().contains((1.0, 2.0))