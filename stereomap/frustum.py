"""Viewing frustum of a camera, used to cull points it cannot see.

Orientations are unit quaternions given as ``(w, x, y, z)``. The camera
looks along its local z axis, with x to the right and y pointing down.
"""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np


class FarPlaneCorners(NamedTuple):
    """The four corners of the far plane, in world coordinates."""

    bottom_left: np.ndarray
    bottom_right: np.ndarray
    top_left: np.ndarray
    top_right: np.ndarray


def _rotation_matrix(quaternion) -> np.ndarray:
    q = np.array(quaternion, dtype=float)
    if q.shape != (4,):
        raise ValueError("orientation must be a quaternion (w, x, y, z)")
    norm = float(np.linalg.norm(q))
    if norm == 0.0:
        raise ValueError("orientation quaternion must not be zero")
    w, x, y, z = q / norm
    return np.array([
        [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
        [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
        [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
    ])


def _single(value: float) -> float:
    """Round to single precision, as the frustum sizes are kept."""
    return float(np.float32(value))


def _plane(normal: np.ndarray, point: np.ndarray) -> np.ndarray:
    """Plane through ``point`` with ``normal``, as (a, b, c, d)."""
    return np.append(normal, -float(point @ normal))


class FrustumCulling:
    """A truncated viewing pyramid bounded by six planes.

    A point is inside when it lies on the inner side of every plane.
    """

    def __init__(
        self,
        position,
        orientation,
        horizontal_fov: float,
        vertical_fov: float,
        near_plane_dist: float,
        far_plane_dist: float,
    ) -> None:
        pos = np.array(position, dtype=float)
        if pos.shape != (3,):
            raise ValueError("position must be a 3-vector")
        self._position = pos
        self._orientation = _rotation_matrix(orientation)
        self._compute(horizontal_fov, vertical_fov, near_plane_dist, far_plane_dist)

    def _compute(self, horizontal_fov: float, vertical_fov: float, near: float, far: float) -> None:
        rot = self._orientation
        position = self._position
        view = rot[:, 2]
        up = -rot[:, 1]
        right = rot[:, 0]

        vfov_rad = _single(vertical_fov * math.pi / 180)
        hfov_rad = _single(horizontal_fov * math.pi / 180)

        np_h = _single(2 * math.tan(vfov_rad / 2) * near)
        np_w = _single(2 * math.tan(hfov_rad / 2) * near)
        fp_h = _single(2 * math.tan(vfov_rad / 2) * far)
        fp_w = _single(2 * math.tan(hfov_rad / 2) * far)

        fp_c = position + view * far
        fp_tl = fp_c + up * fp_h / 2 - right * fp_w / 2
        fp_tr = fp_c + up * fp_h / 2 + right * fp_w / 2
        fp_bl = fp_c - up * fp_h / 2 - right * fp_w / 2
        fp_br = fp_c - up * fp_h / 2 + right * fp_w / 2
        self._corners = FarPlaneCorners(fp_bl, fp_br, fp_tl, fp_tr)

        np_c = position + view * near
        np_tr = np_c + up * np_h / 2 + right * np_w / 2
        np_bl = np_c - up * np_h / 2 - right * np_w / 2
        np_br = np_c - up * np_h / 2 + right * np_w / 2

        self._far = _plane(np.cross(fp_bl - fp_br, fp_tr - fp_br), fp_c)
        self._near = _plane(np.cross(np_tr - np_br, np_bl - np_br), np_c)

        a = fp_bl - position
        b = fp_br - position
        c = fp_tr - position
        d = fp_tl - position

        self._right = _plane(np.cross(b, c), position)
        self._left = _plane(np.cross(d, a), position)
        self._top = _plane(np.cross(c, d), position)
        self._bottom = _plane(np.cross(a, b), position)

    @property
    def planes(self) -> tuple[np.ndarray, ...]:
        """Left, right, top, bottom, near and far planes as (a, b, c, d)."""
        return tuple(
            p.copy()
            for p in (self._left, self._right, self._top, self._bottom, self._near, self._far)
        )

    def contains(self, point) -> bool:
        """Tell whether ``point`` lies inside the frustum."""
        p = np.array(point, dtype=float)
        if p.shape != (3,):
            raise ValueError("point must be a 3-vector")
        homo = np.append(p, 1.0)
        return all(
            float(homo @ plane) <= 0
            for plane in (self._left, self._right, self._top, self._bottom, self._near, self._far)
        )

    def far_plane_corners(self) -> FarPlaneCorners:
        """Return the far plane corners, mainly for drawing the frustum."""
        return FarPlaneCorners(*(corner.copy() for corner in self._corners))