"""Calibration parameters of a rectified stereo camera."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


def compute_fov(focal_length: float, image_size: float) -> float:
    """Return the field of view in degrees along one image dimension."""
    return 2 * math.atan(image_size / (2 * focal_length)) * 180 / math.pi


@dataclass(frozen=True)
class RectifiedCameraParameters:
    """Baseline, focal lengths and principal point of a rectified pair."""

    baseline: float
    focal_length: np.ndarray
    principal_point: np.ndarray


class CameraParameters:
    """Intrinsic calibration, image size and viewing frustum of a camera."""

    def __init__(
        self,
        intrinsic,
        image_width: int,
        image_height: int,
        frustum_near_plane_distance: float,
        frustum_far_plane_distance: float,
        baseline: float,
    ) -> None:
        matrix = np.array(intrinsic, dtype=float)
        if matrix.shape != (3, 3):
            raise ValueError("intrinsic must be a 3x3 matrix")
        if image_width <= 0 or image_height <= 0:
            raise ValueError("image size must be positive")
        if frustum_near_plane_distance <= 0:
            raise ValueError("near plane distance must be positive")
        if not frustum_near_plane_distance < frustum_far_plane_distance:
            raise ValueError("near plane must be closer than far plane")
        if baseline <= 0:
            raise ValueError("baseline must be positive")
        if matrix[0, 0] != matrix[1, 1]:
            raise ValueError("horizontal and vertical focal lengths must match")

        matrix.setflags(write=False)
        self.intrinsic = matrix
        self.image_width = image_width
        self.image_height = image_height
        self.horizontal_fov = compute_fov(matrix[0, 0], image_width)
        self.vertical_fov = compute_fov(matrix[1, 1], image_height)
        self.frustum_near_plane_distance = frustum_near_plane_distance
        self.frustum_far_plane_distance = frustum_far_plane_distance
        self.rectified = RectifiedCameraParameters(
            baseline=baseline,
            focal_length=np.array([matrix[0, 0], matrix[1, 1]]),
            principal_point=np.array([matrix[0, 2], matrix[1, 2]]),
        )

    @property
    def focal_length(self) -> float:
        return float(self.intrinsic[0, 0])

    @property
    def focal_lengths(self) -> np.ndarray:
        return self.rectified.focal_length.copy()

    @property
    def principal_point(self) -> np.ndarray:
        return self.rectified.principal_point.copy()

    @property
    def baseline(self) -> float:
        return self.rectified.baseline