"""Constant-velocity motion model for predicting the camera pose.

Orientations are unit quaternions given as ``(w, x, y, z)``.
"""

from __future__ import annotations

import math

import numpy as np

from stereomap.rostime import Time


def _qmul(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    w1, x1, y1, z1 = a
    w2, x2, y2, z2 = b
    return np.array([
        w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
        w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
        w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
    ])


def _qinv(q: np.ndarray) -> np.ndarray:
    return np.array([q[0], -q[1], -q[2], -q[3]]) / float(q @ q)


def _normalized(q: np.ndarray) -> np.ndarray:
    return q / np.linalg.norm(q)


def _from_angle_axis(angle: float, axis: np.ndarray) -> np.ndarray:
    half = 0.5 * angle
    return np.concatenate(([math.cos(half)], math.sin(half) * np.asarray(axis, dtype=float)))


def _to_angle_axis(q: np.ndarray) -> tuple[float, np.ndarray]:
    vec = q[1:]
    n = float(np.linalg.norm(vec))
    if n == 0.0:
        return 0.0, np.array([1.0, 0.0, 0.0])
    angle = 2.0 * math.atan2(n, abs(q[0]))
    axis = -vec / n if q[0] < 0 else vec / n
    return angle, axis


def _to_rotation_matrix(q: np.ndarray) -> np.ndarray:
    w, x, y, z = q
    return np.array([
        [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
        [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
        [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
    ])


def _from_rotation_matrix(m: np.ndarray) -> np.ndarray:
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0:
        s = math.sqrt(trace + 1.0)
        w = 0.5 * s
        s = 0.5 / s
        return np.array([
            w,
            (m[2, 1] - m[1, 2]) * s,
            (m[0, 2] - m[2, 0]) * s,
            (m[1, 0] - m[0, 1]) * s,
        ])
    i = int(np.argmax(np.diag(m)))
    j = (i + 1) % 3
    k = (j + 1) % 3
    s = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
    vec = np.zeros(3)
    vec[i] = 0.5 * s
    s = 0.5 / s
    vec[j] = (m[j, i] + m[i, j]) * s
    vec[k] = (m[k, i] + m[i, k]) * s
    return np.concatenate(([(m[k, j] - m[j, k]) * s], vec))


def _array(value, shape: tuple[int, ...], name: str) -> np.ndarray:
    result = np.array(value, dtype=float)
    if result.shape != shape:
        raise ValueError(f"{name} must have shape {shape}")
    return result


class MotionModel:
    """Predicts the next camera pose from its last linear and angular velocity."""

    def __init__(self, time: Time, initial_position, initial_orientation, initial_covariance) -> None:
        self._initialized = False
        self._last_update = time
        self._position = _array(initial_position, (3,), "position")
        self._orientation = _array(initial_orientation, (4,), "orientation")
        self._covariance = _array(initial_covariance, (6, 6), "covariance")
        self._linear_velocity = np.zeros(3)
        self._angular_velocity_angle = 0.0
        self._angular_velocity_axis = np.array([1.0, 0.0, 0.0])

    def current_pose(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return (position, orientation, covariance) of the current pose."""
        return self._position.copy(), self._orientation.copy(), self._covariance.copy()

    def predict_pose(self, time: Time) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Return the pose expected at ``time`` as (position, orientation, covariance)."""
        # Before the first update the velocity is zero; keep the initial pose.
        if not self._initialized:
            return self.current_pose()

        dt = (time - self._last_update).to_sec()
        position = self._position + self._linear_velocity * dt
        delta = _from_angle_axis(self._angular_velocity_angle * dt, self._angular_velocity_axis)
        orientation = _normalized(_qmul(self._orientation, delta))
        return position, orientation, self._covariance.copy()

    def update_pose(self, time: Time, new_position, new_orientation, covariance) -> None:
        """Record a newly estimated pose and refresh the velocities."""
        position = _array(new_position, (3,), "position")
        orientation = _array(new_orientation, (4,), "orientation")
        cov = _array(covariance, (6, 6), "covariance")

        if self._initialized:
            dt = (time - self._last_update).to_sec()
            if not dt > 0:
                raise ValueError("pose updates must move forward in time")

            linear_velocity = (position - self._position) / dt

            delta = _normalized(_qmul(orientation, _qinv(self._orientation)))
            angle, axis = _to_angle_axis(delta)
            # An angle beyond pi is the same rotation the other way round.
            if angle > math.pi:
                angle = 2 * math.pi - angle
                axis = -axis
            self._angular_velocity_axis = axis
            self._angular_velocity_angle = angle / dt
            self._linear_velocity = linear_velocity

        self._last_update = time
        self._position = position
        self._orientation = orientation
        self._covariance = cov
        self._initialized = True

    def apply_correction(self, correction) -> None:
        """Apply a rigid 4x4 correction to the current pose and velocities."""
        corr = _array(correction, (4, 4), "correction")
        current = np.eye(4)
        current[:3, :3] = _to_rotation_matrix(self._orientation)
        current[:3, 3] = self._position
        corrected = current @ corr

        self._position = corrected[:3, 3].copy()
        self._orientation = _from_rotation_matrix(corrected[:3, :3])

        inverse = np.linalg.inv(corr[:3, :3])
        self._linear_velocity = inverse @ self._linear_velocity
        self._angular_velocity_axis = inverse @ self._angular_velocity_axis