"""Observations of a map point in one or both images of a stereo frame."""

from __future__ import annotations

import enum
from typing import Iterable

import numpy as np

from stereomap.image_features import KeyPoint


class MeasurementType(enum.Enum):
    """Which image or images a measurement was taken in."""

    STEREO = 0
    LEFT = 1
    RIGHT = 2


class MeasurementSource(enum.Enum):
    """The step of the pipeline that produced a measurement."""

    TRIANGULATION = 0
    TRACKER = 1
    REFIND = 2


class Measurement:
    """Image features, with their descriptors, that observe one map point.

    Descriptors are kept by reference, not copied.
    """

    __slots__ = ("_type", "_source", "_keypoints", "_descriptors")

    def __init__(
        self,
        type: MeasurementType,
        source: MeasurementSource,
        keypoints: Iterable[KeyPoint],
        descriptors: Iterable[np.ndarray],
    ) -> None:
        self._type = MeasurementType(type)
        self._source = MeasurementSource(source)
        self._keypoints = tuple(keypoints)
        self._descriptors = tuple(descriptors)

    @classmethod
    def monocular(
        cls,
        type: MeasurementType,
        source: MeasurementSource,
        keypoint: KeyPoint,
        descriptor: np.ndarray,
    ) -> "Measurement":
        """Build a measurement taken in the left or the right image only."""
        if MeasurementType(type) is MeasurementType.STEREO:
            raise ValueError("a monocular measurement cannot be of stereo type")
        return cls(type, source, (keypoint,), (descriptor,))

    @classmethod
    def stereo(
        cls,
        source: MeasurementSource,
        keypoint_left: KeyPoint,
        descriptor_left: np.ndarray,
        keypoint_right: KeyPoint,
        descriptor_right: np.ndarray,
    ) -> "Measurement":
        """Build a measurement taken in both images, left one first."""
        return cls(
            MeasurementType.STEREO,
            source,
            (keypoint_left, keypoint_right),
            (descriptor_left, descriptor_right),
        )

    @property
    def type(self) -> MeasurementType:
        return self._type

    @property
    def source(self) -> MeasurementSource:
        return self._source

    @property
    def keypoints(self) -> tuple[KeyPoint, ...]:
        return self._keypoints

    @property
    def descriptors(self) -> tuple[np.ndarray, ...]:
        return self._descriptors

    @property
    def main_keypoint(self) -> KeyPoint:
        """The first keypoint: the left one for stereo measurements."""
        return self._keypoints[0]

    @property
    def descriptor(self) -> np.ndarray:
        """The first descriptor: the left one for stereo measurements."""
        return self._descriptors[0]

    def __repr__(self) -> str:
        return (
            f"Measurement(type={self._type.name}, source={self._source.name}, "
            f"keypoints={self._keypoints!r})"
        )