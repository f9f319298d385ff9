"""Keypoints and descriptors detected in one image, with spatial lookup."""

from __future__ import annotations

import copy as _copy
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from stereomap.descriptor_matcher import BruteForceMatcher
from stereomap.hash2d import Hash2D


@dataclass(frozen=True)
class KeyPoint:
    """A detected image feature."""

    x: float
    y: float
    size: float = 1.0
    angle: float = -1.0
    response: float = 0.0
    octave: int = 0
    class_id: int = -1

    @property
    def pt(self) -> tuple[float, float]:
        return (self.x, self.y)


class ImageFeatures:
    """The features of one image and which of them are already matched."""

    def __init__(
        self,
        image_size: tuple[int, int],
        keypoints: Iterable[KeyPoint],
        descriptors,
        matching_cell_size: int,
    ) -> None:
        width, height = image_size
        self._image_size = (width, height)
        self._cell_size = matching_cell_size
        self._keypoints = tuple(keypoints)

        table = np.array(descriptors)
        if table.size == 0 and table.ndim < 2:
            table = table.reshape(0, 0)
        if table.ndim != 2 or table.shape[0] != len(self._keypoints):
            raise ValueError("there must be one descriptor row per keypoint")
        self._descriptors = table

        self._hash: Hash2D[int] = Hash2D(width, height, matching_cell_size, matching_cell_size)
        for index, keypoint in enumerate(self._keypoints):
            self._hash.insert(int(keypoint.x), int(keypoint.y), index)

        self._matched = [False] * len(self._keypoints)

    def copy(self) -> "ImageFeatures":
        """Return an independent copy, matched flags included."""
        clone = _copy.copy(self)
        clone._matched = list(self._matched)
        clone._descriptors = self._descriptors.copy()
        return clone

    @property
    def image_size(self) -> tuple[int, int]:
        return self._image_size

    @property
    def descriptors(self) -> np.ndarray:
        return self._descriptors

    @property
    def keypoints(self) -> tuple[KeyPoint, ...]:
        return self._keypoints

    def __len__(self) -> int:
        return len(self._keypoints)

    def descriptor(self, index: int) -> np.ndarray:
        return self._descriptors[index]

    def keypoint(self, index: int) -> KeyPoint:
        return self._keypoints[index]

    def set_matched(self, index: int) -> None:
        """Mark a keypoint as used so later searches skip it."""
        self._matched[index] = True

    def is_matched(self, index: int) -> bool:
        return self._matched[index]

    def find_match(
        self,
        prediction: Sequence[float],
        descriptor,
        matcher: BruteForceMatcher,
        matching_distance_threshold: float,
        matching_neighborhood_threshold: float,
    ) -> int | None:
        """Return the index of the best unmatched keypoint near ``prediction``.

        The search radius is given in hash cells. ``None`` is returned when
        no candidate lies close enough or the best one is too different.
        """
        x, y = prediction
        radius = math.ceil(matching_neighborhood_threshold)
        max_pixels = matching_neighborhood_threshold * self._cell_size

        mask = np.zeros(len(self._keypoints), dtype=bool)
        for index in self._hash.neighborhood(int(x), int(y), radius):
            keypoint = self._keypoints[index]
            if not self._matched[index] and math.hypot(x - keypoint.x, y - keypoint.y) <= max_pixels:
                mask[index] = True

        if not mask.any():
            return None
        matches = matcher.match(descriptor, self._descriptors, mask)
        if not matches or matches[0].distance > matching_distance_threshold:
            return None
        return matches[0].train_idx

    def find_matches(
        self,
        predictions: Iterable[Sequence[float]],
        descriptors: Iterable,
        matcher: BruteForceMatcher,
        matching_distance_threshold: float,
        matching_neighborhood_threshold: float,
    ) -> list[tuple[int, int]]:
        """Match predicted projections to keypoints.

        Returns (prediction index, keypoint index) pairs; predictions that
        fall outside the image are skipped.
        """
        width, height = self._image_size
        found: list[tuple[int, int]] = []
        for i, (point, descriptor) in enumerate(zip(predictions, descriptors)):
            x, y = point
            if x < 0 or width <= x or y < 0 or height <= y:
                continue
            index = self.find_match(
                point, descriptor, matcher,
                matching_distance_threshold, matching_neighborhood_threshold,
            )
            if index is not None:
                found.append((i, index))
        return found

    def unmatched_keypoints(self) -> tuple[list[KeyPoint], np.ndarray, list[int]]:
        """Return keypoints not yet matched, their descriptors and indexes."""
        indexes = [i for i, matched in enumerate(self._matched) if not matched]
        keypoints = [self._keypoints[i] for i in indexes]
        descriptors = self._descriptors[np.array(indexes, dtype=int)]
        return keypoints, descriptors, indexes