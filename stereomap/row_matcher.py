"""Descriptor matching restricted to the same image row.

On rectified stereo pairs a feature seen by both cameras lies on the
same pixel row, which narrows the search for its match to a thin band.
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import replace
from typing import Sequence

import numpy as np

from stereomap.descriptor_matcher import BruteForceMatcher, DMatch, NormType


def match_rows(
    matcher: BruteForceMatcher,
    matching_distance_threshold: float,
    keypoints1: Sequence,
    descriptors1,
    keypoints2: Sequence,
    descriptors2,
    row_range: float = 1.0,
) -> list[DMatch]:
    """Match each query keypoint to a train keypoint within ``row_range`` rows.

    Keypoints need a ``y`` attribute. Matches are returned in order of
    increasing query row; ``query_idx`` and ``train_idx`` index the given
    sequences. Queries without a candidate close enough are left out.
    """
    keypoints1 = list(keypoints1)
    keypoints2 = list(keypoints2)
    queries = np.asarray(descriptors1)

    order1 = sorted(range(len(keypoints1)), key=lambda i: keypoints1[i].y)
    order2 = sorted(range(len(keypoints2)), key=lambda i: keypoints2[i].y)
    rows2 = [keypoints2[i].y for i in order2]

    matches: list[DMatch] = []
    for idx1 in order1:
        row = keypoints1[idx1].y
        low = bisect_left(rows2, row - row_range)
        high = bisect_right(rows2, row + row_range)
        if low >= high:
            continue

        mask = np.zeros(len(keypoints2), dtype=bool)
        mask[order2[low:high]] = True

        candidates = matcher.match(queries[idx1], descriptors2, mask)
        if not candidates:
            continue
        best = candidates[0]
        if best.distance > matching_distance_threshold:
            continue
        matches.append(replace(best, query_idx=idx1))
    return matches


class RowMatcher:
    """Matches descriptors of two rectified images row by row."""

    def __init__(
        self,
        max_distance: float,
        matcher: BruteForceMatcher | NormType,
        row_range: float = 1.0,
    ) -> None:
        if isinstance(matcher, NormType):
            matcher = BruteForceMatcher(matcher)
        self.matching_distance_threshold = max_distance
        self.matcher = matcher
        self.row_range = row_range

    def __repr__(self) -> str:
        return (
            f"RowMatcher(max_distance={self.matching_distance_threshold}, "
            f"matcher={self.matcher!r}, row_range={self.row_range})"
        )

    def match(self, keypoints1, descriptors1, keypoints2, descriptors2) -> list[DMatch]:
        """Match query keypoints to train keypoints on the same rows."""
        return match_rows(
            self.matcher,
            self.matching_distance_threshold,
            keypoints1,
            descriptors1,
            keypoints2,
            descriptors2,
            self.row_range,
        )