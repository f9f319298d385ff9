"""Brute-force nearest-neighbour matching of feature descriptors."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np


class NormType(enum.Enum):
    """Distance used to compare two descriptors."""

    L1 = "l1"
    L2 = "l2"
    HAMMING = "hamming"
    HAMMING2 = "hamming2"

    @property
    def is_binary(self) -> bool:
        return self in (NormType.HAMMING, NormType.HAMMING2)


@dataclass(frozen=True)
class DMatch:
    """A query descriptor paired with its closest train descriptor."""

    query_idx: int
    train_idx: int
    distance: float


class BruteForceMatcher:
    """Compares every query descriptor with every allowed train descriptor."""

    def __init__(self, norm: NormType = NormType.L2) -> None:
        self.norm = NormType(norm)

    def __repr__(self) -> str:
        return f"BruteForceMatcher(norm={self.norm})"

    def _prepare(self, data) -> np.ndarray:
        if self.norm.is_binary:
            return np.asarray(data, dtype=np.uint8)
        return np.asarray(data, dtype=float)

    def _distances(self, query_row: np.ndarray, train: np.ndarray) -> np.ndarray:
        """Distances from one query row to each row of ``train``."""
        if self.norm is NormType.L1:
            return np.abs(train - query_row).sum(axis=1)
        if self.norm is NormType.L2:
            return np.sqrt(((train - query_row) ** 2).sum(axis=1))
        diff = np.bitwise_xor(train, query_row)
        if self.norm is NormType.HAMMING2:
            # Each pair of bits counts once if either bit differs.
            diff = (diff | (diff >> 1)) & 0x55
        return np.unpackbits(diff, axis=1).sum(axis=1).astype(float)

    def distance(self, a, b) -> float:
        """Return the distance between two single descriptors."""
        first = self._prepare(a).ravel()
        second = self._prepare(b).ravel()
        if first.shape != second.shape:
            raise ValueError("descriptors must have the same length")
        return float(self._distances(first, second[np.newaxis, :])[0])

    def match(self, query, train, mask=None) -> list[DMatch]:
        """Find the best allowed train descriptor for each query descriptor.

        ``mask`` may be ``None`` (everything allowed), one flag per train
        row applied to every query, or a query-by-train matrix of flags.
        Queries with no allowed train descriptor get no match.
        """
        queries = self._prepare(query)
        if queries.ndim == 1:
            queries = queries[np.newaxis, :]
        trains = self._prepare(train)
        if trains.size == 0:
            return []
        if trains.ndim == 1:
            trains = trains[np.newaxis, :]
        if queries.ndim != 2 or trains.ndim != 2:
            raise ValueError("descriptors must be given as rows")
        if queries.shape[1] != trains.shape[1]:
            raise ValueError("query and train descriptors differ in length")

        shape = (queries.shape[0], trains.shape[0])
        if mask is None:
            allowed = np.ones(shape, dtype=bool)
        else:
            flags = np.asarray(mask, dtype=bool)
            if flags.ndim == 1:
                if flags.shape[0] != shape[1]:
                    raise ValueError("mask must have one flag per train descriptor")
                allowed = np.broadcast_to(flags, shape)
            elif flags.shape == shape:
                allowed = flags
            else:
                raise ValueError("mask shape does not fit the descriptors")

        matches: list[DMatch] = []
        for query_idx, row in enumerate(queries):
            candidates = np.flatnonzero(allowed[query_idx])
            if candidates.size == 0:
                continue
            distances = self._distances(row, trains[candidates])
            best = int(np.argmin(distances))
            matches.append(DMatch(query_idx, int(candidates[best]), float(distances[best])))
        return matches