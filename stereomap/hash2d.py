"""Uniform grid of buckets for fast neighbourhood lookups on an image."""

from __future__ import annotations

import math
from typing import Generic, TypeVar

T = TypeVar("T")


class Hash2D(Generic[T]):
    """A 2D grid of buckets covering an area of ``size_x`` by ``size_y``."""

    def __init__(self, size_x: int, size_y: int, cell_size_x: int, cell_size_y: int) -> None:
        if cell_size_x <= 0 or cell_size_y <= 0:
            raise ValueError("cell sizes must be positive")
        self._n_rows = math.ceil(size_y / cell_size_y)
        self._n_cols = math.ceil(size_x / cell_size_x)
        self._cell_size_x = cell_size_x
        self._cell_size_y = cell_size_y
        # Buckets stored row after row.
        self._buckets: list[list[T]] = [[] for _ in range(self._n_rows * self._n_cols)]

    @property
    def rows(self) -> int:
        return self._n_rows

    @property
    def cols(self) -> int:
        return self._n_cols

    def _cell(self, x: float, y: float) -> tuple[int, int]:
        return math.floor(x / self._cell_size_x), math.floor(y / self._cell_size_y)

    def _flatten(self, cell_x: int, cell_y: int) -> int:
        return cell_y * self._n_cols + cell_x

    def insert(self, x: float, y: float, elem: T) -> None:
        """Put ``elem`` into the bucket that holds coordinates (x, y)."""
        cell_x, cell_y = self._cell(x, y)
        if not (0 <= cell_x < self._n_cols and 0 <= cell_y < self._n_rows):
            raise IndexError(f"coordinates ({x}, {y}) fall outside the grid")
        self._buckets[self._flatten(cell_x, cell_y)].append(elem)

    def neighborhood(self, x: float, y: float, radius: int) -> list[T]:
        """Return elements in the cells within ``radius`` cells of (x, y)."""
        center_x, center_y = self._cell(x, y)
        from_y = max(center_y - radius, 0)
        to_y = min(center_y + radius + 1, self._n_rows)
        from_x = max(center_x - radius, 0)
        to_x = min(center_x + radius + 1, self._n_cols)
        return [
            elem
            for cell_y in range(from_y, to_y)
            for cell_x in range(from_x, to_x)
            for elem in self._buckets[self._flatten(cell_x, cell_y)]
        ]