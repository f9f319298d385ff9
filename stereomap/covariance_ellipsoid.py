"""Error ellipses and ellipsoids for 2D and 3D covariance matrices."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np

_CHI2_2D = (5.991, 9.210)
_CHI2_3D = (7.815, 11.345)


class Probability(enum.Enum):
    """Confidence level of the error region."""

    PROB_95 = 0
    PROB_99 = 1

    @property
    def chi2_2d(self) -> float:
        return _CHI2_2D[self.value]

    @property
    def chi2_3d(self) -> float:
        return _CHI2_3D[self.value]


@dataclass(frozen=True)
class Ellipse2D:
    """Semi-axis lengths and unit directions, smallest axis first."""

    len1: float
    len2: float
    ax1: np.ndarray
    ax2: np.ndarray


@dataclass(frozen=True)
class Ellipsoid3D:
    """Semi-axis lengths and unit directions, smallest axis first."""

    len1: float
    len2: float
    len3: float
    ax1: np.ndarray
    ax2: np.ndarray
    ax3: np.ndarray


def _eigen(covariance, size: int) -> tuple[np.ndarray, np.ndarray]:
    matrix = np.asarray(covariance, dtype=float)
    if matrix.shape != (size, size):
        raise ValueError(f"covariance must be a {size}x{size} matrix")
    return np.linalg.eigh(matrix)


def compute_covariance_ellipse(covariance, probability: Probability) -> Ellipse2D:
    """Return the error ellipse of a symmetric 2x2 covariance matrix."""
    values, vectors = _eigen(covariance, 2)
    lengths = np.sqrt(probability.chi2_2d * values)
    return Ellipse2D(
        len1=float(lengths[0]),
        len2=float(lengths[1]),
        ax1=vectors[:, 0].copy(),
        ax2=vectors[:, 1].copy(),
    )


def compute_covariance_ellipsoid(covariance, probability: Probability) -> Ellipsoid3D:
    """Return the error ellipsoid of a symmetric 3x3 covariance matrix."""
    values, vectors = _eigen(covariance, 3)
    lengths = np.sqrt(probability.chi2_3d * values)
    return Ellipsoid3D(
        len1=float(lengths[0]),
        len2=float(lengths[1]),
        len3=float(lengths[2]),
        ax1=vectors[:, 0].copy(),
        ax2=vectors[:, 1].copy(),
        ax3=vectors[:, 2].copy(),
    )