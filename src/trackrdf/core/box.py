"""
Orthorhombic periodic simulation cell.
"""
from dataclasses import dataclass
import numpy as np
from typing import Tuple, Union

from ..exceptions import OutOfBoxError

ArrayLike3 = Union[np.ndarray, Tuple[float, float, float], list]


def minimum_image(displacement: ArrayLike3, box_lengths: ArrayLike3) -> np.ndarray:
    """
    Apply the minimum-image convention to one or more displacement vectors.

    Each axis is corrected independently by at most one box length, so every
    component must satisfy |d| <= 1.5 * L.

    Args:
        displacement: Array whose last axis holds (dx, dy, dz)
        box_lengths: Box extents (Lx, Ly, Lz)

    Returns:
        Corrected displacement array of the same shape

    Raises:
        OutOfBoxError: If any component exceeds 1.5 box lengths
    """
    d = np.asarray(displacement, dtype=np.float64)
    lengths = np.asarray(box_lengths, dtype=np.float64)
    abs_d = np.abs(d)

    if np.any(abs_d > 1.5 * lengths):
        worst = float(np.max(abs_d / lengths))
        raise OutOfBoxError(f"Displacement of {worst:.3f} box lengths exceeds the 1.5 box length limit.")

    return np.where(abs_d > 0.5 * lengths, d - np.sign(d) * lengths, d)


@dataclass(frozen=True)
class PeriodicBox:
    x: float
    y: float
    z: float

    def __post_init__(self):
        for axis, value in zip("xyz", (self.x, self.y, self.z)):
            if not np.isfinite(value) or value <= 0:
                raise ValueError(f"Box extent along {axis} must be positive and finite, got {value}.")

    @classmethod
    def from_lengths(cls, lengths: ArrayLike3) -> 'PeriodicBox':
        lx, ly, lz = (float(v) for v in np.asarray(lengths, dtype=np.float64).reshape(3))
        return cls(lx, ly, lz)

    @property
    def lengths(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @property
    def min_length(self) -> float:
        return min(self.x, self.y, self.z)

    @property
    def volume(self) -> float:
        return self.x * self.y * self.z

    def minimum_image(self, displacement: ArrayLike3) -> np.ndarray:
        return minimum_image(displacement, self.lengths)

    def contains(self, point: ArrayLike3) -> bool:
        """True if every component lies strictly within half a box length of the origin."""
        p = np.asarray(point, dtype=np.float64)
        return bool(np.all(np.abs(p) < 0.5 * self.lengths))
