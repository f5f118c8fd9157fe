"""
Single-frame snapshot of a TRACK trajectory.
"""
from dataclasses import dataclass
import numpy as np

from .box import PeriodicBox


@dataclass
class Frame:
    """
    Positions and type tags of every atom at one time step.

    The frame returned by ``TrajectoryReader.frame`` is the reader's own buffer
    and is overwritten by the next ``advance()``. Call ``copy()`` to keep it.
    """
    time_step: int
    box: PeriodicBox
    positions: np.ndarray
    types: np.ndarray

    def __post_init__(self):
        if self.positions.ndim != 2 or self.positions.shape[1] != 3:
            raise ValueError("Positions must be 2D (atoms, xyz) and last dimension must be 3.")
        if self.types.ndim != 1:
            raise ValueError("Types must be 1D")
        if self.positions.shape[0] != len(self.types):
            raise ValueError("Atom count mismatch: positions, types.")

    @property
    def n_atoms(self) -> int:
        return len(self.types)

    @property
    def x(self) -> np.ndarray:
        return self.positions[:, 0]

    @property
    def y(self) -> np.ndarray:
        return self.positions[:, 1]

    @property
    def z(self) -> np.ndarray:
        return self.positions[:, 2]

    def copy(self) -> 'Frame':
        return Frame(self.time_step, self.box, self.positions.copy(), self.types.copy())
