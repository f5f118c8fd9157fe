"""
Split a frame into the two atom groups used for a partial RDF.
"""
import numpy as np
import logging
from typing import Optional, Tuple, Union

from .frame import Frame

logger = logging.getLogger(__name__)


class GroupPartitioner:
    def __init__(self, type_a: int = 1, type_b: int = 2):
        if type_a == type_b:
            raise ValueError(f"Group types must differ, got type_a == type_b == {type_a}.")
        self.type_a = int(type_a)
        self.type_b = int(type_b)
        self.sizes: Optional[Tuple[int, int]] = None

    def count(self, frame_or_types: Union[Frame, np.ndarray]) -> Tuple[int, int]:
        """Number of atoms in group A and group B. Warns when the counts change between frames."""
        types = frame_or_types.types if isinstance(frame_or_types, Frame) else np.asarray(frame_or_types)
        sizes = (int(np.count_nonzero(types == self.type_a)), int(np.count_nonzero(types == self.type_b)))
        if self.sizes is not None and sizes != self.sizes:
            logger.warning(f"Group composition changed from {self.sizes} to {sizes} (types {self.type_a}, {self.type_b}).")
        self.sizes = sizes
        return sizes

    def partition(self, frame_or_types: Union[Frame, np.ndarray],
                  positions: Optional[np.ndarray] = None) -> Tuple[np.ndarray, np.ndarray]:
        """
        Coordinates of type_a atoms and type_b atoms, in atom-index order.

        Accepts either a Frame or a types array together with the matching
        (N, 3) positions. Atoms of any other type belong to neither group. The
        returned arrays are copies and stay valid after the reader advances.
        """
        if isinstance(frame_or_types, Frame):
            types, positions = frame_or_types.types, frame_or_types.positions
            where = f"time step {frame_or_types.time_step}"
        else:
            if positions is None:
                raise ValueError("positions are required when partitioning a types array.")
            types, positions = np.asarray(frame_or_types), np.asarray(positions, dtype=np.float64)
            where = "frame"
            if types.ndim != 1 or positions.shape != (len(types), 3):
                raise ValueError(f"Expected types (N,) and positions (N, 3), got {types.shape} and {positions.shape}.")

        n_a, n_b = self.count(types)
        group_a = positions[types == self.type_a]
        group_b = positions[types == self.type_b]
        if n_a == 0 or n_b == 0:
            logger.warning(f"Empty group at {where}: "
                           f"{n_a} atoms of type {self.type_a}, {n_b} atoms of type {self.type_b}.")
        logger.debug(f"{where.capitalize()}: group A {n_a} atoms, group B {n_b} atoms.")
        return group_a, group_b
