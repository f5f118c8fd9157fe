"""
Radial distribution function result container.
"""
from dataclasses import dataclass
import numpy as np
from typing import Iterator, Optional, Tuple
from pathlib import Path
import json
import logging

logger = logging.getLogger(__name__)

@dataclass
class RDF:
    g_r: np.ndarray
    counts: np.ndarray  # Raw pair counts per bin, before normalization
    shell_volumes: np.ndarray
    bin_width: float
    normalization: str = 'shell'
    n_a: int = 0
    n_b: int = 0
    box_lengths: Optional[np.ndarray] = None
    n_dropped: int = 0
    time_step: Optional[int] = None

    def __post_init__(self):
        if not (self.g_r.shape == self.counts.shape == self.shell_volumes.shape) or self.g_r.ndim != 1:
            raise ValueError("g_r, counts and shell_volumes must be 1D arrays of equal length.")
        if self.bin_width <= 0:
            raise ValueError("bin_width must be positive.")

    @property
    def n_bins(self) -> int:
        return len(self.g_r)

    @property
    def r(self) -> np.ndarray:
        """Inner radius of each shell, j * bin_width."""
        return np.arange(self.n_bins, dtype=np.float64) * self.bin_width

    @property
    def r_centers(self) -> np.ndarray:
        return self.r + 0.5 * self.bin_width

    def pairs(self) -> Iterator[Tuple[float, float]]:
        for r_j, g_j in zip(self.r, self.g_r):
            yield float(r_j), float(g_j)

    def metadata(self) -> dict:
        return {
            'bin_width': float(self.bin_width),
            'n_bins': self.n_bins,
            'normalization': self.normalization,
            'n_a': int(self.n_a),
            'n_b': int(self.n_b),
            'box_lengths': None if self.box_lengths is None else [float(v) for v in self.box_lengths],
            'n_dropped': int(self.n_dropped),
            'time_step': None if self.time_step is None else int(self.time_step),
            'total_counts': float(np.sum(self.counts)),
        }

    def save(self, base_path: Path):
        base_path = Path(base_path)
        base_path.parent.mkdir(parents=True, exist_ok=True)
        np.save(base_path.with_suffix('.g_r.npy'), self.g_r)
        np.save(base_path.with_suffix('.counts.npy'), self.counts)
        np.save(base_path.with_suffix('.shell_volumes.npy'), self.shell_volumes)
        with open(base_path.with_suffix('.meta.json'), 'w') as f:
            json.dump(self.metadata(), f, indent=4)
        logger.info(f"RDF data saved: {base_path.name}.*")

    @staticmethod
    def load(base_path: Path) -> 'RDF':
        base_path = Path(base_path)
        required_suffixes = ['.g_r.npy', '.counts.npy', '.shell_volumes.npy', '.meta.json']
        if not all((base_path.with_suffix(s)).exists() for s in required_suffixes):
            raise FileNotFoundError(f"Required RDF files missing for base: {base_path.name}")

        with open(base_path.with_suffix('.meta.json'), 'r') as f:
            meta = json.load(f)
        box_lengths = meta.get('box_lengths')

        return RDF(np.load(base_path.with_suffix('.g_r.npy')),
                   np.load(base_path.with_suffix('.counts.npy')),
                   np.load(base_path.with_suffix('.shell_volumes.npy')),
                   bin_width=meta['bin_width'],
                   normalization=meta.get('normalization', 'shell'),
                   n_a=meta.get('n_a', 0),
                   n_b=meta.get('n_b', 0),
                   box_lengths=None if box_lengths is None else np.asarray(box_lengths, dtype=np.float64),
                   n_dropped=meta.get('n_dropped', 0),
                   time_step=meta.get('time_step'))
