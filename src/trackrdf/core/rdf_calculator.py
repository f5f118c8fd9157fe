"""
Core RDF calculation engine.

All A-B pairs are visited (O(|A| * |B|)); distances use the minimum-image
convention of an orthorhombic box.
"""
import numpy as np
from typing import Optional, Tuple
import logging
from functools import partial
from multiprocessing import Pool
from tqdm import tqdm

from .box import PeriodicBox, minimum_image
from .rdf import RDF
from ..exceptions import BinRangeError
from ..utils.helpers import safe_divide, validate_array_shape

logger = logging.getLogger(__name__)

VALID_NORMALIZATIONS = ('shell', 'reference', 'density')
VALID_OUT_OF_RANGE = ('raise', 'drop')
# Upper bound on A-B pairs held in one block of temporaries.
MAX_BLOCK_PAIRS = 1 << 20


def num_bins_for(box: PeriodicBox, bin_width: float) -> int:
    return int(np.ceil(2.0 * box.min_length / bin_width))


def shell_volumes(n_bins: int, bin_width: float) -> np.ndarray:
    """Exact volume of each spherical shell [j*dr, (j+1)*dr)."""
    edges = np.arange(n_bins + 1, dtype=np.float64) * bin_width
    return (4.0 / 3.0) * np.pi * (edges[1:]**3 - edges[:-1]**3)


def _histogram_chunk(chunk_a: np.ndarray, group_b: np.ndarray, box_lengths: np.ndarray,
                     bin_width: float, n_bins: int, out_of_range: str,
                     max_block_pairs: int = MAX_BLOCK_PAIRS) -> Tuple[np.ndarray, int]:
    """
    Raw pair counts between a slice of group A and all of group B, plus the number of dropped pairs.

    Group B is walked in slices so that no temporary holds more than
    max_block_pairs displacement vectors.
    """
    counts = np.zeros(n_bins, dtype=np.int64)
    n_dropped = 0
    b_step = max(1, max_block_pairs // max(1, len(chunk_a)))
    for start in range(0, len(group_b), b_step):
        block_b = group_b[start:start + b_step]
        disp = minimum_image(chunk_a[:, None, :] - block_b[None, :, :], box_lengths)
        dist = np.sqrt(np.sum(disp**2, axis=-1)).ravel()
        bin_idx = np.floor(dist / bin_width).astype(np.int64)

        beyond = bin_idx >= n_bins
        n_beyond = int(np.count_nonzero(beyond))
        if n_beyond:
            if out_of_range == 'raise':
                raise BinRangeError(f"Pair distance {dist[beyond].max():.6g} is beyond the last bin "
                                    f"(r_max = {n_bins * bin_width:.6g}).")
            bin_idx = bin_idx[~beyond]
            n_dropped += n_beyond
        counts += np.bincount(bin_idx, minlength=n_bins)
    return counts, n_dropped


def _as_group(coords, name: str) -> np.ndarray:
    arr = np.asarray(coords, dtype=np.float64)
    if arr.size == 0:
        return arr.reshape(0, 3)
    validate_array_shape(arr, (len(arr), 3), name)
    return arr


class RDFCalculator:
    def __init__(self, bin_width: float = 0.1, normalization: str = 'shell', out_of_range: str = 'raise',
                 n_workers: int = 1, chunk_size: int = 512, progress: bool = False,
                 max_block_pairs: int = MAX_BLOCK_PAIRS):
        if not (np.isfinite(bin_width) and bin_width > 0):
            raise ValueError(f"bin_width must be positive and finite, got {bin_width}.")
        if normalization not in VALID_NORMALIZATIONS:
            raise ValueError(f"normalization must be one of {VALID_NORMALIZATIONS}, got {normalization!r}")
        if out_of_range not in VALID_OUT_OF_RANGE:
            raise ValueError(f"out_of_range must be one of {VALID_OUT_OF_RANGE}, got {out_of_range!r}")
        if n_workers < 1 or chunk_size < 1 or max_block_pairs < 1:
            raise ValueError("n_workers, chunk_size and max_block_pairs must be >= 1.")
        self.bin_width = float(bin_width)
        self.normalization = normalization
        self.out_of_range = out_of_range
        self.n_workers = int(n_workers)
        self.chunk_size = int(chunk_size)
        self.progress = progress
        self.max_block_pairs = int(max_block_pairs)

    def _count_pairs(self, group_a: np.ndarray, group_b: np.ndarray, box: PeriodicBox,
                     n_bins: int) -> Tuple[np.ndarray, int]:
        counts = np.zeros(n_bins, dtype=np.int64)
        n_dropped = 0
        if len(group_a) == 0 or len(group_b) == 0:
            return counts, n_dropped

        chunks = [group_a[i:i + self.chunk_size] for i in range(0, len(group_a), self.chunk_size)]
        count_chunk = partial(_histogram_chunk, group_b=group_b, box_lengths=box.lengths,
                              bin_width=self.bin_width, n_bins=n_bins, out_of_range=self.out_of_range,
                              max_block_pairs=self.max_block_pairs)
        desc = f"Pairs {len(group_a)}x{len(group_b)}"

        if self.n_workers > 1 and len(chunks) > 1:
            logger.debug(f"Histogramming {len(chunks)} chunks on {self.n_workers} worker processes.")
            with Pool(processes=self.n_workers) as pool:
                partials = list(tqdm(pool.imap(count_chunk, chunks), total=len(chunks), desc=desc,
                                     disable=not self.progress))
        else:
            partials = [count_chunk(c) for c in tqdm(chunks, desc=desc, disable=not self.progress)]

        for chunk_counts, chunk_dropped in partials:
            counts += chunk_counts
            n_dropped += chunk_dropped
        return counts, n_dropped

    def calculate(self, group_a, group_b, box: PeriodicBox, time_step: Optional[int] = None) -> RDF:
        """
        Histogram the minimum-image A-B pair distances and normalize by shell volume.

        Args:
            group_a: (N_a, 3) reference coordinates
            group_b: (N_b, 3) partner coordinates
            box: Periodic cell the coordinates live in
            time_step: Optional time step recorded in the result

        Returns:
            RDF with num_bins = ceil(2 * min(box) / bin_width) shells

        Raises:
            OutOfBoxError: If a displacement exceeds 1.5 box lengths
            BinRangeError: If a distance lands beyond the last bin and
                out_of_range is 'raise'
        """
        group_a = _as_group(group_a, "group_a")
        group_b = _as_group(group_b, "group_b")
        n_a, n_b = len(group_a), len(group_b)

        n_bins = num_bins_for(box, self.bin_width)
        volumes = shell_volumes(n_bins, self.bin_width)
        if n_a == 0 or n_b == 0:
            logger.warning(f"Cannot histogram pairs: group A has {n_a} atoms, group B has {n_b}. RDF will be zero.")

        counts, n_dropped = self._count_pairs(group_a, group_b, box, n_bins)
        if n_dropped:
            logger.warning(f"Dropped {n_dropped} of {n_a * n_b} pairs beyond r_max = {n_bins * self.bin_width:.4g}.")

        if self.normalization == 'shell':
            denominator = volumes
        elif self.normalization == 'reference':
            denominator = volumes * n_b
        else:
            denominator = volumes * n_a * n_b / box.volume
        g_r = safe_divide(counts.astype(np.float64), denominator)

        logger.debug(f"RDF: {n_bins} bins of {self.bin_width:g}, {int(counts.sum())} pairs counted, "
                     f"normalization '{self.normalization}'.")
        return RDF(g_r=g_r, counts=counts.astype(np.float64), shell_volumes=volumes,
                   bin_width=self.bin_width, normalization=self.normalization,
                   n_a=n_a, n_b=n_b, box_lengths=box.lengths, n_dropped=n_dropped, time_step=time_step)


def compute_rdf(group_a, group_b, box: PeriodicBox, bin_width: float, normalization: str = 'shell',
                out_of_range: str = 'raise', n_workers: int = 1, chunk_size: int = 512) -> RDF:
    calc = RDFCalculator(bin_width=bin_width, normalization=normalization, out_of_range=out_of_range,
                         n_workers=n_workers, chunk_size=chunk_size)
    return calc.calculate(group_a, group_b, box)
