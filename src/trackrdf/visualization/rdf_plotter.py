"""
Visualization module for RDF data.
"""
import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union
import logging

from ..core.rdf import RDF
from .styles import style_params

logger = logging.getLogger(__name__)

class RDFPlotter:
    def __init__(self, data: Union[RDF, Iterable[Tuple[float, float]]], output_path: Union[str, Path], **kwargs):
        """
        Initialize RDFPlotter with RDF data and plotting parameters.

        Args:
            data: RDF object, or an iterable of (radius, value) pairs
            output_path: Path to save the plot
            **kwargs: Additional plotting parameters
        """
        if isinstance(data, RDF):
            self.radii, self.values = data.r, data.g_r
            self.normalization: Optional[str] = data.normalization
        else:
            pairs = np.asarray(list(data), dtype=np.float64).reshape(-1, 2)
            self.radii, self.values = pairs[:, 0], pairs[:, 1]
            self.normalization = None
        self.output_path = Path(output_path)

        self.default_params = {
            'title': 'Radial Distribution Function',
            'xlabel': 'r',
            'ylabel': 'g(r)',
            'figsize': (8, 6),
            'dpi': 300,
            'theme': 'light',
            'r_max': None,
            'show_unity': None,  # None: draw the g(r) = 1 guide only for density-normalized data
            'label': None,
        }
        self.plot_params = {**self.default_params, **kwargs}

    def _validate(self) -> None:
        if len(self.radii) == 0:
            raise ValueError("No RDF data to plot.")
        if self.plot_params['r_max'] is not None and self.plot_params['r_max'] <= 0:
            raise ValueError("r_max must be positive.")

    def _plot_line(self) -> Tuple[plt.Figure, plt.Axes]:
        fig, ax = plt.subplots(figsize=self.plot_params['figsize'])
        radii, values = self.radii, self.values
        if self.plot_params['r_max'] is not None:
            mask = radii <= self.plot_params['r_max']
            radii, values = radii[mask], values[mask]

        ax.plot(radii, values, label=self.plot_params['label'])
        show_unity = self.plot_params['show_unity']
        if show_unity or (show_unity is None and self.normalization == 'density'):
            ax.axhline(1.0, linestyle=':', linewidth=1, color='gray')

        ax.set_xlabel(self.plot_params['xlabel'])
        ax.set_ylabel(self.plot_params['ylabel'])
        ax.set_title(self.plot_params['title'])
        ax.set_xlim(left=0.0)
        if self.plot_params['label']:
            ax.legend()
        return fig, ax

    def generate_plot(self) -> Path:
        self._validate()
        fig = None
        try:
            with plt.rc_context(style_params(self.plot_params['theme'])):
                fig, _ = self._plot_line()
                fig.tight_layout()
                self.output_path.parent.mkdir(parents=True, exist_ok=True)
                fig.savefig(self.output_path, dpi=self.plot_params['dpi'], bbox_inches='tight')
            logger.info(f"Plot saved to: {self.output_path}")
        finally:
            if fig is not None:
                plt.close(fig)
        return self.output_path
