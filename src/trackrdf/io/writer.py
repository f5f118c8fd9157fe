"""
Result writing module for trackrdf.

This module provides functionality for saving RDF histograms, run
configurations and summaries.
"""
import numpy as np
from pathlib import Path
import logging
from typing import Optional, Union, Dict, Any
import json
import yaml

from ..core.rdf import RDF
from ..utils.helpers import ensure_directory

logger = logging.getLogger(__name__)

def format_sequence(values) -> str:
    """Render values as a bracketed, comma separated list, e.g. ``[0.0, 1.5]``."""
    return "[" + ", ".join(repr(float(v)) for v in np.asarray(values).ravel()) + "]"

class RDFWriter:
    """Class for writing RDF results and run metadata."""

    def __init__(self, output_dir: Union[str, Path]):
        """
        Initialize the writer.

        Args:
            output_dir: Directory to write output files to
        """
        self.output_dir = ensure_directory(output_dir)

    def save_text(self, rdf: RDF, filename: Optional[str] = None) -> Path:
        """
        Write g(r) as a single bracketed sequence.

        Args:
            rdf: RDF to save
            filename: Optional custom filename (default: 'rdf_out.txt')
        """
        if filename is None:
            filename = 'rdf_out.txt'
        filepath = self.output_dir / filename

        logger.info(f"Saving RDF values to {filepath}")
        with open(filepath, 'w') as f:
            f.write(format_sequence(rdf.g_r))
        return filepath

    def save_rdf_data(self, rdf: RDF, filename: Optional[str] = None) -> Path:
        """
        Save RDF arrays to a .npz file.

        Args:
            rdf: RDF to save
            filename: Optional custom filename (default: 'rdf.npz')
        """
        if filename is None:
            filename = 'rdf.npz'
        filepath = self.output_dir / filename

        logger.info(f"Saving RDF data to {filepath}")
        np.savez(
            filepath,
            r=rdf.r,
            g_r=rdf.g_r,
            counts=rdf.counts,
            shell_volumes=rdf.shell_volumes
        )
        return filepath

    def save_config(self, config: Dict[str, Any], filename: Optional[str] = None) -> Path:
        """
        Save configuration data to a YAML file.

        Args:
            config: Configuration dictionary to save
            filename: Optional custom filename (default: 'config.yaml')
        """
        if filename is None:
            filename = 'config.yaml'
        filepath = self.output_dir / filename

        logger.info(f"Saving configuration to {filepath}")
        with open(filepath, 'w') as f:
            yaml.dump(config, f, default_flow_style=False)
        return filepath

    def save_analysis_results(self, results: Dict[str, Any], filename: Optional[str] = None) -> Path:
        """
        Save analysis results to a JSON file.

        Args:
            results: Analysis results dictionary to save
            filename: Optional custom filename (default: 'rdf_summary.json')
        """
        if filename is None:
            filename = 'rdf_summary.json'
        filepath = self.output_dir / filename

        logger.info(f"Saving analysis results to {filepath}")
        with open(filepath, 'w') as f:
            json.dump(results, f, indent=4)
        return filepath
