"""
Visualization module for trackrdf.

This module provides plotting capabilities for RDF data.
"""

from .rdf_plotter import RDFPlotter
from .styles import style_params, DEFAULT_STYLE, COLOR_SCHEMES

__all__ = [
    'RDFPlotter',
    'style_params',
    'DEFAULT_STYLE',
    'COLOR_SCHEMES'
]
