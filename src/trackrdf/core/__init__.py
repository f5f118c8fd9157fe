"""
Core module for trackrdf.

This module provides the periodic cell, frame and RDF data structures and the
RDF calculation engine.
"""

from .box import PeriodicBox, minimum_image
from .frame import Frame
from .groups import GroupPartitioner
from .rdf import RDF
from .rdf_calculator import RDFCalculator, compute_rdf

__all__ = [
    'PeriodicBox',
    'minimum_image',
    'Frame',
    'GroupPartitioner',
    'RDF',
    'RDFCalculator',
    'compute_rdf',
]
