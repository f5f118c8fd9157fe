"""
Input/Output module for trackrdf.

This module provides the streaming TRACK reader and the writers for RDF
results.
"""

from .loader import TrajectoryReader, ReadStatus
from .writer import RDFWriter, format_sequence

__all__ = ['TrajectoryReader', 'ReadStatus', 'RDFWriter', 'format_sequence']
