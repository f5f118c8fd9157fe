"""
trackrdf: radial distribution functions from TRACK trajectories
"""

__version__ = "0.1.0"

# Core components
from .core.box import PeriodicBox, minimum_image
from .core.frame import Frame
from .core.groups import GroupPartitioner
from .core.rdf import RDF
from .core.rdf_calculator import RDFCalculator, compute_rdf

# IO components
from .io.loader import TrajectoryReader, ReadStatus
from .io.writer import RDFWriter

# Visualization components
from .visualization import RDFPlotter

# Utility components
from .utils.config_manager import ConfigManager

from .exceptions import (
    TrackRDFError,
    TrackFormatError,
    PhysicalConsistencyError,
    OutOfBoxError,
    BinRangeError
)

__all__ = [
    # Core
    'PeriodicBox',
    'minimum_image',
    'Frame',
    'GroupPartitioner',
    'RDF',
    'RDFCalculator',
    'compute_rdf',
    # IO
    'TrajectoryReader',
    'ReadStatus',
    'RDFWriter',
    # Visualization
    'RDFPlotter',
    # Utils
    'ConfigManager',
    # Errors
    'TrackRDFError',
    'TrackFormatError',
    'PhysicalConsistencyError',
    'OutOfBoxError',
    'BinRangeError',
]
