"""
Exception types raised by trackrdf.

Data-format and physical-consistency failures subclass ValueError so callers
that already catch ValueError keep working.
"""
from typing import Optional


class TrackRDFError(Exception):
    """Base class for all trackrdf errors."""


class TrackFormatError(TrackRDFError, ValueError):
    """Malformed, truncated or non-numeric content in a TRACK file."""

    def __init__(self, message: str, path: Optional[str] = None, line_no: Optional[int] = None):
        self.path = path
        self.line_no = line_no
        location = ""
        if path is not None:
            location = f"{path}:{line_no}: " if line_no is not None else f"{path}: "
        super().__init__(f"{location}{message}")


class PhysicalConsistencyError(TrackRDFError, ValueError):
    """Coordinates or distances that cannot come from a valid periodic cell."""


class OutOfBoxError(PhysicalConsistencyError):
    """A displacement exceeds 1.5 box lengths along some axis."""


class BinRangeError(PhysicalConsistencyError):
    """A pair distance falls at or beyond the last histogram bin."""
