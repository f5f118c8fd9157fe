"""
Streaming reader for TRACK trajectory files.

File layout (whitespace separated tokens):

    <label> <n_atoms> <label> <Lx> <Ly> <Lz> ...        title line, once
    <label> <time_step> ...                              frame header
    <label> <x> <y> <z> <type> ...                       n_atoms records

Frame header plus records repeat until the end of the file.
"""
from enum import Enum
from pathlib import Path
import logging
from typing import Callable, Iterator, List, Optional, Tuple, Union

import numpy as np
from tqdm import tqdm

from ..core.box import PeriodicBox
from ..core.frame import Frame
from ..exceptions import TrackFormatError

logger = logging.getLogger(__name__)

TRACK_FILENAME = "TRACK"
VALID_ON_ERROR = ('raise', 'stop')


class ReadStatus(Enum):
    FRAME = "frame"
    END_OF_STREAM = "end_of_stream"


class TrajectoryReader:
    """
    Frame-by-frame reader over a TRACK file.

    The reader owns a single current-frame buffer. ``frame`` always refers to
    that buffer, so a Frame obtained before an ``advance()`` shows the new
    coordinates afterwards; use ``Frame.copy()`` to keep a snapshot. A frame
    that fails to parse is never committed, the previous frame stays intact.
    """

    def __init__(self, directory: Union[str, Path], filename: str = TRACK_FILENAME):
        self.directory = Path(directory)
        self.path = self.directory / filename
        if not self.path.is_file():
            raise FileNotFoundError(f"Trajectory file not found: {self.path}")

        self._fh = open(self.path, 'rb')
        self._line_no = 0
        self._failure: Optional[TrackFormatError] = None
        try:
            self.n_atoms, self.box = self._parse_title(self._readline())
        except Exception:
            self.close()
            raise

        self._positions = np.zeros((self.n_atoms, 3), dtype=np.float64)
        self._types = np.zeros(self.n_atoms, dtype=np.int64)
        self._atom_indices = np.arange(self.n_atoms)
        self._frame: Optional[Frame] = None
        self.time_step = 0
        self.frames_read = 0
        logger.info(f"Opened '{self.path}': {self.n_atoms} atoms, box {self.box.x:g} x {self.box.y:g} x {self.box.z:g}.")

    def __enter__(self) -> 'TrajectoryReader':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._fh is None

    @property
    def frame(self) -> Optional[Frame]:
        return self._frame

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def _readline(self) -> str:
        raw = self._fh.readline()
        if not raw:
            return ""
        self._line_no += 1
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise self._error(f"Line is not valid UTF-8 text: {e.reason} at byte {e.start}.") from None

    def _error(self, message: str) -> TrackFormatError:
        return TrackFormatError(message, path=str(self.path), line_no=self._line_no)

    def _to_int(self, token: str, what: str) -> int:
        try:
            return int(token)
        except ValueError:
            raise self._error(f"Invalid {what}: {token!r} is not an integer.") from None

    def _to_float(self, token: str, what: str) -> float:
        try:
            value = float(token)
        except ValueError:
            raise self._error(f"Invalid {what}: {token!r} is not a number.") from None
        if not np.isfinite(value):
            raise self._error(f"Invalid {what}: {token!r} is not finite.")
        return value

    def _parse_title(self, line: str) -> Tuple[int, PeriodicBox]:
        parts = line.split()
        if len(parts) < 6:
            raise self._error(f"Title line needs at least 6 tokens (atom count at 2, box at 4-6), got {len(parts)}.")
        n_atoms = self._to_int(parts[1], "atom count")
        if n_atoms < 0:
            raise self._error(f"Atom count must be non-negative, got {n_atoms}.")
        lengths = [self._to_float(tok, f"box extent {axis}") for axis, tok in zip("xyz", parts[3:6])]
        try:
            box = PeriodicBox(*lengths)
        except ValueError as e:
            raise self._error(str(e)) from None
        return n_atoms, box

    def _next_header(self) -> Optional[List[str]]:
        """Tokens of the next frame header, or None at end of file. Blank lines are skipped."""
        while True:
            line = self._readline()
            if not line:
                return None
            parts = line.split()
            if parts:
                return parts

    def advance(self) -> ReadStatus:
        """
        Read the next frame into the current-frame buffer.

        Returns:
            ReadStatus.FRAME after a complete frame, ReadStatus.END_OF_STREAM
            when no further frame header exists

        Raises:
            TrackFormatError: On a malformed header, truncated frame or bad record,
                and again on every later call once a frame has failed
        """
        if self._failure is not None:
            raise self._failure
        if self._fh is None:
            return ReadStatus.END_OF_STREAM

        try:
            header = self._next_header()
            if header is None:
                logger.debug(f"End of '{self.path.name}' after {self.frames_read} frame(s).")
                self.close()
                return ReadStatus.END_OF_STREAM
            if len(header) < 2:
                raise self._error("Frame header is missing the time step.")
            time_step = self._to_int(header[1], "time step")

            positions = np.empty((self.n_atoms, 3), dtype=np.float64)
            types = np.empty(self.n_atoms, dtype=np.int64)
            for i in self._atom_indices:
                line = self._readline()
                if not line:
                    raise self._error(f"Unexpected end of file in frame at time step {time_step}: "
                                      f"read {i} of {self.n_atoms} atom records.")
                parts = line.split()
                if len(parts) < 5:
                    raise self._error(f"Atom record needs at least 5 tokens, got {len(parts)}.")
                positions[i, 0] = self._to_float(parts[1], "x coordinate")
                positions[i, 1] = self._to_float(parts[2], "y coordinate")
                positions[i, 2] = self._to_float(parts[3], "z coordinate")
                types[i] = self._to_int(parts[4], "atom type")
        except TrackFormatError as e:
            self._failure = e
            self.close()
            raise

        self._positions[:] = positions
        self._types[:] = types
        self.time_step = time_step
        if self._frame is None:
            self._frame = Frame(time_step, self.box, self._positions, self._types)
        else:
            self._frame.time_step = time_step
        self.frames_read += 1
        return ReadStatus.FRAME

    def frames(self) -> Iterator[Frame]:
        """Yield the current-frame buffer after every successful advance."""
        while self.advance() is ReadStatus.FRAME:
            yield self._frame

    def read_last_frame(self, on_error: str = 'raise',
                        on_frame: Optional[Callable[[Frame], object]] = None,
                        progress: bool = False) -> Frame:
        """
        Read to the end of the stream and return a copy of the last complete frame.

        Args:
            on_error: 'raise' propagates a corrupt frame; 'stop' treats it as
                the end of the stream and keeps the last good frame
            on_frame: Optional callback invoked with each frame as it is read
            progress: Show a tqdm progress counter

        Returns:
            Copy of the last successfully parsed frame

        Raises:
            TrackFormatError: On a corrupt frame with on_error='raise', or when
                the file holds no complete frame
        """
        if on_error not in VALID_ON_ERROR:
            raise ValueError(f"on_error must be one of {VALID_ON_ERROR}, got {on_error!r}")

        try:
            for frame in tqdm(self.frames(), desc=f"Reading {self.path.name}", unit="fr", disable=not progress):
                if on_frame is not None:
                    on_frame(frame)
        except TrackFormatError as e:
            if on_error == 'raise':
                raise
            logger.warning(f"Stopping at corrupt frame after {self.frames_read} complete frame(s): {e}")

        if self._frame is None:
            raise TrackFormatError("No complete frame found.", path=str(self.path))
        logger.info(f"Read {self.frames_read} frame(s); last time step {self.time_step}.")
        return self._frame.copy()
