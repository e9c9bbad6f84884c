import logging
import sys

from io import BytesIO, BufferedIOBase
from pathlib import Path
from typing import BinaryIO, Optional

from bitcursor.errors import SourceError


logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

def read1(buffer: BufferedIOBase | BinaryIO) -> Optional[int]:
    "Read a single byte, None at end of stream."
    bs = buffer.read(1)
    if bs is None or bs == b'':
        return None
    return bs[0]


# -----------------------------------------------------------------------------

class ByteSource:
    """
    A sequential provider of bytes over a binary file object.

    Each call to next() consumes exactly one byte and returns it, or None
    once the stream is exhausted. I/O errors raised by the stream are
    treated as end of stream unless strict is set, in which case they are
    raised as SourceError.
    """

    def __init__(
            self,
            buffer: BufferedIOBase | BinaryIO,
            close_stream: bool = True,
            strict: bool = False
    ):
        self._buffer = buffer
        self._close_stream = close_stream
        self._strict = strict
        self._exhausted = False
        self._closed = False

    @classmethod
    def from_bytes(cls, data: bytes, strict: bool = False) -> 'ByteSource':
        return cls(BytesIO(data), strict=strict)

    @classmethod
    def open(cls, path: Path | str, strict: bool = False) -> 'ByteSource':
        logger.debug("Opening byte source %s", path)
        return cls(Path(path).open('rb'), strict=strict)

    @classmethod
    def stdin(cls, strict: bool = False) -> 'ByteSource':
        # Standard input belongs to the process, never close it.
        return cls(sys.stdin.buffer, close_stream=False, strict=strict)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def strict(self) -> bool:
        return self._strict

    def next(self) -> Optional[int]:
        if self._exhausted:
            return None

        try:
            b = read1(self._buffer)
        except OSError as e:
            if self._strict:
                raise SourceError(f"Could not read byte source: {e}") from e
            logger.warning("I/O error treated as end of stream: %s", e)
            b = None

        if b is None:
            logger.debug("End of stream reached")
            self._exhausted = True

        return b

    def close(self):
        if self._closed:
            return

        self._closed = True
        self._exhausted = True

        if self._close_stream:
            logger.debug("Closing byte source")
            try:
                self._buffer.close()
            except OSError as e:
                raise SourceError(f"Could not close byte source: {e}") from e
