import logging

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from bitcursor.binary import (
    extract, int_bits_to_float, long_bits_to_double, to_signed
)
from bitcursor.errors import (
    ExhaustedInputError, InvalidWidthError, SourceError
)
from bitcursor.source import ByteSource


logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

END_OF_STREAM = -1

MAX_BITS_WIDTH = 32
MAX_CHAR_WIDTH = 16


@dataclass(frozen=True)
class CursorOptions:
    strict_io: bool = False
    close_source: bool = True


# -----------------------------------------------------------------------------

class BitCursor:
    """
    Bit-granular reader over a ByteSource.

    Bits are delivered most significant first and multi-byte values are
    assembled big-endian. The cursor keeps a single byte of lookahead: while
    not at end, bits_remaining is in [1, 8] and the low bits_remaining bits
    of the buffered byte are still to be read. Once the source is exhausted
    the buffer is None and bits_remaining is END_OF_STREAM.
    """

    def __init__(
            self,
            source: ByteSource,
            options: Optional[CursorOptions] = None
    ):
        self._source = source
        self._options = options or CursorOptions()
        self._buffer: Optional[int] = None
        self._n: int = 0
        self._closed = False

        # Eager fetch so that is_at_end can answer before any read.
        self._fill_buffer()

    @classmethod
    def from_bytes(
            cls,
            data: bytes,
            options: Optional[CursorOptions] = None
    ) -> 'BitCursor':
        options = options or CursorOptions()
        return cls(ByteSource.from_bytes(data, strict=options.strict_io),
                   options)

    @classmethod
    def open(
            cls,
            path: Path | str,
            options: Optional[CursorOptions] = None
    ) -> 'BitCursor':
        options = options or CursorOptions()
        return cls(ByteSource.open(path, strict=options.strict_io), options)

    @classmethod
    def stdin(cls, options: Optional[CursorOptions] = None) -> 'BitCursor':
        options = options or CursorOptions()
        return cls(ByteSource.stdin(strict=options.strict_io), options)

    # -------------------------------------------------------------------------

    def __enter__(self) -> 'BitCursor':
        return self

    def __exit__(self, type, value, traceback):
        self.close()

    # -------------------------------------------------------------------------

    @property
    def is_at_end(self) -> bool:
        "Return True if every bit of the source has been consumed."
        return self._buffer is None

    @property
    def is_aligned(self) -> bool:
        "Return True if the cursor sits on a fresh byte boundary."
        return self._n == 8

    @property
    def bits_remaining(self) -> int:
        "Unconsumed bits in the buffered byte, END_OF_STREAM at end."
        return self._n

    @property
    def closed(self) -> bool:
        return self._closed

    def _fill_buffer(self):
        try:
            b = self._source.next()
        except SourceError:
            self._buffer = None
            self._n = END_OF_STREAM
            raise

        if b is None:
            self._buffer = None
            self._n = END_OF_STREAM
        else:
            self._buffer = b
            self._n = 8

    def _require_input(self):
        if self._closed:
            raise ValueError("Read on closed cursor")
        if self._buffer is None:
            raise ExhaustedInputError("Reading from empty input stream")

    # -------------------------------------------------------------------------

    def read_bit(self) -> int:
        self._require_input()
        assert self._buffer is not None

        self._n -= 1
        bit = (self._buffer >> self._n) & 1

        if self._n == 0:
            self._fill_buffer()

        return bit

    def read_bool(self) -> bool:
        return self.read_bit() == 1

    def read_bits(self, width: int) -> int:
        if not 1 <= width <= MAX_BITS_WIDTH:
            raise InvalidWidthError(width, 1, MAX_BITS_WIDTH)

        if width == 8:
            return self.read_byte()
        if width == 32:
            return self.read_int()

        return self._fold_bits(width)

    def read_char(self, width: int = 8) -> int:
        if not 1 <= width <= MAX_CHAR_WIDTH:
            raise InvalidWidthError(width, 1, MAX_CHAR_WIDTH)

        if width == 8:
            return self.read_byte()

        return self._fold_bits(width)

    def _fold_bits(self, width: int) -> int:
        x = 0
        for _ in range(width):
            x = (x << 1) | self.read_bit()
        return x

    def read_byte(self) -> int:
        self._require_input()
        assert self._buffer is not None

        # Aligned byte, hand out the whole buffer.
        if self._n == 8:
            x = self._buffer
            self._fill_buffer()
            return x

        # Combine the last n bits of the current buffer with the first 8 - n
        # bits of the next one.
        n = self._n
        high = extract(self._buffer, 8, 8 - n, 8)
        self._fill_buffer()
        if self._buffer is None:
            raise ExhaustedInputError(
                f"Reading from empty input stream: {n} trailing bits "
                "cannot complete a byte"
            )
        self._n = n
        return (high << (8 - n)) | extract(self._buffer, 8, 0, 8 - n)

    # -------------------------------------------------------------------------

    def _read_bytes_as_int(self, n: int) -> int:
        x = 0
        for _ in range(n):
            x = (x << 8) | self.read_byte()
        return x

    def read_short(self, signed: bool = False) -> int:
        x = self._read_bytes_as_int(2)
        return to_signed(x, 16) if signed else x

    def read_int(self, signed: bool = False) -> int:
        x = self._read_bytes_as_int(4)
        return to_signed(x, 32) if signed else x

    def read_long(self, signed: bool = False) -> int:
        x = self._read_bytes_as_int(8)
        return to_signed(x, 64) if signed else x

    def read_float(self) -> float:
        return int_bits_to_float(self.read_int())

    def read_double(self) -> float:
        return long_bits_to_double(self.read_long())

    # -------------------------------------------------------------------------

    def read_remaining_bytes(self) -> bytes:
        self._require_input()

        bs = bytearray()
        while not self.is_at_end:
            bs.append(self.read_byte())
        return bytes(bs)

    def read_remaining_as_text(self, encoding: str = 'latin-1') -> str:
        """
        Read every remaining 8-bit unit and decode it. With the default
        encoding each unit becomes exactly one character.
        """
        return self.read_remaining_bytes().decode(encoding)

    # -------------------------------------------------------------------------

    def close(self):
        if self._closed:
            return

        self._closed = True
        self._buffer = None
        self._n = END_OF_STREAM

        if self._options.close_source:
            self._source.close()
        logger.debug("Cursor closed")
