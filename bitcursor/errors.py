class BitCursorError(Exception):
    "Base class for errors raised by bitcursor."


class ExhaustedInputError(BitCursorError, EOFError):
    "A read was attempted, or could not be completed, past the last bit."


class InvalidWidthError(BitCursorError, ValueError):
    "A bit width outside the supported range was requested."

    def __init__(self, width: int, low: int, high: int):
        super().__init__(
            f"Illegal value of width = {width}, must be in [{low}, {high}]"
        )
        self.width = width
        self.low = low
        self.high = high


class SourceError(BitCursorError, OSError):
    "The underlying byte source failed while reading in strict mode."
