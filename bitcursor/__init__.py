__version__ = '0.0.1'

from bitcursor.cursor import BitCursor, CursorOptions
from bitcursor.errors import (
    BitCursorError, ExhaustedInputError, InvalidWidthError, SourceError
)
from bitcursor.source import ByteSource

__all__ = [
    'BitCursor', 'CursorOptions', 'ByteSource',
    'BitCursorError', 'ExhaustedInputError', 'InvalidWidthError',
    'SourceError', '__version__'
]
