from argparse import ArgumentTypeError
from itertools import islice
from typing import Iterable, Iterator, TypeVar

from bitcursor.cursor import MAX_BITS_WIDTH


T = TypeVar('T')


def argparse_width(s: str) -> int:
    """
    >>> argparse_width('5')
    5
    >>> argparse_width('32')
    32
    """
    try:
        width = int(s)
    except ValueError:
        raise ArgumentTypeError(f"invalid width: {s!r}") from None

    if not 1 <= width <= MAX_BITS_WIDTH:
        raise ArgumentTypeError(
            f"width must be in [1, {MAX_BITS_WIDTH}], got {width}"
        )

    return width


def batch(it: Iterable[T], n: int) -> Iterator[list[T]]:
    """
    Batch data into lists of length n. The last batch may be shorter.
    >>> [x for x in batch(iter('ABCDEFG'), 3)]
    [['A', 'B', 'C'], ['D', 'E', 'F'], ['G']]
    """
    if n < 1:
        raise ValueError('n must be greater than zero')
    it = iter(it)
    while (batch := list(islice(it, n))):
        yield batch
