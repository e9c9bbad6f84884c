from struct import pack, unpack


# -----------------------------------------------------------------------------

def mask(n: int) -> int:
    """
    >>> bin(mask(0))
    '0b0'
    >>> bin(mask(1))
    '0b1'
    >>> bin(mask(2))
    '0b11'
    >>> bin(mask(3))
    '0b111'
    """
    return (1 << n) - 1


def extract(x: int, size: int, start: int, stop: int) -> int:
    """
    >>> bin(extract(0b1, 1, 0, 1))
    '0b1'
    >>> bin(extract(0b10101010, 8, 0, 8))
    '0b10101010'
    >>> bin(extract(0b10101010, 8, 2, 5))
    '0b101'
    """
    assert 0 <= start < stop <= size
    return (x >> (size - stop)) & mask(stop - start)


# -----------------------------------------------------------------------------

def to_signed(x: int, n: int) -> int:
    """
    Two's complement interpretation of the n-bit unsigned value x.

    >>> to_signed(0xFF, 8)
    -1
    >>> to_signed(0x7F, 8)
    127
    >>> to_signed(0x8000, 16)
    -32768
    """
    return x - ((x >> (n - 1)) << n)


def int_bits_to_float(x: int) -> float:
    """
    >>> int_bits_to_float(0x3F800000)
    1.0
    >>> int_bits_to_float(0xC0000000)
    -2.0
    """
    assert 0 <= x < (1 << 32)
    return unpack('>f', pack('>I', x))[0]


def long_bits_to_double(x: int) -> float:
    """
    >>> long_bits_to_double(0x3FF0000000000000)
    1.0
    >>> long_bits_to_double(0x4000000000000000)
    2.0
    """
    assert 0 <= x < (1 << 64)
    return unpack('>d', pack('>Q', x))[0]
