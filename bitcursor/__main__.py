import logging
import sys

from argparse import ArgumentParser, ArgumentDefaultsHelpFormatter
from pathlib import Path
from typing import Iterator, Optional

from bitcursor.cursor import BitCursor, CursorOptions
from bitcursor.errors import BitCursorError, ExhaustedInputError
from bitcursor.utils import argparse_width, batch


logger = logging.getLogger('bitcursor')


# -----------------------------------------------------------------------------

ACTION_DUMP = 'dump'
ACTION_TEXT = 'text'

FORMAT_HEX = 'hex'
FORMAT_BIN = 'bin'
FORMAT_DEC = 'dec'

STDIN = '-'

DEFAULT_WIDTH = 8
DEFAULT_FORMAT = FORMAT_HEX
DEFAULT_PER_LINE = 16
DEFAULT_ENCODING = 'latin-1'
DEFAULT_LOG_LEVEL = 'WARNING'


# -----------------------------------------------------------------------------

def open_cursor(infile: str, options: CursorOptions) -> BitCursor:
    if infile == STDIN:
        return BitCursor.stdin(options)
    return BitCursor.open(Path(infile), options)


def fields(
        cursor: BitCursor,
        width: int,
        count: Optional[int]
) -> Iterator[int]:
    i = 0
    while not cursor.is_at_end and (count is None or i < count):
        yield cursor.read_bits(width)
        i += 1


def format_field(x: int, width: int, format: str) -> str:
    """
    >>> format_field(0xA, 4, 'hex')
    'a'
    >>> format_field(0b101, 5, 'bin')
    '00101'
    >>> format_field(255, 8, 'dec')
    '255'
    """
    match format:
        case 'hex':
            return f'{x:0{(width + 3) // 4}x}'
        case 'bin':
            return f'{x:0{width}b}'
        case 'dec':
            return str(x)

    raise ValueError(f"Unknown format: {format}")


# -----------------------------------------------------------------------------

def cmd_dump(
        infile: str,
        width: int,
        count: Optional[int],
        format: str,
        per_line: int,
        options: CursorOptions
) -> int:
    errors: list[ExhaustedInputError] = []

    with open_cursor(infile, options) as cursor:
        def formatted() -> Iterator[str]:
            try:
                for x in fields(cursor, width, count):
                    yield format_field(x, width, format)
            except ExhaustedInputError as e:
                errors.append(e)

        for group in batch(formatted(), per_line):
            print(' '.join(group))

    for e in errors:
        print(f"bitcursor: {e}", file=sys.stderr)

    return 1 if errors else 0


def cmd_text(infile: str, encoding: str, options: CursorOptions) -> int:
    with open_cursor(infile, options) as cursor:
        if cursor.is_at_end:
            return 0
        sys.stdout.write(cursor.read_remaining_as_text(encoding))

    return 0


# -----------------------------------------------------------------------------

def make_argument_parser():
    parser = ArgumentParser(
        prog='bitcursor',
        formatter_class=ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        '--log-level',
        choices=('DEBUG', 'INFO', 'WARNING', 'ERROR'),
        default=DEFAULT_LOG_LEVEL
    )

    # -------------------------------------------------------------------------

    action = parser.add_subparsers(
        title='action',
        dest='action',
        required=True
    )

    # -------------------------------------------------------------------------

    dump = action.add_parser(
        ACTION_DUMP,
        formatter_class=ArgumentDefaultsHelpFormatter
    )

    dump.add_argument('infile', nargs='?', default=STDIN)

    dump.add_argument(
        '-w', '--width',
        type=argparse_width,
        default=DEFAULT_WIDTH,
        help="Width in bits of each field (1..32).",
        metavar='N'
    )

    dump.add_argument(
        '-n', '--count',
        type=int,
        default=None,
        help="Stop after N fields. Read until end of stream if unspecified.",
        metavar='N'
    )

    dump.add_argument(
        '-f', '--format',
        choices=(FORMAT_HEX, FORMAT_BIN, FORMAT_DEC),
        default=DEFAULT_FORMAT
    )

    dump.add_argument(
        '--per-line',
        type=int,
        default=DEFAULT_PER_LINE,
        help="Fields printed on each line.",
        metavar='N'
    )

    dump.add_argument(
        '--strict',
        action='store_true',
        help="Fail on I/O errors instead of treating them as end of stream."
    )

    # -------------------------------------------------------------------------

    text = action.add_parser(
        ACTION_TEXT,
        formatter_class=ArgumentDefaultsHelpFormatter
    )

    text.add_argument('infile', nargs='?', default=STDIN)

    text.add_argument(
        '-e', '--encoding',
        default=DEFAULT_ENCODING,
        help="Encoding used to decode the remaining bytes."
    )

    text.add_argument(
        '--strict',
        action='store_true',
        help="Fail on I/O errors instead of treating them as end of stream."
    )

    # -------------------------------------------------------------------------

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = make_argument_parser()
    args = parser.parse_args(argv)

    if args.action == ACTION_DUMP and args.per_line < 1:
        parser.error(f"--per-line must be at least 1, got {args.per_line}")

    logging.basicConfig(
        level=args.log_level,
        format='%(name)s: %(levelname)s: %(message)s'
    )

    options = CursorOptions(strict_io=args.strict)

    try:
        if args.action == ACTION_DUMP:
            return cmd_dump(
                args.infile,
                args.width,
                args.count,
                args.format,
                args.per_line,
                options
            )

        if args.action == ACTION_TEXT:
            return cmd_text(args.infile, args.encoding, options)
    except (BitCursorError, OSError) as e:
        logger.error("%s", e)
        return 1

    return 0


# -----------------------------------------------------------------------------

if __name__ == '__main__':
    sys.exit(main())
