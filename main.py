import argparse
import sys

from typing import List, Optional
from errors import UintNError
from uintnarray import UintNArray


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Pack and unpack arrays of arbitrary bit-width words"
    )
    subparsers = parser.add_subparsers(
        title="subcommands", dest="cmd", required=True
    )
    width_help = "Word width in bits (1-32, negative for right-aligned)"

    pack = subparsers.add_parser(
        "pack", aliases=["p"], help="Pack words into a hex-encoded buffer"
    )
    pack.add_argument("-w", "--width", type=int, required=True, help=width_help)
    pack.add_argument("words", nargs="+", help="Word values to pack")

    unpack = subparsers.add_parser(
        "unpack", aliases=["u"], help="Read the words held in a hex buffer"
    )
    unpack.add_argument(
        "-w", "--width", type=int, required=True, help=width_help
    )
    unpack.add_argument("hex", help="Buffer contents as hex digits")
    unpack.add_argument(
        "--offset", type=int, default=None, help="Bit offset of the first word"
    )
    unpack.add_argument(
        "--length", type=int, default=None, help="Number of words to read"
    )
    unpack.add_argument(
        "--trim", action="store_true", help="Drop zero words on the padded side"
    )

    repack = subparsers.add_parser(
        "repack", aliases=["r"], help="Reinterpret words at another width"
    )
    repack.add_argument(
        "-w", "--width", type=int, required=True, help=width_help
    )
    repack.add_argument(
        "-t", "--to", type=int, required=True, help="Target word width"
    )
    repack.add_argument("words", nargs="+", help="Word values to repack")
    repack.add_argument(
        "--bit-length",
        type=int,
        default=None,
        help="Number of meaningful bits held by the words",
    )
    repack.add_argument(
        "--trim", action="store_true", help="Drop zero words on the padded side"
    )

    return parser


def pack_words(width: int, words: List[str]) -> str:
    """Pack ``words`` at ``width`` bits and return the buffer as hex.

    :param width: Signed word width.
    :type width: int
    :param words: Word values (numeric strings or integers).
    :type words: List[str]
    :returns: Hex digits of the backing buffer.
    :rtype: str
    """
    return UintNArray(width, words).buffer.hex()


def unpack_hex(
    width: int,
    hex_digits: str,
    bit_offset: Optional[int] = None,
    length: Optional[int] = None,
) -> UintNArray:
    """Build a view over the bytes spelled by ``hex_digits``.

    :param width: Signed word width.
    :type width: int
    :param hex_digits: Buffer contents, whitespace allowed.
    :type hex_digits: str
    :param bit_offset: Bit offset of the first word, or ``None``.
    :type bit_offset: Optional[int]
    :param length: Number of words, or ``None``.
    :type length: Optional[int]
    :returns: View over a buffer holding the decoded bytes.
    :rtype: UintNArray
    :raises ValueError: If ``hex_digits`` is not valid hex.
    """
    data = bytearray.fromhex(hex_digits)
    return UintNArray(width, data, bit_offset, length)


def repack_words(
    width: int,
    words: List[str],
    to_width: int,
    bit_length: Optional[int] = None,
) -> UintNArray:
    """Pack ``words`` at ``width`` bits and view them at ``to_width`` bits.

    :param width: Signed width the words are given in.
    :type width: int
    :param words: Word values.
    :type words: List[str]
    :param to_width: Signed width to reinterpret at.
    :type to_width: int
    :param bit_length: Number of meaningful bits, or ``None``.
    :type bit_length: Optional[int]
    :returns: Reinterpreted view sharing the packed buffer.
    :rtype: UintNArray
    """
    return UintNArray(width, words).reinterpret(to_width, bit_length)


def run(args) -> int:
    """Execute a parsed command and print its result.

    :param args: Parsed command-line arguments.
    :type args: argparse.Namespace
    :returns: Process exit status.
    :rtype: int
    """
    try:
        if args.cmd in ["pack", "p"]:
            print(pack_words(args.width, args.words))
            return 0
        if args.cmd in ["unpack", "u"]:
            view = unpack_hex(args.width, args.hex, args.offset, args.length)
        else:
            view = repack_words(
                args.width, args.words, args.to, args.bit_length
            )
    except UintNError as e:
        print(f"[!] {e}")
        return 1
    except ValueError as e:
        print(f"[!] Invalid hex buffer: {e}")
        return 1

    if args.trim:
        view = view.trim_zeros()
    print(view)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI tool.

    :param argv: Arguments to parse instead of ``sys.argv[1:]``.
    :type argv: Optional[List[str]]
    :returns: Process exit status.
    :rtype: int
    """
    parser = get_parser()
    args = parser.parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
