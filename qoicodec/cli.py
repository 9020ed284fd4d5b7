import argparse
import glob
import logging
import sys
import time

from .constants import QOI_HEADER_SIZE
from .converter import png_to_qoi, qoi_to_png
from .errors import QOIError
from .header import Colorspace, QOIHeader
from .image import QOIImage

DEFAULT_TEST_PATTERN = "qoi_test_images/*.qoi"


def first_mismatch(a: bytes, b: bytes) -> int:
    """Offset of the first differing byte, or the shorter length if one is a prefix."""
    for i, (av, bv) in enumerate(zip(a, b)):
        if av != bv:
            return i
    if len(a) == len(b):
        return -1
    return min(len(a), len(b))


def cmd_encode(args) -> int:
    start_time = time.perf_counter()
    image = png_to_qoi(args.input, args.output, Colorspace[args.colorspace.upper()])
    elapsed = time.perf_counter() - start_time

    print(
        f"Encoded {args.input} ({image.width}x{image.height} Channels: {image.channels.name}) "
        f"to {len(image.encoded)} bytes in {elapsed:.2f} seconds"
    )
    return 0


def cmd_decode(args) -> int:
    start_time = time.perf_counter()
    qoi_to_png(args.input, args.output)
    elapsed = time.perf_counter() - start_time

    print(f"Finished decoding image '{args.input}'\tElapsed: {elapsed:.2f} seconds")
    print(f"Converted {args.input} to {args.output}")
    return 0


def cmd_info(args) -> int:
    with open(args.input, "rb") as f:
        header = QOIHeader.unpack(f.read(QOI_HEADER_SIZE))

    print(f"{args.input}: {header.width}x{header.height}")
    print(f"Channels: {header.channels.name} Colorspace: {header.colorspace.name}")
    return 0


def cmd_test(args) -> int:
    """Decode, re-encode and decode again every file matching the pattern."""
    passed = 0
    total = 0

    for filename in sorted(glob.glob(args.pattern)):
        print(f"\nLoading file {filename}")
        total += 1

        try:
            qfile = QOIImage.load_from_file(filename)

            start_time = time.perf_counter()
            decoded = qfile.decode()
            elapsed = time.perf_counter() - start_time
            print(f"Finished decoding image '{filename}'\tElapsed: {elapsed:.2f} seconds")

            start_time = time.perf_counter()
            reencoded = decoded.encode()
            elapsed = time.perf_counter() - start_time
            print(f"Finished encoding image '{filename}'\tElapsed: {elapsed:.2f} seconds")

            redecoded = reencoded.decode()
        except QOIError as e:
            print(f"{filename} - FAILED ({e})")
            continue

        if redecoded.pixels != decoded.pixels:
            print(f"{filename} - FAILED (pixels differ after re-encoding)")
            continue

        mismatch = first_mismatch(qfile.encoded, reencoded.encoded)
        if mismatch < 0:
            print(f"{filename} - PASS (byte identical)")
        else:
            print(f"{filename} - PASS (encoded bytes first differ at offset {mismatch})")
        passed += 1

    print(f"{passed} out of {total} pics passed.")
    return 0 if passed == total else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qoicodec",
        description="Encode and decode QOI (Quite OK Image) files",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode_parser = subparsers.add_parser("encode", help="Convert an image (PNG, JPEG, RAW...) to QOI")
    encode_parser.add_argument("input")
    encode_parser.add_argument("output")
    encode_parser.add_argument(
        "--colorspace",
        choices=["srgb", "linear"],
        default="srgb",
        help="Colorspace tag written to the header (default: srgb)",
    )
    encode_parser.set_defaults(func=cmd_encode)

    decode_parser = subparsers.add_parser("decode", help="Convert a QOI file to PNG")
    decode_parser.add_argument("input")
    decode_parser.add_argument("output")
    decode_parser.set_defaults(func=cmd_decode)

    info_parser = subparsers.add_parser("info", help="Print the header of a QOI file")
    info_parser.add_argument("input")
    info_parser.set_defaults(func=cmd_info)

    test_parser = subparsers.add_parser("test", help="Round-trip every QOI file matching a glob pattern")
    test_parser.add_argument("pattern", nargs="?", default=DEFAULT_TEST_PATTERN)
    test_parser.set_defaults(func=cmd_test)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        return args.func(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
