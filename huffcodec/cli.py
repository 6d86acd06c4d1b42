"""
cli.py : compress or decompress a file with huffcodec

Usage:
    python -m huffcodec FILE                 #FILE -> FILE.hfc
    python -m huffcodec -d FILE.hfc          #FILE.hfc -> FILE
    python -m huffcodec --text FILE          #print the bitstream as 0/1 text
    python -m huffcodec -d --text FILE.txt   #decode 0/1 text to stdout
"""

import argparse
import sys
from typing import List, Optional

from .codecs import HuffmanCodecFile, HuffmanCodecText
from .logger import Logger, Log, LogLevel
from .settings import COMPRESSED_FILE_EXTENSION
from .validators import validate_file_exists


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="huffcodec", description="Huffman compression of byte streams.")
    parser.add_argument("-d", "--decompress", action="store_true", help="decompress FILE instead of compressing it")
    parser.add_argument(
        "--text", action="store_true",
        help="use the textual bitstream ('0'/'1' characters) instead of the binary container"
    )
    parser.add_argument("-o", "--output", help="output path")
    parser.add_argument("-v", "--verbose", action="store_true", help="display info logs")
    parser.add_argument("file", help="input file")
    return parser


def default_output_path(input_path: str, decompress: bool) -> str:
    if not decompress:
        return input_path + COMPRESSED_FILE_EXTENSION
    if input_path.endswith(COMPRESSED_FILE_EXTENSION) and len(input_path) > len(COMPRESSED_FILE_EXTENSION):
        return input_path[: -len(COMPRESSED_FILE_EXTENSION)]
    return input_path + ".out"


def run(args: argparse.Namespace, logger: Logger) -> None:
    validate_file_exists(args.file)

    if args.text:
        codec = HuffmanCodecText()
        if args.decompress:
            with open(args.file, "r", encoding="ascii") as f:
                data = codec.decompress(f.read(), logger=logger)
            if args.output:
                with open(args.output, "wb") as f:
                    f.write(data)
            else:
                sys.stdout.buffer.write(data)
                sys.stdout.flush()
        else:
            with open(args.file, "rb") as f:
                text = codec.compress(f.read(), logger)
            if args.output:
                with open(args.output, "w", encoding="ascii") as f:
                    f.write(text)
            else:
                print(text)
        return

    output = args.output or default_output_path(args.file, args.decompress)
    codec = HuffmanCodecFile()
    if args.decompress:
        codec.decompress(args.file, output, logger)
    else:
        codec.compress(args.file, output, logger)
    logger.log(f"Wrote {output}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logger = Logger(stream=sys.stderr)
    logger.display_info = args.verbose

    try:
        run(args, logger)
    except (ValueError, OSError) as exc:
        logger.log(Log("Cli", LogLevel.ERROR, str(exc)))
        return 1
    return 0
