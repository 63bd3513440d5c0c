"""
rlce: command line tool for recursive line command extraction.

Usage:
  rlce <command> [options]

Commands:
  number       Print (or save) a document with "N: " line-number prefixes.
  reconstruct  Rebuild text from a source document and a segment command JSON file.
  sample       Print an example segment command.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rlce import __version__
from rlce.config import settings
from rlce.errors import DocumentNotFoundError, FormatError, RLCEError
from rlce.logging_setup import setup_logging
from rlce.services.command_parser import parse_command, sample_response
from rlce.services.preprocessor import iter_numbered_lines, save_numbered_file
from rlce.services.reconstructor import ReconstructionEngine


def _read_command(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise DocumentNotFoundError(f"Command file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FormatError(f"Command file is not UTF-8 JSON: {path}: {e}") from e


def cmd_number(args: argparse.Namespace) -> None:
    if args.output:
        count = save_numbered_file(args.input, args.output)
        print(f"Numbered {count} lines -> {args.output}", file=sys.stderr)
        return

    for line in iter_numbered_lines(args.input):
        print(line)


def cmd_reconstruct(args: argparse.Namespace) -> None:
    command_text = _read_command(args.command_file)
    segments, is_list = parse_command(command_text)

    engine = ReconstructionEngine()
    engine.load_document(args.source)

    if is_list:
        text = engine.reconstruct_multiple(segments)
    else:
        text = engine.reconstruct(segments[0])

    if args.output:
        Path(args.output).write_text(text, encoding=settings.source_encoding)
        print(f"Reconstructed {len(segments)} segment(s) -> {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(text)


def cmd_sample(args: argparse.Namespace) -> None:
    print(sample_response())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rlce",
        description="Recursive line command extraction.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"rlce {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr."
    )

    subparsers = parser.add_subparsers(
        title="commands",
        metavar="<command>",
        dest="command",
    )
    subparsers.required = True

    p_number = subparsers.add_parser(
        "number",
        help="Add line numbers to a document.",
        description="Render a document as the LLM sees it: one \"N: text\" line per source line.",
    )
    p_number.add_argument("input", help="Source document.")
    p_number.add_argument("-o", "--output", help="Write to this file instead of stdout.")
    p_number.set_defaults(func=cmd_number)

    p_reconstruct = subparsers.add_parser(
        "reconstruct",
        help="Rebuild text from segment commands.",
        description=(
            "Rebuild text from a source document and a JSON segment command.\n"
            "The command file holds one segment object or an array of segments ('-' reads stdin)."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p_reconstruct.add_argument("source", help="Original (un-numbered) document.")
    p_reconstruct.add_argument("command_file", help="Segment command JSON file, or '-' for stdin.")
    p_reconstruct.add_argument("-o", "--output", help="Write to this file instead of stdout.")
    p_reconstruct.set_defaults(func=cmd_reconstruct)

    p_sample = subparsers.add_parser(
        "sample",
        help="Print an example segment command.",
    )
    p_sample.set_defaults(func=cmd_sample)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        setup_logging(level="DEBUG", force=True)

    try:
        args.func(args)
    except RLCEError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
