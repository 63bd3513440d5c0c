"""Document preprocessing: add line numbers for reference-based extraction."""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from rlce.config import settings
from rlce.errors import DocumentNotFoundError, InvalidArgumentError
from rlce.logging_setup import get_logger

logger = get_logger(__name__)


@dataclass
class NumberedDocument:
    """A document with line numbers added."""
    numbered_text: str  # Text with "N: " prefixes for LLM
    original_lines: list[str]  # Original lines without numbers (for reconstruction)
    total_lines: int


def split_lines(text: str) -> list[str]:
    """
    Split text into lines the way files are read.

    \\r\\n, \\r and \\n all end a line; a terminator at the very end of the
    text does not start an extra empty line.
    """
    if not text:
        return []
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def read_lines(path: str | Path, encoding: str | None = None) -> list[str]:
    """
    Read every line of a file, without line terminators.

    Raises:
        DocumentNotFoundError: if the file does not exist
        InvalidArgumentError: if the file is not text in the given encoding
    """
    path = Path(path)
    if not path.is_file():
        raise DocumentNotFoundError(f"Original file not found: {path}")

    encoding = encoding or settings.source_encoding
    try:
        with open(path, "r", encoding=encoding) as f:
            return [line.rstrip("\n") for line in f]
    except UnicodeDecodeError as e:
        raise InvalidArgumentError(f"{path} is not {encoding} text: {e}") from e


def format_line(line_number: int, line: str) -> str:
    """Render one line in the numbered format the LLM sees."""
    return f"{line_number}: {line}"


def add_line_numbers(text: str) -> NumberedDocument:
    """
    Add line numbers to document text for reference-based extraction.

    Format: 12: Original line text

    Args:
        text: The raw document text

    Returns:
        NumberedDocument with numbered text and original lines preserved
    """
    lines = split_lines(text)

    numbered_lines = [format_line(i, line) for i, line in enumerate(lines, start=1)]

    return NumberedDocument(
        numbered_text='\n'.join(numbered_lines),
        original_lines=lines,
        total_lines=len(lines)
    )


def number_file(path: str | Path) -> str:
    """Read a file and return its numbered rendering, one terminated line per source line."""
    lines = read_lines(path)
    return "".join(format_line(i, line) + "\n" for i, line in enumerate(lines, start=1))


def iter_numbered_lines(path: str | Path) -> Iterator[str]:
    """
    Stream the numbered rendering of a file one line at a time.

    The file is checked when this is called, not on first iteration.
    """
    path = Path(path)
    if not path.is_file():
        raise DocumentNotFoundError(f"Input file not found: {path}")
    return _numbered_line_iterator(path)


def _numbered_line_iterator(path: Path) -> Iterator[str]:
    encoding = settings.source_encoding
    try:
        with open(path, "r", encoding=encoding) as f:
            for line_number, line in enumerate(f, start=1):
                yield format_line(line_number, line.rstrip("\n"))
    except UnicodeDecodeError as e:
        raise InvalidArgumentError(f"{path} is not {encoding} text: {e}") from e


def save_numbered_file(input_path: str | Path, output_path: str | Path) -> int:
    """
    Write the numbered rendering of a file to another file without loading it whole.

    Returns:
        Number of lines written
    """
    numbered_lines = iter_numbered_lines(input_path)

    count = 0
    with open(output_path, "w", encoding=settings.source_encoding) as out:
        for numbered in numbered_lines:
            out.write(numbered + "\n")
            count += 1

    logger.info("Numbered %d lines from %s into %s", count, input_path, output_path)
    return count
