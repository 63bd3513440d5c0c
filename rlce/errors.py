"""Exceptions raised by segment parsing, validation and reconstruction."""


class RLCEError(Exception):
    """Base class for all reconstruction errors."""
    pass


class DocumentNotFoundError(RLCEError, FileNotFoundError):
    """Raised when a source document does not exist."""
    pass


class InvalidArgumentError(RLCEError, ValueError):
    """Raised for malformed input: bad line ranges, empty segment lists, missing commands."""
    pass


class SegmentValidationError(InvalidArgumentError):
    """Raised when a segment tree fails validation (trivial node or invalid range)."""
    pass


class InvalidStateError(RLCEError, RuntimeError):
    """Raised when an operation needs setup that has not happened (no document loaded)."""
    pass


class LineNotFoundError(InvalidStateError):
    """Raised when a range references a line beyond the loaded document."""

    def __init__(self, line_number: int, total_lines: int):
        self.line_number = line_number
        self.total_lines = total_lines
        super().__init__(
            f"Line {line_number} not found in original file. "
            f"File has {total_lines} lines."
        )


class FormatError(RLCEError, ValueError):
    """Raised when a model response cannot be decoded into segment commands."""
    pass


class ExtractionError(RLCEError):
    """Raised when the LLM does not return usable segment commands."""
    pass
