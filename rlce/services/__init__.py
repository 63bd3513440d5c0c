"""Services package."""

from .preprocessor import (
    NumberedDocument,
    add_line_numbers,
    iter_numbered_lines,
    number_file,
    save_numbered_file,
)
from .validator import validate_segment, validate_segments
from .reconstructor import ReconstructionEngine
from .command_parser import (
    parse_segment,
    parse_segments,
    parse_flexible,
    parse_command,
    dump_segments,
    sample_response,
)

__all__ = [
    "NumberedDocument",
    "add_line_numbers",
    "iter_numbered_lines",
    "number_file",
    "save_numbered_file",
    "validate_segment",
    "validate_segments",
    "ReconstructionEngine",
    "parse_segment",
    "parse_segments",
    "parse_flexible",
    "parse_command",
    "dump_segments",
    "sample_response",
]
