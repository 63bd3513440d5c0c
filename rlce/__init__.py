"""Recursive Line Command Extraction: rebuild documents from line-range segment commands."""

from rlce.errors import (
    RLCEError,
    DocumentNotFoundError,
    InvalidArgumentError,
    SegmentValidationError,
    InvalidStateError,
    LineNotFoundError,
    FormatError,
    ExtractionError,
)
from rlce.models.segment import LineRange, SegmentCommand
from rlce.services.reconstructor import ReconstructionEngine
from rlce.services.validator import validate_segment, validate_segments

__version__ = "0.1.0"

__all__ = [
    "RLCEError",
    "DocumentNotFoundError",
    "InvalidArgumentError",
    "SegmentValidationError",
    "InvalidStateError",
    "LineNotFoundError",
    "FormatError",
    "ExtractionError",
    "LineRange",
    "SegmentCommand",
    "ReconstructionEngine",
    "validate_segment",
    "validate_segments",
]
