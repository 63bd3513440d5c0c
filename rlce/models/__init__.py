"""Models package."""

from .segment import LineRange, SegmentCommand
from .extraction import LineRangeOutput, SegmentOutput, SegmentListOutput
from .schemas import (
    EngineStats,
    NumberRequest, NumberResponse,
    ReconstructRequest, ReconstructResponse,
    ExtractRequest, ExtractResponse,
)

__all__ = [
    # Segment model
    "LineRange", "SegmentCommand",
    # LLM structured output
    "LineRangeOutput", "SegmentOutput", "SegmentListOutput",
    # Schemas
    "EngineStats",
    "NumberRequest", "NumberResponse",
    "ReconstructRequest", "ReconstructResponse",
    "ExtractRequest", "ExtractResponse",
]
