"""Pydantic models for LLM structured output (used with response_format)."""

from pydantic import BaseModel, Field


class LineRangeOutput(BaseModel):
    """A line range chosen by the LLM."""
    start_line: int = Field(..., description="First line to copy (1-indexed, inclusive)")
    end_line: int = Field(..., description="Last line to copy (1-indexed, inclusive)")


class SegmentOutput(BaseModel):
    """A segment command returned by the LLM."""
    first_line: str | None = Field(None, description="Literal header line written before the ranges, or null")
    ranges: list[LineRangeOutput] = Field(..., description="Line ranges to copy, in output order. May be empty if nested_segments is not")
    last_line: str | None = Field(None, description="Literal footer line written after the ranges and nested segments, or null")
    nested_segments: list["SegmentOutput"] = Field(..., description="Nested segments following the same pattern, or an empty list")


class SegmentListOutput(BaseModel):
    """Result of segment selection: ordered list of top-level segments."""
    segments: list[SegmentOutput] = Field(..., description="Top-level segments, reconstructed in this order")
