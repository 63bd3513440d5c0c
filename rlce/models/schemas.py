"""Pydantic schemas for API request/response and engine introspection."""

from pydantic import BaseModel, Field

from rlce.models.segment import SegmentCommand


class EngineStats(BaseModel):
    """Read-only snapshot of a reconstruction engine's loaded document."""
    total_lines: int = 0
    is_loaded: bool = False


# --- Line Numbering ---

class NumberRequest(BaseModel):
    """Schema for numbering a document."""
    text: str


class NumberResponse(BaseModel):
    """Schema for a line-numbered document."""
    numbered_text: str
    total_lines: int


# --- Reconstruction ---

class ReconstructRequest(BaseModel):
    """Schema for reconstructing a document from a segment command."""
    source_text: str
    command: str = Field(..., description="Segment command JSON: a single object or an array of objects")


class ReconstructResponse(BaseModel):
    """Schema for reconstruction results."""
    text: str
    segment_count: int
    total_lines: int


# --- LLM Extraction ---

class ExtractRequest(BaseModel):
    """Schema for asking the LLM to choose segments and reconstructing them."""
    source_text: str
    instructions: str = Field(..., description="What the LLM should extract from the document")
    model: str | None = None


class ExtractResponse(BaseModel):
    """Schema for LLM extraction results."""
    segments: list[SegmentCommand]
    text: str
    total_lines: int
