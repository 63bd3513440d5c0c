"""Line numbering, reconstruction and LLM extraction endpoints."""

import json

from fastapi import APIRouter, HTTPException

from rlce.errors import (
    ExtractionError,
    FormatError,
    InvalidArgumentError,
    InvalidStateError,
    LineNotFoundError,
    RLCEError,
)
from rlce.logging_setup import get_logger
from rlce.models.schemas import (
    NumberRequest,
    NumberResponse,
    ReconstructRequest,
    ReconstructResponse,
    ExtractRequest,
    ExtractResponse,
)
from rlce.services.command_parser import parse_command, sample_response
from rlce.services.preprocessor import add_line_numbers
from rlce.services.reconstructor import ReconstructionEngine
from rlce.services.segment_requester import request_segments

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["reconstruction"])


def _http_error(e: RLCEError) -> HTTPException:
    """Map a domain error to an HTTPException."""
    if isinstance(e, (InvalidArgumentError, FormatError)):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, LineNotFoundError):
        return HTTPException(status_code=422, detail=str(e))
    if isinstance(e, ExtractionError):
        return HTTPException(status_code=502, detail=str(e))
    if isinstance(e, InvalidStateError):
        return HTTPException(status_code=503, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


@router.post("/number", response_model=NumberResponse)
def number_document(data: NumberRequest):
    """Render a document with line numbers, as it would be shown to the LLM."""
    doc = add_line_numbers(data.text)
    return NumberResponse(numbered_text=doc.numbered_text, total_lines=doc.total_lines)


@router.post("/reconstruct", response_model=ReconstructResponse)
def reconstruct_document(data: ReconstructRequest):
    """
    Rebuild text from a segment command.

    The command is the raw JSON reply: a single segment object or an array
    of segments. A single object is reconstructed without a trailing separator.
    """
    engine = ReconstructionEngine()
    engine.load_text(data.source_text)

    try:
        segments, is_list = parse_command(data.command)
        if is_list:
            text = engine.reconstruct_multiple(segments)
        else:
            text = engine.reconstruct(segments[0])
    except RLCEError as e:
        logger.warning("Reconstruction failed: %s", e)
        raise _http_error(e)

    return ReconstructResponse(
        text=text,
        segment_count=len(segments),
        total_lines=engine.stats().total_lines,
    )


@router.post("/extract", response_model=ExtractResponse)
def extract_document(data: ExtractRequest):
    """Ask the LLM which lines to extract, then rebuild them locally."""
    doc = add_line_numbers(data.source_text)
    engine = ReconstructionEngine()
    engine.load_text(data.source_text)

    try:
        segments = request_segments(doc, data.instructions, model=data.model)
        text = engine.reconstruct_multiple(segments)
    except RLCEError as e:
        logger.warning("Extraction failed: %s", e)
        raise _http_error(e)

    return ExtractResponse(segments=segments, text=text, total_lines=doc.total_lines)


@router.get("/sample")
def get_sample_command():
    """Example segment command in interchange format."""
    return json.loads(sample_response())
