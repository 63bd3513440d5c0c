"""Ask an LLM to describe the wanted parts of a document as segment commands.

The LLM only sees the line-numbered document and answers with line ranges;
the text itself is rebuilt locally by ReconstructionEngine.
"""

from openai import OpenAI

from rlce.config import settings
from rlce.errors import ExtractionError, InvalidStateError
from rlce.logging_setup import get_logger
from rlce.models.extraction import SegmentListOutput, SegmentOutput
from rlce.models.segment import LineRange, SegmentCommand
from rlce.services.preprocessor import NumberedDocument
from rlce.services.validator import validate_segments

logger = get_logger(__name__)

MAX_OUTPUT_TOKENS = 16384


SEGMENT_PROMPT = """You are selecting parts of a document for extraction.

The document has been pre-processed with line numbers in the format "N: " at the start of each line.

Your task is to describe the text to extract as SEGMENTS that reference line numbers.

SEGMENT FORMAT:
- first_line = Literal text written before the segment (e.g. a heading you make up), or null
- ranges = Line ranges to copy verbatim from the document, in output order. start_line and end_line are inclusive
- last_line = Literal text written after the segment, or null
- nested_segments = Sub-segments following the same format, written after this segment's ranges

CRITICAL RULES:
1. DO NOT reproduce any text from the document — ONLY return line number references
2. Every segment must have at least one range or one nested segment
3. start_line must be at least 1 and end_line must not be smaller than start_line
4. Never reference a line past the last line of the document
5. Use first_line/last_line only for text that is NOT in the document"""


def _to_segment(output: SegmentOutput) -> SegmentCommand:
    """Convert a structured-output segment (and its children) to the internal model."""
    return SegmentCommand(
        first_line=output.first_line,
        ranges=[LineRange(start_line=r.start_line, end_line=r.end_line) for r in output.ranges],
        last_line=output.last_line,
        nested_segments=[_to_segment(child) for child in output.nested_segments],
    )


def request_segments(
    doc: NumberedDocument,
    instructions: str,
    model: str | None = None,
    client: OpenAI | None = None,
) -> list[SegmentCommand]:
    """
    Use OpenAI structured output to choose segments of a document.

    Args:
        doc: Document with line numbers added
        instructions: What to extract, in plain language
        model: Model to use (defaults to settings.openai_model)
        client: OpenAI client to use (defaults to one built from settings)

    Returns:
        Validated top-level segment commands, in output order

    Raises:
        InvalidStateError: no client given and no API key configured
        ExtractionError: the response could not be parsed
        SegmentValidationError: the returned segments are malformed
    """
    if client is None:
        if not settings.openai_api_key:
            raise InvalidStateError("OPENAI_API_KEY is not configured")
        client = OpenAI(api_key=settings.openai_api_key)
    model = model or settings.openai_model

    logger.info("Requesting segments for %d-line document from %s", doc.total_lines, model)

    response = client.beta.chat.completions.parse(
        model=model,
        messages=[
            {
                "role": "system",
                "content": "You are an expert at analyzing documents. You identify the lines to extract precisely using line numbers."
            },
            {
                "role": "user",
                "content": f"{SEGMENT_PROMPT}\n\nInstructions: {instructions}\n\nDocument ({doc.total_lines} total lines):\n---\n{doc.numbered_text}\n---"
            }
        ],
        response_format=SegmentListOutput,
        temperature=0.1,
        max_completion_tokens=MAX_OUTPUT_TOKENS,
    )

    parsed = response.choices[0].message.parsed
    if parsed is None:
        raise ExtractionError("Failed to parse segment response — got None")

    # Convert to internal models
    segments = [_to_segment(item) for item in parsed.segments]

    validate_segments(segments)
    logger.info("LLM returned %d segments", len(segments))

    return segments
