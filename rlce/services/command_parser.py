"""Parse segment commands from the JSON an LLM replies with."""

import json
import re

from pydantic import ValidationError

from rlce.errors import FormatError, InvalidArgumentError
from rlce.models.segment import LineRange, SegmentCommand
from rlce.services.validator import validate_segment

# ```json ... ``` wrapper that chat models like to add around JSON
_CODE_FENCE = re.compile(r"^\s*```[a-zA-Z]*\s*\n(?P<body>.*?)\n?\s*```\s*$", re.DOTALL)

# Keys accepted for the child list, in lookup order
_NESTED_KEYS = ("nestedSegments", "NestedSegments", "nested_segments")


def strip_code_fence(text: str) -> str:
    """Remove a Markdown code fence around the response, if there is one."""
    match = _CODE_FENCE.match(text)
    return match.group("body") if match else text


def _decode(json_text: str):
    if json_text is None or not json_text.strip():
        raise InvalidArgumentError("JSON response cannot be null or empty")

    try:
        return json.loads(strip_code_fence(json_text))
    except json.JSONDecodeError as e:
        raise FormatError(f"Failed to parse AI response as JSON: {e}") from e
    except RecursionError as e:
        raise FormatError("Failed to parse AI response as JSON: nesting is too deep to decode") from e


def _nested_items(node: dict) -> list:
    for key in _NESTED_KEYS:
        if key in node:
            value = node[key]
            if value is None:
                return []
            if not isinstance(value, list):
                raise FormatError(f"'{key}' must be an array, got {type(value).__name__}")
            return value
    return []


def _segment_from_data(data) -> SegmentCommand:
    # Nodes are built leaves first and handed to their parent as finished
    # models, so pydantic never recurses and tree depth is not limited.
    nodes = []
    stack = [data]
    while stack:
        node = stack.pop()
        if not isinstance(node, dict):
            raise FormatError(f"Expected a JSON object for a segment, got {type(node).__name__}")
        nodes.append(node)
        stack.extend(_nested_items(node))

    built: dict[int, SegmentCommand] = {}
    for node in reversed(nodes):
        fields = {key: value for key, value in node.items() if key not in _NESTED_KEYS}
        fields["nestedSegments"] = [built[id(child)] for child in _nested_items(node)]
        try:
            built[id(node)] = SegmentCommand.model_validate(fields)
        except ValidationError as e:
            raise FormatError(f"Response does not match the segment format: {e}") from e

    segment = built[id(data)]
    validate_segment(segment)
    return segment


def parse_segment(json_text: str) -> SegmentCommand:
    """
    Parse a single segment command (a JSON object).

    Raises:
        InvalidArgumentError: blank input
        FormatError: not JSON, or not shaped like a segment
        SegmentValidationError: the segment tree is malformed
    """
    return _segment_from_data(_decode(json_text))


def parse_segments(json_text: str) -> list[SegmentCommand]:
    """Parse an ordered list of segment commands (a JSON array)."""
    data = _decode(json_text)
    if not isinstance(data, list):
        raise FormatError(f"Expected a JSON array of segments, got {type(data).__name__}")

    return [_segment_from_data(item) for item in data]


def parse_command(json_text: str) -> tuple[list[SegmentCommand], bool]:
    """
    Parse either a single segment object or an array of segments.

    Returns:
        (segments, is_list): a single object comes back as a one-element
        list with is_list False
    """
    data = _decode(json_text)

    if isinstance(data, list):
        return [_segment_from_data(item) for item in data], True
    if isinstance(data, dict):
        return [_segment_from_data(data)], False

    raise FormatError("JSON response must be either an object or an array")


def parse_flexible(json_text: str) -> list[SegmentCommand]:
    """Parse a single segment or an array of segments, always returning a list."""
    segments, _ = parse_command(json_text)
    return segments


def _segment_to_data(segment: SegmentCommand) -> dict:
    # Built leaves first for the same reason as _segment_from_data
    nodes = []
    stack = [segment]
    while stack:
        node = stack.pop()
        nodes.append(node)
        stack.extend(node.children)

    built: dict[int, dict] = {}
    for node in reversed(nodes):
        built[id(node)] = {
            "firstLine": node.first_line,
            "ranges": [r.model_dump(by_alias=True) for r in node.ranges],
            "lastLine": node.last_line,
            "nestedSegments": [built[id(child)] for child in node.children],
        }
    return built[id(segment)]


def dump_segments(segments: SegmentCommand | list[SegmentCommand]) -> str:
    """
    Serialize one segment or a list of segments to interchange JSON.

    Raises:
        FormatError: the tree is nested too deeply for the json encoder
    """
    if isinstance(segments, SegmentCommand):
        data = _segment_to_data(segments)
    else:
        data = [_segment_to_data(segment) for segment in segments]

    try:
        return json.dumps(data, indent=2)
    except RecursionError as e:
        raise FormatError("Segment tree is nested too deeply to serialize as JSON") from e


def sample_command() -> SegmentCommand:
    """Example command showing every feature of the format."""
    return SegmentCommand(
        first_line="Start of document",
        ranges=[
            LineRange(start_line=1, end_line=5),
            LineRange(start_line=10, end_line=15),
        ],
        last_line="End of document",
        nested_segments=[
            SegmentCommand(
                first_line="Nested section start",
                ranges=[LineRange(start_line=20, end_line=25)],
                last_line="Nested section end",
            )
        ],
    )


def sample_response() -> str:
    """The example command as the JSON an LLM is expected to return."""
    return dump_segments(sample_command())
