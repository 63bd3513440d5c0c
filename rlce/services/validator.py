"""Validation of segment command trees before reconstruction."""

from rlce.errors import InvalidArgumentError, SegmentValidationError
from rlce.models.segment import SegmentCommand


def validate_segment(segment: SegmentCommand) -> None:
    """
    Check that every node of a segment tree can be reconstructed.

    A node must have at least one range or nested segment, and every range
    must be valid. Nodes are checked in output order and the first problem
    found is raised.

    Args:
        segment: Root of the tree to check

    Raises:
        SegmentValidationError: on the first trivial node or invalid range
        InvalidArgumentError: if segment is None
    """
    if segment is None:
        raise InvalidArgumentError("Segment cannot be None")

    # Explicit stack so deep trees don't hit the recursion limit
    stack = [segment]
    while stack:
        node = stack.pop()
        if node is None:
            raise SegmentValidationError("Nested segment cannot be null")

        if node.is_trivial:
            raise SegmentValidationError(
                "Segment must have at least one range or nested segment"
            )

        for line_range in node.ranges:
            if line_range is None or not line_range.is_valid():
                raise SegmentValidationError(f"Invalid line range: {line_range}")

        stack.extend(reversed(node.children))


def validate_segments(segments: list[SegmentCommand]) -> None:
    """Validate a non-empty list of segment trees, in order."""
    if not segments:
        raise InvalidArgumentError("Segments list cannot be null or empty")

    for segment in segments:
        validate_segment(segment)
