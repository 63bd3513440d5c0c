"""Segment command data model: line ranges plus recursively nested segments."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class LineRange(BaseModel):
    """Inclusive range of source lines (1-indexed).

    Out-of-range values are accepted here so that validation can report them;
    use is_valid() before indexing a document.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start_line: int = Field(
        ...,
        validation_alias=AliasChoices("startLine", "StartLine", "start_line"),
        serialization_alias="startLine",
        description="First line of the range (1-indexed, inclusive)",
    )
    end_line: int = Field(
        ...,
        validation_alias=AliasChoices("endLine", "EndLine", "end_line"),
        serialization_alias="endLine",
        description="Last line of the range (1-indexed, inclusive)",
    )

    def is_valid(self) -> bool:
        return self.start_line > 0 and self.end_line >= self.start_line

    @property
    def line_count(self) -> int:
        """Number of lines covered, 0 for an invalid range."""
        if not self.is_valid():
            return 0
        return self.end_line - self.start_line + 1

    def __str__(self) -> str:
        return f"Lines {self.start_line}-{self.end_line}"


class SegmentCommand(BaseModel):
    """
    One node of an extraction command tree.

    Rendered as: first_line, then every range in order, then every nested
    segment in order, then last_line. first_line/last_line are literal text,
    not looked up in the source document.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    first_line: str | None = Field(
        None,
        validation_alias=AliasChoices("firstLine", "FirstLine", "first_line"),
        serialization_alias="firstLine",
        description="Literal text emitted before the ranges",
    )
    ranges: tuple[LineRange, ...] = Field(
        default=(),
        validation_alias=AliasChoices("ranges", "Ranges"),
        serialization_alias="ranges",
        description="Line ranges to copy from the source document, in output order",
    )
    last_line: str | None = Field(
        None,
        validation_alias=AliasChoices("lastLine", "LastLine", "last_line"),
        serialization_alias="lastLine",
        description="Literal text emitted after the ranges and nested segments",
    )
    nested_segments: tuple["SegmentCommand", ...] = Field(
        default=(),
        validation_alias=AliasChoices("nestedSegments", "NestedSegments", "nested_segments"),
        serialization_alias="nestedSegments",
        description="Child segments, rendered after this segment's ranges",
    )

    @field_validator("ranges", "nested_segments", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return () if value is None else value

    @property
    def children(self) -> tuple["SegmentCommand", ...]:
        return self.nested_segments

    @property
    def is_trivial(self) -> bool:
        """True when the segment has neither ranges nor nested segments."""
        return not self.ranges and not self.nested_segments

    def depth(self) -> int:
        """Depth of the tree rooted here (a leaf has depth 1)."""
        deepest = 0
        stack = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            for child in node.children:
                stack.append((child, level + 1))
        return deepest
