"""Rebuild text from segment commands using the lines of an original document."""

from pathlib import Path

from rlce.config import settings
from rlce.errors import InvalidArgumentError, InvalidStateError, LineNotFoundError
from rlce.logging_setup import get_logger
from rlce.models.schemas import EngineStats
from rlce.models.segment import LineRange, SegmentCommand
from rlce.services.preprocessor import read_lines, split_lines
from rlce.services.validator import validate_segment, validate_segments

logger = get_logger(__name__)

LINE_TERMINATOR = "\n"


class ReconstructionEngine:
    """
    Holds the lines of one source document and renders segment commands against it.

    The document is loaded once and reused by every reconstruct() call until
    load_document(), load_text() or clear_cache() replaces it. An instance is
    not safe to share between threads without external locking.
    """

    def __init__(self):
        # 1-based line number -> line text; None until a document is loaded
        self._line_index: dict[int, str] | None = None
        self._source: str | None = None

    # --- Document cache ---

    def load_document(self, path: str | Path) -> None:
        """
        Load the original file, replacing any previously loaded document.

        Raises:
            DocumentNotFoundError: if the file does not exist
        """
        lines = read_lines(path, settings.source_encoding)
        self._set_lines(lines, str(path))
        logger.info("Loaded %d lines from %s", len(lines), path)

    def load_text(self, text: str, source_name: str = "<text>") -> None:
        """Load the original document from a string instead of a file."""
        lines = split_lines(text)
        self._set_lines(lines, source_name)
        logger.debug("Loaded %d lines from %s", len(lines), source_name)

    def _set_lines(self, lines: list[str], source: str) -> None:
        self._line_index = {i: line for i, line in enumerate(lines, start=1)}
        self._source = source

    def clear_cache(self) -> None:
        """Discard the loaded document."""
        self._line_index = None
        self._source = None

    @property
    def is_loaded(self) -> bool:
        return self._line_index is not None

    def get_line(self, line_number: int) -> str | None:
        """Return a line of the loaded document, or None if it does not exist."""
        if self._line_index is None:
            return None
        return self._line_index.get(line_number)

    def stats(self) -> EngineStats:
        return EngineStats(
            total_lines=len(self._line_index) if self._line_index is not None else 0,
            is_loaded=self.is_loaded,
        )

    def _ensure_loaded(self, path: str | Path | None) -> None:
        if self._line_index is None:
            if path:
                self.load_document(path)
            else:
                raise InvalidStateError(
                    "Original file must be loaded before reconstruction. "
                    "Call load_document() or provide the path parameter."
                )
        elif path and str(path) != self._source:
            # The cached document stays authoritative until reloaded explicitly
            logger.debug("Ignoring %s: %s is already loaded", path, self._source)

    # --- Reconstruction ---

    def reconstruct(
        self,
        segment: SegmentCommand,
        path: str | Path | None = None,
        *,
        validate: bool = False,
    ) -> str:
        """
        Rebuild the text described by a segment tree.

        Output order for each node: first_line, every range in order, every
        nested segment in order, last_line. Every emitted line ends with a
        newline.

        Args:
            segment: Root of the segment tree
            path: Original file, loaded only if no document is cached yet
            validate: Validate the whole tree before producing any output

        Returns:
            The reconstructed text

        Raises:
            InvalidArgumentError: segment is None or contains an invalid range
            SegmentValidationError: validate=True and the tree is malformed
            InvalidStateError: no document loaded, or a range passes the end of it
        """
        if segment is None:
            raise InvalidArgumentError("Segment cannot be None")

        if validate:
            validate_segment(segment)

        self._ensure_loaded(path)

        return self._render(segment)

    def reconstruct_multiple(
        self,
        segments: list[SegmentCommand],
        path: str | Path | None = None,
        *,
        validate: bool = False,
    ) -> str:
        """
        Rebuild several segment trees, each followed by one blank separator line.

        Raises:
            InvalidArgumentError: if segments is empty
        """
        if not segments:
            raise InvalidArgumentError("Segments list cannot be null or empty")

        if validate:
            validate_segments(segments)

        self._ensure_loaded(path)

        parts = []
        for segment in segments:
            parts.append(self.reconstruct(segment))
            parts.append(LINE_TERMINATOR)

        logger.debug("Reconstructed %d segments", len(segments))
        return "".join(parts)

    def reconstruct_to_file(
        self,
        segment: SegmentCommand,
        source_path: str | Path,
        output_path: str | Path,
    ) -> None:
        """Reconstruct a segment tree and overwrite output_path with the result."""
        text = self.reconstruct(segment, source_path)
        Path(output_path).write_text(text, encoding=settings.source_encoding)
        logger.info("Wrote reconstructed text to %s", output_path)

    def reconstruct_multiple_to_file(
        self,
        segments: list[SegmentCommand],
        source_path: str | Path,
        output_path: str | Path,
    ) -> None:
        """Reconstruct several segment trees and overwrite output_path with the result."""
        text = self.reconstruct_multiple(segments, source_path)
        Path(output_path).write_text(text, encoding=settings.source_encoding)
        logger.info("Wrote %d reconstructed segments to %s", len(segments), output_path)

    def _render(self, segment: SegmentCommand) -> str:
        # Pre-order walk with an explicit stack. A pending last_line is pushed
        # below the node's children so it is emitted after all of them.
        parts: list[str] = []
        stack: list[SegmentCommand | str] = [segment]

        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item + LINE_TERMINATOR)
                continue

            if item.first_line:
                parts.append(item.first_line + LINE_TERMINATOR)

            for line_range in item.ranges:
                self._append_range(parts, line_range)

            if item.last_line:
                stack.append(item.last_line)
            stack.extend(reversed(item.children))

        return "".join(parts)

    def _append_range(self, parts: list[str], line_range: LineRange) -> None:
        if line_range is None or not line_range.is_valid():
            raise InvalidArgumentError(f"Invalid line range: {line_range}")

        for line_number in range(line_range.start_line, line_range.end_line + 1):
            line = self._line_index.get(line_number)
            if line is None:
                raise LineNotFoundError(line_number, len(self._line_index))
            parts.append(line + LINE_TERMINATOR)
