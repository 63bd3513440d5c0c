# conftest.py
import pytest

from rlce.models.segment import LineRange, SegmentCommand
from rlce.services.reconstructor import ReconstructionEngine


def make_range(start: int, end: int) -> LineRange:
    return LineRange(start_line=start, end_line=end)


@pytest.fixture
def ten_line_file(tmp_path):
    """Document whose lines read "Line 1" .. "Line 10"."""
    path = tmp_path / "sample_input.txt"
    path.write_text("\n".join(f"Line {i}" for i in range(1, 11)) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def nested_file(tmp_path):
    path = tmp_path / "nested_sample.txt"
    path.write_text(
        "Header line 1\n"
        "Header line 2\n"
        "Header line 3\n"
        "Separator\n"
        "Nested content line 1\n"
        "Nested content line 2\n"
        "Nested content line 3\n"
        "Separator\n"
        "Footer line 1\n"
        "Footer line 2",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def engine(ten_line_file):
    """Engine with the ten-line document already loaded."""
    eng = ReconstructionEngine()
    eng.load_document(ten_line_file)
    return eng


@pytest.fixture
def two_range_command():
    return SegmentCommand(ranges=[make_range(2, 4), make_range(7, 9)])
