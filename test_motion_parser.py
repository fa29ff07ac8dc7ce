"""Tests for motion_parser and extents modules."""

import pytest

from extents import Extents, compute_grid_extents
from grid_types import Delta, Direction, Position
from motion_parser import (
    Operation,
    ParseOpError,
    expand_single_steps,
    format_ops,
    parse_op,
    parse_ops,
    read_ops,
)

SMALL_SCRIPT = "R 4\nU 4\nL 3\nD 1\nR 4\nD 1\nL 5\nR 2\n"
LARGE_SCRIPT = "R 5\nU 8\nL 8\nD 3\nR 17\nD 10\nL 25\nU 20\n"


# =============================================================================
# Test Parsing
# =============================================================================


class TestParseOp:
    """Tests for single-line parsing."""

    def test_simple(self) -> None:
        """A direction letter and a count make an Operation."""
        assert parse_op("R 4") == Operation(Direction.R, 4)

    def test_surrounding_whitespace_trimmed(self) -> None:
        """Leading and trailing whitespace is ignored."""
        assert parse_op("  U 12 \t") == Operation(Direction.U, 12)

    def test_operation_str_and_delta(self) -> None:
        """Operations print in script form and scale their delta."""
        op = Operation(Direction.L, 5)
        assert str(op) == "L 5"
        assert op.delta == Delta(0, -5)

    @pytest.mark.parametrize(
        "line",
        ["Q 3", "R", "R 4 5", "R x", "R -1", "R 0", "R +3", "R  4", "r 4", "4 R"],
    )
    def test_malformed_lines(self, line: str) -> None:
        """Anything but '<U|R|D|L> <positive int>' is rejected."""
        with pytest.raises(ParseOpError):
            parse_op(line)

    def test_error_identifies_line(self) -> None:
        """The error carries the offending line."""
        with pytest.raises(ParseOpError) as exc_info:
            parse_op("Q 3")
        assert exc_info.value.line == "Q 3"
        assert "'Q 3'" in str(exc_info.value)
        assert "unknown direction 'Q'" in str(exc_info.value)

    def test_error_is_value_error(self) -> None:
        """Parse errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_op("R many")


class TestParseOps:
    """Tests for whole-script parsing."""

    def test_parse_script(self) -> None:
        """Every line becomes one Operation, in order."""
        ops = parse_ops(SMALL_SCRIPT)
        assert len(ops) == 8
        assert ops[0] == Operation(Direction.R, 4)
        assert ops[-1] == Operation(Direction.R, 2)

    def test_blank_lines_ignored(self) -> None:
        """Blank and whitespace-only lines are skipped."""
        assert parse_ops("\nR 1\n   \nD 2\n\n") == [
            Operation(Direction.R, 1),
            Operation(Direction.D, 2),
        ]

    def test_empty_script(self) -> None:
        """An empty script has no operations."""
        assert parse_ops("") == []

    def test_first_failure_aborts(self) -> None:
        """A bad line aborts the parse and reports its line number."""
        with pytest.raises(ParseOpError) as exc_info:
            parse_ops("R 1\nQ 3\nL x\n")
        assert exc_info.value.line == "Q 3"
        assert exc_info.value.line_number == 2
        assert "Line 2" in str(exc_info.value)

    def test_format_reparses_to_same_ops(self) -> None:
        """Re-parsing the text form of parsed ops gives the same ops."""
        ops = parse_ops(LARGE_SCRIPT)
        assert parse_ops(format_ops(ops)) == ops
        assert format_ops(ops) == LARGE_SCRIPT

    def test_read_ops(self, tmp_path) -> None:
        """Scripts are read from UTF-8 files."""
        path = tmp_path / "input.txt"
        path.write_text(SMALL_SCRIPT, encoding="utf-8")
        assert read_ops(path) == parse_ops(SMALL_SCRIPT)

    def test_read_missing_file(self, tmp_path) -> None:
        """I/O errors propagate unchanged."""
        with pytest.raises(FileNotFoundError):
            read_ops(tmp_path / "missing.txt")


class TestExpandSingleSteps:
    """Tests for single-step normalization."""

    def test_expand(self) -> None:
        """Each op becomes step_count ops of one step."""
        ops = [Operation(Direction.R, 3), Operation(Direction.U, 1)]
        assert list(expand_single_steps(ops)) == [
            Operation(Direction.R, 1),
            Operation(Direction.R, 1),
            Operation(Direction.R, 1),
            Operation(Direction.U, 1),
        ]

    def test_expanded_length(self) -> None:
        """The expanded script has one op per cell moved."""
        assert len(list(expand_single_steps(parse_ops(SMALL_SCRIPT)))) == 24


# =============================================================================
# Test Extents
# =============================================================================


class TestExtents:
    """Tests for the extent calculator."""

    def test_no_moves(self) -> None:
        """With no moves the grid is the single start cell."""
        extents = compute_grid_extents([])
        assert extents == Extents((0, 0), (0, 0))
        assert extents.normalized().rows == 1
        assert extents.normalized().cols == 1

    def test_small_script(self) -> None:
        """Bounds cover the head's whole path, relative to the start."""
        extents = compute_grid_extents(expand_single_steps(parse_ops(SMALL_SCRIPT)))
        assert extents.row_range == (-4, 0)
        assert extents.col_range == (0, 5)

        normalized = extents.normalized()
        assert normalized == Extents((0, 4), (0, 5))
        assert (normalized.rows, normalized.cols) == (5, 6)
        assert extents.normalized_pos(Position(0, 0)) == Position(4, 0)

    def test_large_script(self) -> None:
        """Negative bounds on both axes shift the origin on both axes."""
        extents = compute_grid_extents(parse_ops(LARGE_SCRIPT))
        assert extents.row_range == (-15, 5)
        assert extents.col_range == (-11, 14)
        assert (extents.normalized().rows, extents.normalized().cols) == (21, 26)
        assert extents.normalized_pos(Position(0, 0)) == Position(15, 11)

    def test_multi_step_matches_single_step(self) -> None:
        """Straight moves give the same box whether expanded or not."""
        ops = parse_ops(LARGE_SCRIPT)
        assert compute_grid_extents(ops) == compute_grid_extents(expand_single_steps(ops))

    @pytest.mark.parametrize("script", [SMALL_SCRIPT, LARGE_SCRIPT, "L 3\nU 2\nR 9\nD 7\n"])
    def test_every_head_position_fits(self, script: str) -> None:
        """No normalized head position falls outside the computed grid."""
        ops = list(expand_single_steps(parse_ops(script)))
        extents = compute_grid_extents(ops)
        normalized = extents.normalized()

        pos = Position()
        for op in ops:
            pos = pos + op.delta
            grid_pos = extents.normalized_pos(pos)
            assert 0 <= grid_pos.row < normalized.rows
            assert 0 <= grid_pos.col < normalized.cols
