"""
Unit tests for selection module.

Tests the marquee state machine: lift, drag, commit, revert and discard.
"""

from PB_Libs.GridLib.grid_models import Bounds, BoundsMode
from PB_Libs.GridLib.selection import SelectionEngine, SelectionPhase


def _marquee(engine, grid, start, end):
    engine.press(grid, *start)
    engine.move(*end)
    return engine.release(grid)


class TestMarquee:
    """Tests for selecting and lifting cells."""

    def test_lift_cells(self):
        """Releasing a marquee should lift the colored cells inside it."""
        grid = {(1, 1): "a", (2, 1): "b", (5, 5): "c"}
        engine = SelectionEngine()

        lifted = _marquee(engine, grid, (1, 1), (2, 2))

        assert lifted == 2
        assert engine.phase is SelectionPhase.ACTIVE
        assert grid == {(5, 5): "c"}
        assert engine.state.floating_pixels == {(0, 0): "a", (1, 0): "b"}

    def test_rectangle_from_any_corner(self):
        """Dragging up-left should select the same rectangle."""
        grid = {(1, 1): "a", (2, 1): "b"}
        engine = SelectionEngine()

        _marquee(engine, grid, (2, 2), (1, 1))

        assert engine.state.rect_min == (1, 1)
        assert engine.state.rect_max == (2, 2)
        assert grid == {}

    def test_empty_capture_discards(self):
        """A marquee over empty cells should return to idle."""
        grid = {(5, 5): "c"}
        engine = SelectionEngine()

        assert _marquee(engine, grid, (0, 0), (2, 2)) == 0
        assert engine.phase is SelectionPhase.IDLE
        assert not engine.is_active
        assert grid == {(5, 5): "c"}


class TestDragAndCommit:
    """Tests for moving and stamping floating cells."""

    def test_drag_then_commit(self):
        """Committed cells should land at rect_min + relative + offset."""
        grid = {(1, 1): "a", (2, 1): "b", (5, 5): "c"}
        engine = SelectionEngine()
        _marquee(engine, grid, (1, 1), (2, 2))

        assert not engine.press(grid, 1, 1)
        assert engine.phase is SelectionPhase.DRAGGING
        engine.move(3, 2)
        engine.move(4, 3)
        engine.release(grid)

        assert engine.state.offset == (3, 2)
        assert dict(engine.floating_cells()) == {(4, 3): "a", (5, 3): "b"}
        assert engine.commit(grid)
        assert grid == {(4, 3): "a", (5, 3): "b", (5, 5): "c"}
        assert engine.phase is SelectionPhase.IDLE

    def test_commit_overwrites(self):
        """Floating cells should overwrite whatever is under them."""
        grid = {(0, 0): "a", (3, 0): "z"}
        engine = SelectionEngine()
        _marquee(engine, grid, (0, 0), (0, 0))
        engine.press(grid, 0, 0)
        engine.move(3, 0)
        engine.release(grid)

        engine.commit(grid)

        assert grid == {(3, 0): "a"}

    def test_press_outside_commits_and_starts_new(self):
        """Pressing outside an active selection should commit it first."""
        grid = {(0, 0): "a"}
        engine = SelectionEngine()
        _marquee(engine, grid, (0, 0), (0, 0))

        committed = engine.press(grid, 8, 8)

        assert committed
        assert grid == {(0, 0): "a"}
        assert engine.phase is SelectionPhase.SELECTING
        assert engine.state.rect_start == (8, 8)

    def test_contains_follows_offset(self):
        """Hit testing should use the dragged rectangle."""
        grid = {(0, 0): "a", (1, 1): "b"}
        engine = SelectionEngine()
        _marquee(engine, grid, (0, 0), (1, 1))
        engine.press(grid, 0, 0)
        engine.move(5, 0)
        engine.release(grid)

        assert engine.contains(5, 0)
        assert engine.contains(6, 1)
        assert not engine.contains(0, 0)

    def test_fixed_bounds_drop_outside_cells(self):
        """Cells dragged off a fixed canvas should be dropped on commit."""
        grid = {(1, 1): "a", (2, 1): "b"}
        engine = SelectionEngine()
        _marquee(engine, grid, (1, 1), (2, 1))
        engine.press(grid, 1, 1)
        engine.move(9, 1)
        engine.release(grid)

        engine.commit(grid, Bounds.of_size(10, 10))

        assert grid == {(9, 1): "a"}

    def test_free_bounds_keep_outside_cells(self):
        """Free-mode commits should keep every cell."""
        grid = {(1, 1): "a", (2, 1): "b"}
        engine = SelectionEngine()
        _marquee(engine, grid, (1, 1), (2, 1))
        engine.press(grid, 1, 1)
        engine.move(9, 1)
        engine.release(grid)

        engine.commit(grid, Bounds.of_size(10, 10, BoundsMode.FREE))

        assert grid == {(9, 1): "a", (10, 1): "b"}


class TestRevertAndClear:
    """Tests for revert and commit without a selection."""

    def test_revert_ignores_drag(self):
        """Revert should restore cells at their original place."""
        grid = {(1, 1): "a"}
        engine = SelectionEngine()
        _marquee(engine, grid, (1, 1), (1, 1))
        engine.press(grid, 1, 1)
        engine.move(4, 4)
        engine.release(grid)

        assert engine.revert(grid)
        assert grid == {(1, 1): "a"}
        assert engine.phase is SelectionPhase.IDLE

    def test_commit_without_selection(self):
        """Commit with nothing floating should report False."""
        grid = {}
        engine = SelectionEngine()

        assert not engine.commit(grid)
        assert list(engine.floating_cells()) == []
