"""Tests for fillpath.core.controller – drag handling and transition rules."""

from __future__ import annotations

import random

import pytest

from fillpath.core.chain import Chain
from fillpath.core.controller import PuzzleState, StrokeController, Transition
from fillpath.core.grid import Grid
from fillpath.core.timers import ManualScheduler
from fillpath.core.win import WinEvaluator


class Board:
    """Grid, chain, win evaluator and controller wired together."""

    def __init__(self, rows: int, cols: int, flags=None) -> None:
        self.grid = Grid(rows, cols, flags if flags is not None else [0] * (rows * cols))
        self.chain = Chain(self.grid)
        self.scheduler = ManualScheduler()
        self.win = WinEvaluator(self.grid, self.scheduler)
        self.controller = StrokeController(self.grid, self.chain, self.win)
        self.completed = 0
        self.win.add_listener(self._on_complete)

    def _on_complete(self) -> None:
        self.completed += 1

    def stroke(self, *cells):
        """Press on the first cell and drag through the rest."""
        self.controller.press(cells[0])
        return [self.controller.drag(c) for c in cells[1:]]

    def snapshot(self):
        cells = tuple((c.blocked, c.filled) for c in (self.grid.cell(p) for p in self.grid.positions()))
        return self.chain.positions(), cells


def _assert_invariants(board: Board) -> None:
    points = board.chain.positions()
    assert len(set(points)) == len(points)
    for a, b in zip(points, points[1:]):
        assert a.is_neighbour(b)
    for pos in board.grid.positions():
        cell = board.grid.cell(pos)
        assert cell.filled == (cell.blocked or pos in board.chain)
        if cell.blocked:
            assert pos not in board.chain


# ===========================================================================
# Scenarios
# ===========================================================================

class TestScenarios:
    def test_fill_two_by_two(self):
        board = Board(2, 2)
        result = board.stroke((0, 0), (0, 1), (1, 1), (1, 0))
        assert result == [Transition.START, Transition.EXTEND_TAIL, Transition.EXTEND_TAIL]
        assert board.chain.positions() == ((0, 0), (0, 1), (1, 1), (1, 0))
        assert board.grid.all_filled()
        assert board.controller.state is PuzzleState.FINISHED
        board.scheduler.advance(2.0)
        assert board.completed == 1

    def test_blocked_target_rejected(self):
        board = Board(1, 3, [0, 1, 0])
        assert board.stroke((0, 0), (0, 1)) == [Transition.NONE]
        assert board.chain.is_empty()
        assert not board.grid.is_filled((0, 0))

    def test_non_adjacent_drag_is_noop(self):
        board = Board(1, 3, [0, 1, 0])
        assert board.stroke((0, 0), (0, 2)) == [Transition.NONE]
        assert board.chain.is_empty()
        assert board.controller.anchor == (0, 0)

    def test_two_cell_grid_wins_on_start(self):
        board = Board(2, 1)
        assert board.stroke((0, 0), (1, 0)) == [Transition.START]
        assert board.chain.positions() == ((0, 0), (1, 0))
        assert board.win.finished

    def test_retract_from_tail(self):
        board = Board(1, 4)
        board.stroke((0, 0), (0, 1), (0, 2))
        assert board.controller.drag((0, 1)) is Transition.RETRACT_TAIL
        assert board.chain.positions() == ((0, 0), (0, 1))
        assert not board.grid.is_filled((0, 2))

    def test_full_row_is_frozen_after_win(self):
        board = Board(1, 3)
        board.stroke((0, 0), (0, 1), (0, 2))
        assert board.win.finished
        before = board.snapshot()
        assert board.controller.drag((0, 1)) is Transition.NONE
        assert board.snapshot() == before


# ===========================================================================
# Rule priority and anchors
# ===========================================================================

class TestRules:
    def test_drag_without_press(self):
        board = Board(1, 2)
        assert board.controller.drag((0, 1)) is Transition.NONE
        assert board.chain.is_empty()

    def test_state_moves_from_idle_to_drawing(self):
        board = Board(1, 3)
        assert board.controller.state is PuzzleState.IDLE
        board.controller.press((0, 0))
        assert board.controller.state is PuzzleState.DRAWING

    def test_extend_at_head_from_new_gesture(self):
        board = Board(1, 4)
        board.stroke((0, 1), (0, 2))
        board.controller.release()
        assert board.stroke((0, 1), (0, 0)) == [Transition.EXTEND_HEAD]
        assert board.chain.positions() == ((0, 0), (0, 1), (0, 2))

    def test_retract_from_head(self):
        board = Board(1, 4)
        board.stroke((0, 1), (0, 2), (0, 3))
        board.controller.release()
        assert board.stroke((0, 1), (0, 2)) == [Transition.RETRACT_HEAD]
        assert board.chain.positions() == ((0, 2), (0, 3))
        assert not board.grid.is_filled((0, 1))

    def test_drag_from_middle_of_chain_is_ignored(self):
        board = Board(2, 3)
        board.stroke((0, 0), (0, 1), (0, 2))
        board.controller.release()
        before = board.snapshot()
        assert board.stroke((0, 1), (1, 1)) == [Transition.NONE]
        assert board.snapshot() == before

    def test_single_cell_chain_prefers_tail(self):
        board = Board(2, 2)
        board.stroke((0, 0), (0, 1), (0, 0))
        assert board.chain.positions() == ((0, 0),)
        assert board.controller.drag((1, 0)) is Transition.EXTEND_TAIL
        assert board.chain.positions() == ((0, 0), (1, 0))

    def test_single_cell_chain_only_grows_from_its_cell(self):
        board = Board(1, 3)
        board.stroke((0, 0), (0, 1), (0, 0))
        assert board.chain.positions() == ((0, 0),)
        board.controller.release()
        assert board.stroke((0, 2), (0, 1)) == [Transition.NONE]
        assert board.chain.positions() == ((0, 0),)
        assert not board.grid.is_filled((0, 1))

    def test_anchor_advances_after_ignored_sample(self):
        board = Board(2, 2)
        board.stroke((0, 0), (0, 1))
        board.controller.release()
        # press on an empty cell, drag onto the chain head: no rule matches
        assert board.stroke((1, 0), (0, 0)) == [Transition.NONE]
        assert board.controller.anchor == (0, 0)
        # the anchor is now the head, so the next step extends it
        assert board.controller.drag((1, 0)) is Transition.EXTEND_HEAD

    def test_out_of_bounds_drag_keeps_anchor(self):
        board = Board(1, 2)
        board.controller.press((0, 0))
        assert board.controller.drag((-1, 0)) is Transition.NONE
        assert board.controller.anchor == (0, 0)
        assert board.controller.drag((0, 1)) is Transition.START

    def test_out_of_bounds_press(self):
        board = Board(1, 2)
        assert board.stroke((0, -1), (0, 0)) == [Transition.NONE]
        assert board.chain.is_empty()

    def test_release_forgets_anchor(self):
        board = Board(1, 3)
        board.stroke((0, 0), (0, 1))
        board.controller.release()
        assert board.controller.anchor is None
        assert board.controller.drag((0, 2)) is Transition.NONE


# ===========================================================================
# Properties
# ===========================================================================

class TestProperties:
    def test_repeated_drag_is_idempotent(self):
        board = Board(2, 3)
        board.stroke((0, 0), (0, 1))
        before = board.snapshot()
        assert board.controller.drag((0, 1)) is Transition.NONE
        assert board.snapshot() == before

    def test_no_changes_after_win(self):
        board = Board(1, 2)
        board.stroke((0, 0), (0, 1))
        assert board.win.finished
        before = board.snapshot()
        board.controller.press((0, 1))
        assert board.controller.drag((0, 0)) is Transition.NONE
        assert board.snapshot() == before
        assert board.controller.anchor == (0, 1)

    def test_win_signal_fires_once(self):
        board = Board(1, 2)
        board.stroke((0, 0), (0, 1))
        board.scheduler.advance(1.9)
        assert board.completed == 0
        board.scheduler.advance(0.2)
        board.scheduler.advance(10.0)
        assert board.completed == 1

    @pytest.mark.parametrize("seed", range(25))
    def test_random_drags_keep_invariants(self, seed: int):
        rng = random.Random(seed)
        rows, cols = rng.randint(1, 4), rng.randint(2, 5)
        flags = [1 if rng.random() < 0.2 else 0 for _ in range(rows * cols)]
        board = Board(rows, cols, flags)
        for _ in range(40):
            row, col = rng.randint(-1, rows), rng.randint(-1, cols)
            board.controller.press((row, col))
            for _ in range(rng.randint(1, 12)):
                dr, dc = rng.choice([(0, 1), (0, -1), (1, 0), (-1, 0), (0, 0), (1, 1)])
                row, col = row + dr, col + dc
                board.controller.drag((row, col))
                _assert_invariants(board)
            board.controller.release()
