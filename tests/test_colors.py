"""Tests for fillpath.ui.colors – cell colors and blending."""

from __future__ import annotations

import pytest

from fillpath.ui.colors import BoardColors, blend_hex, color_for


# ===========================================================================
# BoardColors – constants exist
# ===========================================================================

class TestBoardColors:
    @pytest.mark.parametrize(
        "value",
        [BoardColors.CELL_EMPTY, BoardColors.CELL_FILLED, BoardColors.CELL_BLOCKED, BoardColors.CONNECTOR],
    )
    def test_cell_colors_are_hex(self, value):
        assert value.startswith("#")
        assert len(value) == 7

    def test_states_are_distinct(self):
        assert len({BoardColors.CELL_EMPTY, BoardColors.CELL_FILLED, BoardColors.CELL_BLOCKED}) == 3


# ===========================================================================
# color_for
# ===========================================================================

class TestColorFor:
    def test_empty(self):
        assert color_for(False, False) == BoardColors.CELL_EMPTY

    def test_filled(self):
        assert color_for(False, True) == BoardColors.CELL_FILLED

    def test_blocked(self):
        assert color_for(True, True) == BoardColors.CELL_BLOCKED

    def test_blocked_wins_over_filled_flag(self):
        assert color_for(True, False) == BoardColors.CELL_BLOCKED


# ===========================================================================
# blend_hex
# ===========================================================================

class TestBlendHex:
    def test_t_zero_returns_a(self):
        assert blend_hex("#FF0000", "#0000FF", 0.0) == "#FF0000"

    def test_t_one_returns_b(self):
        assert blend_hex("#FF0000", "#0000FF", 1.0) == "#0000FF"

    def test_midpoint(self):
        result = blend_hex("#000000", "#FFFFFF", 0.5)
        r = int(result[1:3], 16)
        assert 126 <= r <= 128

    def test_clamped(self):
        assert blend_hex("#FF0000", "#0000FF", -1.0) == "#FF0000"
        assert blend_hex("#FF0000", "#0000FF", 2.0) == "#0000FF"

    def test_wrong_length_returns_a(self):
        assert blend_hex("#FFF", "#000000", 0.5) == "#FFF"

    def test_invalid_hex_chars(self):
        assert blend_hex("#GGHHII", "#000000", 0.5) == "#GGHHII"

    def test_fade_color_between_filled_and_empty(self):
        mid = blend_hex(BoardColors.CELL_FILLED, BoardColors.CELL_EMPTY, 0.5)
        assert mid not in (BoardColors.CELL_FILLED, BoardColors.CELL_EMPTY)
