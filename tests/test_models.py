"""Tests for fillpath.ui.models – connector geometry."""

from __future__ import annotations

import pytest

from fillpath.core.grid import Position
from fillpath.ui.models import ConnectorView


class TestConnectorView:
    def test_horizontal(self):
        view = ConnectorView.between(Position(0, 0), Position(0, 1))
        assert view.horizontal is True
        assert view.center_x == pytest.approx(1.0)
        assert view.center_y == pytest.approx(0.5)

    def test_vertical(self):
        view = ConnectorView.between(Position(2, 3), Position(1, 3))
        assert view.horizontal is False
        assert view.center_x == pytest.approx(3.5)
        assert view.center_y == pytest.approx(2.0)

    def test_keeps_endpoints_in_chain_order(self):
        view = ConnectorView.between(Position(1, 1), Position(1, 0))
        assert (view.start, view.end) == ((1, 1), (1, 0))

    def test_frozen(self):
        view = ConnectorView.between(Position(0, 0), Position(1, 0))
        with pytest.raises(AttributeError):
            view.horizontal = True  # type: ignore[misc]
