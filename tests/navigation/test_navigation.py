"""Tests for navigation across confirmed markers."""

import pytest

from signtools_app.config.defaults import NavigationParams
from signtools_app.markers.models import Marker, Signal
from signtools_app.markers.store import MarkerStore
from signtools_app.navigation.engine import NavigationEngine
from signtools_app.utils.time import marker_id_for


@pytest.fixture
def make_navigation(times):
    """Factory for a NavigationEngine with markers confirmed at the given bars."""
    def _make(chart, confirmed_bars, params=None):
        store = MarkerStore()
        for index in confirmed_bars:
            store.put_provisional(Marker(
                bar_index=index,
                open_time=times(index),
                kind=Signal.BUY,
                marker_id=marker_id_for(times(index)),
                price=100.0,
            ))
            store.confirm(index, 95.0)
        return NavigationEngine(chart, store, params or NavigationParams())
    return _make


class TestSearch:
    """Test the binary search primitive."""

    def test_exact_match(self, chart, make_navigation, times):
        """Test an existing time returns its own position."""
        navigation = make_navigation(chart, [2, 5, 8])

        assert navigation.search(times(2)) == 0
        assert navigation.search(times(5)) == 1
        assert navigation.search(times(8)) == 2

    def test_insertion_point(self, chart, make_navigation, times):
        """Test missing times return the insertion point."""
        navigation = make_navigation(chart, [2, 5, 8])

        assert navigation.search(times(0)) == 0
        assert navigation.search(times(3)) == 1
        assert navigation.search(times(9)) == 3


class TestJumps:
    """Test previous/next jumps with explicit reference times."""

    def test_next_from_exact_match(self, chart, make_navigation, times):
        """Test next from a marker time goes to the following marker."""
        navigation = make_navigation(chart, [2, 5, 8])

        assert navigation.jump_to_next(times(5)) == times(8)

    def test_next_between_markers(self, chart, make_navigation, times):
        """Test next from between markers goes to the later one."""
        navigation = make_navigation(chart, [2, 5, 8])

        assert navigation.jump_to_next(times(3)) == times(5)

    def test_next_at_last_is_noop(self, chart, make_navigation, times):
        """Test next from the newest marker does not scroll."""
        navigation = make_navigation(chart, [2, 5, 8])

        assert navigation.jump_to_next(times(8)) is None
        assert navigation.jump_to_next(times(9)) is None
        assert chart.scroll_history == []

    def test_previous_between_markers(self, chart, make_navigation, times):
        """Test previous from between markers goes to the earlier one."""
        navigation = make_navigation(chart, [2, 5, 8])

        assert navigation.jump_to_previous(times(6)) == times(5)

    def test_previous_from_exact_match(self, chart, make_navigation, times):
        """Test previous from a marker time goes to the marker before it."""
        navigation = make_navigation(chart, [2, 5, 8])

        assert navigation.jump_to_previous(times(5)) == times(2)

    def test_previous_at_first_is_noop(self, chart, make_navigation, times):
        """Test previous at or before the oldest marker does not scroll."""
        navigation = make_navigation(chart, [2, 5, 8])

        assert navigation.jump_to_previous(times(2)) is None
        assert navigation.jump_to_previous(times(0)) is None
        assert chart.scroll_history == []

    def test_empty_index(self, chart, make_navigation, times):
        """Test jumps without confirmed markers are no-ops."""
        navigation = make_navigation(chart, [])

        assert navigation.jump_to_previous(times(5)) is None
        assert navigation.jump_to_next(times(5)) is None
        assert navigation.jump_to_previous() is None
        assert navigation.jump_to_next() is None


class TestScrolling:
    """Test viewport moves."""

    def test_scroll_to_time(self, chart, make_navigation, times):
        """Test the target lands near the right edge and the range is refit."""
        navigation = make_navigation(chart, [2, 5, 8])

        position = navigation.scroll_to_time(times(8))

        # left = 8 - 5 visible, shifted by one bar of jump margin
        assert position == 4
        assert chart.first_visible_index == 4
        low, high = chart.visible_price_range
        assert low == pytest.approx(101.0 - 0.4)
        assert high == pytest.approx(109.0 + 0.4)

    def test_scroll_clamps_at_start(self, chart, make_navigation):
        """Test targets near the start clamp to the first bar."""
        navigation = make_navigation(chart, [])

        assert navigation.scroll_to_index(2) == 1

    def test_jump_to_oldest(self, chart, make_navigation):
        """Test oldest scrolls to the beginning of the series."""
        navigation = make_navigation(chart, [5])

        assert navigation.jump_to_oldest() == 1
        low, high = chart.visible_price_range
        assert low == pytest.approx(98.0 - 0.4)
        assert high == pytest.approx(106.0 + 0.4)

    def test_jump_to_newest(self, chart, make_navigation):
        """Test newest scrolls past the last bar, clamped to the series."""
        navigation = make_navigation(chart, [5])

        position = navigation.jump_to_newest()

        assert position == chart.bars.count - 1 + 1
        low, high = chart.visible_price_range
        assert low == pytest.approx(108.0 - 0.2)
        assert high == pytest.approx(112.0 + 0.2)

    def test_newest_with_wide_window(self, make_chart, make_navigation):
        """Test a window wider than the overscroll keeps room for new bars."""
        chart = make_chart(count=60, visible_bar_count=50)
        navigation = make_navigation(chart, [])

        assert navigation.jump_to_newest() == 60 + 20 - 50 + 1

    def test_jump_margin(self, chart, make_navigation, times):
        """Test the jump margin offsets the scroll position."""
        navigation = make_navigation(chart, [8], NavigationParams(jump_margin=3))

        assert navigation.scroll_to_time(times(8)) == 6

    def test_empty_series(self, make_chart, make_navigation):
        """Test scrolling an empty chart does nothing."""
        chart = make_chart(count=0)
        navigation = make_navigation(chart, [])

        assert navigation.jump_to_oldest() == 0
        assert chart.scroll_history == []


class TestButtonWalk:
    """Test stepping through markers with the default edge reference."""

    def test_walk_back_and_forward(self, make_chart, make_navigation, times):
        """Test repeated presses visit each marker once in order."""
        chart = make_chart(count=30, visible_bar_count=5)
        navigation = make_navigation(chart, [10, 15, 20])
        chart.add_buttons(navigation.buttons())

        assert chart.press("◀") == times(20)
        assert chart.last_visible_index == 20
        assert chart.press("◀") == times(15)
        assert chart.press("◀") == times(10)
        assert chart.press("◀") is None
        assert chart.last_visible_index == 10

        assert chart.press("▶") == times(15)
        assert chart.press("▶") == times(20)
        assert chart.press("▶") is None

    def test_button_labels(self, chart, make_navigation):
        """Test the four buttons in panel order."""
        navigation = make_navigation(chart, [])

        labels = [button.label.strip() for button in navigation.buttons()]

        assert labels == ["◀◀", "◀", "▶", "▶▶"]
