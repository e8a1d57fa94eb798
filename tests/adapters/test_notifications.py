"""Tests for sound normalization and the in-memory host adapters."""

import pytest

from signtools_app.adapters.base import HostEvent, NavigationButton
from signtools_app.adapters.memory import InMemoryChart, RecordingNotifications
from signtools_app.adapters.notifications import (
    LoggingNotificationAdapter,
    normalize_sound_resource,
)
from signtools_app.data.models import BarSeries


class TestNormalizeSoundResource:
    """Test sound resource normalization rules."""

    @pytest.mark.parametrize("resource", ["", None])
    def test_empty_disables_sound(self, resource):
        assert normalize_sound_resource(resource) is None

    def test_bare_name(self):
        """Test a bare name resolves against the system sound directory with .wav."""
        assert normalize_sound_resource("Alarm01") == "C:\\Windows\\Media\\Alarm01.wav"

    def test_bare_name_with_extension(self):
        assert normalize_sound_resource("chime.mp3") == "C:\\Windows\\Media\\chime.mp3"

    def test_full_path_kept(self):
        """Test a path is only given an extension when it lacks one."""
        assert normalize_sound_resource("D:\\sounds\\ding") == "D:\\sounds\\ding.wav"
        assert normalize_sound_resource("/usr/share/sounds/bell.ogg") == "/usr/share/sounds/bell.ogg"

    def test_custom_directory(self):
        """Test a POSIX sound directory uses forward slashes."""
        assert normalize_sound_resource("bell", "/usr/share/sounds/") == "/usr/share/sounds/bell.wav"

    def test_extension_checked_on_file_name_only(self):
        """Test dots in directory names do not count as an extension."""
        assert normalize_sound_resource("/opt/app.d/bell") == "/opt/app.d/bell.wav"


class TestNotificationAdapters:
    """Test sound adapters."""

    def test_recording_adapter(self):
        adapter = RecordingNotifications()

        adapter.play_sound("a.wav")
        adapter.play_sound("b.wav")

        assert adapter.played == ["a.wav", "b.wav"]
        assert adapter.played_count == 2

    def test_logging_adapter_counts(self):
        adapter = LoggingNotificationAdapter()

        adapter.play_sound("a.wav")

        assert adapter.name == "log"
        assert adapter.played_count == 1


class TestInMemoryChart:
    """Test the in-memory chart adapter."""

    def test_initial_viewport(self, chart):
        """Test the chart starts scrolled to the newest bars."""
        assert chart.first_visible_index == 6
        assert chart.last_visible_index == 10
        assert chart.visible_price_range == (90.0, 130.0)

    def test_derived_price_range(self, make_series):
        """Test the price range follows the visible bars when not given."""
        chart = InMemoryChart(make_series(10), visible_bar_count=3)

        assert chart.visible_price_range == (105.0, 111.0)

    def test_empty_series(self):
        chart = InMemoryChart(BarSeries(), visible_bar_count=3)

        assert chart.visible_price_range == (0.0, 0.0)
        assert chart.first_visible_index == 0

    def test_draw_and_remove(self, chart, times):
        """Test drawing under an existing id replaces the object."""
        chart.draw_marker("m", "up_arrow", times(1), 100.0, "green")
        chart.draw_marker("m", "down_arrow", times(1), 101.0, "red")

        assert len(chart.objects) == 1
        assert chart.find_marker("m").icon == "down_arrow"

        chart.remove_marker("m")
        chart.remove_marker("m")
        assert chart.find_marker("m") is None

    def test_alert_highlight(self, chart):
        chart.show_alert("yellow")
        assert chart.alert_visible is True
        assert chart.alert_color == "yellow"

        chart.hide_alert()
        assert chart.alert_visible is False

    def test_buttons(self, chart):
        """Test buttons are matched on their trimmed label."""
        chart.add_buttons([NavigationButton(label=" ◀ ", action=lambda: "prev")])

        assert chart.press("◀") == "prev"
        with pytest.raises(KeyError):
            chart.press("▶")

    def test_events(self, chart):
        """Test open_bar raises bar-opened before the first tick of the new bar."""
        seen = []
        on_tick = lambda: seen.append(("tick", chart.bars.count))
        chart.subscribe(HostEvent.TICK, on_tick)
        chart.subscribe(HostEvent.BAR_OPENED, lambda: seen.append(("bar", chart.bars.count)))

        chart.tick(111.5)
        chart.open_bar(chart.bars.last_bar.open_time.replace(hour=23), 112.0)

        assert seen == [("tick", 11), ("bar", 12), ("tick", 12)]
        assert chart.bars.close_at(10) == 111.5

        chart.unsubscribe(HostEvent.TICK, on_tick)
        assert chart.subscriber_count(HostEvent.TICK) == 0
