"""Tests for the alert dispatcher."""

from unittest.mock import Mock

from signtools_app.alerts.dispatcher import AlertDispatcher
from signtools_app.state.models import AlertEvent, AlertPolicy

SOUND = "C:\\Windows\\Media\\Alarm01.wav"


class TestAlertDispatcher:
    """Test AlertDispatcher class."""

    def test_fire_arms_and_plays(self, chart, notifications):
        """Test a fired alert shows the highlight and plays the sound."""
        dispatcher = AlertDispatcher(
            AlertPolicy.confirm_only(), chart=chart,
            notifications=notifications, sound_resource=SOUND, alert_color="yellow"
        )

        fired = dispatcher.notify(AlertEvent.UPDATE)

        assert fired is True
        assert dispatcher.armed is True
        assert chart.alert_visible is True
        assert chart.alert_color == "yellow"
        assert notifications.played == [SOUND]

    def test_suppressed_event(self, chart, notifications):
        """Test events outside the policy do nothing."""
        dispatcher = AlertDispatcher(
            AlertPolicy.confirm_only(), chart=chart,
            notifications=notifications, sound_resource=SOUND
        )

        fired = dispatcher.notify(AlertEvent.FIRST_OCCURRENCE)

        assert fired is False
        assert dispatcher.armed is False
        assert chart.alert_visible is False
        assert notifications.played == []

    def test_silent_without_sound(self, chart, notifications):
        """Test alerts without a sound resource are visual only."""
        dispatcher = AlertDispatcher(
            AlertPolicy.every(), chart=chart, notifications=notifications
        )

        dispatcher.notify(AlertEvent.REDRAW)

        assert dispatcher.armed is True
        assert notifications.played == []

    def test_every_time_fires_on_each_draw(self, notifications):
        """Test every-time policy fires on every provisional draw."""
        dispatcher = AlertDispatcher(
            AlertPolicy.every(), notifications=notifications, sound_resource=SOUND
        )

        for _ in range(3):
            dispatcher.notify(AlertEvent.REDRAW)

        assert notifications.played == [SOUND] * 3

    def test_none_policy_never_fires(self, chart, notifications):
        """Test no event fires under the none policy."""
        dispatcher = AlertDispatcher(
            AlertPolicy.none(), chart=chart,
            notifications=notifications, sound_resource=SOUND
        )

        results = [dispatcher.notify(event) for event in AlertEvent]

        assert results == [False, False, False]
        assert dispatcher.armed is False
        assert notifications.played == []

    def test_repeated_fire_is_harmless(self, chart):
        """Test firing while armed keeps the alert armed."""
        dispatcher = AlertDispatcher(AlertPolicy.confirm_only(), chart=chart)

        dispatcher.fire()
        dispatcher.fire()

        assert dispatcher.armed is True
        assert chart.alert_visible is True

    def test_dismiss(self, chart):
        """Test dismissing clears armed state and the highlight."""
        dispatcher = AlertDispatcher(AlertPolicy.confirm_only(), chart=chart)
        dispatcher.fire()

        dispatcher.dismiss()

        assert dispatcher.armed is False
        assert chart.alert_visible is False

    def test_headless_dispatcher(self):
        """Test the dispatcher works without chart or sound outputs."""
        dispatcher = AlertDispatcher(AlertPolicy.confirm_only(), sound_resource=SOUND)

        assert dispatcher.notify(AlertEvent.UPDATE) is True
        dispatcher.dismiss()
        assert dispatcher.armed is False

    def test_sound_requested_through_adapter(self):
        """Test the sound goes to the notification adapter unchanged."""
        notifications = Mock()
        dispatcher = AlertDispatcher(
            AlertPolicy.confirm_only(), notifications=notifications, sound_resource=SOUND
        )

        dispatcher.notify(AlertEvent.UPDATE)

        notifications.play_sound.assert_called_once_with(SOUND)
