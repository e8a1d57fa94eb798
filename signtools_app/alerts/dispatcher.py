"""Alert policy evaluation and alert output."""

from typing import Optional

from ..adapters.base import ChartAdapter, NotificationAdapter
from ..logging.config import get_alert_logger, log_alert_decision
from ..state.models import AlertEvent, AlertPolicy, AlertState

alert_logger = get_alert_logger(__name__)


class AlertDispatcher:
    """Fires the visual and audio alert according to an AlertPolicy."""

    def __init__(
        self,
        policy: AlertPolicy,
        chart: Optional[ChartAdapter] = None,
        notifications: Optional[NotificationAdapter] = None,
        sound_resource: Optional[str] = None,
        alert_color: Optional[str] = None,
    ):
        self.logger = alert_logger
        self.policy = policy
        self.state = AlertState()
        self._chart = chart
        self._notifications = notifications
        self._sound_resource = sound_resource
        self._alert_color = alert_color

    @property
    def armed(self) -> bool:
        return self.state.armed

    @property
    def sound_resource(self) -> Optional[str]:
        return self._sound_resource

    def notify(self, event: AlertEvent) -> bool:
        """
        Offer a lifecycle event to the policy.

        Args:
            event: FIRST_OCCURRENCE / REDRAW for provisional draws,
                UPDATE for confirmations

        Returns:
            True if the alert fired
        """
        fired = self.policy.should_fire(event)

        log_alert_decision(
            self.logger,
            event=event.value,
            fired=fired,
            policy=self.policy.name,
            reason="policy_match" if fired else "policy_excludes_event",
            context={"sound": self._sound_resource}
        )

        if fired:
            self.fire()
        return fired

    def fire(self) -> None:
        """Raise the highlight and request the sound. Safe to repeat."""
        self.state.armed = True
        if self._chart is not None:
            self._chart.show_alert(self._alert_color)
        if self._sound_resource and self._notifications is not None:
            self._notifications.play_sound(self._sound_resource)

    def dismiss(self) -> None:
        """Clear the highlight (user dismiss or signal withdrawn)."""
        if self.state.armed:
            self.logger.debug("Alert dismissed")
        self.state.armed = False
        if self._chart is not None:
            self._chart.hide_alert()
