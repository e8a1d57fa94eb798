"""
Lifecycle and alert state models.

Alert policies are a tagged set of flags. ``EVERY_TIME`` is a separate
mode rather than a flag combination because it overrides the others for
provisional draws.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class AlertFlag(str, Enum):
    """Combinable alert triggers."""
    FIRST_TIME = "first_time"    # First provisional draw of a signal run
    UPDATE = "update"            # Confirmation when the bar closes


class AlertEvent(str, Enum):
    """Lifecycle events offered to the alert dispatcher."""
    FIRST_OCCURRENCE = "first_occurrence"
    REDRAW = "redraw"
    UPDATE = "update"


@dataclass(frozen=True)
class AlertPolicy:
    """When alerts fire."""

    flags: frozenset = field(default_factory=frozenset)
    every_time: bool = False

    @classmethod
    def none(cls) -> "AlertPolicy":
        return cls()

    @classmethod
    def confirm_only(cls) -> "AlertPolicy":
        return cls(flags=frozenset({AlertFlag.UPDATE}))

    @classmethod
    def every(cls) -> "AlertPolicy":
        return cls(every_time=True)

    @classmethod
    def from_name(cls, name: str) -> "AlertPolicy":
        """Build a policy from its configuration name."""
        presets = {
            "none": cls.none(),
            "first_time": cls(flags=frozenset({AlertFlag.FIRST_TIME})),
            "update": cls.confirm_only(),
            "first_and_update": cls(flags=frozenset({AlertFlag.FIRST_TIME, AlertFlag.UPDATE})),
            "every_time": cls.every(),
        }
        try:
            return presets[name]
        except KeyError:
            raise ValueError(f"Unknown alert policy: {name}") from None

    @property
    def name(self) -> str:
        if self.every_time:
            return "every_time"
        if not self.flags:
            return "none"
        if self.flags == {AlertFlag.FIRST_TIME, AlertFlag.UPDATE}:
            return "first_and_update"
        return next(iter(self.flags)).value

    def includes(self, flag: AlertFlag) -> bool:
        return flag in self.flags

    def should_fire(self, event: AlertEvent) -> bool:
        if event == AlertEvent.UPDATE:
            return self.includes(AlertFlag.UPDATE)
        if self.every_time:
            return True
        if event == AlertEvent.FIRST_OCCURRENCE:
            return self.includes(AlertFlag.FIRST_TIME)
        return False


@dataclass
class AlertState:
    """Whether the visual alert highlight is currently shown."""
    armed: bool = False


@dataclass
class ProvisionalRun:
    """A run of consecutive non-empty evaluations on one open bar."""
    bar_index: int
    alerted: bool = False


@dataclass
class LifecycleState:
    """Mutable lifecycle bookkeeping owned by the LifecycleManager."""
    initialized: bool = False
    run: Optional[ProvisionalRun] = None

    def start_run(self, bar_index: int) -> ProvisionalRun:
        """Current run for ``bar_index``, starting a new one if needed."""
        if self.run is None or self.run.bar_index != bar_index:
            self.run = ProvisionalRun(bar_index=bar_index)
        return self.run

    def end_run(self) -> None:
        self.run = None
