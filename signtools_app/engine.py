"""
Main engine coordinator.

Builds the marker store, lifecycle manager, alert dispatcher and navigation
engine from configuration, and wires them to the host's events:

Tick → backfill (first time only) → provisional marker
Bar opened → confirmation → navigation index / alert
Key down → alert dismissed
"""

from pathlib import Path
from typing import Any, Optional

import structlog

from .adapters.base import ChartAdapter, HostEvent, NotificationAdapter, SignalEvaluator
from .adapters.notifications import normalize_sound_resource
from .alerts.dispatcher import AlertDispatcher
from .config.defaults import SignToolsConfig, get_default_config
from .config.loader import ConfigLoader
from .errors import SystemFailureError
from .markers.models import Marker
from .markers.store import MarkerStore
from .navigation.engine import NavigationEngine
from .signals.ma_cross import MovingAverageCrossEvaluator
from .state.lifecycle import LifecycleManager
from .state.models import AlertPolicy

logger = structlog.get_logger(__name__)


class SignToolsEngine:
    """
    Signal marker engine for one chart.

    All handlers run synchronously on the host's event thread; the engine
    holds no locks and expects no reentrant calls.
    """

    def __init__(
        self,
        chart: ChartAdapter,
        evaluator: Optional[SignalEvaluator] = None,
        notifications: Optional[NotificationAdapter] = None,
        config: Optional[SignToolsConfig] = None,
    ) -> None:
        """Initialize the engine components."""
        self.logger = logger
        self.chart = chart
        self.config = config or get_default_config()

        self.store = MarkerStore()
        self.dispatcher = AlertDispatcher(
            policy=AlertPolicy.from_name(self.config.alert.policy),
            chart=chart,
            notifications=notifications,
            sound_resource=normalize_sound_resource(
                self.config.alert.sound_resource,
                self.config.alert.sound_directory
            ),
            alert_color=self.config.alert.alert_color,
        )
        self.lifecycle = LifecycleManager(
            chart=chart,
            store=self.store,
            dispatcher=self.dispatcher,
            evaluator=evaluator,
            params=self.config.marker,
        )
        self.navigation = NavigationEngine(
            chart=chart,
            store=self.store,
            params=self.config.navigation,
        )
        self._attached = False

        self.logger.info(
            "SignTools engine initialized",
            alert_policy=self.dispatcher.policy.name,
            sound=self.dispatcher.sound_resource,
            show_navigation_buttons=self.config.navigation.show_navigation_buttons
        )

    @classmethod
    def from_symbol(
        cls,
        chart: ChartAdapter,
        symbol: str,
        evaluator: Optional[SignalEvaluator] = None,
        notifications: Optional[NotificationAdapter] = None,
        overrides: Optional[dict[str, Any]] = None,
        config_dir: Optional[Path] = None,
    ) -> "SignToolsEngine":
        """
        Build an engine with defaults, the symbol profile and overrides merged.

        Without an explicit evaluator, the moving-average crossover evaluator
        is built from the merged ``signal`` section.
        """
        loader = ConfigLoader.create(config_dir)
        config = loader.build_config(symbol, overrides)
        if evaluator is None:
            evaluator = MovingAverageCrossEvaluator(chart.bars, config.signal)
        return cls(chart, evaluator=evaluator, notifications=notifications, config=config)

    @property
    def markers(self) -> list[Marker]:
        return self.store.markers()

    @property
    def navigation_index(self) -> tuple:
        return self.store.navigation_index

    def attach(self) -> None:
        """Subscribe to host events and add the navigation buttons."""
        if self._attached:
            return

        if self.config.navigation.show_navigation_buttons:
            self.chart.add_buttons(self.navigation.buttons())

        self.chart.subscribe(HostEvent.TICK, self.handle_tick)
        self.chart.subscribe(HostEvent.BAR_OPENED, self.handle_bar_opened)
        self.chart.subscribe(HostEvent.KEY_DOWN, self.handle_key_down)
        self._attached = True
        self.logger.info("Engine attached to chart")

    def detach(self) -> None:
        """Release host subscriptions."""
        if not self._attached:
            return

        self.chart.unsubscribe(HostEvent.TICK, self.handle_tick)
        self.chart.unsubscribe(HostEvent.BAR_OPENED, self.handle_bar_opened)
        self.chart.unsubscribe(HostEvent.KEY_DOWN, self.handle_key_down)
        self._attached = False
        self.logger.info("Engine detached from chart")

    def start(self) -> int:
        """Backfill history. Must succeed before ticks are processed."""
        try:
            return self.lifecycle.on_init()
        except SystemFailureError as e:
            self.logger.error(
                "Engine failed to start",
                error=str(e),
                error_type=type(e).__name__,
                recoverable=e.recoverable
            )
            raise

    def handle_tick(self) -> Optional[Marker]:
        """Host tick callback."""
        try:
            if not self.lifecycle.initialized:
                self.start()
            return self.lifecycle.on_tick()
        except SystemFailureError:
            raise
        except Exception as e:
            self.logger.error(
                "Unexpected error during tick",
                error=str(e),
                error_type=type(e).__name__,
                bar_count=self.chart.bars.count
            )
            raise

    def handle_bar_opened(self) -> Optional[Marker]:
        """Host bar-opened callback."""
        if not self.lifecycle.initialized:
            # Closed bars are picked up by the backfill on the first tick
            return None
        try:
            return self.lifecycle.on_bar_open()
        except Exception as e:
            self.logger.error(
                "Unexpected error during bar confirmation",
                error=str(e),
                error_type=type(e).__name__,
                bar_count=self.chart.bars.count
            )
            raise

    def handle_key_down(self) -> None:
        """Host key-press callback; dismisses the alert highlight."""
        self.dispatcher.dismiss()
