"""
Marker lifecycle management.

Drives markers through none -> provisional -> confirmed:

- backfill draws and confirms every historical signal once, excluding the
  still-open last bar
- each tick re-evaluates the open bar and redraws or erases its
  provisional marker
- each bar open confirms the marker of the bar that just closed, moves it
  clear of the bar's range and indexes it for navigation
"""

from typing import Optional

from ..adapters.base import ChartAdapter, SignalEvaluator
from ..alerts.dispatcher import AlertDispatcher
from ..config.defaults import MarkerParams
from ..errors import SignalSourceMissingError
from ..logging.config import get_lifecycle_logger, log_marker_transition
from ..markers.models import Marker, MarkerStatus, Signal
from ..markers.store import MarkerStore
from ..utils.time import marker_id_for
from .models import AlertEvent, LifecycleState

lifecycle_logger = get_lifecycle_logger(__name__)

TRAINER_LINK_ID = "entry_sign_for_ctraner"


class LifecycleManager:
    """Central state machine for signal markers."""

    def __init__(
        self,
        chart: ChartAdapter,
        store: MarkerStore,
        dispatcher: AlertDispatcher,
        evaluator: Optional[SignalEvaluator] = None,
        params: Optional[MarkerParams] = None,
    ):
        self.logger = lifecycle_logger
        self.chart = chart
        self.store = store
        self.dispatcher = dispatcher
        self.evaluator = evaluator
        self.params = params or MarkerParams()
        self.state = LifecycleState()

    @property
    def initialized(self) -> bool:
        return self.state.initialized

    def on_init(self) -> int:
        """
        Backfill markers for every closed bar.

        Runs once; later calls are no-ops. The open last bar is left to the
        tick path.

        Returns:
            Number of markers confirmed by this call

        Raises:
            SignalSourceMissingError: no evaluator is set

        Evaluator exceptions propagate before any marker is drawn.
        """
        if self.state.initialized:
            return 0

        evaluator = self._require_evaluator("backfill")
        count = self.chart.bars.count

        # Every closed bar is evaluated before anything is drawn, so an
        # evaluator failure leaves the store and chart untouched
        signals = [(index, evaluator(index)) for index in range(count - 1)]

        confirmed = 0
        for index, signal in signals:
            if signal is None:
                continue
            self._draw(index, signal, trigger="backfill")
            # History is confirmed silently; only live bar closes raise UPDATE
            if self.confirm(index, alert=False) is not None:
                confirmed += 1

        self.state.initialized = True
        self.logger.info(
            "Backfill complete",
            bars_evaluated=max(count - 1, 0),
            markers_confirmed=confirmed
        )
        return confirmed

    def on_tick(self) -> Optional[Marker]:
        """
        Re-evaluate the open bar and update its provisional marker.

        Returns:
            The provisional marker after the tick, or None if erased
        """
        evaluator = self._require_evaluator("tick")
        index = self.chart.bars.count - 1
        if index < 0:
            return None

        existing = self.store.get(index)
        if existing is not None and existing.confirmed:
            return existing

        signal = evaluator(index)
        if signal is None:
            self._erase(index)
            return None

        marker = self._draw(index, signal, trigger="tick")

        run = self.state.start_run(index)
        event = AlertEvent.REDRAW if run.alerted else AlertEvent.FIRST_OCCURRENCE
        self.dispatcher.notify(event)
        run.alerted = True

        return marker

    def on_bar_open(self) -> Optional[Marker]:
        """Confirm the marker of the bar that just closed, if there is one."""
        index = self.chart.bars.count - 2
        self.state.end_run()
        if index < 0:
            return None
        return self.confirm(index)

    def confirm(self, index: int, alert: bool = True) -> Optional[Marker]:
        """
        Confirm the marker at ``index``.

        A bar without a marker is skipped silently. An already confirmed
        marker is returned unchanged, so repeated calls never duplicate a
        navigation entry.

        Args:
            index: Closed bar index
            alert: Offer the confirmation to the alert dispatcher

        Returns:
            The confirmed marker, or None if the bar has no marker
        """
        marker = self.store.get(index)
        if marker is None:
            self.logger.debug("No marker to confirm", bar_index=index)
            return None
        if marker.confirmed:
            self.logger.debug("Marker already confirmed", bar_index=index)
            return marker

        bars = self.chart.bars
        margin = self.draw_margin()
        if marker.kind == Signal.BUY:
            price = bars.low_at(index) - margin
        else:
            price = bars.high_at(index) + margin

        confirmed = self.store.confirm(index, price)
        icon, color = self._style(confirmed.kind)
        self.chart.draw_marker(confirmed.marker_id, icon, confirmed.open_time, price, color)

        log_marker_transition(
            self.logger,
            bar_index=index,
            marker_id=confirmed.marker_id,
            from_state=MarkerStatus.PROVISIONAL.value,
            to_state=MarkerStatus.CONFIRMED.value,
            trigger="bar_open" if alert else "backfill",
            context={"kind": confirmed.kind.value, "price": price, "margin": margin}
        )

        if alert:
            self.dispatcher.notify(AlertEvent.UPDATE)

        return confirmed

    def draw_margin(self) -> float:
        """Vertical gap between a confirmed marker and its bar."""
        if self.params.draw_margin is not None:
            return self.params.draw_margin
        low, high = self.chart.visible_price_range
        return (high - low) * self.params.draw_margin_fraction

    def _draw(self, index: int, signal: Signal, trigger: str) -> Marker:
        bars = self.chart.bars
        open_time = bars.open_time_at(index)
        price = bars.close_at(index)

        previous = self.store.get(index)
        if previous is None:
            marker = Marker(
                bar_index=index,
                open_time=open_time,
                kind=signal,
                marker_id=marker_id_for(open_time),
                price=price,
            )
        else:
            marker = previous.with_kind(signal, price)
        self.store.put_provisional(marker)

        icon, color = self._style(signal)
        self.chart.draw_marker(marker.marker_id, icon, open_time, price, color)
        if self.params.trainer_link:
            self.chart.draw_marker(TRAINER_LINK_ID, icon, open_time, 0.0, "transparent")

        if previous is None or previous.kind != signal:
            log_marker_transition(
                self.logger,
                bar_index=index,
                marker_id=marker.marker_id,
                from_state=MarkerStatus.PROVISIONAL.value if previous else MarkerStatus.NONE.value,
                to_state=MarkerStatus.PROVISIONAL.value,
                trigger=trigger,
                context={"kind": signal.value, "price": price}
            )
        return marker

    def _erase(self, index: int) -> None:
        removed = self.store.remove_provisional(index)
        marker_id = removed.marker_id if removed else marker_id_for(self.chart.bars.open_time_at(index))
        self.chart.remove_marker(marker_id)
        self.state.end_run()
        self.dispatcher.dismiss()

        if removed is not None:
            log_marker_transition(
                self.logger,
                bar_index=index,
                marker_id=marker_id,
                from_state=MarkerStatus.PROVISIONAL.value,
                to_state=MarkerStatus.NONE.value,
                trigger="tick",
                context={"kind": removed.kind.value}
            )

    def _style(self, signal: Signal) -> tuple[str, Optional[str]]:
        if signal == Signal.BUY:
            return self.params.buy_icon, self.params.buy_color or self.chart.theme_buy_color
        return self.params.sell_icon, self.params.sell_color or self.chart.theme_sell_color

    def _require_evaluator(self, operation: str) -> SignalEvaluator:
        if self.evaluator is None:
            self.logger.error("Signal evaluator missing", operation=operation)
            raise SignalSourceMissingError(
                f"Cannot run {operation} without a signal evaluator",
                operation=operation
            )
        return self.evaluator
