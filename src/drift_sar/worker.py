"""Signal-loss monitor for drift-sar.

Periodically takes subjects whose position reports have stopped offline and
raises a ``signal_lost`` alert so a drift estimate can be requested.

The API starts one monitor thread against its shared registry.
"""
from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import List, Optional

from drift_sar.config import settings
from drift_sar.tracking import Alert, TrackingRegistry

log = logging.getLogger(__name__)


class SignalLossMonitor:
    def __init__(self, registry: TrackingRegistry, interval_s: Optional[int] = None):
        self.registry = registry
        self.interval_s = interval_s if interval_s is not None else settings.signal_check_interval_s
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def run_cycle(self, now: Optional[datetime] = None) -> List[Alert]:
        """Run one check; returns the alerts raised."""
        alerts = self.registry.check_signal_loss(now)
        if alerts:
            log.info("Signal lost for %d subject(s)", len(alerts))
        return alerts

    def run_forever(self, stop: threading.Event) -> None:
        log.info("Monitor starting (interval=%ds)", self.interval_s)
        while not stop.is_set():
            try:
                self.run_cycle()
            except Exception as exc:
                log.exception("Monitor cycle error: %s", exc)
            stop.wait(self.interval_s)
        log.info("Monitor stopped")

    def start(self) -> threading.Thread:
        """Run in a daemon thread until ``stop()`` is called."""
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self.run_forever, args=(self._stop_event,), name="signal-loss-monitor", daemon=True
        )
        self._thread.start()
        return self._thread

    def stop(self, timeout_s: float = 2.0) -> None:
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join(timeout_s)
        if self._thread.is_alive():
            log.warning("Monitor thread did not stop within %.1fs", timeout_s)
        self._thread = None
