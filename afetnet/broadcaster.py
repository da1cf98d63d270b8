"""Disaster Broadcaster - Simulated live event stream.

Generates synthetic disaster events on a randomized schedule, keeps a
24-hour window of them in memory and notifies registered listeners.

Time is injected: the scheduler only needs call_later(delay, callback)
returning a handle with cancel(), which asyncio event loops already
provide, and the clock is any zero-argument callable returning an
aware datetime. Tests drive both by hand.
"""

import asyncio
import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Protocol

from afetnet.core.config import SimulationSettings
from afetnet.core.disaster import (
    DisasterEvent,
    DisasterSeverity,
    DisasterType,
    filter_by_severity,
    filter_by_type,
    generate_random_disaster,
    prune_expired,
)


logger = logging.getLogger(__name__)


Listener = Callable[[DisasterEvent], Any]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], Any]) -> TimerHandle: ...


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DisasterBroadcaster:
    """Timer-driven generator of synthetic disaster events.

    Stopped --start_simulation--> Running --stop_simulation--> Stopped.
    At most one timer chain is active per instance.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
        scheduler: Scheduler | None = None,
        settings: SimulationSettings | None = None,
    ) -> None:
        """Initialize the broadcaster.

        Args:
            rng: Random source (a fresh random.Random if not provided)
            clock: Returns the current time (UTC now if not provided)
            scheduler: Timer source (the running asyncio loop if not provided)
            settings: Delays and retention window
        """
        self.rng = rng or random.Random()
        self.clock = clock or utc_now
        self.scheduler = scheduler
        self.settings = settings or SimulationSettings()

        self._listeners: list[Listener] = []
        self._active: list[DisasterEvent] = []
        self._running = False
        self._handle: TimerHandle | None = None

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def retention(self) -> timedelta:
        return timedelta(hours=self.settings.retention_hours)

    def add_listener(self, callback: Listener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        """Remove every registration of callback. Unknown callbacks are ignored."""
        self._listeners = [cb for cb in self._listeners if cb != callback]

    def start_simulation(self) -> None:
        """Start generating events. Calling it while running does nothing."""
        if self._running:
            return

        if self.scheduler is None:
            self.scheduler = asyncio.get_running_loop()

        self._running = True
        logger.info("Disaster simulation started")
        self._schedule(self.settings.first_delay_seconds)

    def stop_simulation(self) -> None:
        """Stop generating events and cancel the pending tick."""
        self._running = False

        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

        logger.info("Disaster simulation stopped")

    def _schedule(self, delay: float) -> None:
        self._handle = self.scheduler.call_later(delay, self._tick)

    def _next_delay(self) -> float:
        """Uniform in [min_interval, max_interval)."""
        low = self.settings.min_interval_seconds
        high = self.settings.max_interval_seconds
        return low + self.rng.random() * (high - low)

    def _notify(self, event: DisasterEvent) -> None:
        # Listeners may add or remove listeners while being notified
        for callback in list(self._listeners):
            try:
                callback(event)
            except Exception:
                logger.exception("Disaster listener %r failed", callback)

    def _tick(self) -> None:
        self._handle = None
        if not self._running:
            return

        now = self.clock()
        event = generate_random_disaster(self.rng, now)
        self._active.append(event)

        logger.info(
            "Generated %s (%s) in %s",
            event.type.value,
            event.severity.value,
            event.location,
        )

        self._notify(event)
        self._active = prune_expired(self._active, now, self.retention)

        # A listener may have stopped (or stopped and restarted) the simulation
        if self._running and self._handle is None:
            self._schedule(self._next_delay())

    def get_active(self) -> list[DisasterEvent]:
        return list(self._active)

    def get_by_type(self, disaster_type: DisasterType) -> list[DisasterEvent]:
        return filter_by_type(self._active, disaster_type)

    def get_by_severity(self, severity: DisasterSeverity) -> list[DisasterEvent]:
        return filter_by_severity(self._active, severity)

    def get_critical(self) -> list[DisasterEvent]:
        return filter_by_severity(self._active, DisasterSeverity.CRITICAL)
