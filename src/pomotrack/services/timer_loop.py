"""Caller-owned scheduling loop that drives a live session.

The loop owns the periodic tick; all timing decisions come from
:func:`pomotrack.models.focus.state.tick`, so tests can drive it with a
:class:`~pomotrack.clock.ManualClock` and a fake ``sleep``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from pomotrack.clock import Clock
from pomotrack.models import Pomodoro
from pomotrack.models.focus.state import LIVE_STATUSES, TimerSnapshot, tick

logger = logging.getLogger(__name__)

TickCallback = Callable[[TimerSnapshot], None]


def run_timer(
    session: Pomodoro,
    clock: Clock,
    sleep: Callable[[float], None] = time.sleep,
    on_tick: TickCallback | None = None,
    interval: float = 1.0,
    should_stop: Callable[[], bool] | None = None,
) -> TimerSnapshot:
    """Tick ``session`` until it leaves InProgress/Paused or ``should_stop``.

    Expiry completes the session in place. Returns the last snapshot.
    """
    snapshot = tick(session, clock.now())
    while True:
        if on_tick is not None:
            on_tick(snapshot)
        if session.status not in LIVE_STATUSES:
            logger.debug("timer for %s finished: %s", session.id, session.status.name)
            return snapshot
        if should_stop is not None and should_stop():
            logger.debug("timer for %s stopped by caller", session.id)
            return snapshot
        sleep(interval)
        snapshot = tick(session, clock.now())
