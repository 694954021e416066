"""Focus service - orchestrates pomodoro sessions against storage.

Loads the session, applies a transition from the state machine, and
persists the result. Completing a session refreshes the parent task's
completed pomodoro count.
"""

from __future__ import annotations

import logging

from pomotrack.clock import Clock, SystemClock
from pomotrack.config import FocusConfig
from pomotrack.exceptions import InvalidInputError
from pomotrack.models import Pomodoro, PomodoroStatus, PomodoroType, Task
from pomotrack.models.focus import state
from pomotrack.models.focus.analytics import FocusSummary, compute_focus_summary
from pomotrack.models.focus.cycling import (
    CycleState,
    completed_history,
    next_session_type,
    planned_minutes,
)
from pomotrack.models.focus.state import LIVE_STATUSES, Operation, TimerSnapshot
from pomotrack.repositories import PomodoroRepository, TaskRepository
from pomotrack.services.task_policy import refresh_pomodoro_progress


logger = logging.getLogger(__name__)


class FocusService:
    """Service for pomodoro session business logic."""

    def __init__(
        self,
        task_repository: TaskRepository,
        pomodoro_repository: PomodoroRepository,
        clock: Clock | None = None,
        config: FocusConfig | None = None,
    ):
        """Initialize the focus service.

        Args:
            task_repository: Where parent tasks are loaded and saved
            pomodoro_repository: Where sessions are loaded and saved
            clock: Time source, the system clock by default
            config: Durations and cycling settings
        """
        self.tasks = task_repository
        self.pomodoros = pomodoro_repository
        self.clock = clock or SystemClock()
        self.config = config or FocusConfig()

    async def history(self, task_id: str | None = None) -> list[PomodoroType]:
        sessions = await self.pomodoros.list_all(
            None if task_id is None else (lambda p: p.task_id == task_id)
        )
        return completed_history(sessions)

    async def recommend_next(self, task_id: str | None = None) -> PomodoroType:
        """Recommend the next session type from completed history."""
        return next_session_type(
            await self.history(task_id), self.config.to_pomodoro_config()
        )

    async def cycle_state(self, task_id: str | None = None) -> CycleState:
        return CycleState.from_history(
            await self.history(task_id), self.config.to_pomodoro_config()
        )

    async def create_session(
        self,
        task_id: str,
        session_type: PomodoroType | None = None,
        duration_minutes: int | None = None,
        notes: str | None = None,
    ) -> Pomodoro:
        """Create a pending session for an existing task.

        Without an explicit type the cycling recommendation is used; without
        an explicit duration the configured one for that type is used.

        Raises:
            NotFoundError: If the task does not exist
            InvalidInputError: If the duration is below one minute
        """
        await self.tasks.get(task_id)
        if session_type is None:
            session_type = await self.recommend_next()
        if duration_minutes is None:
            duration_minutes = planned_minutes(session_type, self.config.to_pomodoro_config())
        if duration_minutes < 1:
            raise InvalidInputError(f"Duration must be at least 1 minute, got {duration_minutes}")

        session = Pomodoro(
            task_id=task_id,
            type=session_type,
            planned_duration_minutes=duration_minutes,
            notes=notes,
            created_at=self.clock.now(),
        )
        logger.info("created %s session %s for task %s", session_type.name, session.id, task_id)
        return await self.pomodoros.save(session)

    async def _transition(self, session_id: str, operation: Operation) -> Pomodoro:
        session = await self.pomodoros.get(session_id)
        state.transition(session, operation, self.clock.now())
        await self.pomodoros.save(session)
        logger.info("session %s: %s -> %s", session_id, operation, session.status.name)
        return session

    async def start(self, session_id: str) -> Pomodoro:
        return await self._transition(session_id, "start")

    async def pause(self, session_id: str) -> Pomodoro:
        return await self._transition(session_id, "pause")

    async def resume(self, session_id: str) -> Pomodoro:
        return await self._transition(session_id, "resume")

    async def cancel(self, session_id: str) -> Pomodoro:
        return await self._transition(session_id, "cancel")

    async def complete(self, session_id: str) -> Pomodoro:
        """Complete a session and recount the parent task's pomodoros."""
        session = await self._transition(session_id, "complete")
        await self._refresh_task(session.task_id)
        return session

    async def interrupt(self, session_id: str) -> Pomodoro:
        session = await self.pomodoros.get(session_id)
        state.record_interruption(session, self.clock.now())
        return await self.pomodoros.save(session)

    async def snapshot(self, session_id: str) -> TimerSnapshot:
        """Timer view of a session at the current instant."""
        session = await self.pomodoros.get(session_id)
        return state.advance(session, self.clock.now())

    async def tick(self, session: Pomodoro) -> TimerSnapshot:
        """Advance an in-memory session and persist it if it just expired."""
        snapshot = state.tick(session, self.clock.now())
        if session.status == PomodoroStatus.Completed and snapshot.expired:
            await self.pomodoros.save(session)
            await self._refresh_task(session.task_id)
        return snapshot

    async def begin_run(self, session_id: str) -> Pomodoro:
        """Load a session and make sure it is running, ready for the timer loop.

        Pending sessions are started and paused ones resumed.
        """
        session = await self.pomodoros.get(session_id)
        now = self.clock.now()
        if session.status == PomodoroStatus.Pending:
            state.start(session, now)
        elif session.status == PomodoroStatus.Paused:
            state.resume(session, now)
        return await self.pomodoros.save(session)

    async def finish_run(self, session: Pomodoro) -> Pomodoro:
        """Persist whatever state the timer loop left the session in."""
        await self.pomodoros.save(session)
        if session.status == PomodoroStatus.Completed:
            await self._refresh_task(session.task_id)
        return session

    async def active_session(self) -> Pomodoro | None:
        """The most recently created running or paused session, if any."""
        live = await self.pomodoros.list_all(lambda p: p.status in LIVE_STATUSES)
        if not live:
            return None
        return max(live, key=lambda p: p.created_at)

    async def summary(self, task_id: str | None = None) -> FocusSummary:
        sessions = await self.pomodoros.list_all(
            None if task_id is None else (lambda p: p.task_id == task_id)
        )
        return compute_focus_summary(sessions, self.clock.now())

    async def _refresh_task(self, task_id: str) -> Task:
        task = await self.tasks.get(task_id)
        sessions = await self.pomodoros.list_all(lambda p: p.task_id == task_id)
        refresh_pomodoro_progress(task, sessions, self.clock.now())
        return await self.tasks.save(task)
