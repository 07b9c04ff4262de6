import logging
import math
from typing import Any, Dict, List, Optional

from core.entities import (
    CompletedExercise,
    CompletedSet,
    SessionStatus,
    WorkoutSessionEntity,
    IN_PROGRESS_STATUSES,
    TERMINAL_STATUSES,
    utc_now,
)
from core.exceptions import ConflictError, InvalidStateError, NotFoundError, ValidationError
from core.interface import WorkoutRepositoryInterface, WorkoutSessionRepositoryInterface
from core.service import is_valid_object_id
from core.service.health_service import round_int
from core.service.session_service import (
    completion_rate,
    fold_pause,
    percentage,
    session_duration,
    sum_set_durations,
)

ALREADY_ACTIVE = "You already have an active workout session. Please complete or stop it first."
ACTIVE_NOT_FOUND = "Active session not found"

# Fields that may still change after a session has finished
POST_SESSION_FIELDS = {"notes", "rating", "mood", "average_heart_rate", "max_heart_rate"}


class WorkoutSessionUseCase:
    """
    Drives the workout session state machine.

    A session starts active, toggles between active and paused, and ends as
    completed (every exercise done, or set explicitly) or stopped. Finished
    sessions only accept feedback fields.
    """

    def __init__(
        self,
        session_repository: WorkoutSessionRepositoryInterface,
        workout_repository: WorkoutRepositoryInterface,
    ):
        self.session_repository = session_repository
        self.workout_repository = workout_repository
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def _check_session_id(session_id: str) -> None:
        if not is_valid_object_id(session_id):
            raise ValidationError("Valid session ID is required")

    async def start_session(self, user_id: str, workout_id: str) -> WorkoutSessionEntity:
        """
        Start a new session for a workout.

        Args:
            user_id: The session owner
            workout_id: Workout to perform

        Returns:
            The new active session

        Raises:
            ValidationError: If the workout id is malformed
            NotFoundError: If the workout does not exist or is another user's private workout
            ConflictError: If the user already has an active or paused session
        """
        if not is_valid_object_id(workout_id):
            raise ValidationError("Valid workout ID is required")

        workout = await self.workout_repository.get_workout_by_id(workout_id)
        if not workout or (not workout.is_public and workout.user_id != user_id):
            raise NotFoundError("Workout not found")

        if await self.session_repository.get_in_progress_session(user_id):
            raise ConflictError(ALREADY_ACTIVE)

        session = WorkoutSessionEntity(
            user_id=user_id,
            workout_id=workout_id,
            start_time=utc_now(),
            total_exercises=max(1, len(workout.exercises)),
        )
        created = await self.session_repository.create_session(session)
        self.logger.info(f"Session {created.id} started by user {user_id} for workout {workout_id}")
        return created

    async def get_active_session(self, user_id: str) -> WorkoutSessionEntity:
        session = await self.session_repository.get_in_progress_session(user_id)
        if not session:
            raise NotFoundError("No active workout session found")
        return session

    async def get_session(self, user_id: str, session_id: str) -> WorkoutSessionEntity:
        self._check_session_id(session_id)
        session = await self.session_repository.get_session(session_id, user_id)
        if not session:
            raise NotFoundError("Workout session not found")
        return session

    async def _get_in_progress(self, user_id: str, session_id: str) -> WorkoutSessionEntity:
        self._check_session_id(session_id)
        session = await self.session_repository.get_session(session_id, user_id)
        if not session or session.status not in IN_PROGRESS_STATUSES:
            raise NotFoundError(ACTIVE_NOT_FOUND)
        return session

    @staticmethod
    def _pause(session: WorkoutSessionEntity) -> None:
        session.status = SessionStatus.PAUSED.value
        session.paused_at = utc_now()

    @staticmethod
    def _resume(session: WorkoutSessionEntity) -> None:
        session.paused_duration = fold_pause(session.paused_duration, session.paused_at, utc_now())
        session.paused_at = None
        session.status = SessionStatus.ACTIVE.value

    @staticmethod
    def _finish(session: WorkoutSessionEntity, status: str) -> None:
        now = utc_now()
        session.paused_duration = fold_pause(session.paused_duration, session.paused_at, now)
        session.paused_at = None
        session.status = status
        session.end_time = now
        session.total_duration = session_duration(
            session.start_time, now, session.paused_duration
        )

    async def update_session(
        self, user_id: str, session_id: str, changes: Dict[str, Any]
    ) -> WorkoutSessionEntity:
        """
        Apply progress, status or feedback changes to a session.

        Args:
            user_id: The session owner
            session_id: Session to update
            changes: snake_case field names mapped to new values; None values are ignored

        Returns:
            The updated session

        Raises:
            NotFoundError: If the session does not exist for this user
            InvalidStateError: If a finished session receives progress or status changes
        """
        self._check_session_id(session_id)
        session = await self.session_repository.get_session(session_id, user_id)
        if not session:
            raise NotFoundError("Session not found or access denied")

        changes = {key: value for key, value in changes.items() if value is not None}
        new_status = changes.pop("status", None)
        index = changes.pop("current_exercise_index", None)

        if session.status in TERMINAL_STATUSES:
            if index is not None or (new_status and new_status != session.status):
                raise InvalidStateError("Session is already finished")
            new_status = None

        for field, value in changes.items():
            if field in POST_SESSION_FIELDS:
                setattr(session, field, value)

        if index is not None:
            session.current_exercise_index = index
            session.completion_percentage = percentage(index, session.total_exercises)

        completed = False
        if new_status and new_status != session.status:
            if new_status in TERMINAL_STATUSES:
                self._finish(session, new_status)
                completed = new_status == SessionStatus.COMPLETED.value
            elif new_status == SessionStatus.PAUSED.value:
                self._pause(session)
            else:
                self._resume(session)

        session.touch()
        saved = await self.session_repository.save_session(session)

        if completed:
            await self.workout_repository.increment_counter(session.workout_id, "completions")
        return saved

    async def complete_exercise(
        self,
        user_id: str,
        session_id: str,
        exercise_id: str,
        exercise_index: int,
        sets: List[Dict[str, Any]],
        calories_burned: float = 0,
        notes: Optional[str] = None,
    ) -> WorkoutSessionEntity:
        """
        Record a finished exercise and advance the session.

        The session completes automatically once every exercise is recorded.

        Returns:
            The updated session

        Raises:
            ValidationError: If the exercise id is malformed
            NotFoundError: If there is no active or paused session with this id
        """
        if not is_valid_object_id(exercise_id):
            raise ValidationError("Valid exercise ID is required")
        session = await self._get_in_progress(user_id, session_id)
        now = utc_now()

        completed_sets = [CompletedSet.model_validate(s) for s in sets]
        session.completed_exercises = session.completed_exercises + [
            CompletedExercise(
                exercise_id=exercise_id,
                exercise_index=exercise_index,
                sets=completed_sets,
                total_duration=sum_set_durations(s.duration for s in completed_sets),
                calories_burned=calories_burned or 0,
                is_completed=True,
                notes=notes,
                started_at=now,
                completed_at=now,
            )
        ]
        session.total_calories_burned = session.total_calories_burned + (calories_burned or 0)

        done = len(session.completed_exercises)
        session.current_exercise_index = exercise_index + 1
        session.completion_percentage = percentage(done, session.total_exercises)

        finished = done >= session.total_exercises
        if finished:
            self._finish(session, SessionStatus.COMPLETED.value)

        session.touch()
        saved = await self.session_repository.save_session(session)

        if finished:
            await self.workout_repository.increment_counter(session.workout_id, "completions")
            self.logger.info(f"Session {session_id} completed by user {user_id}")
        return saved

    async def toggle_pause(self, user_id: str, session_id: str) -> WorkoutSessionEntity:
        session = await self._get_in_progress(user_id, session_id)
        if session.status == SessionStatus.ACTIVE.value:
            self._pause(session)
        else:
            self._resume(session)
        session.touch()
        return await self.session_repository.save_session(session)

    async def stop_session(self, user_id: str, session_id: str) -> WorkoutSessionEntity:
        session = await self._get_in_progress(user_id, session_id)
        self._finish(session, SessionStatus.STOPPED.value)
        session.touch()
        saved = await self.session_repository.save_session(session)
        self.logger.info(f"Session {session_id} stopped by user {user_id}")
        return saved

    async def list_sessions(
        self, user_id: str, page: int = 1, limit: int = 10, status: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Page through a user's session history.

        Returns:
            Dictionary with sessions, total, page and totalPages
        """
        if status and status not in [s.value for s in SessionStatus]:
            raise ValidationError(f"Invalid status: {status}")
        page = max(1, page)
        limit = max(1, min(100, limit))

        sessions, total = await self.session_repository.list_sessions(user_id, status, page, limit)
        return {
            "sessions": sessions,
            "total": total,
            "page": page,
            "totalPages": math.ceil(total / limit),
        }

    async def get_stats(self, user_id: str) -> Dict[str, Any]:
        totals = await self.session_repository.get_session_totals(user_id)
        total_sessions = totals.get("totalSessions") or 0
        completed = totals.get("completedSessions") or 0
        return {
            "totalSessions": total_sessions,
            "completedSessions": completed,
            "completionRate": completion_rate(completed, total_sessions),
            "totalDuration": round_int((totals.get("totalDuration") or 0) / 60),
            "totalCalories": round_int(totals.get("totalCalories") or 0),
            "avgDuration": round_int((totals.get("avgDuration") or 0) / 60),
            "avgCalories": round_int(totals.get("avgCalories") or 0),
        }

    async def delete_session(self, user_id: str, session_id: str) -> None:
        self._check_session_id(session_id)
        deleted = await self.session_repository.delete_session(session_id, user_id)
        if not deleted:
            raise NotFoundError("Session not found")
