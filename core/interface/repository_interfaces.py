from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from core.entities import (
    ExerciseEntity,
    UserEntity,
    WorkoutEntity,
    WorkoutSessionEntity,
)


class UserRepositoryInterface(ABC):
    """Persistence operations for user accounts."""

    @abstractmethod
    async def get_user_by_id(self, user_id: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[UserEntity]:
        pass

    @abstractmethod
    async def find_user(self, query: Dict[str, Any]) -> Optional[UserEntity]:
        """
        Find a single user by arbitrary field values.

        Args:
            query: Field names (camelCase) mapped to values or operators

        Returns:
            The matching user, or None
        """
        pass

    @abstractmethod
    async def create_user(self, user: UserEntity) -> UserEntity:
        """
        Insert a new user.

        Returns:
            The stored user with its id

        Raises:
            ConflictError: If the email or username already exists
        """
        pass

    @abstractmethod
    async def update_user(self, user_id: str, fields: Dict[str, Any]) -> Optional[UserEntity]:
        """
        Set fields on a user.

        Args:
            user_id: User identifier
            fields: camelCase field paths mapped to new values; None unsets

        Returns:
            The updated user, or None if it does not exist
        """
        pass


class ExerciseRepositoryInterface(ABC):
    """Persistence and catalog queries for exercises."""

    @abstractmethod
    async def list_exercises(
        self,
        filters: Dict[str, Any],
        sort: Dict[str, str],
        page: int,
        limit: int,
        include_creator: bool = False,
    ) -> Tuple[List[ExerciseEntity], int]:
        """
        Filter, sort and paginate exercises.

        Returns:
            Tuple containing (page_items, total_matching)
        """
        pass

    @abstractmethod
    async def get_exercise_by_id(
        self, exercise_id: str, include_creator: bool = False
    ) -> Optional[ExerciseEntity]:
        pass

    @abstractmethod
    async def get_exercise_by_slug(self, slug: str) -> Optional[ExerciseEntity]:
        pass

    @abstractmethod
    async def create_exercise(self, exercise: ExerciseEntity) -> ExerciseEntity:
        pass


class WorkoutRepositoryInterface(ABC):
    """Persistence and catalog queries for workouts."""

    @abstractmethod
    async def list_workouts(
        self,
        filters: Dict[str, Any],
        sort: Dict[str, str],
        page: int,
        limit: int,
        include_user: bool = False,
        include_exercises: bool = False,
    ) -> Tuple[List[WorkoutEntity], int]:
        """
        Filter, sort and paginate workouts.

        Returns:
            Tuple containing (page_items, total_matching)
        """
        pass

    @abstractmethod
    async def get_workout_by_id(
        self, workout_id: str, include_user: bool = False, include_exercises: bool = False
    ) -> Optional[WorkoutEntity]:
        pass

    @abstractmethod
    async def create_workout(self, workout: WorkoutEntity) -> WorkoutEntity:
        pass

    @abstractmethod
    async def toggle_member(
        self, workout_id: str, user_id: str, array_field: str, count_field: str
    ) -> Optional[Tuple[bool, int]]:
        """
        Add the user to an array field or remove them if present.

        Args:
            workout_id: Workout identifier
            user_id: User to toggle
            array_field: likes or saves
            count_field: likeCount or saveCount

        Returns:
            Tuple containing (is_member_now, new_count), or None if the workout is missing
        """
        pass

    @abstractmethod
    async def increment_counter(self, workout_id: str, field: str, amount: int = 1) -> bool:
        pass

    @abstractmethod
    async def get_user_stats(self, user_id: str) -> Dict[str, Any]:
        """
        Aggregate totals over every workout a user owns.

        Returns:
            Dictionary with totals, byCategory, byDifficulty and recent counts
        """
        pass


class WorkoutSessionRepositoryInterface(ABC):
    """Persistence for workout sessions, always scoped to the owner."""

    @abstractmethod
    async def create_session(self, session: WorkoutSessionEntity) -> WorkoutSessionEntity:
        pass

    @abstractmethod
    async def get_session(self, session_id: str, user_id: str) -> Optional[WorkoutSessionEntity]:
        pass

    @abstractmethod
    async def get_in_progress_session(self, user_id: str) -> Optional[WorkoutSessionEntity]:
        """Return the user's active or paused session, if any."""
        pass

    @abstractmethod
    async def save_session(self, session: WorkoutSessionEntity) -> WorkoutSessionEntity:
        """
        Replace the stored session document with the given state.

        Raises:
            NotFoundError: If the session no longer exists
        """
        pass

    @abstractmethod
    async def list_sessions(
        self, user_id: str, status: Optional[str], page: int, limit: int
    ) -> Tuple[List[WorkoutSessionEntity], int]:
        """
        List a user's sessions, newest start time first.

        Returns:
            Tuple containing (page_items, total_matching)
        """
        pass

    @abstractmethod
    async def get_session_totals(self, user_id: str) -> Dict[str, Any]:
        """
        Aggregate session counts, durations and calories for a user.

        Returns:
            Dictionary with totalSessions, completedSessions, totalDuration,
            totalCalories, avgDuration and avgCalories (raw, unrounded)
        """
        pass

    @abstractmethod
    async def delete_session(self, session_id: str, user_id: str) -> int:
        """Delete a session and return the number of removed documents."""
        pass
