import pytest
from unittest.mock import AsyncMock

from core.entities import ExerciseEntity, WorkoutEntity
from core.exceptions import ConflictError, NotFoundError, ValidationError
from core.usecase.exercise_usecase import ExerciseUseCase, cache_key, normalize_sort
from core.usecase.workout_usecase import WorkoutUseCase

USER_ID = "64b7f0c2a1b2c3d4e5f60001"
OTHER_USER_ID = "64b7f0c2a1b2c3d4e5f60009"
WORKOUT_ID = "64b7f0c2a1b2c3d4e5f60002"
EXERCISE_ID = "64b7f0c2a1b2c3d4e5f60004"


def make_exercise(**overrides) -> ExerciseEntity:
    data = {
        "id": EXERCISE_ID,
        "name": "Push Up",
        "slug": "push-up",
        "description": "Classic bodyweight press",
        "instructions": ["Lower your chest", "Push back up"],
        "category": "strength",
        "primary_muscle_groups": ["chest"],
        "is_approved": True,
    }
    data.update(overrides)
    return ExerciseEntity(**data)


def make_workout(**overrides) -> WorkoutEntity:
    data = {
        "id": WORKOUT_ID,
        "user_id": USER_ID,
        "name": "Morning Routine",
        "difficulty": "beginner",
        "is_public": True,
        "exercises": [{"exerciseId": EXERCISE_ID, "order": 1, "sets": 3, "reps": 12}],
        "like_count": 4,
        "views": 10,
    }
    data.update(overrides)
    return WorkoutEntity(**data)


class TestHelpers:
    def test_cache_key_ignores_key_order(self):
        assert cache_key("exercises:list", {"a": 1, "b": 2}) == cache_key(
            "exercises:list", {"b": 2, "a": 1}
        )
        assert cache_key("exercises:list", {"a": 1}).startswith("exercises:list:")

    def test_normalize_sort_falls_back_to_default(self):
        assert normalize_sort({"field": "password"}, {"name"}, "name", "asc") == {
            "field": "name",
            "order": "asc",
        }
        assert normalize_sort({"field": "name", "order": "desc"}, {"name"}, "name", "asc") == {
            "field": "name",
            "order": "desc",
        }


class TestExerciseUseCase:
    @pytest.fixture
    def exercise_repository(self):
        mock = AsyncMock()
        mock.list_exercises.return_value = ([make_exercise()], 1)
        mock.get_exercise_by_id.return_value = make_exercise()
        mock.get_exercise_by_slug.return_value = None
        mock.create_exercise.side_effect = lambda exercise: exercise
        return mock

    @pytest.fixture
    def cache(self):
        mock = AsyncMock()

        async def get_with_cache(key, fetch, ttl=None):
            return await fetch()

        mock.get_with_cache.side_effect = get_with_cache
        return mock

    @pytest.mark.asyncio
    async def test_list_exercises_defaults_to_approved(self, exercise_repository):
        usecase = ExerciseUseCase(exercise_repository)

        result = await usecase.list_exercises(page=0, limit=500)

        filters, sort, page, limit, include_creator = exercise_repository.list_exercises.call_args[0]
        assert filters == {"isApproved": True}
        assert sort == {"field": "name", "order": "asc"}
        assert (page, limit, include_creator) == (1, 100, False)
        assert result["data"][0]["slug"] == "push-up"
        assert result["pagination"]["totalItems"] == 1

    @pytest.mark.asyncio
    async def test_list_exercises_uses_cache(self, exercise_repository, cache):
        usecase = ExerciseUseCase(exercise_repository, cache)

        await usecase.list_exercises(filters={"category": "strength"})

        key = cache.get_with_cache.call_args[0][0]
        assert key.startswith("exercises:list:")

    @pytest.mark.asyncio
    async def test_get_exercise_invalid_id(self, exercise_repository):
        with pytest.raises(ValidationError, match="Valid exercise ID is required"):
            await ExerciseUseCase(exercise_repository).get_exercise("bad")

    @pytest.mark.asyncio
    async def test_get_exercise_not_found(self, exercise_repository):
        exercise_repository.get_exercise_by_id.return_value = None

        with pytest.raises(NotFoundError, match="Exercise not found"):
            await ExerciseUseCase(exercise_repository).get_exercise(EXERCISE_ID)

    @pytest.mark.asyncio
    async def test_get_exercise_by_slug(self, exercise_repository, cache):
        exercise_repository.get_exercise_by_slug.return_value = make_exercise()
        usecase = ExerciseUseCase(exercise_repository, cache)

        result = await usecase.get_exercise_by_slug("push-up")

        assert result["name"] == "Push Up"
        assert cache.get_with_cache.call_args[0][0] == "exercises:slug:push-up"

    @pytest.mark.asyncio
    async def test_create_exercise_derives_slug_and_difficulty(self, exercise_repository, cache):
        usecase = ExerciseUseCase(exercise_repository, cache)

        created = await usecase.create_exercise(
            {
                "name": "Goblet Squat",
                "description": "Squat holding a dumbbell",
                "instructions": ["Hold the dumbbell", "Squat down"],
                "category": "strength",
                "primaryMuscleGroups": ["quadriceps"],
                "equipment": ["dumbbells"],
            },
            created_by=USER_ID,
        )

        assert created.slug == "goblet-squat"
        assert created.difficulty == "beginner"
        assert created.created_by == USER_ID
        cache.invalidate.assert_awaited_once_with("exercises:*")

    @pytest.mark.asyncio
    async def test_create_exercise_duplicate_slug(self, exercise_repository):
        exercise_repository.get_exercise_by_slug.return_value = make_exercise()

        with pytest.raises(ConflictError, match="already exists"):
            await ExerciseUseCase(exercise_repository).create_exercise(
                {
                    "name": "Push Up",
                    "description": "Again",
                    "instructions": ["Push"],
                    "category": "strength",
                    "primaryMuscleGroups": ["chest"],
                },
                created_by=USER_ID,
            )

    @pytest.mark.asyncio
    async def test_create_exercise_invalid_data(self, exercise_repository):
        with pytest.raises(ValidationError):
            await ExerciseUseCase(exercise_repository).create_exercise(
                {"name": "Nothing", "instructions": [], "category": "strength"},
                created_by=USER_ID,
            )


class TestWorkoutUseCase:
    @pytest.fixture
    def workout_repository(self):
        mock = AsyncMock()
        mock.list_workouts.return_value = ([make_workout()], 1)
        mock.get_workout_by_id.return_value = make_workout()
        mock.create_workout.side_effect = lambda workout: workout
        mock.increment_counter.return_value = True
        return mock

    @pytest.fixture
    def usecase(self, workout_repository):
        return WorkoutUseCase(workout_repository)

    @pytest.mark.asyncio
    async def test_list_workouts_default_sort(self, usecase, workout_repository):
        result = await usecase.list_workouts()

        args = workout_repository.list_workouts.call_args
        assert args[0][1] == {"field": "createdAt", "order": "desc"}
        assert result["pagination"].total_items == 1

    @pytest.mark.asyncio
    async def test_include_private_requires_own_user_filter(self, usecase, workout_repository):
        await usecase.list_workouts(
            filters={"userId": OTHER_USER_ID, "includePrivate": True}, viewer_id=USER_ID
        )
        assert workout_repository.list_workouts.call_args[0][0]["includePrivate"] is False

        await usecase.list_workouts(
            filters={"userId": USER_ID, "includePrivate": True}, viewer_id=USER_ID
        )
        assert workout_repository.list_workouts.call_args[0][0]["includePrivate"] is True

    @pytest.mark.asyncio
    async def test_get_my_workouts_filters(self, usecase, workout_repository):
        await usecase.get_my_workouts(USER_ID, category="cardio", search="run")

        filters = workout_repository.list_workouts.call_args[0][0]
        assert filters == {
            "userId": USER_ID,
            "includePrivate": True,
            "category": "cardio",
            "search": "run",
        }
        assert workout_repository.list_workouts.call_args[1]["include_exercises"] is True

    @pytest.mark.asyncio
    async def test_get_workout_counts_view(self, usecase, workout_repository):
        workout = await usecase.get_workout(WORKOUT_ID)

        assert workout.name == "Morning Routine"
        workout_repository.increment_counter.assert_awaited_once_with(WORKOUT_ID, "views")

    @pytest.mark.asyncio
    async def test_get_private_workout_hidden_from_others(self, usecase, workout_repository):
        workout_repository.get_workout_by_id.return_value = make_workout(is_public=False)

        with pytest.raises(NotFoundError):
            await usecase.get_workout(WORKOUT_ID, viewer_id=OTHER_USER_ID)

        assert (await usecase.get_workout(WORKOUT_ID, viewer_id=USER_ID)).id == WORKOUT_ID

    @pytest.mark.asyncio
    async def test_get_workout_survives_view_counter_failure(self, usecase, workout_repository):
        workout_repository.increment_counter.side_effect = RuntimeError("write failed")

        workout = await usecase.get_workout(WORKOUT_ID)

        assert workout.id == WORKOUT_ID

    @pytest.mark.asyncio
    async def test_create_workout_resets_counters(self, usecase):
        created = await usecase.create_workout(
            USER_ID,
            {
                "name": "  Leg Day ",
                "difficulty": "intermediate",
                "exercises": [{"exerciseId": EXERCISE_ID, "order": 1}],
                "likeCount": 99,
                "tags": ["Legs", "legs", " power "],
            },
        )

        assert created.name == "Leg Day"
        assert created.like_count == 0
        assert created.user_id == USER_ID
        assert created.tags == ["legs", "power"]

    @pytest.mark.asyncio
    async def test_create_workout_duplicate_order(self, usecase):
        with pytest.raises(ValidationError, match="already used"):
            await usecase.create_workout(
                USER_ID,
                {
                    "name": "Broken",
                    "difficulty": "beginner",
                    "exercises": [
                        {"exerciseId": EXERCISE_ID, "order": 1},
                        {"exerciseId": EXERCISE_ID, "order": 1},
                    ],
                },
            )

    @pytest.mark.asyncio
    async def test_toggle_like(self, usecase, workout_repository):
        workout_repository.toggle_member.return_value = (True, 5)

        result = await usecase.toggle_like(WORKOUT_ID, USER_ID)

        assert result == {"isLiked": True, "likeCount": 5}
        workout_repository.toggle_member.assert_awaited_once_with(
            WORKOUT_ID, USER_ID, "likes", "likeCount"
        )

    @pytest.mark.asyncio
    async def test_toggle_save_missing_workout(self, usecase, workout_repository):
        workout_repository.toggle_member.return_value = None

        with pytest.raises(NotFoundError):
            await usecase.toggle_save(WORKOUT_ID, USER_ID)

    @pytest.mark.asyncio
    async def test_duplicate_workout(self, usecase):
        copy = await usecase.duplicate_workout(WORKOUT_ID, OTHER_USER_ID)

        assert copy.name == "Morning Routine (Copy)"
        assert copy.user_id == OTHER_USER_ID
        assert copy.is_public is False
        assert copy.like_count == 0
        assert copy.views == 0
        assert copy.id is None

    @pytest.mark.asyncio
    async def test_get_my_stats_defaults(self, usecase, workout_repository):
        workout_repository.get_user_stats.return_value = {"totalWorkouts": 2, "avgRating": None}

        stats = await usecase.get_my_stats(USER_ID)

        assert stats["totalWorkouts"] == 2
        assert stats["averageRating"] == 0
        assert stats["recentActivity"]["workoutsThisWeek"] == 0
