import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock

from core.entities import UserEntity, WorkoutSessionEntity
from core.exceptions import InvalidStateError, NotFoundError
from core.usecase import WorkoutSessionUseCase
from interface.di import get_current_user, get_workout_session_usecase
from interface.middleware import register_exception_handlers
from interface.routers.workout_session_router import workout_session_router

USER_ID = "64b7f0c2a1b2c3d4e5f60001"
WORKOUT_ID = "64b7f0c2a1b2c3d4e5f60002"
SESSION_ID = "64b7f0c2a1b2c3d4e5f60003"


def make_session(**overrides) -> WorkoutSessionEntity:
    data = {"id": SESSION_ID, "user_id": USER_ID, "workout_id": WORKOUT_ID, "total_exercises": 3}
    data.update(overrides)
    return WorkoutSessionEntity(**data)


@pytest.fixture
def app():
    app = FastAPI()
    app.include_router(workout_session_router)
    register_exception_handlers(app)
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def session_usecase():
    return AsyncMock(spec=WorkoutSessionUseCase)


@pytest.fixture(autouse=True)
def override_dependencies(app, session_usecase):
    user = UserEntity(id=USER_ID, username="athlete", email="athlete@example.com")
    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[get_workout_session_usecase] = lambda: session_usecase
    yield
    app.dependency_overrides = {}


class TestWorkoutSessionRouter:
    def test_start_session(self, client, session_usecase):
        # Arrange
        session_usecase.start_session.return_value = make_session()

        # Act
        response = client.post("/workout-sessions/start", json={"workoutId": WORKOUT_ID})

        # Assert
        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["message"] == "Workout session started successfully"
        assert body["data"]["_id"] == SESSION_ID
        assert body["data"]["status"] == "active"
        assert body["data"]["totalExercises"] == 3
        session_usecase.start_session.assert_awaited_once_with(USER_ID, WORKOUT_ID)

    def test_start_session_conflict(self, client, session_usecase):
        # Arrange
        session_usecase.start_session.side_effect = InvalidStateError(
            "You already have an active workout session"
        )

        # Act
        response = client.post("/workout-sessions/start", json={"workoutId": WORKOUT_ID})

        # Assert
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["error"] == "You already have an active workout session"

    def test_active_session_not_found(self, client, session_usecase):
        session_usecase.get_active_session.side_effect = NotFoundError("No active workout session")

        response = client.get("/workout-sessions/active")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {
            "success": False,
            "data": None,
            "error": "No active workout session",
        }

    def test_stats_route_is_not_a_session_id(self, client, session_usecase):
        session_usecase.get_stats.return_value = {"totalSessions": 0}

        response = client.get("/workout-sessions/stats")

        assert response.status_code == status.HTTP_200_OK
        session_usecase.get_session.assert_not_called()

    def test_list_sessions(self, client, session_usecase):
        # Arrange
        session_usecase.list_sessions.return_value = {"sessions": [], "pagination": {}}

        # Act
        response = client.get("/workout-sessions?page=2&limit=5&status=completed")

        # Assert
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Workout sessions retrieved successfully"
        session_usecase.list_sessions.assert_awaited_once_with(USER_ID, 2, 5, "completed")

    def test_get_session(self, client, session_usecase):
        session_usecase.get_session.return_value = make_session()

        response = client.get(f"/workout-sessions/{SESSION_ID}")

        assert response.status_code == status.HTTP_200_OK
        session_usecase.get_session.assert_awaited_once_with(USER_ID, SESSION_ID)

    def test_update_session_only_sends_given_fields(self, client, session_usecase):
        # Arrange
        session_usecase.update_session.return_value = make_session(rating=4)

        # Act
        response = client.put(f"/workout-sessions/{SESSION_ID}", json={"rating": 4})

        # Assert
        assert response.status_code == status.HTTP_200_OK
        session_usecase.update_session.assert_awaited_once_with(USER_ID, SESSION_ID, {"rating": 4})

    def test_update_session_rejects_bad_rating(self, client, session_usecase):
        response = client.put(f"/workout-sessions/{SESSION_ID}", json={"rating": 9})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"].startswith("Invalid input data:")
        session_usecase.update_session.assert_not_called()

    def test_complete_exercise(self, client, session_usecase):
        # Arrange
        session_usecase.complete_exercise.return_value = make_session(current_exercise_index=1)

        # Act
        response = client.post(
            f"/workout-sessions/{SESSION_ID}/complete-exercise",
            json={
                "exerciseId": "ex-1",
                "exerciseIndex": 0,
                "sets": [{"setIndex": 0, "reps": 10, "duration": 30}],
                "caloriesBurned": 12.5,
            },
        )

        # Assert
        assert response.status_code == status.HTTP_200_OK
        kwargs = session_usecase.complete_exercise.call_args.kwargs
        assert kwargs["exercise_id"] == "ex-1"
        assert kwargs["exercise_index"] == 0
        assert kwargs["calories_burned"] == 12.5
        assert kwargs["sets"][0]["reps"] == 10

    def test_complete_exercise_rejects_long_notes(self, client, session_usecase):
        response = client.post(
            f"/workout-sessions/{SESSION_ID}/complete-exercise",
            json={"exerciseId": "ex-1", "exerciseIndex": 0, "notes": "x" * 201},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"].startswith("Invalid input data: notes")
        session_usecase.complete_exercise.assert_not_called()

    def test_toggle_pause_messages(self, client, session_usecase):
        session_usecase.toggle_pause.return_value = make_session(status="paused")
        paused = client.post(f"/workout-sessions/{SESSION_ID}/toggle-pause")

        session_usecase.toggle_pause.return_value = make_session(status="active")
        resumed = client.post(f"/workout-sessions/{SESSION_ID}/toggle-pause")

        assert paused.json()["message"] == "Workout session paused"
        assert resumed.json()["message"] == "Workout session resumed"

    def test_stop_finished_session(self, client, session_usecase):
        session_usecase.stop_session.side_effect = NotFoundError("Active session not found")

        response = client.post(f"/workout-sessions/{SESSION_ID}/stop")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_session(self, client, session_usecase):
        response = client.delete(f"/workout-sessions/{SESSION_ID}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "success": True,
            "data": None,
            "message": "Session deleted successfully",
        }
        session_usecase.delete_session.assert_awaited_once_with(USER_ID, SESSION_ID)
