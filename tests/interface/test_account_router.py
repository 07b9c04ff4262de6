from fastapi import FastAPI, status
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock

from core.entities import UserEntity
from core.usecase import AccountUseCase
from interface.di import get_account_usecase, get_auth_service, get_current_user
from interface.middleware import register_exception_handlers
from interface.routers import account_router


class TestAccountRouter:
    def test_profile_summary(self):
        # Arrange
        app = FastAPI()
        app.include_router(account_router)
        register_exception_handlers(app)
        user = UserEntity(id="64b7f0c2a1b2c3d4e5f60001", username="athlete", email="a@example.com")
        account_usecase = AsyncMock(spec=AccountUseCase)
        account_usecase.get_profile_summary.return_value = {"accountStatus": {"isActive": True}}
        app.dependency_overrides[get_current_user] = lambda: user
        app.dependency_overrides[get_account_usecase] = lambda: account_usecase

        # Act
        response = TestClient(app).get("/account/profile")

        # Assert
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "User stats retrieved successfully"
        account_usecase.get_profile_summary.assert_awaited_once_with(user)

    def test_profile_requires_token(self):
        app = FastAPI()
        app.include_router(account_router)
        register_exception_handlers(app)
        app.dependency_overrides[get_auth_service] = lambda: AsyncMock()
        app.dependency_overrides[get_account_usecase] = lambda: AsyncMock(spec=AccountUseCase)

        response = TestClient(app).get("/account/profile")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error"] == "Access token required"
