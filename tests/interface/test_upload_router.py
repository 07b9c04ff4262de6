import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock

from core.entities import UserEntity
from core.exceptions import NotFoundError, ValidationError
from core.usecase import UploadUseCase
from interface.di import get_current_user, get_upload_usecase
from interface.middleware import register_exception_handlers
from interface.routers import upload_router

UPLOADED = {
    "publicId": "avatars/abc",
    "url": "/uploads/avatars/abc.png",
    "bytes": 4,
    "format": "png",
}


@pytest.fixture
def app():
    app = FastAPI()
    app.include_router(upload_router)
    register_exception_handlers(app)
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def upload_usecase():
    return AsyncMock(spec=UploadUseCase)


@pytest.fixture(autouse=True)
def override_dependencies(app, upload_usecase):
    user = UserEntity(id="64b7f0c2a1b2c3d4e5f60001", username="athlete", email="a@example.com")
    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[get_upload_usecase] = lambda: upload_usecase
    yield
    app.dependency_overrides = {}


class TestUploadRouter:
    def test_upload_image(self, client, upload_usecase):
        # Arrange
        upload_usecase.upload_image.return_value = UPLOADED

        # Act
        response = client.post(
            "/upload/image",
            files={"file": ("me.png", b"\x89PNG", "image/png")},
            data={"folder": "avatars"},
        )

        # Assert
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["data"] == UPLOADED
        upload_usecase.upload_image.assert_awaited_once_with(
            ("me.png", "image/png", b"\x89PNG"), "avatars"
        )

    def test_upload_image_rejects_wrong_type(self, client, upload_usecase):
        upload_usecase.upload_image.side_effect = ValidationError("Only image files are allowed")

        response = client.post(
            "/upload/image", files={"file": ("notes.txt", b"text", "text/plain")}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Only image files are allowed"

    def test_upload_video_default_folder(self, client, upload_usecase):
        upload_usecase.upload_video.return_value = UPLOADED

        client.post("/upload/video", files={"file": ("clip.mp4", b"data", "video/mp4")})

        assert upload_usecase.upload_video.call_args.args[1] == "videos"

    def test_upload_images(self, client, upload_usecase):
        # Arrange
        upload_usecase.upload_images.return_value = [UPLOADED, UPLOADED]

        # Act
        response = client.post(
            "/upload/images",
            files=[
                ("files", ("a.png", b"a", "image/png")),
                ("files", ("b.png", b"b", "image/png")),
            ],
        )

        # Assert
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["message"] == "2 images uploaded successfully"
        uploads, folder = upload_usecase.upload_images.call_args.args
        assert [upload[0] for upload in uploads] == ["a.png", "b.png"]
        assert folder == "images"

    def test_batch_delete_is_not_a_public_id(self, client, upload_usecase):
        upload_usecase.delete_files.return_value = {"deleted": ["a/b"], "failed": []}

        response = client.request("DELETE", "/upload/batch", json={"publicIds": ["a/b"]})

        assert response.json()["message"] == "Batch delete completed"
        upload_usecase.delete_file.assert_not_called()

    def test_file_info_with_nested_public_id(self, client, upload_usecase):
        upload_usecase.get_file_info.return_value = UPLOADED

        response = client.get("/upload/info/avatars/abc")

        assert response.status_code == status.HTTP_200_OK
        upload_usecase.get_file_info.assert_awaited_once_with("avatars/abc")

    def test_file_exists(self, client, upload_usecase):
        upload_usecase.file_exists.return_value = False

        response = client.get("/upload/exists/avatars/abc")

        assert response.json()["data"] == {"exists": False}

    def test_delete_missing_file(self, client, upload_usecase):
        upload_usecase.delete_file.side_effect = NotFoundError("File not found")

        response = client.delete("/upload/avatars/abc")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        upload_usecase.delete_file.assert_awaited_once_with("avatars/abc")
