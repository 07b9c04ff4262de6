import pytest
from unittest.mock import AsyncMock

from core.exceptions import NotFoundError, ValidationError
from core.usecase import UploadUseCase

PNG = ("photo.png", "image/png", b"\x89PNG data")


@pytest.fixture
def storage():
    mock = AsyncMock()
    mock.save_file.return_value = {"publicId": "images/1-abc", "url": "/uploads/images/1-abc.png"}
    mock.delete_file.return_value = True
    mock.get_file_info.return_value = {"publicId": "images/1-abc"}
    mock.file_exists.return_value = True
    return mock


@pytest.fixture
def usecase(storage):
    return UploadUseCase(
        storage,
        image_types=["image/png", "image/jpeg"],
        video_types=["video/mp4"],
        max_image_size=1024 * 1024,
        max_video_size=2 * 1024 * 1024,
        max_batch=2,
    )


class TestUploadUseCase:
    @pytest.mark.asyncio
    async def test_upload_image(self, usecase, storage):
        result = await usecase.upload_image(PNG, "avatars")

        assert result["publicId"] == "images/1-abc"
        storage.save_file.assert_awaited_once_with(b"\x89PNG data", "photo.png", "avatars", "image/png")

    @pytest.mark.asyncio
    async def test_upload_image_wrong_type(self, usecase):
        with pytest.raises(ValidationError, match="Invalid image type"):
            await usecase.upload_image(("clip.mp4", "video/mp4", b"data"))

    @pytest.mark.asyncio
    async def test_upload_image_too_large(self, usecase):
        with pytest.raises(ValidationError, match=r"Image is too large \(max 1MB\)"):
            await usecase.upload_image(("big.png", "image/png", b"x" * (1024 * 1024 + 1)))

    @pytest.mark.asyncio
    async def test_upload_empty_video(self, usecase):
        with pytest.raises(ValidationError, match="Empty video file"):
            await usecase.upload_video(("clip.mp4", "video/mp4", b""))

    @pytest.mark.asyncio
    async def test_upload_rejects_folder_traversal(self, usecase, storage):
        with pytest.raises(ValidationError, match="Invalid folder"):
            await usecase.upload_image(PNG, "../etc")
        storage.save_file.assert_not_called()

    @pytest.mark.asyncio
    async def test_upload_images_limits(self, usecase):
        with pytest.raises(ValidationError, match="No files uploaded"):
            await usecase.upload_images([])
        with pytest.raises(ValidationError, match=r"Too many files \(max 2\)"):
            await usecase.upload_images([PNG, PNG, PNG])

    @pytest.mark.asyncio
    async def test_upload_images_validates_all_before_saving(self, usecase, storage):
        with pytest.raises(ValidationError):
            await usecase.upload_images([PNG, ("doc.pdf", "application/pdf", b"%PDF")])
        storage.save_file.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_file_not_found(self, usecase, storage):
        storage.delete_file.return_value = False

        with pytest.raises(NotFoundError, match="File not found"):
            await usecase.delete_file("images/missing")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("public_id", ["../secret", "images/../../x", "", "bad id"])
    async def test_invalid_public_ids(self, usecase, public_id):
        with pytest.raises(ValidationError, match="Invalid public ID"):
            await usecase.file_exists(public_id)

    @pytest.mark.asyncio
    async def test_delete_files_reports_missing(self, usecase, storage):
        storage.delete_file.side_effect = [True, False]

        result = await usecase.delete_files(["images/a", "images/b"])

        assert result == {"deleted": ["images/a"], "notFound": ["images/b"]}

    @pytest.mark.asyncio
    async def test_delete_files_requires_ids(self, usecase):
        with pytest.raises(ValidationError, match="publicIds must be a non-empty array"):
            await usecase.delete_files([])

    @pytest.mark.asyncio
    async def test_get_file_info_missing(self, usecase, storage):
        storage.get_file_info.return_value = None

        with pytest.raises(NotFoundError):
            await usecase.get_file_info("images/gone")
