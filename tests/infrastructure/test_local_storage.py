import pytest

from core.exceptions import ValidationError
from infrastructure.storage import LocalFileStorage


class TestLocalFileStorage:
    @pytest.fixture
    def storage(self, tmp_path):
        return LocalFileStorage(str(tmp_path / "uploads"), base_url="/uploads")

    @pytest.mark.asyncio
    async def test_save_file(self, storage, tmp_path):
        result = await storage.save_file(b"image-bytes", "Photo.PNG", "avatars", "image/png")

        folder, stem = result["publicId"].split("/")
        assert folder == "avatars"
        assert result["url"] == f"/uploads/avatars/{stem}.png"
        assert result["bytes"] == len(b"image-bytes")
        assert result["format"] == "png"
        assert (tmp_path / "uploads" / "avatars" / f"{stem}.png").read_bytes() == b"image-bytes"

    @pytest.mark.asyncio
    async def test_extension_from_content_type(self, storage):
        result = await storage.save_file(b"data", "blob", "images", "image/png")

        assert result["format"] == "png"

    @pytest.mark.asyncio
    async def test_info_exists_and_delete(self, storage):
        saved = await storage.save_file(b"data", "clip.mp4", "videos", "video/mp4")
        public_id = saved["publicId"]

        assert await storage.file_exists(public_id) is True
        info = await storage.get_file_info(public_id)
        assert info["publicId"] == public_id
        assert info["format"] == "mp4"

        assert await storage.delete_file(public_id) is True
        assert await storage.file_exists(public_id) is False
        assert await storage.delete_file(public_id) is False
        assert await storage.get_file_info(public_id) is None

    @pytest.mark.asyncio
    async def test_missing_folder(self, storage):
        assert await storage.file_exists("nowhere/file") is False

    @pytest.mark.asyncio
    async def test_rejects_path_traversal(self, storage):
        with pytest.raises(ValidationError, match="Invalid public ID"):
            await storage.file_exists("../../etc/passwd")
        with pytest.raises(ValidationError):
            await storage.save_file(b"data", "a.png", "../outside", "image/png")
