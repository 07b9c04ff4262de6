import logging
import re
from typing import Any, Dict, List, Tuple

from core.exceptions import NotFoundError, ValidationError
from core.interface import FileStorageInterface

PUBLIC_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+(/[A-Za-z0-9_.-]+)*$")

# (filename, content_type, content)
UploadedFile = Tuple[str, str, bytes]


class UploadUseCase:
    """
    Validates uploaded media and manages it in file storage.
    """

    def __init__(
        self,
        storage: FileStorageInterface,
        image_types: List[str],
        video_types: List[str],
        max_image_size: int,
        max_video_size: int,
        max_batch: int = 10,
    ):
        self.storage = storage
        self.image_types = image_types
        self.video_types = video_types
        self.max_image_size = max_image_size
        self.max_video_size = max_video_size
        self.max_batch = max_batch
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def check_public_id(public_id: str) -> str:
        if not public_id or ".." in public_id or not PUBLIC_ID_PATTERN.match(public_id):
            raise ValidationError("Invalid public ID")
        return public_id

    @staticmethod
    def check_folder(folder: str) -> str:
        if not folder or ".." in folder or not PUBLIC_ID_PATTERN.match(folder):
            raise ValidationError("Invalid folder")
        return folder

    @staticmethod
    def _validate(file: UploadedFile, allowed: List[str], max_size: int, kind: str) -> None:
        _, content_type, content = file
        if content_type not in allowed:
            raise ValidationError(f"Invalid {kind} type. Allowed types: {', '.join(allowed)}")
        if len(content) > max_size:
            raise ValidationError(
                f"{kind.capitalize()} is too large (max {max_size // (1024 * 1024)}MB)"
            )
        if not content:
            raise ValidationError(f"Empty {kind} file")

    async def upload_image(self, file: UploadedFile, folder: str = "images") -> Dict[str, Any]:
        self.check_folder(folder)
        self._validate(file, self.image_types, self.max_image_size, "image")
        filename, content_type, content = file
        return await self.storage.save_file(content, filename, folder, content_type)

    async def upload_video(self, file: UploadedFile, folder: str = "videos") -> Dict[str, Any]:
        self.check_folder(folder)
        self._validate(file, self.video_types, self.max_video_size, "video")
        filename, content_type, content = file
        return await self.storage.save_file(content, filename, folder, content_type)

    async def upload_images(
        self, files: List[UploadedFile], folder: str = "images"
    ) -> List[Dict[str, Any]]:
        if not files:
            raise ValidationError("No files uploaded")
        if len(files) > self.max_batch:
            raise ValidationError(f"Too many files (max {self.max_batch})")
        for file in files:
            self._validate(file, self.image_types, self.max_image_size, "image")
        return [await self.upload_image(file, folder) for file in files]

    async def delete_file(self, public_id: str) -> None:
        if not await self.storage.delete_file(self.check_public_id(public_id)):
            raise NotFoundError("File not found")
        self.logger.info(f"Deleted file {public_id}")

    async def delete_files(self, public_ids: List[str]) -> Dict[str, List[str]]:
        if not public_ids:
            raise ValidationError("publicIds must be a non-empty array")
        deleted, not_found = [], []
        for public_id in public_ids:
            if await self.storage.delete_file(self.check_public_id(public_id)):
                deleted.append(public_id)
            else:
                not_found.append(public_id)
        return {"deleted": deleted, "notFound": not_found}

    async def get_file_info(self, public_id: str) -> Dict[str, Any]:
        info = await self.storage.get_file_info(self.check_public_id(public_id))
        if not info:
            raise NotFoundError("File not found")
        return info

    async def file_exists(self, public_id: str) -> bool:
        return await self.storage.file_exists(self.check_public_id(public_id))
