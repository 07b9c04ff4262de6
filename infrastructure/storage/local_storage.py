import mimetypes
import os
import secrets
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import aiofiles
import aiofiles.os

from utils.logging_config import setup_logger
from core.exceptions import ValidationError
from core.interface import FileStorageInterface


class LocalFileStorage(FileStorageInterface):
    """
    Stores uploads on the local filesystem under a root directory.

    A file's publicId is its path relative to the root without extension,
    e.g. ``images/1718000000000-1a2b3c4d``.
    """

    def __init__(self, root: str, base_url: str = "/uploads"):
        self.root = Path(root).resolve()
        self.base_url = base_url.rstrip("/")
        self.root.mkdir(parents=True, exist_ok=True)
        self.logger = setup_logger("infrastructure.storage", "storage.log")

    def _resolve(self, relative: str) -> Path:
        path = (self.root / relative).resolve()
        if path != self.root and self.root not in path.parents:
            raise ValidationError("Invalid public ID")
        return path

    def _find(self, public_id: str) -> Optional[Path]:
        base = self._resolve(public_id)
        if not base.parent.is_dir():
            return None
        for candidate in base.parent.glob(f"{base.name}.*"):
            if candidate.is_file():
                return candidate
        return None

    def _describe(self, path: Path, public_id: str) -> Dict[str, Any]:
        stat = path.stat()
        relative = path.relative_to(self.root).as_posix()
        return {
            "publicId": public_id,
            "url": f"{self.base_url}/{relative}",
            "bytes": stat.st_size,
            "format": path.suffix.lstrip(".").lower(),
            "createdAt": datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).isoformat(),
        }

    async def save_file(
        self, content: bytes, filename: str, folder: str, content_type: Optional[str] = None
    ) -> Dict[str, Any]:
        extension = Path(filename or "").suffix.lower()
        if not extension and content_type:
            extension = mimetypes.guess_extension(content_type) or ""

        stem = f"{int(datetime.now(timezone.utc).timestamp() * 1000)}-{secrets.token_hex(4)}"
        directory = self._resolve(folder)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{stem}{extension}"

        async with aiofiles.open(path, "wb") as f:
            await f.write(content)

        public_id = f"{directory.relative_to(self.root).as_posix()}/{stem}"
        self.logger.info(f"Stored {public_id} ({len(content)} bytes)")
        return self._describe(path, public_id)

    async def delete_file(self, public_id: str) -> bool:
        path = self._find(public_id)
        if not path:
            return False
        await aiofiles.os.remove(path)
        self.logger.info(f"Removed {public_id}")
        return True

    async def get_file_info(self, public_id: str) -> Optional[Dict[str, Any]]:
        path = self._find(public_id)
        return self._describe(path, public_id) if path else None

    async def file_exists(self, public_id: str) -> bool:
        return self._find(public_id) is not None
