from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings


class UploadSettings(BaseSettings):
    """Configuration settings for local file uploads."""

    directory: str = Field(default="uploads", description="Root directory for stored files")
    max_image_size: int = Field(default=5 * 1024 * 1024, description="Max image size in bytes")
    max_video_size: int = Field(
        default=100 * 1024 * 1024, description="Max video size in bytes"
    )
    max_batch: int = Field(default=10, description="Max files per multi-upload")
    image_types: List[str] = Field(
        default=["image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif"],
        description="Accepted image MIME types",
    )
    video_types: List[str] = Field(
        default=["video/mp4", "video/quicktime", "video/webm"],
        description="Accepted video MIME types",
    )

    class Config:
        env_prefix = "UPLOAD_"
        case_sensitive = False
        validate_assignment = True
        extra = "ignore"
        env_file = ".env"
        env_file_encoding = "utf-8"
