from typing import Any, Dict, Generic, Optional, TypeVar

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from core.entities import UserEntity

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope shared by every endpoint."""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[str] = None
    pagination: Optional[Dict[str, Any]] = None


def serialize(value: Any) -> Any:
    """Dump entities with camelCase keys; users never expose credentials."""
    if isinstance(value, UserEntity):
        return value.to_public()
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, mode="json")
    if isinstance(value, dict):
        return {key: serialize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize(item) for item in value]
    return value


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
    pagination: Optional[Any] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"success": True, "data": serialize(data), "message": message}
    if pagination is not None:
        content["pagination"] = serialize(pagination)
    return JSONResponse(content=jsonable_encoder(content), status_code=status_code)


def error_response(message: str, status_code: int, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(
        content={"success": False, "data": None, "error": message},
        status_code=status_code,
        headers=headers,
    )
