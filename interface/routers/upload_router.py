from typing import List

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from core.entities import UserEntity
from core.usecase import UploadUseCase
from interface.di import get_current_user, get_upload_usecase
from interface.schemas import DeleteFilesRequest, success_response

upload_router = APIRouter(
    prefix="/upload",
    tags=["upload"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "Invalid file"},
        status.HTTP_401_UNAUTHORIZED: {"description": "Authentication failed"},
    },
)


async def read_upload(file: UploadFile):
    content = await file.read()
    return file.filename or "", file.content_type or "", content


@upload_router.post("/image", status_code=status.HTTP_201_CREATED)
async def upload_image(
    file: UploadFile = File(...),
    folder: str = Form(default="images"),
    user: UserEntity = Depends(get_current_user),
    upload_usecase: UploadUseCase = Depends(get_upload_usecase),
):
    result = await upload_usecase.upload_image(await read_upload(file), folder)
    return success_response(result, "Image uploaded successfully", status.HTTP_201_CREATED)


@upload_router.post("/video", status_code=status.HTTP_201_CREATED)
async def upload_video(
    file: UploadFile = File(...),
    folder: str = Form(default="videos"),
    user: UserEntity = Depends(get_current_user),
    upload_usecase: UploadUseCase = Depends(get_upload_usecase),
):
    result = await upload_usecase.upload_video(await read_upload(file), folder)
    return success_response(result, "Video uploaded successfully", status.HTTP_201_CREATED)


@upload_router.post("/images", status_code=status.HTTP_201_CREATED)
async def upload_images(
    files: List[UploadFile] = File(...),
    folder: str = Form(default="images"),
    user: UserEntity = Depends(get_current_user),
    upload_usecase: UploadUseCase = Depends(get_upload_usecase),
):
    uploads = [await read_upload(file) for file in files]
    results = await upload_usecase.upload_images(uploads, folder)
    return success_response(
        results, f"{len(results)} images uploaded successfully", status.HTTP_201_CREATED
    )


@upload_router.delete("/batch")
async def delete_files(
    body: DeleteFilesRequest,
    user: UserEntity = Depends(get_current_user),
    upload_usecase: UploadUseCase = Depends(get_upload_usecase),
):
    result = await upload_usecase.delete_files(body.public_ids)
    return success_response(result, "Batch delete completed")


@upload_router.get("/info/{public_id:path}")
async def get_file_info(
    public_id: str,
    user: UserEntity = Depends(get_current_user),
    upload_usecase: UploadUseCase = Depends(get_upload_usecase),
):
    info = await upload_usecase.get_file_info(public_id)
    return success_response(info, "File info retrieved successfully")


@upload_router.get("/exists/{public_id:path}")
async def file_exists(
    public_id: str,
    user: UserEntity = Depends(get_current_user),
    upload_usecase: UploadUseCase = Depends(get_upload_usecase),
):
    exists = await upload_usecase.file_exists(public_id)
    return success_response({"exists": exists}, "File existence checked")


@upload_router.delete("/{public_id:path}")
async def delete_file(
    public_id: str,
    user: UserEntity = Depends(get_current_user),
    upload_usecase: UploadUseCase = Depends(get_upload_usecase),
):
    await upload_usecase.delete_file(public_id)
    return success_response(None, "File deleted successfully")
