from fastapi import APIRouter, Depends, status

from core.entities import UserEntity
from core.usecase import AccountUseCase
from interface.di import get_account_usecase, get_current_user
from interface.schemas import success_response

account_router = APIRouter(
    prefix="/account",
    tags=["account"],
    responses={status.HTTP_401_UNAUTHORIZED: {"description": "Authentication failed"}},
)


@account_router.get("/profile")
async def get_account_profile(
    user: UserEntity = Depends(get_current_user),
    account_usecase: AccountUseCase = Depends(get_account_usecase),
):
    """
    Account status, health metrics and fitness profile of the current user.
    """
    summary = await account_usecase.get_profile_summary(user)
    return success_response(summary, "User stats retrieved successfully")
