# collabhub/routers/profile_router.py
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from collabhub.core.database import get_db
from collabhub.core.security import get_current_user
from collabhub.core.storage import LocalObjectStorage, get_storage
from collabhub.models.user import User
from collabhub.services.profile_service import ProfileService
from collabhub.schemas.profile_schema import ProfileOut, ProfileUpdate

router = APIRouter(
    prefix="/profiles",
    tags=["Profiles"],
    dependencies=[Depends(get_current_user)]
)

@router.get("/me", response_model=ProfileOut)
async def get_my_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    獲取當前登入者的 Profile (註冊時已自動建立)
    """
    service = ProfileService(db)
    return await service.get_my_profile(current_user)

@router.put("/me", response_model=ProfileOut)
async def update_my_profile(
    update_data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    更新當前登入者的 Profile (只更新有傳入的欄位，skills 會整組覆蓋)
    """
    service = ProfileService(db)
    return await service.update_my_profile(current_user, update_data)

@router.post("/me/avatar", response_model=ProfileOut)
async def upload_my_avatar(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: LocalObjectStorage = Depends(get_storage)
):
    """
    上傳頭像 (限圖片，大小上限見 MAX_IMAGE_SIZE_MB)
    """
    service = ProfileService(db)
    return await service.upload_avatar(current_user, file, storage)

@router.get("/{profile_id}", response_model=ProfileOut)
async def get_profile(
    profile_id: str,
    db: AsyncSession = Depends(get_db)
):
    service = ProfileService(db)
    return await service.get_profile(profile_id)
