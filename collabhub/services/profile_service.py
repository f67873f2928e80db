# collabhub/services/profile_service.py
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, UploadFile, status
from collabhub.core.storage import AVATAR_BUCKET, LocalObjectStorage, save_image_upload
from collabhub.models.profile import Profile
from collabhub.models.user import User
from collabhub.repositories.profile_repo import ProfileRepository
from collabhub.schemas.profile_schema import ProfileUpdate

class ProfileService:
    def __init__(self, db: AsyncSession):
        self.repo = ProfileRepository(db)

    async def get_my_profile(self, user: User) -> Profile:
        profile = await self.repo.get_profile_by_id(user.id)
        if not profile:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Profile 不存在")
        return profile

    async def update_my_profile(self, user: User, update_data: ProfileUpdate) -> Profile:
        """
        業務邏輯：更新自己的 Profile (技能整組覆蓋)
        """
        profile = await self.get_my_profile(user)
        return await self.repo.update_profile(profile, update_data)

    async def get_profile(self, profile_id: str) -> Profile:
        """獲取指定 ID 的 Profile (公開用)"""
        profile = await self.repo.get_profile_by_id(profile_id)
        if not profile:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Profile 不存在")
        return profile

    async def upload_avatar(
        self, user: User, file: UploadFile, storage: LocalObjectStorage
    ) -> Profile:
        """上傳頭像，存放在 avatars/{user_id}/ 底下，並更新 avatar_url"""
        profile = await self.get_my_profile(user)
        avatar_url = await save_image_upload(storage, AVATAR_BUCKET, user.id, file)
        return await self.repo.set_avatar_url(profile, avatar_url)
