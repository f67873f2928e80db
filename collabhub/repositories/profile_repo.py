# collabhub/repositories/profile_repo.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from collabhub.models.profile import Profile
from collabhub.schemas.profile_schema import ProfileUpdate


class ProfileRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_profile_by_id(self, profile_id: str) -> Profile | None:
        stmt = select(Profile).where(Profile.id == profile_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def update_profile(self, profile: Profile, update_data: ProfileUpdate) -> Profile:
        """更新 Profile (只更新有傳入的欄位)"""

        # exclude_unset=True 只會包含 "有被傳入" 的欄位
        update_dict = update_data.model_dump(exclude_unset=True)

        for key, value in update_dict.items():
            if value is None and key in ("skills", "is_student"):
                continue
            setattr(profile, key, value)

        await self.db.commit()
        await self.db.refresh(profile)
        return profile

    async def set_avatar_url(self, profile: Profile, avatar_url: str) -> Profile:
        profile.avatar_url = avatar_url
        await self.db.commit()
        await self.db.refresh(profile)
        return profile
