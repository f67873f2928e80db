# collabhub/services/auth_service.py
import logging
import uuid
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from collabhub.repositories.user_repo import UserRepository
from collabhub.core.security import verify_password, create_access_token, get_password_hash
from collabhub.models.user import User
from collabhub.models.profile import Profile
from collabhub.schemas.user_schema import UserCreate

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, db: AsyncSession):
        self.user_repo = UserRepository(db)

    async def authenticate_user(self, email: str, password: str) -> User | None:
        """
        驗證使用者帳號密碼。
        成功回傳 User 物件，失敗回傳 None。
        """
        user = await self.user_repo.get_user_by_email(email)

        # 1. 檢查使用者是否存在
        if not user:
            return None

        # 2. 檢查是否被停權
        if not user.is_active:
            return None

        # 3. 檢查密碼是否正確
        if not verify_password(plain_password=password, hashed_password=user.password_hash):
            return None

        return user

    async def register_user(self, user_create: UserCreate) -> User:
        """
        處理使用者註冊：建立帳號，同時建立一份空白 Profile (Profile.id == User.id)
        """
        # 1. 檢查 Email 是否已被註冊
        existing_user = await self.user_repo.get_user_by_email(user_create.email)
        if existing_user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="此 Email 已經被註冊",
            )

        # 2. 雜湊密碼
        hashed_password = get_password_hash(user_create.password)

        # 3. 建立 ORM 模型 (ID 先產生，Profile 才能共用)
        user_id = str(uuid.uuid4())
        new_user = User(
            id=user_id,
            email=user_create.email,
            password_hash=hashed_password
        )
        new_profile = Profile(
            id=user_id,
            full_name=user_create.full_name,
            skills=[]
        )

        # 4. 呼叫 Repository 儲存到資料庫
        created_user = await self.user_repo.create_user_with_profile(new_user, new_profile)
        logger.info(f"User registered: {created_user.id}")
        return created_user

    def create_login_token(self, user: User) -> str:
        """
        為指定使用者建立 access token
        """
        return create_access_token(
            data={
                "sub": user.email,
                "user_id": str(user.id)
            }
        )
