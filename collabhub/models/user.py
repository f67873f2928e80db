# collabhub/models/user.py
# 帳號 (登入用)。對外可見的個人資料放在 Profile，Profile.id == User.id
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Boolean, CHAR, DateTime
from sqlalchemy.orm import relationship
from collabhub.core.database import Base

class User(Base):
    __tablename__ = "users"

    # 基本欄位
    id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # 1-to-1 關聯到 Profile (註冊時一併建立)
    profile = relationship(
        "Profile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan"
    )
