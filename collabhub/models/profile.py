# collabhub/models/profile.py
from datetime import datetime, timezone
from sqlalchemy import Column, String, TEXT, ForeignKey, JSON, DECIMAL, CHAR, Boolean, Integer, DateTime
from sqlalchemy.orm import relationship
from collabhub.core.database import Base

class Profile(Base):
    __tablename__ = "profiles"

    # 主鍵即帳號 ID (一個帳號只有一份 Profile)
    id = Column(CHAR(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    username = Column(String(100))
    full_name = Column(String(100))
    bio = Column(TEXT)
    location = Column(String(255))
    hourly_rate = Column(DECIMAL(10, 2), nullable=True)
    # 技能為字串集合，以去重後的 JSON 陣列儲存
    skills = Column(JSON, default=list, nullable=False)
    avatar_url = Column(String(500))

    # 學生相關 (選填)
    is_student = Column(Boolean, default=False, nullable=False)
    student_id = Column(String(100))
    institution = Column(String(255))
    graduation_year = Column(Integer)
    major = Column(String(255))

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    # 呼應 user.py 中的 'profile'
    user = relationship("User", back_populates="profile")
