# collabhub/models/message.py
# 案件內的一對一訊息 (雇主 <-> 已指派的工作者)，只新增不修改
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Text, ForeignKey, DateTime, CHAR
from sqlalchemy.orm import relationship
from collabhub.core.database import Base

class Message(Base):
    __tablename__ = "messages"

    id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    project_id = Column(CHAR(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    sender_id = Column(CHAR(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)

    project = relationship("Project", back_populates="messages")

    # 顯示寄件者名稱用
    sender = relationship("Profile", lazy="selectin")
