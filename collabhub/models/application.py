# collabhub/models/application.py
import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, ForeignKey, DECIMAL, DateTime, Enum, CHAR
from sqlalchemy.orm import relationship
from collabhub.core.database import Base

class ApplicationStatus(str, enum.Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"

class Application(Base):
    __tablename__ = "applications"

    id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    project_id = Column(CHAR(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    freelancer_id = Column(CHAR(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    proposal = Column(Text, nullable=False)
    bid_amount = Column(DECIMAL(10, 2), nullable=False)
    estimated_duration = Column(String(100))

    status = Column(
        Enum(ApplicationStatus, values_callable=lambda obj: [e.value for e in obj], name="application_status_enum"),
        default=ApplicationStatus.pending,
        nullable=False
    )

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    # --- 建立關聯 ---
    # 呼應 project.py 中的 "applications"
    project = relationship("Project", back_populates="applications")

    # 申請人的 Profile (雇主檢視申請列表時需要)
    freelancer = relationship("Profile", lazy="selectin")
