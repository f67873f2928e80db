# collabhub/models/project.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, TEXT, DECIMAL, Date, DateTime, ForeignKey, Enum, CHAR, JSON
from sqlalchemy.orm import relationship
from collabhub.core.database import Base
from collabhub.utils.lifecycle import ProjectStatus

class Project(Base):
    __tablename__ = "projects"

    id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    description = Column(TEXT, nullable=False)
    category = Column(String(100))
    budget_min = Column(DECIMAL(10, 2), nullable=True)
    budget_max = Column(DECIMAL(10, 2), nullable=True)
    deadline = Column(Date, nullable=True)
    skills_required = Column(JSON, default=list, nullable=False)
    status = Column(
        Enum(ProjectStatus, values_callable=lambda obj: [e.value for e in obj], name="project_status_enum"),
        default=ProjectStatus.open,
        nullable=False,
        index=True
    )
    # 雇主要求修改時留下的說明
    review_note = Column(TEXT, nullable=True)

    # --- 關聯 ---
    client_id = Column(CHAR(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    # 接受申請後才會有值
    freelancer_id = Column(CHAR(36), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    # 雇主 / 工作者的 Profile (ProjectOut 需要，預先載入)
    client = relationship(
        "Profile",
        foreign_keys=[client_id],
        lazy="selectin"
    )
    freelancer = relationship(
        "Profile",
        foreign_keys=[freelancer_id],
        lazy="selectin"
    )

    # 建立與 Application 的 '多' 關聯
    applications = relationship(
        "Application",
        back_populates="project",
        cascade="all, delete-orphan" # 刪除案件時，一併刪除關聯申請
    )

    messages = relationship(
        "Message",
        back_populates="project",
        cascade="all, delete-orphan"
    )
