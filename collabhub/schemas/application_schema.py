# collabhub/schemas/application_schema.py
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Literal, Optional

from collabhub.models.application import ApplicationStatus
from collabhub.schemas.profile_schema import ApplicantProfileOut
from collabhub.schemas.project_schema import ProjectSummaryOut

# --- 建立 (Create) ---
# project_id 從 URL 取得，freelancer_id 從 Token 取得
class ApplicationCreate(BaseModel):
    proposal: str = Field(..., min_length=1)
    bid_amount: float = Field(..., gt=0)
    estimated_duration: Optional[str] = Field(None, max_length=100)

# --- 雇主接受 / 拒絕 ---
class ApplicationStatusUpdate(BaseModel):
    status: Literal["accepted", "rejected"]

# --- 讀取 (Read / Out) ---
class ApplicationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    freelancer_id: str
    proposal: str
    bid_amount: float
    estimated_duration: Optional[str] = None
    status: ApplicationStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# --- 雇主檢視列表用 (帶申請人 Profile) ---
class ApplicationOutWithFreelancer(ApplicationOut):
    freelancer: Optional[ApplicantProfileOut] = None

# --- 工作者檢視「我的申請」用 (帶案件摘要) ---
class ApplicationOutWithProject(ApplicationOut):
    project: Optional[ProjectSummaryOut] = None
