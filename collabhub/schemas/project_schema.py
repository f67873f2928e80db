# collabhub/schemas/project_schema.py
from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import List, Optional
from datetime import date, datetime
from collabhub.schemas.profile_schema import ProfileSummaryOut, SkillList
from collabhub.utils.lifecycle import LifecycleAction, ProjectStatus


def _check_budget_range(budget_min: Optional[float], budget_max: Optional[float]) -> None:
    if budget_min is not None and budget_max is not None and budget_min > budget_max:
        raise ValueError("budget_min 不可大於 budget_max")

# 1. 基礎欄位 (對應 Model)
class ProjectBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: Optional[str] = Field(None, max_length=100)
    budget_min: Optional[float] = Field(None, ge=0)
    budget_max: Optional[float] = Field(None, ge=0)
    deadline: Optional[date] = None
    skills_required: SkillList = []

# 2. 雇主刊登案件時的 Request Body (Input)
class ProjectCreate(ProjectBase):
    @model_validator(mode="after")
    def check_budget(self):
        _check_budget_range(self.budget_min, self.budget_max)
        return self

# 3. 雇主更新案件時的 Request Body (Input，所有欄位皆可選)
class ProjectUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, max_length=100)
    budget_min: Optional[float] = Field(None, ge=0)
    budget_max: Optional[float] = Field(None, ge=0)
    deadline: Optional[date] = None
    skills_required: Optional[SkillList] = None

    @model_validator(mode="after")
    def check_budget(self):
        _check_budget_range(self.budget_min, self.budget_max)
        return self

# 4. 狀態更新 (Input)，Service 會用轉移表驗證
class ProjectStatusUpdate(BaseModel):
    status: ProjectStatus
    note: Optional[str] = None

# 5. 執行生命週期動作 (Input)，只有 request_revision 需要 note
class ProjectActionRequest(BaseModel):
    note: Optional[str] = None

# 6. 回傳給前端的案件資料 (Output)
class ProjectOut(ProjectBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    status: ProjectStatus
    review_note: Optional[str] = None
    client_id: str
    freelancer_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # 巢狀回傳雙方的 Profile 摘要
    client: Optional[ProfileSummaryOut] = None
    freelancer: Optional[ProfileSummaryOut] = None

# 7. 「我的案件」列表，多帶申請數量
class ProjectWithApplicationCountOut(ProjectOut):
    application_count: int = 0

# 8. 申請列表中的案件摘要 (工作者檢視「我的申請」用)
class ProjectSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    category: Optional[str] = None
    status: ProjectStatus
    budget_min: Optional[float] = None
    budget_max: Optional[float] = None
    deadline: Optional[date] = None
    client_id: str

# 9. 目前登入者在此案件上可以執行的動作
class ProjectActionsOut(BaseModel):
    project_id: str
    status: ProjectStatus
    viewer_role: str
    actions: List[LifecycleAction]

# 10. 推薦系統使用的回應格式
class ProjectRecommendationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    project: ProjectOut
    recommendation_score: float = Field(..., description="推薦匹配分數")

class PaginatedProjectRecommendationOut(BaseModel):
    items: List[ProjectRecommendationOut]
    total: int = Field(..., description="Total number of matched candidates")
