# collabhub/schemas/profile_schema.py
from pydantic import BaseModel, Field, ConfigDict, AfterValidator
from typing import Annotated, List, Optional
from datetime import datetime


def dedupe_skills(skills: Optional[List[str]]) -> Optional[List[str]]:
    """技能是集合：去除空白與重複，保留第一次出現的順序"""
    if skills is None:
        return None
    return list(dict.fromkeys(s.strip() for s in skills if s and s.strip()))

# 個人技能、案件所需技能共用
SkillList = Annotated[List[str], AfterValidator(dedupe_skills)]


class ProfileBase(BaseModel):
    username: Optional[str] = Field(None, max_length=100)
    full_name: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = None
    location: Optional[str] = Field(None, max_length=255)
    hourly_rate: Optional[float] = Field(None, ge=0)
    skills: SkillList = []
    is_student: bool = False
    student_id: Optional[str] = Field(None, max_length=100)
    institution: Optional[str] = Field(None, max_length=255)
    graduation_year: Optional[int] = Field(None, ge=1900, le=2100)
    major: Optional[str] = Field(None, max_length=255)

# 更新 Profile 時的 Request Body (所有欄位皆可選)
class ProfileUpdate(BaseModel):
    username: Optional[str] = Field(None, max_length=100)
    full_name: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = None
    location: Optional[str] = Field(None, max_length=255)
    hourly_rate: Optional[float] = Field(None, ge=0)
    skills: Optional[SkillList] = None
    is_student: Optional[bool] = None
    student_id: Optional[str] = Field(None, max_length=100)
    institution: Optional[str] = Field(None, max_length=255)
    graduation_year: Optional[int] = Field(None, ge=1900, le=2100)
    major: Optional[str] = Field(None, max_length=255)

class ProfileOut(ProfileBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# 精簡版，用於在案件 / 申請 / 訊息 / 商品中顯示對方資訊
class ProfileSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    location: Optional[str] = None
    institution: Optional[str] = None

# 申請列表中顯示申請人 (雇主需要看技能、時薪、自介)
class ApplicantProfileOut(ProfileSummaryOut):
    bio: Optional[str] = None
    skills: List[str] = []
    hourly_rate: Optional[float] = None
