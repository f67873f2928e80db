# collabhub/schemas/message_schema.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime

from collabhub.schemas.profile_schema import ProfileSummaryOut
from collabhub.utils.lifecycle import ProjectStatus

class MessageIn(BaseModel):
    """
    REST 與 WebSocket 傳入的訊息格式
    """
    content: str = Field(..., description="訊息內容")

    @field_validator('content')
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('訊息內容不可為空')
        return v

class MessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    sender_id: str
    content: str
    created_at: Optional[datetime] = None
    # 為了顯示寄件者名稱
    sender: Optional[ProfileSummaryOut] = None

class ConversationOut(BaseModel):
    """
    訊息頁左側的案件列表：每個已指派的案件就是一個對話
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    status: ProjectStatus
    client_id: str
    freelancer_id: str
    client: Optional[ProfileSummaryOut] = None
    freelancer: Optional[ProfileSummaryOut] = None
