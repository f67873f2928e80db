# collabhub/schemas/marketplace_schema.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Optional
from datetime import datetime

from collabhub.core.config import settings
from collabhub.models.marketplace_item import ITEM_CATEGORIES, ItemCondition, ItemStatus
from collabhub.schemas.profile_schema import ProfileSummaryOut

class MarketplaceItemCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: float = Field(..., ge=0)
    category: str
    condition: ItemCondition
    location: Optional[str] = Field(None, max_length=255)
    # 先透過 POST /marketplace/images 上傳，取得 URL 後放在這裡
    images: List[str] = []

    @field_validator('category')
    @classmethod
    def validate_category(cls, v: str) -> str:
        if v not in ITEM_CATEGORIES:
            raise ValueError(f'無效的分類，可用分類: {", ".join(ITEM_CATEGORIES)}')
        return v

    @field_validator('images')
    @classmethod
    def validate_images(cls, v: List[str]) -> List[str]:
        if len(v) > settings.MAX_UPLOAD_IMAGES:
            raise ValueError(f'最多只能有 {settings.MAX_UPLOAD_IMAGES} 張圖片')
        return v

class MarkSoldRequest(BaseModel):
    buyer_id: Optional[str] = None

class MarketplaceItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    seller_id: str
    title: str
    description: Optional[str] = None
    price: float
    category: str
    condition: ItemCondition
    location: Optional[str] = None
    images: List[str] = []
    status: ItemStatus
    buyer_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    seller: Optional[ProfileSummaryOut] = None

class UploadedImagesOut(BaseModel):
    urls: List[str]
