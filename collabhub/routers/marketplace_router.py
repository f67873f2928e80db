# collabhub/routers/marketplace_router.py
from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from collabhub.core.database import get_db
from collabhub.core.security import get_current_user
from collabhub.core.storage import LocalObjectStorage, get_storage
from collabhub.models.marketplace_item import ITEM_CATEGORIES, ItemCondition
from collabhub.models.user import User
from collabhub.services.marketplace_service import MarketplaceService
from collabhub.schemas.marketplace_schema import (
    MarketplaceItemCreate, MarketplaceItemOut, MarkSoldRequest, UploadedImagesOut
)

router = APIRouter(
    prefix="/marketplace",
    tags=["Marketplace"],
    dependencies=[Depends(get_current_user)]
)

@router.get("/categories")
async def list_categories():
    """商品分類與物況選項 (前端下拉選單用)"""
    return {
        "categories": ITEM_CATEGORIES,
        "conditions": [c.value for c in ItemCondition]
    }

@router.get("/items", response_model=List[MarketplaceItemOut])
async def list_items(
    search: Optional[str] = None,
    category: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
):
    """
    販售中的商品 (新 -> 舊)，附賣家摘要
    """
    service = MarketplaceService(db)
    return await service.list_items(search=search, category=category)

@router.get("/items/my", response_model=List[MarketplaceItemOut])
async def list_my_items(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    service = MarketplaceService(db)
    return await service.list_my_items(current_user)

@router.get("/items/{item_id}", response_model=MarketplaceItemOut)
async def get_item(
    item_id: str,
    db: AsyncSession = Depends(get_db)
):
    service = MarketplaceService(db)
    return await service.get_item(item_id)

@router.post("/items", response_model=MarketplaceItemOut, status_code=status.HTTP_201_CREATED)
async def create_item(
    item_data: MarketplaceItemCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    刊登商品。圖片請先透過 POST /marketplace/images 上傳，再把 URL 放進 images。
    """
    service = MarketplaceService(db)
    return await service.create_item(item_data, current_user)

@router.patch("/items/{item_id}/sold", response_model=MarketplaceItemOut)
async def mark_item_sold(
    item_id: str,
    sold_data: Optional[MarkSoldRequest] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    (賣家) 標記商品已售出
    """
    service = MarketplaceService(db)
    return await service.mark_sold(
        item_id,
        current_user,
        buyer_id=sold_data.buyer_id if sold_data else None
    )

@router.post("/images", response_model=UploadedImagesOut, status_code=status.HTTP_201_CREATED)
async def upload_images(
    files: List[UploadFile] = File(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: LocalObjectStorage = Depends(get_storage)
):
    """
    上傳商品圖片 (multipart，欄位名稱 files，可多檔)
    """
    service = MarketplaceService(db)
    urls = await service.upload_images(current_user, files, storage)
    return {"urls": urls}

@router.delete("/images", status_code=status.HTTP_204_NO_CONTENT)
async def delete_image(
    path: str = Query(..., description="圖片路徑或公開 URL"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: LocalObjectStorage = Depends(get_storage)
):
    service = MarketplaceService(db)
    service.delete_image(current_user, path, storage)
    return
