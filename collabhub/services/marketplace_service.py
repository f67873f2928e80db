# collabhub/services/marketplace_service.py
import logging
from typing import List, Optional
from fastapi import HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from collabhub.core.config import settings
from collabhub.core.storage import MARKETPLACE_BUCKET, LocalObjectStorage, read_image_upload, store_image
from collabhub.models.marketplace_item import ItemStatus, MarketplaceItem
from collabhub.models.user import User
from collabhub.repositories.marketplace_repo import MarketplaceRepository
from collabhub.repositories.profile_repo import ProfileRepository
from collabhub.schemas.marketplace_schema import MarketplaceItemCreate

logger = logging.getLogger(__name__)


class MarketplaceService:
    def __init__(self, db: AsyncSession):
        self.repo = MarketplaceRepository(db)
        self.profile_repo = ProfileRepository(db)

    async def list_items(
        self, search: Optional[str] = None, category: Optional[str] = None
    ) -> List[MarketplaceItem]:
        return await self.repo.list_available_items(search=search, category=category)

    async def list_my_items(self, user: User) -> List[MarketplaceItem]:
        return await self.repo.list_items_by_seller(user.id)

    async def get_item(self, item_id: str) -> MarketplaceItem:
        item = await self.repo.get_item_by_id(item_id)
        if not item:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "商品不存在")
        return item

    async def create_item(self, item_data: MarketplaceItemCreate, user: User) -> MarketplaceItem:
        item = await self.repo.create_item(item_data, seller_id=user.id)
        logger.info(f"Marketplace item {item.id} listed by {user.id}")
        return item

    async def mark_sold(self, item_id: str, user: User, buyer_id: Optional[str] = None) -> MarketplaceItem:
        """
        (賣家) 標記為已售出，可選填買家
        """
        item = await self.get_item(item_id)
        if item.seller_id != user.id:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "只有賣家可以標記商品已售出")
        if item.status == ItemStatus.sold:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "商品已售出")

        if buyer_id is not None:
            if buyer_id == item.seller_id:
                raise HTTPException(status.HTTP_400_BAD_REQUEST, "買家不能是賣家本人")
            if await self.profile_repo.get_profile_by_id(buyer_id) is None:
                raise HTTPException(status.HTTP_404_NOT_FOUND, "買家不存在")

        item.status = ItemStatus.sold
        item.buyer_id = buyer_id
        return await self.repo.save_item(item)

    async def upload_images(
        self, user: User, files: List[UploadFile], storage: LocalObjectStorage
    ) -> List[str]:
        """
        上傳商品圖片 (最多 MAX_UPLOAD_IMAGES 張)，存放在 marketplace/{user_id}/ 底下
        """
        if not files:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "請至少上傳一張圖片")
        if len(files) > settings.MAX_UPLOAD_IMAGES:
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST,
                f"最多只能上傳 {settings.MAX_UPLOAD_IMAGES} 張圖片"
            )

        # 全部驗證通過後才寫入
        contents = [await read_image_upload(file) for file in files]

        urls = []
        for file, content in zip(files, contents):
            urls.append(
                await store_image(storage, MARKETPLACE_BUCKET, f"marketplace/{user.id}", file.filename, content)
            )
        return urls

    def delete_image(self, user: User, path: str, storage: LocalObjectStorage) -> None:
        """
        刪除自己上傳的圖片。path 可以是 bucket 內路徑或完整的公開 URL
        """
        prefix = f"{storage.url_prefix}/{MARKETPLACE_BUCKET}/"
        if path.startswith(prefix):
            path = path[len(prefix):]
        path = path.lstrip("/")

        if not path.startswith(f"marketplace/{user.id}/"):
            raise HTTPException(status.HTTP_403_FORBIDDEN, "只能刪除自己上傳的圖片")
        if not storage.delete(MARKETPLACE_BUCKET, path):
            raise HTTPException(status.HTTP_404_NOT_FOUND, "圖片不存在")
