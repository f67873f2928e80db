# collabhub/repositories/marketplace_repo.py
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from fastapi import HTTPException

from collabhub.models.marketplace_item import ItemStatus, MarketplaceItem
from collabhub.schemas.marketplace_schema import MarketplaceItemCreate


class MarketplaceRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_item(self, item_data: MarketplaceItemCreate, seller_id: str) -> MarketplaceItem:
        db_item = MarketplaceItem(
            **item_data.model_dump(),
            seller_id=seller_id,
            status=ItemStatus.available
        )
        self.db.add(db_item)
        await self.db.commit()

        complete_item = await self.get_item_by_id(db_item.id)
        if complete_item is None:
            raise HTTPException(status_code=500, detail="剛建立的商品找不到")
        return complete_item

    async def get_item_by_id(self, item_id: str) -> MarketplaceItem | None:
        stmt = (
            select(MarketplaceItem)
            .where(MarketplaceItem.id == item_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_available_items(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None
    ) -> List[MarketplaceItem]:
        """列出販售中的商品 (新 -> 舊)"""
        stmt = select(MarketplaceItem).where(MarketplaceItem.status == ItemStatus.available)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(MarketplaceItem.title.ilike(pattern), MarketplaceItem.description.ilike(pattern))
            )
        if category:
            stmt = stmt.where(MarketplaceItem.category == category)
        stmt = stmt.order_by(MarketplaceItem.created_at.desc())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def list_items_by_seller(self, seller_id: str) -> List[MarketplaceItem]:
        stmt = (
            select(MarketplaceItem)
            .where(MarketplaceItem.seller_id == seller_id)
            .order_by(MarketplaceItem.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def save_item(self, item: MarketplaceItem) -> MarketplaceItem:
        await self.db.commit()
        refreshed_item = await self.get_item_by_id(item.id)
        if refreshed_item is None:
            raise HTTPException(status_code=500, detail="Failed to re-fetch item after update")
        return refreshed_item
