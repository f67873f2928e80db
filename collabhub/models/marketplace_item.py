# collabhub/models/marketplace_item.py
import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, TEXT, DECIMAL, DateTime, ForeignKey, Enum, CHAR, JSON
from sqlalchemy.orm import relationship
from collabhub.core.database import Base

class ItemStatus(str, enum.Enum):
    available = "available"
    sold = "sold"

class ItemCondition(str, enum.Enum):
    new = "new"
    like_new = "like_new"
    good = "good"
    fair = "fair"
    poor = "poor"

# 二手市集的商品分類
ITEM_CATEGORIES = [
    "Textbooks",
    "Electronics",
    "Furniture",
    "Clothing",
    "Sports Equipment",
    "School Supplies",
    "Dorm Items",
    "Transportation",
    "Other",
]

class MarketplaceItem(Base):
    __tablename__ = "marketplace_items"

    id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    seller_id = Column(CHAR(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(TEXT)
    price = Column(DECIMAL(10, 2), nullable=False)
    category = Column(String(100), nullable=False)
    condition = Column(
        Enum(ItemCondition, values_callable=lambda obj: [e.value for e in obj], name="item_condition_enum"),
        nullable=False
    )
    location = Column(String(255))
    # 圖片 URL，依上傳順序
    images = Column(JSON, default=list, nullable=False)
    status = Column(
        Enum(ItemStatus, values_callable=lambda obj: [e.value for e in obj], name="item_status_enum"),
        default=ItemStatus.available,
        nullable=False,
        index=True
    )
    buyer_id = Column(CHAR(36), ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    seller = relationship("Profile", foreign_keys=[seller_id], lazy="selectin")
