# collabhub/repositories/message_repo.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from collabhub.models.message import Message

class MessageRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_messages_by_project_id(self, project_id: str) -> List[Message]:
        """依時間先後 (舊 -> 新) 列出案件內的訊息，sender 由 lazy="selectin" 載入"""
        stmt = (
            select(Message)
            .where(Message.project_id == project_id)
            .order_by(Message.created_at.asc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def save_message(self, project_id: str, sender_id: str, content: str) -> Message:
        new_message = Message(
            project_id=project_id,
            sender_id=sender_id,
            content=content
        )
        self.db.add(new_message)
        await self.db.commit()

        # 重新查詢，確保 sender 已載入
        stmt = select(Message).where(Message.id == new_message.id)
        result = await self.db.execute(stmt)
        return result.scalars().one()
