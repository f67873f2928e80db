# collabhub/services/message_service.py

from fastapi import HTTPException, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import logging
import json

# 匯入 Schemas
from collabhub.schemas.message_schema import MessageIn, MessageOut

# 匯入 Repositories
from collabhub.repositories.message_repo import MessageRepository
from collabhub.repositories.project_repo import ProjectRepository

from collabhub.core.websocket_manager import manager
from collabhub.models.user import User
from collabhub.models.project import Project
from collabhub.utils.lifecycle import ASSIGNED_STATUSES

logger = logging.getLogger(__name__)


class MessageService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.message_repo = MessageRepository(db)
        self.project_repo = ProjectRepository(db)

    async def get_conversations(self, user: User) -> List[Project]:
        """
        訊息頁的對話列表：使用者參與、且已指派工作者的案件
        """
        return await self.project_repo.list_conversations(user.id)

    async def get_project_for_party(self, project_id: str, user: User) -> Project:
        """
        檢查使用者是否為案件的雇主或已指派的工作者 (REST 與 WS 共用)
        """
        project = await self.project_repo.get_project_by_id(project_id)
        if not project:
            raise HTTPException(status.HTTP_404_NOT_FOUND, detail="案件不存在")
        if user.id not in (project.client_id, project.freelancer_id):
            raise HTTPException(status.HTTP_403_FORBIDDEN, detail="無權限查看此案件的訊息")
        return project

    async def get_project_messages(self, project_id: str, user: User) -> List[MessageOut]:
        """
        獲取歷史訊息 (舊 -> 新)
        """
        await self.get_project_for_party(project_id, user)
        messages = await self.message_repo.get_messages_by_project_id(project_id)
        return [MessageOut.model_validate(msg) for msg in messages]

    async def send_message(self, project_id: str, sender: User, message_in: MessageIn) -> MessageOut:
        """
        儲存新訊息，並廣播給此案件的所有 WebSocket 連線
        """
        project = await self.get_project_for_party(project_id, sender)
        if project.freelancer_id is None or project.status not in ASSIGNED_STATUSES:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, detail="案件尚未指派工作者，無法傳送訊息")

        new_message = await self.message_repo.save_message(
            project_id=project_id,
            sender_id=sender.id,
            content=message_in.content
        )
        message_out = MessageOut.model_validate(new_message)

        # 廣播新訊息本身，訂閱者不需要重新抓整個歷史紀錄
        await manager.broadcast_message(project_id, message_out.model_dump_json())
        return message_out

    async def handle_websocket_message(
        self,
        project_id: str,
        sender: User,
        message_data: str
    ) -> MessageOut:
        """
        處理 WebSocket 接收到的訊息 (JSON 字串 {"content": ...})：驗證、儲存、廣播
        """
        try:
            message_in = MessageIn(**json.loads(message_data))
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.warning(f"Invalid websocket payload in project {project_id} from {sender.id}: {e}")
            raise ValueError("訊息格式錯誤，需為 {\"content\": \"...\"}")

        return await self.send_message(project_id, sender, message_in)
