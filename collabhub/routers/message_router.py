# collabhub/routers/message_router.py

from fastapi import APIRouter, Depends, status, WebSocket, WebSocketDisconnect, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from collabhub.core.database import get_db
from collabhub.core.security import get_current_user, get_current_user_from_websocket_token
from collabhub.core.websocket_manager import manager
from collabhub.services.message_service import MessageService
from collabhub.schemas.message_schema import ConversationOut, MessageIn, MessageOut
from collabhub.models.user import User
from typing import List
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messages", tags=["Messaging"])

# --- RESTful API ---

@router.get("/conversations", response_model=List[ConversationOut], summary="獲取使用者的對話列表")
async def list_conversations(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    使用者身為雇主或工作者、且已指派工作者的案件，每個案件即一個對話。
    """
    service = MessageService(db)
    return await service.get_conversations(user)

@router.get("/{project_id}", response_model=List[MessageOut], summary="獲取案件的歷史訊息")
async def get_history_messages(
    project_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    依時間 (舊 -> 新) 回傳訊息，只有雇主與已指派的工作者可以查看。
    """
    service = MessageService(db)
    return await service.get_project_messages(project_id, user)

@router.post(
    "/{project_id}",
    response_model=MessageOut,
    status_code=status.HTTP_201_CREATED,
    summary="傳送訊息"
)
async def send_message(
    project_id: str,
    message_in: MessageIn,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    儲存訊息，並即時推送給此案件所有 WebSocket 連線。
    """
    service = MessageService(db)
    return await service.send_message(project_id, user, message_in)


# --- WebSocket Endpoint ---

@router.websocket("/ws/{project_id}")
async def websocket_endpoint(
    websocket: WebSocket,
    project_id: str,
    # 前端連線 URL 必須是: /messages/ws/{project_id}?token=...
    user: User = Depends(get_current_user_from_websocket_token),
    db: AsyncSession = Depends(get_db)
):
    """
    WebSocket 即時通訊端點。
    - 傳入: {"content": "..."}
    - 推送: MessageOut JSON (新訊息本身)
    """
    service = MessageService(db)

    # 1. 驗證連線權限
    try:
        await service.get_project_for_party(project_id, user)
    except HTTPException as e:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=str(e.detail))
        return

    # 2. 建立連線
    await manager.connect(project_id, user.id, websocket)

    try:
        while True:
            # 接收前端訊息 (JSON 字串)
            data = await websocket.receive_text()

            # 3. 處理訊息：儲存到 DB 並廣播
            try:
                await service.handle_websocket_message(project_id, user, data)
            except (ValueError, HTTPException) as e:
                # 如果驗證或儲存失敗，只通知傳送者
                detail = e.detail if isinstance(e, HTTPException) else str(e)
                logger.error(f"Error handling message in project {project_id}: {detail}")
                await websocket.send_json({"type": "error", "content": detail})

    except WebSocketDisconnect:
        # 4. 斷開連線
        manager.disconnect(project_id, user.id, websocket)
    except Exception as e:
        # 處理意外錯誤
        logger.error(f"Unexpected error in WS {project_id} for user {user.id}: {e}", exc_info=True)
        manager.disconnect(project_id, user.id, websocket)
