# collabhub/core/websocket_manager.py
# 連線管理器：維護 'project_id' -> List[Tuple[user_id, WebSocket]] 的映射
from fastapi import WebSocket
from typing import Dict, List, Tuple
import logging

logger = logging.getLogger(__name__)

class ConnectionManager:
    """管理 WebSocket 連線：把新訊息廣播給同一個案件的所有連線。"""

    def __init__(self):
        # 結構: {project_id: [(user_id, WebSocket)]}
        self.active_connections: Dict[str, List[Tuple[str, WebSocket]]] = {}

    async def connect(self, project_id: str, user_id: str, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.setdefault(project_id, []).append((user_id, websocket))
        logger.info(f"User {user_id} connected to project {project_id}. Total connections: {len(self.active_connections[project_id])}")

    def disconnect(self, project_id: str, user_id: str, websocket: WebSocket):
        connections = self.active_connections.get(project_id)
        if not connections or (user_id, websocket) not in connections:
            return # 可能是重複斷開
        connections.remove((user_id, websocket))
        if not connections:
            del self.active_connections[project_id]
        logger.info(f"User {user_id} disconnected from project {project_id}.")

    async def broadcast_message(self, project_id: str, message_json: str):
        """將 JSON 字串訊息廣播給特定案件的所有連線。"""
        disconnected_clients = []
        for connection in list(self.active_connections.get(project_id, [])):
            user_id, ws = connection
            try:
                await ws.send_text(message_json)
            except Exception as e:
                logger.warning(f"Failed to send message to client {user_id} in project {project_id}: {e}")
                disconnected_clients.append(connection)
        # 清理已斷開的連線
        for user_id, ws in disconnected_clients:
            self.disconnect(project_id, user_id, ws)

# 實例化管理器 (全域單例)
manager = ConnectionManager()
