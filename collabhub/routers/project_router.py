# collabhub/routers/project_router.py
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

# 匯入核心依賴
from collabhub.core.database import get_db
from collabhub.core.security import get_current_user
from collabhub.models.user import User

# 匯入 Service 和 Schemas
from collabhub.services.project_service import ProjectService
from collabhub.schemas.project_schema import (
    ProjectActionRequest, ProjectActionsOut, ProjectCreate, ProjectOut,
    ProjectStatusUpdate, ProjectUpdate, ProjectWithApplicationCountOut
)
from collabhub.utils.lifecycle import LifecycleAction

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/projects",
    tags=["Projects"],
    # 該模組下的所有 API 都至少需要登入
    dependencies=[Depends(get_current_user)]
)

@router.post(
    "/",
    response_model=ProjectOut,
    status_code=status.HTTP_201_CREATED
)
async def create_new_project(
    project_data: ProjectCreate, # Request Body
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    刊登新案件，刊登者即為雇主，狀態為 open。
    """
    service = ProjectService(db)
    return await service.create_project(project_data=project_data, user=current_user)

@router.get("/", response_model=List[ProjectOut])
async def search_open_projects(
    db: AsyncSession = Depends(get_db),
    # 關鍵字 (標題 / 描述，不分大小寫)
    search: Optional[str] = None,
    # 分類 (精確)
    category: Optional[str] = None
):
    """
    瀏覽招募中的案件 (新 -> 舊)
    """
    logger.info(f"Project search - search: {search}, category: {category}")
    service = ProjectService(db)
    return await service.search_projects(search=search, category=category)

@router.get("/my", response_model=List[ProjectWithApplicationCountOut])
async def read_my_projects(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    獲取自己刊登的所有案件 (附申請數量)
    """
    service = ProjectService(db)
    return await service.get_my_projects(current_user)

@router.get("/assigned", response_model=List[ProjectOut])
async def read_assigned_projects(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    獲取指派給自己 (工作者) 的案件
    """
    service = ProjectService(db)
    return await service.get_assigned_projects(current_user)

# 拿到特定的案件詳情
@router.get("/{project_id}", response_model=ProjectOut)
async def get_project_by_id(
    project_id: str,
    db: AsyncSession = Depends(get_db)
):
    service = ProjectService(db)
    # Service 層會自動處理 404 Not Found
    return await service.get_project_details(project_id)

@router.put("/{project_id}", response_model=ProjectOut)
async def update_project_details(
    project_id: str,
    project_data: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    (雇主) 更新「招募中」案件的內容。
    """
    service = ProjectService(db)
    return await service.update_project(
        project_id=project_id,
        data=project_data,
        user=current_user
    )

@router.patch("/{project_id}/status", response_model=ProjectOut)
async def update_project_status(
    project_id: str,
    status_data: ProjectStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    依生命週期轉移表更新案件狀態。
    open -> assigned 不能從這裡做，請使用接受申請。
    """
    service = ProjectService(db)
    return await service.update_status(
        project_id=project_id,
        new_status=status_data.status,
        user=current_user,
        note=status_data.note
    )

@router.get("/{project_id}/actions", response_model=ProjectActionsOut)
async def get_available_actions(
    project_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    當前使用者在此案件上可執行的動作 (前端用來決定要顯示哪些按鈕)
    """
    service = ProjectService(db)
    return await service.get_actions(project_id, current_user)

@router.post("/{project_id}/actions/{action}", response_model=ProjectOut)
async def perform_project_action(
    project_id: str,
    action: LifecycleAction,
    action_data: Optional[ProjectActionRequest] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    執行生命週期動作: start_work / submit_work / resubmit_work / approve / request_revision
    """
    service = ProjectService(db)
    return await service.perform_action(
        project_id=project_id,
        action=action,
        user=current_user,
        note=action_data.note if action_data else None
    )
