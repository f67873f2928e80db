# collabhub/routers/application_router.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from collabhub.core.database import get_db
from collabhub.core.security import get_current_user
from collabhub.models.user import User
from collabhub.services.application_service import ApplicationService
from collabhub.schemas.application_schema import (
    ApplicationCreate,
    ApplicationOut,
    ApplicationOutWithFreelancer,
    ApplicationOutWithProject,
    ApplicationStatusUpdate
)

# 建立 API Router
router = APIRouter(
    prefix="/applications",
    tags=["Applications"],
    dependencies=[Depends(get_current_user)] # 此 router 下所有 API 都需要登入
)

# 掛在 /projects/ 底下的申請 API，語意更清晰
project_application_router = APIRouter(
    prefix="/projects",
    tags=["Applications"], # 歸類到同一個 Tag
    dependencies=[Depends(get_current_user)]
)

# -----------------------------------------------------------------
# 1. (工作者) 送出申請
# -----------------------------------------------------------------
@project_application_router.post(
    "/{project_id}/applications",
    response_model=ApplicationOut,
    status_code=status.HTTP_201_CREATED
)
async def submit_application(
    project_id: str,
    application_data: ApplicationCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    對招募中的案件送出申請 (不能申請自己的案件，也不能重複申請)。
    """
    service = ApplicationService(db)
    return await service.submit_application(
        project_id=project_id,
        freelancer=current_user,
        application_data=application_data
    )

# -----------------------------------------------------------------
# 2. (雇主) 檢視案件的所有申請
# -----------------------------------------------------------------
@project_application_router.get(
    "/{project_id}/applications",
    response_model=List[ApplicationOutWithFreelancer]
)
async def list_project_applications(
    project_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    service = ApplicationService(db)
    return await service.list_project_applications(project_id, current_user)

# -----------------------------------------------------------------
# 3. (雇主) 接受 / 拒絕特定案件的申請
# -----------------------------------------------------------------
@project_application_router.post(
    "/{project_id}/applications/{application_id}/accept",
    response_model=ApplicationOut
)
async def accept_project_application(
    project_id: str,
    application_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    接受申請：申請 -> accepted、案件 -> assigned、其他申請 -> rejected (同一交易)。
    """
    service = ApplicationService(db)
    return await service.accept_application(application_id, current_user, project_id=project_id)

@project_application_router.post(
    "/{project_id}/applications/{application_id}/reject",
    response_model=ApplicationOut
)
async def reject_project_application(
    project_id: str,
    application_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    service = ApplicationService(db)
    return await service.reject_application(application_id, current_user, project_id=project_id)

# -----------------------------------------------------------------
# 4. (工作者) 檢視自己送出的所有申請
# -----------------------------------------------------------------
@router.get("/my", response_model=List[ApplicationOutWithProject])
async def get_my_applications(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    service = ApplicationService(db)
    return await service.list_my_applications(current_user)

# -----------------------------------------------------------------
# 5. (雇主) 以狀態更新的方式接受 / 拒絕
# -----------------------------------------------------------------
@router.patch("/{application_id}/status", response_model=ApplicationOut)
async def update_application_status(
    application_id: str,
    update_data: ApplicationStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    - status 傳入 "accepted" 或 "rejected"。
    """
    service = ApplicationService(db)
    return await service.update_application_status(
        application_id,
        update_data.status,
        current_user
    )
