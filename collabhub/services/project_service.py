# collabhub/services/project_service.py
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status
from typing import List, Optional

# 匯入 Models
from collabhub.models.user import User
from collabhub.models.project import Project

# 匯入 Schemas
from collabhub.schemas.project_schema import (
    ProjectActionsOut, ProjectCreate, ProjectOut, ProjectUpdate, ProjectWithApplicationCountOut
)

# 匯入 Repositories
from collabhub.repositories.project_repo import ProjectRepository

# 生命週期規則
from collabhub.utils.lifecycle import (
    ACTIONS, LifecycleAction, ProjectStatus, TransitionError,
    can_act, check_transition, target_status, viewer_role
)

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.project_repo = ProjectRepository(db)

    async def _get_project_or_404(self, project_id: str) -> Project:
        project = await self.project_repo.get_project_by_id(project_id)
        if not project:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="案件不存在"
            )
        return project

    async def create_project(self, project_data: ProjectCreate, user: User) -> Project:
        """
        業務邏輯：建立案件 (任何登入者都可以刊登，刊登者即為雇主)
        """
        new_project = await self.project_repo.create_project(
            project_data=project_data,
            client_id=user.id
        )
        logger.info(f"Project {new_project.id} created by {user.id}")
        return new_project

    async def search_projects(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None
    ) -> List[Project]:
        return await self.project_repo.list_open_projects(search=search, category=category)

    async def get_project_details(self, project_id: str) -> Project:
        return await self._get_project_or_404(project_id)

    async def get_my_projects(self, user: User) -> List[ProjectWithApplicationCountOut]:
        """
        業務邏輯：獲取當前使用者刊登的所有案件 (附申請數量)
        """
        rows = await self.project_repo.list_projects_by_client_with_counts(user.id)
        return [
            ProjectWithApplicationCountOut(
                **ProjectOut.model_validate(project).model_dump(),
                application_count=count or 0
            )
            for project, count in rows
        ]

    async def get_assigned_projects(self, user: User) -> List[Project]:
        """指派給目前使用者 (工作者) 的案件"""
        return await self.project_repo.list_projects_by_freelancer(user.id)

    async def update_project(
        self, project_id: str, data: ProjectUpdate, user: User
    ) -> Project:
        """
        業務邏輯：更新案件內容 (僅限雇主本人，且案件仍在招募中)
        """
        project = await self._get_project_or_404(project_id)
        if project.client_id != user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="你沒有權限修改此案件"
            )
        if project.status != ProjectStatus.open:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"此案件狀態為「{project.status.value}」，無法修改內容"
            )

        # 只傳一邊預算時，要和資料庫中的另一邊比較
        update_fields = data.model_dump(exclude_unset=True)
        budget_min = update_fields.get("budget_min", project.budget_min)
        budget_max = update_fields.get("budget_max", project.budget_max)
        if budget_min is not None and budget_max is not None and float(budget_min) > float(budget_max):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="budget_min 不可大於 budget_max"
            )

        return await self.project_repo.update_project(project, data)

    async def update_status(
        self,
        project_id: str,
        new_status: ProjectStatus,
        user: User,
        note: Optional[str] = None
    ) -> Project:
        """
        業務邏輯：依轉移表更新案件狀態。
        - 404: 案件不存在
        - 400: 轉移不在表內 (包含 open -> assigned)、要求修改但沒有說明
        - 403: 角色不符
        不會修改任何申請
        """
        project = await self._get_project_or_404(project_id)
        role = viewer_role(project.client_id, project.freelancer_id, user.id)

        try:
            check_transition(project.status, new_status, role)
        except TransitionError as e:
            logger.warning(f"Rejected transition on project {project_id} by {user.id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN if e.forbidden else status.HTTP_400_BAD_REQUEST,
                detail=str(e)
            )

        note = note.strip() if note else None
        if ProjectStatus(new_status) == ProjectStatus.revision and not note:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="要求修改時必須填寫說明"
            )

        logger.info(f"Project {project_id}: {project.status.value} -> {ProjectStatus(new_status).value} by {user.id}")
        project.status = ProjectStatus(new_status)
        if note:
            project.review_note = note
        return await self.project_repo.save_project(project)

    async def perform_action(
        self,
        project_id: str,
        action: LifecycleAction,
        user: User,
        note: Optional[str] = None
    ) -> Project:
        """
        執行具名動作 (start_work / submit_work / resubmit_work / approve / request_revision)
        """
        project = await self._get_project_or_404(project_id)
        _, from_status, _ = ACTIONS[LifecycleAction(action)]
        if project.status != from_status:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"此案件狀態為「{project.status.value}」，無法執行 {LifecycleAction(action).value}"
            )
        return await self.update_status(project_id, target_status(action), user, note)

    async def get_actions(self, project_id: str, user: User) -> ProjectActionsOut:
        """
        目前使用者在此案件上可以執行的動作 (前端依此顯示按鈕)
        """
        project = await self._get_project_or_404(project_id)
        role = viewer_role(project.client_id, project.freelancer_id, user.id)
        actions = sorted(can_act(project.status, role), key=lambda a: a.value)
        return ProjectActionsOut(
            project_id=project.id,
            status=project.status,
            viewer_role=role.value,
            actions=actions
        )
