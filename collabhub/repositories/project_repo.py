# collabhub/repositories/project_repo.py

import logging
from typing import List, Optional, Tuple
from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from fastapi import HTTPException

# 匯入 Models
from collabhub.models.project import Project
from collabhub.models.application import Application
from collabhub.utils.lifecycle import ASSIGNED_STATUSES, ProjectStatus

# 匯入 Schemas
from collabhub.schemas.project_schema import ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)


class ProjectRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    # 建立新案件
    async def create_project(self, project_data: ProjectCreate, client_id: str) -> Project:
        """
        建立新案件，初始狀態一律為 open
        """
        db_project = Project(
            **project_data.model_dump(),
            client_id=client_id,
            status=ProjectStatus.open
        )
        self.db.add(db_project)
        await self.db.commit()

        # 不使用 refresh()，而是重新查詢一次，
        # 確保 client / freelancer (lazy="selectin") 都已載入
        complete_project = await self.get_project_by_id(db_project.id)
        if complete_project is None:
            raise HTTPException(status_code=500, detail="剛建立的案件找不到")
        return complete_project

    # 獲取單一案件 (包含雙方 Profile)
    async def get_project_by_id(self, project_id: str) -> Project | None:
        # populate_existing: 同一個 Session 內更新過的案件要拿到最新的值
        stmt = (
            select(Project)
            .where(Project.id == project_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_project_for_update(self, project_id: str) -> Project | None:
        """
        以 SELECT ... FOR UPDATE 鎖住案件列 (接受申請時使用)，
        同一案件的並行接受請求會在這裡排隊
        """
        stmt = (
            select(Project)
            .where(Project.id == project_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    # 條件搜尋「招募中」的案件
    async def list_open_projects(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None
    ) -> List[Project]:
        """
        1. 只列出 open 的案件
        2. 關鍵字 (search): 標題或描述模糊比對
        3. 分類 (category): 精確比對
        """
        stmt = select(Project).where(Project.status == ProjectStatus.open)

        if search:
            logger.info(f"Applying search filter: {search}")
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(Project.title.ilike(pattern), Project.description.ilike(pattern))
            )

        if category:
            logger.info(f"Applying category filter: {category}")
            stmt = stmt.where(Project.category == category)

        stmt = stmt.order_by(Project.created_at.desc())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    # 查看特定雇主的所有案件 (附申請數量)
    async def list_projects_by_client_with_counts(self, client_id: str) -> List[Tuple[Project, int]]:
        application_count = (
            select(func.count(Application.id))
            .where(Application.project_id == Project.id)
            .correlate(Project)
            .scalar_subquery()
        )
        stmt = (
            select(Project, application_count.label("application_count"))
            .where(Project.client_id == client_id)
            .order_by(Project.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    # 指派給特定工作者的案件
    async def list_projects_by_freelancer(self, freelancer_id: str) -> List[Project]:
        stmt = (
            select(Project)
            .where(Project.freelancer_id == freelancer_id)
            .order_by(Project.updated_at.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def list_conversations(self, user_id: str) -> List[Project]:
        """
        使用者身為雇主或工作者、且已指派工作者的案件 (每個案件即一個對話)
        """
        stmt = (
            select(Project)
            .where(
                Project.status.in_(list(ASSIGNED_STATUSES)),
                Project.freelancer_id.is_not(None),
                or_(Project.client_id == user_id, Project.freelancer_id == user_id)
            )
            .order_by(Project.updated_at.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def update_project(self, project: Project, update_data: ProjectUpdate) -> Project:
        """
        (U) 更新案件內容 (只更新有傳入的欄位)
        """
        for key, value in update_data.model_dump(exclude_unset=True).items():
            # 必填欄位傳 null 時視為不更新
            if value is None and key in ("title", "description", "skills_required"):
                continue
            setattr(project, key, value)
        return await self.save_project(project)

    async def save_project(self, project: Project) -> Project:
        """
        儲存對現有 Project 物件的變更 (e.g. 狀態轉移)
        """
        await self.db.commit()
        # commit 後重新獲取 Eager Loaded 的版本
        refreshed_project = await self.get_project_by_id(project.id)
        if refreshed_project is None:
            raise HTTPException(status_code=500, detail="Failed to re-fetch project after update")
        return refreshed_project
