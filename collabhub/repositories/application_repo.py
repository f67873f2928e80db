# collabhub/repositories/application_repo.py

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from typing import List, Optional

from collabhub.models.application import Application, ApplicationStatus
from collabhub.models.project import Project
from collabhub.utils.lifecycle import ProjectStatus

class ApplicationRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_application_by_id(self, application_id: str) -> Optional[Application]:
        stmt = (
            select(Application)
            .where(Application.id == application_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def check_existing_application(self, project_id: str, freelancer_id: str) -> Optional[Application]:
        """
        檢查工作者是否已對案件送出「未被拒絕」的申請
        (被拒絕過的可以重新申請)
        """
        stmt = select(Application).where(
            Application.project_id == project_id,
            Application.freelancer_id == freelancer_id,
            Application.status != ApplicationStatus.rejected
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_applications_by_project_id(self, project_id: str) -> List[Application]:
        """
        獲取特定案件的所有申請 (雇主檢視用)，freelancer 由 lazy="selectin" 載入
        """
        stmt = (
            select(Application)
            .where(Application.project_id == project_id)
            .order_by(Application.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def get_applications_by_freelancer_id(self, freelancer_id: str) -> List[Application]:
        """
        獲取特定工作者的所有申請 (工作者檢視「我的申請」用)
        """
        stmt = (
            select(Application)
            .where(Application.freelancer_id == freelancer_id)
            # 載入關聯的案件資訊
            .options(selectinload(Application.project))
            .order_by(Application.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def create_application(self, application: Application) -> Application:
        self.db.add(application)
        await self.db.commit()
        await self.db.refresh(application)
        return application

    async def update_application(self, application: Application) -> Application:
        """
        更新申請 (主要用於更新 status)
        """
        await self.db.commit()
        await self.db.refresh(application)
        return application

    async def accept_application(self, project: Project, application: Application) -> None:
        """
        接受申請，以下三件事在同一個交易中完成:
        1. 申請 -> accepted
        2. 案件 -> assigned，並寫入 freelancer_id
        3. 同案件其他 pending 申請 -> rejected
        呼叫端負責在失敗時 rollback
        """
        application.status = ApplicationStatus.accepted
        project.status = ProjectStatus.assigned
        project.freelancer_id = application.freelancer_id

        await self.db.execute(
            update(Application)
            .where(
                Application.project_id == project.id,
                Application.id != application.id,
                Application.status == ApplicationStatus.pending
            )
            .values(status=ApplicationStatus.rejected)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
