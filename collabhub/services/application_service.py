# collabhub/services/application_service.py

import logging
from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from collabhub.models.user import User
from collabhub.models.application import Application, ApplicationStatus
from collabhub.repositories.application_repo import ApplicationRepository
from collabhub.repositories.project_repo import ProjectRepository
from collabhub.schemas.application_schema import ApplicationCreate
from collabhub.utils.lifecycle import ProjectStatus

logger = logging.getLogger(__name__)


class ApplicationService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.application_repo = ApplicationRepository(db)
        self.project_repo = ProjectRepository(db)

    async def submit_application(
        self,
        project_id: str,
        freelancer: User,
        application_data: ApplicationCreate
    ) -> Application:
        """
        (工作者) 對案件送出申請
        """
        project = await self.project_repo.get_project_by_id(project_id)
        if not project:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="案件不存在")
        if project.status != ProjectStatus.open:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="此案件目前未在招募中")
        if project.client_id == freelancer.id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="不能申請自己刊登的案件")

        # 被拒絕過的申請不算，可以重新申請
        existing = await self.application_repo.check_existing_application(project_id, freelancer.id)
        if existing:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="你已經申請過此案件")

        new_application = Application(
            project_id=project_id,
            freelancer_id=freelancer.id,
            proposal=application_data.proposal,
            bid_amount=application_data.bid_amount,
            estimated_duration=application_data.estimated_duration,
            status=ApplicationStatus.pending
        )
        created = await self.application_repo.create_application(new_application)
        logger.info(f"Application {created.id} submitted to project {project_id} by {freelancer.id}")
        return created

    async def list_project_applications(self, project_id: str, client: User) -> List[Application]:
        """
        (雇主) 檢視自己案件的所有申請 (新 -> 舊)
        """
        project = await self.project_repo.get_project_by_id(project_id)
        if not project:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="案件不存在")
        if project.client_id != client.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="你沒有權限檢視此案件的申請")
        return await self.application_repo.get_applications_by_project_id(project_id)

    async def list_my_applications(self, freelancer: User) -> List[Application]:
        return await self.application_repo.get_applications_by_freelancer_id(freelancer.id)

    async def accept_application(
        self,
        application_id: str,
        client: User,
        project_id: Optional[str] = None
    ) -> Application:
        """
        (雇主) 接受申請。申請、案件、其他申請三者在同一個交易中更新，
        任何一步失敗都會整筆 rollback。
        """
        application = await self.application_repo.get_application_by_id(application_id)
        if not application or (project_id is not None and application.project_id != project_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="申請不存在")

        # 鎖住案件列，並在鎖內重新檢查狀態 (同時接受兩份申請時，後到的會失敗)
        project = await self.project_repo.get_project_for_update(application.project_id)
        if not project:
            await self.db.rollback()
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="案件不存在")
        if project.client_id != client.id:
            await self.db.rollback()
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="你沒有權限處理此申請")
        if project.status != ProjectStatus.open:
            await self.db.rollback()
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="此案件已不在招募中")

        application = await self.application_repo.get_application_by_id(application_id)
        if application.status != ApplicationStatus.pending:
            await self.db.rollback()
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="此申請已被處理")

        # rollback 會讓已載入的物件過期，之後只能用這裡記下的 id
        project_id = project.id
        freelancer_id = application.freelancer_id
        try:
            await self.application_repo.accept_application(project, application)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"接受申請失敗 (application={application_id}, project={project_id}): {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="接受申請失敗，所有變更已還原"
            )

        logger.info(f"Application {application_id} accepted; project {project_id} assigned to {freelancer_id}")
        return await self.application_repo.get_application_by_id(application_id)

    async def reject_application(
        self,
        application_id: str,
        client: User,
        project_id: Optional[str] = None
    ) -> Application:
        """
        (雇主) 拒絕申請。已拒絕的再拒絕一次不做任何事；已接受的不能拒絕。
        """
        application = await self.application_repo.get_application_by_id(application_id)
        if not application or (project_id is not None and application.project_id != project_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="申請不存在")

        project = await self.project_repo.get_project_by_id(application.project_id)
        if project is None or project.client_id != client.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="你沒有權限處理此申請")

        if application.status == ApplicationStatus.rejected:
            return application
        if application.status == ApplicationStatus.accepted:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="已接受的申請無法拒絕")

        application.status = ApplicationStatus.rejected
        return await self.application_repo.update_application(application)

    async def update_application_status(
        self, application_id: str, new_status: str, client: User
    ) -> Application:
        """
        PATCH /applications/{id}/status 的入口：依 status 分派到接受或拒絕
        """
        if new_status == ApplicationStatus.accepted.value:
            return await self.accept_application(application_id, client)
        if new_status == ApplicationStatus.rejected.value:
            return await self.reject_application(application_id, client)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="無效的狀態")
