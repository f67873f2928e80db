# collabhub/services/recommendation_service.py
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from collabhub.models.user import User
from collabhub.repositories.profile_repo import ProfileRepository
from collabhub.repositories.project_repo import ProjectRepository
from collabhub.utils.recommender import calculate_recommendation_scores, normalize_skills

logger = logging.getLogger(__name__)


class RecommendationService:
    def __init__(self, db: AsyncSession):
        self.profile_repo = ProfileRepository(db)
        self.project_repo = ProjectRepository(db)

    async def get_project_recommendations(self, user: User, limit: int = 10, offset: int = 0):
        """
        依登入者 Profile 的技能推薦「招募中」的案件 (排除自己刊登的)
        """
        profile = await self.profile_repo.get_profile_by_id(user.id)
        if not profile:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Profile 不存在")

        # 將技能轉換為小寫集合 (Set) 以利比對
        user_skill_names = normalize_skills(profile.skills)
        if not user_skill_names:
            return {"items": [], "total": 0} # 沒有技能，無法推薦

        # 1. 獲取所有招募中案件
        open_projects = await self.project_repo.list_open_projects()

        # 2. 轉換案件資料結構
        projects_data_for_algo = []
        for project in open_projects:
            if project.client_id == user.id:
                continue
            projects_data_for_algo.append({
                "item_id": project.id,
                "skill_names": normalize_skills(project.skills_required),
                "item_object": project,
                # 同分時較新的案件排前面
                "tiebreaker": project.created_at.timestamp() if project.created_at else 0,
            })

        # 3. 呼叫演算法
        scored_projects = calculate_recommendation_scores(user_skill_names, projects_data_for_algo)
        logger.info(f"Scored {len(scored_projects)} projects for user {user.id}")

        total = len(scored_projects)
        sliced = scored_projects[offset: offset + limit]

        # 4. 處理結果 - 提取物件和分數
        recommendations_with_scores = [
            {
                "project": item["item_object"],
                "recommendation_score": round(item["score"], 2)
            }
            for item in sliced
        ]
        return {"items": recommendations_with_scores, "total": total}
