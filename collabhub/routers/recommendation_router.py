# collabhub/routers/recommendation_router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from collabhub.core.database import get_db
from collabhub.core.security import get_current_user
from collabhub.models.user import User
from collabhub.services.recommendation_service import RecommendationService
from collabhub.schemas.project_schema import PaginatedProjectRecommendationOut

router = APIRouter(
    prefix="/recommendations",
    tags=["Recommendations"],
    dependencies=[Depends(get_current_user)]
)

# 每頁上限
MAX_LIMIT = 100

@router.get("/projects", response_model=PaginatedProjectRecommendationOut)
async def get_recommended_projects(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    limit: int = Query(10, ge=1),
    offset: int = Query(0, ge=0),
):
    """
    依技能推薦招募中的案件給當前使用者
    """
    limit = min(limit, MAX_LIMIT)

    service = RecommendationService(db)
    return await service.get_project_recommendations(current_user, limit=limit, offset=offset)
