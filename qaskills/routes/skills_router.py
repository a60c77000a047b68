import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from qaskills.base.exception import DataNotFoundError
from qaskills.handlers.dependency_handler import get_leaderboard_service, get_skill_service
from qaskills.handlers.rate_limit_handler import limiter
from qaskills.services.leaderboard_service import LeaderboardService
from qaskills.services.skill_service import SkillService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["skills"])

@router.get("/leaderboard")
@limiter.limit("60/minute")
async def leaderboard(
    request: Request,
    filter: Optional[str] = Query("all"),
    leaderboard_service: LeaderboardService = Depends(get_leaderboard_service),
):
    """Top 50 skills for the all, trending, hot or new ranking"""
    try:
        return await leaderboard_service.get_leaderboard(filter)
    except Exception:
        logger.exception("Error fetching leaderboard")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch leaderboard",
        )

@router.get("/skills")
@limiter.limit("60/minute")
async def list_skills(
    request: Request,
    q: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
    skill_service: SkillService = Depends(get_skill_service),
):
    try:
        return await skill_service.search(q, limit)
    except Exception:
        logger.exception("Error listing skills")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch skills",
        )

@router.get("/skills/{author}/{slug}")
@limiter.limit("60/minute")
async def skill_detail(
    request: Request,
    author: str,
    slug: str,
    skill_service: SkillService = Depends(get_skill_service),
):
    """Skill detail with its structured data"""
    try:
        return await skill_service.get_detail(author, slug)
    except DataNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Skill not found")
    except Exception:
        logger.exception("Error fetching skill %s/%s", author, slug)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch skill",
        )
