import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from qaskills.base.models import PreferencesUpdate, User, UserPreferences
from qaskills.handlers.dependency_handler import get_current_user, get_user_service
from qaskills.handlers.rate_limit_handler import limiter
from qaskills.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["preferences"])

@router.get("/preferences", response_model=UserPreferences)
@limiter.limit("30/minute")
async def get_preferences(
    request: Request,
    user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """Notification preferences of the signed-in user, created with defaults on first read"""
    try:
        return await user_service.get_or_create_preferences(user.id)
    except Exception:
        logger.exception("Error fetching preferences")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch preferences",
        )

@router.patch("/preferences", response_model=UserPreferences)
@limiter.limit("10/minute")
async def update_preferences(
    request: Request,
    update: PreferencesUpdate,
    user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """Update notification preferences of the signed-in user"""
    try:
        return await user_service.update_preferences(user.id, update)
    except Exception:
        logger.exception("Error updating preferences")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update preferences",
        )
