import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from qaskills.base.exception import DataNotFoundError, InvalidTokenError
from qaskills.base.models import UnsubscribeRequest
from qaskills.handlers.dependency_handler import get_user_service
from qaskills.handlers.rate_limit_handler import limiter
from qaskills.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["unsubscribe"])

@router.post("/unsubscribe")
@limiter.limit("10/minute")
async def unsubscribe(
    request: Request,
    body: UnsubscribeRequest,
    user_service: UserService = Depends(get_user_service),
):
    """One-click unsubscribe from an emailed link. No login required."""
    if not body.token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Token is required")
    try:
        await user_service.unsubscribe(body.token, body.type)
    except InvalidTokenError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except DataNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    except Exception:
        logger.exception("Error processing unsubscribe")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process unsubscribe request",
        )
    return {"success": True}
