import hmac
import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from qaskills.base.exception import DataNotFoundError
from qaskills.handlers.dependency_handler import get_digest_service, get_email_service
from qaskills.handlers.env_handler import env
from qaskills.services.digest_service import DigestService
from qaskills.services.email_service import EmailService, NOT_CONFIGURED

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cron", tags=["cron"])

def require_cron_secret(request: Request):
    """Requests must carry `Bearer <CRON_SECRET>` whenever CRON_SECRET is set."""
    cron_secret = env.get_cron_secret()
    if not cron_secret:
        return
    provided = request.headers.get("authorization", "")
    if not hmac.compare_digest(provided.encode("utf-8"), f"Bearer {cron_secret}".encode("utf-8")):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

def require_email(email_service: EmailService = Depends(get_email_service)):
    if not email_service.configured:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=NOT_CONFIGURED)

@router.api_route(
    "/weekly-digest",
    methods=["GET", "POST"],
    dependencies=[Depends(require_cron_secret), Depends(require_email)],
)
async def weekly_digest(digest_service: DigestService = Depends(get_digest_service)):
    """Send the weekly top-skills digest to opted-in users. Scheduled Mondays 09:00."""
    try:
        return await digest_service.send_weekly_digest()
    except Exception:
        logger.exception("Weekly digest cron error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send weekly digest",
        )

@router.post(
    "/skill-alert/{author}/{slug}",
    dependencies=[Depends(require_cron_secret), Depends(require_email)],
)
async def new_skill_alert(
    author: str,
    slug: str,
    digest_service: DigestService = Depends(get_digest_service),
):
    """Announce a newly published skill to users who opted in to alerts."""
    try:
        return await digest_service.send_new_skill_alert(author, slug)
    except DataNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Skill not found")
    except Exception:
        logger.exception("Skill alert error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send skill alert",
        )
