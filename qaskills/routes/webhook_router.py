import logging
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status
from qaskills.handlers.dependency_handler import get_email_service, get_user_service
from qaskills.services.email_service import EmailService
from qaskills.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhooks", tags=["webhooks"])

@router.post("/clerk")
async def clerk_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    user_service: UserService = Depends(get_user_service),
    email_service: EmailService = Depends(get_email_service),
):
    """Mirror identity provider user events into the users collection."""
    try:
        body = await request.json()
        event_type = body.get("type")
        data = body.get("data") or {}

        if event_type == "user.created":
            user = await user_service.create_from_identity(data)
            if user:
                # Welcome email goes out after the response
                background_tasks.add_task(email_service.send_welcome_email, user)
        elif event_type == "user.updated":
            await user_service.update_from_identity(data)
    except Exception:
        logger.exception("Webhook error")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Webhook processing failed",
        )
    return {"success": True}
