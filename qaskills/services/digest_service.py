import logging
from typing import Optional
from qaskills.base.models import Skill
from qaskills.base.exception import DataNotFoundError
from qaskills.repositories.skill_repository import SkillRepository
from qaskills.services.email_service import EmailService, send_batch_emails
from qaskills.services.user_service import UserService

logger = logging.getLogger(__name__)

DIGEST_SKILL_COUNT = 10

class DigestService:
    """Bulk notification jobs: the weekly digest and new skill alerts."""

    def __init__(self,
        users: UserService,
        skills: SkillRepository,
        email_service: EmailService,
        batch_size: int = 10,
        delay_seconds: float = 1.0,
    ):
        self.users = users
        self.skills = skills
        self.email_service = email_service
        self.batch_size = batch_size
        self.delay_seconds = delay_seconds

    async def send_weekly_digest(self) -> dict:
        top_skills = await self.skills._digest_skills(DIGEST_SKILL_COUNT)
        if not top_skills:
            return {"success": True, "message": "No skills to send", "sent": 0}

        subscribers = await self.users.weekly_digest_subscribers()
        logger.info("Sending weekly digest to %d subscribers", len(subscribers))

        results = await send_batch_emails(
            subscribers,
            lambda user: self.email_service.send_weekly_digest(user, top_skills),
            batch_size=self.batch_size,
            delay_seconds=self.delay_seconds,
        )
        sent, failed = _tally(results, "weekly digest")
        return {
            "success": True,
            "sent": sent,
            "failed": failed,
            "total": len(subscribers),
            "topSkills": len(top_skills),
        }

    async def send_new_skill_alert(self, author: str, slug: str) -> dict:
        skill: Optional[Skill] = await self.skills._get_skill(author, slug)
        if not skill:
            raise DataNotFoundError("Skill", f"{author}/{slug}")

        subscribers = await self.users.skill_alert_subscribers()
        logger.info("Sending alert for %s/%s to %d subscribers", author, slug, len(subscribers))

        results = await send_batch_emails(
            subscribers,
            lambda user: self.email_service.send_new_skill_alert(user, skill),
            batch_size=self.batch_size,
            delay_seconds=self.delay_seconds,
        )
        sent, failed = _tally(results, "skill alert")
        return {"success": True, "sent": sent, "failed": failed, "total": len(subscribers)}


def _tally(results: list, label: str) -> tuple[int, int]:
    sent = failed = 0
    for result in results:
        if isinstance(result, dict) and result.get("success"):
            sent += 1
        else:
            failed += 1
            logger.error("Failed to send %s: %s", label, result)
    return sent, failed


def new_digest_service(users: UserService, skills: SkillRepository, email_service: EmailService) -> DigestService:
    return DigestService(users, skills, email_service)
