import asyncio
import logging
from datetime import datetime, timezone
from functools import partial
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Optional, TypeVar
from urllib.parse import urlencode
from jinja2 import Environment, FileSystemLoader, select_autoescape
from mailjet_rest import Client
from qaskills.base.models import Skill, User, UnsubscribeType
from qaskills.content.email_content import get_random_digest_banner, get_random_welcome_banner
from qaskills.services.token_service import UnsubscribeTokenService
from qaskills.utils.time import iso_week

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
NOT_CONFIGURED = "Email service not configured"

T = TypeVar("T")

WELCOME_UTM = {"utm_source": "email", "utm_medium": "welcome", "utm_campaign": "user_onboarding"}
DIGEST_UTM = {"utm_source": "email", "utm_medium": "weekly_digest", "utm_campaign": "engagement"}
ALERT_UTM = {"utm_source": "email", "utm_medium": "skill_alert", "utm_campaign": "new_skill"}

class EmailService:
    def __init__(self,
        mailjet: Optional[Client],
        token_service: UnsubscribeTokenService,
        base_url: str,
        sender_email: str,
        sender_name: str = "QASkills",
    ):
        self.mailjet = mailjet
        self.token_service = token_service
        self.base_url = base_url.rstrip("/")
        self.sender_email = sender_email
        self.sender_name = sender_name
        self.env = Environment(
            loader=FileSystemLoader(TEMPLATES_DIR),
            autoescape=select_autoescape(["html"]),
        )

    @property
    def configured(self) -> bool:
        return self.mailjet is not None

    def link(self, path: str, utm: dict, **extra) -> str:
        return f"{self.base_url}{path}?{urlencode({**utm, **extra})}"

    def unsubscribe_url(self, user_id: str, unsubscribe_type: UnsubscribeType) -> str:
        """One-click unsubscribe link carrying a signed token for user_id."""
        token = self.token_service.generate_token(user_id)
        return f"{self.base_url}/unsubscribe?{urlencode({'token': token, 'type': unsubscribe_type.value})}"

    async def _send(self, to_email: str, to_name: str, subject: str, html: str, text: str) -> dict:
        data = {
            "Messages": [{
                "From": {"Email": self.sender_email, "Name": self.sender_name},
                "To": [{"Email": to_email, "Name": to_name or to_email}],
                "Subject": subject,
                "HTMLPart": html,
                "TextPart": text,
            }]
        }
        loop = asyncio.get_running_loop()
        response = await loop.run_in_executor(None, partial(self.mailjet.send.create, data=data))
        if response.status_code >= 400:
            return {"success": False, "error": response.json()}
        return {"success": True, "data": response.json()}

    async def send_welcome_email(self, user: User) -> dict:
        """Send welcome email to a new user"""
        if not self.configured:
            logger.warning("Mailjet not configured, skipping welcome email")
            return {"success": False, "error": NOT_CONFIGURED}
        try:
            unsubscribe_url = self.unsubscribe_url(user.id, UnsubscribeType.All)
            template = self.env.get_template("welcome-email.html")
            html_content = template.render(
                username=user.username,
                banner_text=get_random_welcome_banner(),
                skills_url=self.link("/skills", WELCOME_UTM),
                getting_started_url=self.link("/getting-started", WELCOME_UTM),
                preferences_url=self.link("/dashboard/preferences", WELCOME_UTM),
                home_url=self.link("", WELCOME_UTM),
                unsubscribe_url=unsubscribe_url,
            )
            text_content = (
                f"Hi {user.username},\n\n"
                "Thank you for joining QASkills.sh, the curated directory of QA testing skills for AI coding agents.\n\n"
                f"Browse skills: {self.link('/skills', WELCOME_UTM)}\n"
                f"Unsubscribe: {unsubscribe_url}\n"
            )
            result = await self._send(user.email, user.username, "Welcome to QASkills.sh! 🎉", html_content, text_content)
        except Exception as e:
            logger.exception("Error sending welcome email to user %s", user.id)
            return {"success": False, "error": str(e)}
        if not result["success"]:
            logger.error("Failed to send welcome email: %s", result["error"])
        return result

    async def send_new_skill_alert(self, user: User, skill: Skill) -> dict:
        """Send new skill alert to a user who opted in"""
        if not self.configured:
            logger.warning("Mailjet not configured, skipping skill alert")
            return {"success": False, "error": NOT_CONFIGURED}
        try:
            skill_url = self.link(f"/skills/{skill.authorName}/{skill.slug}", ALERT_UTM)
            unsubscribe_url = self.unsubscribe_url(user.id, UnsubscribeType.Alerts)
            html_content = self.env.get_template("new-skill-alert-email.html").render(
                skill=skill,
                skill_url=skill_url,
                preferences_url=self.link("/dashboard/preferences", ALERT_UTM),
                unsubscribe_url=unsubscribe_url,
            )
            text_content = (
                f"A new skill has been published on QASkills.sh: {skill.name}\n\n"
                f"{skill.description}\n\n"
                f"View it: {skill_url}\n"
                f"Install: npx @qaskills/cli add {skill.slug}\n\n"
                f"Unsubscribe from alerts: {unsubscribe_url}\n"
            )
            result = await self._send(user.email, user.username, f"New QA Skill: {skill.name}", html_content, text_content)
        except Exception as e:
            logger.exception("Error sending skill alert to user %s", user.id)
            return {"success": False, "error": str(e)}
        if not result["success"]:
            logger.error("Failed to send skill alert: %s", result["error"])
        return result

    async def send_weekly_digest(self, user: User, skills: list[Skill], now: Optional[datetime] = None) -> dict:
        """Send weekly digest with top skills"""
        if not self.configured:
            logger.warning("Mailjet not configured, skipping weekly digest")
            return {"success": False, "error": NOT_CONFIGURED}
        try:
            week_number, year = iso_week(now or datetime.now(timezone.utc))
            unsubscribe_url = self.unsubscribe_url(user.id, UnsubscribeType.Weekly)
            entries = [
                {
                    "rank": rank,
                    "skill": skill,
                    "url": self.link(
                        f"/skills/{skill.authorName}/{skill.slug}", DIGEST_UTM,
                        utm_content=f"skill_rank_{rank}",
                    ),
                }
                for rank, skill in enumerate(skills, start=1)
            ]
            html_content = self.env.get_template("weekly-digest-email.html").render(
                entries=entries,
                week_number=week_number,
                year=year,
                banner_text=get_random_digest_banner(),
                skills_url=self.link("/skills", DIGEST_UTM),
                preferences_url=self.link("/dashboard/preferences", DIGEST_UTM),
                unsubscribe_url=unsubscribe_url,
            )
            lines = [f"#{e['rank']} {e['skill'].name} - {e['url']}" for e in entries]
            text_content = (
                f"QASkills Weekly Digest - Week {week_number}, {year}\n\n"
                + "\n".join(lines)
                + f"\n\nUnsubscribe from the digest: {unsubscribe_url}\n"
            )
            subject = f"QASkills Weekly Digest - Week {week_number}, {year}"
            result = await self._send(user.email, user.username, subject, html_content, text_content)
        except Exception as e:
            logger.exception("Error sending weekly digest to user %s", user.id)
            return {"success": False, "error": str(e)}
        if not result["success"]:
            logger.error("Failed to send weekly digest: %s", result["error"])
        return result


async def send_batch_emails(
    recipients: Iterable[T],
    send_fn: Callable[[T], Awaitable[Any]],
    batch_size: int = 10,
    delay_seconds: float = 1.0,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> list[Any]:
    """
    Send to recipients in batches. Each batch runs concurrently; batches run one
    after another with a fixed pause between them. Exceptions raised by
    send_fn are returned in place of results.
    """
    recipients = list(recipients)
    results = []
    for start in range(0, len(recipients), batch_size):
        batch = recipients[start:start + batch_size]
        results.extend(await asyncio.gather(*(send_fn(r) for r in batch), return_exceptions=True))
        if start + batch_size < len(recipients):
            await sleep(delay_seconds)
    return results


def new_email_service(
    mailjet: Optional[Client],
    token_service: UnsubscribeTokenService,
    base_url: str,
    sender_email: str,
    sender_name: str = "QASkills",
) -> EmailService:
    """EmailService factory"""
    return EmailService(mailjet, token_service, base_url, sender_email, sender_name)
