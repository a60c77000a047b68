"""
Service wiring. Everything is built once at startup by `wire_services` and
stored on `app.state`; route handlers receive it through `Depends`.
"""
from typing import Optional
from fastapi import Depends, FastAPI, HTTPException, Request, status
from mailjet_rest import Client
from motor.motor_asyncio import AsyncIOMotorDatabase
from qaskills.base.exception import AuthenticationError
from qaskills.base.models import User
from qaskills.clients.cache_client import CacheClient
from qaskills.handlers.auth_handler import SessionVerifier, session_token_from_request
from qaskills.repositories.preferences_repository import PreferencesRepository
from qaskills.repositories.skill_repository import SkillRepository
from qaskills.repositories.user_repository import UserRepository
from qaskills.services.digest_service import DigestService, new_digest_service
from qaskills.services.email_service import EmailService, new_email_service
from qaskills.services.leaderboard_service import LeaderboardService, new_leaderboard_service
from qaskills.services.seo_service import SeoService, new_seo_service
from qaskills.services.skill_service import SkillService, new_skill_service
from qaskills.services.token_service import new_token_service
from qaskills.services.user_service import UserService, new_user_service

def wire_services(
    app: FastAPI,
    db: AsyncIOMotorDatabase,
    mailjet: Optional[Client],
    cache: CacheClient,
    session_verifier: SessionVerifier,
    base_url: str,
    sender_email: str,
    sender_name: str,
):
    users = UserRepository(db["users"])
    preferences = PreferencesRepository(db["user_preferences"])
    skills = SkillRepository(db["skills"])

    token_service = new_token_service()
    user_service = new_user_service(users, preferences, token_service)
    email_service = new_email_service(mailjet, token_service, base_url, sender_email, sender_name)

    app.state.user_service = user_service
    app.state.email_service = email_service
    app.state.leaderboard_service = new_leaderboard_service(skills, cache)
    app.state.digest_service = new_digest_service(user_service, skills, email_service)
    app.state.skill_service = new_skill_service(skills, base_url)
    app.state.seo_service = new_seo_service(base_url, skills, users)
    app.state.session_verifier = session_verifier

def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service

def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service

def get_leaderboard_service(request: Request) -> LeaderboardService:
    return request.app.state.leaderboard_service

def get_digest_service(request: Request) -> DigestService:
    return request.app.state.digest_service

def get_skill_service(request: Request) -> SkillService:
    return request.app.state.skill_service

def get_seo_service(request: Request) -> SeoService:
    return request.app.state.seo_service

def get_session_verifier(request: Request) -> SessionVerifier:
    return request.app.state.session_verifier

async def get_current_user(
    request: Request,
    verifier: SessionVerifier = Depends(get_session_verifier),
    user_service: UserService = Depends(get_user_service),
) -> User:
    """The signed-in user's directory row. 401 without a session, 404 without a row."""
    try:
        clerk_id = verifier.verify(session_token_from_request(request))
    except AuthenticationError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    user = await user_service.get_user_by_clerk_id(clerk_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
