import logging
from typing import Optional
from qaskills.base.models import User, UserPreferences, PreferencesUpdate, UnsubscribeType
from qaskills.base.exception import DataNotFoundError, InvalidTokenError
from qaskills.repositories.user_repository import UserRepository
from qaskills.repositories.preferences_repository import PreferencesRepository
from qaskills.services.token_service import UnsubscribeTokenService
from qaskills.utils.str import full_name

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self,
        users: UserRepository,
        preferences: PreferencesRepository,
        token_service: UnsubscribeTokenService,
    ):
        self.users = users
        self.preferences = preferences
        self.token_service = token_service

    async def get_user(self, user_id: str) -> Optional[User]:
        return await self.users._get_user_by_id(user_id)

    async def get_user_by_clerk_id(self, clerk_id: str) -> Optional[User]:
        return await self.users._get_user_by_clerk_id(clerk_id)

    async def create_from_identity(self, data: dict) -> Optional[User]:
        """
        Create a user (and default preferences) from an identity provider
        `user.created` payload. Returns None if the user already existed.
        """
        github = next(
            (a for a in data.get("external_accounts") or [] if a.get("provider") == "oauth_github"),
            {},
        )
        user = User(
            clerkId=data["id"],
            email=_primary_email(data),
            username=data.get("username") or data["id"],
            name=full_name(data.get("first_name"), data.get("last_name")),
            avatar=data.get("image_url") or "",
            githubHandle=github.get("username") or "",
        )
        created = await self.users._create_user(user)
        if created is None:
            logger.info("User %s already exists, skipping create", data["id"])
            return None
        await self.preferences._create_preferences(UserPreferences(userId=created.id))
        return created

    async def update_from_identity(self, data: dict) -> Optional[User]:
        """Apply a `user.updated` payload. Unknown users are ignored."""
        return await self.users._update_user_by_clerk_id(data["id"], {
            "email": _primary_email(data),
            "username": data.get("username") or data["id"],
            "name": full_name(data.get("first_name"), data.get("last_name")),
            "avatar": data.get("image_url") or "",
        })

    async def get_or_create_preferences(self, user_id: str) -> UserPreferences:
        existing = await self.preferences._get_preferences(user_id)
        if existing:
            return existing
        defaults = UserPreferences(userId=user_id)
        created = await self.preferences._create_preferences(defaults)
        # Lost an insert race: somebody else created the row first
        return created or await self.preferences._get_preferences(user_id)

    async def update_preferences(self, user_id: str, update: PreferencesUpdate) -> UserPreferences:
        """Apply the provided flags, creating the row on first write."""
        changes = update.model_dump(exclude_none=True)
        updated = await self.preferences._update_preferences(user_id, dict(changes))
        if updated:
            return updated
        created = await self.preferences._create_preferences(UserPreferences(userId=user_id, **changes))
        return created or await self.preferences._update_preferences(user_id, dict(changes))

    async def unsubscribe(self, token: str, unsubscribe_type: Optional[str] = None) -> UserPreferences:
        """
        Turn off the notification group named by unsubscribe_type for the
        user the token was issued to.

        - raises `InvalidTokenError` for malformed, forged or expired tokens
        - raises `DataNotFoundError` if the user no longer exists
        """
        payload = self.token_service.verify_token(token)
        if payload is None:
            raise InvalidTokenError()

        user = await self.users._get_user_by_id(payload.user_id)
        if not user:
            raise DataNotFoundError("User", payload.user_id)

        field = UnsubscribeType.parse(unsubscribe_type).preference_field
        return await self.preferences._disable_preferences(user.id, [field])

    async def weekly_digest_subscribers(self) -> list[User]:
        user_ids = await self.preferences._subscriber_user_ids("emailNotifications", "weeklyDigest")
        if not user_ids:
            return []
        return await self.users._get_users_by_ids(user_ids)

    async def skill_alert_subscribers(self) -> list[User]:
        user_ids = await self.preferences._subscriber_user_ids("emailNotifications", "newSkillAlerts")
        if not user_ids:
            return []
        return await self.users._get_users_by_ids(user_ids)


def _primary_email(data: dict) -> str:
    addresses = data.get("email_addresses") or []
    if addresses:
        return addresses[0].get("email_address") or ""
    return ""


def new_user_service(
    users: UserRepository,
    preferences: PreferencesRepository,
    token_service: UnsubscribeTokenService,
) -> UserService:
    return UserService(users, preferences, token_service)
