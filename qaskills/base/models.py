import uuid
from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import Any, Optional
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class LeaderboardFilter(str, Enum):
    All = "all"
    Trending = "trending"
    Hot = "hot"
    New = "new"

    @classmethod
    def parse(cls, value: Optional[str]) -> "LeaderboardFilter":
        """Unknown or missing filters fall back to the all-time ranking."""
        try:
            return cls(value or cls.All.value)
        except ValueError:
            return cls.All


class UnsubscribeType(str, Enum):
    All = "all"
    Weekly = "weekly"
    Alerts = "alerts"

    @classmethod
    def parse(cls, value: Optional[str]) -> "UnsubscribeType":
        try:
            return cls(value or cls.All.value)
        except ValueError:
            return cls.All

    @property
    def preference_field(self) -> str:
        return {
            UnsubscribeType.All: "emailNotifications",
            UnsubscribeType.Weekly: "weeklyDigest",
            UnsubscribeType.Alerts: "newSkillAlerts",
        }[self]


class User(BaseModel):
    """Directory user mirrored from the identity provider"""
    id: str = Field(default_factory=new_id)
    clerkId: str
    email: str
    username: str
    name: str = ""
    avatar: Optional[str] = ""
    bio: Optional[str] = ""
    githubHandle: Optional[str] = ""
    verifiedPublisher: bool = False
    totalInstalls: int = 0
    skillsPublished: int = 0
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)


class UserPreferences(BaseModel):
    userId: str
    emailNotifications: bool = True
    weeklyDigest: bool = True
    newSkillAlerts: bool = True
    packAlerts: bool = True
    leadSource: Optional[str] = None
    capturedAt: datetime = Field(default_factory=utc_now)
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)


class PreferencesUpdate(BaseModel):
    emailNotifications: Optional[bool] = None
    weeklyDigest: Optional[bool] = None
    newSkillAlerts: Optional[bool] = None
    packAlerts: Optional[bool] = None


class Skill(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    slug: str
    description: str = ""
    authorName: str
    installCount: int = 0
    weeklyInstalls: int = 0
    qualityScore: int = Field(0, ge=0, le=100)
    testingTypes: list[str] = Field(default_factory=list)
    frameworks: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    domains: list[str] = Field(default_factory=list)
    agents: list[str] = Field(default_factory=list)
    featured: bool = False
    verified: bool = False
    version: Optional[str] = None
    githubUrl: Optional[str] = None
    reviewCount: int = 0
    averageRating: Optional[float] = None
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)


class UnsubscribeRequest(BaseModel):
    # Any JSON value is accepted; non-strings fail token verification like any bad token
    token: Any = None
    type: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def non_string_type_means_all(cls, value):
        return value if isinstance(value, str) else None


class UnsubscribeTokenPayload(BaseModel):
    """Identity recovered from a verified unsubscribe token"""
    user_id: str
    timestamp: int
