"""Shared fixtures. Environment defaults are set before any qaskills import."""
import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BASE_URL", "https://qaskills.sh")
os.environ.setdefault("UNSUBSCRIBE_SECRET", "test-unsubscribe-secret")

from unittest.mock import AsyncMock, MagicMock

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from qaskills.base.models import Skill, User
from qaskills.services.email_service import EmailService
from qaskills.services.token_service import UnsubscribeTokenService
from tests.helpers import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def token_service(clock):
    return UnsubscribeTokenService(secret_provider=lambda: "secret-a", clock=clock)


@pytest.fixture
def user():
    return User(
        id="5f0c7a52-0000-4000-8000-000000000001",
        clerkId="user_clerk_1",
        email="ada@example.com",
        username="ada",
        name="Ada Lovelace",
    )


@pytest.fixture
def skills():
    return [
        Skill(name="Playwright E2E Testing", slug="playwright-e2e", authorName="thetestingacademy",
              description="Playwright end-to-end testing patterns", installCount=86, weeklyInstalls=86, qualityScore=92),
        Skill(name="Jest Unit Testing", slug="jest-unit", authorName="thetestingacademy",
              description="Jest unit testing patterns", installCount=64, weeklyInstalls=64, qualityScore=91),
    ]


@pytest.fixture
def user_repo():
    return AsyncMock()


@pytest.fixture
def preferences_repo():
    return AsyncMock()


@pytest.fixture
def skill_repo():
    return AsyncMock()


@pytest.fixture
def mailjet():
    """Mailjet client whose send.create always succeeds."""
    client = MagicMock()
    response = MagicMock(status_code=200)
    response.json.return_value = {"Messages": [{"Status": "success"}]}
    client.send.create.return_value = response
    return client


@pytest.fixture
def email_service(mailjet, token_service):
    return EmailService(mailjet, token_service, "https://qaskills.sh", "noreply@qaskills.sh")


@pytest.fixture(scope="session")
def rsa_keys():
    """(private key, public PEM) pair standing in for the identity provider's signing key."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")
    return private_key, public_pem

