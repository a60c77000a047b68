"""Test doubles shared by several test modules."""
import time

import jwt

T0 = 1_700_000_000_000


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = T0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int):
        self.now += millis


def session_token(private_key, sub="user_clerk_1", expires_in=300, **claims) -> str:
    now = int(time.time())
    payload = {"sub": sub, "iat": now, "exp": now + expires_in, **claims}
    if sub is None:
        payload.pop("sub")
    return jwt.encode(payload, private_key, algorithm="RS256")
