import base64
import binascii
import hashlib
import hmac
import logging
import re
from typing import Callable, Optional

from qaskills.base.exception import ConfigurationError
from qaskills.base.models import UnsubscribeTokenPayload
from qaskills.handlers.env_handler import env
from qaskills.utils.time import now_millis

logger = logging.getLogger(__name__)

TOKEN_MAX_AGE_MS = 30 * 24 * 60 * 60 * 1000

_BASE64URL = re.compile(r"[A-Za-z0-9_-]+")
_DIGITS = re.compile(r"[0-9]+")


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64decode(segment: str) -> bytes:
    if not _BASE64URL.fullmatch(segment):
        raise ValueError("segment is not base64url")
    padding = "=" * (-len(segment) % 4)
    return base64.b64decode(segment + padding, altchars=b"-_", validate=True)


class UnsubscribeTokenService:
    """
    Issues and verifies one-click unsubscribe tokens.

    Token format: base64url("<user_id>:<timestamp_ms>") + "." + base64url(HMAC-SHA256).
    The payload is split on the last ":" so user ids may contain colons; the
    timestamp is always the digits after the final colon. Nothing is stored
    server side, so rotating the secret is the only way to revoke tokens.
    """

    def __init__(self,
            secret_provider: Callable[[], str] = env.get_unsubscribe_secret,
            clock: Callable[[], int] = now_millis,
            max_age_ms: int = TOKEN_MAX_AGE_MS,
        ):
        self.secret_provider = secret_provider
        self.clock = clock
        self.max_age_ms = max_age_ms

    def _sign(self, payload: str) -> str:
        secret = self.secret_provider()
        digest = hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).digest()
        return _b64encode(digest)

    def generate_token(self, user_id: str) -> str:
        """Generate a signed unsubscribe token for the given user id.

        Raises ConfigurationError when no signing secret is configured.
        """
        timestamp = self.clock()
        payload = f"{user_id}:{timestamp}"
        signature = self._sign(payload)
        return f"{_b64encode(payload.encode('utf-8'))}.{signature}"

    def verify_token(self, token: str) -> Optional[UnsubscribeTokenPayload]:
        """Return the token's user id and issue time, or None if the token is
        malformed, forged or older than the maximum age. Never raises."""
        try:
            return self._verify(token)
        except ConfigurationError as e:
            logger.error("Cannot verify unsubscribe token: %s", e.message)
            return None
        except (ValueError, TypeError, binascii.Error, UnicodeDecodeError):
            return None

    def _verify(self, token: str) -> Optional[UnsubscribeTokenPayload]:
        if not isinstance(token, str):
            return None
        parts = token.split(".")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            return None
        encoded_payload, provided_signature = parts

        payload = _b64decode(encoded_payload).decode("utf-8")
        user_id, separator, raw_timestamp = payload.rpartition(":")
        if not separator or not user_id or not _DIGITS.fullmatch(raw_timestamp):
            return None
        timestamp = int(raw_timestamp)

        expected = self._sign(payload).encode("utf-8")
        provided = provided_signature.encode("utf-8")
        if len(provided) != len(expected):
            return None
        if not hmac.compare_digest(provided, expected):
            return None

        # Only the age bound is enforced; timestamps ahead of the clock pass.
        if self.clock() - timestamp > self.max_age_ms:
            return None

        return UnsubscribeTokenPayload(user_id=user_id, timestamp=timestamp)


def new_token_service(**kwargs) -> UnsubscribeTokenService:
    return UnsubscribeTokenService(**kwargs)
