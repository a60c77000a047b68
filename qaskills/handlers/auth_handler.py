import logging
import jwt
from typing import Optional
from fastapi import Request
from qaskills.base.exception import AuthenticationError

logger = logging.getLogger(__name__)

SESSION_COOKIE = "__session"

class SessionVerifier:
    """
    Verifies identity provider session tokens without a network round trip,
    using the instance's PEM public key. The `sub` claim is the provider's user id.
    """

    def __init__(self, jwt_key: str, algorithm: str = "RS256", leeway: int = 5):
        self.jwt_key = jwt_key
        self.algorithm = algorithm
        self.leeway = leeway

    def verify(self, token: Optional[str]) -> str:
        if not token:
            raise AuthenticationError("Missing session token")
        if not self.jwt_key:
            raise AuthenticationError("Session verification key not configured")
        try:
            claims = jwt.decode(
                token,
                self.jwt_key,
                algorithms=[self.algorithm],
                leeway=self.leeway,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Session expired")
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected session token: %s", e)
            raise AuthenticationError("Invalid session")
        return claims["sub"]


def session_token_from_request(request: Request) -> Optional[str]:
    """Bearer token from the Authorization header, else the session cookie."""
    header = request.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return request.cookies.get(SESSION_COOKIE)


def new_session_verifier(jwt_key: str, algorithm: str = "RS256") -> SessionVerifier:
    return SessionVerifier(jwt_key, algorithm)
