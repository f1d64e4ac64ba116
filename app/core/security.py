"""
Token service.

Issues and verifies the signed, time-limited bearer tokens handed out at
login. Tokens are stateless: validity depends only on the signature and
the expiry claim, nothing is stored or revoked server-side.
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from app.config import settings
from app.exceptions import TokenExpired, TokenInvalid
from app.schemas.auth import TokenPayload


class TokenService:
    """
    Sign and verify access tokens carrying a user id.

    The signing secret is fixed at construction; one instance is shared
    for the life of the process.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60):
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expire_minutes)

    def issue(self, user_id: int, now: Optional[datetime] = None) -> str:
        """
        Create a token for a user.

        Args:
            user_id: Subject of the token
            now: Issuance time (defaults to the current UTC time)

        Returns:
            Encoded JWT token
        """
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.expires_delta).timestamp()),
        }
        return jwt.encode(claims, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """
        Verify a token and return its subject user id.

        Raises:
            TokenExpired: The signature is valid but the token has expired
            TokenInvalid: Malformed token, bad signature or unusable claims
        """
        try:
            claims = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpired(str(e)) from e
        except JWTError as e:
            raise TokenInvalid(str(e)) from e

        try:
            payload = TokenPayload(**claims)
            return int(payload.sub)
        except (ValidationError, ValueError) as e:
            raise TokenInvalid("Token subject is not a user id") from e


@lru_cache
def get_token_service() -> TokenService:
    """Dependency returning the process-wide token service."""
    return TokenService(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
