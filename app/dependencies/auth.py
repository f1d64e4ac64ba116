"""
Authentication dependencies.

This module contains the auth gate run in front of every endpoint except
registration and login.
"""

from typing import Optional

from fastapi import Depends, Security
from fastapi.security import APIKeyHeader

from app.core.security import TokenService, get_token_service
from app.exceptions import Forbidden, TokenError, Unauthenticated
from app.utils.logging_config import get_logger

logger = get_logger(__name__)

# Documents the bearer header in Swagger UI; errors are raised by authenticate()
authorization_header_scheme = APIKeyHeader(
    name="Authorization",
    scheme_name="BearerAuth",
    auto_error=False,
)


def extract_bearer_token(raw_authorization: Optional[str]) -> Optional[str]:
    """
    Return the token part of an "Authorization: Bearer <token>" value.

    The header is split on single spaces and the second field is taken as
    the token, even when it is empty. None is returned only when there is
    no second field.
    """
    if not raw_authorization:
        return None
    parts = raw_authorization.split(" ")
    if len(parts) < 2:
        return None
    return parts[1]


def authenticate(raw_authorization: Optional[str], tokens: TokenService) -> int:
    """
    Resolve the user id carried by an Authorization header.

    Args:
        raw_authorization: Raw header value, or None when absent
        tokens: Token service used to verify the credential

    Returns:
        Subject user id of a valid token

    Raises:
        Unauthenticated: No token was supplied
        Forbidden: The token is malformed, tampered with or expired
    """
    token = extract_bearer_token(raw_authorization)
    if token is None:
        raise Unauthenticated()

    try:
        return tokens.verify(token)
    except TokenError as e:
        logger.debug(f"Rejected bearer token: {type(e).__name__}: {e}")
        raise Forbidden() from e


async def get_current_user_id(
    authorization: Optional[str] = Security(authorization_header_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> int:
    """
    Dependency resolving the authenticated user id for a request.

    Returns:
        User id embedded in the bearer token
    """
    return authenticate(authorization, tokens)
