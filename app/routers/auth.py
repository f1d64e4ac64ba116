"""
Authentication router.

This module contains the registration, login and session check endpoints.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import settings
from app.core.security import TokenService, get_token_service
from app.crud.user import user as crud_user
from app.database import get_db
from app.dependencies.auth import get_current_user_id
from app.exceptions import WeatherAppError
from app.schemas.auth import (
    CheckAuthResponse,
    LoginResponse,
    RegisterResponse,
    UserCreate,
    UserCredentials,
    UserPublic,
)
from app.utils.logging_config import get_logger
from app.utils.security import get_password_hash, verify_password

logger = get_logger(__name__)

router = APIRouter(
    tags=["authentication"],
    responses={401: {"description": "Unauthorized"}, 403: {"description": "Forbidden"}},
)

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


@router.post("/register", response_model=RegisterResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def register_user(
    request: Request,
    user_in: UserCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new user.

    The password is hashed before it reaches the credential store.
    Any failure, including a duplicate username, is reported as a 500
    with the underlying reason in `details`.
    """
    try:
        await crud_user.create(
            db,
            username=user_in.username,
            password_hash=get_password_hash(user_in.password),
        )
    except WeatherAppError as e:
        logger.error(f"Error during registration: {e.message}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Registration failed", "details": e.message},
        )

    logger.info(f"Registered user '{user_in.username}'")
    return RegisterResponse()


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(
    request: Request,
    credentials: UserCredentials,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Authenticate a user and return a bearer token valid for one hour.

    Unknown usernames and wrong passwords both return 400, with distinct
    error messages.
    """
    try:
        user_obj = await crud_user.get_by_username(db, username=credentials.username)
    except WeatherAppError:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Login failed"},
        )

    if user_obj is None:
        logger.info(f"Login failed for unknown user '{credentials.username}'")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": "User not found"},
        )

    if not verify_password(credentials.password, user_obj.hashed_password):
        logger.info(f"Login failed for user '{credentials.username}': invalid password")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": "Invalid password"},
        )

    return LoginResponse(
        token=tokens.issue(user_obj.id),
        user=UserPublic.model_validate(user_obj),
    )


@router.get(
    "/check-auth",
    response_model=CheckAuthResponse,
    responses={404: {"description": "User not found"}},
)
async def check_auth(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Confirm the bearer token still maps to an existing user.
    """
    try:
        user_obj = await crud_user.get(db, user_id)
    except WeatherAppError:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"loggedIn": False, "error": "Failed to fetch user data"},
        )

    if user_obj is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"loggedIn": False, "error": "User not found"},
        )

    return CheckAuthResponse(user=UserPublic.model_validate(user_obj))
