import logging
from typing import Annotated

from fastapi import Request, Depends, HTTPException
from firebase_admin.auth import verify_id_token

from config import settings
from models.user import AuthenticatedUser
from services.posts import PostService


async def get_current_user(request: Request) -> AuthenticatedUser:
    """
    Verify Firebase ID token from Authorization header and return user info
    """
    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header"
        )

    token = authorization.split("Bearer ")[1]
    try:
        decoded_token = verify_id_token(
            token,
            check_revoked=settings.auth_check_revoked,
            clock_skew_seconds=settings.auth_clock_skew_seconds
        )
    except Exception as e:
        logging.warning("Invalid authentication token: %s", e)
        raise HTTPException(
            status_code=401,
            detail="Invalid authentication token"
        )

    return AuthenticatedUser(
        user_id=decoded_token["uid"],
        email=decoded_token.get("email"),
    )


async def get_post_service(request: Request) -> PostService:
    """Get post service from app state"""
    return request.app.state.post_service


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
Posts = Annotated[PostService, Depends(get_post_service)]
