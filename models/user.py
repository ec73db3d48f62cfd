from typing import Optional

from pydantic import BaseModel


class AuthenticatedUser(BaseModel):
    """Caller identity resolved from a verified Firebase ID token"""
    user_id: str
    email: Optional[str] = None


class UserProfile(BaseModel):
    """Public part of a user record; credentials are never loaded"""
    id: str
    name: Optional[str] = None
    avatar: Optional[str] = None
