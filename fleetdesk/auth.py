"""
Role-based access for API callers.

Tokens are issued by the external identity provider; this module only
decodes them to read the caller's role.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from fleetdesk.config import get_settings
from fleetdesk.errors import FleetError, PermissionDeniedError
from fleetdesk.models.user import UserRole

bearer_scheme = HTTPBearer(auto_error=False)


class NotAuthenticatedError(FleetError):
    status_code = 401
    error_type = "unauthorized"


class CurrentUser(BaseModel):
    """Identity carried by the bearer token."""
    subject: str
    role: UserRole


def can_manage_users(role: UserRole) -> bool:
    return role == UserRole.MASTER


def can_edit_data(role: UserRole) -> bool:
    return role != UserRole.VIEWER


def create_access_token(subject: str, role: UserRole, expires_minutes: Optional[int] = None) -> str:
    """Issue a signed token. Used by tooling and tests."""
    settings = get_settings()
    minutes = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    claims = {
        "sub": subject,
        "role": UserRole(role).value,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> CurrentUser:
    settings = get_settings()
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except jwt.PyJWTError as e:
        raise NotAuthenticatedError(f"Invalid token: {e}")

    try:
        role = UserRole(claims.get("role"))
    except ValueError:
        raise NotAuthenticatedError("Token carries an unknown role")

    return CurrentUser(subject=str(claims.get("sub", "")), role=role)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    """Resolve the caller from the Authorization header."""
    if credentials is None:
        raise NotAuthenticatedError("Missing bearer token")
    return decode_access_token(credentials.credentials)


async def require_editor(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not can_edit_data(current_user.role):
        raise PermissionDeniedError("Read-only users cannot change data")
    return current_user


async def require_master(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not can_manage_users(current_user.role):
        raise PermissionDeniedError("Only master users can manage users")
    return current_user
