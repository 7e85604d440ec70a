"""
FastAPI dependencies for authentication and role checks.
"""

from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from hostelkeeper.db.session import get_db
from hostelkeeper.models.enums import UserRole
from hostelkeeper.models.user import User
from hostelkeeper.repositories.user_repository import UserRepository

from .exceptions import AuthenticationError, AuthorizationError
from .logging import user_id as user_id_ctx
from .notifications import Notifier, hub
from .security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to an active user."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Not authorized, no token")

    payload = decode_access_token(credentials.credentials)
    user = UserRepository(db).find_active(payload["sub"])
    if user is None:
        raise AuthenticationError("Not authorized, user not found")

    user_id_ctx.set(user.id)
    return user


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """
    Build a dependency admitting only the given roles.

    Usage:
        @router.get("/", dependencies=[Depends(require_roles(UserRole.ADMIN))])
    """
    allowed = {UserRole(role) for role in roles}

    def dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise AuthorizationError(
                f"Role {current_user.role.value} is not authorized to access this route",
                details={"required": sorted(r.value for r in allowed)},
            )
        return current_user

    return dependency


def get_notifier() -> Notifier:
    return hub


get_student = require_roles(UserRole.STUDENT)
get_warden = require_roles(UserRole.WARDEN)
get_admin = require_roles(UserRole.ADMIN)
