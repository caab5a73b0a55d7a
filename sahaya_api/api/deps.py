"""FastAPI dependencies for authentication and role checks."""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from sahaya_api.exceptions import AuthorizationError
from sahaya_api.models.enums import ADMIN_ROLES, UserRole
from sahaya_api.security import Actor, decode_access_token

bearer = HTTPBearer(auto_error=False)


def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> Actor:
    """Require a valid bearer token."""
    token = credentials.credentials if credentials else None
    return decode_access_token(token)


def get_optional_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> Optional[Actor]:
    """
    Use the token when one is sent.

    A token that is present but expired or invalid is still rejected.
    """
    if not credentials:
        return None
    return decode_access_token(credentials.credentials)


def require_roles(*roles: str):
    """Dependency factory: the caller's role must be in the allow-list."""
    allowed = {getattr(role, "value", role) for role in roles}

    def check(actor: Actor = Depends(get_current_user)) -> Actor:
        if actor.role not in allowed:
            raise AuthorizationError()
        return actor

    return check


require_admin = require_roles(*ADMIN_ROLES)
require_master_admin = require_roles(UserRole.L1_MASTER_ADMIN)
