# election/authentication/rbac.py

from dataclasses import dataclass
from enum import Enum
from functools import wraps

from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from election.errors import ForbiddenError, UnauthorizedError

# Role-Based Access Control over the admin / EC / voter route groups


class UserRole(Enum):
    ADMIN = "admin"
    EC = "ec"
    VOTER = "voter"


class Permission(Enum):
    VOTE = "vote"
    MANAGE_PARTIES = "manage_parties"
    MANAGE_CANDIDATES = "manage_candidates"
    CONTROL_POLLS = "control_polls"
    VIEW_EC_STATS = "view_ec_stats"
    MANAGE_CONSTITUENCIES = "manage_constituencies"
    MANAGE_USERS = "manage_users"
    VIEW_ADMIN_STATS = "view_admin_stats"


_EC_PERMISSIONS = [
    Permission.VOTE,
    Permission.MANAGE_PARTIES,
    Permission.MANAGE_CANDIDATES,
    Permission.CONTROL_POLLS,
    Permission.VIEW_EC_STATS,
]

# Role -> Permissions mapping
ROLE_PERMISSIONS = {
    UserRole.VOTER: [
        Permission.VOTE,
    ],
    UserRole.EC: _EC_PERMISSIONS,
    UserRole.ADMIN: _EC_PERMISSIONS + [
        Permission.MANAGE_CONSTITUENCIES,
        Permission.MANAGE_USERS,
        Permission.VIEW_ADMIN_STATS,
    ],
}


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, resolved from a verified access token."""

    user_id: str
    email: str
    role: str


class RBACService:
    def has_permission(self, user_role, permission):
        try:
            if isinstance(user_role, str):
                user_role = UserRole(user_role)
            if isinstance(permission, str):
                permission = Permission(permission)
        except ValueError:
            return False
        return permission in ROLE_PERMISSIONS.get(user_role, [])


rbac_service = RBACService()


def current_identity():
    """Verify the bearer token in the current request and build its Identity."""
    verify_jwt_in_request()
    claims = get_jwt()
    user_id = get_jwt_identity()
    role = claims.get('role')
    if not user_id or not role:
        raise UnauthorizedError("Invalid or expired token")
    return Identity(user_id=user_id, email=claims.get('email', ''), role=role)


def require_auth(func):
    """Admit any authenticated caller; the view receives ``identity``."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        kwargs['identity'] = current_identity()
        return func(*args, **kwargs)
    return wrapper


# Decorator for required permission; the view receives ``identity``
def require_permission(permission):
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            identity = current_identity()
            if not rbac_service.has_permission(identity.role, permission):
                raise ForbiddenError("You do not have permission to access this resource")
            kwargs['identity'] = identity
            return func(*args, **kwargs)
        return wrapper
    return decorator
