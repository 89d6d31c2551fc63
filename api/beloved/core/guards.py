"""
Role-based page access

Every dashboard page used to carry its own copy of the same redirect
logic. The rules live here instead: a table of page prefixes and the roles
allowed on them, and one resolver that turns (path, user) into either
"allowed" or a redirect target.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from beloved.models.profile import Profile, UserRole

logger = logging.getLogger(__name__)

HOME_PATH = "/"

PUBLIC_PATHS = frozenset({
    "/",
    "/login",
    "/register",
    "/about",
    "/services",
    "/contact",
    "/terms",
    "/privacy",
})

DASHBOARD_PATHS = {
    UserRole.MEMBER: "/member-dashboard",
    UserRole.DRIVER: "/driver-dashboard",
    UserRole.ADMIN: "/admin-dashboard",
    UserRole.SUPER_ADMIN: "/super-admin-dashboard",
}

# Landing page that forwards every role to its own dashboard
ROLE_DISPATCH_PATH = "/trips"

ADMINS = frozenset({UserRole.ADMIN, UserRole.SUPER_ADMIN})
ANY_ROLE = frozenset(UserRole)

PAGE_ACCESS = {
    "/admin-dashboard": ADMINS,
    "/create-member": ADMINS,
    "/create-driver": ADMINS,
    "/member-list": ADMINS,
    "/driver-list": ADMINS,
    "/super-admin-dashboard": frozenset({UserRole.SUPER_ADMIN}),
    "/super-admin": frozenset({UserRole.SUPER_ADMIN}),
    "/driver-dashboard": frozenset({UserRole.DRIVER}),
    "/driver-profile": frozenset({UserRole.DRIVER}),
    "/driver-schedule": frozenset({UserRole.DRIVER}),
    "/member-dashboard": frozenset({UserRole.MEMBER}),
    "/my-rides": frozenset({UserRole.MEMBER}),
    "/schedule-ride": frozenset({UserRole.MEMBER}),
    "/profile": ANY_ROLE,
    ROLE_DISPATCH_PATH: ANY_ROLE,
}


@dataclass(frozen=True)
class PageAccess:
    """Outcome of a page access check"""
    allowed: bool
    redirect_to: Optional[str] = None
    reason: Optional[str] = None


def dashboard_path_for(role: Optional[UserRole]) -> str:
    """Dashboard a role lands on after signing in"""
    if role is None:
        return HOME_PATH
    try:
        return DASHBOARD_PATHS[UserRole(role)]
    except (KeyError, ValueError):
        return HOME_PATH


def normalize_path(path: str) -> str:
    path = (path or HOME_PATH).split("?", 1)[0].split("#", 1)[0]
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/")
    return path


def allowed_roles_for(path: str) -> Optional[frozenset]:
    """Roles allowed on a page, by longest matching prefix, or None if unlisted"""
    path = normalize_path(path)
    best = None
    for prefix in PAGE_ACCESS:
        if path == prefix or path.startswith(prefix + "/"):
            if best is None or len(prefix) > len(best):
                best = prefix
    return PAGE_ACCESS[best] if best is not None else None


def resolve_page_access(path: str, user: Optional[Profile]) -> PageAccess:
    """Decide whether ``user`` may open ``path``, or where to send them instead"""
    path = normalize_path(path)

    if path in PUBLIC_PATHS:
        return PageAccess(allowed=True)

    if user is None:
        logger.info("No session for %s, redirecting to %s", path, HOME_PATH)
        return PageAccess(allowed=False, redirect_to=HOME_PATH, reason="unauthenticated")

    if path == ROLE_DISPATCH_PATH:
        return PageAccess(
            allowed=False,
            redirect_to=dashboard_path_for(user.user_role),
            reason="role_dispatch",
        )

    roles = allowed_roles_for(path)
    if roles is not None and user.user_role not in roles:
        logger.info(
            "Role %s may not open %s, redirecting to %s",
            user.user_role.value, path, HOME_PATH,
        )
        return PageAccess(allowed=False, redirect_to=HOME_PATH, reason="forbidden")

    return PageAccess(allowed=True)
