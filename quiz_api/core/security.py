"""Principal resolution and group-based authorization."""
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from quiz_api.core.config import settings
from quiz_api.services.membership import (
    GroupMembershipProvider,
    get_membership_provider,
    is_member,
)


class PrincipalResolver(ABC):
    """Extracts the authenticated principal from a request."""

    @abstractmethod
    def resolve(self, request: Request) -> Optional[str]:
        """Return the principal's display name, or None when unauthenticated."""


class HeaderPrincipalResolver(PrincipalResolver):
    """
    Reads the name forwarded by a fronting server that performed Negotiate
    (IIS, Apache mod_auth_gssapi, nginx SPNEGO).

    The header must be set by that server only; the app cannot tell a forged
    header from a real one.
    """

    def __init__(self, header_name: str):
        self.header_name = header_name

    def resolve(self, request: Request) -> Optional[str]:
        value = request.headers.get(self.header_name, "").strip()
        return value or None


class ScopePrincipalResolver(PrincipalResolver):
    """Reads ``scope["user"]`` as populated by an ASGI authentication middleware."""

    def resolve(self, request: Request) -> Optional[str]:
        user = request.scope.get("user")
        if user is None or not getattr(user, "is_authenticated", False):
            return None
        return getattr(user, "display_name", None) or None


@lru_cache
def get_principal_resolver() -> PrincipalResolver:
    """Dependency returning the resolver selected by AUTH_MODE."""
    if settings.AUTH_MODE == "header":
        return HeaderPrincipalResolver(settings.AUTH_USER_HEADER)
    if settings.AUTH_MODE == "scope":
        return ScopePrincipalResolver()
    raise RuntimeError(f"Unknown AUTH_MODE: {settings.AUTH_MODE!r}")


def get_current_principal(
    request: Request,
    resolver: PrincipalResolver = Depends(get_principal_resolver),
) -> str:
    """
    Dependency to get the authenticated principal's name.

    Usage:
        @router.get("/protected")
        def protected_route(principal: str = Depends(get_current_principal)):
            return {"user": principal}
    """
    principal = resolver.resolve(request)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Negotiate"},
        )
    return principal


def require_contributor(
    principal: str = Depends(get_current_principal),
    provider: GroupMembershipProvider = Depends(get_membership_provider),
) -> str:
    """Dependency that admits only members of CONTRIBUTOR_GROUP."""
    if not is_member(provider, principal, settings.CONTRIBUTOR_GROUP):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"User is not a member of {settings.CONTRIBUTOR_GROUP}",
        )
    return principal
